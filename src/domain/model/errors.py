"""Domain-level exceptions.

Services raise these errors to express failures of the wrapped engines
or of client input. Route handlers catch them and map to appropriate
HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input violates a validation rule (blank text, unknown part of speech)."""


class AnnotationError(DomainError):
    """The NLP engine failed while annotating a request."""


class LexiconError(DomainError):
    """The lexical database failed while traversing its graph."""

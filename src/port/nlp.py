"""NLP port — outbound interface for natural language processing."""

from typing import Protocol

from domain.model.annotation import AnnotationGraph


class NLPPort(Protocol):
    """Port for annotating raw text with a fixed annotator pipeline.

    Implementations wrap an NLP engine (e.g., CoreNLP through Stanza) and
    return an AnnotationGraph — no library-specific types leak through
    this boundary.
    """

    async def analyze(self, text: str) -> AnnotationGraph:
        """Annotate text.

        Args:
            text: Raw input text. Blank text is not rejected here.

        Returns:
            AnnotationGraph for the whole text.

        Raises:
            AnnotationError: The engine failed on this request.
        """
        ...

    def ping(self) -> bool:
        """Return True if the engine is reachable."""
        ...

"""Annotation graph domain models.

Library-independent copy of what the NLP engine produced for one request.
Adapters build these; the projection layer only reads them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

NO_ENTITY = "O"


class DependencyVariant(str, Enum):
    """Which dependency graph of a sentence to read."""
    BASIC = "basic"
    COLLAPSED_CC_PROCESSED = "collapsed_cc_processed"
    ENHANCED = "enhanced"
    ENHANCED_PLUS_PLUS = "enhanced_plus_plus"


@dataclass(frozen=True)
class Token:
    text: str
    pos: str | None = None
    lemma: str | None = None
    ner: str | None = None

    @property
    def is_entity(self) -> bool:
        return bool(self.ner) and self.ner != NO_ENTITY


@dataclass(frozen=True)
class DependencyEdge:
    """Governor → dependent edge. Indices are the engine's 1-based numbering."""
    relation: str
    governor: str
    governor_index: int
    dependent: str
    dependent_index: int


@dataclass(frozen=True)
class RelationTriple:
    subject: str
    predicate: str
    object: str
    confidence: float


@dataclass(frozen=True)
class Sentence:
    text: str
    tokens: tuple[Token, ...] = ()
    dependencies: Mapping[DependencyVariant, tuple[DependencyEdge, ...]] = field(default_factory=dict)
    parse_tree: str | None = None
    sentiment: str | None = None
    relation_triples: tuple[RelationTriple, ...] = ()


@dataclass(frozen=True)
class CorefChain:
    """A representative mention and all mentions co-referring with it, in textual order."""
    representative: str
    mentions: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnotationGraph:
    """Everything the engine produced for one text.

    coref_chains is None when the engine produced no chain table at all,
    as opposed to an empty table.
    """
    sentences: tuple[Sentence, ...] = ()
    coref_chains: tuple[CorefChain, ...] | None = None


# ── Typed accessors ──────────────────────────────────────────


def sentences_of(graph: AnnotationGraph) -> tuple[Sentence, ...]:
    return graph.sentences


def tokens_of(sentence: Sentence) -> tuple[Token, ...]:
    return sentence.tokens


def dependency_graph_of(
    sentence: Sentence,
    variant: DependencyVariant = DependencyVariant.ENHANCED_PLUS_PLUS,
) -> tuple[DependencyEdge, ...] | None:
    """Return the sentence's edges for a variant, or None if the engine set none."""
    return sentence.dependencies.get(variant)


def coref_chains_of(graph: AnnotationGraph) -> tuple[CorefChain, ...] | None:
    return graph.coref_chains

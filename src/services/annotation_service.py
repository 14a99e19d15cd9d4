"""Annotation projections — flatten an AnnotationGraph into JSON-ready records.

Every projection is a pure function of the graph: no shared state, safe
to call concurrently, and the same graph always yields the same output.
Only analyze_all() talks to the engine, after validating its input.
"""

import logging
from typing import Any

from domain.model.annotation import (
    AnnotationGraph,
    DependencyEdge,
    DependencyVariant,
    Sentence,
    coref_chains_of,
    dependency_graph_of,
    sentences_of,
    tokens_of,
)
from domain.model.errors import ValidationError
from port.nlp import NLPPort

logger = logging.getLogger(__name__)

EMPTY_TEXT_MESSAGE = "Input text cannot be null or empty"
UNKNOWN_SENTIMENT = "Unknown"

_SENTIMENT_SCORES = {
    "Positive": 0.5,
    "Negative": -0.5,
}


# ── Validation ───────────────────────────────────────────────


def validate_text(text: str | None) -> str:
    """Return text unchanged, or raise ValidationError if it is null or blank."""
    if text is None or not text.strip():
        raise ValidationError(EMPTY_TEXT_MESSAGE)
    return text


# ── Per-feature projections ──────────────────────────────────


def sentiment_score(label: str | None) -> float:
    """Map a sentiment label to a score: Positive 0.5, Negative -0.5, else 0.0."""
    return _SENTIMENT_SCORES.get(label, 0.0)


def extract_entities(graph: AnnotationGraph) -> list[dict[str, str]]:
    """List every token tagged with a named-entity type, in document order."""
    return [
        entity
        for sentence in sentences_of(graph)
        for entity in _sentence_entities(sentence)
    ]


def extract_sentiment(graph: AnnotationGraph) -> list[dict[str, Any]]:
    results = []
    for sentence in sentences_of(graph):
        label = sentence.sentiment or UNKNOWN_SENTIMENT
        results.append({
            "sentence": sentence.text,
            "sentiment": label,
            "score": sentiment_score(label),
        })
    return results


def extract_coreferences(graph: AnnotationGraph) -> dict[str, list[str]]:
    """Map each chain's representative mention to its mentions.

    Chains sharing a representative string overwrite one another; the
    last chain wins.
    """
    chains = coref_chains_of(graph)
    if chains is None:
        return {}
    return {chain.representative: list(chain.mentions) for chain in chains}


def tokenize(graph: AnnotationGraph) -> dict[str, list[list[str]]]:
    return {
        "sentences": [
            [token.text for token in tokens_of(sentence)]
            for sentence in sentences_of(graph)
        ]
    }


def extract_dependencies(
    graph: AnnotationGraph,
    variant: DependencyVariant = DependencyVariant.ENHANCED_PLUS_PLUS,
) -> list[list[dict[str, Any]]]:
    """Per-sentence dependency edges of the given variant.

    A sentence without a graph of that variant yields an empty list.
    """
    return [_sentence_dependencies(sentence, variant) for sentence in sentences_of(graph)]


def extract_relation_triples(graph: AnnotationGraph) -> list[dict[str, Any]]:
    return [
        {
            "subject": triple.subject,
            "predicate": triple.predicate,
            "object": triple.object,
            "confidence": triple.confidence,
        }
        for sentence in sentences_of(graph)
        for triple in sentence.relation_triples
    ]


def extract_parse_trees(graph: AnnotationGraph) -> list[dict[str, str | None]]:
    return [
        {"sentence": sentence.text, "parseTree": sentence.parse_tree}
        for sentence in sentences_of(graph)
    ]


# ── Aggregate ────────────────────────────────────────────────


async def analyze_all(nlp: NLPPort, text: str | None) -> dict[str, Any]:
    """Run the full pipeline and return every sentence-level annotation plus coreferences.

    Raises:
        ValidationError: text is null or blank; the engine is not called.
        AnnotationError: the engine failed.
    """
    validate_text(text)
    graph = await nlp.analyze(text)
    result = {
        "sentences": [_sentence_summary(sentence) for sentence in sentences_of(graph)],
        "coreferences": extract_coreferences(graph),
    }
    logger.info("Full analysis completed", extra={
        "sentence_count": len(result["sentences"]),
        "coref_chain_count": len(result["coreferences"]),
    })
    return result


# ── Helpers ──────────────────────────────────────────────────


def _sentence_entities(sentence: Sentence) -> list[dict[str, str]]:
    return [
        {"entity": token.text, "type": token.ner}
        for token in tokens_of(sentence)
        if token.is_entity
    ]


def _sentence_dependencies(
    sentence: Sentence, variant: DependencyVariant,
) -> list[dict[str, Any]]:
    edges = dependency_graph_of(sentence, variant)
    if edges is None:
        return []
    return [_edge_record(edge) for edge in edges]


def _edge_record(edge: DependencyEdge) -> dict[str, Any]:
    return {
        "relation": edge.relation,
        "governor": edge.governor,
        "governorIndex": edge.governor_index,
        "dependent": edge.dependent,
        "dependentIndex": edge.dependent_index,
    }


def _sentence_summary(sentence: Sentence) -> dict[str, Any]:
    return {
        "tokens": [
            {"token": token.text, "pos": token.pos, "lemma": token.lemma}
            for token in tokens_of(sentence)
        ],
        "entities": _sentence_entities(sentence),
        "dependencies": _sentence_dependencies(sentence, DependencyVariant.ENHANCED_PLUS_PLUS),
        "parseTree": sentence.parse_tree,
        "sentiment": sentence.sentiment or UNKNOWN_SENTIMENT,
    }

"""Tests for annotation projections.

Tests cover:
1. extract_entities: "O" / missing tags filtered, document order
2. sentiment_score / extract_sentiment: fixed label → score table, Unknown placeholder
3. extract_coreferences: representative keys, textual order, absent table, overwrite
4. tokenize: token counts and sentence counts
5. extract_dependencies: variant selection, missing graph → []
6. extract_relation_triples / extract_parse_trees
7. analyze_all: blank-text validation before the engine runs
8. Idempotence: identical graphs serialize to identical JSON
"""

import json
import unittest

from adapter.fake.nlp import FakeNLPAdapter
from domain.model.annotation import (
    AnnotationGraph,
    CorefChain,
    DependencyEdge,
    DependencyVariant,
    RelationTriple,
    Sentence,
    Token,
)
from domain.model.errors import AnnotationError, ValidationError
from services.annotation_service import (
    EMPTY_TEXT_MESSAGE,
    UNKNOWN_SENTIMENT,
    analyze_all,
    extract_coreferences,
    extract_dependencies,
    extract_entities,
    extract_parse_trees,
    extract_relation_triples,
    extract_sentiment,
    sentiment_score,
    tokenize,
    validate_text,
)


def _two_sentence_graph() -> AnnotationGraph:
    """Graph for 'Sophia is busy. She works at Stanford.'"""
    first = Sentence(
        text="Sophia is busy.",
        tokens=(
            Token("Sophia", "NNP", "Sophia", "PERSON"),
            Token("is", "VBZ", "be", "O"),
            Token("busy", "JJ", "busy", "O"),
            Token(".", ".", ".", "O"),
        ),
        dependencies={
            DependencyVariant.ENHANCED_PLUS_PLUS: (
                DependencyEdge("nsubj", "busy", 3, "Sophia", 1),
                DependencyEdge("cop", "busy", 3, "is", 2),
            ),
            DependencyVariant.BASIC: (
                DependencyEdge("nsubj", "busy", 3, "Sophia", 1),
            ),
        },
        parse_tree="(ROOT (S (NP (NNP Sophia)) (VP (VBZ is) (ADJP (JJ busy))) (. .)))",
        sentiment="Neutral",
    )
    second = Sentence(
        text="She works at Stanford.",
        tokens=(
            Token("She", "PRP", "she", "O"),
            Token("works", "VBZ", "work", "O"),
            Token("at", "IN", "at", "O"),
            Token("Stanford", "NNP", "Stanford", "ORGANIZATION"),
            Token(".", ".", ".", "O"),
        ),
        dependencies={},
        parse_tree=None,
        sentiment=None,
        relation_triples=(
            RelationTriple("she", "work at", "Stanford", 1.0),
        ),
    )
    return AnnotationGraph(
        sentences=(first, second),
        coref_chains=(CorefChain("Sophia", ("Sophia", "She")),),
    )


class TestExtractEntities(unittest.TestCase):

    def test_concrete_scenario(self):
        """'Sophia works at Stanford.' yields PERSON and ORGANIZATION in order."""
        graph = AnnotationGraph(sentences=(Sentence(
            text="Sophia works at Stanford.",
            tokens=(
                Token("Sophia", ner="PERSON"),
                Token("works", ner="O"),
                Token("at", ner="O"),
                Token("Stanford", ner="ORGANIZATION"),
                Token(".", ner="O"),
            ),
        ),))

        self.assertEqual(extract_entities(graph), [
            {"entity": "Sophia", "type": "PERSON"},
            {"entity": "Stanford", "type": "ORGANIZATION"},
        ])

    def test_no_entity_tagged_o_and_bounded_by_token_count(self):
        graph = _two_sentence_graph()
        entities = extract_entities(graph)

        total_tokens = sum(len(s.tokens) for s in graph.sentences)
        self.assertLessEqual(len(entities), total_tokens)
        self.assertTrue(all(e["type"] != "O" for e in entities))

    def test_missing_ner_tag_is_skipped(self):
        graph = AnnotationGraph(sentences=(Sentence(
            text="Hi", tokens=(Token("Hi", ner=None),),
        ),))
        self.assertEqual(extract_entities(graph), [])


class TestSentiment(unittest.TestCase):

    def test_score_table(self):
        self.assertEqual(sentiment_score("Positive"), 0.5)
        self.assertEqual(sentiment_score("Negative"), -0.5)
        self.assertEqual(sentiment_score("Neutral"), 0.0)
        self.assertEqual(sentiment_score("Very positive"), 0.0)
        self.assertEqual(sentiment_score(None), 0.0)

    def test_concrete_scenario(self):
        graph = AnnotationGraph(sentences=(
            Sentence(text="I love this!", sentiment="Positive"),
        ))
        self.assertEqual(extract_sentiment(graph), [
            {"sentence": "I love this!", "sentiment": "Positive", "score": 0.5},
        ])

    def test_missing_label_uses_placeholder(self):
        result = extract_sentiment(_two_sentence_graph())

        self.assertEqual(result[0]["sentiment"], "Neutral")
        self.assertEqual(result[1]["sentiment"], UNKNOWN_SENTIMENT)
        self.assertEqual(result[1]["score"], 0.0)


class TestExtractCoreferences(unittest.TestCase):

    def test_concrete_scenario(self):
        self.assertEqual(
            extract_coreferences(_two_sentence_graph()),
            {"Sophia": ["Sophia", "She"]},
        )

    def test_absent_chain_table_yields_empty_mapping(self):
        graph = AnnotationGraph(sentences=(), coref_chains=None)
        self.assertEqual(extract_coreferences(graph), {})

    def test_later_chain_with_same_representative_overwrites(self):
        graph = AnnotationGraph(coref_chains=(
            CorefChain("it", ("it", "it")),
            CorefChain("Anna", ("Anna", "her")),
            CorefChain("it", ("it",)),
        ))
        result = extract_coreferences(graph)

        self.assertEqual(set(result), {"it", "Anna"})
        self.assertEqual(result["it"], ["it"])


class TestTokenize(unittest.TestCase):

    def test_token_and_sentence_counts(self):
        graph = _two_sentence_graph()
        result = tokenize(graph)

        self.assertEqual(len(result["sentences"]), 2)
        self.assertEqual(
            sum(len(s) for s in result["sentences"]),
            sum(len(s.tokens) for s in graph.sentences),
        )
        self.assertEqual(result["sentences"][1], ["She", "works", "at", "Stanford", "."])

    def test_empty_graph(self):
        self.assertEqual(tokenize(AnnotationGraph()), {"sentences": []})


class TestExtractDependencies(unittest.TestCase):

    def test_default_variant_with_indices(self):
        result = extract_dependencies(_two_sentence_graph())

        self.assertEqual(len(result), 2)
        self.assertEqual(result[0][0], {
            "relation": "nsubj",
            "governor": "busy",
            "governorIndex": 3,
            "dependent": "Sophia",
            "dependentIndex": 1,
        })
        self.assertEqual(len(result[0]), 2)

    def test_missing_graph_yields_empty_list(self):
        result = extract_dependencies(_two_sentence_graph())
        self.assertEqual(result[1], [])

    def test_other_variant(self):
        result = extract_dependencies(_two_sentence_graph(), DependencyVariant.BASIC)
        self.assertEqual(len(result[0]), 1)

        collapsed = extract_dependencies(
            _two_sentence_graph(), DependencyVariant.COLLAPSED_CC_PROCESSED,
        )
        self.assertEqual(collapsed, [[], []])


class TestTriplesAndParseTrees(unittest.TestCase):

    def test_relation_triples(self):
        self.assertEqual(extract_relation_triples(_two_sentence_graph()), [
            {"subject": "she", "predicate": "work at", "object": "Stanford", "confidence": 1.0},
        ])

    def test_parse_trees(self):
        result = extract_parse_trees(_two_sentence_graph())

        self.assertTrue(result[0]["parseTree"].startswith("(ROOT (S"))
        self.assertIsNone(result[1]["parseTree"])
        self.assertEqual(result[1]["sentence"], "She works at Stanford.")


class TestValidateText(unittest.TestCase):

    def test_rejects_null_empty_and_whitespace(self):
        for text in (None, "", "   ", "\n\t"):
            with self.subTest(text=text):
                with self.assertRaises(ValidationError) as ctx:
                    validate_text(text)
                self.assertEqual(str(ctx.exception), EMPTY_TEXT_MESSAGE)

    def test_returns_text_unchanged(self):
        self.assertEqual(validate_text("  Hi. "), "  Hi. ")


class TestAnalyzeAll(unittest.IsolatedAsyncioTestCase):

    async def test_blank_text_never_reaches_engine(self):
        nlp = FakeNLPAdapter(_two_sentence_graph())

        with self.assertRaises(ValidationError):
            await analyze_all(nlp, "  ")
        self.assertEqual(nlp.calls, [])

    async def test_aggregate_shape(self):
        nlp = FakeNLPAdapter(_two_sentence_graph())

        result = await analyze_all(nlp, "Sophia is busy. She works at Stanford.")

        self.assertEqual(nlp.calls, ["Sophia is busy. She works at Stanford."])
        self.assertEqual(result["coreferences"], {"Sophia": ["Sophia", "She"]})
        first = result["sentences"][0]
        self.assertEqual(first["tokens"][0], {"token": "Sophia", "pos": "NNP", "lemma": "Sophia"})
        self.assertEqual(first["entities"], [{"entity": "Sophia", "type": "PERSON"}])
        self.assertEqual(len(first["dependencies"]), 2)
        self.assertEqual(first["sentiment"], "Neutral")
        self.assertEqual(result["sentences"][1]["sentiment"], UNKNOWN_SENTIMENT)
        self.assertEqual(result["sentences"][1]["dependencies"], [])

    async def test_engine_failure_propagates(self):
        nlp = FakeNLPAdapter(error=RuntimeError("server gone"))

        with self.assertRaises(AnnotationError):
            await analyze_all(nlp, "Hello.")

    async def test_identical_graphs_give_identical_json(self):
        first = await analyze_all(FakeNLPAdapter(_two_sentence_graph()), "text")
        second = await analyze_all(FakeNLPAdapter(_two_sentence_graph()), "text")

        self.assertEqual(json.dumps(first), json.dumps(second))

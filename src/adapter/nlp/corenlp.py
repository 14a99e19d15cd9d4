"""CoreNLP adapter — annotates English text with Stanford CoreNLP.

Implements NLPPort by driving a CoreNLP server through Stanza's
CoreNLPClient. All CoreNLP-specific types (protobuf Document, Sentence,
Token, DependencyGraph) are confined within this adapter; only
AnnotationGraph crosses the boundary.
"""

import asyncio
import logging
import os
from typing import Any

from domain.model.annotation import (
    AnnotationGraph,
    CorefChain,
    DependencyEdge,
    DependencyVariant,
    RelationTriple,
    Sentence,
    Token,
)
from domain.model.errors import AnnotationError

logger = logging.getLogger(__name__)

# Later annotators consume the output of earlier ones; natlog is required by openie.
ANNOTATORS = (
    "tokenize", "ssplit", "pos", "lemma", "ner", "parse",
    "depparse", "natlog", "coref", "sentiment", "openie",
)

DEFAULT_ENDPOINT = "http://localhost:9000"
DEFAULT_TIMEOUT_MS = 60000
DEFAULT_MEMORY = "4G"

# Dependency variant → CoreNLP Sentence protobuf field
_DEPENDENCY_FIELDS = {
    DependencyVariant.BASIC: "basicDependencies",
    DependencyVariant.COLLAPSED_CC_PROCESSED: "collapsedCCProcessedDependencies",
    DependencyVariant.ENHANCED: "enhancedDependencies",
    DependencyVariant.ENHANCED_PLUS_PLUS: "enhancedPlusPlusDependencies",
}


class CoreNLPAdapter:
    """Adapter that annotates text using a CoreNLP server.

    One client is started at service startup and shared across requests.
    annotate() blocks on an HTTP round-trip to the server, so analyze()
    offloads it to a thread to avoid blocking the event loop.
    """

    def __init__(
        self,
        client: Any = None,
        *,
        endpoint: str | None = None,
        start_server: bool | None = None,
        timeout_ms: int | None = None,
        memory: str | None = None,
    ):
        self._client = client
        self.endpoint = endpoint or os.getenv("CORENLP_ENDPOINT", DEFAULT_ENDPOINT)
        if start_server is None:
            start_server = os.getenv("CORENLP_START_SERVER", "true").lower() in ("1", "true", "yes")
        self.start_server = start_server
        self.timeout_ms = timeout_ms or int(os.getenv("CORENLP_TIMEOUT_MS", DEFAULT_TIMEOUT_MS))
        self.memory = memory or os.getenv("CORENLP_MEMORY", DEFAULT_MEMORY)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start (or attach to) the CoreNLP server and wait until it answers.

        Raises whatever the client raises; callers must treat that as fatal.
        """
        if self._client is None:
            from stanza.server import CoreNLPClient, StartServer

            self._client = CoreNLPClient(
                annotators=list(ANNOTATORS),
                endpoint=self.endpoint,
                start_server=StartServer.TRY_START if self.start_server else StartServer.DONT_START,
                timeout=self.timeout_ms,
                memory=self.memory,
                be_quiet=True,
                properties={"tokenize.codepoint": "true"},
            )
        self._client.start()
        self._client.ensure_alive()
        logger.info("CoreNLP pipeline ready", extra={
            "endpoint": self.endpoint,
            "annotators": ",".join(ANNOTATORS),
        })

    def stop(self) -> None:
        if self._client is not None:
            self._client.stop()
            logger.info("CoreNLP client stopped")

    def ping(self) -> bool:
        if self._client is None:
            return False
        try:
            return bool(self._client.is_alive())
        except Exception as e:
            logger.warning("CoreNLP ping failed", extra={"error": str(e)})
            return False

    # ------------------------------------------------------------------
    # Public interface (implements NLPPort)
    # ------------------------------------------------------------------

    async def analyze(self, text: str) -> AnnotationGraph:
        if self._client is None:
            raise AnnotationError("CoreNLP client is not started")
        try:
            document = await asyncio.to_thread(self._client.annotate, text)
        except Exception as e:
            logger.error("CoreNLP annotation failed", extra={
                "error": str(e),
                "text_length": len(text),
            }, exc_info=True)
            raise AnnotationError("Text analysis failed") from e

        return self._read_document(document)

    # ------------------------------------------------------------------
    # Document conversion (reads protobuf objects → domain types)
    # ------------------------------------------------------------------

    def _read_document(self, document) -> AnnotationGraph:
        sentences = tuple(
            self._read_sentence(document, sentence) for sentence in document.sentence
        )
        chains = tuple(
            self._read_coref_chain(document, chain) for chain in document.corefChain
        )
        return AnnotationGraph(sentences=sentences, coref_chains=chains)

    def _read_sentence(self, document, sentence) -> Sentence:
        tokens = tuple(
            Token(
                text=token.word,
                pos=token.pos or None,
                lemma=token.lemma or None,
                ner=token.ner or None,
            )
            for token in sentence.token
        )
        return Sentence(
            text=self._sentence_text(document, sentence),
            tokens=tokens,
            dependencies=self._read_dependencies(sentence),
            parse_tree=(
                render_parse_tree(sentence.parseTree)
                if sentence.HasField("parseTree") else None
            ),
            sentiment=sentence.sentiment or None,
            relation_triples=tuple(
                self._read_triple(document, triple) for triple in sentence.openieTriple
            ),
        )

    def _sentence_text(self, document, sentence) -> str:
        """Slice the original text between the first and last token of a sentence.

        beginChar/endChar count UTF-16 units; codepoint offsets index a Python str.
        """
        tokens = sentence.token
        if not tokens:
            return ""
        first, last = tokens[0], tokens[len(tokens) - 1]
        if first.HasField("codepointOffsetBegin"):
            return document.text[first.codepointOffsetBegin:last.codepointOffsetEnd]
        return document.text[first.beginChar:last.endChar]

    def _read_dependencies(
        self, sentence,
    ) -> dict[DependencyVariant, tuple[DependencyEdge, ...]]:
        """Read every dependency graph the engine set on the sentence.

        Edges are sorted by dependent index, governor index, then relation.
        """
        words = [token.word for token in sentence.token]
        graphs: dict[DependencyVariant, tuple[DependencyEdge, ...]] = {}
        for variant, field_name in _DEPENDENCY_FIELDS.items():
            if not sentence.HasField(field_name):
                continue
            graph = getattr(sentence, field_name)
            edges = sorted(graph.edge, key=lambda e: (e.target, e.source, e.dep))
            graphs[variant] = tuple(
                DependencyEdge(
                    relation=edge.dep,
                    governor=words[edge.source - 1],
                    governor_index=edge.source,
                    dependent=words[edge.target - 1],
                    dependent_index=edge.target,
                )
                for edge in edges
            )
        return graphs

    def _read_coref_chain(self, document, chain) -> CorefChain:
        """Read a chain's representative and its mentions in textual order."""
        representative = self._mention_text(document, chain.mention[chain.representative])
        ordered = sorted(chain.mention, key=lambda m: (m.sentenceIndex, m.beginIndex))
        return CorefChain(
            representative=representative,
            mentions=tuple(self._mention_text(document, m) for m in ordered),
        )

    def _mention_text(self, document, mention) -> str:
        tokens = document.sentence[mention.sentenceIndex].token
        return " ".join(
            tokens[i].word for i in range(mention.beginIndex, mention.endIndex)
        )

    def _read_triple(self, document, triple) -> RelationTriple:
        return RelationTriple(
            subject=self._lemma_gloss(document, triple.subjectTokens, triple.subject),
            predicate=self._relation_gloss(document, triple),
            object=self._lemma_gloss(document, triple.objectTokens, triple.object),
            confidence=triple.confidence,
        )

    def _relation_gloss(self, document, triple) -> str:
        """Lowercased relation lemmas plus the implicit words openie elided.

        e.g. "Obama is president of US" → relation token "president" with
        prefixBe and suffixOf set → "be president of".
        """
        if not triple.relationTokens:
            return triple.relation
        lemmas = self._lemma_gloss(document, triple.relationTokens, triple.relation).lower()
        gloss = (
            ("be " if triple.prefixBe else "")
            + lemmas
            + (" be" if triple.suffixBe else "")
            + (" of" if triple.suffixOf else "")
            + (" at_time" if triple.istmod else "")
        )
        return gloss.strip()

    def _lemma_gloss(self, document, locations, fallback: str) -> str:
        """Join the lemmas of the tokens a triple argument spans.

        Falls back to the surface string when the engine gave no token locations.
        """
        if not locations:
            return fallback
        return " ".join(
            document.sentence[loc.sentenceIndex].token[loc.tokenIndex].lemma
            for loc in locations
        )


def render_parse_tree(tree) -> str:
    """Render a ParseTree as a bracketed string, e.g. (ROOT (S (NP (NNP Sophia)) ...))."""
    if not tree.child:
        return tree.value
    children = " ".join(render_parse_tree(child) for child in tree.child)
    return f"({tree.value} {children})"

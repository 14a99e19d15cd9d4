"""WordNet adapter — looks up word senses through NLTK's corpus reader.

Implements LexiconPort. NLTK Synset objects are returned as opaque sense
handles and only read back through this adapter.
"""

import asyncio
import logging
from typing import Any

from domain.model.errors import LexiconError, ValidationError

logger = logging.getLogger(__name__)

# Part-of-speech label → WordNet POS letter
POS_LABELS = {
    "noun": "n",
    "verb": "v",
    "adjective": "a",
    "adverb": "r",
    "n": "n",
    "v": "v",
    "a": "a",
    "s": "s",
    "r": "r",
}


def to_wordnet_pos(label: str) -> str:
    """Map a part-of-speech label (e.g. 'noun', 'Verb', 'n') to a WordNet letter."""
    letter = POS_LABELS.get((label or "").strip().lower())
    if letter is None:
        raise ValidationError(f"Unsupported part of speech: {label}")
    return letter


class NltkWordNetAdapter:
    """Adapter that reads senses from the Princeton WordNet corpus via NLTK.

    The corpus is loaded eagerly by preload() so that a missing corpus
    fails startup instead of the first request.
    """

    def __init__(self, wordnet: Any = None):
        self._wordnet = wordnet

    def preload(self) -> None:
        """Load the WordNet corpus (call at service startup).

        Raises LookupError if the corpus has not been downloaded.
        """
        if self._wordnet is None:
            from nltk.corpus import wordnet

            self._wordnet = wordnet
        self._wordnet.ensure_loaded()
        logger.info("WordNet corpus loaded")

    def ping(self) -> bool:
        return self._wordnet is not None

    # ------------------------------------------------------------------
    # Public interface (implements LexiconPort)
    # ------------------------------------------------------------------

    async def lookup_senses(self, pos: str, word: str) -> list[Any] | None:
        letter = to_wordnet_pos(pos)
        lemma = word.strip().replace(" ", "_")
        senses = await asyncio.to_thread(self._wordnet.synsets, lemma, pos=letter)
        if not senses:
            return None
        return list(senses)

    def sense_id(self, sense: Any) -> str:
        return sense.name()

    def definition(self, sense: Any) -> str:
        return sense.definition()

    def hypernyms(self, sense: Any) -> list[str]:
        try:
            return [hypernym.name() for hypernym in sense.hypernyms()]
        except Exception as e:
            raise LexiconError(f"Hypernym lookup failed for {self.sense_id(sense)}") from e

"""In-memory implementation of LexiconPort for testing."""

from typing import Any

from adapter.wordnet.nltk_wordnet import to_wordnet_pos
from domain.model.errors import LexiconError


class FakeLexiconAdapter:
    """Fake lexicon that serves preconfigured senses.

    entries maps (pos letter, word) to a list of sense dicts with keys
    id, definition, hypernyms. A sense with "hypernyms_error" set fails
    its hypernym lookup.
    """

    def __init__(self, entries: dict[tuple[str, str], list[dict[str, Any]]] | None = None):
        self.entries = entries or {}
        self.last_pos: str | None = None
        self.last_word: str | None = None

    async def lookup_senses(self, pos: str, word: str) -> list[dict[str, Any]] | None:
        self.last_pos = pos
        self.last_word = word
        return self.entries.get((to_wordnet_pos(pos), word))

    def sense_id(self, sense: dict[str, Any]) -> str:
        return sense["id"]

    def definition(self, sense: dict[str, Any]) -> str:
        return sense.get("definition", "")

    def hypernyms(self, sense: dict[str, Any]) -> list[str]:
        if sense.get("hypernyms_error"):
            raise LexiconError(f"Hypernym lookup failed for {sense['id']}")
        return list(sense.get("hypernyms", []))

    def ping(self) -> bool:
        return True

"""Lexicon port — outbound interface for the lexical database."""

from typing import Any, Protocol


class LexiconPort(Protocol):
    """Port for looking up word senses.

    lookup_senses() returns opaque sense handles from the lexicon.
    sense_id() / definition() / hypernyms() encapsulate all knowledge of
    the handle's structure so that the service layer only deals with
    primitives.
    """

    async def lookup_senses(self, pos: str, word: str) -> list[Any] | None:
        """Return the senses indexed for (pos, word), or None if there is no index entry.

        Raises:
            ValidationError: pos is not a supported part-of-speech label.
        """
        ...

    def sense_id(self, sense: Any) -> str: ...

    def definition(self, sense: Any) -> str: ...

    def hypernyms(self, sense: Any) -> list[str]:
        """Describe the direct hypernyms of a sense.

        Raises:
            LexiconError: Graph traversal failed for this sense.
        """
        ...

    def ping(self) -> bool: ...

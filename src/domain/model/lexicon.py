"""Lexical database domain models."""

from dataclasses import dataclass, field

WORD_NOT_FOUND = "Word not found"


@dataclass(frozen=True)
class SynsetRecord:
    """One word sense.

    synonyms is never populated from the lexicon; it is kept so the
    response shape stays stable.
    """
    id: str
    definition: str
    hypernyms: list[str] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SynsetLookup:
    """Result of a (part of speech, word) lookup.

    synsets is None when the lexicon has no index entry for the pair,
    which is distinct from an entry with zero senses.
    """
    word: str
    synsets: list[SynsetRecord] | None = None

    @property
    def found(self) -> bool:
        return self.synsets is not None

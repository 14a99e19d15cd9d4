"""Pydantic models for API responses.

Field names follow the JSON contract; camelCase keys are declared as
aliases so the Python side stays snake_case.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class _AliasedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EntityResponse(BaseModel):
    """A token tagged with a named-entity type."""
    entity: str
    type: str


class SentimentResponse(BaseModel):
    """Sentence-level sentiment label and its fixed score."""
    sentence: str
    sentiment: str
    score: float


class TokenizeResponse(BaseModel):
    """Token texts grouped by sentence."""
    sentences: list[list[str]]


class DependencyResponse(_AliasedModel):
    """A dependency edge with the engine's 1-based token indices."""
    relation: str
    governor: str
    governor_index: int = Field(..., alias="governorIndex")
    dependent: str
    dependent_index: int = Field(..., alias="dependentIndex")


class RelationTripleResponse(BaseModel):
    """Open-IE subject / predicate / object lemma glosses."""
    subject: str
    predicate: str
    object: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class ParseTreeResponse(_AliasedModel):
    sentence: str
    parse_tree: Optional[str] = Field(None, alias="parseTree")


class TokenResponse(BaseModel):
    token: str
    pos: Optional[str] = None
    lemma: Optional[str] = None


class SentenceAnalysisResponse(_AliasedModel):
    """Every annotation of one sentence."""
    tokens: list[TokenResponse]
    entities: list[EntityResponse]
    dependencies: list[DependencyResponse]
    parse_tree: Optional[str] = Field(None, alias="parseTree")
    sentiment: str


class RelationsResponse(BaseModel):
    """Response model for the full analysis endpoint."""
    sentences: list[SentenceAnalysisResponse]
    coreferences: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Representative mention → co-referring mentions in textual order",
    )


class ErrorResponse(BaseModel):
    error: str


class SynsetResponse(BaseModel):
    """One WordNet sense."""
    id: str
    definition: str
    hypernyms: list[str] = Field(default_factory=list, description="Direct hypernym synset names")
    synonyms: list[str] = Field(default_factory=list, description="Not populated")


class SynsetLookupResponse(BaseModel):
    """Either word + synsets, or error when the word has no WordNet entry."""
    word: Optional[str] = None
    synsets: Optional[list[SynsetResponse]] = None
    error: Optional[str] = None

"""NLP API routes — CoreNLP annotations as JSON.

Every endpoint takes the raw request body as the text to analyze.

Endpoints:
- POST /nlp/relations: All sentence annotations plus coreferences
- POST /nlp/openie-relations: Open-IE relation triples with confidence
- POST /nlp/ner: Named entities
- POST /nlp/sentiment: Sentence sentiment labels and scores
- POST /nlp/coref: Coreference chains
- POST /nlp/tokenize: Tokens grouped by sentence
- POST /nlp/dependencies: Dependency edges of a chosen variant
- POST /nlp/parse: Constituency parse trees

Only /relations and /openie-relations reject blank text; the other
endpoints pass it to the engine and return empty results.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_nlp_port, read_text
from api.models import (
    DependencyResponse,
    EntityResponse,
    ErrorResponse,
    ParseTreeResponse,
    RelationTripleResponse,
    RelationsResponse,
    SentimentResponse,
    TokenizeResponse,
)
from domain.model.annotation import AnnotationGraph, DependencyVariant
from domain.model.errors import AnnotationError, ValidationError
from port.nlp import NLPPort
from services import annotation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nlp", tags=["nlp"])

ANALYSIS_FAILED = "Text analysis failed"

# Request body is plain text, read by read_text() rather than a Pydantic model
TEXT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"text/plain": {"schema": {"type": "string"}}},
    }
}


async def _annotate(nlp: NLPPort, text: str | None) -> AnnotationGraph:
    """Run the engine, mapping engine failures to a generic 500."""
    try:
        return await nlp.analyze(text or "")
    except AnnotationError:
        raise HTTPException(status_code=500, detail=ANALYSIS_FAILED)


@router.post(
    "/relations",
    response_model=RelationsResponse,
    responses={400: {"model": ErrorResponse}},
    openapi_extra=TEXT_BODY,
)
async def get_all_relations(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """Extract tokens, entities, dependencies, parse tree and sentiment per sentence, plus coreferences."""
    try:
        return await annotation_service.analyze_all(nlp, text)
    except ValidationError as e:
        logger.info("Rejected blank text", extra={"endpoint": "relations"})
        return JSONResponse(status_code=400, content={"error": str(e)})
    except AnnotationError:
        raise HTTPException(status_code=500, detail=ANALYSIS_FAILED)


@router.post(
    "/openie-relations",
    response_model=list[RelationTripleResponse],
    responses={400: {"description": "Blank text; a list holding one {error} object"}},
    openapi_extra=TEXT_BODY,
)
async def get_openie_relations(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """Extract open-IE subject / predicate / object triples with confidence."""
    try:
        annotation_service.validate_text(text)
    except ValidationError as e:
        logger.info("Rejected blank text", extra={"endpoint": "openie-relations"})
        return JSONResponse(status_code=400, content=[{"error": str(e)}])

    graph = await _annotate(nlp, text)
    triples = annotation_service.extract_relation_triples(graph)
    logger.info("Relation triples extracted", extra={"triple_count": len(triples)})
    return triples


@router.post("/ner", response_model=list[EntityResponse], openapi_extra=TEXT_BODY)
async def get_named_entities(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """List named entities in document order."""
    graph = await _annotate(nlp, text)
    entities = annotation_service.extract_entities(graph)
    logger.info("Named entities extracted", extra={"entity_count": len(entities)})
    return entities


@router.post("/sentiment", response_model=list[SentimentResponse], openapi_extra=TEXT_BODY)
async def get_sentiment(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """Classify each sentence as Positive / Negative / other, with a fixed score."""
    graph = await _annotate(nlp, text)
    return annotation_service.extract_sentiment(graph)


@router.post("/coref", response_model=dict[str, list[str]], openapi_extra=TEXT_BODY)
async def get_coreferences(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """Map each representative mention to its co-referring mentions."""
    graph = await _annotate(nlp, text)
    return annotation_service.extract_coreferences(graph)


@router.post("/tokenize", response_model=TokenizeResponse, openapi_extra=TEXT_BODY)
async def tokenize_and_split(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """Split text into sentences of tokens."""
    graph = await _annotate(nlp, text)
    return annotation_service.tokenize(graph)


@router.post(
    "/dependencies",
    response_model=list[list[DependencyResponse]],
    openapi_extra=TEXT_BODY,
)
async def get_dependencies(
    text: str | None = Depends(read_text),
    variant: DependencyVariant = Query(
        DependencyVariant.ENHANCED_PLUS_PLUS,
        description="Which dependency graph to read",
    ),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """List dependency edges per sentence."""
    graph = await _annotate(nlp, text)
    return annotation_service.extract_dependencies(graph, variant)


@router.post("/parse", response_model=list[ParseTreeResponse], openapi_extra=TEXT_BODY)
async def get_parse_trees(
    text: str | None = Depends(read_text),
    nlp: NLPPort = Depends(get_nlp_port),
):
    """Return the constituency parse tree of each sentence."""
    graph = await _annotate(nlp, text)
    return annotation_service.extract_parse_trees(graph)

"""WordNet API routes.

Endpoints:
- GET /wordnet/synsets: Senses of a word for a part of speech
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_lexicon_port
from api.models import SynsetLookupResponse, SynsetResponse
from domain.model.errors import ValidationError
from domain.model.lexicon import WORD_NOT_FOUND
from port.lexicon import LexiconPort
from services import wordnet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wordnet", tags=["wordnet"])


@router.get(
    "/synsets",
    response_model=SynsetLookupResponse,
    response_model_exclude_none=True,
)
async def get_synsets(
    word: str = Query(..., min_length=1, description="Word to look up"),
    pos: str = Query(..., description="noun, verb, adjective or adverb"),
    lexicon: LexiconPort = Depends(get_lexicon_port),
):
    """Look up the WordNet senses of a word.

    A word with no entry is not an error: the response is
    {"error": "Word not found"} with status 200.
    """
    try:
        result = await wordnet_service.lookup_synsets(lexicon, pos, word)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not result.found:
        return SynsetLookupResponse(error=WORD_NOT_FOUND)

    logger.info("Synsets looked up", extra={
        "word": word,
        "pos": pos,
        "synset_count": len(result.synsets),
    })
    return SynsetLookupResponse(
        word=result.word,
        synsets=[
            SynsetResponse(
                id=record.id,
                definition=record.definition,
                hypernyms=record.hypernyms,
                synonyms=record.synonyms,
            )
            for record in result.synsets
        ],
    )

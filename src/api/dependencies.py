from fastapi import HTTPException, Request

from port.lexicon import LexiconPort
from port.nlp import NLPPort


def get_nlp_port(request: Request) -> NLPPort:
    """Return the process-wide NLP adapter created at startup."""
    nlp = getattr(request.app.state, "nlp", None)
    if nlp is None:
        raise HTTPException(status_code=503, detail="NLP engine unavailable")
    return nlp


def get_lexicon_port(request: Request) -> LexiconPort:
    """Return the process-wide lexicon adapter created at startup."""
    lexicon = getattr(request.app.state, "lexicon", None)
    if lexicon is None:
        raise HTTPException(status_code=503, detail="Lexicon unavailable")
    return lexicon


async def read_text(request: Request) -> str | None:
    """Read the raw request body as text. An empty body reads as None.

    Bodies that are not valid UTF-8 are rejected with 400.
    """
    body = await request.body()
    if not body:
        return None
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Request body must be UTF-8 text")

"""FastAPI application entry point."""

import asyncio
import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before the adapters read CORENLP_* settings
load_dotenv()

# main.py is at <root>/src/api/main.py; src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import health, nlp, wordnet
from adapter.nlp.corenlp import CoreNLPAdapter
from adapter.wordnet.nltk_wordnet import NltkWordNetAdapter
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "CoreNLP Gateway"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build the shared adapters, stop them on shutdown.

    Any adapter failure aborts startup; no request is served with a
    half-initialized engine.
    """
    nlp_adapter = CoreNLPAdapter()
    lexicon_adapter = NltkWordNetAdapter()
    try:
        await asyncio.to_thread(nlp_adapter.start)
        await asyncio.to_thread(lexicon_adapter.preload)
    except Exception:
        logger.critical("Adapter initialization failed, aborting startup", exc_info=True)
        try:
            nlp_adapter.stop()
        except Exception:
            logger.warning("CoreNLP client stop failed after aborted startup", exc_info=True)
        raise

    app.state.nlp = nlp_adapter
    app.state.lexicon = lexicon_adapter

    yield  # App runs here

    app.state.nlp = None
    app.state.lexicon = None
    nlp_adapter.stop()


app = FastAPI(
    title=SERVICE_NAME,
    description="REST facade over Stanford CoreNLP annotations and WordNet lookups",
    version=VERSION,
    lifespan=lifespan,
)

# CORS: a wildcard origin cannot be combined with credentials
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info("CORS configured with specific origins", extra={"origins": cors_origins})

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(nlp.router)
app.include_router(wordnet.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Application logs go through structured logging; uvicorn's access log is redundant
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )

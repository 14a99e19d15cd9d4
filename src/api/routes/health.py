"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

# app.state attribute → service name in the response
_SERVICES = {
    "nlp": "corenlp",
    "lexicon": "wordnet",
}


@router.get("")
async def health(request: Request):
    """Health check endpoint with adapter status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    overall_healthy = True

    for attr, name in _SERVICES.items():
        adapter = getattr(request.app.state, attr, None)
        try:
            if adapter is not None and adapter.ping():
                health_status["services"][name] = {
                    "status": "healthy",
                    "message": "Ready"
                }
            else:
                health_status["services"][name] = {
                    "status": "unhealthy",
                    "message": "Not initialized or not reachable"
                }
                overall_healthy = False
        except Exception as e:
            health_status["services"][name] = {
                "status": "unhealthy",
                "message": f"Check error: {str(e)[:200]}"
            }
            overall_healthy = False

    if not overall_healthy:
        health_status["status"] = "degraded"
        logger.warning("Health check degraded", extra={"services": health_status["services"]})

    status_code = status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        content=health_status,
        status_code=status_code
    )

"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from fitshare.config.settings import settings
from fitshare.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness check for Kubernetes/load balancers.

    The database is required; cache and object storage are reported but
    do not fail readiness (the cache is advisory, storage only backs media).
    """
    state = request.app.state
    checks = {
        "database": await state.database.ping(),
        "cache": await state.cache.ping() if hasattr(state.cache, "ping") else True,
        "storage": await state.storage.ping() if hasattr(state.storage, "ping") else True,
    }
    ready = checks["database"]
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}

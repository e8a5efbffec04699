"""Health check and metrics endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Response
from pydantic import BaseModel

from api.services.store import get_store
from core import __version__
from core.formatting import utcnow
from core.observability import get_metrics


router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str
    services: Dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    store = get_store()
    return HealthResponse(
        status="healthy",
        timestamp=utcnow().isoformat(),
        version=__version__,
        services={
            "api": "up",
            "store": "up" if store.list_users() else "empty",
        }
    )


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """Readiness probe for Kubernetes."""
    return {"status": "ready"}


@router.get("/live")
async def liveness_check(response: Response) -> Dict[str, str]:
    """Liveness probe for Kubernetes."""
    return {"status": "alive"}


@router.get("/metrics")
async def metrics() -> Dict[str, Any]:
    """In-memory counters: sessions, service-request lifecycle, request timings."""
    return get_metrics().get_summary()

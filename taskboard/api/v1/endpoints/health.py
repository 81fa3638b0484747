"""Health check endpoints: liveness and a cache status snapshot."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskboard.api.v1.dependencies import get_cache
from taskboard.infrastructure.cache.tiered_cache import CacheService
from taskboard.schemas.health import CacheHealthResponse, HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/cache", response_model=CacheHealthResponse)
def cache_health(
    cache: Annotated[CacheService, Depends(get_cache)],
) -> CacheHealthResponse:
    """Report whether the remote tier is in use, absent or degraded.

    Always 200: a degraded remote tier does not make the service unhealthy.
    """
    snapshot = cache.status()
    if not snapshot.remote_configured:
        status = "local_only"
    elif snapshot.degraded:
        status = "degraded"
    else:
        status = "ok"
    return CacheHealthResponse(
        status=status,
        remote_configured=snapshot.remote_configured,
        degraded=snapshot.degraded,
        seconds_since_last_probe=snapshot.seconds_since_last_probe,
        local_entries=snapshot.local_entries,
    )

"""Health check API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class CacheHealthResponse(BaseModel):
    """Response for GET /health/cache (two-tier cache snapshot)."""

    model_config = ConfigDict(from_attributes=True)

    status: str = Field(
        default="ok",
        description="ok when the remote tier is in use, local_only when absent, degraded after a failure",
    )
    remote_configured: bool
    degraded: bool
    seconds_since_last_probe: float | None = Field(
        default=None, description="Seconds since the last failure or probe (None if never)"
    )
    local_entries: int = Field(..., description="Live entries in the local tier")

"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready: which backing services are configured."""

    status: str = Field(default="ok", description="ok | degraded")
    firestore: bool
    auth: bool
    push: bool
    suggestions: bool

"""Health check data models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Health status response for the inventory server."""

    status: str = Field(
        ...,
        description="Overall health status: 'healthy' or 'unhealthy'",
        examples=["healthy"],
    )
    version: str = Field(
        ...,
        description="Version of the inventory server",
        examples=["0.1.0"],
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Timestamp when health check was performed",
    )
    project_id: str = Field(..., description="GCP project being inventoried")
    compute_client_ready: bool = Field(
        ...,
        description="Whether the Compute Engine client was initialized",
    )
    pinned_resource_id: str | None = Field(
        default=None,
        description="Resource id the server is bound to, if any",
    )

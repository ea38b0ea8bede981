"""Response and state models for the exercise server."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ServerState(str, Enum):
    """Lifecycle states of the exercise server."""

    INITIALIZING = "initializing"
    READY = "ready"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = Field(..., description="'healthy' or 'unhealthy'")
    document_pages: int = Field(..., description="Pages in the source document")
    extractor_poisoned: bool = Field(
        ..., description="True once an unexpected failure disabled extraction"
    )
    uptime_seconds: float = Field(..., description="Seconds since server start")

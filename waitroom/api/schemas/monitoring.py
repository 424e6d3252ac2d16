"""Pydantic schemas for Monitoring API endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SchedulerStatus(BaseModel):
    """Admission scheduler state."""

    enabled: bool
    running: bool
    batch_size: int
    interval_seconds: float

    model_config = ConfigDict(extra="forbid")


class HealthResponse(BaseModel):
    """Response model for GET /monitoring/health.

    Attributes:
        status: "healthy" when the store answers, "degraded" otherwise
        version: Waitroom version
        store: Store reachability
        scheduler: Admission scheduler state
    """

    status: Literal["healthy", "degraded"]
    version: str
    store: Literal["ok", "unavailable"]
    scheduler: SchedulerStatus

    model_config = ConfigDict(extra="forbid")


class QueueListResponse(BaseModel):
    """Response model for GET /monitoring/queues."""

    queues: list[str] = Field(description="Queues with at least one waiting user")
    total: int

    model_config = ConfigDict(extra="forbid")

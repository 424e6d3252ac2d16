"""Pydantic schemas for API request/response models."""

from waitroom.api.schemas.monitoring import (
    HealthResponse,
    QueueListResponse,
    SchedulerStatus,
)
from waitroom.api.schemas.queue import (
    AdmittedUserResponse,
    AllowedUserResponse,
    AllowUserResponse,
    QueueStatusResponse,
    RankNumberResponse,
    RegisterUserResponse,
    ServerExceptionResponse,
    TouchResponse,
    WaitingRoomResponse,
)

__all__ = [
    # Monitoring
    "HealthResponse",
    "QueueListResponse",
    "SchedulerStatus",
    # Queue
    "AdmittedUserResponse",
    "AllowedUserResponse",
    "AllowUserResponse",
    "QueueStatusResponse",
    "RankNumberResponse",
    "RegisterUserResponse",
    "ServerExceptionResponse",
    "TouchResponse",
    "WaitingRoomResponse",
]

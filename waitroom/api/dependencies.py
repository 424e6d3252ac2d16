"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status

from waitroom.core.config import Config
from waitroom.queue.manager import UserQueueManager
from waitroom.runtime.scheduling import AdmissionScheduler


def get_settings(request: Request) -> Config:
    """
    Get application configuration from app state.

    Args:
        request: FastAPI request object

    Returns:
        Loaded Config instance
    """
    settings: Config = request.app.state.settings
    return settings


def get_queue_manager(request: Request) -> UserQueueManager:
    """
    Get the queue manager created during application startup.

    Args:
        request: FastAPI request object

    Returns:
        UserQueueManager instance

    Raises:
        HTTPException: 503 if the application has not finished starting
    """
    manager: UserQueueManager | None = getattr(request.app.state, "manager", None)
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Queue manager is not initialized",
        )
    return manager


def get_scheduler(request: Request) -> AdmissionScheduler | None:
    """
    Get the admission scheduler from app state.

    Returns None before startup has run.
    """
    return getattr(request.app.state, "scheduler", None)


def resolve_queue(
    settings: Annotated[Config, Depends(get_settings)],
    queue: str | None = Query(None, min_length=1, description="Queue name (defaults to the configured queue)"),
) -> str:
    """Resolve the queue query parameter, falling back to the configured default."""
    return queue or settings.api.default_queue


# Type aliases for annotating dependencies
Settings = Annotated[Config, Depends(get_settings)]
QueueManager = Annotated[UserQueueManager, Depends(get_queue_manager)]
Scheduler = Annotated[AdmissionScheduler | None, Depends(get_scheduler)]
QueueName = Annotated[str, Depends(resolve_queue)]

"""Monitoring and health check endpoints."""

import logging

from fastapi import APIRouter

from waitroom import __version__
from waitroom.api.dependencies import QueueManager, Scheduler, Settings
from waitroom.api.schemas.monitoring import HealthResponse, QueueListResponse, SchedulerStatus
from waitroom.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/monitoring", tags=["monitoring"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    manager: QueueManager,
    scheduler: Scheduler,
    settings: Settings,
) -> HealthResponse:
    """System health check endpoint.

    Reports store reachability and admission scheduler state. Always answers
    200; a store outage is reported as "degraded".
    """
    try:
        store_ok = await manager.store.ping()
    except StoreUnavailableError as e:
        logger.warning(f"Health check: store unavailable: {e}")
        store_ok = False

    scheduler_config = settings.scheduler
    return HealthResponse(
        status="healthy" if store_ok else "degraded",
        version=__version__,
        store="ok" if store_ok else "unavailable",
        scheduler=SchedulerStatus(
            enabled=scheduler_config.enabled,
            running=scheduler.running if scheduler else False,
            batch_size=scheduler_config.batch_size,
            interval_seconds=scheduler_config.interval_seconds,
        ),
    )


@router.get("/queues", response_model=QueueListResponse)
async def list_queues(manager: QueueManager, settings: Settings) -> QueueListResponse:
    """List queues that currently have waiting users."""
    queues = await manager.list_queues(scan_count=settings.scheduler.scan_count)
    return QueueListResponse(queues=queues, total=len(queues))

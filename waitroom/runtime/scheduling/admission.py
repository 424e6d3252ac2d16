"""AdmissionScheduler for periodic batch admission across all queues."""

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from waitroom.core.config import SchedulerConfig
from waitroom.queue.manager import UserQueueManager

logger = logging.getLogger(__name__)

ADMISSION_JOB_ID = "admission_tick"


class AdmissionScheduler:
    """Periodically admits a fixed batch of waiting users from every queue.

    Each tick discovers queues by scanning wait keys and admits up to
    ``batch_size`` users per queue. Queues are processed independently: one
    queue failing is logged and never blocks the others.

    The enabled switch is part of the injected config. A disabled scheduler
    schedules nothing and stays disabled for the process lifetime.
    """

    def __init__(self, manager: UserQueueManager, config: SchedulerConfig):
        """Initialize the admission scheduler.

        Args:
            manager: Queue manager performing the admissions.
            config: Immutable scheduler configuration.
        """
        self.manager = manager
        self.config = config
        self._scheduler: AsyncIOScheduler | None = None
        self._job: Any = None

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def start(self) -> None:
        """Start the interval job if scheduling is enabled."""
        if not self.config.enabled:
            logger.info("Admission scheduler disabled, no batches will be admitted automatically")
            return
        if self.running:
            return

        self._scheduler = AsyncIOScheduler(timezone=UTC)
        first_run = datetime.now(UTC) + timedelta(seconds=self.config.initial_delay_seconds)

        # Ticks may overlap; ZPOPMIN removes members as it returns them
        self._job = self._scheduler.add_job(
            func=self.run_tick,
            trigger=IntervalTrigger(seconds=self.config.interval_seconds, timezone=UTC),
            id=ADMISSION_JOB_ID,
            name="Admission tick",
            next_run_time=first_run,
            max_instances=4,
            replace_existing=True,
        )

        self._scheduler.start()
        logger.info(
            f"Admission scheduler started (batch_size: {self.config.batch_size}, "
            f"interval: {self.config.interval_seconds}s, "
            f"initial_delay: {self.config.initial_delay_seconds}s)"
        )

    async def stop(self) -> None:
        """Stop the scheduler on process shutdown."""
        if self._scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Admission scheduler stopped")
        self._scheduler = None
        self._job = None

    async def run_tick(self) -> dict[str, int]:
        """Run one scan-and-admit pass over every queue.

        Returns:
            Mapping of queue name to admitted count for queues that succeeded.
        """
        logger.debug("Admission tick started")
        try:
            queues = await self.manager.list_queues(scan_count=self.config.scan_count)
        except Exception as e:
            logger.error(f"Admission tick failed to discover queues: {e}", exc_info=True)
            return {}

        results = await asyncio.gather(
            *(self._admit_queue(queue) for queue in queues),
        )
        return {queue: admitted for queue, admitted in zip(queues, results, strict=True) if admitted is not None}

    async def _admit_queue(self, queue: str) -> int | None:
        batch_size = self.config.batch_size
        try:
            admitted = await self.manager.admit_batch(queue, batch_size)
        except Exception as e:
            logger.error(f"Admission failed for queue '{queue}': {e}", exc_info=True)
            return None
        logger.info(f"Tried {batch_size} and allowed {admitted} members of {queue} queue")
        return admitted

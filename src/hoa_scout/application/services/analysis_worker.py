"""Bounded background queue for HOA analysis jobs.

Replaces untracked fire-and-forget tasks: every submission gets a job whose
state can be polled, and the queue rejects work when it is full.
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Optional, Set

from hoa_scout.domain.hoa.exceptions import AnalysisQueueFullError
from hoa_scout.domain.shared.time import Clock, utc_now

logger = logging.getLogger(__name__)

AnalysisRunner = Callable[[str], Awaitable[Optional[float]]]


class AnalysisJobStatus(Enum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_active(self) -> bool:
        return self in [AnalysisJobStatus.QUEUED, AnalysisJobStatus.RUNNING]


@dataclass
class AnalysisJob:
    hoa_id: str
    status: AnalysisJobStatus
    submitted_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    overall_score: Optional[float] = None
    error: Optional[str] = None


class AnalysisWorker:
    """Run analyses on a fixed number of worker tasks.

    Parameters
    ----------
    runner
        Coroutine function analysing one HOA and returning its overall score.
        It must open its own database session.
    queue_size
        Maximum number of queued (not yet running) jobs
    workers
        Number of concurrent worker tasks
    history
        How many finished jobs stay pollable; older ones are forgotten.
        Queued and running jobs are never dropped.
    """

    def __init__(
        self,
        runner: AnalysisRunner,
        queue_size: int = 100,
        workers: int = 2,
        history: int = 1000,
        clock: Clock = utc_now,
    ):
        if queue_size < 1 or workers < 1 or history < 1:
            msg = "queue_size, workers and history must be positive"
            raise ValueError(msg)
        self._runner = runner
        self._queue_size = queue_size
        self._worker_count = workers
        self._clock = clock
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)
        self._history = history
        self._jobs: dict[str, AnalysisJob] = {}
        # Finished job ids, oldest first.
        self._finished: OrderedDict[str, None] = OrderedDict()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return bool(self._tasks)

    def submit(self, hoa_id: str) -> AnalysisJob:
        existing = self._jobs.get(hoa_id)
        if existing is not None and existing.status.is_active():
            return existing

        job = AnalysisJob(
            hoa_id=hoa_id,
            status=AnalysisJobStatus.QUEUED,
            submitted_at=self._clock(),
        )
        try:
            self._queue.put_nowait(hoa_id)
        except asyncio.QueueFull as e:
            raise AnalysisQueueFullError(self._queue_size) from e

        self._jobs[hoa_id] = job
        self._finished.pop(hoa_id, None)
        logger.info("Analysis queued for HOA %s", hoa_id)
        return job

    def get_job(self, hoa_id: str) -> Optional[AnalysisJob]:
        return self._jobs.get(hoa_id)

    def start(self) -> None:
        if self._tasks:
            return
        for index in range(self._worker_count):
            task = asyncio.create_task(
                self._work(),
                name=f"analysis-worker-{index}",
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        logger.info("Started %d analysis workers", self._worker_count)

    async def stop(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    async def join(self) -> None:
        """Wait until every queued job has finished."""
        await self._queue.join()

    async def _work(self) -> None:
        while True:
            hoa_id = await self._queue.get()
            try:
                await self._run_job(hoa_id)
            finally:
                self._queue.task_done()

    async def _run_job(self, hoa_id: str) -> None:
        job = self._jobs[hoa_id]
        job.status = AnalysisJobStatus.RUNNING
        job.started_at = self._clock()
        try:
            job.overall_score = await self._runner(hoa_id)
        except asyncio.CancelledError:
            job.status = AnalysisJobStatus.FAILED
            job.error = "cancelled"
            job.finished_at = self._clock()
            self._remember_finished(hoa_id)
            raise
        except Exception as e:
            logger.exception("Analysis failed for HOA %s", hoa_id)
            job.status = AnalysisJobStatus.FAILED
            job.error = str(e)
        else:
            job.status = AnalysisJobStatus.COMPLETED
        job.finished_at = self._clock()
        self._remember_finished(hoa_id)

    def _remember_finished(self, hoa_id: str) -> None:
        self._finished[hoa_id] = None
        self._finished.move_to_end(hoa_id)
        while len(self._finished) > self._history:
            forgotten, _ = self._finished.popitem(last=False)
            self._jobs.pop(forgotten, None)

# notesynth/synthesis/queue.py
"""
Sequential job queue for synthesis requests.

Runs queued work one job at a time, in submission order, so that only one
request is ever being submitted to the model.
"""

import asyncio
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any

from notesynth.errors import JobTimeoutError, QueueClosedError
from notesynth.models.jobs import ActiveJob, Job, JobState, Work, generate_job_id

logger = logging.getLogger(__name__)


class JobQueue:
    """
    FIFO job queue with a single dispatch task.

    Features:
        - enqueue() returns an asyncio.Future that settles with the work's
          result or exception
        - One dispatch task drains the pending deque; at most one work
          function runs at a time
        - A failing job settles only its own future; the loop moves on
        - Optional per-job timeout (the work is cancelled before the next
          job starts)
        - Cancelling the dispatch task (shutdown, loop teardown) fails the
          running and pending jobs with QueueClosedError

    A job is finished when its work's awaitable completes. If the work returns
    a stream, consumption of that stream happens after the next job may
    already have started.

    Without a timeout, work that never completes stalls every later job.
    """

    def __init__(self, job_timeout: float | None = None) -> None:
        """
        Initialize the job queue.

        Args:
            job_timeout: Seconds a job may run before it fails with
                JobTimeoutError (None = no limit)
        """
        self._pending: deque[Job] = deque()
        self._task: asyncio.Task | None = None
        self._active: ActiveJob | None = None
        self._job_timeout = job_timeout
        self._closed = False

    @property
    def is_active(self) -> bool:
        """
        True while a work function is executing.

        False right after enqueue() until the dispatch task picks the job up,
        and again once the last job has settled.
        """
        return self._active is not None

    @property
    def active_job(self) -> ActiveJob | None:
        """The job currently executing (None if idle)."""
        return self._active

    @property
    def pending_count(self) -> int:
        """Number of jobs waiting to start."""
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def _dispatching(self) -> bool:
        return self._task is not None and not self._task.done()

    def enqueue(self, work: Work) -> asyncio.Future:
        """
        Queue work and return its completion handle.

        Must be called from a running event loop. Never blocks and never
        raises for a busy queue; after shutdown() the returned future is
        already failed with QueueClosedError.

        Args:
            work: Zero-argument callable returning an awaitable

        Returns:
            Future settled with the work's result or exception
        """
        loop = asyncio.get_running_loop()
        job = Job(job_id=generate_job_id(), work=work, future=loop.create_future())

        if self._closed:
            job.state = JobState.CANCELLED
            job.future.set_exception(QueueClosedError("Job queue is shut down"))
            return job.future

        self._pending.append(job)
        logger.debug(f"Queued job {job.job_id} ({len(self._pending)} pending)")

        if not self._dispatching:
            self._task = loop.create_task(self._run_loop())
            self._task.add_done_callback(self._on_dispatch_done)
        return job.future

    async def shutdown(self) -> None:
        """
        Stop the queue.

        Pending jobs fail with QueueClosedError; a running job is cancelled
        and fails the same way. Later enqueue() calls fail immediately.
        """
        self._closed = True

        self._fail_pending("Job queue shut down before job started")

        if self._dispatching:
            logger.info("Stopping job queue...")
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Dispatch task cancelled")

        self._task = None

    async def _run_loop(self) -> None:
        """Drain the pending deque, one job at a time."""
        while self._pending:
            job = self._pending.popleft()

            if job.future.done():
                # Caller cancelled the future while it was waiting
                job.state = JobState.CANCELLED
                logger.info(f"Skipping job {job.job_id}: cancelled before start")
                continue

            await self._run_job(job)

    async def _run_job(self, job: Job) -> None:
        job.state = JobState.RUNNING
        self._active = ActiveJob(
            job_id=job.job_id,
            submitted_at=job.submitted_at,
            started_at=datetime.now(timezone.utc),
        )
        logger.debug(f"Picked up job {job.job_id} after {self._active.waited:.2f}s in queue")

        try:
            result = await self._execute(job)

        except asyncio.CancelledError:
            job.state = JobState.CANCELLED
            if self._closed or asyncio.current_task().cancelling():
                # The dispatch task itself is being stopped
                logger.warning(f"Dispatch task cancelled while running job {job.job_id}")
                self._settle(job, error=QueueClosedError("Job queue stopped while job was running"))
                self._fail_pending("Job queue stopped before job started")
                raise
            # The work cancelled itself; only this job is affected
            logger.warning(f"Job {job.job_id} was cancelled")
            job.future.cancel()

        except JobTimeoutError as e:
            job.state = JobState.TIMED_OUT
            logger.warning(str(e))
            self._settle(job, error=e)

        except Exception as e:
            job.state = JobState.FAILED
            logger.error(f"Job {job.job_id} failed: {type(e).__name__}: {e}")
            self._settle(job, error=e)

        else:
            job.state = JobState.COMPLETE
            logger.info(f"Job {job.job_id} completed in {self._active.elapsed:.2f}s")
            self._settle(job, result=result)

        finally:
            self._active = None
            logger.debug(f"Job {job.job_id} finished: {job.state.value}")

    async def _execute(self, job: Job) -> Any:
        if self._job_timeout is None:
            return await job.work()

        try:
            return await asyncio.wait_for(job.work(), timeout=self._job_timeout)
        except asyncio.TimeoutError as e:
            raise JobTimeoutError(
                f"Job {job.job_id} did not finish within {self._job_timeout}s"
            ) from e

    def _on_dispatch_done(self, task: asyncio.Task) -> None:
        # Covers a task cancelled before its first step, when _run_loop never ran
        if task.cancelled() and task is self._task:
            self._fail_pending("Job queue stopped before job started")

    def _fail_pending(self, message: str) -> None:
        while self._pending:
            job = self._pending.popleft()
            job.state = JobState.CANCELLED
            self._settle(job, error=QueueClosedError(message))

    @staticmethod
    def _settle(job: Job, result: Any = None, error: BaseException | None = None) -> None:
        if job.future.done():
            return
        if error is not None:
            job.future.set_exception(error)
        else:
            job.future.set_result(result)

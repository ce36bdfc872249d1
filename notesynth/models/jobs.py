# notesynth/models/jobs.py
"""
Job tracking models for the synthesis queue.

Internal models (never persisted) describing queued units of work.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

Work = Callable[[], Awaitable[Any]]


class JobState(Enum):
    """Job lifecycle states."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass
class Job:
    """
    One unit of queued work paired with its completion handle.

    The future is settled exactly once by the queue: with the work's result,
    or with the exception the work raised.
    """

    job_id: str
    work: Work
    future: asyncio.Future
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    state: JobState = JobState.QUEUED


@dataclass
class ActiveJob:
    """Introspection record for the job currently executing."""

    job_id: str
    submitted_at: datetime
    started_at: datetime

    @property
    def waited(self) -> float:
        """Seconds the job spent queued before it started."""
        return (self.started_at - self.submitted_at).total_seconds()

    @property
    def elapsed(self) -> float:
        """Seconds since the job started."""
        return (datetime.now(timezone.utc) - self.started_at).total_seconds()


def generate_job_id() -> str:
    """
    Generate a unique job ID.

    Returns:
        12-character hex string (UUID4 truncated)
    """
    return uuid4().hex[:12]

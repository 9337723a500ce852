"""In-process implementations of the job queue and status store."""

import uuid
from collections import deque
from typing import Any

from backstroke.synchronize.results import OutcomeRecord

from .abc import JobQueue, QueuedJob, StatusStore


class InMemoryJobQueue(JobQueue):
    """First-in, first-out queue held in memory."""

    def __init__(self) -> None:
        """Initialize an empty queue."""
        self._jobs: deque[QueuedJob] = deque()

    def __len__(self) -> int:
        return len(self._jobs)

    async def push(self, data: dict[str, Any]) -> str:
        """Enqueue a job payload and return its queue identity."""
        job_id = uuid.uuid4().hex
        self._jobs.append(QueuedJob(id=job_id, data=data))
        return job_id

    async def pop(self) -> QueuedJob | None:
        """Claim the oldest job, or return None when the queue is empty."""
        if not self._jobs:
            return None
        return self._jobs.popleft()


class InMemoryStatusStore(StatusStore):
    """Status store held in memory."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self.records: dict[str, OutcomeRecord] = {}
        self.links: dict[int | str, list[str]] = {}

    async def set(self, job_id: str, record: OutcomeRecord) -> str:
        """Store the outcome of a job and return the identity of the stored record."""
        self.records[job_id] = record
        return uuid.uuid4().hex

    async def get(self, job_id: str) -> OutcomeRecord | None:
        """Get the outcome of a job, if one was stored."""
        return self.records.get(job_id)

    async def attach_to_link(self, link_id: int | str, job_id: str) -> None:
        """Append a job to the history of a link."""
        self.links.setdefault(link_id, []).append(job_id)

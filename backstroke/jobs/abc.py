"""Base ABCs for the job queue and the status store the worker talks to."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from backstroke.synchronize.results import OutcomeRecord


@dataclass(frozen=True)
class QueuedJob:
    """A job claimed from the queue: its queue identity and raw payload."""

    id: str
    data: dict[str, Any]


class JobQueue(ABC):
    """Base ABC for the queue sync jobs arrive on."""

    @abstractmethod
    async def push(self, data: dict[str, Any]) -> str:
        """Enqueue a job payload and return its queue identity."""
        pass

    @abstractmethod
    async def pop(self) -> QueuedJob | None:
        """Claim the next job, or return None when the queue is empty."""
        pass


class StatusStore(ABC):
    """Base ABC for the store of job outcomes."""

    @abstractmethod
    async def set(self, job_id: str, record: OutcomeRecord) -> str:
        """Store the outcome of a job and return the identity of the stored record."""
        pass

    @abstractmethod
    async def get(self, job_id: str) -> OutcomeRecord | None:
        """Get the outcome of a job, if one was stored."""
        pass

    @abstractmethod
    async def attach_to_link(self, link_id: int | str, job_id: str) -> None:
        """Append a job to the history of a link."""
        pass

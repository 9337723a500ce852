"""Job queue and status store contracts, with in-memory implementations."""

from .abc import JobQueue, QueuedJob, StatusStore
from .memory import InMemoryJobQueue, InMemoryStatusStore

__all__ = [
    "InMemoryJobQueue",
    "InMemoryStatusStore",
    "JobQueue",
    "QueuedJob",
    "StatusStore",
]

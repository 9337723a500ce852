"""Unit tests for the in-memory job queue and status store."""

import pytest

from backstroke.jobs.memory import InMemoryJobQueue, InMemoryStatusStore
from backstroke.synchronize.results import OutcomeRecord


@pytest.mark.asyncio
async def test_queue_is_first_in_first_out() -> None:
    """Test that jobs are claimed in the order they were pushed."""
    queue = InMemoryJobQueue()
    first = await queue.push({"n": 1})
    second = await queue.push({"n": 2})

    assert first != second
    assert len(queue) == 2
    claimed = await queue.pop()
    assert claimed is not None
    assert (claimed.id, claimed.data) == (first, {"n": 1})
    claimed = await queue.pop()
    assert claimed is not None
    assert claimed.id == second
    assert await queue.pop() is None


@pytest.mark.asyncio
async def test_status_store() -> None:
    """Test that outcomes are stored per job and jobs are attached to links in order."""
    store = InMemoryStatusStore()
    record = OutcomeRecord.error("Link is not enabled.")

    assert await store.set("job-1", record)
    await store.attach_to_link(8, "job-1")
    await store.attach_to_link(8, "job-2")

    assert await store.get("job-1") is record
    assert await store.get("job-2") is None
    assert store.links == {8: ["job-1", "job-2"]}

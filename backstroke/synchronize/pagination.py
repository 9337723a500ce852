"""Drives paged GitHub API methods until every page has been fetched."""

from typing import Any, Awaitable, Callable, TypeVar

import structlog

from backstroke.utils.constants import DEFAULT_PAGE_SIZE, FIRST_PAGE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")


async def paginate(
    method: Callable[..., Awaitable[list[T]]],
    args: dict[str, Any] | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[T]:
    """Call a paged method with increasing ``page`` numbers and collect every item.

    ``method`` is called as ``method(**args, page=page, per_page=page_size)``.
    A full page means more may follow; a short page is the last one. A page
    larger than ``page_size`` cannot be trusted, so it is dropped and paging
    stops with what was collected before it.
    """
    if page_size <= 0:
        raise ValueError(f"Page size must be positive, got {page_size}")
    args = dict(args or {})
    collected: list[T] = []
    page = FIRST_PAGE
    while True:
        logger.debug("Fetching page", method=getattr(method, "__name__", repr(method)), page=page, per_page=page_size)
        items = await method(**args, page=page, per_page=page_size)
        if len(items) > page_size:
            logger.warning(
                "Received more items than requested, stopping pagination",
                method=getattr(method, "__name__", repr(method)),
                page=page,
                per_page=page_size,
                received=len(items),
            )
            return collected
        collected.extend(items)
        if len(items) < page_size:
            return collected
        page += 1

"""Resolves the repositories a link proposes pull requests to."""

from typing import Any

import structlog

from backstroke.github.abc import GitHubClientBase
from backstroke.github.results import ApiFailure
from backstroke.schemas.link import ForkStrategy, ForkTarget, Link
from backstroke.synchronize.exceptions import ForkListingError, LinkConfigurationError
from backstroke.synchronize.pagination import paginate
from backstroke.utils.constants import DEFAULT_PAGE_SIZE, LINK_INCOMPLETE_MESSAGE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def list_all_forks(github_adapter: GitHubClientBase, owner: str, repo: str, page_size: int = DEFAULT_PAGE_SIZE) -> list[Any]:
    """List every fork of a repository, in the order GitHub returns them."""

    async def _fetch_page(page: int, per_page: int) -> list[Any]:
        result = await github_adapter.list_forks(owner, repo, page=page, per_page=per_page)
        if isinstance(result, ApiFailure):
            raise ForkListingError(f"Couldn't get forks for repository {owner}/{repo}: {result.message}")
        return result.value

    forks = await paginate(_fetch_page, page_size=page_size)
    logger.info("Fetched all forks of repository", owner=owner, repo=repo, total_forks=len(forks))
    return forks


def fork_target_from_repository(repository: Any, branch: str) -> ForkTarget:
    """Build a fork target from a repository returned by the forks listing."""
    return ForkTarget(
        owner=repository.owner.login,
        repo=repository.name,
        branch=branch,
        private=bool(getattr(repository, "private", False)),
    )


async def resolve_fork_targets(link: Link, github_adapter: GitHubClientBase) -> list[ForkTarget]:
    """Produce the ordered list of repositories the link proposes changes to.

    Only the ``fork-all`` strategy calls the API; the other strategies name
    their single target in the link itself.
    """
    if link.upstream is None or link.fork is None or not link.is_complete:
        raise LinkConfigurationError(LINK_INCOMPLETE_MESSAGE)
    upstream, fork = link.upstream, link.fork

    if fork.strategy == ForkStrategy.FORK_ALL:
        repositories = await list_all_forks(github_adapter, upstream.owner, upstream.repo)
        return [fork_target_from_repository(repository, branch=upstream.branch) for repository in repositories]

    return [
        ForkTarget(
            owner=fork.owner,
            repo=fork.repo,
            branch=fork.branch,
            unrelated=fork.strategy == ForkStrategy.UNRELATED_REPO,
        )
    ]

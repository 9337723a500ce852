"""Determines whether a repository declined automatic pull requests."""

import structlog

from backstroke.github.abc import GitHubClientBase
from backstroke.github.results import ApiFailure, ApiFailureKind
from backstroke.synchronize.exceptions import OptOutCheckError, RepositoryNotFoundError
from backstroke.utils.constants import OPT_OUT_LABEL

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def repository_is_missing(failure: ApiFailure) -> bool:
    """Whether a failed call means the repository it targeted does not exist."""
    if failure.kind == ApiFailureKind.NOT_FOUND:
        return True
    return failure.kind == ApiFailureKind.UNPROCESSABLE and failure.has_invalid_field


async def did_repo_opt_out(github_adapter: GitHubClientBase, owner: str, repo: str) -> bool:
    """Check whether a repository has at least one open issue labelled ``optout``.

    The adapter should act as the link owner.
    """
    result = await github_adapter.list_issues_with_label(owner, repo, label=OPT_OUT_LABEL, per_page=1)
    if isinstance(result, ApiFailure):
        if repository_is_missing(result):
            raise RepositoryNotFoundError(owner, repo)
        raise OptOutCheckError(f"Couldn't search issues on repository {owner}/{repo}: {result.message}")
    opted_out = len(result.value) > 0
    logger.debug("Checked repository opt-out status", owner=owner, repo=repo, opted_out=opted_out)
    return opted_out

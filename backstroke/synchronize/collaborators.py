"""Grants the bot user access to private forks."""

import structlog

from backstroke.github.abc import GitHubClientBase
from backstroke.github.results import ApiFailure
from backstroke.synchronize.exceptions import CollaboratorGrantError, RepositoryNotFoundError
from backstroke.synchronize.opt_out import repository_is_missing

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def add_bot_as_collaborator(github_adapter: GitHubClientBase, bot_username: str, owner: str, repo: str) -> None:
    """Add the bot user as a read-only collaborator on a repository.

    Only someone with admin rights on the repository can do this, so
    ``github_adapter`` must act as the link owner, not as the bot.
    """
    logger.info("Adding bot user as a collaborator", bot_username=bot_username, owner=owner, repo=repo)
    result = await github_adapter.add_collaborator(owner, repo, username=bot_username, permission="pull")
    if isinstance(result, ApiFailure):
        if repository_is_missing(result):
            raise RepositoryNotFoundError(owner, repo)
        raise CollaboratorGrantError(f"Couldn't make the {bot_username} bot user a collaborator on {owner}/{repo}: {result.message}")

"""Carries upstream content into repositories that are not forks of the upstream.

A pull request needs its head and base to share a fork network. When the
target of a link is an unrelated repository, the bot user forks the target,
pushes the upstream branch into that copy under a branch named after the
upstream owner, and the pull request is opened from there.
"""

import asyncio
import tempfile
from pathlib import Path
from typing import Any, Callable, ContextManager

import git
import structlog
from git.exc import GitCommandError

from backstroke.configuration.models import BotIdentity
from backstroke.github.abc import GitHubClientBase
from backstroke.github.results import ApiFailure
from backstroke.schemas.link import ForkTarget, Link
from backstroke.synchronize.exceptions import LinkConfigurationError, UnrelatedSyncError
from backstroke.utils.constants import LINK_INCOMPLETE_MESSAGE
from backstroke.utils.github import build_repository_web_url, derive_web_base_url

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TempDirFactory = Callable[..., ContextManager[str]]


class GitTransfer:
    """Clones and pushes repositories with GitPython."""

    def clone(self, url: str, path: Path, branch: str) -> git.Repo:
        """Clone a single branch of a repository into ``path``."""
        return git.Repo.clone_from(url, path, branch=branch, single_branch=True)

    def push(self, repository: git.Repo, url: str, refspec: str) -> None:
        """Push a refspec to a URL without registering a named remote."""
        repository.git.push("--force", url, refspec)


def describe_git_error(exc: GitCommandError, secret: str | None = None) -> str:
    """Reduce a git failure to its stderr, with ``secret`` masked."""
    message = str(exc.stderr or "").strip() or str(exc)
    if message.startswith("stderr:"):
        message = message.removeprefix("stderr:").strip().strip("'")
    if secret:
        message = message.replace(secret, "***")
    return message


class UnrelatedRepoSynchronizer:
    """Pushes an upstream branch into the bot user's copy of an unrelated repository."""

    def __init__(
        self,
        bot_adapter: GitHubClientBase,
        bot: BotIdentity,
        git_transfer: GitTransfer | None = None,
        temp_dir_factory: TempDirFactory = tempfile.TemporaryDirectory,
    ) -> None:
        """Initialize the synchronizer with the bot identity that owns the intermediate copy."""
        self.bot_adapter = bot_adapter
        self.bot = bot
        self.git_transfer = git_transfer or GitTransfer()
        self.temp_dir_factory = temp_dir_factory
        self.web_base_url = derive_web_base_url(bot.github_api_url)

    async def synchronize(self, link: Link, fork: ForkTarget) -> str:
        """Transfer the link's upstream branch into the bot's copy of ``fork``.

        Returns:
            The head (``bot:branch``) to open the pull request from.

        Raises:
            UnrelatedSyncError: If the bot copy could not be created or pushed to.
        """
        upstream = link.upstream
        if upstream is None or not upstream.is_complete:
            raise LinkConfigurationError(LINK_INCOMPLETE_MESSAGE)
        target_branch = upstream.owner

        logger.info("Ensuring bot user has a copy of the repository", owner=fork.owner, repo=fork.repo, bot_username=self.bot.username)
        result = await self.bot_adapter.create_fork(fork.owner, fork.repo)
        if isinstance(result, ApiFailure):
            raise UnrelatedSyncError(f"Couldn't fork {fork.full_name} into {self.bot.username}: {result.message}")
        bot_repo = getattr(result.value, "name", None) or fork.repo

        upstream_url = build_repository_web_url(self.web_base_url, upstream.owner, upstream.repo)
        push_url = build_repository_web_url(self.web_base_url, self.bot.username, bot_repo, token=self.bot.token)
        await asyncio.to_thread(
            self._transfer,
            upstream_url=upstream_url,
            push_url=push_url,
            source_branch=upstream.branch,
            target_branch=target_branch,
        )
        return f"{self.bot.username}:{target_branch}"

    def _transfer(self, upstream_url: str, push_url: str, source_branch: str, target_branch: str) -> None:
        """Clone the upstream into a temporary directory and push it onward; the directory never outlives the call."""
        with self.temp_dir_factory(prefix="backstroke-") as working_directory:
            logger.info("Cloning upstream", url=upstream_url, branch=source_branch, working_directory=str(working_directory))
            try:
                repository: Any = self.git_transfer.clone(upstream_url, Path(working_directory), branch=source_branch)
            except GitCommandError as exc:
                raise UnrelatedSyncError(f"Error received while cloning {upstream_url}: {describe_git_error(exc)}") from exc
            refspec = f"refs/heads/{source_branch}:refs/heads/{target_branch}"
            logger.info("Pushing upstream into bot copy", bot_username=self.bot.username, refspec=refspec)
            try:
                self.git_transfer.push(repository, push_url, refspec)
            except GitCommandError as exc:
                raise UnrelatedSyncError(
                    f"Error received while pushing {self.bot.username}/{target_branch}: {describe_git_error(exc, self.bot.token)}"
                ) from exc

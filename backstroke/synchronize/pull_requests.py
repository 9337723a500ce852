"""Contains logic for proposing upstream changes to a fork as a pull request."""

from typing import Awaitable, Callable

import structlog

from backstroke.configuration.models import BotIdentity
from backstroke.github.abc import GitHubClientBase
from backstroke.github.results import ApiFailure, ApiFailureKind
from backstroke.schemas.link import ForkStrategy, ForkTarget, Link, User
from backstroke.synchronize.collaborators import add_bot_as_collaborator
from backstroke.synchronize.exceptions import LinkConfigurationError, OptedOutError, PullRequestCreationError
from backstroke.synchronize.opt_out import did_repo_opt_out
from backstroke.utils.constants import LINK_INCOMPLETE_MESSAGE, OPTED_OUT_MESSAGE, PULL_REQUEST_BODY_TEMPLATE, PULL_REQUEST_TITLE_TEMPLATE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

UserAdapterFactory = Callable[[User], Awaitable[GitHubClientBase]]
OptOutCheck = Callable[[GitHubClientBase, str, str], Awaitable[bool]]
CollaboratorGrant = Callable[[GitHubClientBase, str, str, str], Awaitable[None]]


def generate_pull_request_title(owner: str, repo: str, branch: str) -> str:
    """Generate the title of a pull request proposing changes from an upstream branch."""
    return PULL_REQUEST_TITLE_TEMPLATE.format(owner=owner, repo=repo, branch=branch)


def generate_pull_request_body(owner: str, repo: str, branch: str) -> str:
    """Generate the body of a pull request proposing changes from an upstream branch."""
    return PULL_REQUEST_BODY_TEMPLATE.format(owner=owner, repo=repo, branch=branch)


class PullRequestIssuer:
    """Opens pull requests from an upstream onto forks, as the bot user.

    Opt-out checks and collaborator grants act with the link owner's
    credential, obtained through ``user_adapter_factory``; the pull request
    itself is always created by ``bot_adapter``.
    """

    def __init__(
        self,
        bot_adapter: GitHubClientBase,
        bot: BotIdentity,
        user_adapter_factory: UserAdapterFactory,
        opt_out_check: OptOutCheck = did_repo_opt_out,
        collaborator_grant: CollaboratorGrant = add_bot_as_collaborator,
    ) -> None:
        """Initialize the issuer with the bot identity it acts as."""
        self.bot_adapter = bot_adapter
        self.bot = bot
        self.user_adapter_factory = user_adapter_factory
        self.opt_out_check = opt_out_check
        self.collaborator_grant = collaborator_grant

    async def create_pull_request(self, user: User, link: Link, fork: ForkTarget, head: str | None = None) -> str:
        """Propose the link's upstream branch to a fork.

        Args:
            user: Owner of the link.
            link: The link being synced.
            fork: Repository receiving the pull request.
            head: Head of the pull request. Defaults to ``upstreamOwner:upstreamBranch``.

        Returns:
            A message describing the pull request, which may already have existed.

        Raises:
            OptedOutError: If the fork opted out of automatic pull requests.
            RepositoryNotFoundError: If the fork does not exist.
            PullRequestCreationError: If GitHub rejected the pull request for any other reason.
        """
        upstream = link.upstream
        if upstream is None or link.fork is None:
            raise LinkConfigurationError(LINK_INCOMPLETE_MESSAGE)

        user_adapter = await self.user_adapter_factory(user)
        if await self.opt_out_check(user_adapter, fork.owner, fork.repo):
            logger.info("Repository opted out of pull requests", owner=fork.owner, repo=fork.repo)
            raise OptedOutError(OPTED_OUT_MESSAGE)

        if fork.private:
            logger.info(
                "Fork is private, adding bot user as a collaborator before proposing changes",
                owner=fork.owner,
                repo=fork.repo,
                bot_username=self.bot.username,
            )
            await self.collaborator_grant(user_adapter, self.bot.username, fork.owner, fork.repo)

        # Under fork-all every fork is kept aligned with the upstream branch name.
        base = upstream.branch if link.fork.strategy == ForkStrategy.FORK_ALL else fork.branch
        head = head or f"{upstream.owner}:{upstream.branch}"
        logger.info("Creating pull request", owner=fork.owner, repo=fork.repo, head=head, base=base)
        result = await self.bot_adapter.create_pull_request(
            fork.owner,
            fork.repo,
            title=generate_pull_request_title(upstream.owner, upstream.repo, upstream.branch),
            head=head,
            base=base,
            body=generate_pull_request_body(upstream.owner, upstream.repo, upstream.branch),
            maintainer_can_modify=False,
        )
        if isinstance(result, ApiFailure):
            if result.kind == ApiFailureKind.UNPROCESSABLE:
                logger.info(
                    "Pull request already exists",
                    owner=fork.owner,
                    repo=fork.repo,
                    upstream_owner=upstream.owner,
                    upstream_repo=upstream.repo,
                )
                return f"There's already a pull request on {fork.full_name}"
            raise PullRequestCreationError(f"Couldn't create pull request on repository {fork.full_name}: {result.message}")

        logger.info("Created pull request", owner=fork.owner, repo=fork.repo)
        return f"Successfully created pull request on {fork.full_name}"

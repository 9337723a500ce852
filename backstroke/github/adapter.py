"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestError, RequestFailed, RequestTimeout
from githubkit.versions.latest.models import FullRepository, Issue, MinimalRepository, PullRequest, RateLimitOverview

from backstroke.utils.constants import DEFAULT_GITHUB_API_TIMEOUT, DEFAULT_GITHUB_API_URL

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_token_client
from .results import ApiFailure, ApiFailureKind, ApiResult, ApiSuccess

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _classify_status_code(status_code: int) -> ApiFailureKind:
    if status_code == 422:
        return ApiFailureKind.UNPROCESSABLE
    if status_code == 404:
        return ApiFailureKind.NOT_FOUND
    return ApiFailureKind.ERROR


def wrap_github_result(func: F) -> F:
    """Decorator that turns a githubkit call into an ``ApiResult``.

    ``RequestFailed`` (a non-2xx answer) and ``RequestError`` (timeouts and
    transport failures) become an ``ApiFailure``; anything else propagates.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ApiResult[Any]:
        try:
            return ApiSuccess(await func(*args, **kwargs))
        except RequestFailed as exc:
            status_code = exc.response.status_code
            try:
                error_data = exc.response.json()
            except Exception:
                error_data = {}
            if not isinstance(error_data, dict):
                error_data = {}
            message = error_data.get("message") or str(exc)
            errors = error_data.get("errors", [])
            logger.warning(
                "GitHub request failed",
                function=func.__name__,
                message=message,
                errors=errors,
                url=str(getattr(exc.response, "url", None)),
                status_code=status_code,
            )
            return ApiFailure(kind=_classify_status_code(status_code), message=message, status_code=status_code, errors=errors)
        except (RequestError, RequestTimeout) as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("GitHub request did not complete", function=func.__name__, error=message, error_type=type(exc).__name__)
            return ApiFailure(kind=ApiFailureKind.ERROR, message=message)

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library.

    Unlike a repository-scoped client, one adapter acts for one credential
    across many repositories, so every call names its target repository.
    """

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    async def create(
        cls,
        token: str,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_GITHUB_API_TIMEOUT,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            token: OAuth or personal access token to act with
            github_api_url: GitHub API URL (defaults to https://api.github.com)
            timeout: Seconds allowed per request

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.debug("Creating client for GitHub instance", github_api_url=github_api_url, timeout=timeout)
        client = await get_github_token_client(token=token, github_api_url=github_api_url, timeout=timeout)
        return cls(client)

    # Repository operations
    @wrap_github_result
    async def list_forks(self, owner: str, repo: str, page: int = 1, per_page: int = 100, **kwargs: Any) -> list[MinimalRepository]:
        """List one page of forks of a repository."""
        response: Response[list[MinimalRepository]] = await self.client.rest.repos.async_list_forks(
            owner=owner,
            repo=repo,
            page=page,
            per_page=per_page,
            **kwargs,
        )
        return response.parsed_data

    @wrap_github_result
    async def create_fork(self, owner: str, repo: str, **kwargs: Any) -> FullRepository:
        """Fork a repository into the authenticated user's account.

        GitHub answers with the existing fork when one is already present.
        """
        response: Response[FullRepository] = await self.client.rest.repos.async_create_fork(owner=owner, repo=repo, **kwargs)
        return response.parsed_data

    @wrap_github_result
    async def add_collaborator(self, owner: str, repo: str, username: str, permission: str = "pull") -> None:
        """Add a user as a collaborator on a repository."""
        await self.client.rest.repos.async_add_collaborator(owner=owner, repo=repo, username=username, permission=permission)

    # Issue operations
    @wrap_github_result
    async def list_issues_with_label(self, owner: str, repo: str, label: str, per_page: int = 1) -> list[Issue]:
        """List open issues of a repository carrying a label."""
        response: Response[list[Issue]] = await self.client.rest.issues.async_list_for_repo(
            owner=owner,
            repo=repo,
            labels=label,
            state="open",
            per_page=per_page,
        )
        return response.parsed_data

    # Pull Request operations
    @wrap_github_result
    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        maintainer_can_modify: bool | None = None,
        **kwargs: Any,
    ) -> PullRequest:
        """Create a pull request on a repository."""
        params = self._omit_null_parameters(
            title=title,
            head=head,
            base=base,
            body=body,
            maintainer_can_modify=maintainer_can_modify,
            **kwargs,
        )
        response: Response[PullRequest] = await self.client.rest.pulls.async_create(owner=owner, repo=repo, **params)
        return response.parsed_data

    # Account operations
    @wrap_github_result
    async def get_rate_limit_remaining(self) -> int:
        """Get the number of core API requests left for the authenticated user."""
        response: Response[RateLimitOverview] = await self.client.rest.rate_limit.async_get()
        return response.parsed_data.resources.core.remaining

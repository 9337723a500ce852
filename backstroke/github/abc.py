"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any

from .results import ApiResult


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients.

    Methods never raise for API failures; they resolve to an ``ApiResult``.
    """

    # Repository operations
    @abstractmethod
    async def list_forks(self, owner: str, repo: str, page: int = 1, per_page: int = 100, **kwargs: Any) -> ApiResult[list[Any]]:
        """List one page of forks of a repository."""
        pass

    @abstractmethod
    async def create_fork(self, owner: str, repo: str, **kwargs: Any) -> ApiResult[Any]:
        """Fork a repository into the authenticated user's account."""
        pass

    @abstractmethod
    async def add_collaborator(self, owner: str, repo: str, username: str, permission: str = "pull") -> ApiResult[None]:
        """Add a user as a collaborator on a repository."""
        pass

    # Issue operations
    @abstractmethod
    async def list_issues_with_label(self, owner: str, repo: str, label: str, per_page: int = 1) -> ApiResult[list[Any]]:
        """List open issues of a repository carrying a label."""
        pass

    # Pull Request operations
    @abstractmethod
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
    ) -> ApiResult[Any]:
        """Create a pull request on a repository."""
        pass

    # Account operations
    @abstractmethod
    async def get_rate_limit_remaining(self) -> ApiResult[int]:
        """Get the number of core API requests left for the authenticated user."""
        pass

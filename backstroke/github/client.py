"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from backstroke.utils.constants import DEFAULT_GITHUB_API_TIMEOUT, DEFAULT_GITHUB_API_URL

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_token_client(
    token: str,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    timeout: float = DEFAULT_GITHUB_API_TIMEOUT,
) -> GitHubClient:
    """Returns a GitHub client authenticated with an OAuth or personal access token.

    Every request made by the client gives up after ``timeout`` seconds.
    """
    if not token:
        raise RuntimeError("GitHub token authentication requires a token.")
    # Disable HTTP caching to always get fresh data, and never resend a failed request
    return GitHub(auth=TokenAuthStrategy(token), base_url=github_api_url, http_cache=False, auto_retry=False, timeout=timeout)

"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass

from backstroke.utils.constants import DEFAULT_GITHUB_API_TIMEOUT, DEFAULT_GITHUB_API_URL


@dataclass(frozen=True)
class BotIdentity:
    """Credential and username of the machine user that proposes pull requests."""

    username: str
    token: str
    github_api_url: str = DEFAULT_GITHUB_API_URL
    timeout: float = DEFAULT_GITHUB_API_TIMEOUT

    def __repr__(self) -> str:
        """Keep the token out of logs and tracebacks."""
        return f"BotIdentity(username={self.username!r}, github_api_url={self.github_api_url!r}, timeout={self.timeout!r})"

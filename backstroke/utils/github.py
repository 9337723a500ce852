"""Contains utility functions for GitHub interactions."""


def derive_web_base_url(github_api_url: str) -> str:
    """Derive the web (and git over HTTPS) base URL from a GitHub API URL.

    e.g., "https://api.github.com" -> "https://github.com"
    or "https://github.example.com/api/v3" -> "https://github.example.com"
    """
    if "api.github.com" in github_api_url:
        return "https://github.com"
    # For GitHub Enterprise, remove /api/v3 suffix
    return github_api_url.rstrip("/").replace("/api/v3", "").replace("/api", "")


def build_repository_web_url(web_base_url: str, owner: str, repo: str, token: str | None = None) -> str:
    """Build the HTTPS URL of a repository, optionally carrying a token for git authentication."""
    base = web_base_url.rstrip("/")
    if token:
        scheme, _, host = base.partition("://")
        base = f"{scheme}://x-access-token:{token}@{host}"
    return f"{base}/{owner}/{repo}"

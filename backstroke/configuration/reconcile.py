"""Reconcile bot identity configuration."""

from backstroke.configuration.exceptions import BotCredentialNotConfiguredError
from backstroke.configuration.models import BotIdentity
from backstroke.utils.constants import DEFAULT_BOT_USERNAME, DEFAULT_GITHUB_API_TIMEOUT, DEFAULT_GITHUB_API_URL


async def validate_bot_configuration(
    github_token: str | None,
    github_bot_username: str | None = None,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    github_api_timeout: float = DEFAULT_GITHUB_API_TIMEOUT,
) -> BotIdentity:
    """Validates the bot identity configuration.

    Args:
        github_token (str | None): Token of the bot user.
        github_bot_username (str | None): Username of the bot user. Falls back to the default bot username.
        github_api_url (str): Base URL of the GitHub API.
        github_api_timeout (float): Seconds allowed per GitHub API call.

    Raises:
        BotCredentialNotConfiguredError: If no token is configured.
        ValueError: If the timeout is not positive.

    Returns:
        BotIdentity: The validated bot identity.
    """
    if not github_token:
        raise BotCredentialNotConfiguredError()
    if github_api_timeout <= 0:
        raise ValueError(f"GitHub API timeout must be positive, got {github_api_timeout}")
    return BotIdentity(
        username=github_bot_username or DEFAULT_BOT_USERNAME,
        token=github_token,
        github_api_url=github_api_url,
        timeout=github_api_timeout,
    )

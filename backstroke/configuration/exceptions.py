"""Contains exceptions raised when reconciling application configuration."""


class BotCredentialNotConfiguredError(Exception):
    """Raised when the bot identity has no token to authenticate with."""

    def __init__(self, env_name: str = "GITHUB_TOKEN") -> None:
        """Initializes the exception with the name of the missing environment variable."""
        super().__init__(f"Bot credential not configured - set the {env_name} environment variable or pass --github-token.")
        self.env_name = env_name

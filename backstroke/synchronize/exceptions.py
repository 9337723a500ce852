"""Custom exceptions for the synchronize module.

The message of each exception is what ends up in the job's outcome record, so
messages are complete sentences naming the repository involved.
"""


class ForkSyncError(Exception):
    """Base class for failures while syncing a link."""

    pass


class LinkConfigurationError(ForkSyncError):
    """Raised when a link cannot be acted upon as configured."""

    pass


class OptedOutError(ForkSyncError):
    """Raised when the target repository declined automatic pull requests."""

    pass


class RepositoryNotFoundError(ForkSyncError):
    """Raised when the target repository does not exist."""

    def __init__(self, owner: str, repo: str) -> None:
        """Initializes the exception with the missing repository."""
        super().__init__(f"Repository {owner}/{repo} doesn't exist.")
        self.owner = owner
        self.repo = repo


class OptOutCheckError(ForkSyncError):
    """Raised when the opt-out status of a repository could not be determined."""

    pass


class CollaboratorGrantError(ForkSyncError):
    """Raised when the bot user could not be added as a collaborator."""

    pass


class PullRequestCreationError(ForkSyncError):
    """Raised when a pull request could not be created."""

    pass


class ForkListingError(ForkSyncError):
    """Raised when the forks of the upstream could not be listed."""

    pass


class UnrelatedSyncError(ForkSyncError):
    """Raised when upstream content could not be transferred to the bot's copy of an unrelated repository."""

    pass

"""Unit tests for granting the bot user access to private forks."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from backstroke.github.results import ApiFailure, ApiFailureKind, ApiSuccess
from backstroke.synchronize.collaborators import add_bot_as_collaborator
from backstroke.synchronize.exceptions import CollaboratorGrantError, RepositoryNotFoundError


@pytest.mark.asyncio
async def test_add_bot_as_collaborator_success() -> None:
    """Test that the bot user is added with read permission."""
    adapter = MagicMock()
    adapter.add_collaborator = AsyncMock(return_value=ApiSuccess(None))
    await add_bot_as_collaborator(adapter, "backstroke-bot", "foo", "bar")
    adapter.add_collaborator.assert_awaited_once_with("foo", "bar", username="backstroke-bot", permission="pull")


@pytest.mark.asyncio
async def test_add_bot_as_collaborator_not_found() -> None:
    """Test that a missing repository is reported as such."""
    adapter = MagicMock()
    adapter.add_collaborator = AsyncMock(return_value=ApiFailure(kind=ApiFailureKind.NOT_FOUND, message="Not Found", status_code=404))
    with pytest.raises(RepositoryNotFoundError, match="Repository foo/bar doesn't exist."):
        await add_bot_as_collaborator(adapter, "backstroke-bot", "foo", "bar")


@pytest.mark.asyncio
async def test_add_bot_as_collaborator_forbidden() -> None:
    """Test that other failures name the bot user and the repository."""
    adapter = MagicMock()
    adapter.add_collaborator = AsyncMock(return_value=ApiFailure(kind=ApiFailureKind.ERROR, message="Must have admin rights", status_code=403))
    with pytest.raises(CollaboratorGrantError) as exc_info:
        await add_bot_as_collaborator(adapter, "backstroke-bot", "foo", "bar")
    assert str(exc_info.value) == "Couldn't make the backstroke-bot bot user a collaborator on foo/bar: Must have admin rights"

"""Fixtures for unit tests."""

from typing import Any, Generator

import pytest
import structlog

from backstroke.configuration.models import BotIdentity


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def bot() -> BotIdentity:
    """Bot identity used to open pull requests."""
    return BotIdentity(username="backstroke-bot", token="BOT TOKEN", github_api_url="https://api.github.com", timeout=5.0)


@pytest.fixture
def user_payload() -> dict[str, Any]:
    """Owner of a link, as it arrives on the queue."""
    return {
        "id": 1,
        "username": "1egoman",
        "email": None,
        "githubId": "1704236",
        "accessToken": "ACCESS TOKEN",
        "publicScope": False,
        "createdAt": "2017-08-09T12:00:36.000Z",
    }


@pytest.fixture
def link_payload() -> dict[str, Any]:
    """Enabled single-fork link in the flat layout used by the web application."""
    return {
        "id": 8,
        "name": "My Link",
        "enabled": True,
        "webhookId": "37948270678a440a97db01ebe71ddda2",
        "lastSyncedAt": "2017-08-17T11:37:22.999Z",
        "upstreamType": "repo",
        "upstreamOwner": "1egoman",
        "upstreamRepo": "backstroke",
        "upstreamIsFork": None,
        "upstreamBranches": '["inject","master"]',
        "upstreamBranch": "master",
        "forkType": "repo",
        "forkOwner": "rgaus",
        "forkRepo": "backstroke",
        "forkBranches": '["master"]',
        "forkBranch": "master",
        "ownerId": 1,
    }


@pytest.fixture
def job_payload(user_payload: dict[str, Any], link_payload: dict[str, Any]) -> dict[str, Any]:
    """Manual sync job for the single-fork link."""
    return {"type": "MANUAL", "user": user_payload, "link": link_payload}

"""Pydantic schema for links, users and the sync jobs that carry them."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model reading and writing the camelCase wire format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ForkStrategy(str, Enum):
    """Enum for the ways a link resolves the fork(s) it proposes changes to."""

    SINGLE_FORK = "repo"
    FORK_ALL = "fork-all"
    UNRELATED_REPO = "unrelated-repo"


class RepositoryDescriptor(CamelModel):
    """Pydantic model for a branch of a repository."""

    owner: str | None = None
    repo: str | None = None
    branch: str | None = None

    @property
    def is_complete(self) -> bool:
        """Whether owner, repository and branch are all set."""
        return bool(self.owner and self.repo and self.branch)


class ForkDescriptor(RepositoryDescriptor):
    """Pydantic model for the fork side of a link.

    Owner, repository and branch stay empty under the ``fork-all`` strategy.
    """

    strategy: ForkStrategy | None = None

    @field_validator("strategy", mode="before")
    @classmethod
    def drop_unknown_strategy(cls, value: Any) -> Any:
        """Read a strategy this worker does not know as no strategy at all."""
        if value is None or isinstance(value, ForkStrategy):
            return value
        try:
            return ForkStrategy(value)
        except (TypeError, ValueError):
            return None

    @property
    def is_complete(self) -> bool:
        """Whether the descriptor carries everything its strategy needs."""
        if self.strategy is None:
            return False
        if self.strategy == ForkStrategy.FORK_ALL:
            return True
        return super().is_complete


# Flat field names used by the legacy web application, mapped onto the
# nested descriptor fields.
_FLAT_UPSTREAM_FIELDS = {"upstreamOwner": "owner", "upstreamRepo": "repo", "upstreamBranch": "branch"}
_FLAT_FORK_FIELDS = {"forkType": "strategy", "forkOwner": "owner", "forkRepo": "repo", "forkBranch": "branch"}


class Link(CamelModel):
    """Pydantic model for a link between an upstream and its fork(s)."""

    id: int | str
    name: str | None = None
    enabled: bool = False
    upstream: RepositoryDescriptor | None = None
    fork: ForkDescriptor | None = None
    owner_id: int | str | None = None
    webhook_id: str | None = None
    last_synced_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def nest_flat_descriptors(cls, data: Any) -> Any:
        """Accept the flat ``upstreamOwner``/``forkType``/... layout as well as nested descriptors."""
        if not isinstance(data, dict):
            return data
        flat_keys = set(_FLAT_UPSTREAM_FIELDS) | set(_FLAT_FORK_FIELDS)
        if not flat_keys & data.keys():
            return data
        data = dict(data)
        if "upstream" not in data:
            upstream = {field: data.pop(key) for key, field in _FLAT_UPSTREAM_FIELDS.items() if key in data}
            data["upstream"] = upstream if any(value is not None for value in upstream.values()) else None
        if "fork" not in data:
            fork = {field: data.pop(key) for key, field in _FLAT_FORK_FIELDS.items() if key in data}
            data["fork"] = fork if any(value is not None for value in fork.values()) else None
        return data

    @property
    def is_complete(self) -> bool:
        """Whether both the upstream and the fork are fully described."""
        return self.upstream is not None and self.upstream.is_complete and self.fork is not None and self.fork.is_complete


class User(CamelModel):
    """Pydantic model for the owner of a link.

    Only its access token is used, to act on the owner's behalf.
    """

    id: int | str | None = None
    username: str | None = None
    access_token: str | None = Field(default=None, repr=False)


class SyncJob(CamelModel):
    """Pydantic model for a queued request to sync one link."""

    type: str = "MANUAL"
    user: User
    link: Link
    from_request: str | None = None


class ForkTarget(CamelModel):
    """Pydantic model for a repository a pull request is proposed to."""

    owner: str
    repo: str
    branch: str
    private: bool = False
    unrelated: bool = False

    @property
    def full_name(self) -> str:
        """The repository in 'owner/repo' form."""
        return f"{self.owner}/{self.repo}"

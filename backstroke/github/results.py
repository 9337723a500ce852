"""Result types returned by the GitHub adapter instead of raising.

Every adapter call resolves to either an ``ApiSuccess`` carrying the parsed
payload or an ``ApiFailure`` describing what went wrong, so callers branch on
the failure kind rather than on exception classes or raw status codes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")


class ApiFailureKind(str, Enum):
    """Enum for the kinds of failures the adapter distinguishes."""

    UNPROCESSABLE = "unprocessable"
    """HTTP 422. When creating a pull request this means one is already open."""

    NOT_FOUND = "not_found"
    """HTTP 404."""

    ERROR = "error"
    """Any other HTTP status, a timeout, or a transport failure."""


@dataclass(frozen=True)
class ApiSuccess(Generic[T]):
    """A call that completed and returned data."""

    value: T


@dataclass(frozen=True)
class ApiFailure:
    """A call that failed."""

    kind: ApiFailureKind
    message: str
    status_code: int | None = None
    errors: list[Any] = field(default_factory=list)

    @property
    def has_invalid_field(self) -> bool:
        """Whether GitHub flagged one of the request fields with the ``invalid`` error code."""
        return any(isinstance(error, dict) and error.get("code") == "invalid" for error in self.errors)


ApiResult: TypeAlias = ApiSuccess[T] | ApiFailure

"""Contains results of processing a sync job."""

from enum import Enum
from typing import Any, Literal

from pydantic import Field

from backstroke.schemas.link import CamelModel


class OutcomeStatus(str, Enum):
    """Enum for the status of a processed job."""

    OK = "OK"
    ERROR = "ERROR"


class ForkFailure(CamelModel):
    """A pull request attempt on one fork of a fan-out that failed."""

    status: OutcomeStatus = OutcomeStatus.ERROR
    error: str


class ForkMetrics(CamelModel):
    """Counters of a fan-out over all forks."""

    total: int = 0
    successes: int = 0


class SingleForkOutput(CamelModel):
    """Output of a job that proposed a pull request to a single fork."""

    is_enabled: bool = True
    many: Literal[False] = False
    unrelated_forks: bool | None = None
    fork_count: int = 1
    response: str


class ManyForksOutput(CamelModel):
    """Output of a job that proposed pull requests to every fork of the upstream."""

    many: Literal[True] = True
    metrics: ForkMetrics = Field(default_factory=ForkMetrics)
    errors: list[ForkFailure] = Field(default_factory=list)
    is_enabled: bool = True


class ErrorOutput(CamelModel):
    """Output of a job that could not run."""

    error: str


class OutcomeRecord(CamelModel):
    """The single record written to the status store for each processed job."""

    status: OutcomeStatus
    output: SingleForkOutput | ManyForksOutput | ErrorOutput
    from_request: str | None = None

    @classmethod
    def error(cls, message: str, from_request: str | None = None) -> "OutcomeRecord":
        """Build an ``ERROR`` record carrying a message."""
        return cls(status=OutcomeStatus.ERROR, output=ErrorOutput(error=message), from_request=from_request)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to ``{status, output, fromRequest?}`` with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

"""Orchestrates processing of queued sync jobs.

One call to ``process_batch`` claims one job, interprets its link, proposes
the pull request(s) and records exactly one outcome for it. Jobs are handled
one after another, and the forks of a fan-out are visited one after another
in listing order so opt-in checks stay ordered and outbound requests never
burst past rate limits.
"""

import time
from typing import Any, Awaitable, Callable

import structlog
from structlog.contextvars import bound_contextvars

from backstroke.configuration.models import BotIdentity
from backstroke.github.abc import GitHubClientBase
from backstroke.github.adapter import GitHubKitAdapter
from backstroke.jobs.abc import JobQueue, QueuedJob, StatusStore
from backstroke.jobs.memory import InMemoryJobQueue, InMemoryStatusStore
from backstroke.schemas.link import ForkStrategy, ForkTarget, SyncJob, User
from backstroke.synchronize.exceptions import LinkConfigurationError
from backstroke.synchronize.forks import resolve_fork_targets
from backstroke.synchronize.pull_requests import PullRequestIssuer, UserAdapterFactory
from backstroke.synchronize.results import (
    ForkFailure,
    ForkMetrics,
    ManyForksOutput,
    OutcomeRecord,
    OutcomeStatus,
    SingleForkOutput,
)
from backstroke.synchronize.unrelated import UnrelatedRepoSynchronizer
from backstroke.utils.constants import LINK_INCOMPLETE_MESSAGE, LINK_NOT_ENABLED_MESSAGE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

OptInCheck = Callable[[GitHubClientBase, str, str], Awaitable[bool]]


def _raw_link_id(data: Any) -> int | str | None:
    """Read the link identity from a job payload that may not validate."""
    link = data.get("link") if isinstance(data, dict) else None
    if isinstance(link, dict) and isinstance(link.get("id"), (int, str)):
        return link["id"]
    return None


def _raw_from_request(data: Any) -> str | None:
    """Read the caller's correlation identifier from a job payload that may not validate."""
    from_request = data.get("fromRequest") if isinstance(data, dict) else None
    return from_request if isinstance(from_request, str) else None


def _describe_fork_failure(fork: ForkTarget, exc: Exception) -> str:
    """Make sure a fan-out failure names the fork it happened on."""
    message = str(exc) or type(exc).__name__
    if fork.full_name in message:
        return message
    return f"{fork.full_name}: {message}"


async def propose_to_all_forks(
    job: SyncJob,
    forks: list[ForkTarget],
    issuer: PullRequestIssuer,
    user_adapter: GitHubClientBase,
    opt_in_check: OptInCheck | None = None,
) -> ManyForksOutput:
    """Propose the upstream to every fork in order, collecting failures instead of stopping."""
    metrics = ForkMetrics()
    errors: list[ForkFailure] = []
    for fork in forks:
        with bound_contextvars(fork=fork.full_name):
            try:
                if opt_in_check is not None and not await opt_in_check(user_adapter, fork.owner, fork.repo):
                    logger.info("Fork did not opt in to pull requests, skipping")
                    continue
                response = await issuer.create_pull_request(job.user, job.link, fork)
            except Exception as exc:
                metrics.total += 1
                logger.warning("Failed to propose changes to fork", error=str(exc), error_type=type(exc).__name__)
                errors.append(ForkFailure(error=_describe_fork_failure(fork, exc)))
                continue
            metrics.total += 1
            metrics.successes += 1
            logger.info("Proposed changes to fork", response=response)
    logger.info("Proposed changes to all forks", total=metrics.total, successes=metrics.successes, failures=len(errors))
    return ManyForksOutput(metrics=metrics, errors=errors, is_enabled=job.link.enabled)


async def interpret_job(
    job: SyncJob,
    issuer: PullRequestIssuer,
    user_adapter_factory: UserAdapterFactory,
    opt_in_check: OptInCheck | None = None,
    synchronizer: UnrelatedRepoSynchronizer | None = None,
) -> OutcomeRecord:
    """Carry out a job according to its link's fork strategy.

    Configuration problems become an ``ERROR`` record; failures while acting
    on a single target are raised to the caller.
    """
    link = job.link
    if not link.enabled:
        logger.info("Link is disabled, nothing to do")
        return OutcomeRecord.error(LINK_NOT_ENABLED_MESSAGE)
    if not link.is_complete or link.fork is None:
        logger.info("Link is missing an upstream or a fork")
        return OutcomeRecord.error(LINK_INCOMPLETE_MESSAGE)

    user_adapter = await user_adapter_factory(job.user)
    forks = await resolve_fork_targets(link, user_adapter)
    strategy = link.fork.strategy
    logger.info("Resolved fork targets", strategy=strategy.value if strategy else None, fork_count=len(forks))

    if strategy == ForkStrategy.FORK_ALL:
        output = await propose_to_all_forks(job, forks, issuer, user_adapter, opt_in_check=opt_in_check)
        return OutcomeRecord(status=OutcomeStatus.OK, output=output)

    (fork,) = forks
    if strategy == ForkStrategy.UNRELATED_REPO:
        if synchronizer is None:
            raise LinkConfigurationError("This worker is not configured to sync unrelated repositories.")
        head = await synchronizer.synchronize(link, fork)
        response = await issuer.create_pull_request(job.user, link, fork, head=head)
        return OutcomeRecord(
            status=OutcomeStatus.OK,
            output=SingleForkOutput(is_enabled=link.enabled, unrelated_forks=True, response=response),
        )

    response = await issuer.create_pull_request(job.user, link, fork)
    return OutcomeRecord(status=OutcomeStatus.OK, output=SingleForkOutput(is_enabled=link.enabled, response=response))


async def _record_outcome(status_store: StatusStore, queued: QueuedJob, link_id: int | str | None, record: OutcomeRecord) -> None:
    try:
        await status_store.set(queued.id, record)
        if link_id is not None:
            await status_store.attach_to_link(link_id, queued.id)
    except Exception as exc:
        logger.error("Failed to record job outcome", error=str(exc), error_type=type(exc).__name__, status=record.status.value)


async def process_batch(
    queue: JobQueue,
    status_store: StatusStore,
    issuer: PullRequestIssuer,
    user_adapter_factory: UserAdapterFactory,
    opt_in_check: OptInCheck | None = None,
    synchronizer: UnrelatedRepoSynchronizer | None = None,
) -> OutcomeRecord | None:
    """Claim one job from the queue, process it and record its outcome.

    Args:
        queue: Queue to claim the job from.
        status_store: Store the outcome is written to.
        issuer: Creates the pull requests, as the bot user.
        user_adapter_factory: Builds a GitHub adapter acting as a job's user.
        opt_in_check: Under ``fork-all``, forks for which this returns False are skipped.
        synchronizer: Required for links whose fork is an unrelated repository.

    Returns:
        The recorded outcome, or None when the queue was empty. Never raises.
    """
    try:
        queued = await queue.pop()
    except Exception as exc:
        logger.error("Failed to claim a job from the queue", error=str(exc), error_type=type(exc).__name__)
        return None
    if queued is None:
        logger.debug("No job waiting on the queue")
        return None

    link_id = _raw_link_id(queued.data)
    with bound_contextvars(job_id=queued.id, link_id=link_id):
        start_time = time.time()
        logger.info("Processing job", job_type=queued.data.get("type") if isinstance(queued.data, dict) else None)
        try:
            job = SyncJob.model_validate(queued.data)
            record = await interpret_job(
                job,
                issuer,
                user_adapter_factory,
                opt_in_check=opt_in_check,
                synchronizer=synchronizer,
            )
        except Exception as exc:
            logger.error("Job failed", error=str(exc), error_type=type(exc).__name__)
            record = OutcomeRecord.error(str(exc))
        record.from_request = _raw_from_request(queued.data)

        await _record_outcome(status_store, queued, link_id, record)
        logger.info("Processed job", status=record.status.value, duration=round(time.time() - start_time, 2))
    return record


async def drain_queue(
    queue: JobQueue,
    status_store: StatusStore,
    issuer: PullRequestIssuer,
    user_adapter_factory: UserAdapterFactory,
    opt_in_check: OptInCheck | None = None,
    synchronizer: UnrelatedRepoSynchronizer | None = None,
) -> list[OutcomeRecord]:
    """Process jobs one at a time until the queue is empty, returning their outcomes in order."""
    records: list[OutcomeRecord] = []
    while True:
        record = await process_batch(
            queue,
            status_store,
            issuer,
            user_adapter_factory,
            opt_in_check=opt_in_check,
            synchronizer=synchronizer,
        )
        if record is None:
            return records
        records.append(record)


def build_user_adapter_factory(github_api_url: str, timeout: float) -> UserAdapterFactory:
    """Build a factory of GitHub adapters acting as the owner of a link."""

    async def create_user_adapter(user: User) -> GitHubClientBase:
        if not user.access_token:
            raise LinkConfigurationError("The owner of this link has no access token.")
        return await GitHubKitAdapter.create(token=user.access_token, github_api_url=github_api_url, timeout=timeout)

    return create_user_adapter


async def run_sync_jobs_workflow(
    jobs: list[dict[str, Any]],
    bot: BotIdentity,
    queue: JobQueue | None = None,
    status_store: StatusStore | None = None,
    opt_in_check: OptInCheck | None = None,
) -> list[tuple[str, OutcomeRecord]]:
    """Enqueue job payloads and work through them with GitHub adapters built from the bot identity.

    Returns:
        The queue identity and outcome of every job, in processing order.
    """
    queue = queue or InMemoryJobQueue()
    status_store = status_store or InMemoryStatusStore()
    job_ids = [await queue.push(job) for job in jobs]
    logger.info("Enqueued jobs", job_count=len(job_ids), bot_username=bot.username)

    bot_adapter = await GitHubKitAdapter.create(token=bot.token, github_api_url=bot.github_api_url, timeout=bot.timeout)
    user_adapter_factory = build_user_adapter_factory(bot.github_api_url, bot.timeout)
    issuer = PullRequestIssuer(bot_adapter, bot, user_adapter_factory)
    synchronizer = UnrelatedRepoSynchronizer(bot_adapter, bot)

    start_time = time.time()
    await drain_queue(queue, status_store, issuer, user_adapter_factory, opt_in_check=opt_in_check, synchronizer=synchronizer)
    logger.info("Processed all jobs", job_count=len(job_ids), duration=round(time.time() - start_time, 2))

    outcomes: list[tuple[str, OutcomeRecord]] = []
    for job_id in job_ids:
        record = await status_store.get(job_id)
        if record is not None:
            outcomes.append((job_id, record))
    return outcomes

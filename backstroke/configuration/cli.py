"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from backstroke.config import settings
from backstroke.configuration.exceptions import BotCredentialNotConfiguredError
from backstroke.configuration.models import BotIdentity
from backstroke.configuration.reconcile import validate_bot_configuration
from backstroke.github.adapter import GitHubKitAdapter
from backstroke.github.results import ApiFailure
from backstroke.synchronize.driver import run_sync_jobs_workflow
from backstroke.synchronize.results import OutcomeStatus

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Keep forks in sync with their upstream through pull requests.")


def configure_logging(debug: bool) -> None:
    """Send structured logs to stderr so stdout only carries command output."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = settings.GITHUB_API_URL,
    github_token: Annotated[str | None, Option(envvar="GITHUB_TOKEN", help="Token of the bot user that opens pull requests.")] = settings.GITHUB_TOKEN,
    github_bot_username: Annotated[
        str, Option(envvar="GITHUB_BOT_USERNAME", help="Username of the bot user that opens pull requests.")
    ] = settings.GITHUB_BOT_USERNAME,
    github_api_timeout: Annotated[
        float, Option(envvar="GITHUB_API_TIMEOUT", help="Seconds allowed per GitHub API call.")
    ] = settings.GITHUB_API_TIMEOUT,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = settings.DEBUG,
) -> None:
    """Set the bot identity for the current context."""
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["github_api_url"] = github_api_url
    ctx.obj["github_token"] = github_token
    ctx.obj["github_bot_username"] = github_bot_username
    ctx.obj["github_api_timeout"] = github_api_timeout


def get_bot_identity(ctx: typer.Context) -> BotIdentity:
    """Validate the bot identity stored in the context, exiting when it is incomplete."""
    try:
        return asyncio.run(
            validate_bot_configuration(
                github_token=ctx.obj["github_token"],
                github_bot_username=ctx.obj["github_bot_username"],
                github_api_url=ctx.obj["github_api_url"],
                github_api_timeout=ctx.obj["github_api_timeout"],
            )
        )
    except (BotCredentialNotConfiguredError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def load_job_payloads(job_file: Path) -> list[dict[str, Any]]:
    """Load one job, or a list of jobs, from a JSON file."""
    content = json.loads(job_file.read_text(encoding="utf-8"))
    payloads = content if isinstance(content, list) else [content]
    for payload in payloads:
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object for each job in {job_file}, got {type(payload).__name__}")
    return payloads


@typer_app.command(name="process-jobs")
def process_jobs_cli(
    ctx: typer.Context,
    job_files: Annotated[list[Path], Argument(help="JSON files holding a sync job, or a list of sync jobs.")],
) -> None:
    """Enqueue sync jobs and process them one after another, printing each outcome as JSON."""
    bot = get_bot_identity(ctx)

    jobs: list[dict[str, Any]] = []
    for job_file in job_files:
        if not job_file.exists():
            typer.echo(f"Job file not found: {job_file.absolute()}", err=True)
            raise typer.Exit(1)
        try:
            jobs.extend(load_job_payloads(job_file))
        except ValueError as exc:
            typer.echo(f"Error loading job file {job_file}: {exc}", err=True)
            raise typer.Exit(1) from exc
    typer.echo(f"Loaded {len(jobs)} job(s)", err=True)

    outcomes = asyncio.run(run_sync_jobs_workflow(jobs, bot))
    typer.echo(json.dumps([{"job": job_id, **record.to_wire()} for job_id, record in outcomes], indent=2))
    if any(record.status == OutcomeStatus.ERROR for _, record in outcomes):
        raise typer.Exit(1)


@typer_app.command(name="rate-limit")
def rate_limit_cli(ctx: typer.Context) -> None:
    """Print how many GitHub API requests the bot user has left."""
    bot = get_bot_identity(ctx)

    async def fetch_remaining() -> int:
        adapter = await GitHubKitAdapter.create(token=bot.token, github_api_url=bot.github_api_url, timeout=bot.timeout)
        result = await adapter.get_rate_limit_remaining()
        if isinstance(result, ApiFailure):
            typer.echo(f"Couldn't fetch token rate limit: {result.message}", err=True)
            raise typer.Exit(1)
        return result.value

    remaining = asyncio.run(fetch_remaining())
    typer.echo(str(remaining))


if __name__ == "__main__":
    typer_app()

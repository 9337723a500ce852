"""Unit tests for the command line interface."""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from pytest import MonkeyPatch
from typer.testing import CliRunner

from backstroke.configuration.cli import typer_app
from backstroke.configuration.models import BotIdentity
from backstroke.github.results import ApiFailure, ApiFailureKind, ApiSuccess
from backstroke.synchronize.results import OutcomeRecord, OutcomeStatus, SingleForkOutput

runner = CliRunner()

OK_RECORD = OutcomeRecord(status=OutcomeStatus.OK, output=SingleForkOutput(response="Successfully created pull request on rgaus/backstroke"))


def write_jobs(tmp_path: Path, content: Any) -> Path:
    job_file = tmp_path / "jobs.json"
    job_file.write_text(json.dumps(content))
    return job_file


def test_process_jobs(monkeypatch: MonkeyPatch, tmp_path: Path, job_payload: dict[str, Any]) -> None:
    """Test that every job in the file is processed and its outcome printed."""
    workflow = AsyncMock(return_value=[("job-1", OK_RECORD)])
    monkeypatch.setattr("backstroke.configuration.cli.run_sync_jobs_workflow", workflow)

    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "process-jobs", str(write_jobs(tmp_path, [job_payload]))])

    assert result.exit_code == 0, result.output
    assert '"job": "job-1"' in result.output
    assert '"response": "Successfully created pull request on rgaus/backstroke"' in result.output
    jobs, bot = workflow.await_args.args
    assert jobs == [job_payload]
    assert bot == BotIdentity(username="backstroke-bot", token="BOT TOKEN")


def test_process_jobs_single_object(monkeypatch: MonkeyPatch, tmp_path: Path, job_payload: dict[str, Any]) -> None:
    """Test that a file holding a single job object is accepted."""
    workflow = AsyncMock(return_value=[("job-1", OK_RECORD)])
    monkeypatch.setattr("backstroke.configuration.cli.run_sync_jobs_workflow", workflow)

    result = runner.invoke(
        typer_app,
        ["--github-token", "BOT TOKEN", "--github-bot-username", "my-bot", "process-jobs", str(write_jobs(tmp_path, job_payload))],
    )

    assert result.exit_code == 0, result.output
    jobs, bot = workflow.await_args.args
    assert jobs == [job_payload]
    assert bot.username == "my-bot"


def test_process_jobs_exits_with_error_on_failed_job(monkeypatch: MonkeyPatch, tmp_path: Path, job_payload: dict[str, Any]) -> None:
    """Test that a failed job makes the command exit with an error."""
    workflow = AsyncMock(return_value=[("job-1", OK_RECORD), ("job-2", OutcomeRecord.error("Link is not enabled."))])
    monkeypatch.setattr("backstroke.configuration.cli.run_sync_jobs_workflow", workflow)

    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "process-jobs", str(write_jobs(tmp_path, [job_payload, job_payload]))])

    assert result.exit_code == 1
    assert '"error": "Link is not enabled."' in result.output


def test_process_jobs_missing_token(monkeypatch: MonkeyPatch, tmp_path: Path, job_payload: dict[str, Any]) -> None:
    """Test that the command refuses to run without a bot token."""
    workflow = AsyncMock()
    monkeypatch.setattr("backstroke.configuration.cli.run_sync_jobs_workflow", workflow)

    result = runner.invoke(typer_app, ["--github-token", "", "process-jobs", str(write_jobs(tmp_path, job_payload))])

    assert result.exit_code == 1
    assert "Bot credential not configured" in result.output
    workflow.assert_not_awaited()


def test_process_jobs_missing_file(tmp_path: Path) -> None:
    """Test that a job file that does not exist is reported."""
    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "process-jobs", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "Job file not found" in result.output


def test_process_jobs_malformed_file(tmp_path: Path) -> None:
    """Test that a job file holding something other than job objects is rejected."""
    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "process-jobs", str(write_jobs(tmp_path, ["not a job"]))])

    assert result.exit_code == 1
    assert "Error loading job file" in result.output


def test_process_jobs_invalid_json(tmp_path: Path) -> None:
    """Test that a job file that is not JSON is rejected."""
    job_file = tmp_path / "jobs.json"
    job_file.write_text("{not json")

    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "process-jobs", str(job_file)])

    assert result.exit_code == 1
    assert "Error loading job file" in result.output


def test_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Test that the remaining requests of the bot user are printed."""
    adapter = MagicMock()
    adapter.get_rate_limit_remaining = AsyncMock(return_value=ApiSuccess(4999))
    create = AsyncMock(return_value=adapter)
    monkeypatch.setattr("backstroke.configuration.cli.GitHubKitAdapter.create", create)

    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "rate-limit"])

    assert result.exit_code == 0, result.output
    assert "4999" in result.output
    create.assert_awaited_once_with(token="BOT TOKEN", github_api_url="https://api.github.com", timeout=5.0)


def test_rate_limit_failure(monkeypatch: MonkeyPatch) -> None:
    """Test that a failed rate limit lookup exits with an error."""
    adapter = MagicMock()
    adapter.get_rate_limit_remaining = AsyncMock(return_value=ApiFailure(kind=ApiFailureKind.ERROR, message="Bad credentials", status_code=401))
    monkeypatch.setattr("backstroke.configuration.cli.GitHubKitAdapter.create", AsyncMock(return_value=adapter))

    result = runner.invoke(typer_app, ["--github-token", "BOT TOKEN", "rate-limit"])

    assert result.exit_code == 1
    assert "Couldn't fetch token rate limit: Bad credentials" in result.output

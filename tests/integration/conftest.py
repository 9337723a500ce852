"""Pytest configuration for integration tests."""

import shutil
from pathlib import Path

import git
import pytest
from dotenv import load_dotenv


@pytest.fixture(autouse=True, scope="session")
def load_env() -> None:
    """Load environment variables from .env file before running integration tests.

    This fixture is automatically used for all tests in this directory and its subdirectories.
    It loads environment variables from:
    1. .env.integration (if it exists)
    2. .env (if it exists)

    The .env.integration file takes precedence over .env.
    """
    project_root = Path(__file__).parent.parent.parent

    integration_env = project_root / ".env.integration"
    if integration_env.exists():
        load_dotenv(dotenv_path=integration_env)

    default_env = project_root / ".env"
    if default_env.exists():
        load_dotenv(dotenv_path=default_env)


@pytest.fixture
def git_executable() -> str:
    """Skip the test when git is not installed."""
    executable = shutil.which("git")
    if executable is None:
        pytest.skip("git executable not found on the PATH")
    return executable


@pytest.fixture
def remotes_root(tmp_path: Path, git_executable: str) -> Path:
    """Directory laid out like a git host: <root>/<owner>/<repo>."""
    root = tmp_path / "remotes"
    root.mkdir()
    return root


@pytest.fixture
def upstream_repository(remotes_root: Path) -> git.Repo:
    """Upstream repository 1egoman/backstroke with one commit on master."""
    path = remotes_root / "1egoman" / "backstroke"
    path.mkdir(parents=True)
    repository = git.Repo.init(path)
    with repository.config_writer() as config:
        config.set_value("user", "name", "Upstream Author")
        config.set_value("user", "email", "upstream@example.com")
    repository.git.symbolic_ref("HEAD", "refs/heads/master")
    (path / "README.md").write_text("# backstroke\n")
    repository.index.add(["README.md"])
    repository.index.commit("Initial commit")
    return repository


@pytest.fixture
def bot_copy_repository(remotes_root: Path) -> git.Repo:
    """Bare repository standing in for the bot user's copy of the target."""
    path = remotes_root / "backstroke-bot" / "backstroke"
    path.mkdir(parents=True)
    return git.Repo.init(path, bare=True)

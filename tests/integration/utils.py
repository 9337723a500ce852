"""Utility functions for integration tests."""

import subprocess
import sys


def get_cli_with_starting_args() -> list[str]:
    """Get the command that runs the backstroke CLI with the current interpreter."""
    return [sys.executable, "-m", "backstroke.configuration.cli"]


def run_cli(args: list[str], env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    """Helper to run the CLI as a subprocess and capture output.

    Args:
        args: List of command line arguments to pass to the CLI.
        env: Environment of the subprocess, defaults to the current one.

    Returns:
        subprocess.CompletedProcess: The result of running the CLI command.
    """
    complete_command = get_cli_with_starting_args() + args
    print(f"Running command: {' '.join(complete_command)}")
    result = subprocess.run(complete_command, capture_output=True, text=True, env=env)
    print(f"Command result: {result.returncode}")
    print(f"Command stdout: {result.stdout}")
    print(f"Command stderr: {result.stderr}")
    return result

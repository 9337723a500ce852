"""Backstroke keeps forks in sync with their upstream by proposing pull requests."""

__version__ = "0.1.0"

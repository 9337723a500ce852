"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_BOT_USERNAME,
    DEFAULT_PAGE_SIZE,
    OPT_OUT_LABEL,
)
from .github import build_repository_web_url, derive_web_base_url

__all__ = [
    "DEFAULT_BOT_USERNAME",
    "DEFAULT_PAGE_SIZE",
    "OPT_OUT_LABEL",
    "build_repository_web_url",
    "derive_web_base_url",
]

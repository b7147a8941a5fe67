"""Shared library utilities."""

from src.core.logging import get_logger
from src.core.pr_urls import to_browser_url
from src.core.security import extract_bearer_token, require_valid_token

__all__ = [
    "get_logger",
    "to_browser_url",
    "extract_bearer_token",
    "require_valid_token",
]

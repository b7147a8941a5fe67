"""GitHub service."""

from src.services.github.client import GitHubClient
from src.services.github.service import (
    list_open_pull_requests,
    list_repositories,
    list_reviews,
)

__all__ = [
    "GitHubClient",
    "list_open_pull_requests",
    "list_repositories",
    "list_reviews",
]

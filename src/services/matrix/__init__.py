"""Review matrix service."""

from src.services.matrix.schemas import Assignment, Organization, Repository, Reviewer
from src.services.matrix.service import fetch_organization_data

__all__ = [
    "Assignment",
    "Organization",
    "Repository",
    "Reviewer",
    "fetch_organization_data",
]

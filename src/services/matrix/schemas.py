"""Pydantic schemas for the reviewer x repository matrix."""

from pydantic import BaseModel, ConfigDict

REQUESTED_REVIEW = "REQUESTED_REVIEW"


class Repository(BaseModel):
    """A repository column of the matrix."""

    model_config = ConfigDict(frozen=True)

    name: str


class Assignment(BaseModel):
    """One (reviewer, pull request) pairing, rendered as a pull request chip.

    `state` is APPROVED, CHANGES_REQUESTED, COMMENTED, REQUESTED_REVIEW or any
    other state GitHub reports, verbatim.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    repository_name: str
    state: str


class Reviewer(BaseModel):
    """A reviewer row of the matrix."""

    model_config = ConfigDict(frozen=True)

    name: str
    assignments: tuple[Assignment, ...] = ()

    def assignments_for(self, repository_name: str) -> list[Assignment]:
        """Assignments shown in this reviewer's cell for one repository."""
        return [a for a in self.assignments if a.repository_name == repository_name]


class Organization(BaseModel):
    """Result of one aggregation run. Read-only once returned."""

    model_config = ConfigDict(frozen=True)

    name: str
    repositories: tuple[Repository, ...] = ()
    reviewers: tuple[Reviewer, ...] = ()

    def matrix(self) -> list[tuple[Reviewer, list[list[Assignment]]]]:
        """Rows of (reviewer, cells), one cell per repository in column order."""
        return [
            (reviewer, [reviewer.assignments_for(repo.name) for repo in self.repositories])
            for reviewer in self.reviewers
        ]

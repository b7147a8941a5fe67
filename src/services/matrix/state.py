"""Run state for building the reviewer matrix."""

from enum import Enum

from src.services.matrix.schemas import Assignment, Organization, Repository, Reviewer


class PipelineStage(str, Enum):
    """Stages of one aggregation run."""

    FETCHING_REPOSITORIES = "fetching repositories"
    FETCHING_PULL_REQUESTS = "fetching pull requests"
    FETCHING_REVIEWS = "fetching reviews"
    MERGING = "merging"
    DONE = "done"
    FAILED = "failed"


class OrganizationState:
    """Mutable aggregate owned by a single run.

    Repositories and reviewers are indexed by name; dict insertion order is
    the order they were first seen in.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._repositories: dict[str, Repository] = {}
        self._assignments: dict[str, list[Assignment]] = {}

    def add_repository(self, name: str) -> None:
        if name not in self._repositories:
            self._repositories[name] = Repository(name=name)

    def add_assignment(self, reviewer: str, assignment: Assignment) -> None:
        if assignment.repository_name not in self._repositories:
            raise ValueError(f"Unknown repository {assignment.repository_name!r}; add it first")
        self._assignments.setdefault(reviewer, []).append(assignment)

    def add_pull_request(
        self,
        repository_name: str,
        assignments: list[tuple[str, Assignment]],
    ) -> None:
        """Record one processed pull request.

        The repository is recorded even when the pull request has no reviewers.
        """
        self.add_repository(repository_name)
        for reviewer, assignment in assignments:
            self.add_assignment(reviewer, assignment)

    @property
    def reviewer_count(self) -> int:
        return len(self._assignments)

    @property
    def repository_count(self) -> int:
        return len(self._repositories)

    def freeze(self) -> Organization:
        """Snapshot into the read-only output model."""
        return Organization(
            name=self.name,
            repositories=tuple(self._repositories.values()),
            reviewers=tuple(
                Reviewer(name=name, assignments=tuple(assignments))
                for name, assignments in self._assignments.items()
            ),
        )

"""Pydantic schemas for GitHub REST payloads."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ParseError

T = TypeVar("T", bound=BaseModel)


class GitHubPayload(BaseModel):
    """Base for upstream payloads. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class UserPayload(GitHubPayload):
    """A GitHub account reference."""

    login: str


class RepositoryPayload(GitHubPayload):
    """Item of GET /orgs/{org}/repos."""

    name: str


class PullRequestPayload(GitHubPayload):
    """Item of GET /repos/{org}/{repo}/pulls."""

    number: int
    url: str
    user: UserPayload
    requested_reviewers: list[UserPayload] = Field(default_factory=list)

    @field_validator("requested_reviewers", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def author(self) -> str:
        return self.user.login


class ReviewPayload(GitHubPayload):
    """Item of GET /repos/{org}/{repo}/pulls/{number}/reviews.

    `user` is null when the reviewing account has been deleted.
    """

    user: UserPayload | None = None
    state: str
    submitted_at: str | None = None

    @property
    def reviewer(self) -> str | None:
        return self.user.login if self.user else None


def parse_items(model: type[T], items: list[Any], url: str) -> list[T]:
    """Validate a list of raw JSON objects against a payload model.

    Raises:
        ParseError: If any item lacks a required field or has the wrong type
    """
    try:
        return TypeAdapter(list[model]).validate_python(items)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ParseError(url, f"Unexpected payload at [{location}]: {first['msg']}") from e

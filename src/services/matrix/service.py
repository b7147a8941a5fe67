"""Review matrix service - aggregation pipeline."""

import asyncio
import uuid
from typing import Awaitable, Iterable, Optional, TypeVar

import httpx

from src.core.exceptions import GitHubError, ValidationError
from src.core.logging import get_logger
from src.services.github.client import GitHubClient
from src.services.github.schemas import PullRequestPayload, RepositoryPayload, ReviewPayload
from src.services.github.service import list_open_pull_requests, list_repositories, list_reviews
from src.services.matrix.builder import build_assignments
from src.services.matrix.reducer import latest_review_states
from src.services.matrix.schemas import Organization
from src.services.matrix.state import OrganizationState, PipelineStage

logger = get_logger("matrix.service")

T = TypeVar("T")


async def gather_or_cancel(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently, preserving input order in the result.

    On the first failure (or if the caller is cancelled) every sibling still
    running is cancelled and awaited before the error propagates.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class AggregationRun:
    """One fetch of an organization's review matrix.

    Levels are fetched one after another (repositories, then pull requests of
    every repository, then reviews of every pull request); requests within a
    level run concurrently, capped by the client. Results are merged in API
    order by this object alone, so the output does not depend on which
    request finished first.
    """

    def __init__(self, organization: str) -> None:
        self.organization = organization
        self.run_id = uuid.uuid4().hex[:8]
        self.stage = PipelineStage.FETCHING_REPOSITORIES
        self.failure: Optional[str] = None

    def _enter(self, stage: PipelineStage) -> None:
        self.stage = stage
        logger.debug(f"[{self.run_id}] {self.organization}: {stage.value}")

    async def execute(self, client: GitHubClient) -> Organization:
        logger.info(f"[{self.run_id}] Building review matrix for {self.organization}")
        try:
            self._enter(PipelineStage.FETCHING_REPOSITORIES)
            repositories = await list_repositories(client, self.organization)

            self._enter(PipelineStage.FETCHING_PULL_REQUESTS)
            pulls_by_repo = await self._fetch_pull_requests(client, repositories)

            self._enter(PipelineStage.FETCHING_REVIEWS)
            reviews_by_repo = await self._fetch_reviews(client, pulls_by_repo)
        except GitHubError as e:
            e.at_stage(self.stage.value)
            self.failure = e.message
            self._enter(PipelineStage.FAILED)
            logger.error(f"[{self.run_id}] Review matrix failed: {e.message}")
            raise
        except asyncio.CancelledError:
            self.failure = f"cancelled while {self.stage.value}"
            self._enter(PipelineStage.FAILED)
            logger.warning(f"[{self.run_id}] Review matrix {self.failure}")
            raise
        except Exception as e:
            self.failure = f"{type(e).__name__} while {self.stage.value}: {e}"
            self._enter(PipelineStage.FAILED)
            logger.exception(f"[{self.run_id}] Review matrix failed unexpectedly")
            raise

        self._enter(PipelineStage.MERGING)
        state = OrganizationState(self.organization)
        for (repo_name, pulls), reviews_per_pull in zip(pulls_by_repo, reviews_by_repo):
            for pull, reviews in zip(pulls, reviews_per_pull):
                latest = latest_review_states(pull.author, reviews)
                state.add_pull_request(repo_name, build_assignments(pull, repo_name, latest))

        self._enter(PipelineStage.DONE)
        logger.info(
            f"[{self.run_id}] Review matrix for {self.organization}: "
            f"{state.reviewer_count} reviewers across {state.repository_count} repositories"
        )
        return state.freeze()

    async def _fetch_pull_requests(
        self,
        client: GitHubClient,
        repositories: list[RepositoryPayload],
    ) -> list[tuple[str, list[PullRequestPayload]]]:
        async def fetch(repo: RepositoryPayload) -> tuple[str, list[PullRequestPayload]]:
            return repo.name, await list_open_pull_requests(client, self.organization, repo.name)

        return await gather_or_cancel(fetch(repo) for repo in repositories)

    async def _fetch_reviews(
        self,
        client: GitHubClient,
        pulls_by_repo: list[tuple[str, list[PullRequestPayload]]],
    ) -> list[list[list[ReviewPayload]]]:
        async def fetch_repo(repo_name: str, pulls: list[PullRequestPayload]) -> list[list[ReviewPayload]]:
            return await gather_or_cancel(
                list_reviews(client, self.organization, repo_name, pull.number) for pull in pulls
            )

        return await gather_or_cancel(fetch_repo(name, pulls) for name, pulls in pulls_by_repo)


async def fetch_organization_data(
    organization: str,
    token: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Organization:
    """Fetch the reviewer x repository matrix of an organization.

    Returns a complete aggregate or raises; nothing partial is ever returned.

    Raises:
        ValidationError: If the organization or token is empty or malformed
        TransportError: If a request fails or GitHub answers non-2xx
        AuthError: If GitHub rejects the token
        ParseError: If a response is not the expected JSON
    """
    organization = (organization or "").strip()
    if not organization:
        raise ValidationError("Organization must not be empty")

    async with GitHubClient(token, transport=transport) as client:
        return await AggregationRun(organization).execute(client)

"""GitHub service - typed listing operations over the REST client."""

from urllib.parse import quote

from src.config import settings
from src.core.logging import get_logger
from src.services.github.client import GitHubClient
from src.services.github.schemas import (
    PullRequestPayload,
    RepositoryPayload,
    ReviewPayload,
    parse_items,
)

logger = get_logger("github.service")


def repositories_url(organization: str) -> str:
    return f"{settings.github_api_url}/orgs/{quote(organization, safe='')}/repos"


def pulls_url(organization: str, repo: str) -> str:
    return f"{settings.github_api_url}/repos/{quote(organization, safe='')}/{quote(repo, safe='')}/pulls"


def reviews_url(organization: str, repo: str, number: int) -> str:
    return f"{pulls_url(organization, repo)}/{number}/reviews"


async def list_repositories(client: GitHubClient, organization: str) -> list[RepositoryPayload]:
    """List every repository of an organization, in API order."""
    url = repositories_url(organization)
    repositories = parse_items(RepositoryPayload, await client.get_all(url), url)
    logger.info(f"Found {len(repositories)} repositories in {organization}")
    return repositories


async def list_open_pull_requests(
    client: GitHubClient,
    organization: str,
    repo: str,
) -> list[PullRequestPayload]:
    """List open pull requests of one repository, in API order."""
    url = pulls_url(organization, repo)
    pulls = parse_items(PullRequestPayload, await client.get_all(url, {"state": "open"}), url)
    logger.debug(f"Found {len(pulls)} open pull requests in {organization}/{repo}")
    return pulls


async def list_reviews(
    client: GitHubClient,
    organization: str,
    repo: str,
    number: int,
) -> list[ReviewPayload]:
    """List review events of one pull request, oldest first as returned by GitHub."""
    url = reviews_url(organization, repo, number)
    return parse_items(ReviewPayload, await client.get_all(url), url)

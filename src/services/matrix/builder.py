"""Build reviewer assignments for one pull request."""

from src.core.pr_urls import to_browser_url
from src.services.github.schemas import PullRequestPayload
from src.services.matrix.schemas import REQUESTED_REVIEW, Assignment


def build_assignments(
    pull: PullRequestPayload,
    repository_name: str,
    latest_states: dict[str, str],
) -> list[tuple[str, Assignment]]:
    """Pair reviewers with assignments for a pull request.

    Reviewers with a review state come first, then every requested reviewer
    with REQUESTED_REVIEW. A reviewer who reviewed and was requested again
    gets both entries.
    """
    pr_id = str(pull.number)
    url = to_browser_url(pull.url)

    def assignment(state: str) -> Assignment:
        return Assignment(id=pr_id, url=url, repository_name=repository_name, state=state)

    pairs = [(reviewer, assignment(state)) for reviewer, state in latest_states.items()]
    pairs.extend((requested.login, assignment(REQUESTED_REVIEW)) for requested in pull.requested_reviewers)
    return pairs

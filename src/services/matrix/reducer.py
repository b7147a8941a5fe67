"""Reduce a pull request's review history to one current state per reviewer."""

from typing import Iterable

from src.services.github.schemas import ReviewPayload


def latest_review_states(author: str, reviews: Iterable[ReviewPayload]) -> dict[str, str]:
    """Map each reviewer to the state of their most recent review.

    Reviews must arrive oldest first. GitHub's reviews endpoint returns them in
    submission order and nothing here re-sorts them, so a different upstream
    order changes which review wins.

    The pull request author is skipped, as are reviews from deleted accounts.
    """
    states: dict[str, str] = {}
    for review in reviews:
        reviewer = review.reviewer
        if reviewer is None or reviewer == author:
            continue
        states[reviewer] = review.state
    return states

"""Tests for reducing review history to current states."""

from conftest import make_review

from src.services.github.schemas import ReviewPayload
from src.services.matrix.reducer import latest_review_states


def reviews(*raw: dict) -> list[ReviewPayload]:
    return [ReviewPayload.model_validate(r) for r in raw]


class TestLatestReviewStates:
    """Tests for latest_review_states function."""

    def test_empty_history(self):
        """No reviews gives an empty mapping."""
        assert latest_review_states("alice", []) == {}

    def test_last_review_wins(self):
        """A later review overwrites an earlier one from the same reviewer."""
        result = latest_review_states(
            "alice",
            reviews(
                make_review("bob", "COMMENTED"),
                make_review("bob", "APPROVED"),
            ),
        )

        assert result == {"bob": "APPROVED"}

    def test_approval_then_changes_requested(self):
        """Requesting changes after approving leaves CHANGES_REQUESTED."""
        result = latest_review_states(
            "alice",
            reviews(
                make_review("bob", "APPROVED"),
                make_review("bob", "CHANGES_REQUESTED"),
            ),
        )

        assert result == {"bob": "CHANGES_REQUESTED"}

    def test_author_excluded(self):
        """Self-reviews by the pull request author are ignored."""
        result = latest_review_states(
            "alice",
            reviews(
                make_review("alice", "COMMENTED"),
                make_review("bob", "APPROVED"),
                make_review("alice", "COMMENTED"),
            ),
        )

        assert result == {"bob": "APPROVED"}

    def test_deleted_accounts_skipped(self):
        """Reviews with a null user carry no identity and are skipped."""
        result = latest_review_states(
            "alice",
            reviews(make_review(None, "APPROVED"), make_review("carol", "COMMENTED")),
        )

        assert result == {"carol": "COMMENTED"}

    def test_other_states_kept_verbatim(self):
        """States outside the common set pass through unchanged."""
        result = latest_review_states("alice", reviews(make_review("dave", "DISMISSED")))

        assert result == {"dave": "DISMISSED"}

    def test_multiple_reviewers_in_first_seen_order(self):
        """Each reviewer keeps their own latest state."""
        result = latest_review_states(
            "alice",
            reviews(
                make_review("bob", "COMMENTED"),
                make_review("carol", "APPROVED"),
                make_review("bob", "APPROVED"),
            ),
        )

        assert list(result) == ["bob", "carol"]
        assert result == {"bob": "APPROVED", "carol": "APPROVED"}

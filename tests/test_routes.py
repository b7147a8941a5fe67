"""Tests for the HTTP surface."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from src.core.exceptions import TransportError
from src.main import app
from src.services.matrix.schemas import Assignment, Organization, Repository, Reviewer

client = TestClient(app)

SAMPLE = Organization(
    name="acme",
    repositories=[Repository(name="repo1")],
    reviewers=[
        Reviewer(
            name="bob",
            assignments=[
                Assignment(
                    id="1",
                    url="https://github.com/acme/repo1/pull/1",
                    repository_name="repo1",
                    state="APPROVED",
                )
            ],
        )
    ],
)


class TestHealth:
    """Tests for service endpoints."""

    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "review-matrix"}

    def test_root(self):
        assert client.get("/").json()["service"] == "review-matrix"


class TestReviewMatrixRoute:
    """Tests for GET /api/organizations/{organization}/review-matrix."""

    @patch("src.services.matrix.routes.fetch_organization_data", new_callable=AsyncMock)
    def test_returns_matrix(self, mock_fetch):
        """Token from the Authorization header is passed through."""
        mock_fetch.return_value = SAMPLE

        response = client.get(
            "/api/organizations/acme/review-matrix",
            headers={"Authorization": "Bearer ghp_abc"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["repositories"] == [{"name": "repo1"}]
        assert body["data"]["reviewers"][0]["assignments"][0]["state"] == "APPROVED"
        mock_fetch.assert_awaited_once_with("acme", "ghp_abc")

    @patch("src.core.security.settings")
    def test_missing_token(self, mock_settings):
        mock_settings.github_token = None

        response = client.get("/api/organizations/acme/review-matrix")

        assert response.status_code == 401
        assert response.json()["success"] is False

    @patch("src.services.matrix.routes.fetch_organization_data", new_callable=AsyncMock)
    def test_upstream_failure(self, mock_fetch):
        """Pipeline errors come back as a single error message."""
        error = TransportError("https://api.github.com/orgs/acme/repos", "Unexpected status 500", 500)
        mock_fetch.side_effect = error.at_stage("fetching repositories")

        response = client.get(
            "/api/organizations/acme/review-matrix",
            headers={"Authorization": "Bearer ghp_abc"},
        )

        assert response.status_code == 502
        body = response.json()
        assert "https://api.github.com/orgs/acme/repos" in body["error"]
        assert body["details"]["stage"] == "fetching repositories"

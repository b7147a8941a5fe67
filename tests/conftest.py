"""Shared fixtures: an in-memory GitHub REST API behind httpx.MockTransport."""

import asyncio

import httpx
import pytest

API = "https://api.github.com"


class FakeGitHub:
    """Serves canned JSON pages by URL path.

    `pages` maps a path to a list of pages; a path with more than one page
    answers with a Link: rel="next" header pointing at ?page=N+1.
    """

    def __init__(self) -> None:
        self.pages: dict[str, list] = {}
        self.failures: dict[str, httpx.Response] = {}
        self.delays: dict[str, float] = {}
        self.requests: list[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def serve(self, path: str, *pages: list) -> "FakeGitHub":
        self.pages[path] = list(pages) or [[]]
        return self

    def fail(self, path: str, status: int, body: str = '{"message": "boom"}', headers: dict | None = None) -> "FakeGitHub":
        self.failures[path] = httpx.Response(status, text=body, headers=headers or {})
        return self

    def delay(self, path: str, seconds: float) -> "FakeGitHub":
        self.delays[path] = seconds
        return self

    def org(self, name: str, repos: list[str]) -> "FakeGitHub":
        return self.serve(f"/orgs/{name}/repos", [{"name": r, "id": i} for i, r in enumerate(repos)])

    def pulls(self, org: str, repo: str, pulls: list[dict]) -> "FakeGitHub":
        return self.serve(f"/repos/{org}/{repo}/pulls", pulls)

    def reviews(self, org: str, repo: str, number: int, reviews: list[dict]) -> "FakeGitHub":
        return self.serve(f"/repos/{org}/{repo}/pulls/{number}/reviews", reviews)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(path, 0))
        finally:
            self.in_flight -= 1

        if path in self.failures:
            failure = self.failures[path]
            return httpx.Response(failure.status_code, content=failure.content, headers=failure.headers)

        pages = self.pages.get(path)
        if pages is None:
            return httpx.Response(404, json={"message": "Not Found"})

        page = int(request.url.params.get("page", "1"))
        headers = {}
        if page < len(pages):
            next_url = request.url.copy_set_param("page", str(page + 1))
            headers["Link"] = f'<{next_url}>; rel="next"'
        return httpx.Response(200, json=pages[page - 1], headers=headers)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_pull(number: int, author: str, repo: str, org: str = "acme", requested: list[str] | None = None, **extra) -> dict:
    pull = {
        "number": number,
        "url": f"{API}/repos/{org}/{repo}/pulls/{number}",
        "title": f"PR {number}",
        "user": {"login": author, "id": 1},
        "requested_reviewers": [{"login": name} for name in (requested or [])],
    }
    pull.update(extra)
    return pull


def make_review(login: str | None, state: str, submitted_at: str = "2024-01-01T00:00:00Z") -> dict:
    return {
        "user": {"login": login} if login else None,
        "state": state,
        "submitted_at": submitted_at,
    }


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()

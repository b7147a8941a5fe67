"""GitHub REST API client - data layer."""

import asyncio
import json
from typing import Any, Optional

import httpx

from src.config import settings
from src.core.exceptions import AuthError, ParseError, TransportError, ValidationError
from src.core.logging import get_logger
from src.core.security import require_valid_token

logger = get_logger("github.client")


class GitHubClient:
    """Authenticated GET client for the GitHub REST API.

    One instance owns one connection pool and one in-flight request cap.
    Create it once per aggregation run and share it across every request:

        async with GitHubClient(token) as client:
            repos = await client.get_all(url)
    """

    def __init__(
        self,
        token: str,
        *,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None,
        page_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        token = require_valid_token(token)
        self.page_size = page_size if page_size is not None else settings.page_size
        self.max_concurrency = max_concurrency if max_concurrency is not None else settings.max_concurrency
        timeout = timeout if timeout is not None else settings.request_timeout
        if self.max_concurrency < 1:
            raise ValidationError(f"max_concurrency must be at least 1, got {self.max_concurrency}")
        if not 1 <= self.page_size <= 100:
            raise ValidationError(f"page_size must be between 1 and 100, got {self.page_size}")
        if timeout <= 0:
            raise ValidationError(f"timeout must be positive, got {timeout}")
        self._semaphore = asyncio.Semaphore(self.max_concurrency)
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": user_agent or settings.github_user_agent,
                "Accept": "application/vnd.github+json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, params: Optional[dict] = None) -> str:
        """GET a URL and return the raw response body."""
        response = await self._request(url, params)
        return response.text

    async def get_json(self, url: str, params: Optional[dict] = None) -> Any:
        """GET a URL and return the decoded JSON body."""
        response = await self._request(url, params)
        return _decode_json(response)

    async def get_all(self, url: str, params: Optional[dict] = None) -> list[Any]:
        """GET every page of a list endpoint and return the concatenated items.

        Follows the Link: rel="next" header until there is no next page.
        """
        query = dict(params or {})
        query.setdefault("per_page", self.page_size)

        items: list[Any] = []
        next_url: Optional[str] = url
        page = 0
        while next_url:
            # next links already carry the query string
            response = await self._request(next_url, query if page == 0 else None)
            body = _decode_json(response)
            if not isinstance(body, list):
                raise ParseError(str(response.url), f"Expected a JSON array, got {type(body).__name__}")
            items.extend(body)
            page += 1
            next_url = response.links.get("next", {}).get("url")

        if page > 1:
            logger.debug(f"Fetched {len(items)} items across {page} pages from {url}")
        return items

    async def _request(self, url: str, params: Optional[dict]) -> httpx.Response:
        async with self._semaphore:
            logger.debug(f"GET {url}")
            try:
                response = await self._client.get(url, params=params)
            except httpx.TimeoutException as e:
                logger.warning(f"Timed out fetching {url}")
                raise TransportError(url, f"Request timed out: {e}") from e
            except httpx.InvalidURL as e:
                logger.warning(f"Invalid URL {url}: {e}")
                raise TransportError(url, f"Invalid URL: {e}") from e
            except httpx.HTTPError as e:
                logger.warning(f"Failed to fetch {url}: {e}")
                raise TransportError(url, f"Request failed: {e}") from e

        if response.is_success:
            return response

        status = response.status_code
        logger.warning(f"GitHub returned {status} for {url}")
        if status == 401:
            raise AuthError(url, "GitHub rejected the token (401 Unauthorized)", status)
        if status == 403:
            if response.headers.get("X-RateLimit-Remaining") == "0":
                reset = response.headers.get("X-RateLimit-Reset", "unknown")
                raise TransportError(url, f"Rate limit exceeded, resets at {reset}", status)
            raise AuthError(url, "Token lacks access (403 Forbidden)", status)
        raise TransportError(url, f"Unexpected status {status} {response.reason_phrase}", status)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(str(response.url), f"Invalid JSON in response: {e}") from e

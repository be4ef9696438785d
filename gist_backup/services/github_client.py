"""Async GitHub API client using httpx."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from gist_backup.config import Settings
from gist_backup.exceptions import DecodeError, GitHubAPIError, TransportError
from gist_backup.models.schemas import Gist

API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


class GitHubClient:
    """Async client for GitHub Gists API.

    The transport is injectable so tests can swap the network for
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        self._base_url = settings.github_api_base_url.rstrip("/")
        self._timeout = settings.github_api_timeout
        self._token = settings.github_token
        self._per_page = settings.per_page
        self._transport = transport
        self._logger = logger or logging.getLogger(__name__)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GitHubClient":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def start(self) -> None:
        """Initialize the HTTP client."""
        headers = {}
        if self._token:
            headers["Authorization"] = f"token {self._token}"

        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def list_gists(self, username: str) -> list[Gist]:
        """
        Fetch every gist of a GitHub user, following pagination.

        Args:
            username: GitHub username

        Returns:
            List of Gist objects in the order the API returns them

        Raises:
            TransportError: If the request cannot be made
            GitHubAPIError: If GitHub answers with a non-200 status
            DecodeError: If a page is not a JSON list of gists
        """
        if not username:
            raise ValueError("username must not be empty")

        self._logger.debug("Fetching gists for user: %s", username)

        gists: list[Gist] = []
        url: str | None = f"{self._base_url}/users/{username}/gists"
        params: dict[str, Any] | None = {"per_page": self._per_page}
        while url:
            response = await self._get(url, params=params, headers=API_HEADERS)
            data = self._decode(response)
            if not isinstance(data, list):
                raise DecodeError(url, "expected a list of gists")
            gists.extend(self._parse_gist(url, item) for item in data)

            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None

        self._logger.debug("Fetched %d gists", len(gists))
        return gists

    async def get_gist(self, gist_id: str) -> Gist:
        """
        Fetch the full record of a single gist.

        Raises:
            TransportError: If the request cannot be made
            GitHubAPIError: If GitHub answers with a non-200 status, including 404
            DecodeError: If the body is not a gist object
        """
        url = f"{self._base_url}/gists/{gist_id}"
        response = await self._get(url, headers=API_HEADERS)
        return self._parse_gist(url, self._decode(response))

    @asynccontextmanager
    async def fetch_raw(self, url: str) -> AsyncIterator[AsyncIterator[bytes]]:
        """
        Stream raw bytes from ``url``.

        Yields an async iterator of byte chunks. The response is closed when
        the context exits.
        """
        client = self._require_client()
        try:
            async with client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise GitHubAPIError(
                        status_code=response.status_code,
                        message=response.reason_phrase,
                    )
                yield self._iter_bytes(url, response)
        except httpx.TimeoutException as e:
            raise TransportError(url, "request timed out") from e
        except httpx.RequestError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e

    async def _iter_bytes(
        self, url: str, response: httpx.Response
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.RequestError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e

    async def _get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        client = self._require_client()
        try:
            response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(url, "request timed out") from e
        except httpx.RequestError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e

        if response.status_code != 200:
            raise GitHubAPIError(
                status_code=response.status_code,
                message=response.reason_phrase,
            )
        return response

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not initialized. Call start() first.")
        return self._client

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(str(response.url), f"malformed JSON: {e}") from e

    @staticmethod
    def _parse_gist(url: str, data: Any) -> Gist:
        """Parse raw API response into Gist model."""
        if not isinstance(data, dict):
            raise DecodeError(url, "expected a gist object")
        try:
            return Gist.from_api(data)
        except ValidationError as e:
            raise DecodeError(url, str(e)) from e

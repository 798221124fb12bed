"""Async HTTP client for the CrossRef REST API."""

import logging
from typing import Any

import httpx

from ..settings import (
    CROSSREF_BASE_URL,
    CROSSREF_USER_AGENT,
    HTTP_TIMEOUT_SECONDS,
    PAGE_SIZE,
)

logger = logging.getLogger(__name__)


def year_filter(year: int) -> str:
    """CrossRef filter restricting publication date to one calendar year."""
    return f"from-publication-date:{year}-01-01,until-publication-date:{year}-12-31"


class CrossRefClient:
    """Async client for CrossRef /works search.

    CrossRef needs no key, but its usage policy asks for a User-Agent that
    names the application and a contact address.
    """

    def __init__(
        self,
        user_agent: str = CROSSREF_USER_AGENT,
        base_url: str = CROSSREF_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.headers = {"User-Agent": user_agent}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CrossRefClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=HTTP_TIMEOUT_SECONDS,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    async def search_works(
        self,
        query: str,
        rows: int = PAGE_SIZE,
        offset: int = 0,
        year: int | None = None,
    ) -> dict[str, Any]:
        """Search works by bibliographic query.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
        """
        params: dict[str, Any] = {
            "query.bibliographic": query,
            "rows": rows,
            "offset": offset,
        }
        if year:
            params["filter"] = year_filter(year)

        logger.info(f"Searching CrossRef: query='{query}', offset={offset}")

        response = await self.client.get("/works", params=params)
        response.raise_for_status()
        return response.json()

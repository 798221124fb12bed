"""Async HTTP client for the CORE v3 API."""

import logging
from typing import Any

import httpx

from ..settings import CORE_API_KEY, CORE_BASE_URL, HTTP_TIMEOUT_SECONDS, PAGE_SIZE

logger = logging.getLogger(__name__)


def build_core_query(query: str, year: int | None = None) -> str:
    """CORE query string, prefixing a year clause when filtering."""
    if year:
        return f"year:{year} AND ({query})"
    return query


class CoreClient:
    """Async client for CORE /search/works."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = CORE_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else CORE_API_KEY
        self.base_url = base_url
        self._transport = transport

        self.headers: dict[str, str] = {}
        if self.api_key:
            self.headers["Authorization"] = f"Bearer {self.api_key}"

        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CoreClient":
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
        limit: int = PAGE_SIZE,
        offset: int = 0,
        year: int | None = None,
    ) -> dict[str, Any]:
        """Search works.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
        """
        params = {
            "q": build_core_query(query, year),
            "limit": limit,
            "offset": offset,
        }

        logger.info(f"Searching CORE: query='{params['q']}', offset={offset}")

        response = await self.client.get("/search/works", params=params)
        response.raise_for_status()
        return response.json()

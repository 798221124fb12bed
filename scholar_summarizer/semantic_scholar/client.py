"""Async HTTP client for the Semantic Scholar Graph API."""

import logging
from typing import Any

import httpx

from ..settings import (
    HTTP_TIMEOUT_SECONDS,
    PAGE_SIZE,
    SEMANTIC_SCHOLAR_API_KEY,
    SEMANTIC_SCHOLAR_BASE_URL,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = [
    "paperId",
    "url",
    "title",
    "abstract",
    "authors",
    "year",
    "journal",
    "isOpenAccess",
]


class SemanticScholarClient:
    """Async client for Semantic Scholar API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = SEMANTIC_SCHOLAR_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else SEMANTIC_SCHOLAR_API_KEY
        self.base_url = base_url
        self._transport = transport

        # Build headers
        self.headers: dict[str, str] = {}
        if self.api_key:
            self.headers["x-api-key"] = self.api_key

        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SemanticScholarClient":
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

    async def search_papers(
        self,
        query: str,
        limit: int = PAGE_SIZE,
        offset: int = 0,
        year: int | None = None,
    ) -> dict[str, Any]:
        """Search for papers using the /paper/search endpoint.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
        """
        params: dict[str, Any] = {
            "query": query,
            "limit": limit,
            "offset": offset,
            "fields": ",".join(SEARCH_FIELDS),
        }
        if year:
            params["year"] = str(year)

        logger.info(f"Searching Semantic Scholar: query='{query}', offset={offset}")

        response = await self.client.get("/paper/search", params=params)
        response.raise_for_status()
        return response.json()

"""CORE adapter implementing the paper search protocol."""

import logging
from typing import Any

import httpx

from ..paper_sources.models import Author, Journal, Paper
from ..paper_sources.protocols import PaperSearchProvider
from ..paper_sources.text import collapse_whitespace, strip_markup
from .client import CoreClient

logger = logging.getLogger(__name__)


def _author(entry: str | dict[str, Any]) -> Author:
    # CORE has returned both bare name strings and {"name": ...} objects
    if isinstance(entry, dict):
        return Author(name=entry.get("name") or "N/A")
    return Author(name=entry or "N/A")


def _item_to_paper(item: dict[str, Any]) -> Paper:
    """Convert one CORE work to the canonical Paper model."""
    journals = item.get("journals") or []
    journal = None
    if journals and journals[0].get("title"):
        journal = Journal(name=journals[0]["title"])

    download_url = item.get("downloadUrl") or None

    return Paper(
        paper_id=str(item.get("id") or ""),
        url=download_url,
        title=collapse_whitespace(item.get("title") or "") or "No title",
        abstract=strip_markup(item.get("abstract")),
        authors=[_author(a) for a in item.get("authors") or []],
        year=item.get("yearPublished"),
        journal=journal,
        is_open_access=bool(download_url),
    )


class CoreAdapter(PaperSearchProvider):
    """
    Adapter for the CORE open-access aggregator.

    Requires an API key; without one the source is skipped.

    Usage:
        async with CoreAdapter() as adapter:
            papers = await adapter.search_papers("soil microbiome")
    """

    name = "core"

    def __init__(
        self,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the CORE adapter.

        Args:
            api_key: Optional API key. If not provided, uses CORE_API_KEY env var.
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._client = CoreClient(api_key=api_key, transport=transport)

    async def __aenter__(self) -> "CoreAdapter":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def search_papers(
        self,
        query: str,
        year: int | None = None,
        offset: int = 0,
    ) -> list[Paper]:
        """Search one page of CORE, returning [] on any failure."""
        if not self._client.api_key:
            logger.warning("CORE API key not found. Skipping search.")
            return []

        try:
            data = await self._client.search_works(query, offset=offset, year=year)
        except httpx.HTTPStatusError as e:
            logger.error(f"CORE API Error: {e.response.status_code} - {e.response.text[:200]}")
            return []
        except Exception as e:
            logger.error(f"Failed to fetch from CORE API: {e}")
            return []

        papers = []
        for item in data.get("results") or []:
            try:
                papers.append(_item_to_paper(item))
            except Exception as e:
                logger.warning(f"Skipping malformed CORE record: {e}")
        return papers

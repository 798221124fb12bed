"""Semantic Scholar adapter implementing the paper search protocol."""

import logging
from typing import Any

import httpx

from ..paper_sources.models import Author, Journal, Paper
from ..paper_sources.protocols import PaperSearchProvider
from ..paper_sources.text import strip_markup
from .client import SemanticScholarClient

logger = logging.getLogger(__name__)


def _journal_from_json(data: dict[str, Any] | None) -> Journal | None:
    if not data or not data.get("name"):
        return None
    return Journal(
        name=data["name"],
        volume=(data.get("volume") or "").strip() or None,
        pages=(data.get("pages") or "").strip() or None,
    )


def _item_to_paper(item: dict[str, Any]) -> Paper:
    """Convert one /paper/search hit to the canonical Paper model."""
    return Paper(
        paper_id=item.get("paperId") or "",
        url=item.get("url"),
        title=item.get("title") or "No title",
        abstract=strip_markup(item.get("abstract")),
        authors=[
            Author(name=author.get("name") or "N/A", author_id=author.get("authorId"))
            for author in item.get("authors") or []
        ],
        year=item.get("year"),
        journal=_journal_from_json(item.get("journal")),
        is_open_access=bool(item.get("isOpenAccess")),
    )


class SemanticScholarAdapter(PaperSearchProvider):
    """
    Adapter for Semantic Scholar API.

    Requires an API key; without one the source is skipped and contributes
    no results rather than failing the search.

    Usage:
        async with SemanticScholarAdapter() as adapter:
            papers = await adapter.search_papers("machine learning", year=2023)
    """

    name = "semantic_scholar"

    def __init__(
        self,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the Semantic Scholar adapter.

        Args:
            api_key: Optional API key. If not provided, uses SEMANTIC_SCHOLAR_API_KEY
                    environment variable.
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._client = SemanticScholarClient(api_key=api_key, transport=transport)

    async def __aenter__(self) -> "SemanticScholarAdapter":
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
        """Search one page of Semantic Scholar, returning [] on any failure."""
        if not self._client.api_key:
            logger.warning("Semantic Scholar API key not found. Skipping search.")
            return []

        try:
            data = await self._client.search_papers(query, offset=offset, year=year)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                logger.error("Semantic Scholar API rate limit exceeded.")
            else:
                logger.error(
                    f"Semantic Scholar API Error: {e.response.status_code} - {e.response.text[:200]}"
                )
            return []
        except Exception as e:
            logger.error(f"Failed to fetch from Semantic Scholar: {e}")
            return []

        papers = []
        for item in data.get("data") or []:
            try:
                papers.append(_item_to_paper(item))
            except Exception as e:
                logger.warning(f"Skipping malformed Semantic Scholar record: {e}")
        return papers

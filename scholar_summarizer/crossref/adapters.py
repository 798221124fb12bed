"""CrossRef adapter implementing the paper search protocol."""

import logging
from typing import Any

import httpx

from ..paper_sources.models import Author, Journal, Paper
from ..paper_sources.protocols import PaperSearchProvider
from ..paper_sources.text import collapse_whitespace, strip_markup
from .client import CrossRefClient

logger = logging.getLogger(__name__)


def _first(values: list[Any] | None) -> Any:
    return values[0] if values else None


def _author_name(author: dict[str, Any]) -> str:
    if author.get("given"):
        return f"{author['given']} {author.get('family', '')}".strip()
    return author.get("name") or author.get("family") or "N/A"


def _published_year(item: dict[str, Any]) -> int | None:
    """Year from the first available published/published-print/published-online date."""
    published = (
        item.get("published")
        or item.get("published-print")
        or item.get("published-online")
    )
    if not published:
        return None
    date_parts = published.get("date-parts") or []
    first_part = _first(date_parts)
    year = _first(first_part)
    return int(year) if year else None


def _item_to_paper(item: dict[str, Any]) -> Paper:
    """Convert one CrossRef work to the canonical Paper model."""
    title = collapse_whitespace(_first(item.get("title")) or "") or "No title"

    return Paper(
        paper_id=item.get("DOI") or "",
        url=item.get("URL"),
        title=title,
        abstract=strip_markup(item.get("abstract")),  # JATS tags are common here
        authors=[Author(name=_author_name(a)) for a in item.get("author") or []],
        year=_published_year(item),
        journal=Journal(
            name=_first(item.get("container-title")) or "N/A",
            volume=item.get("volume"),
            pages=item.get("page"),
        ),
        is_open_access=bool(item.get("is-open-access")),
    )


class CrossRefAdapter(PaperSearchProvider):
    """
    Adapter for the CrossRef works API.

    Usage:
        async with CrossRefAdapter() as adapter:
            papers = await adapter.search_papers("protein folding", year=2021)
    """

    name = "crossref"

    def __init__(
        self,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the CrossRef adapter.

        Args:
            user_agent: Polite User-Agent override (defaults to CROSSREF_USER_AGENT)
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        kwargs: dict[str, Any] = {"transport": transport}
        if user_agent:
            kwargs["user_agent"] = user_agent
        self._client = CrossRefClient(**kwargs)

    async def __aenter__(self) -> "CrossRefAdapter":
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
        """Search one page of CrossRef, returning [] on any failure."""
        try:
            data = await self._client.search_works(query, offset=offset, year=year)
        except httpx.HTTPStatusError as e:
            logger.error(
                f"CrossRef API Error: {e.response.status_code} - {e.response.text[:200]}"
            )
            return []
        except Exception as e:
            logger.error(f"Failed to fetch from CrossRef: {e}")
            return []

        items = (data.get("message") or {}).get("items") or []
        papers = []
        for item in items:
            try:
                papers.append(_item_to_paper(item))
            except Exception as e:
                logger.warning(f"Skipping malformed CrossRef record: {e}")
        return papers

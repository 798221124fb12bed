"""arXiv adapter implementing the paper search protocol."""

import logging

import arxiv

from ..paper_sources.models import Author, Paper
from ..paper_sources.protocols import PaperSearchProvider
from ..paper_sources.text import collapse_whitespace
from ..settings import ARXIV_RATE_LIMIT_SECONDS
from .client import ArXivClient

logger = logging.getLogger(__name__)


def build_arxiv_query(query: str, year: int | None = None) -> str:
    """Build arXiv query string, adding a submittedDate range for a year.

    Example: ("graphs", 2023) -> "all:graphs AND submittedDate:[20230101 TO 20231231]"
    """
    arxiv_query = f"all:{query}"
    if year:
        arxiv_query += f" AND submittedDate:[{year}0101 TO {year}1231]"
    return arxiv_query


def _result_to_paper(result: arxiv.Result) -> Paper:
    """Convert arxiv.Result to the canonical Paper model."""
    title = collapse_whitespace(result.title or "") or "No title"
    abstract = collapse_whitespace(result.summary or "") or None

    return Paper(
        paper_id=result.entry_id or "",
        url=result.entry_id or None,
        title=title,
        abstract=abstract,
        authors=[
            Author(name=author.name or "N/A", author_id=None)
            for author in result.authors
        ],
        year=result.published.year if result.published else None,
        journal=None,
        is_open_access=True,  # arXiv papers are always open access
    )


class ArXivAdapter(PaperSearchProvider):
    """
    Adapter for the arXiv API implementing PaperSearchProvider.

    arXiv needs no API key; every entry is open access.

    Usage:
        async with ArXivAdapter() as adapter:
            papers = await adapter.search_papers("transformer attention", year=2023)
    """

    name = "arxiv"

    def __init__(
        self,
        client: ArXivClient | None = None,
        rate_limit_seconds: float = ARXIV_RATE_LIMIT_SECONDS,
    ):
        """
        Initialize arXiv adapter.

        Args:
            client: Optional pre-built client (tests inject fakes here)
            rate_limit_seconds: Minimum seconds between requests
        """
        self._client = client or ArXivClient(rate_limit_seconds=rate_limit_seconds)
        self._entered = False

    async def __aenter__(self) -> "ArXivAdapter":
        """Enter async context."""
        self._entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        self._entered = False

    async def search_papers(
        self,
        query: str,
        year: int | None = None,
        offset: int = 0,
    ) -> list[Paper]:
        """Search one page of arXiv, returning [] on any failure."""
        arxiv_query = build_arxiv_query(query, year)

        try:
            results = await self._client.search(arxiv_query, offset=offset)
        except Exception as e:
            logger.error(f"Failed to fetch from ArXiv: {e}")
            return []

        papers = []
        for result in results:
            try:
                papers.append(_result_to_paper(result))
            except Exception as e:
                logger.warning(f"Skipping malformed arXiv entry: {e}")
        return papers

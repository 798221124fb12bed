"""Composite search provider aggregating multiple sources."""

import asyncio
import logging

from pydantic import ValidationError

from .deduplication import deduplicate_papers
from .models import Paper, SearchPapersResult, SearchRequest
from .protocols import PaperSearchProvider

logger = logging.getLogger(__name__)

NO_RESULTS_ERROR = (
    "Could not retrieve results from any API. Please check your query or API keys."
)


async def gather_all(
    providers: list[PaperSearchProvider],
    request: SearchRequest,
) -> list[list[Paper]]:
    """Fan out one search to every provider and wait for all of them.

    Results come back in provider order regardless of completion order.
    A provider that raises despite its contract contributes an empty list.
    """
    tasks = [
        provider.search_papers(request.query, request.year, request.offset)
        for provider in providers
    ]
    results_lists = await asyncio.gather(*tasks, return_exceptions=True)

    settled: list[list[Paper]] = []
    for provider, results in zip(providers, results_lists):
        if isinstance(results, Exception):
            logger.error(f"Provider {provider.name} raised unexpectedly: {results}")
            settled.append([])
            continue
        logger.debug(f"Provider {provider.name} returned {len(results)} papers")
        settled.append(results)
    return settled


class CompositeSearchProvider:
    """
    Searches several sources concurrently and merges their results.

    Sources are concatenated in the order they were given (their priority),
    then deduplicated by title with the first occurrence winning.

    Usage:
        providers = [ArXivAdapter(), SemanticScholarAdapter(), CrossRefAdapter(), CoreAdapter()]

        async with CompositeSearchProvider(providers) as composite:
            papers = await composite.search(SearchRequest(query="quantum computing"))
    """

    def __init__(
        self,
        providers: list[PaperSearchProvider],
        deduplicate: bool = True,
    ):
        """
        Initialize composite provider.

        Args:
            providers: Search providers in priority order
            deduplicate: Whether to deduplicate merged results by title
        """
        if not providers:
            raise ValueError("CompositeSearchProvider needs at least one provider")
        self._providers = providers
        self._deduplicate = deduplicate

    @property
    def providers(self) -> list[PaperSearchProvider]:
        return list(self._providers)

    async def __aenter__(self) -> "CompositeSearchProvider":
        """Enter async context for all providers."""
        for provider in self._providers:
            if hasattr(provider, "__aenter__"):
                await provider.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context for all providers."""
        for provider in self._providers:
            if hasattr(provider, "__aexit__"):
                await provider.__aexit__(exc_type, exc_val, exc_tb)

    async def search(self, request: SearchRequest) -> list[Paper]:
        """Search all providers in parallel and merge results."""
        results_lists = await gather_all(self._providers, request)

        all_papers: list[Paper] = []
        for results in results_lists:
            all_papers.extend(results)

        if self._deduplicate:
            all_papers = deduplicate_papers(all_papers)

        return all_papers

    async def search_papers(
        self,
        query: str,
        year: int | None = None,
        offset: int = 0,
    ) -> SearchPapersResult:
        """
        Run one page of a federated search.

        An empty query is the "no search yet" state and returns no papers.
        An empty merged result is an error only on the first page; later
        pages running dry is the natural end of pagination.
        """
        try:
            request = SearchRequest(query=query, year=year, offset=offset)
        except ValidationError as e:
            logger.error(f"Invalid search request: {e}")
            return SearchPapersResult(error=f"Invalid search request: {e}")

        if not request.query:
            return SearchPapersResult(papers=[])

        try:
            papers = await self.search(request)
        except Exception as e:
            logger.error(f"Failed to fetch papers: {e}")
            return SearchPapersResult(
                error=(
                    "Failed to fetch papers. Please check your connection or try "
                    f"again later. Details: {e}"
                )
            )

        if not papers and request.offset == 0:
            return SearchPapersResult(error=NO_RESULTS_ERROR)

        logger.info(
            f"Search '{request.query}' (year={request.year}, offset={request.offset}) "
            f"returned {len(papers)} papers"
        )
        return SearchPapersResult(papers=papers)

"""Low-level arXiv API client with rate limiting."""

import asyncio
import logging
import time

import arxiv

from ..settings import ARXIV_RATE_LIMIT_SECONDS, PAGE_SIZE

logger = logging.getLogger(__name__)


class ArXivRateLimiter:
    """Rate limiter enforcing minimum delay between arXiv requests."""

    def __init__(self, min_interval: float = 3.0):
        """
        Initialize rate limiter.

        Args:
            min_interval: Minimum seconds between requests (default: 3.0 per arXiv guidelines)
        """
        self._min_interval = min_interval
        self._last_request_time: float = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Acquire rate limit slot, waiting if necessary."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()


class ArXivClient:
    """Async wrapper around the arxiv Python library."""

    def __init__(
        self,
        rate_limit_seconds: float = ARXIV_RATE_LIMIT_SECONDS,
        page_size: int = PAGE_SIZE,
    ):
        """
        Initialize arXiv client.

        Args:
            rate_limit_seconds: Minimum seconds between requests
            page_size: Results fetched per API request
        """
        self._rate_limiter = ArXivRateLimiter(rate_limit_seconds)
        self._page_size = page_size
        self._client = arxiv.Client(
            page_size=page_size,
            delay_seconds=0,  # We handle rate limiting ourselves
            num_retries=0,  # Failures are reported, the adapter degrades to empty
        )

    async def search(
        self,
        query: str,
        offset: int = 0,
        max_results: int | None = None,
    ) -> list[arxiv.Result]:
        """
        Fetch one page of arXiv results in relevance order.

        Args:
            query: Search query in arXiv syntax (e.g. "all:graphs AND submittedDate:[...]")
            offset: Index of the first result to return
            max_results: Page size (defaults to the client page size)

        Returns:
            List of arxiv.Result objects
        """
        page_size = max_results or self._page_size

        # arxiv.Search.max_results counts from the start of the result set,
        # so the window has to reach past the offset.
        search = arxiv.Search(
            query=query,
            max_results=offset + page_size,
            sort_by=arxiv.SortCriterion.Relevance,
            sort_order=arxiv.SortOrder.Descending,
        )

        # Run in thread pool since arxiv.py is synchronous
        await self._rate_limiter.acquire()
        results = await asyncio.to_thread(
            lambda: list(self._client.results(search, offset=offset))
        )

        logger.debug(f"arXiv search '{query}' returned {len(results)} results")
        return results

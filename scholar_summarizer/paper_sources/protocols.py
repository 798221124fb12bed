"""Protocol definition for paper search sources."""

from typing import Protocol, runtime_checkable

from .models import Paper


@runtime_checkable
class PaperSearchProvider(Protocol):
    """Protocol for paper search sources.

    Implementations must never raise out of ``search_papers``: any failure
    (network error, non-2xx status, missing API key) is logged and turned
    into an empty list so one outage cannot block the other sources.
    """

    name: str

    async def search_papers(
        self,
        query: str,
        year: int | None = None,
        offset: int = 0,
    ) -> list[Paper]:
        """
        Search one page of papers matching query.

        Args:
            query: Search query string
            year: Optional publication year filter
            offset: Per-source pagination offset

        Returns:
            List of Paper objects in the source's native order
        """
        ...

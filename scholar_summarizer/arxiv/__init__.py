"""arXiv API integration for paper search.

Usage:
    from scholar_summarizer.arxiv import ArXivAdapter

    async with ArXivAdapter() as adapter:
        papers = await adapter.search_papers("transformer attention", offset=10)
"""

from .adapters import ArXivAdapter, build_arxiv_query
from .client import ArXivClient

__all__ = ["ArXivAdapter", "ArXivClient", "build_arxiv_query"]

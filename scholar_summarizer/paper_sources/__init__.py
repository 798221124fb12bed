"""Paper sources module for multi-provider paper search.

This module provides the canonical paper model and a composite search
provider that fans one query out to every configured source (arXiv,
Semantic Scholar, CrossRef, CORE) and merges the answers.

Usage:
    from scholar_summarizer.paper_sources import CompositeSearchProvider
    from scholar_summarizer.arxiv import ArXivAdapter
    from scholar_summarizer.crossref import CrossRefAdapter

    async with CompositeSearchProvider([ArXivAdapter(), CrossRefAdapter()]) as composite:
        result = await composite.search_papers("quantum computing", year=2023)
"""

from .models import Author, Journal, Paper, SearchPapersResult, SearchRequest
from .protocols import PaperSearchProvider
from .composite import CompositeSearchProvider, gather_all, NO_RESULTS_ERROR
from .deduplication import deduplicate_papers, normalize_title

__all__ = [
    # Models
    "Author",
    "Journal",
    "Paper",
    "SearchPapersResult",
    "SearchRequest",
    # Protocols
    "PaperSearchProvider",
    # Aggregation
    "CompositeSearchProvider",
    "gather_all",
    "NO_RESULTS_ERROR",
    "deduplicate_papers",
    "normalize_title",
]

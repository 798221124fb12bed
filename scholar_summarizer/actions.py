"""Caller-facing operations.

Each action returns a result model carrying either a value or an ``error``
string, never both. Failures are logged and reported, never replaced with
placeholder content.
"""

import logging
from typing import Any

from pydantic import BaseModel

from .config.factory import create_search_provider
from .config.loader import SourcesConfig
from .flows import (
    ExtractAttributesInput,
    ExtractedPaperAttributes,
    GenerateEmbeddingsInput,
    GenerateLiteratureReviewInput,
    SuggestSimilarPapersInput,
    extract_paper_attributes,
    generate_embeddings,
    generate_literature_review,
    suggest_similar_papers,
    summarize_abstract,
)
from .llm.protocols import LLMProvider
from .llm.retry import RetryPolicy
from .paper_sources.composite import CompositeSearchProvider
from .paper_sources.models import Paper, SearchPapersResult

logger = logging.getLogger(__name__)


class SummarizeResult(BaseModel):
    summary: str | None = None
    error: str | None = None


class SuggestPapersResult(BaseModel):
    papers: list[Paper] | None = None
    error: str | None = None


class LiteratureReviewResult(BaseModel):
    literature_review: str | None = None
    error: str | None = None


class ExtractAttributesResult(BaseModel):
    data: list[ExtractedPaperAttributes] | None = None
    error: str | None = None


async def search_papers_action(
    query: str,
    year: int | None = None,
    offset: int = 0,
    provider: CompositeSearchProvider | None = None,
) -> SearchPapersResult:
    """
    Search every source for one page of papers.

    Args:
        query: Search query; empty means "no search yet"
        year: Optional publication year filter
        offset: Per-source pagination offset
        provider: Entered composite provider. If not provided, one is built
                  for all four sources and closed afterwards.
    """
    if provider:
        return await provider.search_papers(query, year, offset)

    async with create_search_provider(SourcesConfig()) as composite:
        return await composite.search_papers(query, year, offset)


async def summarize_abstract_action(
    llm: LLMProvider,
    abstract: str,
    retry: RetryPolicy | None = None,
) -> SummarizeResult:
    """Summarize one abstract."""
    if not abstract or not abstract.strip():
        return SummarizeResult(error="Abstract is empty.")

    try:
        result = await summarize_abstract(llm, {"abstract": abstract}, retry)
    except Exception as e:
        logger.error(f"Summarization Error: {e}")
        return SummarizeResult(error=f"Failed to generate summary: {e}")

    return SummarizeResult(summary=result.summary)


async def suggest_papers_action(
    llm: LLMProvider,
    data: SuggestSimilarPapersInput | dict[str, Any],
    original_papers: list[Paper],
    retry: RetryPolicy | None = None,
) -> SuggestPapersResult:
    """
    Suggest papers from ``original_papers`` the user has not looked at yet.

    Suggestions are matched back by exact title; a suggestion whose title
    the model reworded matches nothing and is dropped (and logged).
    """
    try:
        suggested = await suggest_similar_papers(llm, data, retry)
    except Exception as e:
        logger.error(f"Suggestion Error: {e}")
        return SuggestPapersResult(error=f"Failed to get suggestions: {e}")

    suggested_titles = {paper.title for paper in suggested}
    matched = [paper for paper in original_papers if paper.title in suggested_titles]

    unmatched = suggested_titles - {paper.title for paper in matched}
    if unmatched:
        logger.warning(
            f"Dropped {len(unmatched)} suggestions with no exact title match: "
            f"{sorted(unmatched)}"
        )

    return SuggestPapersResult(papers=matched)


async def generate_literature_review_action(
    llm: LLMProvider,
    data: GenerateLiteratureReviewInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> LiteratureReviewResult:
    """Write a literature review; an empty paper list yields an empty review."""
    try:
        result = await generate_literature_review(llm, data, retry)
    except Exception as e:
        logger.error(f"Literature Review Generation Error: {e}")
        return LiteratureReviewResult(error=f"Failed to generate literature review: {e}")

    return LiteratureReviewResult(literature_review=result.literature_review)


async def extract_paper_attributes_action(
    llm: LLMProvider,
    data: ExtractAttributesInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> ExtractAttributesResult:
    """Extract attributes per paper, keyed by paper index."""
    try:
        result = await extract_paper_attributes(llm, data, retry)
    except Exception as e:
        logger.error(f"Attribute Extraction Error: {e}")
        return ExtractAttributesResult(error=f"Failed to extract attributes: {e}")

    return ExtractAttributesResult(data=result.results)


async def generate_embeddings_action(
    llm: LLMProvider,
    data: GenerateEmbeddingsInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> list[list[float]]:
    """Embed documents. Unlike the other actions, failures propagate."""
    return await generate_embeddings(llm, data, retry)

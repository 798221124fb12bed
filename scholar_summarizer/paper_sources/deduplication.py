"""Paper deduplication logic for multi-source search."""

import logging

from .models import Paper

logger = logging.getLogger(__name__)


def normalize_title(title: str) -> str:
    """Normalize title for comparison (case-folded, whitespace collapsed)."""
    return " ".join(title.split()).lower()


def deduplicate_papers(papers: list[Paper]) -> list[Paper]:
    """
    Deduplicate papers from multiple sources by title.

    The first occurrence of a title wins; later records with the same
    normalized title are discarded even when their metadata differs.
    Punctuation is not normalized, so "Foo: Bar" and "Foo - Bar" stay apart.

    Args:
        papers: Papers in source priority order (potentially with duplicates)

    Returns:
        Deduplicated list preserving first-seen order
    """
    seen: set[str] = set()
    unique: list[Paper] = []

    for paper in papers:
        key = normalize_title(paper.title)
        if key in seen:
            logger.debug(f"Dropped duplicate: {paper.title[:50]}")
            continue
        seen.add(key)
        unique.append(paper)

    logger.info(f"Deduplicated {len(papers)} papers to {len(unique)}")
    return unique

"""Scholar summarizer: federated paper search with LLM-backed synthesis."""

from .actions import (
    extract_paper_attributes_action,
    generate_embeddings_action,
    generate_literature_review_action,
    search_papers_action,
    suggest_papers_action,
    summarize_abstract_action,
)
from .citations import generate_bibtex
from .paper_sources import Paper, SearchPapersResult

__all__ = [
    "Paper",
    "SearchPapersResult",
    "search_papers_action",
    "summarize_abstract_action",
    "suggest_papers_action",
    "generate_literature_review_action",
    "extract_paper_attributes_action",
    "generate_embeddings_action",
    "generate_bibtex",
]

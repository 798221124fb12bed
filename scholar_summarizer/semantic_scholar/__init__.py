"""Semantic Scholar API integration."""

from .adapters import SemanticScholarAdapter
from .client import SemanticScholarClient, SEARCH_FIELDS

__all__ = ["SemanticScholarAdapter", "SemanticScholarClient", "SEARCH_FIELDS"]

"""CrossRef API integration for paper search."""

from .adapters import CrossRefAdapter
from .client import CrossRefClient, year_filter

__all__ = ["CrossRefAdapter", "CrossRefClient", "year_filter"]

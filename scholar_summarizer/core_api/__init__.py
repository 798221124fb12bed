"""CORE (core.ac.uk) API integration for paper search."""

from .adapters import CoreAdapter
from .client import CoreClient, build_core_query

__all__ = ["CoreAdapter", "CoreClient", "build_core_query"]

"""Factory functions to create backends from configuration."""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING

from ..errors import ConfigError

if TYPE_CHECKING:
    from ..llm.protocols import LLMProvider
    from ..llm.retry import RetryPolicy
    from ..paper_sources.composite import CompositeSearchProvider
    from .loader import LLMConfig, ProfileConfig, RetryConfig, SourcesConfig


MOCK_RESPONSE = json.dumps(
    {
        "papers": [],
        "results": [],
    }
)


class MockLLMProvider:
    """Mock LLM provider for testing.

    Replies from ``responses`` in order (an Exception entry is raised
    instead of returned), then falls back to ``default_response``.
    Every prompt is recorded in ``prompts``.
    """

    def __init__(
        self,
        responses: list[str | Exception] | None = None,
        default_response: str = MOCK_RESPONSE,
        embedding_dim: int = 8,
    ):
        self.model = "mock"
        self.prompts: list[str] = []
        self.embed_calls: list[list[str]] = []
        self._responses = list(responses or [])
        self._default_response = default_response
        self._embedding_dim = embedding_dim

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """Return the next scripted completion."""
        self.prompts.append(prompt)
        if self._responses:
            response = self._responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return self._default_response

    async def embed(self, documents: list[str]) -> list[list[float]]:
        """Return deterministic pseudo-embeddings derived from a hash of each document."""
        self.embed_calls.append(list(documents))
        vectors = []
        for document in documents:
            digest = hashlib.sha256(document.encode("utf-8")).digest()
            vectors.append([b / 255 for b in digest[: self._embedding_dim]])
        return vectors

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


def create_llm_provider(config: LLMConfig) -> LLMProvider:
    """Create an LLM backend from configuration.

    Args:
        config: LLM configuration

    Returns:
        LLMProvider instance (OpenRouterAdapter, AnthropicAdapter, or Mock)

    Raises:
        ConfigError: If the backend needs credentials that are missing
    """
    if config.backend == "openrouter":
        from ..llm import OpenRouterAdapter

        return OpenRouterAdapter(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            embedding_model=config.embedding_model,
        )

    elif config.backend == "anthropic":
        from ..llm import AnthropicAdapter

        return AnthropicAdapter(
            api_key=config.api_key,
            model=config.model,
        )

    elif config.backend == "mock":
        return MockLLMProvider()

    else:
        raise ConfigError(f"Unsupported LLM backend: {config.backend}")


def create_search_provider(config: SourcesConfig) -> CompositeSearchProvider:
    """Create the composite search provider for the enabled sources.

    Sources that need keys are always created; without a key they skip
    themselves at search time.
    """
    from ..arxiv import ArXivAdapter
    from ..core_api import CoreAdapter
    from ..crossref import CrossRefAdapter
    from ..paper_sources import CompositeSearchProvider
    from ..semantic_scholar import SemanticScholarAdapter

    constructors = {
        "arxiv": ArXivAdapter,
        "semantic_scholar": SemanticScholarAdapter,
        "crossref": CrossRefAdapter,
        "core": CoreAdapter,
    }
    providers = [constructors[name]() for name in config.providers]

    return CompositeSearchProvider(providers, deduplicate=config.deduplication)


def create_retry_policy(config: RetryConfig) -> RetryPolicy:
    """Create the retry policy shared by all flows."""
    return config.to_policy()


def create_from_profile(
    profile: ProfileConfig,
) -> tuple[LLMProvider, CompositeSearchProvider, RetryPolicy]:
    """Create all backends from a profile.

    Returns:
        Tuple of (llm_provider, search_provider, retry_policy)
    """
    return (
        create_llm_provider(profile.llm),
        create_search_provider(profile.sources),
        create_retry_policy(profile.retry),
    )

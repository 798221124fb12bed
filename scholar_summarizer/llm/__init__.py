"""LLM provider integrations with protocol-based adapter pattern."""

from .protocols import LLMProvider
from .adapters import AnthropicAdapter, OpenRouterAdapter
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, is_retryable, with_retry

__all__ = [
    # Protocols
    "LLMProvider",
    # Adapters
    "OpenRouterAdapter",
    "AnthropicAdapter",
    # Retry
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "is_retryable",
    "with_retry",
]

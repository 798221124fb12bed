"""Configuration system for model backends and paper sources."""

from .loader import (
    DEFAULT_SOURCES,
    load_config,
    load_config_from_env,
    load_config_from_yaml,
    LLMConfig,
    ProfileConfig,
    RetryConfig,
    SourcesConfig,
)
from .factory import (
    MockLLMProvider,
    create_llm_provider,
    create_search_provider,
    create_retry_policy,
    create_from_profile,
)

__all__ = [
    # Loader
    "DEFAULT_SOURCES",
    "load_config",
    "load_config_from_env",
    "load_config_from_yaml",
    "LLMConfig",
    "ProfileConfig",
    "RetryConfig",
    "SourcesConfig",
    # Factory
    "MockLLMProvider",
    "create_llm_provider",
    "create_search_provider",
    "create_retry_policy",
    "create_from_profile",
]

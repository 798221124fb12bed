"""Configuration loader with Pydantic validation and env var expansion."""

import logging
import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from ..llm.retry import RetryPolicy
from ..settings import MAX_RETRIES, RETRY_INITIAL_DELAY_MS

logger = logging.getLogger(__name__)

SourceName = Literal["arxiv", "semantic_scholar", "crossref", "core"]

# Fixed priority order used when merging results
DEFAULT_SOURCES: list[SourceName] = ["arxiv", "semantic_scholar", "crossref", "core"]

DEFAULT_CONFIG_PATH = Path(__file__).parent / "models.yaml"


class LLMConfig(BaseModel):
    """Configuration for the LLM backend used by the prompt flows."""

    backend: Literal["openrouter", "anthropic", "mock"] = "openrouter"
    model: str | None = None
    api_key: str | None = None
    base_url: str | None = None
    embedding_model: str | None = None

    @field_validator("model", "api_key", "base_url", "embedding_model")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class RetryConfig(BaseModel):
    """Configuration for overload retries around LLM calls."""

    max_retries: int = Field(MAX_RETRIES, ge=0)
    initial_delay_ms: int = Field(RETRY_INITIAL_DELAY_MS, gt=0)

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            initial_delay_ms=self.initial_delay_ms,
        )


class SourcesConfig(BaseModel):
    """Configuration for paper search sources."""

    providers: list[SourceName] = Field(default_factory=lambda: list(DEFAULT_SOURCES))
    deduplication: bool = True

    @field_validator("providers")
    @classmethod
    def _priority_order(cls, value: list[SourceName]) -> list[SourceName]:
        if not value:
            raise ValueError("at least one paper source must be enabled")
        # Merge order is fixed regardless of how the profile lists sources
        return [name for name in DEFAULT_SOURCES if name in value]


class ProfileConfig(BaseModel):
    """Configuration profile containing all backend configs."""

    llm: LLMConfig = LLMConfig()
    retry: RetryConfig = RetryConfig()
    sources: SourcesConfig = SourcesConfig()


class ConfigFile(BaseModel):
    """Root configuration file structure."""

    profiles: dict[str, ProfileConfig]


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} references in string with environment variables.

    Unset variables expand to an empty string so that a missing key reads
    as "not configured" rather than as the literal placeholder.
    """
    if not isinstance(value, str):
        return value

    pattern = r"\$\{([^}]+)\}"

    def replacer(match):
        return os.environ.get(match.group(1), "")

    return re.sub(pattern, replacer, value)


def expand_env_vars_recursive(data):
    """Recursively expand env vars in nested dict/list structures."""
    if isinstance(data, dict):
        return {k: expand_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def load_config_from_yaml(config_path: Path, profile_name: str) -> ProfileConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config YAML file
        profile_name: Name of profile to load

    Returns:
        ProfileConfig for the requested profile

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config is invalid
        KeyError: If profile doesn't exist
    """
    with open(config_path) as f:
        raw_data = yaml.safe_load(f)

    expanded_data = expand_env_vars_recursive(raw_data)
    config_file = ConfigFile(**expanded_data)

    if profile_name not in config_file.profiles:
        available = ", ".join(config_file.profiles.keys())
        raise KeyError(
            f"Profile '{profile_name}' not found. " f"Available profiles: {available}"
        )

    return config_file.profiles[profile_name]


def load_config_from_env() -> ProfileConfig:
    """Load configuration from environment variables (fallback mode).

    Returns:
        ProfileConfig constructed from environment variables
    """
    llm = LLMConfig(
        backend="openrouter",
        model=os.environ.get("OPENROUTER_DEFAULT_MODEL"),
        api_key=os.environ.get("OPENROUTER_API_KEY"),
        base_url=os.environ.get("OPENROUTER_BASE_URL"),
        embedding_model=os.environ.get("OPENAI_EMBEDDING_MODEL"),
    )
    return ProfileConfig(llm=llm)


def load_config(
    profile: str | None = None,
    config_path: Path | None = None,
) -> ProfileConfig:
    """Load configuration from YAML file or environment variables.

    Tries the YAML profile first and falls back to environment variables
    if the file is missing or cannot be loaded.

    Args:
        profile: Profile name to load. If None, uses MODEL_PROFILE env var
                or "default".
        config_path: Path to config file. If None, uses config/models.yaml
                    next to this module.

    Returns:
        ProfileConfig with all backend configurations
    """
    if profile is None:
        profile = os.environ.get("MODEL_PROFILE", "default")

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if config_path.exists():
        try:
            return load_config_from_yaml(config_path, profile)
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.warning("Falling back to environment variables...")
            return load_config_from_env()
    else:
        logger.info(f"Config file {config_path} not found, using environment variables")
        return load_config_from_env()

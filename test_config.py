"""
Configuration System Tests

Tests for the YAML configuration loader and factory functions.
"""

import asyncio
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

CONFIG_PATH = Path(__file__).parent / "scholar_summarizer" / "config" / "models.yaml"


def test_load_config_from_yaml():
    """Test loading configuration from YAML file."""
    print("=" * 60)
    print("TEST 1: Load configuration from YAML")
    print("=" * 60)

    from scholar_summarizer.config.loader import load_config_from_yaml

    profile = load_config_from_yaml(CONFIG_PATH, "default")
    print(f"\nLoaded profile: default")
    print(f"  LLM backend: {profile.llm.backend}")
    print(f"  LLM model: {profile.llm.model}")
    print(f"  Sources: {profile.sources.providers}")

    assert profile.llm.backend == "openrouter"
    assert profile.retry.max_retries == 3
    assert profile.retry.initial_delay_ms == 2000
    assert profile.sources.providers == ["arxiv", "semantic_scholar", "crossref", "core"]
    print("\n[PASS] default profile loaded correctly")

    profile = load_config_from_yaml(CONFIG_PATH, "open-sources-only")
    print(f"\nLoaded profile: open-sources-only")
    print(f"  Sources: {profile.sources.providers}")

    assert profile.sources.providers == ["arxiv", "crossref"]
    print("\n[PASS] open-sources-only profile loaded correctly")

    profile = load_config_from_yaml(CONFIG_PATH, "test")
    assert profile.llm.backend == "mock"
    assert profile.retry.max_retries == 1

    with pytest.raises(KeyError):
        load_config_from_yaml(CONFIG_PATH, "no-such-profile")
    print("\n[PASS] test profile loaded, unknown profile rejected")


def test_env_var_expansion():
    """Test ${VAR} expansion in config values."""
    print("\n" + "=" * 60)
    print("TEST 2: Environment variable expansion")
    print("=" * 60)

    from scholar_summarizer.config.loader import LLMConfig, expand_env_vars_recursive

    original = os.environ.get("SCHOLAR_TEST_KEY")
    os.environ["SCHOLAR_TEST_KEY"] = "sk-test"
    os.environ.pop("SCHOLAR_UNSET_KEY", None)
    try:
        expanded = expand_env_vars_recursive(
            {
                "api_key": "${SCHOLAR_TEST_KEY}",
                "nested": ["prefix-${SCHOLAR_TEST_KEY}", 3],
                "missing": "${SCHOLAR_UNSET_KEY}",
            }
        )
        print(f"\nExpanded: {expanded}")
        assert expanded["api_key"] == "sk-test"
        assert expanded["nested"] == ["prefix-sk-test", 3]
        assert expanded["missing"] == ""
        assert LLMConfig(api_key=expanded["missing"]).api_key is None
        print("\n[PASS] Expansion works, unset variables read as not configured")
    finally:
        if original:
            os.environ["SCHOLAR_TEST_KEY"] = original
        else:
            del os.environ["SCHOLAR_TEST_KEY"]


def test_load_config_env_fallback():
    """Test loading configuration from environment variables."""
    print("\n" + "=" * 60)
    print("TEST 3: Load configuration from environment (fallback)")
    print("=" * 60)

    from scholar_summarizer.config.loader import load_config, load_config_from_env

    profile = load_config_from_env()
    print(f"\nLoaded from environment:")
    print(f"  LLM backend: {profile.llm.backend}")
    print(f"  Sources: {profile.sources.providers}")

    assert profile.llm.backend == "openrouter"
    assert len(profile.sources.providers) == 4

    profile = load_config(profile="test", config_path=Path("/nonexistent/models.yaml"))
    assert profile.llm.backend == "openrouter"

    profile = load_config(profile="no-such-profile", config_path=CONFIG_PATH)
    assert profile.llm.backend == "openrouter"
    print("\n[PASS] Environment fallback works correctly")


def test_load_config_main():
    """Test the main load_config function."""
    print("\n" + "=" * 60)
    print("TEST 4: Main load_config function")
    print("=" * 60)

    from scholar_summarizer.config import load_config

    profile = load_config(profile="test")
    print(f"\nLoaded profile: test")
    print(f"  LLM: {profile.llm.backend}")

    assert profile.llm.backend == "mock"
    print("\n[PASS] load_config with explicit profile works")

    original = os.environ.get("MODEL_PROFILE")
    os.environ["MODEL_PROFILE"] = "anthropic"
    try:
        profile = load_config()
        print(f"\nLoaded from MODEL_PROFILE=anthropic")
        print(f"  LLM: {profile.llm.backend}")
        assert profile.llm.backend == "anthropic"
        print("\n[PASS] load_config with MODEL_PROFILE works")
    finally:
        if original:
            os.environ["MODEL_PROFILE"] = original
        else:
            del os.environ["MODEL_PROFILE"]


def test_sources_priority_order():
    """Test that enabled sources are always merged in priority order."""
    print("\n" + "=" * 60)
    print("TEST 5: Source priority order")
    print("=" * 60)

    from scholar_summarizer.config.loader import RetryConfig, SourcesConfig

    config = SourcesConfig(providers=["core", "crossref", "arxiv"])
    print(f"\nReordered: {config.providers}")
    assert config.providers == ["arxiv", "crossref", "core"]

    with pytest.raises(ValidationError):
        SourcesConfig(providers=[])
    with pytest.raises(ValidationError):
        SourcesConfig(providers=["google_scholar"])
    with pytest.raises(ValidationError):
        RetryConfig(initial_delay_ms=0)
    print("\n[PASS] Sources validated and reordered")


def test_factory_create_llm_provider():
    """Test creating LLM providers from config."""
    print("\n" + "=" * 60)
    print("TEST 6: Factory - create_llm_provider")
    print("=" * 60)

    from scholar_summarizer.config import create_llm_provider, load_config
    from scholar_summarizer.config.loader import LLMConfig

    profile = load_config(profile="test")
    llm = create_llm_provider(profile.llm)
    print(f"\nCreated mock LLM: {type(llm).__name__}")
    assert hasattr(llm, "complete")
    assert hasattr(llm, "embed")
    print("[PASS] Mock LLM created")

    llm = create_llm_provider(LLMConfig(backend="openrouter", api_key="sk-test"))
    print(f"Created OpenRouter LLM: {type(llm).__name__}")
    assert llm.model
    print("[PASS] OpenRouter LLM created")


def test_factory_rejects_missing_key(monkeypatch):
    """Test that a provider without credentials is a config error."""
    from scholar_summarizer.config import create_llm_provider
    from scholar_summarizer.config.loader import LLMConfig
    from scholar_summarizer.errors import ConfigError
    from scholar_summarizer.llm import adapters

    monkeypatch.setattr(adapters, "OPENROUTER_API_KEY", None)
    monkeypatch.setattr(adapters, "ANTHROPIC_API_KEY", None)

    with pytest.raises(ConfigError):
        create_llm_provider(LLMConfig(backend="openrouter"))
    with pytest.raises(ConfigError):
        create_llm_provider(LLMConfig(backend="anthropic"))


def test_factory_create_from_profile():
    """Test creating all backends from profile."""
    print("\n" + "=" * 60)
    print("TEST 7: Factory - create_from_profile")
    print("=" * 60)

    from scholar_summarizer.config import create_from_profile, load_config

    profile = load_config(profile="test")
    llm, search, retry = create_from_profile(profile)

    print(f"\nCreated from 'test' profile:")
    print(f"  LLM: {type(llm).__name__}")
    print(f"  Search: {[p.name for p in search.providers]}")
    print(f"  Retry: {retry}")

    assert [p.name for p in search.providers] == [
        "arxiv",
        "semantic_scholar",
        "crossref",
        "core",
    ]
    assert retry.max_retries == 1
    assert retry.initial_delay_ms == 10

    async def complete_once():
        async with llm:
            return await llm.complete("Test prompt")

    response = asyncio.run(complete_once())
    print(f"\nMock completion: {response[:50]}")
    assert response

    print("\n[PASS] create_from_profile works correctly")


def main():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("CONFIGURATION SYSTEM TESTS")
    print("=" * 60)

    test_load_config_from_yaml()
    test_env_var_expansion()
    test_load_config_env_fallback()
    test_load_config_main()
    test_sources_priority_order()
    test_factory_create_llm_provider()
    test_factory_create_from_profile()

    print("\n" + "=" * 60)
    print("ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()

"""Adapter implementations for LLM providers."""

import logging

import anthropic
import openai
from openai import AsyncOpenAI

from ..errors import ConfigError, ProviderError
from ..settings import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_DEFAULT_MODEL,
    OPENAI_EMBEDDING_MODEL,
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .protocols import LLMProvider

logger = logging.getLogger(__name__)


def _wrap_openai_error(e: openai.OpenAIError) -> ProviderError:
    status = e.status_code if isinstance(e, openai.APIStatusError) else None
    return ProviderError(f"{type(e).__name__}: {e}", status_code=status)


def _wrap_anthropic_error(e: anthropic.AnthropicError) -> ProviderError:
    status = e.status_code if isinstance(e, anthropic.APIStatusError) else None
    return ProviderError(f"{type(e).__name__}: {e}", status_code=status)


class OpenRouterAdapter(LLMProvider):
    """
    Adapter for OpenRouter API.

    OpenRouter provides access to many LLMs through an OpenAI-compatible API,
    including the embeddings endpoint.

    Usage:
        async with OpenRouterAdapter() as llm:
            response = await llm.complete("What is machine learning?")
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        embedding_model: str | None = None,
    ):
        """
        Initialize the OpenRouter adapter.

        Args:
            api_key: Optional API key. If not provided, uses OPENROUTER_API_KEY env var.
            model: Model to use. Defaults to OPENROUTER_DEFAULT_MODEL.
            base_url: OpenAI-compatible endpoint. Defaults to OPENROUTER_BASE_URL.
            embedding_model: Embedding model. Defaults to OPENAI_EMBEDDING_MODEL.
        """
        self.api_key = api_key or OPENROUTER_API_KEY
        self.model = model or OPENROUTER_DEFAULT_MODEL
        self.base_url = base_url or OPENROUTER_BASE_URL
        self.embedding_model = embedding_model or OPENAI_EMBEDDING_MODEL
        self._client: AsyncOpenAI | None = None

        if not self.api_key:
            raise ConfigError(
                "OpenRouter API key required. Set OPENROUTER_API_KEY in .env"
            )

        logger.info(f"OpenRouter adapter initialized with model: {self.model}")

    async def __aenter__(self) -> "OpenRouterAdapter":
        self._client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            max_retries=0,  # Overload retries belong to the flow retry policy
            timeout=120.0,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.close()
            self._client = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for a simple prompt."""
        messages: list[dict] = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        logger.info(f"Completing prompt ({len(prompt)} chars) with {self.model}")
        logger.debug(f"Temperature: {temperature}, max_tokens: {max_tokens}")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.OpenAIError as e:
            raise _wrap_openai_error(e) from e

        result = response.choices[0].message.content or ""
        logger.info(f"Completion received ({len(result)} chars)")
        logger.debug(f"Usage: {response.usage}")

        return result

    async def embed(self, documents: list[str]) -> list[list[float]]:
        """Embed documents with the configured embedding model."""
        logger.info(f"Embedding {len(documents)} documents with {self.embedding_model}")

        try:
            response = await self.client.embeddings.create(
                model=self.embedding_model,
                input=documents,
            )
        except openai.OpenAIError as e:
            raise _wrap_openai_error(e) from e

        # The API may return items out of order; index restores input order.
        ordered = sorted(response.data, key=lambda item: item.index)
        return [list(item.embedding) for item in ordered]


class AnthropicAdapter(LLMProvider):
    """
    Adapter for Anthropic API (direct).

    Anthropic has no embeddings endpoint, so ``embed`` always fails.

    Usage:
        async with AnthropicAdapter() as llm:
            response = await llm.complete("What is machine learning?")
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ):
        """
        Initialize the Anthropic adapter.

        Args:
            api_key: Optional API key. If not provided, uses ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to claude-3-haiku-20240307.
        """
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model = model or ANTHROPIC_DEFAULT_MODEL
        self._client: anthropic.AsyncAnthropic | None = None

        if not self.api_key:
            raise ConfigError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY in .env"
            )

        logger.info(f"Anthropic adapter initialized with model: {self.model}")

    async def __aenter__(self) -> "AnthropicAdapter":
        self._client = anthropic.AsyncAnthropic(
            api_key=self.api_key,
            max_retries=0,
            timeout=120.0,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.close()
            self._client = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for a simple prompt."""
        logger.info(f"Completing prompt ({len(prompt)} chars) with {self.model}")
        logger.debug(f"Temperature: {temperature}, max_tokens: {max_tokens}")

        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens or 4096,
                system=system_prompt or "",
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
            )
        except anthropic.AnthropicError as e:
            raise _wrap_anthropic_error(e) from e

        result = message.content[0].text if message.content else ""
        logger.info(f"Completion received ({len(result)} chars)")
        logger.debug(f"Usage: input={message.usage.input_tokens}, output={message.usage.output_tokens}")

        return result

    async def embed(self, documents: list[str]) -> list[list[float]]:
        raise ProviderError(f"Anthropic model {self.model} does not support embeddings")

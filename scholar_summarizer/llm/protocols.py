"""Protocol definitions for LLM providers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for LLM providers.

    Providers are constructed explicitly by the entry point and passed into
    every flow; there is no module-level client.
    """

    model: str

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """
        Generate a completion for a simple prompt.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            temperature: Sampling temperature (0-2)
            max_tokens: Maximum tokens to generate

        Returns:
            The generated text

        Raises:
            ProviderError: When the upstream call fails
        """
        ...

    async def embed(self, documents: list[str]) -> list[list[float]]:
        """
        Generate one embedding vector per document, in input order.

        Raises:
            ProviderError: When the upstream call fails or embeddings are unsupported
        """
        ...

"""Document embedding flow."""

import logging
from typing import Any

from ..errors import FlowValidationError
from ..llm.protocols import LLMProvider
from ..llm.retry import DEFAULT_RETRY_POLICY, RetryPolicy
from .base import validate_model
from .models import GenerateEmbeddingsInput

logger = logging.getLogger(__name__)

FLOW_NAME = "generateEmbeddings"


async def generate_embeddings(
    provider: LLMProvider,
    data: GenerateEmbeddingsInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> list[list[float]]:
    """
    Embed every document, one vector per document in input order.

    Nothing ranks by these vectors yet.

    Raises:
        FlowValidationError: Invalid input, or the provider returned the wrong shape
        ProviderError: Upstream failure after retries
    """
    request = validate_model(FLOW_NAME, GenerateEmbeddingsInput, data)
    if not request.documents:
        return []

    policy = retry or DEFAULT_RETRY_POLICY
    vectors = await policy.run(lambda: provider.embed(request.documents))

    if len(vectors) != len(request.documents):
        raise FlowValidationError(
            FLOW_NAME,
            f"expected {len(request.documents)} embeddings, got {len(vectors)}",
        )
    for position, vector in enumerate(vectors):
        if not vector:
            raise FlowValidationError(FLOW_NAME, f"empty embedding at position {position}")

    return [[float(value) for value in vector] for vector in vectors]

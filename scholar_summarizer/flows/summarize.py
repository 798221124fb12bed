"""Abstract summarization flow."""

import logging
from typing import Any

from ..llm.protocols import LLMProvider
from ..llm.retry import RetryPolicy
from .base import complete_with_policy, strip_code_fence, validate_model
from .models import SummarizeAbstractInput, SummarizeAbstractOutput

logger = logging.getLogger(__name__)

FLOW_NAME = "summarizeAbstract"

SYSTEM_PROMPT = "You are an expert scientific summarizer."

PROMPT_TEMPLATE = """Please provide a concise summary of the following research paper abstract.
Reply with the summary text only.

Abstract: {abstract}"""


async def summarize_abstract(
    provider: LLMProvider,
    data: SummarizeAbstractInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> SummarizeAbstractOutput:
    """
    Summarize a research paper abstract.

    An empty abstract is the caller's problem; the flow sends whatever it gets.

    Raises:
        FlowValidationError: Invalid input or an empty model answer
        ProviderError: Upstream failure after retries
    """
    request = validate_model(FLOW_NAME, SummarizeAbstractInput, data)
    prompt = PROMPT_TEMPLATE.format(abstract=request.abstract)

    content = await complete_with_policy(provider, prompt, retry, SYSTEM_PROMPT)
    return validate_model(
        FLOW_NAME, SummarizeAbstractOutput, {"summary": strip_code_fence(content)}
    )

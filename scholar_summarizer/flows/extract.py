"""Structured attribute extraction flow."""

import logging
from typing import Any

from ..errors import FlowValidationError
from ..llm.protocols import LLMProvider
from ..llm.retry import RetryPolicy
from .base import run_json_prompt, validate_model
from .models import (
    NOT_SPECIFIED,
    ExtractAttributesInput,
    ExtractAttributesOutput,
    ExtractedPaperAttributes,
)

logger = logging.getLogger(__name__)

FLOW_NAME = "extractPaperAttributes"

SYSTEM_PROMPT = "You are an expert research assistant."

PROMPT_TEMPLATE = """Your task is to extract specific information from a list of research papers based on requested attributes.

For each paper provided, analyze the title and abstract to extract the following attributes: {attributes}.

If an attribute cannot be explicitly found, infer it if possible, or state "{not_specified}".
Keep the extracted text concise and relevant.

Papers:
{papers}

Respond ONLY with valid JSON, no prose and no markdown, in this format:
{{"results": [{{"paperIndex": 0, "attributes": {{"<attribute>": "<text>"}}}}]}}"""


def _render_papers(request: ExtractAttributesInput) -> str:
    blocks = []
    for index, paper in enumerate(request.papers):
        blocks.append(
            f"---\nPaper Index: {index}\nTitle: {paper.title}\nAbstract: {paper.abstract}\n---"
        )
    return "\n".join(blocks)


def normalize_results(
    request: ExtractAttributesInput,
    output: ExtractAttributesOutput,
) -> ExtractAttributesOutput:
    """Key results by paper index 0..N-1 with every requested attribute present.

    Papers or attributes the model left out become "Not specified".
    """
    by_index: dict[int, dict[str, str | None]] = {}
    for result in output.results:
        if result.paper_index >= len(request.papers):
            raise FlowValidationError(
                FLOW_NAME,
                f"paperIndex {result.paper_index} out of range for {len(request.papers)} papers",
            )
        if result.paper_index in by_index:
            raise FlowValidationError(FLOW_NAME, f"duplicate paperIndex {result.paper_index}")
        by_index[result.paper_index] = result.attributes

    results = []
    for index in range(len(request.papers)):
        extracted = by_index.get(index, {})
        results.append(
            ExtractedPaperAttributes(
                paper_index=index,
                attributes={
                    name: (extracted.get(name) or "").strip() or NOT_SPECIFIED
                    for name in request.attributes
                },
            )
        )
    return ExtractAttributesOutput(results=results)


async def extract_paper_attributes(
    provider: LLMProvider,
    data: ExtractAttributesInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> ExtractAttributesOutput:
    """
    Extract the requested attributes for every paper.

    Output is keyed by paper index, so the order of ``papers`` matters.

    Raises:
        FlowValidationError: Invalid input or output payload
        ProviderError: Upstream failure after retries
    """
    request = validate_model(FLOW_NAME, ExtractAttributesInput, data)
    if not request.papers:
        return ExtractAttributesOutput(results=[])

    prompt = PROMPT_TEMPLATE.format(
        attributes=", ".join(request.attributes),
        not_specified=NOT_SPECIFIED,
        papers=_render_papers(request),
    )

    output = await run_json_prompt(
        FLOW_NAME, provider, prompt, ExtractAttributesOutput, retry, SYSTEM_PROMPT
    )
    return normalize_results(request, output)

"""Shared plumbing for prompt flows: validation, JSON parsing, provider calls."""

import json
import logging
import re
from json import JSONDecodeError
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import FlowValidationError
from ..llm.protocols import LLMProvider
from ..llm.retry import DEFAULT_RETRY_POLICY, RetryPolicy

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?|\n?```\s*$")


def validate_model(flow: str, model_cls: type[M], data: Any) -> M:
    """Coerce a dict (or an instance) into model_cls, raising FlowValidationError."""
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise FlowValidationError(flow, f"invalid payload: {e}") from e


def strip_code_fence(content: str) -> str:
    """Remove a surrounding ```lang ... ``` fence that models like to add."""
    return _FENCE_RE.sub("", content.strip()).strip()


def _extract_first_json_object(content: str) -> dict[str, Any] | None:
    """Extract the first decodable JSON object from an arbitrary string."""
    decoder = json.JSONDecoder()
    for index, char in enumerate(content):
        if char != "{":
            continue
        try:
            candidate, _ = decoder.raw_decode(content[index:])
        except JSONDecodeError:
            continue
        if isinstance(candidate, dict):
            return candidate
    return None


def parse_json_object(flow: str, content: str) -> dict[str, Any]:
    """Parse possibly noisy model output into a JSON object."""
    try:
        parsed = json.loads(strip_code_fence(content))
    except JSONDecodeError:
        parsed = _extract_first_json_object(content)

    if not isinstance(parsed, dict):
        raise FlowValidationError(flow, "model output is not a JSON object")
    return parsed


async def complete_with_policy(
    provider: LLMProvider,
    prompt: str,
    retry: RetryPolicy | None = None,
    system_prompt: str | None = None,
    temperature: float = 0.3,
) -> str:
    """Call provider.complete under the retry policy."""
    policy = retry or DEFAULT_RETRY_POLICY
    return await policy.run(
        lambda: provider.complete(prompt, system_prompt, temperature)
    )


async def run_json_prompt(
    flow: str,
    provider: LLMProvider,
    prompt: str,
    output_model: type[M],
    retry: RetryPolicy | None = None,
    system_prompt: str | None = None,
    temperature: float = 0.3,
) -> M:
    """Run a prompt that must answer with a JSON object matching output_model."""
    content = await complete_with_policy(
        provider, prompt, retry, system_prompt, temperature
    )
    logger.debug(f"{flow} raw output: {content[:200]}")
    return validate_model(flow, output_model, parse_json_object(flow, content))

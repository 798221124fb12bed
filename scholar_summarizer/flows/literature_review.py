"""Literature review synthesis flow."""

import logging
from typing import Any

from ..errors import FlowValidationError
from ..llm.protocols import LLMProvider
from ..llm.retry import RetryPolicy
from .base import complete_with_policy, strip_code_fence, validate_model
from .models import GenerateLiteratureReviewInput, GenerateLiteratureReviewOutput

logger = logging.getLogger(__name__)

FLOW_NAME = "generateLiteratureReview"

SYSTEM_PROMPT = (
    "You are a research assistant with expertise in academic writing, tasked with "
    "creating a literature review from a given set of research papers."
)

REQUIRED_SECTIONS = (
    "Introduction",
    "Thematic Analysis",
    "Conclusion and Future Directions",
)

PROMPT_TEMPLATE = """Your response must be in Markdown format and structured as follows:

# Literature Review

## Introduction
- Briefly introduce the overarching topic and its significance.
- State the purpose of this literature review.

## Thematic Analysis
- Synthesize and group the provided papers by common themes, methodologies, or findings.
- For each theme, create a subheading (e.g., ### Theme 1: [Name of Theme]).
- Discuss the papers within each theme, highlighting their contributions and how they relate to one another.

## Conclusion and Future Directions
- Summarize the key insights and trends identified from the papers.
- Briefly mention any gaps in the literature and suggest potential areas for future research based on the analysis.

Here are the papers (Title and Abstract) to use for the review:
{papers}"""


def _render_papers(request: GenerateLiteratureReviewInput) -> str:
    return "\n".join(
        f"---\nTitle: {paper.title}\nAbstract: {paper.abstract}\n---"
        for paper in request.papers
    )


async def generate_literature_review(
    provider: LLMProvider,
    data: GenerateLiteratureReviewInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> GenerateLiteratureReviewOutput:
    """
    Write a markdown literature review of the given papers.

    No papers means an empty review, produced without calling the model.

    Raises:
        FlowValidationError: Invalid input or an empty model answer
        ProviderError: Upstream failure after retries
    """
    request = validate_model(FLOW_NAME, GenerateLiteratureReviewInput, data)
    if not request.papers:
        return GenerateLiteratureReviewOutput(literature_review="")

    prompt = PROMPT_TEMPLATE.format(papers=_render_papers(request))
    content = strip_code_fence(
        await complete_with_policy(provider, prompt, retry, SYSTEM_PROMPT)
    )

    if not content:
        raise FlowValidationError(FLOW_NAME, "model returned an empty review")

    missing = [section for section in REQUIRED_SECTIONS if section not in content]
    if missing:
        logger.warning(f"Literature review is missing sections: {', '.join(missing)}")

    return GenerateLiteratureReviewOutput(literature_review=content)

"""Similar-paper suggestion flow."""

import logging
from typing import Any

from ..llm.protocols import LLMProvider
from ..llm.retry import RetryPolicy
from .base import run_json_prompt, validate_model
from .models import PaperSummaryInput, SuggestSimilarPapersInput, SuggestSimilarPapersOutput

logger = logging.getLogger(__name__)

FLOW_NAME = "suggestSimilarPapers"

SYSTEM_PROMPT = "You are an expert research assistant."

PROMPT_TEMPLATE = """Given a user's search query and a list of search results, suggest {num_suggestions} similar papers from the provided search results that the user may find helpful, but which they have not already seen.

User Search Query: {search_query}

Search Results:
{search_results}

Respond ONLY with valid JSON, no prose and no markdown, in this format.
Copy each title exactly as it appears in the search results.
{{"papers": [{{"title": "...", "abstract": "..."}}]}}"""


def _render_results(papers: list[PaperSummaryInput]) -> str:
    return "\n".join(
        f"Title: {paper.title}\nAbstract: {paper.abstract}" for paper in papers
    )


async def suggest_similar_papers(
    provider: LLMProvider,
    data: SuggestSimilarPapersInput | dict[str, Any],
    retry: RetryPolicy | None = None,
) -> list[PaperSummaryInput]:
    """
    Ask the model which of the search results the user should look at next.

    The returned pairs are model-generated; callers re-match them to their
    own papers by title.

    Raises:
        FlowValidationError: Invalid input or output payload
        ProviderError: Upstream failure after retries
    """
    request = validate_model(FLOW_NAME, SuggestSimilarPapersInput, data)
    if not request.search_results:
        return []

    prompt = PROMPT_TEMPLATE.format(
        num_suggestions=request.num_suggestions,
        search_query=request.search_query,
        search_results=_render_results(request.search_results),
    )

    output = await run_json_prompt(
        FLOW_NAME, provider, prompt, SuggestSimilarPapersOutput, retry, SYSTEM_PROMPT
    )
    suggestions = output.papers[: request.num_suggestions]
    logger.info(f"Model suggested {len(suggestions)} papers for '{request.search_query}'")
    return suggestions

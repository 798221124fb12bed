"""Prompt flows: typed LLM-backed operations over papers.

Every flow takes an explicitly constructed LLMProvider and an optional
RetryPolicy:

    async with OpenRouterAdapter() as llm:
        output = await summarize_abstract(llm, {"abstract": paper.abstract})
"""

from .models import (
    NOT_SPECIFIED,
    ExtractAttributesInput,
    ExtractAttributesOutput,
    ExtractedPaperAttributes,
    GenerateEmbeddingsInput,
    GenerateLiteratureReviewInput,
    GenerateLiteratureReviewOutput,
    PaperSummaryInput,
    SuggestSimilarPapersInput,
    SuggestSimilarPapersOutput,
    SummarizeAbstractInput,
    SummarizeAbstractOutput,
)
from .summarize import summarize_abstract
from .suggest import suggest_similar_papers
from .extract import extract_paper_attributes
from .literature_review import generate_literature_review
from .embeddings import generate_embeddings

__all__ = [
    # Contracts
    "NOT_SPECIFIED",
    "PaperSummaryInput",
    "SummarizeAbstractInput",
    "SummarizeAbstractOutput",
    "SuggestSimilarPapersInput",
    "SuggestSimilarPapersOutput",
    "ExtractAttributesInput",
    "ExtractAttributesOutput",
    "ExtractedPaperAttributes",
    "GenerateLiteratureReviewInput",
    "GenerateLiteratureReviewOutput",
    "GenerateEmbeddingsInput",
    # Flows
    "summarize_abstract",
    "suggest_similar_papers",
    "extract_paper_attributes",
    "generate_literature_review",
    "generate_embeddings",
]

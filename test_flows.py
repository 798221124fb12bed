"""Prompt flow tests against the scripted mock provider."""

import asyncio
import json
import random

import pytest

from scholar_summarizer.config.factory import MockLLMProvider
from scholar_summarizer.errors import FlowValidationError, ProviderError
from scholar_summarizer.flows import (
    NOT_SPECIFIED,
    extract_paper_attributes,
    generate_embeddings,
    generate_literature_review,
    suggest_similar_papers,
    summarize_abstract,
)
from scholar_summarizer.llm.retry import RetryPolicy

FAST_RETRY = RetryPolicy(max_retries=1, initial_delay_ms=1)

PAPERS = [
    {"title": "Quantum Error Correction", "abstract": "Surface codes at scale."},
    {"title": "Variational Quantum Eigensolvers", "abstract": "Hybrid chemistry."},
    {"title": "Quantum Advantage in Sampling", "abstract": "Boson sampling results."},
]


@pytest.fixture(autouse=True)
def no_jitter(monkeypatch):
    monkeypatch.setattr(random, "random", lambda: 0.0)


def run(coro):
    return asyncio.run(coro)


# -----------------------------------------------------------------------------
# summarizeAbstract
# -----------------------------------------------------------------------------


def test_summarize_returns_model_text():
    llm = MockLLMProvider(["Surface codes reduce logical error rates."])
    output = run(summarize_abstract(llm, {"abstract": "Surface codes at scale."}, FAST_RETRY))

    assert output.summary == "Surface codes reduce logical error rates."
    assert "Surface codes at scale." in llm.prompts[0]


def test_summarize_rejects_empty_output():
    llm = MockLLMProvider(["   "])
    with pytest.raises(FlowValidationError) as excinfo:
        run(summarize_abstract(llm, {"abstract": "Anything."}, FAST_RETRY))
    assert excinfo.value.flow == "summarizeAbstract"


def test_summarize_rejects_invalid_input():
    llm = MockLLMProvider()
    with pytest.raises(FlowValidationError):
        run(summarize_abstract(llm, {"text": "wrong field"}, FAST_RETRY))
    assert llm.prompts == []


# -----------------------------------------------------------------------------
# suggestSimilarPapers
# -----------------------------------------------------------------------------


def test_suggest_parses_fenced_json_and_truncates():
    payload = {"papers": [PAPERS[2], PAPERS[1]]}
    llm = MockLLMProvider([f"```json\n{json.dumps(payload)}\n```"])
    data = {"searchQuery": "quantum", "searchResults": PAPERS, "numSuggestions": 1}

    suggestions = run(suggest_similar_papers(llm, data, FAST_RETRY))

    assert [s.title for s in suggestions] == ["Quantum Advantage in Sampling"]
    assert "User Search Query: quantum" in llm.prompts[0]
    assert "suggest 1 similar papers" in llm.prompts[0]


def test_suggest_tolerates_prose_around_json():
    payload = {"papers": [PAPERS[0]]}
    llm = MockLLMProvider([f"Sure! Here you go: {json.dumps(payload)} Enjoy."])
    data = {"searchQuery": "quantum", "searchResults": PAPERS, "numSuggestions": 3}

    suggestions = run(suggest_similar_papers(llm, data, FAST_RETRY))
    assert [s.title for s in suggestions] == ["Quantum Error Correction"]


def test_suggest_with_no_results_skips_model():
    llm = MockLLMProvider()
    data = {"searchQuery": "quantum", "searchResults": [], "numSuggestions": 3}
    assert run(suggest_similar_papers(llm, data, FAST_RETRY)) == []
    assert llm.prompts == []


def test_suggest_rejects_non_json_output():
    llm = MockLLMProvider(["I could not find anything similar."])
    data = {"searchQuery": "quantum", "searchResults": PAPERS, "numSuggestions": 2}
    with pytest.raises(FlowValidationError):
        run(suggest_similar_papers(llm, data, FAST_RETRY))


def test_suggest_requires_positive_count():
    llm = MockLLMProvider()
    data = {"searchQuery": "quantum", "searchResults": PAPERS, "numSuggestions": 0}
    with pytest.raises(FlowValidationError):
        run(suggest_similar_papers(llm, data, FAST_RETRY))


# -----------------------------------------------------------------------------
# extractPaperAttributes
# -----------------------------------------------------------------------------


def test_extract_fills_missing_papers_and_attributes():
    payload = {
        "results": [
            {"paperIndex": 2, "attributes": {"Methods": "Boson sampling", "Dataset": ""}},
            {"paperIndex": 0, "attributes": {"Methods": "Surface codes", "Extra": "x"}},
        ]
    }
    llm = MockLLMProvider([json.dumps(payload)])
    data = {"papers": PAPERS, "attributes": ["Methods", "Dataset"]}

    output = run(extract_paper_attributes(llm, data, FAST_RETRY))

    assert [r.paper_index for r in output.results] == [0, 1, 2]
    assert output.results[0].attributes == {"Methods": "Surface codes", "Dataset": NOT_SPECIFIED}
    assert output.results[1].attributes == {"Methods": NOT_SPECIFIED, "Dataset": NOT_SPECIFIED}
    assert output.results[2].attributes == {"Methods": "Boson sampling", "Dataset": NOT_SPECIFIED}
    assert "Paper Index: 1" in llm.prompts[0]
    assert "Methods, Dataset" in llm.prompts[0]


def test_extract_rejects_out_of_range_index():
    payload = {"results": [{"paperIndex": 7, "attributes": {"Methods": "?"}}]}
    llm = MockLLMProvider([json.dumps(payload)])
    data = {"papers": PAPERS, "attributes": ["Methods"]}
    with pytest.raises(FlowValidationError, match="out of range"):
        run(extract_paper_attributes(llm, data, FAST_RETRY))


def test_extract_treats_null_attribute_as_not_specified():
    payload = {"results": [{"paperIndex": 0, "attributes": {"Methods": "X", "Dataset": None}}]}
    llm = MockLLMProvider([json.dumps(payload)])
    data = {"papers": PAPERS[:1], "attributes": ["Methods", "Dataset"]}

    output = run(extract_paper_attributes(llm, data, FAST_RETRY))

    assert output.results[0].attributes == {"Methods": "X", "Dataset": NOT_SPECIFIED}


def test_extract_rejects_duplicate_index():
    result = {"paperIndex": 0, "attributes": {"Methods": "?"}}
    llm = MockLLMProvider([json.dumps({"results": [result, result]})])
    data = {"papers": PAPERS, "attributes": ["Methods"]}
    with pytest.raises(FlowValidationError, match="duplicate"):
        run(extract_paper_attributes(llm, data, FAST_RETRY))


def test_extract_requires_attributes():
    llm = MockLLMProvider()
    with pytest.raises(FlowValidationError):
        run(extract_paper_attributes(llm, {"papers": PAPERS, "attributes": []}, FAST_RETRY))


def test_extract_with_no_papers_skips_model():
    llm = MockLLMProvider()
    output = run(extract_paper_attributes(llm, {"papers": [], "attributes": ["Methods"]}))
    assert output.results == []
    assert llm.prompts == []


# -----------------------------------------------------------------------------
# generateLiteratureReview
# -----------------------------------------------------------------------------


REVIEW = """# Literature Review

## Introduction
Quantum computing.

## Thematic Analysis
### Theme 1: Error correction

## Conclusion and Future Directions
More qubits."""


def test_review_of_no_papers_is_empty_without_model_call():
    llm = MockLLMProvider()
    output = run(generate_literature_review(llm, {"papers": []}, FAST_RETRY))
    assert output.literature_review == ""
    assert llm.prompts == []


def test_review_returns_markdown():
    llm = MockLLMProvider([f"```markdown\n{REVIEW}\n```"])
    output = run(generate_literature_review(llm, {"papers": PAPERS}, FAST_RETRY))

    assert output.literature_review == REVIEW
    for paper in PAPERS:
        assert f"Title: {paper['title']}" in llm.prompts[0]


def test_review_rejects_empty_output():
    llm = MockLLMProvider([""])
    with pytest.raises(FlowValidationError):
        run(generate_literature_review(llm, {"papers": PAPERS}, FAST_RETRY))


# -----------------------------------------------------------------------------
# generateEmbeddings
# -----------------------------------------------------------------------------


def test_embeddings_one_vector_per_document():
    llm = MockLLMProvider(embedding_dim=4)
    documents = ["first", "second", "first"]

    vectors = run(generate_embeddings(llm, {"documents": documents}, FAST_RETRY))

    assert len(vectors) == 3
    assert all(len(v) == 4 for v in vectors)
    assert vectors[0] == vectors[2]
    assert llm.embed_calls == [documents]


def test_embeddings_wrong_count_is_rejected():
    class ShortEmbedder(MockLLMProvider):
        async def embed(self, documents):
            return [[0.1, 0.2]]

    with pytest.raises(FlowValidationError, match="expected 2 embeddings"):
        run(generate_embeddings(ShortEmbedder(), {"documents": ["a", "b"]}, FAST_RETRY))


def test_embeddings_of_nothing_skips_provider():
    llm = MockLLMProvider()
    assert run(generate_embeddings(llm, {"documents": []})) == []
    assert llm.embed_calls == []


# -----------------------------------------------------------------------------
# Retry through flows
# -----------------------------------------------------------------------------


def test_flow_retries_overloaded_provider():
    llm = MockLLMProvider([ProviderError("model overloaded", status_code=503), "Recovered."])
    output = run(summarize_abstract(llm, {"abstract": "Text."}, FAST_RETRY))

    assert output.summary == "Recovered."
    assert len(llm.prompts) == 2


def test_flow_gives_up_after_policy_exhausted():
    overloaded = ProviderError("503 Service Unavailable", status_code=503)
    llm = MockLLMProvider([overloaded, overloaded, "too late"])

    with pytest.raises(ProviderError):
        run(generate_literature_review(llm, {"papers": PAPERS}, FAST_RETRY))
    assert len(llm.prompts) == 2


def test_flow_does_not_retry_other_errors():
    llm = MockLLMProvider([ProviderError("invalid api key", status_code=401), "never"])
    with pytest.raises(ProviderError):
        run(summarize_abstract(llm, {"abstract": "Text."}, FAST_RETRY))
    assert len(llm.prompts) == 1

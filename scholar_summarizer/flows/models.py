"""Request and response contracts for the prompt flows."""

from pydantic import BaseModel, Field

from ..paper_sources.models import Paper

NOT_SPECIFIED = "Not specified"


class FlowModel(BaseModel):
    model_config = {"populate_by_name": True}


class PaperSummaryInput(FlowModel):
    """The title/abstract pair a flow sees of a paper."""

    title: str
    abstract: str

    @classmethod
    def from_paper(cls, paper: Paper) -> "PaperSummaryInput":
        return cls(title=paper.title, abstract=paper.abstract or "")


class SummarizeAbstractInput(FlowModel):
    abstract: str


class SummarizeAbstractOutput(FlowModel):
    summary: str = Field(..., min_length=1)


class SuggestSimilarPapersInput(FlowModel):
    search_query: str = Field(..., alias="searchQuery")
    search_results: list[PaperSummaryInput] = Field(..., alias="searchResults")
    num_suggestions: int = Field(..., alias="numSuggestions", ge=1)


class SuggestSimilarPapersOutput(FlowModel):
    papers: list[PaperSummaryInput] = Field(default_factory=list)


class ExtractAttributesInput(FlowModel):
    papers: list[PaperSummaryInput]
    attributes: list[str] = Field(..., min_length=1)


class ExtractedPaperAttributes(FlowModel):
    paper_index: int = Field(..., alias="paperIndex", ge=0)
    attributes: dict[str, str | None] = Field(default_factory=dict)


class ExtractAttributesOutput(FlowModel):
    results: list[ExtractedPaperAttributes] = Field(default_factory=list)


class GenerateLiteratureReviewInput(FlowModel):
    papers: list[PaperSummaryInput]


class GenerateLiteratureReviewOutput(FlowModel):
    literature_review: str = Field(..., alias="literatureReview")


class GenerateEmbeddingsInput(FlowModel):
    documents: list[str]

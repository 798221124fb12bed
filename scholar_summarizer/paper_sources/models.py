"""Pydantic models for the canonical paper record and search requests."""

from pydantic import BaseModel, Field, field_validator, model_validator


class Author(BaseModel):
    """Author information."""

    name: str
    author_id: str | None = Field(None, alias="authorId")

    model_config = {"populate_by_name": True, "frozen": True}


class Journal(BaseModel):
    """Venue a paper was published in."""

    name: str
    volume: str | None = None
    pages: str | None = None

    model_config = {"frozen": True}


class Paper(BaseModel):
    """Normalized, source-independent paper record.

    Built once per search response and never mutated afterwards.
    """

    paper_id: str = Field(..., alias="paperId")
    url: str | None = None
    title: str
    abstract: str | None = None
    authors: list[Author] = Field(default_factory=list)
    year: int | None = None
    journal: Journal | None = None
    is_open_access: bool = Field(False, alias="isOpenAccess")

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _require_identity(self) -> "Paper":
        if not self.title.strip() and not self.paper_id.strip():
            raise ValueError("paper needs a title or a paper id")
        return self


class SearchRequest(BaseModel):
    """One page of a federated search."""

    query: str
    year: int | None = None
    offset: int = Field(0, ge=0)

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        return value.strip()


class SearchPapersResult(BaseModel):
    """Outcome of a federated search: either papers or an error, never both."""

    papers: list[Paper] | None = None
    error: str | None = None

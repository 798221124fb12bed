"""Command-line interface for the scholar summarizer."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import TypeAdapter

from .actions import (
    extract_paper_attributes_action,
    generate_literature_review_action,
    suggest_papers_action,
    summarize_abstract_action,
)
from .citations import generate_bibtex
from .config.factory import create_llm_provider, create_search_provider
from .config.loader import DEFAULT_CONFIG_PATH, load_config
from .errors import ConfigError
from .flows import PaperSummaryInput
from .paper_sources.models import Paper

app = typer.Typer(
    name="scholar",
    help="Search academic papers across sources and summarize them with an LLM.",
    add_completion=False,
)

_papers_adapter = TypeAdapter(list[Paper])

ProfileOption = Annotated[
    str,
    typer.Option("--profile", "-p", help="Configuration profile (default: MODEL_PROFILE)"),
]


def _load_papers(path: Path) -> list[Paper]:
    """Read papers saved by `scholar search --output`."""
    return _papers_adapter.validate_json(path.read_text())


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _paper_inputs(papers: list[Paper]) -> list[dict]:
    return [PaperSummaryInput.from_paper(p).model_dump() for p in papers]


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Search query for papers")],
    year: Annotated[
        int,
        typer.Option("--year", "-y", help="Only papers published in this year"),
    ] = None,
    offset: Annotated[
        int,
        typer.Option("--offset", help="Per-source pagination offset (pages of 10)"),
    ] = 0,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Also save the papers as JSON to this file"),
    ] = None,
    profile: ProfileOption = None,
):
    """
    Search arXiv, Semantic Scholar, CrossRef and CORE at once.

    Examples:

        scholar search "quantum computing" --year 2023

        scholar search "graph neural networks" --offset 10 -o papers.json
    """
    config = load_config(profile)
    result = asyncio.run(_search_async(query, year, offset, config.sources))

    if result.error:
        _fail(result.error)

    papers = result.papers or []
    if output:
        output.write_text(_papers_adapter.dump_json(papers, by_alias=True, indent=2).decode())

    if output_format == "json":
        typer.echo(_papers_adapter.dump_json(papers, by_alias=True, indent=2).decode())
        return

    if not papers:
        typer.echo("No more papers found.")
        return

    typer.echo(f"Found {len(papers)} papers:\n")
    for i, p in enumerate(papers, offset + 1):
        access = "[OA]" if p.is_open_access else "    "
        typer.echo(f"{i}. {access} {p.title}")
        typer.echo(f"   Year: {p.year or 'N/A'} | Journal: {p.journal.name if p.journal else 'N/A'}")
        if p.authors:
            authors = ", ".join(a.name for a in p.authors[:3])
            if len(p.authors) > 3:
                authors += f" (+{len(p.authors) - 3} more)"
            typer.echo(f"   Authors: {authors}")
        typer.echo(f"   ID: {p.paper_id}")
        typer.echo()


async def _search_async(query, year, offset, sources_config):
    async with create_search_provider(sources_config) as composite:
        return await composite.search_papers(query, year, offset)


@app.command()
def summarize(
    abstract: Annotated[str, typer.Argument(help="Abstract text to summarize")],
    profile: ProfileOption = None,
):
    """Summarize one abstract."""
    result = asyncio.run(_with_llm(profile, lambda llm, retry: summarize_abstract_action(llm, abstract, retry)))
    if result.error:
        _fail(result.error)
    typer.echo(result.summary)


@app.command()
def suggest(
    query: Annotated[str, typer.Argument(help="The original search query")],
    papers_file: Annotated[Path, typer.Argument(help="Papers JSON from `scholar search -o`")],
    count: Annotated[int, typer.Option("--count", "-n", help="Number of suggestions")] = 3,
    profile: ProfileOption = None,
):
    """Suggest papers from a saved result list worth reading next."""
    papers = _load_papers(papers_file)
    data = {
        "searchQuery": query,
        "searchResults": _paper_inputs(papers),
        "numSuggestions": count,
    }
    result = asyncio.run(
        _with_llm(profile, lambda llm, retry: suggest_papers_action(llm, data, papers, retry))
    )
    if result.error:
        _fail(result.error)
    for p in result.papers or []:
        typer.echo(f"- {p.title} ({p.year or 'N/A'})")


@app.command()
def review(
    papers_file: Annotated[Path, typer.Argument(help="Papers JSON from `scholar search -o`")],
    profile: ProfileOption = None,
):
    """Write a markdown literature review of the saved papers."""
    papers = _load_papers(papers_file)
    data = {"papers": _paper_inputs(papers)}
    result = asyncio.run(
        _with_llm(profile, lambda llm, retry: generate_literature_review_action(llm, data, retry))
    )
    if result.error:
        _fail(result.error)
    typer.echo(result.literature_review)


@app.command()
def extract(
    papers_file: Annotated[Path, typer.Argument(help="Papers JSON from `scholar search -o`")],
    attributes: Annotated[
        list[str],
        typer.Option("--attribute", "-a", help="Attribute to extract (repeatable)"),
    ],
    profile: ProfileOption = None,
):
    """
    Extract attributes (e.g. Methods, Results) from each saved paper.

    Example:

        scholar extract papers.json -a Methods -a Limitations
    """
    papers = _load_papers(papers_file)
    data = {"papers": _paper_inputs(papers), "attributes": attributes}
    result = asyncio.run(
        _with_llm(profile, lambda llm, retry: extract_paper_attributes_action(llm, data, retry))
    )
    if result.error:
        _fail(result.error)

    rows = [
        {"title": papers[row.paper_index].title, **row.attributes}
        for row in result.data or []
    ]
    typer.echo(json.dumps(rows, indent=2))


@app.command()
def cite(
    papers_file: Annotated[Path, typer.Argument(help="Papers JSON from `scholar search -o`")],
):
    """Print BibTeX entries for the saved papers."""
    for paper in _load_papers(papers_file):
        typer.echo(generate_bibtex(paper))
        typer.echo()


@app.command()
def profiles():
    """List available configuration profiles."""
    with open(DEFAULT_CONFIG_PATH) as f:
        data = yaml.safe_load(f)

    typer.echo("Available profiles:\n")
    for name, profile in data.get("profiles", {}).items():
        llm = profile.get("llm", {})
        sources = profile.get("sources", {}).get("providers", ["all"])

        typer.echo(f"  {name}")
        typer.echo(f"    LLM: {llm.get('backend', 'openrouter')} {llm.get('model') or ''}".rstrip())
        typer.echo(f"    Sources: {', '.join(sources)}")
        typer.echo()


async def _with_llm(profile_name, run):
    """Build the profile's LLM provider, run one action with it, and close it."""
    config = load_config(profile_name)
    try:
        llm = create_llm_provider(config.llm)
    except ConfigError as e:
        _fail(str(e))
    async with llm:
        return await run(llm, config.retry.to_policy())


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

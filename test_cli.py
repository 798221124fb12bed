"""CLI tests for the commands that need no network."""

import json

from typer.testing import CliRunner

from scholar_summarizer.cli import app

runner = CliRunner()

PAPERS = [
    {
        "paperId": "arxiv:1706.03762",
        "title": "Attention Is All You Need",
        "abstract": "The dominant sequence transduction models...",
        "authors": [{"name": "Ashish Vaswani"}],
        "year": 2017,
        "isOpenAccess": True,
    }
]


def test_cite_prints_bibtex(tmp_path):
    papers_file = tmp_path / "papers.json"
    papers_file.write_text(json.dumps(PAPERS))

    result = runner.invoke(app, ["cite", str(papers_file)])

    assert result.exit_code == 0
    assert "@article{Vaswani2017Attention," in result.output
    assert "author = {Ashish Vaswani}," in result.output


def test_profiles_lists_bundled_profiles():
    result = runner.invoke(app, ["profiles"])

    assert result.exit_code == 0
    for name in ("default", "anthropic", "open-sources-only", "test"):
        assert name in result.output
    assert "Sources: arxiv, crossref" in result.output


def test_summarize_empty_abstract_fails():
    result = runner.invoke(app, ["summarize", "   ", "--profile", "test"])

    assert result.exit_code == 1
    assert "Abstract is empty." in result.output


def test_review_of_empty_list_succeeds(tmp_path):
    papers_file = tmp_path / "papers.json"
    papers_file.write_text("[]")

    result = runner.invoke(app, ["review", str(papers_file), "--profile", "test"])

    assert result.exit_code == 0
    assert result.output.strip() == ""

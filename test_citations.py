"""BibTeX formatting tests."""

from scholar_summarizer.citations import citation_key, generate_bibtex
from scholar_summarizer.paper_sources import Author, Journal, Paper


def test_full_entry():
    paper = Paper(
        paper_id="arxiv:1706.03762",
        title="Attention Is All You Need",
        authors=[Author(name="Ashish Vaswani"), Author(name="Noam Shazeer")],
        year=2017,
        journal=Journal(name="NeurIPS", volume="30", pages="5998-6008"),
        url="https://arxiv.org/abs/1706.03762",
    )

    assert generate_bibtex(paper) == "\n".join(
        [
            "@article{Vaswani2017Attention,",
            "  title = {{Attention Is All You Need}},",
            "  author = {Ashish Vaswani and Noam Shazeer},",
            "  journal = {{NeurIPS}},",
            "  volume = {30},",
            "  pages = {5998-6008},",
            "  year = {2017},",
            "  url = {https://arxiv.org/abs/1706.03762},",
            "}",
        ]
    )


def test_empty_fields_are_omitted():
    paper = Paper(paper_id="10.1/x", title="Sparse Paper")
    entry = generate_bibtex(paper)

    assert entry.splitlines() == [
        "@article{UnknownSparse,",
        "  title = {{Sparse Paper}},",
        "}",
    ]


def test_citation_key_keeps_only_alphanumerics():
    paper = Paper(
        paper_id="1",
        title="Deep-Learning: A Review",
        authors=[Author(name="Cathy O'Neil")],
        year=2020,
    )
    assert citation_key(paper) == "ONeil2020DeepLearning"

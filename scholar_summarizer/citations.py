"""BibTeX citation formatting."""

import re

from .paper_sources.models import Paper

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def citation_key(paper: Paper) -> str:
    """First author's last name + year + first title word, alphanumerics only."""
    last_name = "Unknown"
    if paper.authors and paper.authors[0].name.split():
        last_name = paper.authors[0].name.split()[-1]
    first_word = paper.title.split()[0] if paper.title.split() else "NoTitle"
    return _NON_ALNUM_RE.sub("", f"{last_name}{paper.year or ''}{first_word}")


def generate_bibtex(paper: Paper) -> str:
    """
    Generate a BibTeX @article entry for a paper.

    Fields without a value are left out.
    """
    journal = paper.journal
    fields = {
        "title": f"{{{paper.title}}}",
        "author": " and ".join(a.name for a in paper.authors) or None,
        "journal": f"{{{journal.name}}}" if journal and journal.name else None,
        "volume": journal.volume if journal else None,
        "pages": journal.pages if journal else None,
        "year": paper.year,
        "url": paper.url,
    }

    lines = [f"@article{{{citation_key(paper)},"]
    for key, value in fields.items():
        if value:
            lines.append(f"  {key} = {{{value}}},")
    lines.append("}")
    return "\n".join(lines)

"""Text cleanup helpers shared by the source adapters."""

import html
import re

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return _WS_RE.sub(" ", text).strip()


def strip_markup(text: str | None) -> str | None:
    """Strip HTML/JATS tags and entities from an abstract.

    Returns None when nothing but markup was present.
    """
    if not text:
        return None
    cleaned = collapse_whitespace(html.unescape(_TAG_RE.sub("", text)))
    return cleaned or None

"""
Plain-text helpers for feed-supplied HTML snippets.
"""
from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")


def strip_html(html: Optional[str]) -> str:
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: Optional[str], limit: int) -> str:
    """Strip markup and cut to ``limit`` characters, marking the cut with '...'."""
    clean = strip_html(text)
    if len(clean) <= limit:
        return clean
    return clean[:limit] + "..."

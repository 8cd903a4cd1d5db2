"""
Canonical identity of an article: its link.
"""
from __future__ import annotations

from typing import Optional, Tuple

SENTINEL_LINK = "#"
TITLE_FIELD = "title"
DESC_FIELD = "desc"
CACHE_FIELDS = (TITLE_FIELD, DESC_FIELD)

_SAFE_SCHEMES = ("https://", "http://")


def canonical_link(raw: Optional[str]) -> str:
    if not raw:
        return SENTINEL_LINK
    trimmed = raw.strip()
    if trimmed.startswith(_SAFE_SCHEMES):
        return trimmed
    return SENTINEL_LINK


def is_sentinel(link: Optional[str]) -> bool:
    return not link or link == SENTINEL_LINK


def cache_key(link: str, field: str) -> str:
    if field not in CACHE_FIELDS:
        raise ValueError(f"Unknown cache field '{field}'")
    return f"{link}::{field}"


def split_cache_key(key: str) -> Tuple[str, str]:
    # Links may contain "::" themselves, the field is always the last segment.
    link, sep, field = key.rpartition("::")
    if not sep:
        return key, ""
    return link, field

"""
Shared helpers for RSS ingestion.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

import feedparser

from crawler.schemas.models import FeedEntry

logger = logging.getLogger(__name__)


def parse_feed_entries(feed_content: bytes, source: str) -> List[FeedEntry]:
    feed = feedparser.parse(feed_content)
    if getattr(feed, "bozo", False) and not getattr(feed, "entries", None):
        # feedparser never raises; an unusable document only shows up as bozo.
        raise ValueError(f"Unparseable feed for {source}: {getattr(feed, 'bozo_exception', 'unknown error')}")

    items: List[FeedEntry] = []
    for entry in getattr(feed, "entries", []):
        published_at = _parse_datetime(
            getattr(entry, "published_parsed", None) or getattr(entry, "updated_parsed", None)
        )
        items.append(
            FeedEntry(
                source=source,
                title=getattr(entry, "title", "") or "",
                link=getattr(entry, "link", "") or "",
                summary=_entry_summary(entry),
                published_at=published_at,
            )
        )
    logger.debug("Parsed %d entries for %s", len(items), source)
    return items


def _entry_summary(entry) -> Optional[str]:
    summary = getattr(entry, "summary", None) or getattr(entry, "description", None)
    if not summary:
        content = getattr(entry, "content", None) or []
        if content:
            summary = content[0].get("value")
    return summary.strip() if summary else None


def _parse_datetime(struct_time) -> Optional[datetime]:
    if not struct_time:
        return None
    return datetime(*struct_time[:6], tzinfo=timezone.utc)

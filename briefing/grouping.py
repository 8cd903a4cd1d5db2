"""
Day partitioning and the source-diverse headline selection.
"""
from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Dict, List, Sequence

from briefing.models import Article


def day_key(published_at: datetime, tz: tzinfo = timezone.utc) -> str:
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    return published_at.astimezone(tz).date().isoformat()


def group_by_day(articles: Sequence[Article], tz: tzinfo = timezone.utc) -> Dict[str, List[Article]]:
    groups: Dict[str, List[Article]] = {}
    for article in articles:
        groups.setdefault(day_key(article.published_at, tz), []).append(article)
    return groups


def sorted_day_keys(groups: Dict[str, List[Article]]) -> List[str]:
    return sorted(groups, reverse=True)


def select_top(articles: Sequence[Article], n: int = 5) -> List[Article]:
    """
    Pick up to ``n`` headlines from a newest-first list.

    The first pass admits at most one article per source. If that leaves free
    slots, a second pass fills them in list order with the articles not yet
    picked, whatever their source.
    """
    top: List[Article] = []
    picked = set()
    used_sources = set()
    for article in articles:
        if len(top) >= n:
            break
        if article.source in used_sources:
            continue
        top.append(article)
        picked.add(article.link)
        used_sources.add(article.source)

    for article in articles:
        if len(top) >= n:
            break
        if article.link not in picked:
            top.append(article)
            picked.add(article.link)
    return top

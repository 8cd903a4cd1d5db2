"""
Merge freshly fetched articles with the curated subset of the last snapshot.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, List

from crawler.pipelines.dedupe import dedupe_by_key

from briefing.models import Article

logger = logging.getLogger(__name__)


def filter_by_date(articles: Iterable[Article], days: int, now: datetime) -> List[Article]:
    cutoff = now - timedelta(days=days)
    return [article for article in articles if article.published_at >= cutoff]


def deduplicate(articles: Iterable[Article]) -> List[Article]:
    """First occurrence of each link wins, the ``#`` sentinel included."""
    return dedupe_by_key(articles, key_fn=lambda article: article.link)


def sort_by_date(articles: Iterable[Article]) -> List[Article]:
    return sorted(articles, key=lambda article: article.published_at, reverse=True)


def curated_subset(articles: Iterable[Article]) -> List[Article]:
    return [article for article in articles if article.curated]


def merge_articles(fresh: List[Article], curated: List[Article], days: int, now: datetime) -> List[Article]:
    # Step 1: Trailing date window (curated entries are exempt)
    recent = filter_by_date(fresh, days, now)
    logger.info("After date filter (%d days): %d", days, len(recent))

    # Step 2: Remove duplicates among fresh items
    recent = deduplicate(recent)
    logger.info("After deduplication: %d", len(recent))

    # Step 3: Curated entries win against fresh copies of the same link
    combined = deduplicate([*curated, *recent])

    # Step 4: Newest first
    combined = sort_by_date(combined)
    logger.info("Final article count: %d (%d curated)", len(combined), len(curated))
    return combined

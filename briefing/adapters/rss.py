"""
Adapter that fetches and normalizes one RSS/Atom feed using the crawler helpers.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import List, Tuple

from crawler.infra.http import AsyncHttpFetcher
from crawler.ingesters.rss_base import parse_feed_entries
from crawler.schemas.models import FeedEntry

from briefing.errors import FeedFetchError
from briefing.identity import canonical_link
from briefing.models import Article, FeedConfig, FeedStatus

logger = logging.getLogger(__name__)


class RssFeedAdapter:
    def __init__(self, config: FeedConfig) -> None:
        self.config = config
        self.name = config.source

    async def fetch(self, fetcher: AsyncHttpFetcher, *, now: datetime) -> Tuple[List[Article], FeedStatus]:
        start = time.time()
        try:
            content = await fetcher.fetch(self.config.url)
            entries = parse_feed_entries(content, self.config.source)
        except Exception as exc:
            error = FeedFetchError(f"{self.config.url}: {exc}")
            logger.error("[ERROR] %s: %s", self.name, error)
            return [], FeedStatus(
                name=self.name,
                healthy=False,
                last_error=str(error),
                latency_ms=(time.time() - start) * 1000,
            )

        articles = [self._to_article(entry, now) for entry in entries]
        logger.info("[OK] %s: %d articles", self.name, len(articles))
        return articles, FeedStatus(
            name=self.name,
            healthy=True,
            items_last_fetch=len(articles),
            latency_ms=(time.time() - start) * 1000,
        )

    def _to_article(self, entry: FeedEntry, now: datetime) -> Article:
        return Article(
            title=entry.title,
            link=canonical_link(entry.link),
            description=entry.summary or "",
            published_at=entry.published_at or now,
            source=self.config.source,
            category=self.config.category,
        )

"""
Adapter protocol + concurrent scatter/gather over all configured feeds.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Protocol, Sequence, Tuple

from crawler.infra.http import AsyncHttpFetcher

from briefing.models import Article, FeedStatus

logger = logging.getLogger(__name__)


class SourceAdapter(Protocol):
    name: str

    async def fetch(self, fetcher: AsyncHttpFetcher, *, now: datetime) -> Tuple[List[Article], FeedStatus]:
        ...


async def fetch_all(
    adapters: Sequence[SourceAdapter],
    fetcher: AsyncHttpFetcher,
    *,
    now: datetime,
    timeout: float,
) -> Tuple[List[Article], List[FeedStatus]]:
    """
    Run every adapter concurrently and wait until all of them settled.

    A failing or slow feed contributes no articles and an unhealthy status; it
    never cancels its siblings. Articles keep the adapters' configured order.
    """

    async def run_one(adapter: SourceAdapter) -> Tuple[List[Article], FeedStatus]:
        try:
            return await asyncio.wait_for(adapter.fetch(fetcher, now=now), timeout=timeout)
        except asyncio.TimeoutError:
            logger.error("[ERROR] %s: no response within %.0fs", adapter.name, timeout)
            return [], FeedStatus(name=adapter.name, healthy=False, last_error=f"timeout after {timeout}s")
        except Exception as exc:
            logger.error("[ERROR] %s: %s", adapter.name, exc)
            return [], FeedStatus(name=adapter.name, healthy=False, last_error=str(exc))

    results = await asyncio.gather(*(run_one(adapter) for adapter in adapters))

    articles: List[Article] = []
    statuses: List[FeedStatus] = []
    for items, status in results:
        articles.extend(items)
        statuses.append(status)
    logger.info("Fetched %d articles from %d feeds (%d failed)",
                len(articles), len(statuses), sum(1 for s in statuses if not s.healthy))
    return articles, statuses

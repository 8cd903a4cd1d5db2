"""
High-level orchestration of one briefing build.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from crawler.infra.http import AsyncHttpFetcher

from briefing.adapters import RssFeedAdapter, SourceAdapter, fetch_all
from briefing.cache import TranslationCache
from briefing.config_loader import load_feeds
from briefing.grouping import group_by_day, select_top
from briefing.http_client import LibreTranslateClient
from briefing.identity import DESC_FIELD, TITLE_FIELD, is_sentinel
from briefing.merge import curated_subset, merge_articles
from briefing.models import Article, BuildResult, TranslationStats
from briefing.render import SiteRenderer
from briefing.settings import BriefingSettings
from briefing.snapshot import load_articles, save_articles
from briefing.text import truncate
from briefing.translator import BatchTranslator, TranslationClient

logger = logging.getLogger(__name__)


class BriefingPipeline:
    def __init__(
        self,
        settings: BriefingSettings,
        adapters: Optional[Sequence[SourceAdapter]] = None,
        translation_client: Optional[TranslationClient] = None,
        fetcher: Optional[AsyncHttpFetcher] = None,
        renderer: Optional[SiteRenderer] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.settings = settings
        self.adapters = list(adapters) if adapters is not None else self._build_adapters()
        self.translation_client = translation_client
        self.fetcher = fetcher or AsyncHttpFetcher(user_agent=settings.user_agent, timeout=settings.feed_timeout)
        self.renderer = renderer or SiteRenderer(settings.output_dir, tz=settings.timezone)
        self._sleep = sleep

    def _build_adapters(self) -> List[SourceAdapter]:
        feeds = load_feeds(self.settings.feeds_file)
        return [RssFeedAdapter(feed) for feed in feeds]

    def run(self, now: Optional[datetime] = None, render: bool = True) -> BuildResult:
        return asyncio.run(self.run_async(now=now, render=render))

    async def run_async(self, now: Optional[datetime] = None, render: bool = True) -> BuildResult:
        now = now or datetime.now(timezone.utc)
        settings = self.settings
        logger.info("Briefing build: fetching %d feeds", len(self.adapters))

        previous = load_articles(settings.snapshot_path)
        curated = curated_subset(previous)
        logger.info("Curated articles carried over: %d", len(curated))
        cache = TranslationCache.load(settings.cache_path)

        async with self.fetcher as fetcher:
            fresh, feeds = await fetch_all(self.adapters, fetcher, now=now, timeout=settings.feed_timeout)

        articles = merge_articles(fresh, curated, settings.days_to_keep, now)

        async with AsyncExitStack() as stack:
            translator = await self._open_translator(stack)
            stats = await translate_articles(articles, cache, translator, settings.description_limit)

        cache.prune(article.link for article in articles)
        cache.save()
        save_articles(settings.snapshot_path, articles)

        days = group_by_day(articles, settings.timezone)
        top = select_top(articles, settings.top_n)
        result = BuildResult(
            articles=articles,
            days=days,
            top=top,
            feeds=feeds,
            translation=stats,
            generated_at=now,
        )
        if render:
            result.pages = self.renderer.write_site(top, days, now)
        logger.info("Build finished: %d articles, %d days, %d headlines", len(articles), len(days), len(top))
        return result

    async def _open_translator(self, stack: AsyncExitStack) -> Optional[BatchTranslator]:
        client = self.translation_client
        if client is None:
            if not self.settings.translation_enabled:
                logger.warning("Translation disabled (no BRIEFING_TRANSLATE_URL); using cached translations only")
                return None
            client = await stack.enter_async_context(
                LibreTranslateClient(
                    self.settings.translate_url,
                    api_key=self.settings.translate_api_key,
                    user_agent=self.settings.user_agent,
                )
            )
        return BatchTranslator(
            client,
            batch_size=self.settings.batch_size,
            delay=self.settings.batch_delay,
            source_lang=self.settings.source_lang,
            target_lang=self.settings.target_lang,
            sleep=self._sleep,
        )


async def translate_articles(
    articles: List[Article],
    cache: TranslationCache,
    translator: Optional[BatchTranslator],
    description_limit: int = 300,
) -> TranslationStats:
    """
    Fill translated titles and descriptions, cache first.

    Titles and descriptions are two separate passes. Fallback texts from failed
    batches are shown but not cached, so the next build asks for them again.
    """
    stats = TranslationStats()
    passes = (
        (TITLE_FIELD, "translated_title", lambda a: a.title.strip()),
        (DESC_FIELD, "translated_description", lambda a: truncate(a.description, description_limit)),
    )
    for field, attr, source_text in passes:
        pending: List[Tuple[Article, str]] = []
        for article in articles:
            text = source_text(article)
            if not text:
                continue
            # "#" is shared by all unsafe links; never cached.
            cached = None if is_sentinel(article.link) else cache.lookup(article.link, field)
            if cached is not None:
                setattr(article, attr, cached)
                stats.cached += 1
            else:
                pending.append((article, text))

        stats.requested += len(pending)
        if not pending or translator is None:
            continue

        logger.info("Translating %d %s fields", len(pending), field)
        report = await translator.translate_with_report([text for _, text in pending])
        stats.batches += report.batches
        stats.failed_batches += report.failed_batches
        for position, (article, text) in enumerate(pending):
            translated = report.texts[position]
            if position in report.fallback_positions or not translated:
                setattr(article, attr, text)
                stats.fallback += 1
                continue
            setattr(article, attr, translated)
            if not is_sentinel(article.link):
                cache.put(article.link, field, translated)
            stats.translated += 1

    if stats.requested == 0:
        logger.info("All articles already translated (cache)")
    elif stats.fallback:
        logger.warning("%d fields kept their original text after failed translation", stats.fallback)
    return stats

"""
Status helpers for the briefing build.

The output is a JSON-friendly summary of the last run for logs and CI output;
it never contains cached translation text.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from briefing.cache import TranslationCache
from briefing.models import BuildResult, FeedStatus
from briefing.settings import BriefingSettings


def _feed_to_dict(status: FeedStatus) -> Dict[str, Any]:
    return {
        "name": status.name,
        "healthy": status.healthy,
        "items_last_fetch": status.items_last_fetch,
        "last_error": status.last_error,
        "latency_ms": round(status.latency_ms, 1) if status.latency_ms is not None else None,
    }


def build_status(
    settings: BriefingSettings,
    cache: TranslationCache,
    result: Optional[BuildResult] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "cache": cache.snapshot(),
        "config": {
            "snapshot_path": str(settings.snapshot_path),
            "cache_path": str(settings.cache_path),
            "output_dir": str(settings.output_dir),
            "days_to_keep": settings.days_to_keep,
            "top_n": settings.top_n,
            "batch_size": settings.batch_size,
            "timezone": str(settings.timezone),
            "translation_enabled": settings.translation_enabled,
            "languages": f"{settings.source_lang}->{settings.target_lang}",
        },
    }
    if result is not None:
        payload["build"] = {
            "generated_at": result.generated_at.isoformat(),
            "articles": len(result.articles),
            "curated": sum(1 for article in result.articles if article.curated),
            "days": len(result.days),
            "top": [article.link for article in result.top],
            "pages": len(result.pages),
            "feeds": [_feed_to_dict(status) for status in result.feeds],
            "feed_failures": sum(1 for status in result.feeds if not status.healthy),
            "translation": asdict(result.translation),
        }
    return payload

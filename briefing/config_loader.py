"""
Load the feed list (`config/feeds.yaml`) with optional env overrides.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

from briefing.models import Category, FeedConfig

logger = logging.getLogger(__name__)

DEFAULT_FEEDS: List[FeedConfig] = [
    FeedConfig("https://www.theverge.com/rss/ai-artificial-intelligence/index.xml", "The Verge", Category.NEWS),
    FeedConfig("https://techcrunch.com/category/artificial-intelligence/feed/", "TechCrunch", Category.NEWS),
    FeedConfig("https://feeds.arstechnica.com/arstechnica/technology-lab", "Ars Technica", Category.NEWS),
    FeedConfig("https://www.technologyreview.com/feed/", "MIT Tech Review", Category.TREND),
    FeedConfig("https://openai.com/blog/rss.xml", "OpenAI", Category.NEWS),
    FeedConfig("https://blog.google/technology/ai/rss/", "Google AI", Category.NEWS),
]


def load_feeds(config_path: Path) -> List[FeedConfig]:
    if not config_path.exists():
        logger.warning("Feed config not found at %s; using built-in feed list", config_path)
        return list(DEFAULT_FEEDS)
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        logger.warning("Feed config %s is not a mapping; using built-in feed list", config_path)
        return list(DEFAULT_FEEDS)
    data = _expand_env(data)

    feeds: List[FeedConfig] = []
    for entry in data.get("feeds") or []:
        if not isinstance(entry, dict):
            continue
        url = str(entry.get("url") or "").strip()
        source = str(entry.get("source") or "").strip()
        if not url or not source:
            logger.warning("Skipping feed entry without url/source: %s", entry)
            continue
        feeds.append(FeedConfig(url=url, source=source, category=Category.coerce(entry.get("category"))))
    if not feeds:
        logger.warning("No usable feeds in %s; using built-in feed list", config_path)
        return list(DEFAULT_FEEDS)
    return feeds


def _expand_env(data: Dict[str, Any]) -> Dict[str, Any]:
    def replace(value: Any) -> Any:
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_key = value[2:-1]
            return os.getenv(env_key, "")
        if isinstance(value, dict):
            return {k: replace(v) for k, v in value.items()}
        if isinstance(value, list):
            return [replace(item) for item in value]
        return value

    return replace(data)  # type: ignore[return-value]

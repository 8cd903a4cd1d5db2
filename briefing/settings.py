"""
Centralised settings for the briefing build (env-first, code-light).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from briefing.security import is_configured_key

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "KI-News-Aggregator/1.0"


@dataclass
class BriefingSettings:
    data_dir: Path = Path("data")
    output_dir: Path = Path(".")
    feeds_file: Path = Path("config/feeds.yaml")
    days_to_keep: int = 7
    top_n: int = 5
    batch_size: int = 10
    batch_delay: float = 0.3
    feed_timeout: float = 15.0
    description_limit: int = 300
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    source_lang: str = "en"
    target_lang: str = "de"
    translate_url: Optional[str] = None
    translate_api_key: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def snapshot_path(self) -> Path:
        return self.data_dir / "news.json"

    @property
    def cache_path(self) -> Path:
        return self.data_dir / "translations.json"

    @property
    def translation_enabled(self) -> bool:
        return bool(self.translate_url)

    def with_overrides(self, **changes) -> "BriefingSettings":
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
        return value if value > 0 else default
    except ValueError:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default


def _float_from_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = float(raw)
        return value if value >= 0 else default
    except ValueError:
        logger.warning("Invalid float value for %s=%s; using default %s", key, raw, default)
        return default


def _timezone_from_env(key: str, default: str = "UTC") -> ZoneInfo:
    raw = (os.getenv(key) or "").strip() or default
    try:
        return ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %s=%s; using %s", key, raw, default)
        return ZoneInfo(default)


def _path_from_env(key: str, default: str) -> Path:
    raw = (os.getenv(key) or "").strip()
    return Path(raw) if raw else Path(default)


def load_settings() -> BriefingSettings:
    api_key = os.getenv("BRIEFING_TRANSLATE_API_KEY")
    return BriefingSettings(
        data_dir=_path_from_env("BRIEFING_DATA_DIR", "data"),
        output_dir=_path_from_env("BRIEFING_OUTPUT_DIR", "."),
        feeds_file=_path_from_env("BRIEFING_FEEDS_FILE", "config/feeds.yaml"),
        days_to_keep=_int_from_env("BRIEFING_DAYS_TO_KEEP", 7),
        top_n=_int_from_env("BRIEFING_TOP_N", 5),
        batch_size=_int_from_env("BRIEFING_BATCH_SIZE", 10),
        batch_delay=_float_from_env("BRIEFING_BATCH_DELAY", 0.3),
        feed_timeout=_float_from_env("BRIEFING_FEED_TIMEOUT", 15.0),
        description_limit=_int_from_env("BRIEFING_DESCRIPTION_LIMIT", 300),
        timezone=_timezone_from_env("BRIEFING_TIMEZONE"),
        source_lang=(os.getenv("BRIEFING_SOURCE_LANG") or "en").strip(),
        target_lang=(os.getenv("BRIEFING_TARGET_LANG") or "de").strip(),
        translate_url=(os.getenv("BRIEFING_TRANSLATE_URL") or "").strip() or None,
        translate_api_key=api_key if is_configured_key(api_key or "") else None,
        user_agent=(os.getenv("BRIEFING_USER_AGENT") or DEFAULT_USER_AGENT).strip(),
    )

"""
Core data structures shared by the briefing pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from briefing.text import truncate


class Category(str, Enum):
    NEWS = "news"
    TREND = "trend"
    TOOL = "tool"

    @classmethod
    def coerce(cls, value: Optional[object]) -> "Category":
        if isinstance(value, Category):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.NEWS

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass
class Article:
    """
    One entry of the canonical article set. ``link`` is its identity.
    """

    title: str
    link: str
    description: str
    published_at: datetime
    source: str
    category: Category = Category.NEWS
    curated: bool = False
    translated_title: Optional[str] = None
    translated_description: Optional[str] = None

    @property
    def display_title(self) -> str:
        return self.translated_title or self.title

    def display_description(self, limit: int = 200) -> str:
        return self.translated_description or truncate(self.description, limit)


@dataclass
class FeedConfig:
    url: str
    source: str
    category: Category = Category.NEWS


@dataclass
class FeedStatus:
    name: str
    healthy: bool
    items_last_fetch: int = 0
    last_error: Optional[str] = None
    latency_ms: Optional[float] = None


@dataclass
class TranslationStats:
    requested: int = 0
    cached: int = 0
    translated: int = 0
    fallback: int = 0
    batches: int = 0
    failed_batches: int = 0


@dataclass
class BuildResult:
    articles: List[Article]
    days: Dict[str, List[Article]]
    top: List[Article]
    feeds: List[FeedStatus]
    translation: TranslationStats
    generated_at: datetime
    pages: List[Path] = field(default_factory=list)

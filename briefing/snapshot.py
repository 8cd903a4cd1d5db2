"""
Persisted article snapshot (`data/news.json`).

The snapshot is the canonical article list of the last build. Only its curated
entries feed into the next build; everything else is refetched.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Dict, List, Optional

from briefing.errors import PersistenceError
from briefing.identity import canonical_link, is_sentinel
from briefing.models import Article, Category
from briefing.storage import write_json_atomic

logger = logging.getLogger(__name__)


def load_articles(path: Path) -> List[Article]:
    if not path.exists():
        logger.info("No article snapshot at %s; starting empty", path)
        return []
    try:
        blob = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Article snapshot %s unreadable (%s); starting empty", path, exc)
        return []
    if not isinstance(blob, list):
        logger.warning("Article snapshot %s is not a JSON array; starting empty", path)
        return []

    articles: List[Article] = []
    for record in blob:
        article = article_from_dict(record) if isinstance(record, dict) else None
        if article is None:
            logger.debug("Skipping malformed snapshot record: %r", record)
            continue
        articles.append(article)
    return articles


def save_articles(path: Path, articles: List[Article]) -> None:
    payload = [article_to_dict(article) for article in articles]
    try:
        write_json_atomic(path, payload)
    except OSError as exc:
        raise PersistenceError(f"Writing article snapshot {path} failed: {exc}") from exc
    logger.info("Article snapshot saved (%d articles)", len(articles))


def set_curated(path: Path, link: str, curated: bool = True) -> Article:
    """Flag (or unflag) a stored article as curated and rewrite the snapshot."""
    target = canonical_link(link)
    articles = load_articles(path)
    for article in articles:
        if article.link == target:
            article.curated = curated
            save_articles(path, articles)
            return article
    raise KeyError(target)


def article_to_dict(article: Article) -> Dict[str, object]:
    return {
        "title": article.title,
        "translatedTitle": article.translated_title,
        "link": article.link,
        "description": article.description,
        "translatedDescription": article.translated_description,
        "publishedAt": article.published_at.isoformat(),
        "source": article.source,
        "category": article.category.value,
        "curated": article.curated,
    }


def article_from_dict(data: Dict[str, object]) -> Optional[Article]:
    # Snapshots written by the previous site generator used pubDate/titleDE/descriptionDE.
    link = canonical_link(_as_str(data.get("link")))
    published_at = _parse_datetime(data.get("publishedAt") or data.get("pubDate"))
    if is_sentinel(link) or published_at is None:
        return None
    return Article(
        title=_as_str(data.get("title")),
        link=link,
        description=_as_str(data.get("description")),
        published_at=published_at,
        source=_as_str(data.get("source")),
        category=Category.coerce(_as_str(data.get("category"))),
        curated=data.get("curated") is True,
        translated_title=_as_str(data.get("translatedTitle") or data.get("titleDE")) or None,
        translated_description=_as_str(data.get("translatedDescription") or data.get("descriptionDE")) or None,
    )


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


def _parse_datetime(value: object) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = parsedate_to_datetime(raw)
        except (TypeError, ValueError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

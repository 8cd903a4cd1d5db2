"""
Static site rendering: one index page plus one page per day bucket.

Escaping happens only here (Jinja2 autoescape); the pipeline hands over plain
text and canonical links.
"""
from __future__ import annotations

import logging
import shutil
from datetime import date, datetime, timezone, tzinfo
from pathlib import Path
from typing import Dict, List, Sequence, Union

from jinja2 import Environment, PackageLoader, select_autoescape

from briefing.errors import PersistenceError
from briefing.grouping import sorted_day_keys
from briefing.models import Article

logger = logging.getLogger(__name__)

WEEKDAYS_DE = ["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"]
MONTHS_DE = [
    "Januar", "Februar", "Maerz", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
]

DAY_PAGES_DIR = "tage"
STATIC_DIR = Path(__file__).resolve().parent / "static"


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def format_date_de(value: Union[date, datetime, str]) -> str:
    """``Montag, 5. Januar 2026``"""
    d = _as_date(value)
    return f"{WEEKDAYS_DE[d.weekday()]}, {d.day}. {MONTHS_DE[d.month - 1]} {d.year}"


def format_date_short_de(value: Union[date, datetime, str]) -> str:
    d = _as_date(value)
    return f"{d.day}. {MONTHS_DE[d.month - 1]}"


def weekday_de(value: Union[date, datetime, str]) -> str:
    return WEEKDAYS_DE[_as_date(value).weekday()]


def build_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("briefing", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date_de"] = format_date_de
    env.filters["date_short_de"] = format_date_short_de
    env.filters["weekday_de"] = weekday_de
    return env


class SiteRenderer:
    def __init__(self, output_dir: Path, tz: tzinfo = timezone.utc) -> None:
        self.output_dir = output_dir
        self.tz = tz
        self.env = build_environment()

    def render_index(self, top: Sequence[Article], days: Dict[str, List[Article]], now: datetime) -> str:
        template = self.env.get_template("index.html")
        return template.render(
            today=now.astimezone(self.tz),
            top=top,
            days=[(key, len(days[key])) for key in sorted_day_keys(days)],
            css_path="css/style.css",
            home_path="index.html",
            back_link=None,
        )

    def render_day(self, key: str, articles: Sequence[Article]) -> str:
        template = self.env.get_template("day.html")
        return template.render(
            day=key,
            articles=articles,
            css_path="../css/style.css",
            home_path="../index.html",
            back_link="../index.html",
        )

    def write_site(self, top: Sequence[Article], days: Dict[str, List[Article]], now: datetime) -> List[Path]:
        """Write index + day pages, replacing day pages from earlier builds."""
        written: List[Path] = []
        day_dir = self.output_dir / DAY_PAGES_DIR
        try:
            day_dir.mkdir(parents=True, exist_ok=True)
            for stale in day_dir.glob("*.html"):
                stale.unlink()

            index_path = self.output_dir / "index.html"
            index_path.write_text(self.render_index(top, days, now), encoding="utf-8")
            written.append(index_path)
            logger.info("Index page generated")

            for key in sorted_day_keys(days):
                page = day_dir / f"{key}.html"
                page.write_text(self.render_day(key, days[key]), encoding="utf-8")
                written.append(page)
            logger.info("%d day pages generated", len(days))

            css_dir = self.output_dir / "css"
            css_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(STATIC_DIR / "style.css", css_dir / "style.css")
        except OSError as exc:
            raise PersistenceError(f"Writing site to {self.output_dir} failed: {exc}") from exc
        return written

import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from briefing.errors import PersistenceError
from briefing.models import Article, Category
from briefing.snapshot import article_from_dict, load_articles, save_articles, set_curated


def _article(link: str, **overrides) -> Article:
    fields = dict(
        title="Model release",
        link=link,
        description="<p>Details</p>",
        published_at=datetime(2026, 3, 9, 8, 15, tzinfo=timezone.utc),
        source="The Verge",
        category=Category.TREND,
    )
    fields.update(overrides)
    return Article(**fields)


class SnapshotTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data" / "news.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_round_trip_uses_persisted_field_names(self):
        article = _article("https://example.com/a", curated=True, translated_title="Modell-Release")
        save_articles(self.path, [article])

        raw = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(set(raw[0]), {
            "title", "translatedTitle", "link", "description", "translatedDescription",
            "publishedAt", "source", "category", "curated",
        })
        self.assertEqual(raw[0]["publishedAt"], "2026-03-09T08:15:00+00:00")
        self.assertEqual(load_articles(self.path), [article])

    def test_missing_or_corrupt_snapshot_is_empty(self):
        self.assertEqual(load_articles(self.path), [])
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[{broken", encoding="utf-8")
        self.assertEqual(load_articles(self.path), [])
        self.path.write_text(json.dumps({"articles": []}), encoding="utf-8")
        self.assertEqual(load_articles(self.path), [])

    def test_malformed_records_are_skipped(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps([
            "not a record",
            {"title": "no date", "link": "https://example.com/x"},
            {"title": "bad link", "link": "javascript:void(0)", "publishedAt": "2026-03-09T08:15:00Z"},
            {"title": "ok", "link": "https://example.com/ok", "publishedAt": "2026-03-09T08:15:00Z"},
        ]), encoding="utf-8")

        articles = load_articles(self.path)

        self.assertEqual([a.link for a in articles], ["https://example.com/ok"])
        self.assertEqual(articles[0].category, Category.NEWS)
        self.assertFalse(articles[0].curated)

    def test_reads_legacy_field_names(self):
        article = article_from_dict({
            "title": "Old",
            "titleDE": "Alt",
            "descriptionDE": "Beschreibung",
            "link": "https://example.com/legacy",
            "description": "Description",
            "pubDate": "2026-03-01T10:00:00.000Z",
            "source": "OpenAI",
            "category": "tool",
            "curated": True,
        })
        self.assertEqual(article.translated_title, "Alt")
        self.assertEqual(article.translated_description, "Beschreibung")
        self.assertEqual(article.category, Category.TOOL)
        self.assertEqual(article.published_at, datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc))
        self.assertTrue(article.curated)

    def test_rfc822_dates_are_accepted(self):
        article = article_from_dict({
            "link": "https://example.com/rfc",
            "pubDate": "Mon, 02 Mar 2026 10:00:00 GMT",
        })
        self.assertEqual(article.published_at.day, 2)

    def test_set_curated_flags_and_unflags(self):
        save_articles(self.path, [_article("https://example.com/a"), _article("https://example.com/b")])

        set_curated(self.path, " https://example.com/b ")
        self.assertEqual([a.curated for a in load_articles(self.path)], [False, True])

        set_curated(self.path, "https://example.com/b", curated=False)
        self.assertEqual([a.curated for a in load_articles(self.path)], [False, False])

        with self.assertRaises(KeyError):
            set_curated(self.path, "https://example.com/missing")

    def test_write_failure_is_fatal(self):
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with self.assertRaises(PersistenceError):
            save_articles(blocker / "news.json", [_article("https://example.com/a")])

    def test_failed_save_keeps_curated_snapshot(self):
        save_articles(self.path, [_article("https://example.com/keep", curated=True)])

        with patch("briefing.storage.os.replace", side_effect=OSError("No space left on device")):
            with self.assertRaises(PersistenceError):
                save_articles(self.path, [_article("https://example.com/other")])

        kept = load_articles(self.path)
        self.assertEqual([(a.link, a.curated) for a in kept], [("https://example.com/keep", True)])
        self.assertEqual([p.name for p in self.path.parent.iterdir()], ["news.json"])


if __name__ == "__main__":
    unittest.main()

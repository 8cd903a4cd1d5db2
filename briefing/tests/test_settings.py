import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from briefing.config_loader import DEFAULT_FEEDS, load_feeds
from briefing.models import Category
from briefing.settings import load_settings


class SettingsTests(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        settings = load_settings()
        self.assertEqual(settings.days_to_keep, 7)
        self.assertEqual(settings.top_n, 5)
        self.assertEqual(settings.batch_size, 10)
        self.assertAlmostEqual(settings.batch_delay, 0.3)
        self.assertEqual(settings.snapshot_path, Path("data") / "news.json")
        self.assertEqual(settings.cache_path, Path("data") / "translations.json")
        self.assertFalse(settings.translation_enabled)
        self.assertEqual(str(settings.timezone), "UTC")

    @patch.dict(os.environ, {
        "BRIEFING_DAYS_TO_KEEP": "3",
        "BRIEFING_BATCH_SIZE": "not-a-number",
        "BRIEFING_TIMEZONE": "Europe/Berlin",
        "BRIEFING_TRANSLATE_URL": "https://translate.example.com",
        "BRIEFING_TRANSLATE_API_KEY": "YOUR_KEY_HERE",
    }, clear=True)
    def test_env_overrides_and_invalid_values(self):
        with self.assertLogs("briefing.settings", level="WARNING"):
            settings = load_settings()
        self.assertEqual(settings.days_to_keep, 3)
        self.assertEqual(settings.batch_size, 10)
        self.assertEqual(str(settings.timezone), "Europe/Berlin")
        self.assertTrue(settings.translation_enabled)
        self.assertIsNone(settings.translate_api_key)

    @patch.dict(os.environ, {}, clear=True)
    def test_with_overrides_ignores_none(self):
        settings = load_settings().with_overrides(days_to_keep=None, top_n=3)
        self.assertEqual(settings.days_to_keep, 7)
        self.assertEqual(settings.top_n, 3)


class FeedConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "feeds.yaml"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_uses_defaults(self):
        self.assertEqual(load_feeds(self.path), DEFAULT_FEEDS)

    @patch.dict(os.environ, {"TOOLS_FEED": "https://tools.example.com/rss"})
    def test_reads_yaml_with_env_expansion(self):
        self.path.write_text(
            "feeds:\n"
            "  - url: https://example.com/rss\n"
            "    source: Example\n"
            "    category: trend\n"
            "  - url: ${TOOLS_FEED}\n"
            "    source: Tools\n"
            "    category: unknown\n"
            "  - source: Missing URL\n",
            encoding="utf-8",
        )
        feeds = load_feeds(self.path)

        self.assertEqual([f.source for f in feeds], ["Example", "Tools"])
        self.assertEqual(feeds[0].category, Category.TREND)
        self.assertEqual(feeds[1].url, "https://tools.example.com/rss")
        self.assertEqual(feeds[1].category, Category.NEWS)

    def test_non_string_category_falls_back_to_news(self):
        self.path.write_text(
            "feeds:\n"
            "  - url: https://example.com/rss\n"
            "    source: Example\n"
            "    category: 1\n",
            encoding="utf-8",
        )
        feeds = load_feeds(self.path)

        self.assertEqual(len(feeds), 1)
        self.assertEqual(feeds[0].category, Category.NEWS)

    def test_bundled_config_parses(self):
        bundled = Path(__file__).resolve().parents[2] / "config" / "feeds.yaml"
        feeds = load_feeds(bundled)
        self.assertEqual(len(feeds), 6)
        self.assertIn("MIT Tech Review", [f.source for f in feeds])


if __name__ == "__main__":
    unittest.main()

import unittest

from briefing.identity import SENTINEL_LINK, cache_key, canonical_link, is_sentinel, split_cache_key


class CanonicalLinkTests(unittest.TestCase):
    def test_trims_and_keeps_http_links(self):
        self.assertEqual(canonical_link("  https://example.com/a  "), "https://example.com/a")
        self.assertEqual(canonical_link("http://example.com/b"), "http://example.com/b")

    def test_unsafe_or_missing_links_become_sentinel(self):
        for raw in (None, "", "   ", "javascript:alert(1)", "ftp://example.com", "/relative/path", "HTTPS//broken"):
            with self.subTest(raw=raw):
                self.assertEqual(canonical_link(raw), SENTINEL_LINK)
        self.assertTrue(is_sentinel(canonical_link("mailto:x@example.com")))
        self.assertFalse(is_sentinel("https://example.com"))


class CacheKeyTests(unittest.TestCase):
    def test_cache_key_format(self):
        self.assertEqual(cache_key("https://example.com/a", "title"), "https://example.com/a::title")
        self.assertEqual(cache_key("https://example.com/a", "desc"), "https://example.com/a::desc")

    def test_unknown_field_rejected(self):
        with self.assertRaises(ValueError):
            cache_key("https://example.com/a", "body")

    def test_split_uses_last_separator(self):
        self.assertEqual(split_cache_key("https://example.com/a::b::desc"), ("https://example.com/a::b", "desc"))
        self.assertEqual(split_cache_key("no-separator"), ("no-separator", ""))


if __name__ == "__main__":
    unittest.main()

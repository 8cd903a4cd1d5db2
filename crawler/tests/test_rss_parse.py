import time
from types import SimpleNamespace

from crawler.ingesters import rss_base

SAMPLE_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>AI Desk</title>
    <link>https://example.com/ai</link>
    <item>
      <title>  Model release  </title>
      <link>https://example.com/ai/model-release</link>
      <pubDate>Mon, 05 Jan 2026 09:30:00 GMT</pubDate>
      <description>&lt;p&gt;A new &lt;b&gt;model&lt;/b&gt; ships.&lt;/p&gt;</description>
    </item>
    <item>
      <title>Undated note</title>
      <link>https://example.com/ai/note</link>
    </item>
  </channel>
</rss>
"""


def test_parse_feed_entries_reads_rss_document():
    items = rss_base.parse_feed_entries(SAMPLE_FEED, "AI Desk")

    assert len(items) == 2
    first = items[0]
    assert first.source == "AI Desk"
    assert first.title == "Model release"
    assert first.link == "https://example.com/ai/model-release"
    assert "model" in first.summary
    assert first.published_at.isoformat() == "2026-01-05T09:30:00+00:00"
    assert items[1].published_at is None
    assert items[1].summary is None


def test_parse_feed_entries_keeps_unsafe_links_for_downstream(monkeypatch):
    entry = SimpleNamespace(
        title="Sample Headline",
        link=" javascript:alert(1) ",
        summary="Short summary",
        published_parsed=time.struct_time((2024, 1, 2, 3, 4, 5, 1, 2, -1)),
    )

    def fake_parse(_):
        return SimpleNamespace(entries=[entry], bozo=False)

    monkeypatch.setattr(rss_base.feedparser, "parse", fake_parse)

    items = rss_base.parse_feed_entries(b"ignored", "Wire")
    assert len(items) == 1
    assert items[0].link == "javascript:alert(1)"
    assert items[0].summary == "Short summary"
    assert items[0].published_at.year == 2024


def test_parse_feed_entries_falls_back_to_content_value(monkeypatch):
    entry = SimpleNamespace(
        title="Content only",
        link="https://example.com/c",
        content=[{"value": "<p>Body text</p>"}],
        updated_parsed=time.struct_time((2025, 6, 1, 0, 0, 0, 6, 152, -1)),
    )
    monkeypatch.setattr(
        rss_base.feedparser, "parse", lambda _: SimpleNamespace(entries=[entry], bozo=False)
    )

    items = rss_base.parse_feed_entries(b"ignored", "Wire")
    assert items[0].summary == "<p>Body text</p>"
    assert items[0].published_at.month == 6


def test_parse_feed_entries_raises_on_garbage():
    try:
        rss_base.parse_feed_entries(b"<html><body>not a feed", "Broken")
    except ValueError as exc:
        assert "Broken" in str(exc)
    else:  # pragma: no cover
        raise AssertionError("expected ValueError")

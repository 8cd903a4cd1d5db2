from briefing.adapters.base import SourceAdapter, fetch_all
from briefing.adapters.rss import RssFeedAdapter

__all__ = ["RssFeedAdapter", "SourceAdapter", "fetch_all"]

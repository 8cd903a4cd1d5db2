"""
Exception hierarchy for the briefing build.

Read paths degrade (feeds, translation batches, cache/snapshot reads); write
paths raise ``PersistenceError`` and abort the run.
"""
from __future__ import annotations


class BriefingError(Exception):
    """Base class for all briefing errors."""


class PersistenceError(BriefingError):
    """Writing the cache, the article snapshot or a rendered page failed."""


class TranslationError(BriefingError):
    """A translation batch could not be translated."""


class FeedFetchError(BriefingError):
    """A single feed could not be fetched or parsed."""

"""
File-backed translation cache.

Keys are ``"<link>::title"`` / ``"<link>::desc"``, values the translated text.
The file is read once at the start of a build and rewritten once at the end,
after ``prune`` has dropped every entry whose link left the article set.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from briefing.errors import PersistenceError
from briefing.identity import cache_key, split_cache_key
from briefing.storage import write_json_atomic

logger = logging.getLogger(__name__)


class TranslationCache:
    def __init__(self, storage_path: Path, entries: Optional[Dict[str, str]] = None) -> None:
        self.storage_path = storage_path
        self._entries: Dict[str, str] = dict(entries or {})

    @classmethod
    def load(cls, storage_path: Path) -> "TranslationCache":
        """Read the cache file; a missing or corrupt file yields an empty cache."""
        if not storage_path.exists():
            logger.info("No translation cache at %s; starting empty", storage_path)
            return cls(storage_path)
        try:
            blob = json.loads(storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Translation cache %s unreadable (%s); starting empty", storage_path, exc)
            return cls(storage_path)
        if not isinstance(blob, dict):
            logger.warning("Translation cache %s is not a JSON object; starting empty", storage_path)
            return cls(storage_path)

        entries = {key: value for key, value in blob.items() if isinstance(key, str) and isinstance(value, str)}
        dropped = len(blob) - len(entries)
        if dropped:
            logger.warning("Dropped %d malformed translation cache entries", dropped)
        return cls(storage_path, entries)

    def lookup(self, identity: str, field: str) -> Optional[str]:
        return self._entries.get(cache_key(identity, field))

    def put(self, identity: str, field: str, text: str) -> None:
        self._entries[cache_key(identity, field)] = text

    def prune(self, live_identities: Iterable[str]) -> int:
        live = set(live_identities)
        kept = {key: value for key, value in self._entries.items() if split_cache_key(key)[0] in live}
        removed = len(self._entries) - len(kept)
        self._entries = kept
        if removed:
            logger.info("Pruned %d stale translation cache entries", removed)
        return removed

    def save(self) -> None:
        try:
            write_json_atomic(self.storage_path, self._entries)
        except OSError as exc:
            raise PersistenceError(f"Writing translation cache {self.storage_path} failed: {exc}") from exc
        logger.info("Translation cache saved (%d entries)", len(self._entries))

    def snapshot(self) -> Dict[str, object]:
        """Return a lightweight view for status output without exposing cached text."""
        links = {split_cache_key(key)[0] for key in self._entries}
        return {
            "storage_path": str(self.storage_path),
            "entries": len(self._entries),
            "links": len(links),
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

"""
Pydantic models for crawler outputs.
These capture only feed metadata (title, snippet, link, date) as published upstream.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class FeedEntry(BaseModel):
    source: str
    title: str = ""
    # Kept as a plain string: canonicalisation happens downstream so unsafe links
    # still reach the pipeline and get replaced there.
    link: str = ""
    summary: Optional[str] = None
    published_at: Optional[datetime] = None

    @field_validator("title", "link", mode="before")
    @classmethod
    def _trim(cls, value: Optional[str]) -> str:
        return (value or "").strip()

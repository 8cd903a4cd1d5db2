"""
Batched translation with per-batch fallback.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Protocol, Sequence, Set, Tuple

from briefing.security import redact_secrets

logger = logging.getLogger(__name__)


class TranslationClient(Protocol):
    async def translate(self, texts: Sequence[str], source: str, target: str) -> List[str]:
        ...


@dataclass
class BatchReport:
    texts: List[str]
    fallback_positions: Set[int] = field(default_factory=set)
    batches: int = 0
    failed_batches: int = 0


class BatchTranslator:
    """
    Translates an ordered list of strings in fixed-size batches.

    Batches run strictly one after another with ``delay`` seconds between them.
    A failing batch falls back to its original (trimmed) texts and never stops
    the remaining batches.
    """

    def __init__(
        self,
        client: TranslationClient,
        batch_size: int = 10,
        delay: float = 0.3,
        source_lang: str = "en",
        target_lang: str = "de",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.client = client
        self.batch_size = batch_size
        self.delay = delay
        self.source_lang = source_lang
        self.target_lang = target_lang
        self._sleep = sleep

    async def translate(self, texts: Sequence[str]) -> List[str]:
        report = await self.translate_with_report(texts)
        return report.texts

    async def translate_with_report(self, texts: Sequence[str]) -> BatchReport:
        jobs: List[Tuple[int, str]] = [
            (index, text.strip()) for index, text in enumerate(texts) if text and text.strip()
        ]
        report = BatchReport(texts=[""] * len(texts))

        for start in range(0, len(jobs), self.batch_size):
            batch = jobs[start:start + self.batch_size]
            batch_no = start // self.batch_size
            report.batches += 1
            try:
                translated = await self.client.translate(
                    [text for _, text in batch], self.source_lang, self.target_lang
                )
                if len(translated) != len(batch):
                    raise ValueError(f"expected {len(batch)} translations, got {len(translated)}")
                for (index, _), text in zip(batch, translated):
                    report.texts[index] = text
            except Exception as exc:
                logger.warning(
                    "Translation batch %d failed, keeping original text: %s",
                    batch_no,
                    redact_secrets(str(exc)),
                )
                report.failed_batches += 1
                for index, text in batch:
                    report.texts[index] = text
                    report.fallback_positions.add(index)

            if start + self.batch_size < len(jobs):
                await self._sleep(self.delay)

        return report

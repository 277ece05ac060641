"""Scan pass: enumerate sources in order and build one record per raw entry."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from runscope.config import ScanConfig
from runscope.models import Autorun, RawEntry
from runscope.records import RecordBuilder
from runscope.sources import RawSource, default_sources

logger = logging.getLogger(__name__)


def collect(sources: Sequence[RawSource]) -> list[RawEntry]:
    """Drain sources sequentially, preserving source order then native order."""
    raw: list[RawEntry] = []
    for source in sources:
        before = len(raw)
        raw.extend(source.entries())
        logger.info("source %s: %d entries", source.name, len(raw) - before)
    return raw


def scan(
    config: ScanConfig,
    sources: Sequence[RawSource] | None = None,
    workers: int = 1,
    builder: RecordBuilder | None = None,
) -> list[Autorun]:
    """Run one scan pass and return records in deterministic source order.

    With workers > 1, records are built on a thread pool; ``map`` keeps
    results aligned with the input order.
    """
    if sources is None:
        sources = default_sources(config)
    builder = builder or RecordBuilder(config)
    raw = collect(sources)

    if workers <= 1 or len(raw) <= 1:
        return [builder.build_from(entry) for entry in raw]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(builder.build_from, raw))

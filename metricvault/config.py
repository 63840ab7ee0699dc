"""Settings of the metric cache: location, garbage collection and compaction."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True)
class Compactor:
    """Merges finalized chunks of one duration into chunks of a longer one (seconds)."""

    src_chunk_duration: int
    dst_chunk_duration: int


@dataclass
class CompactionConfig:
    interval: timedelta
    workers_num: int
    compactors: list[Compactor] = field(default_factory=list)


@dataclass
class GcConfig:
    interval: timedelta
    ttl: timedelta


@dataclass
class CacheConfig:
    path: str
    gc: GcConfig | None = None
    compaction: CompactionConfig | None = None


def default_compaction_config() -> CompactionConfig:
    """Compaction used when none is configured: hourly chunks to 4h, then to 12h."""
    return CompactionConfig(
        interval=timedelta(seconds=10),
        workers_num=1,
        compactors=[
            Compactor(src_chunk_duration=3600, dst_chunk_duration=4 * 3600),
            Compactor(src_chunk_duration=4 * 3600, dst_chunk_duration=12 * 3600),
        ],
    )
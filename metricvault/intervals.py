"""Splitting a range of pending scrape points into per-chunk download intervals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

MINUTE = 60
HOUR = 60 * MINUTE

CHUNK_SIZE = HOUR
QUERY_CONCURRENCY = 10
BACKFILL_INTERVAL = 4 * HOUR

_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _truncate(t: int, d: int) -> int:
    return t - t % d


def _format_time(t: int) -> str:
    return datetime.fromtimestamp(t, tz=timezone.utc).strftime(_FORMAT)


@dataclass(frozen=True)
class Interval:
    """Points of one chunk, starting at ``chunk_ts``, to fetch up to ``to_ts`` inclusive."""

    chunk_ts: int
    to_ts: int
    chunk_duration: int = CHUNK_SIZE

    def __str__(self) -> str:
        return (
            f"({_format_time(self.chunk_ts)}, {self.chunk_duration}, "
            f"{_format_time(self.to_ts)})"
        )


def calc_intervals(
    last_saved_time: int, scrape_interval: int, now: int, jitter: int
) -> list[Interval]:
    """Intervals to fetch after ``last_saved_time`` up to ``now``.

    Chunk boundaries are whole hours shifted by ``jitter``; each interval ends
    one scrape interval before the next chunk (or before ``now``).
    """
    if scrape_interval <= 0:
        raise ValueError(f"scrape interval must be positive, got {scrape_interval}")
    to = _truncate(now, scrape_interval)
    start = last_saved_time + scrape_interval
    if to < start:
        return []
    start = _truncate(start, scrape_interval)
    result = []
    f = _truncate(start - jitter, CHUNK_SIZE) + jitter
    while f < to:
        to_ts = min(f + CHUNK_SIZE, to) - scrape_interval
        if f <= to_ts:
            result.append(Interval(chunk_ts=f, to_ts=to_ts, chunk_duration=CHUNK_SIZE))
        f += CHUNK_SIZE
    return result
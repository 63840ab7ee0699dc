"""Chart series built from latency histograms and CPU usage by mode."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from metricvault.timeseries import TimeSeries, aggregate

log = logging.getLogger(__name__)

_CPU_MODE_COLORS = {
    "user": "blue",
    "nice": "lightGreen",
    "system": "red",
    "wait": "orange",
    "iowait": "orange",
    "steal": "black",
    "irq": "grey",
    "softirq": "yellow",
}


@dataclass
class Series:
    name: str
    data: TimeSeries | None
    color: str = ""


@dataclass
class LatencyBucket:
    """A histogram bucket: its upper bound in seconds and its cumulative series."""

    le: float
    series: TimeSeries | None


def _special(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return None


def _ftoa(value: float) -> str:
    special = _special(value)
    if special is not None:
        return special
    text = f"{value:.6f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _fmt0(value: float) -> str:
    special = _special(value)
    return special if special is not None else f"{value:.0f}"


def histogram_buckets(histogram: Mapping[str, TimeSeries | None]) -> list[LatencyBucket]:
    """Buckets ordered by bound; bounds that are not numbers are skipped."""
    buckets = []
    for le, series in histogram.items():
        try:
            bound = float(le)
        except ValueError:
            log.warning("invalid histogram bucket: %r", le)
            continue
        buckets.append(LatencyBucket(bound, series))
    buckets.sort(key=lambda b: b.le)
    return buckets


def _sub(a: float, b: float) -> float:
    return a - b


def histogram_series(
    histogram: Mapping[str, TimeSeries | None], objective_bucket: str
) -> list[Series]:
    """Requests per bucket range; ranges above the objective bound are red."""
    if not histogram:
        return []
    buckets = histogram_buckets(histogram)
    try:
        objective = float(objective_bucket)
    except ValueError:
        objective = 0.0

    deltas = [buckets[0].series] + [
        aggregate(_sub, curr.series, prev.series)
        for prev, curr in zip(buckets, buckets[1:])
    ]

    result = []
    prev: LatencyBucket | None = None
    for bucket, data in zip(buckets, deltas):
        color = "red" if objective > 0 and bucket.le > objective else "green"
        if prev is None:
            legend = f"0-{_fmt0(bucket.le * 1000)} ms"
        elif prev.le >= 0.1:
            legend = f"{_ftoa(prev.le)}-{_ftoa(bucket.le)} s"
        else:
            legend = f"{_fmt0(prev.le * 1000)}-{_fmt0(bucket.le * 1000)} ms"
        result.append(Series(name=legend, data=data, color=color))
        prev = bucket
    return result


def cpu_by_mode_series(modes: Mapping[str, TimeSeries | None]) -> list[Series]:
    """Series of the known CPU modes present, in a fixed order with fixed colors."""
    return [
        Series(name=mode, data=modes[mode], color=color)
        for mode, color in _CPU_MODE_COLORS.items()
        if mode in modes
    ]
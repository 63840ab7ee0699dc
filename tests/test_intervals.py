from datetime import datetime, timezone

import pytest

from metricvault.intervals import CHUNK_SIZE, Interval, calc_intervals

SCRAPE_INTERVAL = 30
JITTER = 12 * 60


def ts(s: str) -> int:
    if not s:
        return 0
    parsed = datetime.strptime(s, "%Y-%m-%dT%H:%M:%S").replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def calc(last_saved: str, now: str) -> str:
    intervals = calc_intervals(ts(last_saved), SCRAPE_INTERVAL, ts(now), JITTER)
    return "[" + " ".join(str(i) for i in intervals) + "]"


@pytest.mark.parametrize(
    "last_saved, now, expected",
    [
        (  # initial fetching
            "2020-11-13T09:49:11",
            "2020-11-13T11:49:11",
            "[(2020-11-13T09:12:00, 3600, 2020-11-13T10:11:30) "
            "(2020-11-13T10:12:00, 3600, 2020-11-13T11:11:30) "
            "(2020-11-13T11:12:00, 3600, 2020-11-13T11:48:30)]",
        ),
        (  # two new points
            "2020-11-13T11:48:30",
            "2020-11-13T11:50:11",
            "[(2020-11-13T11:12:00, 3600, 2020-11-13T11:49:30)]",
        ),
        (  # skipped more than two chunk intervals
            "2020-11-13T11:50:00",
            "2020-11-13T13:49:11",
            "[(2020-11-13T11:12:00, 3600, 2020-11-13T12:11:30) "
            "(2020-11-13T12:12:00, 3600, 2020-11-13T13:11:30) "
            "(2020-11-13T13:12:00, 3600, 2020-11-13T13:48:30)]",
        ),
        (  # one new point
            "2020-11-13T12:12:00",
            "2020-11-13T12:13:05",
            "[(2020-11-13T12:12:00, 3600, 2020-11-13T12:12:30)]",
        ),
        (  # two new points
            "2020-11-13T12:11:30",
            "2020-11-13T12:13:05",
            "[(2020-11-13T12:12:00, 3600, 2020-11-13T12:12:30)]",
        ),
        (  # re-fetch finished chunk
            "2020-11-13T12:11:00",
            "2020-11-13T12:12:05",
            "[(2020-11-13T11:12:00, 3600, 2020-11-13T12:11:30)]",
        ),
        (  # re-fetch finished chunk and one new point
            "2020-11-13T12:11:00",
            "2020-11-13T12:12:35",
            "[(2020-11-13T11:12:00, 3600, 2020-11-13T12:11:30) "
            "(2020-11-13T12:12:00, 3600, 2020-11-13T12:12:00)]",
        ),
        (  # re-fetch finished chunk and two new points
            "2020-11-13T12:11:00",
            "2020-11-13T12:13:05",
            "[(2020-11-13T11:12:00, 3600, 2020-11-13T12:11:30) "
            "(2020-11-13T12:12:00, 3600, 2020-11-13T12:12:30)]",
        ),
        (  # too early - nothing to do
            "2020-11-13T12:11:30",
            "2020-11-13T12:12:25",
            "[]",
        ),
    ],
)
def test_calc_intervals(last_saved, now, expected):
    assert calc(last_saved, now) == expected


def test_intervals_are_chunk_aligned_and_ordered():
    intervals = calc_intervals(
        ts("2020-11-13T09:49:11"), SCRAPE_INTERVAL, ts("2020-11-13T11:49:11"), JITTER
    )
    starts = [i.chunk_ts for i in intervals]
    assert starts == sorted(starts)
    for i in intervals:
        assert (i.chunk_ts - JITTER) % CHUNK_SIZE == 0
        assert i.chunk_ts <= i.to_ts < i.chunk_ts + CHUNK_SIZE
        assert i.chunk_duration == CHUNK_SIZE


def test_interval_str():
    interval = Interval(chunk_ts=ts("2020-11-13T09:12:00"), to_ts=ts("2020-11-13T10:11:30"))
    assert str(interval) == "(2020-11-13T09:12:00, 3600, 2020-11-13T10:11:30)"


def test_invalid_scrape_interval():
    with pytest.raises(ValueError):
        calc_intervals(0, 0, 100, 0)
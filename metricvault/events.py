"""Application events derived from metrics: rollouts, switchovers, instances up and down."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from metricvault.timeseries import NAN, TimeSeries, aggregate, map_values, nan_sum

PRIMARY_ROLE = 1
"""Value that a cluster role series holds while the instance is the primary."""

ROLE_ARROW = " &rarr; "


class EventType(enum.IntEnum):
    SWITCHOVER = 0
    ROLLOUT = 1
    INSTANCE_DOWN = 2
    INSTANCE_UP = 3


@dataclass
class Event:
    """Something that happened to an application between ``start`` and ``end``.

    A zero ``end`` means the event has no known end.
    """

    start: int
    type: EventType
    end: int = 0
    details: str = ""

    def __str__(self) -> str:
        start = str(self.start) if self.start else ""
        end = str(self.end) if self.end else ""
        return f"{start}-{end}"


def _as_series_list(spans) -> list[TimeSeries | None]:
    if spans is None or isinstance(spans, TimeSeries):
        return [spans]
    return list(spans)


def calc_rollouts(
    life_spans_by_replica_set: Mapping[str, TimeSeries | Iterable[TimeSeries | None] | None],
) -> list[Event]:
    """Periods in which more than one replica set had live pods."""
    merged: dict[str, TimeSeries | None] = {}
    for replica_set, spans in life_spans_by_replica_set.items():
        if not replica_set:
            continue
        merged[replica_set] = aggregate(nan_sum, *_as_series_list(spans))
    if len(merged) <= 1:
        return []

    active = aggregate(
        nan_sum,
        *(map_values(lambda _t, v: 1.0 if v > 0 else 0.0, s) for s in merged.values()),
    )
    if active is None:
        return []

    events: list[Event] = []
    current: Event | None = None
    last_ts = 0
    for t, value in active.points():
        last_ts = t
        if value > 1:
            if current is None:
                current = Event(start=t, type=EventType.ROLLOUT)
                events.append(current)
        elif current is not None:
            current.end = t
            current = None
    if current is not None:
        current.end = last_ts
    return events


def calc_up_down_events(up_by_instance: Mapping[str, TimeSeries | None]) -> list[Event]:
    """Moments at which an instance went down or came back up."""
    events: list[Event] = []
    for name, up in up_by_instance.items():
        if up is None:
            continue
        status = ""
        for t, value in up.points():
            if status == "up" and value != 1:
                events.append(Event(start=t, type=EventType.INSTANCE_DOWN, details=name))
            elif status == "down" and value == 1:
                events.append(Event(start=t, type=EventType.INSTANCE_UP, details=name))
            status = "up" if value == 1 else "down"
    return events


def _primary_number(accumulator: float, value: float) -> float:
    if accumulator < 0:
        return -1.0
    if accumulator >= 0 and value >= 0:
        return -1.0
    if value >= 0:
        return value
    return accumulator


def calc_cluster_switchovers(
    roles_by_instance: Mapping[str, TimeSeries | None]
    | Iterable[tuple[str, TimeSeries | None]],
) -> list[Event]:
    """Changes of the primary instance of a cluster, in instance order."""
    items = (
        roles_by_instance.items()
        if isinstance(roles_by_instance, Mapping)
        else roles_by_instance
    )
    names: list[str] = []
    inputs: list[TimeSeries | None] = []
    for index, (name, role) in enumerate(items):
        names.append(name)
        if role is None:
            continue
        number = float(index)
        inputs.append(
            map_values(
                lambda _t, v, number=number: number if v == PRIMARY_ROLE else NAN, role
            )
        )
    primary = aggregate(_primary_number, *inputs)
    if primary is None or primary.is_empty():
        return []

    events: list[Event] = []
    event: Event | None = None
    prev = -1.0
    for t, curr in primary.points():
        if prev == -1:
            if not math.isnan(curr):
                prev = curr
            continue
        defined = not math.isnan(curr) and curr >= 0
        if curr != prev and event is None:
            event = Event(
                start=t,
                type=EventType.SWITCHOVER,
                details=names[int(prev)] + ROLE_ARROW,
            )
        if curr != prev and event is not None and defined:
            event.end = t
            event.details += names[int(curr)]
            events.append(event)
            event = None
        if defined:
            prev = curr
    return events


def calc_events(
    life_spans_by_replica_set: Mapping | None = None,
    up_by_instance: Mapping | None = None,
    roles_by_instance: Mapping | Iterable | None = None,
) -> list[Event]:
    """All events of an application, ordered by start time and then details."""
    events = [
        *calc_rollouts(life_spans_by_replica_set or {}),
        *calc_cluster_switchovers(roles_by_instance or {}),
        *calc_up_down_events(up_by_instance or {}),
    ]
    events.sort(key=lambda e: (e.start, e.details))
    return events
"""Chart annotations grouped from nearby application events."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from metricvault.events import Event, EventType

_ICONS = {
    EventType.ROLLOUT: "mdi-swap-horizontal-circle-outline",
    EventType.SWITCHOVER: "mdi-database-sync-outline",
    EventType.INSTANCE_UP: "mdi-alert-octagon-outline",
    EventType.INSTANCE_DOWN: "mdi-alert-octagon-outline",
}


def _message(event: Event) -> str:
    if event.type == EventType.ROLLOUT:
        return "application rollout"
    if event.type == EventType.SWITCHOVER:
        return "switchover " + event.details
    if event.type == EventType.INSTANCE_UP:
        return event.details + " is up"
    return event.details + " is down"


@dataclass(frozen=True)
class Annotation:
    """A marked span on a chart describing one or more events."""

    start: int
    end: int
    message: str
    icon: str
    events: tuple[Event, ...] = ()


def build_annotations(events: Iterable[Event], step: int) -> list[Annotation]:
    """Group events, given in start order, that begin within three steps of a group's start."""
    groups: list[tuple[int, int, list[Event]]] = []
    for event in events:
        if not groups or event.start - groups[-1][0] > 3 * step:
            groups.append((event.start, event.end, [event]))
            continue
        start, _, members = groups[-1]
        members.append(event)
        groups[-1] = (start, event.end, members)

    annotations = []
    for start, end, members in groups:
        ordered = sorted(members, key=lambda e: e.type)
        annotations.append(
            Annotation(
                start=start,
                end=end,
                message="<br>".join(_message(e) for e in ordered),
                icon=_ICONS[ordered[0].type],
                events=tuple(ordered),
            )
        )
    return annotations
"""Search index of applications and nodes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from metricvault.status import ApplicationId


@dataclass
class SearchView:
    applications: list[ApplicationId] = field(default_factory=list)
    nodes: list[str] = field(default_factory=list)


def render_search(
    application_ids: Iterable[ApplicationId], node_names: Iterable[str]
) -> SearchView:
    """Applications ordered by name and node names ordered alphabetically."""
    return SearchView(
        applications=sorted(application_ids, key=lambda a: a.name),
        nodes=sorted(node_names),
    )
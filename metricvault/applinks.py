"""Links of one instance to client applications, dependencies and sibling instances."""

from __future__ import annotations

from dataclasses import dataclass, field

from metricvault.status import ApplicationId, Status


@dataclass
class ApplicationLink:
    id: ApplicationId
    status: Status
    direction: str


@dataclass
class InstanceLink:
    id: str
    status: Status
    direction: str


@dataclass
class InstanceView:
    """An instance on the application map with its links."""

    id: str
    labels: dict[str, str] = field(default_factory=dict)
    clients: list[ApplicationLink] = field(default_factory=list)
    dependencies: list[ApplicationLink] = field(default_factory=list)
    internal_links: list[InstanceLink] = field(default_factory=list)

    @staticmethod
    def _find(links, link_id):
        return next((link for link in links if link.id == link_id), None)

    def add_client(self, app_id: ApplicationId, status: Status, direction: str) -> None:
        """Record a client; a client that is also a dependency marks the link as both ways."""
        existing = self._find(self.clients, app_id)
        if existing is not None:
            existing.status = max(existing.status, status)
            return
        dependency = self._find(self.dependencies, app_id)
        if dependency is not None:
            dependency.direction = "both"
            return
        self.clients.append(ApplicationLink(app_id, status, direction))

    def add_dependency(
        self, app_id: ApplicationId, status: Status, direction: str
    ) -> None:
        existing = self._find(self.dependencies, app_id)
        if existing is not None:
            existing.status = max(existing.status, status)
            return
        self.dependencies.append(ApplicationLink(app_id, status, direction))

    def add_internal_link(self, instance_id: str, status: Status) -> None:
        if self._find(self.internal_links, instance_id) is not None:
            return
        self.internal_links.append(InstanceLink(instance_id, status, "to"))
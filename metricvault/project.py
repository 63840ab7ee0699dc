"""Status of a project's integrations: Prometheus, agents and exporters."""

from __future__ import annotations

from dataclasses import dataclass, field

from metricvault.state import CacheStatus
from metricvault.status import ApplicationId, Status


@dataclass
class IntegrationStatus:
    node_agent_installed: bool = False
    kube_state_metrics_required: bool = False
    kube_state_metrics_installed: bool = False


@dataclass
class ProjectWorld:
    """What was observed: integrations, node count and each application's
    instrumentation status by application type."""

    integration_status: IntegrationStatus = field(default_factory=IntegrationStatus)
    node_count: int = 0
    applications: dict[ApplicationId, dict[str, bool]] = field(default_factory=dict)


@dataclass
class ProjectInfo:
    refresh_interval: int
    configuration_hints_muted: dict[str, bool] = field(default_factory=dict)


@dataclass
class _Prometheus:
    status: Status = Status.UNKNOWN
    error: str = ""
    lag_max: int = 0
    lag_avg: int = 0


@dataclass
class _NodeAgent:
    status: Status = Status.UNKNOWN
    nodes: int = 0


@dataclass
class _KubeStateMetrics:
    status: Status = Status.UNKNOWN
    applications: int = 0


@dataclass
class _ApplicationExporter:
    status: Status = Status.OK
    muted: bool = False
    applications: dict[ApplicationId, bool] = field(default_factory=dict)


@dataclass
class ProjectStatus:
    status: Status = Status.OK
    error: str = ""
    prometheus: _Prometheus = field(default_factory=_Prometheus)
    node_agent: _NodeAgent = field(default_factory=_NodeAgent)
    kube_state_metrics: _KubeStateMetrics | None = None
    application_exporters: dict[str, _ApplicationExporter] = field(default_factory=dict)


def render_status(
    project: ProjectInfo | None,
    cache_status: CacheStatus,
    world: ProjectWorld | None,
) -> ProjectStatus:
    res = ProjectStatus()
    if project is None:
        res.error = "Project not found"
        return res

    if cache_status.error:
        res.prometheus.error = cache_status.error
        res.prometheus.status = Status.WARNING
        res.status = Status.WARNING
    else:
        res.prometheus.lag_max = cache_status.lag_max
        res.prometheus.lag_avg = cache_status.lag_avg
        if world is None:
            res.prometheus.status = Status.WARNING
            res.status = Status.WARNING
        elif cache_status.lag_max > 5 * project.refresh_interval:
            res.prometheus.status = Status.INFO
        else:
            res.prometheus.status = Status.OK

    if world is None:
        return res

    integrations = world.integration_status
    if not integrations.node_agent_installed:
        res.node_agent.status = Status.WARNING
        res.status = Status.WARNING
    else:
        res.node_agent.status = Status.OK
        res.node_agent.nodes = world.node_count

    if integrations.kube_state_metrics_required:
        ksm = _KubeStateMetrics()
        if integrations.kube_state_metrics_installed:
            ksm.status = Status.OK
            ksm.applications = len(world.applications)
        else:
            ksm.status = Status.WARNING
            res.status = Status.WARNING
        res.kube_state_metrics = ksm

    for app_id, instrumentation in world.applications.items():
        for app_type, ok in instrumentation.items():
            exporter = res.application_exporters.get(app_type)
            if exporter is None:
                exporter = _ApplicationExporter(
                    muted=project.configuration_hints_muted.get(app_type, False)
                )
                res.application_exporters[app_type] = exporter
            if exporter.muted:
                exporter.status = Status.UNKNOWN
            elif not ok:
                exporter.status = Status.WARNING
                res.status = max(res.status, Status.INFO)
            exporter.applications[app_id] = ok
    return res
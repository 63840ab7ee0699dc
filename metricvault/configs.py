"""Thresholds of every check: global defaults, project settings and per-app overrides."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from metricvault.forms import SLOAvailabilityConfig, SLOLatencyConfig
from metricvault.status import ApplicationId

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckDefinition:
    id: str
    title: str
    unit: str = ""
    condition_format_template: str = ""
    default_threshold: float = 0.0


@dataclass
class ApplicationOverride:
    id: ApplicationId
    threshold: float
    details: str = ""


@dataclass
class CheckView:
    id: str
    title: str
    unit: str
    condition_format_template: str
    global_threshold: float
    project_threshold: float | None = None
    application_overrides: list[ApplicationOverride] = field(default_factory=list)


def format_latency_bucket(bucket: str) -> str:
    """Human form of a histogram bucket bound given in seconds."""
    try:
        value = float(bucket)
    except ValueError:
        return bucket
    if value < 1:
        return f"{value * 1000:g}ms"
    return f"{value:g}s"


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _overrides(app_id: ApplicationId, item, view: CheckView) -> None:
    if _is_number(item):
        if app_id.is_zero():
            view.project_threshold = float(item)
        else:
            view.application_overrides.append(ApplicationOverride(app_id, float(item)))
        return
    if isinstance(item, (list, tuple)):
        for cfg in item:
            if isinstance(cfg, SLOAvailabilityConfig):
                view.application_overrides.append(
                    ApplicationOverride(app_id, cfg.objective_percentage)
                )
            elif isinstance(cfg, SLOLatencyConfig):
                view.application_overrides.append(
                    ApplicationOverride(
                        app_id,
                        cfg.objective_percentage,
                        "< " + format_latency_bucket(cfg.objective_bucket),
                    )
                )
            else:
                log.warning("unknown config type: %r", type(cfg).__name__)
        return
    log.warning("unknown config type: %r", type(item).__name__)


def render_configs(
    check_definitions: Mapping[str, Iterable[CheckDefinition]],
    configs: Mapping[str, Mapping[ApplicationId, Iterable]],
) -> list[CheckView]:
    """One view per check, in report order.

    ``configs`` maps a check id to its configurations by application; a plain
    number is a threshold (for the whole project under a zero application id),
    a list holds SLO configurations.
    """
    views: list[CheckView] = []
    for kind, checks in check_definitions.items():
        for check in checks:
            view = CheckView(
                id=check.id,
                title=f"{kind} / {check.title}",
                unit=check.unit,
                condition_format_template=check.condition_format_template,
                global_threshold=check.default_threshold,
            )
            for app_id, items in configs.get(check.id, {}).items():
                for item in items:
                    _overrides(app_id, item, view)
            views.append(view)
    return views
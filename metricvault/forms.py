"""Validation of the forms that clients submit as JSON."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

_SLUG_RE = re.compile(r"[-_0-9a-z]{3,}")


class InvalidFormError(ValueError):
    """The submitted form is malformed or fails validation."""

    def __init__(self, message: str = "invalid form"):
        super().__init__(message)


def _is_url(value: str) -> bool:
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in value):
        return False
    try:
        parts = urlsplit(value)
        parts.port
    except ValueError:
        return False
    return True


def _str(data: dict, key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidFormError(f"{key} must be a string")
    return value


def _float(data: dict, key: str) -> float:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidFormError(f"{key} must be a number")
    return float(value)


def _list(data: dict, key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise InvalidFormError(f"{key} must be a list")
    for item in value:
        if not isinstance(item, dict):
            raise InvalidFormError(f"items of {key} must be objects")
    return value


@dataclass
class ProjectForm:
    """Name of a project and the address of its Prometheus."""

    name: str
    prometheus_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectForm:
        prometheus = data.get("prometheus") or {}
        if not isinstance(prometheus, dict):
            raise InvalidFormError("prometheus must be an object")
        return cls(name=_str(data, "name"), prometheus_url=_str(prometheus, "url"))

    def valid(self) -> bool:
        return bool(_SLUG_RE.fullmatch(self.name)) and _is_url(self.prometheus_url)


@dataclass
class SLOAvailabilityConfig:
    total_requests_query: str
    failed_requests_query: str
    objective_percentage: float
    custom: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLOAvailabilityConfig:
        return cls(
            total_requests_query=_str(data, "total_requests_query"),
            failed_requests_query=_str(data, "failed_requests_query"),
            objective_percentage=_float(data, "objective_percentage"),
            custom=bool(data.get("custom", False)),
        )


@dataclass
class SLOLatencyConfig:
    histogram_query: str
    objective_bucket: str
    objective_percentage: float
    custom: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLOLatencyConfig:
        return cls(
            histogram_query=_str(data, "histogram_query"),
            objective_bucket=_str(data, "objective_bucket"),
            objective_percentage=_float(data, "objective_percentage"),
            custom=bool(data.get("custom", False)),
        )


@dataclass
class CheckConfigSLOAvailabilityForm:
    configs: list[SLOAvailabilityConfig] = field(default_factory=list)
    empty: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckConfigSLOAvailabilityForm:
        return cls(
            configs=[SLOAvailabilityConfig.from_dict(c) for c in _list(data, "configs")],
            empty=bool(data.get("empty", False)),
        )

    def valid(self) -> bool:
        return all(
            c.total_requests_query and c.failed_requests_query for c in self.configs
        )


@dataclass
class CheckConfigSLOLatencyForm:
    configs: list[SLOLatencyConfig] = field(default_factory=list)
    empty: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckConfigSLOLatencyForm:
        return cls(
            configs=[SLOLatencyConfig.from_dict(c) for c in _list(data, "configs")],
            empty=bool(data.get("empty", False)),
        )

    def valid(self) -> bool:
        return all(c.histogram_query and c.objective_bucket for c in self.configs)


def read_and_validate(payload, form_class):
    """Build ``form_class`` from a JSON document or a dict and validate it.

    Raises :class:`InvalidFormError` if the form cannot be built or is invalid,
    and :class:`json.JSONDecodeError` if the payload is not JSON.
    """
    if isinstance(payload, (str, bytes, bytearray)):
        payload = json.loads(payload)
    if not isinstance(payload, dict):
        raise InvalidFormError("form must be a JSON object")
    form = form_class.from_dict(payload)
    if not form.valid():
        raise InvalidFormError()
    return form
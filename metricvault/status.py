"""Health statuses and application identifiers shared by the views."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Status(enum.IntEnum):
    """Health of a component; a larger value is worse."""

    UNKNOWN = 0
    OK = 1
    INFO = 2
    WARNING = 3
    CRITICAL = 4


@dataclass(frozen=True, order=True)
class ApplicationId:
    """Identifies an application by namespace, kind and name."""

    namespace: str = ""
    kind: str = ""
    name: str = ""

    def is_zero(self) -> bool:
        return not (self.namespace or self.kind or self.name)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.kind}:{self.name}"
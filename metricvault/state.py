"""Persistent per-query download state kept in SQLite."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass


@dataclass
class PrometheusQueryState:
    """How far a query has been downloaded for a project, and its last error."""

    project_id: str
    query: str
    last_ts: int
    last_error: str = ""


@dataclass(frozen=True)
class CacheStatus:
    """The first recorded error and how far behind the queries are, in seconds."""

    error: str = ""
    lag_max: int = 0
    lag_avg: int = 0


_SCHEMA = """
CREATE TABLE IF NOT EXISTS prometheus_query_state (
    project_id TEXT NOT NULL,
    query TEXT NOT NULL,
    last_ts INTEGER NOT NULL,
    last_error TEXT NOT NULL,
    PRIMARY KEY(project_id, query)
)
"""


class StateStore:
    """Query states of all projects in one SQLite database; safe across threads."""

    def __init__(self, path: str):
        if path == ":memory:":
            self._db = sqlite3.connect(path, check_same_thread=False)
        else:
            self._db = sqlite3.connect(
                f"file:{path}?mode=rwc", uri=True, check_same_thread=False
            )
        self._lock = threading.Lock()
        with self._lock, self._db:
            self._db.execute("PRAGMA synchronous = FULL")
            self._db.execute(_SCHEMA)

    def __enter__(self) -> StateStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def save_state(self, state: PrometheusQueryState) -> None:
        with self._lock, self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO prometheus_query_state "
                "(project_id, query, last_ts, last_error) VALUES (?, ?, ?, ?)",
                (state.project_id, state.query, int(state.last_ts), state.last_error),
            )

    def load_states(self, project_id: str) -> dict[str, PrometheusQueryState]:
        with self._lock:
            rows = self._db.execute(
                "SELECT project_id, query, last_ts, last_error "
                "FROM prometheus_query_state WHERE project_id = ?",
                (project_id,),
            ).fetchall()
        return {row[1]: PrometheusQueryState(*row) for row in rows}

    def delete_state(self, state: PrometheusQueryState) -> None:
        with self._lock, self._db:
            self._db.execute(
                "DELETE FROM prometheus_query_state WHERE project_id = ? AND query = ?",
                (state.project_id, state.query),
            )

    def delete_project(self, project_id: str) -> None:
        with self._lock, self._db:
            self._db.execute(
                "DELETE FROM prometheus_query_state WHERE project_id = ?",
                (project_id,),
            )

    def get_min_update_time(self, project_id: str) -> int:
        """Oldest ``last_ts`` of the project's queries, or 0 if it has none."""
        with self._lock:
            (value,) = self._db.execute(
                "SELECT min(last_ts) FROM prometheus_query_state WHERE project_id = ?",
                (project_id,),
            ).fetchone()
        return int(value) if value is not None else 0

    def get_status(self, project_id: str, now: int) -> CacheStatus:
        with self._lock:
            row = self._db.execute(
                "SELECT last_error FROM prometheus_query_state "
                "WHERE project_id = ? AND last_error != '' LIMIT 1",
                (project_id,),
            ).fetchone()
            lag_max, lag_avg = self._db.execute(
                "SELECT max(? - last_ts), avg(? - last_ts) "
                "FROM prometheus_query_state WHERE project_id = ?",
                (now, now, project_id),
            ).fetchone()
        return CacheStatus(
            error=row[0] if row else "",
            lag_max=int(lag_max) if lag_max is not None else 0,
            lag_avg=int(lag_avg) if lag_avg is not None else 0,
        )

    def close(self) -> None:
        with self._lock:
            self._db.close()
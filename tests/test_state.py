import sqlite3

import pytest

from metricvault.state import CacheStatus, PrometheusQueryState, StateStore


@pytest.fixture
def store(tmp_path):
    with StateStore(str(tmp_path / "db.sqlite")) as s:
        yield s


def test_save_and_load_round_trip(store):
    a = PrometheusQueryState("p1", "up", 1000)
    b = PrometheusQueryState("p1", "rate(x[5m])", 2000, "timeout")
    other = PrometheusQueryState("p2", "up", 3000)
    for s in (a, b, other):
        store.save_state(s)
    assert store.load_states("p1") == {"up": a, "rate(x[5m])": b}
    assert store.load_states("p2") == {"up": other}
    assert store.load_states("missing") == {}


def test_save_replaces_existing(store):
    store.save_state(PrometheusQueryState("p1", "up", 1000, "boom"))
    updated = PrometheusQueryState("p1", "up", 1500, "")
    store.save_state(updated)
    assert store.load_states("p1") == {"up": updated}


def test_delete_state(store):
    keep = PrometheusQueryState("p1", "keep", 1)
    drop = PrometheusQueryState("p1", "drop", 2)
    store.save_state(keep)
    store.save_state(drop)
    store.delete_state(drop)
    assert list(store.load_states("p1")) == ["keep"]


def test_delete_project(store):
    store.save_state(PrometheusQueryState("p1", "a", 1))
    store.save_state(PrometheusQueryState("p1", "b", 2))
    store.save_state(PrometheusQueryState("p2", "a", 3))
    store.delete_project("p1")
    assert store.load_states("p1") == {}
    assert list(store.load_states("p2")) == ["a"]


def test_min_update_time(store):
    assert store.get_min_update_time("p1") == 0
    for t in (500, 200, 900):
        store.save_state(PrometheusQueryState("p1", f"q{t}", t))
    assert store.get_min_update_time("p1") == min(500, 200, 900)


def test_status_without_states(store):
    assert store.get_status("p1", 1000) == CacheStatus()


def test_status_lag_and_error(store):
    store.save_state(PrometheusQueryState("p1", "a", 100))
    store.save_state(PrometheusQueryState("p1", "b", 300, "connection refused"))
    status = store.get_status("p1", 400)
    assert status.error == "connection refused"
    assert status.lag_max == 300
    assert status.lag_avg == 200
    assert status.lag_avg <= status.lag_max


def test_status_no_error(store):
    store.save_state(PrometheusQueryState("p1", "a", 100))
    assert store.get_status("p1", 100).error == ""


def test_persists_across_reopen(tmp_path):
    path = str(tmp_path / "state.sqlite")
    state = PrometheusQueryState("p1", "up", 42)
    with StateStore(path) as s:
        s.save_state(state)
    with StateStore(path) as s:
        assert s.load_states("p1") == {"up": state}


def test_closed_store_raises(tmp_path):
    s = StateStore(str(tmp_path / "x.sqlite"))
    s.close()
    with pytest.raises(sqlite3.ProgrammingError):
        s.load_states("p1")


def test_in_memory_store():
    with StateStore(":memory:") as s:
        s.save_state(PrometheusQueryState("p", "q", 7))
        assert s.get_min_update_time("p") == 7
# metricvault

metricvault is a set of building blocks for a monitoring dashboard that works on
metric time series pulled from a Prometheus-style source. It has:

- fixed-step time series
- length-prefixed LZ4 block compression
- planning of hour-long fetch intervals
- per-query download state stored in SQLite
- the data behind several dashboard views and audits

## Modules

- `metricvault.timeseries` has `TimeSeries`: values on a grid `from_ + i * step`, where NaN
  marks a missing point. Its methods are `set`, `data`, `copy_from`, `last`, `is_empty` and
  `points`. The module also has the helpers `nan_sum`, `map_values`, `aggregate` and
  `reduce_values`.
- `metricvault.compression`: `compress` prefixes the data with its 4-byte little-endian
  length and follows it with an LZ4 block. `decompress` reverses this and raises
  `ValueError` on a short or corrupt block.
- `metricvault.config` holds the settings dataclasses `CacheConfig`, `GcConfig`,
  `CompactionConfig` and `Compactor`. `default_compaction_config()` returns a 10-second
  interval, one worker, and compaction of 1h chunks into 4h and of 4h chunks into 12h.
- `metricvault.intervals`: `calc_intervals(last_saved_time, scrape_interval, now, jitter)`
  returns the `Interval`s still to fetch. Chunk boundaries are whole hours shifted by
  `jitter`.
- `metricvault.state`: `StateStore` is a thread-safe SQLite store of
  `PrometheusQueryState` records, and it is also a context manager. Its methods are
  `save_state`, `load_states`, `delete_state`, `delete_project`, `get_min_update_time`,
  `get_status` (which returns a `CacheStatus`) and `close`.
- `metricvault.status` has the `Status` enum (`UNKNOWN` < `OK` < `INFO` < `WARNING` <
  `CRITICAL`) and `ApplicationId`.
- `metricvault.forms` has `ProjectForm`, `CheckConfigSLOAvailabilityForm` and
  `CheckConfigSLOLatencyForm`. `read_and_validate(payload, form_class)` builds a form from
  a dict or a JSON document and raises `InvalidFormError` when the form is invalid.
- `metricvault.search`: `render_search` sorts applications by name and node names
  alphabetically.
- `metricvault.applinks`: `InstanceView` keeps an instance's clients, dependencies and
  internal links.
- `metricvault.project`: `render_status` builds a `ProjectStatus` from `ProjectInfo`, a
  `CacheStatus` and an optional `ProjectWorld`. The status covers Prometheus, the node
  agent, kube-state-metrics and the application exporters.
- `metricvault.configs`: `render_configs` builds a `CheckView` for each check. Each view
  carries the global threshold, the project threshold and per-application overrides.
  `format_latency_bucket` turns `"0.1"` into `100ms` and `"2"` into `2s`.
- `metricvault.events`: `calc_rollouts`, `calc_up_down_events`,
  `calc_cluster_switchovers` and `calc_events` derive `Event`s from metric series.
- `metricvault.annotations`: `build_annotations` groups events that start within three
  steps of one another into `Annotation`s, each with a message and an icon.
- `metricvault.histogram`: `histogram_buckets` and `histogram_series` turn a latency
  histogram into per-range series. `cpu_by_mode_series` gives CPU usage by mode with
  fixed colors.

## Installation

```
pip install metricvault
```

## Examples

```python
from metricvault.timeseries import TimeSeries, aggregate, nan_sum

a = TimeSeries(0, 4, 30, [1, 2, float("nan"), 4])
b = TimeSeries(0, 4, 30, [1, 1, 1, float("nan")])
print(aggregate(nan_sum, a, b))   # TimeSeries(0, 4, 30, [2 3 1 4])
```

```python
from metricvault.compression import compress, decompress

data = b"xzxzxzxzxf2w0er-kwedew-d0kwed0-"
assert decompress(compress(data)) == data
```

Working out which intervals to fetch next:

```python
from datetime import datetime, timezone
from metricvault.intervals import calc_intervals

def ts(s):
    return int(datetime.fromisoformat(s).replace(tzinfo=timezone.utc).timestamp())

for interval in calc_intervals(ts("2020-11-13T12:11:00"), 30, ts("2020-11-13T12:13:05"), 720):
    print(interval)
# (2020-11-13T11:12:00, 3600, 2020-11-13T12:11:30)
# (2020-11-13T12:12:00, 3600, 2020-11-13T12:12:30)
```

Keeping query state:

```python
from metricvault.state import StateStore, PrometheusQueryState

with StateStore(":memory:") as store:
    store.save_state(PrometheusQueryState("p1", "up", 1000))
    print(store.get_status("p1", now=1060))
    # CacheStatus(error='', lag_max=60, lag_avg=60)
```

## What it does not do

metricvault does not store metric values on disk. It has no chunk-file format and no
cache that downloads series from Prometheus. It does not compact or garbage-collect
stored data. `metricvault.config` only describes the settings for such storage, and
`metricvault.state` only records how far each query has been fetched.

There is also no HTTP server and no command-line program. The view functions return
Python objects for the caller to serve.

## Running the tests

```
pip install "metricvault[test]"
pytest
```
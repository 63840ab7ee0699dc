"""Metric time series helpers, LZ4 block compression, fetch-interval planning, SQLite query state and monitoring views."""

__version__ = "0.1.0"
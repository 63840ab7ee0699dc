[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "metricvault"
version = "0.1.0"
description = "Metric time series helpers, LZ4 block compression, fetch-interval planning, SQLite query state and monitoring views"
requires-python = ">=3.10"
dependencies = [
    "lz4",
]
keywords = ["metrics", "monitoring", "time series", "prometheus", "observability", "sqlite", "lz4"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["metricvault"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true

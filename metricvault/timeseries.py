"""Fixed-step in-memory time series and helpers for combining them."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator

NAN = float("nan")


def _format_value(value: float) -> str:
    if math.isnan(value):
        return "."
    if value.is_integer():
        return str(int(value))
    return repr(value)


class TimeSeries:
    """Values at ``from_ + i * step`` for ``i`` in ``range(points_count)``.

    A NaN value marks a missing point.
    """

    __slots__ = ("from_", "step", "_values")

    def __init__(self, from_: int, points_count: int, step: int, values=None):
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        if points_count < 0:
            raise ValueError(f"points count must not be negative, got {points_count}")
        self.from_ = int(from_)
        self.step = int(step)
        if values is None:
            self._values = [NAN] * points_count
        else:
            self._values = [float(v) for v in values]
            if len(self._values) != points_count:
                raise ValueError(
                    f"expected {points_count} values, got {len(self._values)}"
                )

    @property
    def points_count(self) -> int:
        return len(self._values)

    @property
    def to(self) -> int:
        """Time of the last point."""
        return self.from_ + (len(self._values) - 1) * self.step

    def __len__(self) -> int:
        return len(self._values)

    def set(self, t: int, value: float) -> int:
        """Store ``value`` at the grid point at or before ``t``; return that point's time."""
        index = (t - self.from_) // self.step
        if not 0 <= index < len(self._values):
            raise IndexError(f"time {t} is outside [{self.from_}, {self.to}]")
        self._values[index] = float(value)
        return self.from_ + index * self.step

    def data(self) -> list[float]:
        """A copy of the values, one per grid point."""
        return list(self._values)

    def copy_from(self, other: TimeSeries | None) -> None:
        """Overwrite points with those of ``other`` that fall within this series."""
        if other is None:
            return
        for t, value in other.points():
            if self.from_ <= t <= self.to:
                self.set(t, value)

    def last(self) -> float:
        return self._values[-1] if self._values else NAN

    def is_empty(self) -> bool:
        return all(math.isnan(v) for v in self._values)

    def points(self) -> Iterator[tuple[int, float]]:
        for index, value in enumerate(self._values):
            yield self.from_ + index * self.step, value

    def _at(self, t: int) -> float:
        offset = t - self.from_
        if offset % self.step:
            return NAN
        index = offset // self.step
        if 0 <= index < len(self._values):
            return self._values[index]
        return NAN

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return (
            self.from_ == other.from_
            and self.step == other.step
            and len(self._values) == len(other._values)
            and all(
                a == b or (math.isnan(a) and math.isnan(b))
                for a, b in zip(self._values, other._values)
            )
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        values = " ".join(_format_value(v) for v in self._values)
        return f"TimeSeries({self.from_}, {len(self._values)}, {self.step}, [{values}])"

    __repr__ = __str__


def nan_sum(accumulator: float, value: float) -> float:
    """Sum that treats NaN as absent."""
    if math.isnan(accumulator):
        return value
    if math.isnan(value):
        return accumulator
    return accumulator + value


def map_values(
    func: Callable[[int, float], float], series: TimeSeries | None
) -> TimeSeries | None:
    """Apply ``func(t, value)`` to every point."""
    if series is None:
        return None
    return TimeSeries(
        series.from_,
        len(series),
        series.step,
        [func(t, v) for t, v in series.points()],
    )


def aggregate(
    func: Callable[[float, float], float], *args: TimeSeries | None
) -> TimeSeries | None:
    """Fold the series point by point with ``func(accumulator, value)``.

    The result lies on the grid of the first series given; ``None`` inputs are
    skipped, and ``None`` is returned when there is nothing to aggregate.
    """
    inputs = [s for s in args if s is not None]
    if not inputs:
        return None
    base = inputs[0]
    times = [t for t, _ in base.points()]
    values = base.data()
    for other in inputs[1:]:
        values = [func(acc, other._at(t)) for t, acc in zip(times, values)]
    return TimeSeries(base.from_, len(base), base.step, values)


def reduce_values(
    func: Callable[[float, float], float], series: TimeSeries | None
) -> float:
    """Fold all values with ``func(accumulator, value)``, starting from NaN."""
    result = NAN
    if series is None:
        return result
    for _, value in series.points():
        result = func(result, value)
    return result
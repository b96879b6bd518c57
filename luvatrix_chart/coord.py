from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
import math
from typing import Any, Protocol, runtime_checkable

import numpy as np

from luvatrix_chart.geometry import PixelRange


@runtime_checkable
class RangedDescriptor(Protocol):
    def map(self, value: Any, limit: tuple[int, int]) -> Any:
        ...

    def unmap(self, pixel: float, limit: tuple[int, int]) -> Any:
        ...

    def range(self) -> tuple[Any, Any]:
        ...

    def key_points(self, max_points: int) -> list[Any]:
        ...


@runtime_checkable
class AsRangedCoord(Protocol):
    def to_ranged_coord(self) -> RangedDescriptor:
        ...


def _lerp(fraction: Any, limit: tuple[int, int]) -> Any:
    lo, hi = limit
    return lo + fraction * (hi - lo)


def _fraction(pixel: float, limit: tuple[int, int]) -> float:
    lo, hi = limit
    if hi == lo:
        return 0.0
    return (float(pixel) - lo) / (hi - lo)


@dataclass(frozen=True)
class LinearRange:
    start: float
    end: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise ValueError("linear range bounds must be finite")
        if self.start == self.end:
            raise ValueError("linear range must not be empty")

    def map(self, value: Any, limit: tuple[int, int]) -> Any:
        return _lerp((value - self.start) / (self.end - self.start), limit)

    def unmap(self, pixel: float, limit: tuple[int, int]) -> float:
        return self.start + _fraction(pixel, limit) * (self.end - self.start)

    def range(self) -> tuple[float, float]:
        return (self.start, self.end)

    def key_points(self, max_points: int) -> list[float]:
        if max_points <= 0:
            return []
        lo, hi = sorted((self.start, self.end))
        ticks = generate_nice_ticks(lo, hi, max_points)
        inside = ticks[(ticks >= lo) & (ticks <= hi)]
        return [float(v) for v in inside[:max_points]]


@dataclass(frozen=True)
class LogRange:
    start: float
    end: float

    def __post_init__(self) -> None:
        if self.start <= 0 or self.end <= 0:
            raise ValueError("log range bounds must be > 0")
        if self.start == self.end:
            raise ValueError("log range must not be empty")

    def map(self, value: Any, limit: tuple[int, int]) -> Any:
        lo = math.log10(self.start)
        hi = math.log10(self.end)
        return _lerp((np.log10(value) - lo) / (hi - lo), limit)

    def unmap(self, pixel: float, limit: tuple[int, int]) -> float:
        lo = math.log10(self.start)
        hi = math.log10(self.end)
        return float(10 ** (lo + _fraction(pixel, limit) * (hi - lo)))

    def range(self) -> tuple[float, float]:
        return (self.start, self.end)

    def key_points(self, max_points: int) -> list[float]:
        if max_points <= 0:
            return []
        lo, hi = sorted((self.start, self.end))
        exponents = list(range(math.ceil(math.log10(lo)), math.floor(math.log10(hi)) + 1))
        stride = max(1, math.ceil(len(exponents) / max_points))
        return [float(10**e) for e in exponents[::stride]]


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_datetime(self.start))
        object.__setattr__(self, "end", _as_datetime(self.end))
        if self.start == self.end:
            raise ValueError("date range must not be empty")

    @property
    def _span_s(self) -> float:
        return (self.end - self.start).total_seconds()

    def map(self, value: datetime | date, limit: tuple[int, int]) -> float:
        offset = (_as_datetime(value) - self.start).total_seconds()
        return _lerp(offset / self._span_s, limit)

    def unmap(self, pixel: float, limit: tuple[int, int]) -> datetime:
        return self.start + timedelta(seconds=_fraction(pixel, limit) * self._span_s)

    def range(self) -> tuple[datetime, datetime]:
        return (self.start, self.end)

    def key_points(self, max_points: int) -> list[datetime]:
        if max_points <= 0:
            return []
        lo, hi = sorted((0.0, self._span_s))
        ticks = generate_nice_ticks(lo, hi, max_points)
        inside = ticks[(ticks >= lo) & (ticks <= hi)]
        return [self.start + timedelta(seconds=float(v)) for v in inside[:max_points]]


@dataclass(frozen=True)
class CategoryRange:
    categories: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))
        if not self.categories:
            raise ValueError("category range must include at least one category")

    def index_of(self, value: str) -> int:
        try:
            return self.categories.index(value)
        except ValueError as exc:
            raise ValueError(f"unknown category: {value!r}") from exc

    def map(self, value: str, limit: tuple[int, int]) -> float:
        # Each category owns an equal bucket; values map to the bucket center.
        return _lerp((self.index_of(value) + 0.5) / len(self.categories), limit)

    def unmap(self, pixel: float, limit: tuple[int, int]) -> str:
        idx = int(math.floor(_fraction(pixel, limit) * len(self.categories)))
        return self.categories[max(0, min(len(self.categories) - 1, idx))]

    def range(self) -> tuple[str, str]:
        return (self.categories[0], self.categories[-1])

    def key_points(self, max_points: int) -> list[str]:
        if max_points <= 0:
            return []
        stride = max(1, math.ceil(len(self.categories) / max_points))
        return list(self.categories[::stride])


def as_ranged_coord(spec: Any) -> RangedDescriptor:
    """Convert a caller axis spec into a ranged-coordinate descriptor."""
    if isinstance(spec, AsRangedCoord):
        return spec.to_ranged_coord()
    if isinstance(spec, RangedDescriptor):
        return spec
    if isinstance(spec, range):
        return LinearRange(float(spec.start), float(spec.stop))
    if isinstance(spec, (tuple, list)):
        if len(spec) == 2 and all(isinstance(v, (datetime, date)) for v in spec):
            return DateRange(spec[0], spec[1])
        if len(spec) == 2 and all(_is_number(v) for v in spec):
            return LinearRange(float(spec[0]), float(spec[1]))
        if all(isinstance(v, str) for v in spec):
            return CategoryRange(tuple(spec))
    elif isinstance(spec, Sequence) and not isinstance(spec, str) and all(isinstance(v, str) for v in spec):
        return CategoryRange(tuple(spec))
    raise TypeError(f"cannot convert {type(spec).__name__} into a ranged coordinate")


class RangedCoord:
    """Two-axis ranged coordinate system bound to a pixel rectangle.

    Pixel ranges are half-open; a range whose start is greater than its end is
    inverted, so the largest domain value lands on the smallest pixel.
    """

    def __init__(self, x: RangedDescriptor, y: RangedDescriptor, pixel_range: tuple[PixelRange, PixelRange]) -> None:
        self.x = x
        self.y = y
        self._pixel_range = pixel_range
        self._x_limit = _inclusive_limit(pixel_range[0])
        self._y_limit = _inclusive_limit(pixel_range[1])

    @classmethod
    def from_specs(cls, x_spec: Any, y_spec: Any, pixel_range: tuple[PixelRange, PixelRange]) -> "RangedCoord":
        return cls(as_ranged_coord(x_spec), as_ranged_coord(y_spec), pixel_range)

    def get_pixel_range(self) -> tuple[PixelRange, PixelRange]:
        return self._pixel_range

    def get_x_range(self) -> tuple[Any, Any]:
        return self.x.range()

    def get_y_range(self) -> tuple[Any, Any]:
        return self.y.range()

    def translate(self, point: tuple[Any, Any]) -> tuple[int, int]:
        px = self.x.map(point[0], self._x_limit)
        py = self.y.map(point[1], self._y_limit)
        return (int(round(px)), int(round(py)))

    def translate_many(self, xs: Any, ys: Any) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized ``translate`` for numeric axes."""
        px = self.x.map(np.asarray(xs, dtype=np.float64), self._x_limit)
        py = self.y.map(np.asarray(ys, dtype=np.float64), self._y_limit)
        return np.rint(px).astype(np.int32), np.rint(py).astype(np.int32)

    def reverse_translate(self, pixel: tuple[int, int]) -> tuple[Any, Any]:
        return (self.x.unmap(pixel[0], self._x_limit), self.y.unmap(pixel[1], self._y_limit))


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _inclusive_limit(pixels: PixelRange) -> tuple[int, int]:
    if pixels.start <= pixels.end:
        return (pixels.start, max(pixels.start, pixels.end - 1))
    return (pixels.start - 1, pixels.end)


def _as_datetime(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)

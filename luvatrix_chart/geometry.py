from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterator, Protocol, TypeVar


class Position(Enum):
    TOP = 0
    BOTTOM = 1
    LEFT = 2
    RIGHT = 3

    @property
    def direction(self) -> tuple[int, int]:
        """Outward unit vector of this side in pixel space (y grows downward)."""
        return _DIRECTIONS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Position.TOP, Position.BOTTOM)


_DIRECTIONS = {
    Position.TOP: (0, -1),
    Position.BOTTOM: (0, 1),
    Position.LEFT: (-1, 0),
    Position.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Rect:
    """An axis-aligned pixel rectangle with a top-left origin."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> "Rect":
        return cls(x=x0, y=y0, width=x1 - x0, height=y1 - y0)

    @property
    def x1(self) -> int:
        return self.x + self.width

    @property
    def y1(self) -> int:
        return self.y + self.height

    def dim_in_pixel(self) -> tuple[int, int]:
        return (self.width, self.height)

    def shrink(self, x: int, y: int, width: int, height: int) -> "Rect":
        return Rect(x=self.x + x, y=self.y + y, width=width, height=height)

    def contains_rect(self, other: "Rect") -> bool:
        return self.x <= other.x and self.y <= other.y and other.x1 <= self.x1 and other.y1 <= self.y1


@dataclass(frozen=True)
class Margin:
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0

    def __post_init__(self) -> None:
        for side in ("top", "bottom", "left", "right"):
            if getattr(self, side) < 0:
                raise ValueError(f"margin {side} must be >= 0, got {getattr(self, side)}")

    @classmethod
    def uniform(cls, size: int) -> "Margin":
        return cls(top=size, bottom=size, left=size, right=size)

    def is_zero(self) -> bool:
        return max(self.top, self.bottom, self.left, self.right) <= 0


@dataclass(frozen=True)
class LabelAreaSpec:
    size: int = 0
    inset: bool = False


@dataclass(frozen=True)
class PixelRange:
    """Half-open pixel interval ``[start, end)``; ``start > end`` means inverted."""

    start: int
    end: int

    def reversed(self) -> "PixelRange":
        return PixelRange(start=self.end, end=self.start)


class Region(Protocol):
    """Anything the label resolver can measure and carve sub-regions from."""

    def dim_in_pixel(self) -> tuple[int, int]:
        ...

    def shrink(self, x: int, y: int, width: int, height: int) -> "Region":
        ...


R = TypeVar("R")


@dataclass(frozen=True)
class LabelAreas(Generic[R]):
    top: R | None = None
    bottom: R | None = None
    left: R | None = None
    right: R | None = None

    def __getitem__(self, position: Position) -> R | None:
        return getattr(self, position.name.lower())

    def items(self) -> Iterator[tuple[Position, R | None]]:
        for position in Position:
            yield position, self[position]

    def present(self) -> list[Position]:
        return [position for position, area in self.items() if area is not None]

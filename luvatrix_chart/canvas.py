from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence

import numpy as np

from luvatrix_chart.coord import RangedCoord
from luvatrix_chart.errors import BackendError
from luvatrix_chart.geometry import PixelRange, Rect
from luvatrix_chart.splitter import split_grid
from luvatrix_chart.text import RGBA, TextStyle, draw_text, text_size


TITLE_PADDING_PX = 5


class Canvas(Protocol):
    """Backend operations the chart builder orchestrates."""

    def clone(self) -> "Canvas":
        ...

    def margin(self, top: int, bottom: int, left: int, right: int) -> "Canvas":
        ...

    def titled(self, text: str, style: TextStyle) -> "Canvas":
        ...

    def dim_in_pixel(self) -> tuple[int, int]:
        ...

    def split_by_breakpoints(self, xs: Iterable[int], ys: Iterable[int]) -> Sequence["Canvas"]:
        ...

    def shrink(self, x: int, y: int, width: int, height: int) -> "Canvas":
        ...

    def make_inset(self) -> "Canvas":
        ...

    def get_pixel_range(self) -> tuple[PixelRange, PixelRange]:
        ...

    def apply_coord_spec(self, coord: RangedCoord) -> Any:
        ...


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


class DrawingArea:
    """A rectangular window onto a shared RGBA pixel buffer.

    Derived areas share the buffer; only the rect differs.
    """

    def __init__(self, buffer: np.ndarray, rect: Rect | None = None, *, is_inset: bool = False) -> None:
        if buffer.ndim != 3 or buffer.shape[2] != 4:
            raise ValueError("drawing area buffer must have shape (height, width, 4)")
        self._buffer = buffer
        self._rect = rect if rect is not None else Rect(0, 0, int(buffer.shape[1]), int(buffer.shape[0]))
        self._is_inset = is_inset

    @classmethod
    def new(cls, width: int, height: int, background: RGBA = (0, 0, 0, 255)) -> "DrawingArea":
        return cls(new_canvas(width, height, background))

    @property
    def buffer(self) -> np.ndarray:
        return self._buffer

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def is_inset(self) -> bool:
        return self._is_inset

    def __repr__(self) -> str:
        return f"DrawingArea(rect={self._rect!r}, is_inset={self._is_inset})"

    def _derive(self, rect: Rect, *, is_inset: bool | None = None) -> "DrawingArea":
        return type(self)(self._buffer, rect, is_inset=self._is_inset if is_inset is None else is_inset)

    def clone(self) -> "DrawingArea":
        return self._derive(self._rect)

    def dim_in_pixel(self) -> tuple[int, int]:
        return self._rect.dim_in_pixel()

    def margin(self, top: int, bottom: int, left: int, right: int) -> "DrawingArea":
        r = self._rect
        x0 = r.x + left
        y0 = r.y + top
        x1 = max(x0, r.x1 - right)
        y1 = max(y0, r.y1 - bottom)
        return self._derive(Rect.from_corners(x0, y0, x1, y1))

    def titled(self, text: str, style: TextStyle) -> "DrawingArea":
        """Draw ``text`` centered at the top and return the area below it."""
        text_w, text_h = text_size(text, style)
        consumed = text_h + 2 * TITLE_PADDING_PX
        w, h = self.dim_in_pixel()
        if consumed > h:
            raise BackendError(f"title needs {consumed}px of height but the area has {h}px")
        r = self._rect
        draw_text(self._buffer, r.x + (w - text_w) // 2, r.y + TITLE_PADDING_PX, text, style)
        return self._derive(Rect.from_corners(r.x, r.y + consumed, r.x1, r.y1))

    def split_by_breakpoints(self, xs: Iterable[int], ys: Iterable[int]) -> list["DrawingArea"]:
        return [self._derive(cell) for cell in split_grid(self._rect, xs, ys)]

    def shrink(self, x: int, y: int, width: int, height: int) -> "DrawingArea":
        return self._derive(self._rect.shrink(x, y, width, height))

    def make_inset(self) -> "DrawingArea":
        return self._derive(self._rect, is_inset=True)

    def get_pixel_range(self) -> tuple[PixelRange, PixelRange]:
        r = self._rect
        return (PixelRange(r.x, r.x1), PixelRange(r.y, r.y1))

    def apply_coord_spec(self, coord: RangedCoord) -> "BoundDrawingArea":
        return BoundDrawingArea(self, coord)

    def fill(self, color: RGBA) -> None:
        r = self._rect
        x0 = max(0, r.x)
        y0 = max(0, r.y)
        x1 = min(self._buffer.shape[1], r.x1)
        y1 = min(self._buffer.shape[0], r.y1)
        if x1 <= x0 or y1 <= y0:
            return
        self._buffer[y0:y1, x0:x1] = np.asarray(color, dtype=np.uint8)


class BoundDrawingArea:
    """A drawing area whose pixels are addressed through a ranged coordinate."""

    def __init__(self, area: DrawingArea, coord: RangedCoord) -> None:
        self.area = area
        self.coord = coord

    def dim_in_pixel(self) -> tuple[int, int]:
        return self.area.dim_in_pixel()

    def get_pixel_range(self) -> tuple[PixelRange, PixelRange]:
        return self.coord.get_pixel_range()

    def map_coordinate(self, point: tuple[Any, Any]) -> tuple[int, int]:
        return self.coord.translate(point)

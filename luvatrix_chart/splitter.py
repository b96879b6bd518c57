from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Mapping, Sequence

from luvatrix_chart.geometry import LabelAreas, LabelAreaSpec, Position, R, Rect


# Row-major indices into the 3x3 grid produced by two breakpoints per axis.
CENTER_CELL = 4
BAND_CELLS = {
    Position.TOP: 1,
    Position.BOTTOM: 7,
    Position.LEFT: 3,
    Position.RIGHT: 5,
}


@dataclass(frozen=True)
class CanvasSplit(Generic[R]):
    interior: R
    bands: LabelAreas[R]


def split_point(position: Position, spec: LabelAreaSpec) -> int:
    """Offset added to the interior edge on ``position``'s side."""
    if spec.inset:
        return 0
    dx, dy = position.direction
    if dx + dy < 0:
        return spec.size
    return -spec.size


def compute_breakpoints(
    width: int,
    height: int,
    specs: Mapping[Position, LabelAreaSpec],
) -> tuple[tuple[int, int], tuple[int, int]]:
    """Return ``(x_breakpoints, y_breakpoints)`` relative to the canvas origin."""
    edges = {
        Position.TOP: 0,
        Position.BOTTOM: height,
        Position.LEFT: 0,
        Position.RIGHT: width,
    }
    for position in Position:
        edges[position] += split_point(position, specs.get(position, LabelAreaSpec()))
    xs = (edges[Position.LEFT], edges[Position.RIGHT])
    ys = (edges[Position.TOP], edges[Position.BOTTOM])
    return xs, ys


def split_grid(rect: Rect, xs: Iterable[int], ys: Iterable[int]) -> list[Rect]:
    """Split ``rect`` at relative breakpoints; cells are returned row by row.

    Breakpoints are sorted together with the rect's own edges, so a breakpoint
    outside the rect yields a cell that lies outside it.
    """
    x_edges = sorted([rect.x, rect.x1, *(rect.x + int(v) for v in xs)])
    y_edges = sorted([rect.y, rect.y1, *(rect.y + int(v) for v in ys)])
    cells: list[Rect] = []
    for y0, y1 in zip(y_edges, y_edges[1:]):
        for x0, x1 in zip(x_edges, x_edges[1:]):
            cells.append(Rect.from_corners(x0, y0, x1, y1))
    return cells


def pick_cells(cells: Sequence[R]) -> CanvasSplit[R]:
    """Select the center cell and the four edge bands from a 3x3 grid.

    Bands with a zero extent on either axis are dropped.
    """
    if len(cells) != 9:
        raise ValueError(f"expected a 3x3 grid, got {len(cells)} cells")

    def band(position: Position) -> R | None:
        cell = cells[BAND_CELLS[position]]
        w, h = cell.dim_in_pixel()
        if w > 0 and h > 0:
            return cell
        return None

    return CanvasSplit(
        interior=cells[CENTER_CELL],
        bands=LabelAreas(
            top=band(Position.TOP),
            bottom=band(Position.BOTTOM),
            left=band(Position.LEFT),
            right=band(Position.RIGHT),
        ),
    )


def split_canvas(rect: Rect, specs: Mapping[Position, LabelAreaSpec]) -> CanvasSplit[Rect]:
    xs, ys = compute_breakpoints(rect.width, rect.height, specs)
    return pick_cells(split_grid(rect, xs, ys))

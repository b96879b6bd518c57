from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from luvatrix_chart.canvas import BoundDrawingArea, DrawingArea
from luvatrix_chart.geometry import Position
from luvatrix_chart.text import RGBA


@dataclass(frozen=True)
class SeriesAnno:
    label: str
    color: RGBA


@dataclass
class ChartContext:
    """A plot area bound to a coordinate system plus its label areas.

    ``x_label_area`` holds the top and bottom slots, ``y_label_area`` the left
    and right slots; absent label areas are ``None``.
    """

    x_label_area: list[DrawingArea | None]
    y_label_area: list[DrawingArea | None]
    drawing_area: BoundDrawingArea
    series_anno: list[SeriesAnno] = field(default_factory=list)

    def plotting_area(self) -> BoundDrawingArea:
        return self.drawing_area

    def x_range(self) -> tuple[Any, Any]:
        return self.drawing_area.coord.get_x_range()

    def y_range(self) -> tuple[Any, Any]:
        return self.drawing_area.coord.get_y_range()

    def backend_coord(self, point: tuple[Any, Any]) -> tuple[int, int]:
        return self.drawing_area.map_coordinate(point)

    def label_area(self, position: Position) -> DrawingArea | None:
        if position is Position.TOP:
            return self.x_label_area[0]
        if position is Position.BOTTOM:
            return self.x_label_area[1]
        if position is Position.LEFT:
            return self.y_label_area[0]
        return self.y_label_area[1]

    def annotate_series(self, label: str, color: RGBA) -> SeriesAnno:
        anno = SeriesAnno(label=label, color=color)
        self.series_anno.append(anno)
        return anno

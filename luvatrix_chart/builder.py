from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import TYPE_CHECKING, Any

from luvatrix_chart.canvas import Canvas
from luvatrix_chart.context import ChartContext
from luvatrix_chart.coord import RangedCoord
from luvatrix_chart.errors import BackendError, LayoutError
from luvatrix_chart.geometry import LabelAreaSpec, Margin, Position
from luvatrix_chart.labels import resolve_label_areas
from luvatrix_chart.splitter import compute_breakpoints, pick_cells
from luvatrix_chart.text import TextStyle, TextStyleLike

if TYPE_CHECKING:
    from luvatrix_chart.config import LayoutConfig

LOGGER = logging.getLogger(__name__)


def _empty_label_areas() -> dict[Position, LabelAreaSpec]:
    return {position: LabelAreaSpec() for position in Position}


@dataclass
class LayoutRequest:
    margin: Margin = field(default_factory=Margin)
    label_areas: dict[Position, LabelAreaSpec] = field(default_factory=_empty_label_areas)
    title: tuple[str, TextStyle] | None = None


class ChartBuilder:
    """Collects margins, label areas and a caption, then builds a chart context.

    Every configuration call returns the builder so calls can be chained::

        chart = (
            ChartBuilder.on(root)
            .margin(10)
            .x_label_area_size(40)
            .y_label_area_size(50)
            .build((0.0, 10.0), (0.0, 1.0))
        )
    """

    def __init__(self, root: Canvas) -> None:
        self._root = root
        self._request = LayoutRequest()

    @classmethod
    def on(cls, root: Canvas) -> "ChartBuilder":
        return cls(root)

    @property
    def request(self) -> LayoutRequest:
        return self._request

    def margin(self, size: int) -> "ChartBuilder":
        self._request.margin = Margin.uniform(size)
        return self

    def margin_top(self, size: int) -> "ChartBuilder":
        self._request.margin = replace(self._request.margin, top=size)
        return self

    def margin_bottom(self, size: int) -> "ChartBuilder":
        self._request.margin = replace(self._request.margin, bottom=size)
        return self

    def margin_left(self, size: int) -> "ChartBuilder":
        self._request.margin = replace(self._request.margin, left=size)
        return self

    def margin_right(self, size: int) -> "ChartBuilder":
        self._request.margin = replace(self._request.margin, right=size)
        return self

    def set_label_area_size(self, position: Position, size: int) -> "ChartBuilder":
        current = self._request.label_areas[position]
        self._request.label_areas[position] = replace(current, size=int(size))
        return self

    def _set_inset(self, position: Position) -> "ChartBuilder":
        current = self._request.label_areas[position]
        self._request.label_areas[position] = replace(current, inset=True)
        return self

    def x_label_area_size(self, size: int) -> "ChartBuilder":
        return self.set_label_area_size(Position.BOTTOM, size)

    def y_label_area_size(self, size: int) -> "ChartBuilder":
        return self.set_label_area_size(Position.LEFT, size)

    def top_x_label_area_size(self, size: int) -> "ChartBuilder":
        return self.set_label_area_size(Position.TOP, size)

    def right_y_label_area_size(self, size: int) -> "ChartBuilder":
        return self.set_label_area_size(Position.RIGHT, size)

    def inset_x_labels(self) -> "ChartBuilder":
        return self._set_inset(Position.BOTTOM)

    def inset_y_labels(self) -> "ChartBuilder":
        return self._set_inset(Position.LEFT)

    def inset_top_x_labels(self) -> "ChartBuilder":
        return self._set_inset(Position.TOP)

    def inset_right_y_labels(self) -> "ChartBuilder":
        return self._set_inset(Position.RIGHT)

    def caption(self, text: str, style: TextStyleLike = TextStyle()) -> "ChartBuilder":
        """Set the chart title; its height is taken after margins, before label areas."""
        self._request.title = (str(text), TextStyle.coerce(style))
        return self

    def configure(self, config: "LayoutConfig") -> "ChartBuilder":
        self._request.margin = config.margin
        for position in Position:
            self._request.label_areas[position] = config.label_areas.get(position, LabelAreaSpec())
        if config.caption is not None:
            self.caption(*config.caption)
        return self

    def build(self, x_spec: Any, y_spec: Any) -> ChartContext:
        """Lay out the chart and bind the plot area to ``x_spec`` and ``y_spec``.

        Raises ``LayoutError`` when the backend cannot apply the margin or title.
        """
        request = self._request
        area = self._root.clone()

        if not request.margin.is_zero():
            m = request.margin
            try:
                area = area.margin(m.top, m.bottom, m.left, m.right)
            except BackendError as exc:
                raise LayoutError(f"failed to apply chart margin: {exc}", cause=exc) from exc

        if request.title is not None:
            text, style = request.title
            try:
                area = area.titled(text, style)
            except BackendError as exc:
                raise LayoutError(f"failed to apply chart caption {text!r}: {exc}", cause=exc) from exc

        width, height = area.dim_in_pixel()
        LOGGER.debug(
            "laying out chart on %dx%d area; margin=%s title=%s",
            width,
            height,
            request.margin,
            request.title[0] if request.title is not None else None,
        )
        xs, ys = compute_breakpoints(width, height, request.label_areas)
        split = pick_cells(area.split_by_breakpoints(xs, ys))
        layout = resolve_label_areas(split, request.label_areas, on_inset=lambda a: a.make_inset())

        interior = layout.interior
        x_pixels, y_pixels = interior.get_pixel_range()
        coord = RangedCoord.from_specs(x_spec, y_spec, (x_pixels, y_pixels.reversed()))
        labels = layout.label_areas
        return ChartContext(
            x_label_area=[labels.top, labels.bottom],
            y_label_area=[labels.left, labels.right],
            drawing_area=interior.apply_coord_spec(coord),
        )

    def build_ranged(self, x_spec: Any, y_spec: Any) -> ChartContext:
        return self.build(x_spec, y_spec)

from __future__ import annotations

from luvatrix_chart.builder import ChartBuilder
from luvatrix_chart.canvas import DrawingArea
from luvatrix_chart.text import RGBA


DEFAULT_BACKGROUND: RGBA = (12, 16, 23, 255)


def chart_builder(width: int, height: int, *, background: RGBA = DEFAULT_BACKGROUND) -> ChartBuilder:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    return ChartBuilder.on(DrawingArea.new(width, height, background))

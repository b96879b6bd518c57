from luvatrix_chart.api import chart_builder
from luvatrix_chart.builder import ChartBuilder, LayoutRequest
from luvatrix_chart.canvas import BoundDrawingArea, Canvas, DrawingArea
from luvatrix_chart.config import LayoutConfig, load_layout_config
from luvatrix_chart.context import ChartContext, SeriesAnno
from luvatrix_chart.coord import CategoryRange, DateRange, LinearRange, LogRange, RangedCoord, as_ranged_coord
from luvatrix_chart.errors import BackendError, LayoutError
from luvatrix_chart.geometry import LabelAreas, LabelAreaSpec, Margin, PixelRange, Position, Rect
from luvatrix_chart.text import TextStyle

__all__ = [
    "BackendError",
    "BoundDrawingArea",
    "Canvas",
    "CategoryRange",
    "ChartBuilder",
    "ChartContext",
    "DateRange",
    "DrawingArea",
    "LabelAreaSpec",
    "LabelAreas",
    "LayoutConfig",
    "LayoutError",
    "LayoutRequest",
    "LinearRange",
    "LogRange",
    "Margin",
    "PixelRange",
    "Position",
    "RangedCoord",
    "Rect",
    "SeriesAnno",
    "TextStyle",
    "as_ranged_coord",
    "chart_builder",
    "load_layout_config",
]

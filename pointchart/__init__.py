from pointchart.canvas import Canvas, LinearGradient, Path, Rect, TextBounds, saved
from pointchart.chart import Chart
from pointchart.entry import Entry
from pointchart.errors import ChartDataError
from pointchart.frame import FrameContext, TouchRegion
from pointchart.point_chart import PointChart
from pointchart.raster_canvas import RasterCanvas
from pointchart.selection import SelectionController
from pointchart.style import CalloutStyle, ChartStyle, validate_chart_style
from pointchart.view import ChartView

__all__ = [
    "CalloutStyle",
    "Canvas",
    "Chart",
    "ChartDataError",
    "ChartStyle",
    "ChartView",
    "Entry",
    "FrameContext",
    "LinearGradient",
    "Path",
    "PointChart",
    "RasterCanvas",
    "Rect",
    "SelectionController",
    "TextBounds",
    "TouchRegion",
    "saved",
    "validate_chart_style",
]

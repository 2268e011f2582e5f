from plotframe.axis import Axis, HorizontalAxis, VerticalAxis
from plotframe.config import PlotConfig
from plotframe.drawarea import DrawArea, new_draw_area
from plotframe.errors import BackendError, FontError, PlotError, UnsupportedFormatError
from plotframe.font import DEFAULT_FONT, Font, make_font
from plotframe.geometry import Point, Rect, inches, points
from plotframe.legend import Legend
from plotframe.plot import Plot
from plotframe.plotter import DataRanger, GlyphBox, GlyphBoxer, Plotter, Thumbnailer
from plotframe.style import GlyphStyle, LineStyle, TextStyle
from plotframe.ticks import Tick, constant_ticks, default_ticks

__all__ = [
    "Axis",
    "BackendError",
    "DEFAULT_FONT",
    "DataRanger",
    "DrawArea",
    "Font",
    "FontError",
    "GlyphBox",
    "GlyphBoxer",
    "GlyphStyle",
    "HorizontalAxis",
    "Legend",
    "LineStyle",
    "Plot",
    "PlotConfig",
    "PlotError",
    "Plotter",
    "Point",
    "Rect",
    "TextStyle",
    "Thumbnailer",
    "Tick",
    "UnsupportedFormatError",
    "VerticalAxis",
    "constant_ticks",
    "default_ticks",
    "inches",
    "make_font",
    "new_draw_area",
    "points",
]

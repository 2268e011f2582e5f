from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
from typing import Callable

from plotframe.axis import Axis, HorizontalAxis, VerticalAxis, make_axis
from plotframe.config import PlotConfig
from plotframe.drawarea import DrawArea, new_draw_area
from plotframe.font import make_font
from plotframe.geometry import Length, Point, Rect, inches, points
from plotframe.layout import pad_x, pad_y
from plotframe.legend import Legend, make_legend
from plotframe.plotter import DataRanger, GlyphBox, Plotter, collect_glyph_boxes
from plotframe.raster import DEFAULT_DPI
from plotframe.save import open_surface
from plotframe.style import RED, LineStyle, TextStyle
from plotframe.surface import Color
from plotframe.ticks import Tick, constant_ticks


LOGGER = logging.getLogger(__name__)


@dataclass
class Title:
    style: TextStyle
    # An empty title is not drawn and takes no space.
    text: str = ""


def _widen_min(current: float, value: float) -> float:
    if math.isnan(value):
        return current
    return min(current, value)


def _widen_max(current: float, value: float) -> float:
    if math.isnan(value):
        return current
    return max(current, value)


class Plot:
    """A title, two axes, a legend and the plotters drawn in between.

    Plotters are drawn in the order they were added, so later ones end up
    on top. A Plot is not safe to mutate and draw from several threads at
    once.
    """

    def __init__(self, config: PlotConfig | None = None) -> None:
        cfg = config or PlotConfig()
        self.config = cfg
        title_font = make_font(cfg.font, cfg.title_font_size)
        label_font = make_font(cfg.font, cfg.label_font_size)
        tick_font = make_font(cfg.font, cfg.tick_font_size)
        legend_font = make_font(cfg.font, cfg.legend_font_size)

        self.title = Title(style=TextStyle(font=title_font))
        self.background_color: Color | None = cfg.background
        self.x: Axis = make_axis(label_font, tick_font)
        self.y: Axis = make_axis(label_font, tick_font)
        self.legend: Legend = make_legend(legend_font)
        self._plotters: list[Plotter] = []

    def plotters(self) -> list[Plotter]:
        return list(self._plotters)

    def add(self, *plotters: Plotter) -> "Plot":
        """Register plotters, widening the axes to cover any reported data range."""
        for p in plotters:
            if isinstance(p, DataRanger):
                xmin, xmax, ymin, ymax = p.data_range()
                self.x.min = _widen_min(self.x.min, xmin)
                self.x.max = _widen_max(self.x.max, xmax)
                self.y.min = _widen_min(self.y.min, ymin)
                self.y.max = _widen_max(self.y.max, ymax)
        self._plotters.extend(plotters)
        return self

    def draw(self, area: DrawArea) -> DrawArea:
        """Draw the whole plot into ``area`` and return the data area used by the plotters."""
        if self.background_color is not None:
            area.fill_rect(self.background_color, area.rect)
        if self.title.text:
            style = self.title.style
            area.fill_text(style, area.center().x, area.max().y, -0.5, -1, self.title.text)
            shrink = style.height(self.title.text) + style.font.extents().descent
            area = area.with_rect(Rect(min=area.min, size=Point(area.size.x, area.size.y - shrink)))

        self.x.sanitize_range()
        self.y.sanitize_range()
        x_axis = HorizontalAxis(self.x)
        y_axis = VerticalAxis(self.y)

        y_width = y_axis.size()
        x_axis.draw(pad_x(self, area.crop(y_width, 0, 0, 0)))
        x_height = x_axis.size()
        y_axis.draw(pad_y(self, area.crop(0, x_height, 0, 0)))

        data_area = pad_y(self, pad_x(self, area.crop(y_width, x_height, 0, 0)))
        LOGGER.debug("data area %r inside %r", data_area.rect, area.rect)
        for p in self._plotters:
            p.plot(data_area, self)
        self.legend.draw(data_area)
        return data_area

    def draw_glyph_boxes(self, area: DrawArea) -> None:
        """Outline every plotter glyph box in red. For debugging layouts."""
        style = LineStyle(color=RED, width=points(0.5))
        for b in self.glyph_boxes():
            area.stroke_rect(style, b.rect.translate(Point(area.x(b.x), area.y(b.y))))

    def glyph_boxes(self) -> list[GlyphBox]:
        return collect_glyph_boxes(self._plotters, self)

    def transforms(self, area: DrawArea) -> tuple[Callable[[float], Length], Callable[[float], Length]]:
        """Functions mapping X and Y data values to device lengths in ``area``."""

        def fx(value: float) -> Length:
            return area.x(self.x.norm(value))

        def fy(value: float) -> Length:
            return area.y(self.y.norm(value))

        return fx, fy

    def nominal_x(self, *names: str) -> None:
        """Label the X axis with names instead of numbers.

        The name ``names[i]`` sits under the x value ``i``.
        """
        if not names:
            raise ValueError("nominal_x requires at least one name")
        self.x.tick.line_style.width = 0.0
        self.x.tick.length = 0.0
        self.x.line_style.width = 0.0
        self.y.padding = self.x.tick.label.width(names[0]) / 2.0
        self.x.tick.marker = constant_ticks([Tick(float(i), name) for i, name in enumerate(names)])

    def nominal_y(self, *names: str) -> None:
        """Label the Y axis with names instead of numbers; ``names[i]`` is at y value ``i``."""
        if not names:
            raise ValueError("nominal_y requires at least one name")
        self.y.tick.line_style.width = 0.0
        self.y.tick.length = 0.0
        self.y.line_style.width = 0.0
        self.x.padding = self.y.tick.label.height(names[0]) / 2.0
        self.y.tick.marker = constant_ticks([Tick(float(i), name) for i, name in enumerate(names)])

    def save(self, width: float, height: float, path: str | Path, *, dpi: float = DEFAULT_DPI) -> None:
        """Draw the plot to a file; width and height are in inches.

        The format follows the extension: .png, .jpg, .jpeg, .pdf, .eps or .svg.
        """
        w, h = inches(width), inches(height)
        with open_surface(path, w, h, dpi=dpi) as surface:
            self.draw(new_draw_area(surface, w, h))

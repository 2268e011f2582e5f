from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import TYPE_CHECKING, Sequence

from plotframe.drawarea import DrawArea
from plotframe.font import Font
from plotframe.geometry import Length, Point, Rect, points
from plotframe.plotter import GlyphBox
from plotframe.style import LineStyle, TextStyle
from plotframe.ticks import Tick, Ticker, default_ticks

if TYPE_CHECKING:
    from plotframe.plot import Plot


LOGGER = logging.getLogger(__name__)


@dataclass
class AxisLabel:
    style: TextStyle
    text: str = ""


@dataclass
class TickConfig:
    label: TextStyle
    line_style: LineStyle = field(default_factory=LineStyle)
    length: Length = points(8)
    marker: Ticker = default_ticks


@dataclass
class Axis:
    """Data range and appearance of one plot axis.

    A new axis has an empty range (``min=+inf``, ``max=-inf``) so the first
    data range added to the plot defines it.
    """

    label: AxisLabel
    tick: TickConfig
    min: float = math.inf
    max: float = -math.inf
    line_style: LineStyle = field(default_factory=LineStyle)
    # Space between the axis line and the data area.
    padding: Length = points(5)

    def sanitize_range(self) -> None:
        """Replace non-finite, inverted or empty ranges with a usable one."""
        before = (self.min, self.max)
        if not math.isfinite(self.min):
            self.min = 0.0
        if not math.isfinite(self.max):
            self.max = 0.0
        if self.min > self.max:
            self.min, self.max = self.max, self.min
        if self.min == self.max:
            self.min -= 1.0
            self.max += 1.0
        if self.min == self.max:
            # Magnitudes where adding 1 is lost to rounding.
            delta = abs(self.min) * 1e-9
            self.min -= delta
            self.max += delta
        if before != (self.min, self.max):
            LOGGER.debug("sanitized axis range %r -> %r", before, (self.min, self.max))

    def norm(self, value: float) -> float:
        return (value - self.min) / (self.max - self.min)

    def draws_ticks(self) -> bool:
        return self.tick.line_style.width > 0 and self.tick.length > 0

    def ticks(self) -> list[Tick]:
        return self.tick.marker(self.min, self.max)


def make_axis(label_font: Font, tick_font: Font) -> Axis:
    return Axis(
        label=AxisLabel(style=TextStyle(font=label_font)),
        tick=TickConfig(label=TextStyle(font=tick_font)),
    )


def tick_label_height(style: TextStyle, ticks: Sequence[Tick]) -> Length:
    return max((style.height(t.label) for t in ticks if not t.is_minor()), default=0.0)


def tick_label_width(style: TextStyle, ticks: Sequence[Tick]) -> Length:
    return max((style.width(t.label) for t in ticks if not t.is_minor()), default=0.0)


class HorizontalAxis:
    """Draws an axis along the bottom of an area: label, tick labels, ticks, line."""

    def __init__(self, axis: Axis) -> None:
        self.axis = axis

    def size(self) -> Length:
        a = self.axis
        h = 0.0
        if a.label.text:
            h += a.label.style.font.extents().descent
            h += a.label.style.height(a.label.text)
        marks = a.ticks()
        if marks:
            if a.draws_ticks():
                h += a.tick.length
            h += tick_label_height(a.tick.label, marks)
        h += a.line_style.width / 2.0
        h += a.padding
        return h

    def draw(self, area: DrawArea) -> None:
        a = self.axis
        y = area.min.y
        if a.label.text:
            y += a.label.style.font.extents().descent
            area.fill_text(a.label.style, area.center().x, y, -0.5, 0, a.label.text)
            y += a.label.style.height(a.label.text)

        marks = a.ticks()
        for t in marks:
            x = area.x(a.norm(t.value))
            if t.is_minor() or not area.contains_x(x):
                continue
            area.fill_text(a.tick.label, x, y, -0.5, 0, t.label)

        if marks:
            y += tick_label_height(a.tick.label, marks)
        else:
            y += a.line_style.width / 2.0

        if marks and a.draws_ticks():
            length = a.tick.length
            for t in marks:
                x = area.x(a.norm(t.value))
                if not area.contains_x(x):
                    continue
                area.stroke_line2(a.tick.line_style, x, y + t.length_offset(length), x, y + length)
            y += length

        area.stroke_line2(a.line_style, area.min.x, y, area.max().x, y)

    def glyph_boxes(self, plt: "Plot | None" = None) -> list[GlyphBox]:
        a = self.axis
        boxes: list[GlyphBox] = []
        for t in a.ticks():
            if t.is_minor():
                continue
            w = a.tick.label.width(t.label)
            boxes.append(GlyphBox(x=a.norm(t.value), rect=Rect(min=Point(-w / 2.0, 0.0), size=Point(w, 0.0))))
        return boxes


class VerticalAxis:
    """Draws an axis along the left of an area, the label rotated a quarter turn."""

    def __init__(self, axis: Axis) -> None:
        self.axis = axis

    def size(self) -> Length:
        a = self.axis
        w = 0.0
        if a.label.text:
            w += a.label.style.font.extents().descent
            w += a.label.style.height(a.label.text)
        marks = a.ticks()
        if marks:
            label_w = tick_label_width(a.tick.label, marks)
            if label_w > 0:
                w += label_w
                w += a.tick.label.width(" ")
            if a.draws_ticks():
                w += a.tick.length
        w += a.line_style.width / 2.0
        w += a.padding
        return w

    def draw(self, area: DrawArea) -> None:
        a = self.axis
        x = area.min.x
        if a.label.text:
            x += a.label.style.height(a.label.text)
            area.fill_text(a.label.style, x, area.center().y, -0.5, 0, a.label.text, rotate_deg=90)
            x += a.label.style.font.extents().descent

        marks = a.ticks()
        label_w = tick_label_width(a.tick.label, marks)
        if marks and label_w > 0:
            x += label_w

        major = False
        for t in marks:
            y = area.y(a.norm(t.value))
            if t.is_minor() or not area.contains_y(y):
                continue
            area.fill_text(a.tick.label, x, y, -1, -0.5, t.label)
            major = True
        if major:
            x += a.tick.label.width(" ")

        if marks and a.draws_ticks():
            length = a.tick.length
            for t in marks:
                y = area.y(a.norm(t.value))
                if not area.contains_y(y):
                    continue
                area.stroke_line2(a.tick.line_style, x + t.length_offset(length), y, x + length, y)
            x += length

        area.stroke_line2(a.line_style, x, area.min.y, x, area.max().y)

    def glyph_boxes(self, plt: "Plot | None" = None) -> list[GlyphBox]:
        a = self.axis
        boxes: list[GlyphBox] = []
        for t in a.ticks():
            if t.is_minor():
                continue
            h = a.tick.label.height(t.label)
            boxes.append(GlyphBox(y=a.norm(t.value), rect=Rect(min=Point(0.0, -h / 2.0), size=Point(0.0, h))))
        return boxes

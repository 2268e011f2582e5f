from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import TYPE_CHECKING, Protocol

from plotframe.font import Font
from plotframe.geometry import Length, Point, Rect, points
from plotframe.surface import Color, Path

if TYPE_CHECKING:
    from plotframe.drawarea import DrawArea


BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)
RED: Color = (255, 0, 0, 255)
TRANSPARENT: Color = (0, 0, 0, 0)


@dataclass
class LineStyle:
    color: Color = BLACK
    width: Length = points(0.5)
    dashes: tuple[Length, ...] = ()
    dash_offset: Length = 0.0


@dataclass
class TextStyle:
    font: Font
    color: Color = BLACK

    def width(self, text: str) -> Length:
        return max((self.font.width(line) for line in text.split("\n")), default=0.0)

    def height(self, text: str) -> Length:
        lines = _text_lines(text)
        if lines == 0:
            return 0.0
        e = self.font.extents()
        return e.height * (lines - 1) + e.ascent

    def rect(self, text: str) -> Rect:
        return Rect(size=Point(self.width(text), self.height(text)))


def _text_lines(text: str) -> int:
    text = text.rstrip("\n")
    if not text:
        return 0
    return text.count("\n") + 1


class GlyphDrawer(Protocol):
    def draw_glyph(self, area: "DrawArea", style: "GlyphStyle", center: Point) -> None: ...


@dataclass
class GlyphStyle:
    color: Color = BLACK
    radius: Length = points(2.5)
    shape: GlyphDrawer = field(default_factory=lambda: RingGlyph())

    def rect(self) -> Rect:
        return Rect(min=Point(-self.radius, -self.radius), size=Point(2 * self.radius, 2 * self.radius))


def _outline(area: "DrawArea", style: GlyphStyle, path: Path) -> None:
    area.surface.set_color(style.color)
    area.surface.set_line_width(points(0.5))
    area.surface.set_line_dash((), 0.0)
    area.surface.stroke(path)


def _solid(area: "DrawArea", style: GlyphStyle, path: Path) -> None:
    area.surface.set_color(style.color)
    area.surface.fill(path)


class RingGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        path = Path().move(Point(center.x + style.radius, center.y))
        path.arc(center, style.radius, 0.0, 2 * math.pi).close()
        _outline(area, style, path)


class CircleGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        path = Path().move(Point(center.x + style.radius, center.y))
        path.arc(center, style.radius, 0.0, 2 * math.pi).close()
        _solid(area, style, path)


def _square_path(center: Point, r: Length) -> Path:
    return (
        Path()
        .move(Point(center.x - r, center.y - r))
        .line(Point(center.x + r, center.y - r))
        .line(Point(center.x + r, center.y + r))
        .line(Point(center.x - r, center.y + r))
        .close()
    )


class SquareGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        _outline(area, style, _square_path(center, style.radius * 0.8))


class BoxGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        _solid(area, style, _square_path(center, style.radius * 0.8))


class TriangleGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        r = style.radius
        path = (
            Path()
            .move(Point(center.x, center.y + r))
            .line(Point(center.x - r * math.sqrt(3) / 2, center.y - r / 2))
            .line(Point(center.x + r * math.sqrt(3) / 2, center.y - r / 2))
            .close()
        )
        _outline(area, style, path)


class CrossGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        r = style.radius / math.sqrt(2)
        path = (
            Path()
            .move(Point(center.x - r, center.y - r))
            .line(Point(center.x + r, center.y + r))
            .move(Point(center.x - r, center.y + r))
            .line(Point(center.x + r, center.y - r))
        )
        _outline(area, style, path)


class PlusGlyph:
    def draw_glyph(self, area: "DrawArea", style: GlyphStyle, center: Point) -> None:
        r = style.radius
        path = (
            Path()
            .move(Point(center.x - r, center.y))
            .line(Point(center.x + r, center.y))
            .move(Point(center.x, center.y - r))
            .line(Point(center.x, center.y + r))
        )
        _outline(area, style, path)

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from plotframe.geometry import Length, Point, Rect
from plotframe.style import GlyphStyle, LineStyle, TextStyle
from plotframe.surface import Color, Path, Surface, normalize_quarter_turns, rect_path


# Tolerance for containment tests, absorbing float error at the edges.
_SLOP = 0.01


def _rotate_offset(u: float, v: float, turns: int) -> tuple[float, float]:
    if turns == 1:
        return (-v, u)
    if turns == 2:
        return (-u, -v)
    if turns == 3:
        return (v, -u)
    return (u, v)


@dataclass(frozen=True)
class DrawArea:
    """A rectangle of a surface plus the fraction-to-device transforms.

    ``x(0)`` is the left edge and ``x(1)`` the right edge; ``y`` likewise
    from bottom to top. Fractions outside [0, 1] map outside the rectangle.
    """

    surface: Surface
    rect: Rect

    @property
    def min(self) -> Point:
        return self.rect.min

    @property
    def size(self) -> Point:
        return self.rect.size

    def max(self) -> Point:
        return self.rect.max()

    def center(self) -> Point:
        return self.rect.center()

    def x(self, frac: float) -> Length:
        return self.rect.min.x + frac * self.rect.size.x

    def y(self, frac: float) -> Length:
        return self.rect.min.y + frac * self.rect.size.y

    def with_rect(self, rect: Rect) -> "DrawArea":
        return replace(self, rect=rect)

    def crop(self, left: Length, bottom: Length, right: Length, top: Length) -> "DrawArea":
        """Inset each side by the given length. The result is not checked for negative size."""
        return self.with_rect(
            Rect(
                min=Point(self.rect.min.x + left, self.rect.min.y + bottom),
                size=Point(self.rect.size.x - left - right, self.rect.size.y - bottom - top),
            )
        )

    def contains_x(self, x: Length) -> bool:
        return self.rect.min.x - _SLOP <= x <= self.max().x + _SLOP

    def contains_y(self, y: Length) -> bool:
        return self.rect.min.y - _SLOP <= y <= self.max().y + _SLOP

    def contains(self, p: Point) -> bool:
        return self.contains_x(p.x) and self.contains_y(p.y)

    def fill_text(
        self,
        style: TextStyle,
        x: Length,
        y: Length,
        xalign: float,
        yalign: float,
        text: str,
        *,
        rotate_deg: int = 0,
    ) -> None:
        """Draw text relative to (x, y).

        ``xalign`` and ``yalign`` are fractions of the text box added to the
        anchor: (0, 0) puts the first baseline's left end at the anchor,
        (-0.5, -1) centres the text horizontally and hangs it below. With a
        rotation, the alignment applies in the rotated frame.
        """
        text = text.rstrip("\n")
        if not text:
            return
        turns = normalize_quarter_turns(rotate_deg)
        extents = style.font.extents()
        height = style.height(text)
        bottom = height * yalign
        self.surface.set_color(style.color)
        for i, line in enumerate(text.split("\n")):
            u = xalign * style.font.width(line)
            v = bottom + height - extents.ascent - i * extents.height
            dx, dy = _rotate_offset(u, v, turns)
            self.surface.fill_string(style.font, x + dx, y + dy, line, rotate_deg=rotate_deg)

    def _set_line_style(self, style: LineStyle) -> None:
        self.surface.set_color(style.color)
        self.surface.set_line_width(style.width)
        self.surface.set_line_dash(style.dashes, style.dash_offset)

    def stroke_lines(self, style: LineStyle, *lines: Sequence[Point]) -> None:
        if style.width <= 0:
            return
        path = Path()
        for line in lines:
            if not line:
                continue
            path.move(line[0])
            for p in line[1:]:
                path.line(p)
        if not len(path):
            return
        self._set_line_style(style)
        self.surface.stroke(path)

    def stroke_line2(self, style: LineStyle, x0: Length, y0: Length, x1: Length, y1: Length) -> None:
        self.stroke_lines(style, [Point(x0, y0), Point(x1, y1)])

    def stroke_rect(self, style: LineStyle, rect: Rect) -> None:
        if style.width <= 0:
            return
        self._set_line_style(style)
        self.surface.stroke(rect_path(rect))

    def fill_rect(self, color: Color, rect: Rect) -> None:
        self.surface.set_color(color)
        self.surface.fill(rect_path(rect))

    def fill_polygon(self, color: Color, pts: Sequence[Point]) -> None:
        if len(pts) < 3:
            return
        path = Path().move(pts[0])
        for p in pts[1:]:
            path.line(p)
        self.surface.set_color(color)
        self.surface.fill(path.close())

    def draw_glyph(self, style: GlyphStyle, pt: Point) -> None:
        if not self.contains(pt):
            return
        style.shape.draw_glyph(self, style, pt)


def new_draw_area(surface: Surface, width: Length | None = None, height: Length | None = None) -> DrawArea:
    """DrawArea covering ``surface`` from its origin, by default the whole surface."""
    sw, sh = surface.size()
    w = sw if width is None else width
    h = sh if height is None else height
    return DrawArea(surface=surface, rect=Rect(min=Point(0.0, 0.0), size=Point(w, h)))

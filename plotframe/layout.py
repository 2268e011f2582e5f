"""Anti-clipping padding of draw areas.

Glyphs such as tick labels or markers are anchored at normalized positions
of the data area but extend past their anchor by a fixed device length. A
glyph anchored on the edge of the area therefore overflows it. ``pad_x`` and
``pad_y`` shrink the area so that, with every glyph placed relative to the
shrunk area at its original anchor, the extreme glyphs end exactly on the
edges of the original one.

For the horizontal pass, with ``l`` the left-most and ``r`` the right-most
glyph box, the new transform ``X(f) = min + f * size`` must satisfy::

    X(l.x) + l.rect.min.x = outer.min.x
    X(r.x) + r.rect.min.x + r.rect.size.x = outer.max.x

which is a 2x2 linear system in ``min`` and ``size``. It is singular when
both boxes share an anchor, in which case the area is left as it is.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from plotframe.axis import HorizontalAxis, VerticalAxis
from plotframe.drawarea import DrawArea
from plotframe.geometry import Length, Point, Rect
from plotframe.plotter import GlyphBox

if TYPE_CHECKING:
    from plotframe.plot import Plot


LOGGER = logging.getLogger(__name__)


def left_most(area: DrawArea, boxes: Sequence[GlyphBox]) -> GlyphBox:
    """Box reaching furthest past the left edge, or a zero box anchored at 0."""
    minx = area.min.x
    found = GlyphBox()
    for b in boxes:
        x = area.x(b.x) + b.rect.min.x
        if x < minx and b.x >= 0:
            minx = x
            found = b
    return found


def right_most(area: DrawArea, boxes: Sequence[GlyphBox]) -> GlyphBox:
    """Box reaching furthest past the right edge, or a zero box anchored at 1."""
    maxx = area.max().x
    found = GlyphBox(x=1.0)
    for b in boxes:
        x = area.x(b.x) + b.rect.min.x + b.rect.size.x
        if x > maxx and b.x <= 1:
            maxx = x
            found = b
    return found


def bottom_most(area: DrawArea, boxes: Sequence[GlyphBox]) -> GlyphBox:
    miny = area.min.y
    found = GlyphBox()
    for b in boxes:
        y = area.y(b.y) + b.rect.min.y
        if y < miny and b.y >= 0:
            miny = y
            found = b
    return found


def top_most(area: DrawArea, boxes: Sequence[GlyphBox]) -> GlyphBox:
    maxy = area.max().y
    found = GlyphBox(y=1.0)
    for b in boxes:
        y = area.y(b.y) + b.rect.min.y + b.rect.size.y
        if y > maxy and b.y <= 1:
            maxy = y
            found = b
    return found


def solve_span(
    outer_min: Length,
    outer_max: Length,
    low_anchor: float,
    low_offset: Length,
    high_anchor: float,
    high_extent: Length,
) -> tuple[Length, Length] | None:
    """Solve for ``(min, size)`` along one axis; None when the anchors coincide.

    ``low_offset`` is the low box's offset from its anchor to its low edge,
    ``high_extent`` the offset from the high box's anchor to its high edge.
    """
    if low_anchor == high_anchor:
        return None
    lo = outer_min - low_offset
    hi = outer_max - high_extent
    denom = low_anchor - high_anchor
    start = (low_anchor * hi - high_anchor * lo) / denom
    end = ((low_anchor - 1) * hi - high_anchor * lo + lo) / denom
    return start, end - start


def pad_x(plt: "Plot", area: DrawArea) -> DrawArea:
    """Return ``area`` narrowed so that glyphs are not clipped at its left or right."""
    glyphs = plt.glyph_boxes()
    left = left_most(area, glyphs)
    glyphs = glyphs + HorizontalAxis(plt.x).glyph_boxes(plt)
    right = right_most(area, glyphs)

    span = solve_span(
        area.min.x,
        area.max().x,
        left.x,
        left.rect.min.x,
        right.x,
        right.rect.min.x + right.rect.size.x,
    )
    if span is None:
        LOGGER.debug("skipping horizontal padding: glyph anchors coincide at x=%r", left.x)
        return area
    start, size = span
    return area.with_rect(Rect(min=Point(start, area.min.y), size=Point(size, area.size.y)))


def pad_y(plt: "Plot", area: DrawArea) -> DrawArea:
    """Return ``area`` shortened so that glyphs are not clipped at its bottom or top."""
    glyphs = plt.glyph_boxes()
    bottom = bottom_most(area, glyphs)
    glyphs = glyphs + VerticalAxis(plt.y).glyph_boxes(plt)
    top = top_most(area, glyphs)

    span = solve_span(
        area.min.y,
        area.max().y,
        bottom.y,
        bottom.rect.min.y,
        top.y,
        top.rect.min.y + top.rect.size.y,
    )
    if span is None:
        LOGGER.debug("skipping vertical padding: glyph anchors coincide at y=%r", bottom.y)
        return area
    start, size = span
    return area.with_rect(Rect(min=Point(area.min.x, start), size=Point(area.size.x, size)))

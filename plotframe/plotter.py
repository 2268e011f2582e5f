from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Protocol, Sequence, runtime_checkable

from plotframe.geometry import Rect

if TYPE_CHECKING:
    from plotframe.drawarea import DrawArea
    from plotframe.plot import Plot


@dataclass(frozen=True)
class GlyphBox:
    """Where a glyph is drawn and how much room it takes.

    ``x`` and ``y`` are the anchor in normalized axis fractions and may lie
    outside [0, 1]. ``rect`` is the glyph's bounding box relative to the
    anchor's device position.
    """

    x: float = 0.0
    y: float = 0.0
    rect: Rect = Rect()


@runtime_checkable
class Plotter(Protocol):
    def plot(self, area: "DrawArea", plt: "Plot") -> None: ...


@runtime_checkable
class DataRanger(Protocol):
    def data_range(self) -> tuple[float, float, float, float]:
        """Return ``(xmin, xmax, ymin, ymax)`` of the plotted data."""
        ...


@runtime_checkable
class GlyphBoxer(Protocol):
    """Implemented by plotters that draw glyphs which must not be clipped at the area's edges."""

    def glyph_boxes(self, plt: "Plot") -> Sequence[GlyphBox]: ...


@runtime_checkable
class Thumbnailer(Protocol):
    def thumbnail(self, area: "DrawArea") -> None: ...


def collect_glyph_boxes(plotters: Iterable[object], plt: "Plot") -> list[GlyphBox]:
    boxes: list[GlyphBox] = []
    for p in plotters:
        if isinstance(p, GlyphBoxer):
            boxes.extend(p.glyph_boxes(plt))
    return boxes

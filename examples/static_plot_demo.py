from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from plotframe import DrawArea, GlyphBox, GlyphStyle, LineStyle, Plot, Point
from plotframe.style import CircleGlyph


class LinePoints:
    """Polyline with a marker on every sample."""

    def __init__(self, xs: np.ndarray, ys: np.ndarray, color=(40, 110, 200, 255)) -> None:
        self.xs = np.asarray(xs, dtype=np.float64)
        self.ys = np.asarray(ys, dtype=np.float64)
        self.line = LineStyle(color=color, width=1.0)
        self.glyph = GlyphStyle(color=color, radius=2.0, shape=CircleGlyph())

    def data_range(self) -> tuple[float, float, float, float]:
        return float(self.xs.min()), float(self.xs.max()), float(self.ys.min()), float(self.ys.max())

    def plot(self, area: DrawArea, plt: Plot) -> None:
        fx, fy = plt.transforms(area)
        pts = [Point(fx(x), fy(y)) for x, y in zip(self.xs.tolist(), self.ys.tolist())]
        area.stroke_lines(self.line, pts)
        for p in pts:
            area.draw_glyph(self.glyph, p)

    def glyph_boxes(self, plt: Plot) -> list[GlyphBox]:
        return [
            GlyphBox(x=plt.x.norm(x), y=plt.y.norm(y), rect=self.glyph.rect())
            for x, y in zip(self.xs.tolist(), self.ys.tolist())
        ]

    def thumbnail(self, area: DrawArea) -> None:
        y = area.center().y
        area.stroke_line2(self.line, area.min.x, y, area.max().x, y)
        area.draw_glyph(self.glyph, area.center())


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a small line plot to PNG and SVG.")
    parser.add_argument("--out-dir", default=".", help="directory for plot.png and plot.svg")
    parser.add_argument("--debug", action="store_true", help="log layout decisions")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    xs = np.linspace(0.0, 10.0, 21)
    series = LinePoints(xs, np.sin(xs) * 3.0 + 4.0)

    plt = Plot()
    plt.title.text = "Static Plot"
    plt.x.label.text = "time (s)"
    plt.y.label.text = "value"
    plt.add(series)
    plt.legend.top = True
    plt.legend.add("sin", series)

    out_dir = Path(args.out_dir)
    plt.save(5, 3, out_dir / "plot.png", dpi=144)
    plt.save(5, 3, out_dir / "plot.svg")


if __name__ == "__main__":
    main()

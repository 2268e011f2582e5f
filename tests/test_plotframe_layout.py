from __future__ import annotations

import unittest

from plotframe.drawarea import DrawArea
from plotframe.geometry import Point, Rect
from plotframe.layout import left_most, pad_x, pad_y, right_most, solve_span
from plotframe.plot import Plot
from plotframe.plotter import GlyphBox
from plotframe.ticks import Tick, constant_ticks
from plotframe.vector import SvgCanvas


class BoxPlotter:
    def __init__(self, *boxes: GlyphBox) -> None:
        self.boxes = list(boxes)

    def plot(self, area, plt) -> None:
        return

    def glyph_boxes(self, plt) -> list[GlyphBox]:
        return list(self.boxes)


def _plot_without_axis_ticks() -> Plot:
    plt = Plot()
    plt.x.tick.marker = constant_ticks([])
    plt.y.tick.marker = constant_ticks([])
    plt.x.min, plt.x.max = 0.0, 10.0
    plt.y.min, plt.y.max = 0.0, 10.0
    return plt


class PaddingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.area = DrawArea(SvgCanvas(400, 300), Rect(min=Point(30, 5), size=Point(200, 100)))

    def test_pad_x_places_extreme_glyphs_on_edges(self) -> None:
        plt = _plot_without_axis_ticks()
        left = GlyphBox(x=0.0, rect=Rect(min=Point(-10, 0), size=Point(10, 0)))
        right = GlyphBox(x=1.0, rect=Rect(min=Point(0, 0), size=Point(15, 0)))
        plt.add(BoxPlotter(left, right))

        padded = pad_x(plt, self.area)

        self.assertAlmostEqual(padded.min.x, 40.0, places=9)
        self.assertAlmostEqual(padded.size.x, 175.0, places=9)
        self.assertEqual((padded.min.y, padded.size.y), (5, 100))
        self.assertAlmostEqual(padded.x(left.x) + left.rect.min.x, self.area.min.x, places=9)
        self.assertAlmostEqual(padded.x(right.x) + right.rect.max().x, self.area.max().x, places=9)

    def test_pad_y_places_extreme_glyphs_on_edges(self) -> None:
        plt = _plot_without_axis_ticks()
        plt.add(
            BoxPlotter(
                GlyphBox(y=0.0, rect=Rect(min=Point(0, -4), size=Point(0, 4))),
                GlyphBox(y=1.0, rect=Rect(min=Point(0, 0), size=Point(0, 6))),
            )
        )

        padded = pad_y(plt, self.area)

        self.assertAlmostEqual(padded.min.y, 9.0, places=9)
        self.assertAlmostEqual(padded.size.y, 90.0, places=9)
        self.assertEqual(padded.rect.min.x, 30)

    def test_interior_glyphs_move_both_edges(self) -> None:
        plt = _plot_without_axis_ticks()
        boxes = [
            GlyphBox(x=0.25, rect=Rect(min=Point(-80, 0), size=Point(80, 0))),
            GlyphBox(x=0.75, rect=Rect(min=Point(0, 0), size=Point(90, 0))),
        ]
        plt.add(BoxPlotter(*boxes))

        padded = pad_x(plt, self.area)

        self.assertAlmostEqual(padded.x(0.25) - 80, 30.0, places=9)
        self.assertAlmostEqual(padded.x(0.75) + 90, 230.0, places=9)

    def test_no_glyphs_leave_area_unchanged(self) -> None:
        plt = _plot_without_axis_ticks()
        self.assertEqual(pad_x(plt, self.area).rect, self.area.rect)
        self.assertEqual(pad_y(plt, self.area).rect, self.area.rect)

    def test_glyphs_inside_area_leave_it_unchanged(self) -> None:
        plt = _plot_without_axis_ticks()
        plt.add(BoxPlotter(GlyphBox(x=0.5, y=0.5, rect=Rect(min=Point(-2, -2), size=Point(4, 4)))))
        self.assertEqual(pad_x(plt, self.area).rect, self.area.rect)

    def test_coinciding_anchors_return_same_area(self) -> None:
        plt = _plot_without_axis_ticks()
        plt.add(BoxPlotter(GlyphBox(x=0.5, rect=Rect(min=Point(-60, 0), size=Point(120, 0)))))
        area = DrawArea(SvgCanvas(100, 50), Rect(min=Point(0, 0), size=Point(100, 50)))

        with self.assertLogs("plotframe.layout", level="DEBUG"):
            padded = pad_x(plt, area)

        self.assertIs(padded, area)

    def test_anchors_outside_unit_range_are_ignored(self) -> None:
        plt = _plot_without_axis_ticks()
        plt.add(BoxPlotter(GlyphBox(x=-0.2, rect=Rect(min=Point(-50, 0), size=Point(10, 0)))))
        self.assertEqual(pad_x(plt, self.area).rect, self.area.rect)

    def test_axis_tick_labels_only_pad_the_high_side(self) -> None:
        plt = _plot_without_axis_ticks()
        plt.x.tick.marker = constant_ticks([Tick(0.0, "left label"), Tick(10.0, "right label")])
        half = plt.x.tick.label.width("right label") / 2.0

        padded = pad_x(plt, self.area)

        self.assertAlmostEqual(padded.min.x, 30.0, places=9)
        self.assertAlmostEqual(padded.max().x, 230.0 - half, places=9)


class ExtremeBoxTests(unittest.TestCase):
    def setUp(self) -> None:
        self.area = DrawArea(SvgCanvas(100, 100), Rect(size=Point(100, 100)))

    def test_sentinels_when_nothing_overflows(self) -> None:
        self.assertEqual(left_most(self.area, []), GlyphBox(x=0.0))
        self.assertEqual(right_most(self.area, []), GlyphBox(x=1.0))

    def test_picks_furthest_overflow(self) -> None:
        near = GlyphBox(x=0.0, rect=Rect(min=Point(-5, 0), size=Point(5, 0)))
        far = GlyphBox(x=0.1, rect=Rect(min=Point(-30, 0), size=Point(5, 0)))
        self.assertIs(left_most(self.area, [near, far]), far)

    def test_solve_span_singular(self) -> None:
        self.assertIsNone(solve_span(0.0, 10.0, 0.5, -1.0, 0.5, 1.0))
        self.assertEqual(solve_span(0.0, 10.0, 0.0, 0.0, 1.0, 0.0), (0.0, 10.0))


if __name__ == "__main__":
    unittest.main()

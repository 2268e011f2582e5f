from __future__ import annotations

import math
import unittest

import numpy as np

from plotframe.ticks import Tick, constant_ticks, default_ticks, format_tick, format_ticks_for_axis


def _split(ticks: list[Tick]) -> tuple[list[float], list[float]]:
    majors = [t.value for t in ticks if not t.is_minor()]
    minors = sorted(t.value for t in ticks if t.is_minor())
    return majors, minors


class DefaultTicksTests(unittest.TestCase):
    def test_zero_to_ten_uses_step_three_with_third_minors(self) -> None:
        ticks = default_ticks(0.0, 10.0)
        majors, minors = _split(ticks)
        self.assertEqual(majors, [0.0, 3.0, 6.0, 9.0])
        self.assertEqual([t.label for t in ticks if not t.is_minor()], ["0", "3", "6", "9"])
        for got, want in zip(minors, [1, 2, 4, 5, 7, 8, 10], strict=True):
            self.assertAlmostEqual(got, want, places=9)

    def test_unit_range_labels_avoid_float_noise(self) -> None:
        ticks = default_ticks(0.0, 1.0)
        majors, _ = _split(ticks)
        self.assertEqual([t.label for t in ticks if not t.is_minor()], ["0", "0.3", "0.6", "0.9"])
        for got, want in zip(majors, [0.0, 0.3, 0.6, 0.9], strict=True):
            self.assertAlmostEqual(got, want, places=9)

    def test_multiplier_seven_steps_down_to_six(self) -> None:
        majors, minors = _split(default_ticks(0.0, 21.0))
        self.assertEqual(majors, [0.0, 6.0, 12.0, 18.0])
        self.assertIn(2.0, [round(v, 9) for v in minors])

    def test_multiplier_five_uses_fifths(self) -> None:
        majors, minors = _split(default_ticks(0.0, 15.0))
        self.assertEqual(majors, [0.0, 5.0, 10.0, 15.0])
        self.assertEqual(len(minors), 12)

    def test_negative_range(self) -> None:
        majors, _ = _split(default_ticks(-1.0, 1.0))
        for got, want in zip(majors, [-0.6, 0.0, 0.6], strict=True):
            self.assertAlmostEqual(got, want, places=9)

    def test_ticks_stay_inside_range(self) -> None:
        for vmin, vmax in [(0.0, 10.0), (-3.2, 7.9), (100.0, 101.0), (1e-3, 5e-3)]:
            for t in default_ticks(vmin, vmax):
                self.assertGreaterEqual(t.value, vmin - 1e-9 * (vmax - vmin))
                self.assertLessEqual(t.value, vmax + 1e-9 * (vmax - vmin))

    def test_overflowing_span_gives_no_ticks(self) -> None:
        self.assertEqual(default_ticks(-1e308, 1e308), [])

    def test_underflowing_span_gives_no_ticks(self) -> None:
        self.assertEqual(default_ticks(0.0, 5e-324), [])

    def test_subnormal_span_does_not_raise(self) -> None:
        ticks = default_ticks(0.0, 1e-310)
        self.assertTrue(all(0.0 <= t.value <= 1e-310 * (1 + 1e-9) for t in ticks))

    def test_degenerate_ranges_give_no_ticks(self) -> None:
        self.assertEqual(default_ticks(1.0, 1.0), [])
        self.assertEqual(default_ticks(2.0, 1.0), [])
        self.assertEqual(default_ticks(0.0, math.inf), [])
        self.assertEqual(default_ticks(math.nan, 1.0), [])


class TickTests(unittest.TestCase):
    def test_minor_ticks_have_no_label(self) -> None:
        self.assertTrue(Tick(1.0).is_minor())
        self.assertFalse(Tick(1.0, "1").is_minor())

    def test_length_offset_halves_minor_ticks(self) -> None:
        self.assertEqual(Tick(1.0).length_offset(8.0), 4.0)
        self.assertEqual(Tick(1.0, "1").length_offset(8.0), 0.0)

    def test_constant_ticks_ignore_range(self) -> None:
        marker = constant_ticks([Tick(0.0, "a"), Tick(1.0, "b")])
        self.assertEqual(marker(-100.0, 100.0), [Tick(0.0, "a"), Tick(1.0, "b")])
        self.assertEqual(marker(0.0, 0.5), marker(3.0, 4.0))


class FormatTests(unittest.TestCase):
    def test_format_tick_uses_step_precision(self) -> None:
        self.assertEqual(format_tick(0.25, step=0.25), "0.25")
        self.assertEqual(format_tick(2.0, step=0.5), "2")
        self.assertEqual(format_tick(-1e-17, step=0.1), "0")

    def test_format_tick_switches_to_scientific(self) -> None:
        self.assertEqual(format_tick(2_500_000.0), "2.5000e+06")

    def test_format_ticks_for_axis(self) -> None:
        self.assertEqual(format_ticks_for_axis(np.array([])), [])
        self.assertEqual(format_ticks_for_axis(np.array([0.0, 0.5, 1.0])), ["0", "0.5", "1"])


if __name__ == "__main__":
    unittest.main()

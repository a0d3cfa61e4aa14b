from __future__ import annotations

import math
import unittest

import numpy as np

from zoomplot import PlotDataError, Rect, format_tick_label, remap, tick_values
from zoomplot.scales import (
    coerce_samples,
    index_to_screen_x,
    map_samples,
    remap_array,
    screen_x_to_index,
    screen_y_to_value,
    value_to_screen_y,
)


class RemapTests(unittest.TestCase):
    def test_linear_remap(self) -> None:
        self.assertEqual(remap(5.0, (0.0, 10.0), (100.0, 200.0)), 150.0)
        self.assertEqual(remap(0.0, (-1.0, 1.0), (0.0, 10.0)), 5.0)

    def test_degenerate_domain_yields_target_midpoint(self) -> None:
        out = remap(3.0, (5.0, 5.0), (0.0, 100.0))
        self.assertEqual(out, 50.0)
        arr = remap_array(np.asarray([1.0, 5.0, 9.0]), (5.0, 5.0), (10.0, 20.0))
        self.assertTrue(np.all(np.isfinite(arr)))
        self.assertTrue(np.allclose(arr, 15.0))

    def test_vertical_axis_is_inverted(self) -> None:
        rect = Rect(40.0, 0.0, 240.0, 100.0)
        self.assertEqual(value_to_screen_y(100.0, (-100.0, 100.0), rect), 0.0)
        self.assertEqual(value_to_screen_y(-100.0, (-100.0, 100.0), rect), 100.0)
        self.assertLess(
            value_to_screen_y(10.0, (-100.0, 100.0), rect),
            value_to_screen_y(5.0, (-100.0, 100.0), rect),
        )

    def test_forward_then_inverse_round_trips(self) -> None:
        rect = Rect(12.5, 3.0, 317.0, 211.0)
        y_range = (-37.5, 912.25)
        sample_count = 250
        for x in (0.0, 1.0, 99.5, 249.0):
            for y in (-37.5, 0.0, 123.456, 912.0):
                px = index_to_screen_x(x, sample_count, rect)
                py = value_to_screen_y(y, y_range, rect)
                self.assertAlmostEqual(screen_x_to_index(px, sample_count, rect), x, places=9)
                self.assertAlmostEqual(screen_y_to_value(py, y_range, rect), y, places=9)

    def test_inverted_range_flips_axis(self) -> None:
        rect = Rect(0.0, 0.0, 10.0, 100.0)
        self.assertEqual(value_to_screen_y(100.0, (100.0, -100.0), rect), 100.0)
        self.assertEqual(value_to_screen_y(-100.0, (100.0, -100.0), rect), 0.0)

    def test_map_samples_matches_scalar_transform(self) -> None:
        rect = Rect(40.0, 0.0, 240.0, 100.0)
        samples = np.asarray([[0.0, -100.0], [50.0, 0.0], [99.0, 100.0]])
        px, py = map_samples(samples, 100, (-100.0, 100.0), rect)
        self.assertEqual(px.tolist(), [40.0, 140.0, 238.0])
        self.assertEqual(py.tolist(), [100.0, 50.0, 0.0])


class TickGeneratorTests(unittest.TestCase):
    def test_zero_to_hundred(self) -> None:
        self.assertEqual(tick_values(0.0, 100.0), [0.0, 25.0, 50.0, 75.0, 100.0])

    def test_symmetric_default_range(self) -> None:
        self.assertEqual(tick_values(-100.0, 100.0), [-100.0, -50.0, 0.0, 50.0, 100.0])

    def test_zero_width_range_terminates_with_start_only(self) -> None:
        self.assertEqual(tick_values(5.0, 5.0), [5.0])

    def test_non_finite_step_emits_start_only(self) -> None:
        self.assertEqual(tick_values(0.0, math.inf), [0.0])
        out = tick_values(math.nan, 1.0)
        self.assertEqual(len(out), 1)

    def test_fractional_range_keeps_end_tick(self) -> None:
        ticks = tick_values(0.0, 0.3)
        self.assertEqual(len(ticks), 5)
        self.assertAlmostEqual(ticks[-1], 0.3, places=12)

    def test_inverted_range_descends(self) -> None:
        self.assertEqual(tick_values(100.0, -100.0), [100.0, 50.0, 0.0, -50.0, -100.0])

    def test_label_rounds_to_integer(self) -> None:
        self.assertEqual(format_tick_label(49.6), "50")
        self.assertEqual(format_tick_label(-100.0), "-100")
        self.assertEqual(format_tick_label(-0.3), "0")
        self.assertEqual(format_tick_label(math.inf), "inf")


class SampleCoercionTests(unittest.TestCase):
    def test_accepts_pairs_and_arrays(self) -> None:
        arr = coerce_samples([(0, 1), (1, 2.5)])
        self.assertEqual(arr.shape, (2, 2))
        self.assertEqual(arr.dtype, np.float64)
        arr2 = coerce_samples(np.zeros((3, 2), dtype=np.int32))
        self.assertEqual(arr2.dtype, np.float64)

    def test_empty_sequence(self) -> None:
        self.assertEqual(coerce_samples([]).shape, (0, 2))

    def test_rejects_bad_shapes(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_samples(np.zeros((3, 3)))
        with self.assertRaises(PlotDataError):
            coerce_samples([(1.0,), (2.0,)])
        with self.assertRaises(PlotDataError):
            coerce_samples("abc")
        with self.assertRaises(PlotDataError):
            coerce_samples([("a", "b")])


if __name__ == "__main__":
    unittest.main()

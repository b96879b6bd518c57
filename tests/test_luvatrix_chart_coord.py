from __future__ import annotations

from datetime import date, datetime
import unittest

import numpy as np

from luvatrix_chart.coord import (
    CategoryRange,
    DateRange,
    LinearRange,
    LogRange,
    RangedCoord,
    as_ranged_coord,
)
from luvatrix_chart.geometry import PixelRange


class _Percent:
    def to_ranged_coord(self) -> LinearRange:
        return LinearRange(0.0, 100.0)


class AxisSpecConversionTests(unittest.TestCase):
    def test_numeric_pair_and_range_become_linear(self) -> None:
        self.assertEqual(as_ranged_coord((0, 5)), LinearRange(0.0, 5.0))
        self.assertEqual(as_ranged_coord(range(-3, 7)), LinearRange(-3.0, 7.0))

    def test_date_pair_becomes_date_range(self) -> None:
        desc = as_ranged_coord((date(2024, 1, 1), date(2024, 2, 1)))
        self.assertIsInstance(desc, DateRange)
        self.assertEqual(desc.range()[0], datetime(2024, 1, 1))

    def test_strings_become_categories(self) -> None:
        self.assertEqual(as_ranged_coord(["a", "b", "c"]), CategoryRange(("a", "b", "c")))

    def test_custom_conversion_and_descriptors_pass_through(self) -> None:
        self.assertEqual(as_ranged_coord(_Percent()), LinearRange(0.0, 100.0))
        log = LogRange(1.0, 1000.0)
        self.assertIs(as_ranged_coord(log), log)

    def test_unconvertible_spec_raises_type_error(self) -> None:
        with self.assertRaises(TypeError):
            as_ranged_coord(42)
        with self.assertRaises(TypeError):
            as_ranged_coord((1, "a"))

    def test_invalid_bounds_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            LinearRange(1.0, 1.0)
        with self.assertRaises(ValueError):
            LogRange(0.0, 10.0)
        with self.assertRaises(ValueError):
            CategoryRange(())


class DescriptorTests(unittest.TestCase):
    def test_linear_key_points_are_nice_and_inside_range(self) -> None:
        points = LinearRange(0.0, 10.0).key_points(5)
        self.assertEqual(points, [0.0, 2.0, 4.0, 6.0, 8.0])

    def test_log_key_points_are_decades(self) -> None:
        self.assertEqual(LogRange(1.0, 1000.0).key_points(10), [1.0, 10.0, 100.0, 1000.0])
        self.assertEqual(LogRange(1.0, 1e6).key_points(3), [1.0, 1000.0, 1e6])

    def test_log_map_places_decades_evenly(self) -> None:
        desc = LogRange(1.0, 100.0)
        self.assertAlmostEqual(desc.map(10.0, (0, 200)), 100.0)
        self.assertAlmostEqual(desc.unmap(100.0, (0, 200)), 10.0)

    def test_date_map_is_linear_in_time(self) -> None:
        desc = DateRange(datetime(2024, 1, 1), datetime(2024, 1, 11))
        self.assertAlmostEqual(desc.map(datetime(2024, 1, 6), (0, 100)), 50.0)
        self.assertEqual(desc.unmap(100.0, (0, 100)), datetime(2024, 1, 11))

    def test_category_buckets(self) -> None:
        desc = CategoryRange(("a", "b", "c", "d"))
        self.assertAlmostEqual(desc.map("a", (0, 400)), 50.0)
        self.assertEqual(desc.unmap(260.0, (0, 400)), "c")
        self.assertEqual(desc.unmap(1000.0, (0, 400)), "d")
        self.assertEqual(desc.key_points(2), ["a", "c"])
        with self.assertRaises(ValueError):
            desc.map("z", (0, 400))


class RangedCoordTests(unittest.TestCase):
    def _coord(self) -> RangedCoord:
        return RangedCoord.from_specs((0.0, 10.0), (0.0, 1.0), (PixelRange(60, 800), PixelRange(550, 0)))

    def test_extremes_hit_edge_pixels_with_inverted_y(self) -> None:
        coord = self._coord()
        self.assertEqual(coord.translate((0.0, 0.0)), (60, 549))
        self.assertEqual(coord.translate((10.0, 1.0)), (799, 0))

    def test_translate_many_matches_translate(self) -> None:
        coord = self._coord()
        xs = np.asarray([0.0, 2.5, 10.0])
        ys = np.asarray([0.0, 0.25, 1.0])
        px, py = coord.translate_many(xs, ys)
        self.assertEqual(px.dtype, np.int32)
        self.assertEqual(px.tolist(), [60, 245, 799])
        self.assertEqual(py.tolist(), [549, 412, 0])

    def test_reverse_translate_recovers_domain_values(self) -> None:
        coord = self._coord()
        x, y = coord.reverse_translate((799, 0))
        self.assertAlmostEqual(x, 10.0)
        self.assertAlmostEqual(y, 1.0)

    def test_ranges_report_domain(self) -> None:
        coord = self._coord()
        self.assertEqual(coord.get_x_range(), (0.0, 10.0))
        self.assertEqual(coord.get_pixel_range(), (PixelRange(60, 800), PixelRange(550, 0)))


if __name__ == "__main__":
    unittest.main()

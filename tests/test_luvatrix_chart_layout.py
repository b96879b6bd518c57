from __future__ import annotations

import itertools
import unittest

from luvatrix_chart.geometry import LabelAreas, LabelAreaSpec, Position, Rect
from luvatrix_chart.labels import inset_offsets, resolve_label_areas
from luvatrix_chart.splitter import compute_breakpoints, split_canvas, split_grid


def _specs(**sides: LabelAreaSpec) -> dict[Position, LabelAreaSpec]:
    return {Position[name.upper()]: spec for name, spec in sides.items()}


class CanvasSplitterTests(unittest.TestCase):
    def test_breakpoints_move_inward_for_carved_sides(self) -> None:
        xs, ys = compute_breakpoints(
            800,
            600,
            _specs(top=LabelAreaSpec(10), bottom=LabelAreaSpec(50), left=LabelAreaSpec(60), right=LabelAreaSpec(20)),
        )
        self.assertEqual(xs, (60, 780))
        self.assertEqual(ys, (10, 550))

    def test_inset_sides_do_not_move_breakpoints(self) -> None:
        xs, ys = compute_breakpoints(800, 600, _specs(top=LabelAreaSpec(40, inset=True), left=LabelAreaSpec(60)))
        self.assertEqual(xs, (60, 800))
        self.assertEqual(ys, (0, 600))

    def test_split_grid_is_row_major_three_by_three(self) -> None:
        cells = split_grid(Rect(10, 20, 100, 50), xs=(30, 80), ys=(10, 40))
        self.assertEqual(len(cells), 9)
        self.assertEqual(cells[0], Rect(10, 20, 30, 10))
        self.assertEqual(cells[4], Rect(40, 30, 50, 30))
        self.assertEqual(cells[8], Rect(90, 60, 20, 10))

    def test_example_bottom_and_left_label_areas(self) -> None:
        split = split_canvas(Rect(0, 0, 800, 600), _specs(bottom=LabelAreaSpec(50), left=LabelAreaSpec(60)))
        self.assertEqual(split.interior, Rect(60, 0, 740, 550))
        self.assertEqual(split.bands.left, Rect(0, 0, 60, 550))
        self.assertEqual(split.bands.bottom, Rect(60, 550, 740, 50))
        self.assertIsNone(split.bands.top)
        self.assertIsNone(split.bands.right)

    def test_carved_extents_sum_to_canvas_extent(self) -> None:
        canvas = Rect(7, 3, 640, 480)
        for top, bottom, left, right in itertools.product((0, 15), (0, 40), (0, 55), (0, 12)):
            specs = _specs(
                top=LabelAreaSpec(top),
                bottom=LabelAreaSpec(bottom),
                left=LabelAreaSpec(left),
                right=LabelAreaSpec(right),
            )
            split = split_canvas(canvas, specs)
            self.assertEqual(split.interior.height + top + bottom, canvas.height)
            self.assertEqual(split.interior.width + left + right, canvas.width)
            for position, size in zip(Position, (top, bottom, left, right)):
                band = split.bands[position]
                if size == 0:
                    self.assertIsNone(band)
                else:
                    self.assertIsNotNone(band)

    def test_negative_size_places_band_outside_its_edge(self) -> None:
        # Observed, not specified: a negative size sorts the breakpoint past the
        # canvas edge, so the band lands outside and the interior keeps its extent.
        specs = _specs(top=LabelAreaSpec(-40))
        with self.assertLogs("luvatrix_chart.labels", level="WARNING") as logs:
            layout = resolve_label_areas(split_canvas(Rect(0, 0, 800, 600), specs), specs)
        self.assertEqual(layout.interior, Rect(0, 0, 800, 600))
        self.assertEqual(layout.label_areas.top, Rect(0, -40, 800, 40))
        self.assertIn("negative size -40", logs.output[0])


class LabelAreaResolverTests(unittest.TestCase):
    def _resolve(self, specs: dict[Position, LabelAreaSpec], canvas: Rect = Rect(0, 0, 800, 600)):
        return resolve_label_areas(split_canvas(canvas, specs), specs)

    def test_inset_top_overlays_interior_without_shrinking_it(self) -> None:
        carved = self._resolve(_specs(bottom=LabelAreaSpec(50), left=LabelAreaSpec(60)))
        specs = _specs(
            top=LabelAreaSpec(40, inset=True),
            bottom=LabelAreaSpec(50),
            left=LabelAreaSpec(60),
        )
        layout = self._resolve(specs)
        self.assertEqual(layout.interior, carved.interior)
        top = layout.label_areas.top
        self.assertEqual(top, Rect(60, 0, 740, 40))
        self.assertTrue(layout.interior.contains_rect(top))

    def test_each_inset_is_flush_with_its_interior_edge(self) -> None:
        specs = _specs(
            top=LabelAreaSpec(10, inset=True),
            bottom=LabelAreaSpec(20, inset=True),
            left=LabelAreaSpec(30, inset=True),
            right=LabelAreaSpec(40, inset=True),
        )
        layout = self._resolve(specs, Rect(5, 5, 400, 300))
        interior = layout.interior
        self.assertEqual(interior, Rect(5, 5, 400, 300))
        areas = layout.label_areas
        self.assertEqual(areas.top, Rect(5, 5, 400, 10))
        self.assertEqual(areas.bottom, Rect(5, 285, 400, 20))
        self.assertEqual(areas.left, Rect(5, 5, 30, 300))
        self.assertEqual(areas.right, Rect(365, 5, 40, 300))
        for _, area in areas.items():
            self.assertTrue(interior.contains_rect(area))

    def test_insets_may_share_corners(self) -> None:
        layout = self._resolve(_specs(top=LabelAreaSpec(25, inset=True), left=LabelAreaSpec(35, inset=True)))
        top = layout.label_areas.top
        left = layout.label_areas.left
        self.assertEqual((top.x, top.y), (left.x, left.y))

    def test_zero_size_yields_no_area_even_when_inset(self) -> None:
        layout = self._resolve(_specs(top=LabelAreaSpec(0, inset=True), right=LabelAreaSpec(0)))
        self.assertEqual(layout.label_areas, LabelAreas())

    def test_negative_inset_size_is_ignored(self) -> None:
        with self.assertLogs("luvatrix_chart.labels", level="WARNING"):
            layout = self._resolve(_specs(left=LabelAreaSpec(-20, inset=True)))
        self.assertIsNone(layout.label_areas.left)

    def test_oversized_inset_is_clamped_to_interior(self) -> None:
        with self.assertLogs("luvatrix_chart.labels", level="WARNING") as logs:
            offsets = inset_offsets(Position.BOTTOM, 80, width=200, height=50)
        self.assertEqual(offsets, (0, 0, 200, 50))
        self.assertIn("clamped", logs.output[0])

    def test_carved_and_inset_sides_mix(self) -> None:
        specs = _specs(bottom=LabelAreaSpec(30), right=LabelAreaSpec(45, inset=True))
        layout = self._resolve(specs)
        self.assertEqual(layout.interior, Rect(0, 0, 800, 570))
        self.assertEqual(layout.label_areas.bottom, Rect(0, 570, 800, 30))
        self.assertEqual(layout.label_areas.right, Rect(755, 0, 45, 570))
        self.assertEqual(layout.label_areas.present(), [Position.BOTTOM, Position.RIGHT])


if __name__ == "__main__":
    unittest.main()

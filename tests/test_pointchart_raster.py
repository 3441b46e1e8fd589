from __future__ import annotations

import unittest

import numpy as np

from pointchart.canvas import Path, Rect
from pointchart.entry import Entry
from pointchart.point_chart import PointChart
from pointchart.raster_canvas import RasterCanvas


RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
SERIES = (62, 149, 255, 255)


def _ink(canvas: RasterCanvas) -> tuple[np.ndarray, np.ndarray]:
    ys, xs = np.nonzero(canvas.pixels[:, :, 3])
    return xs, ys


class RasterCanvasPrimitiveTests(unittest.TestCase):
    def test_rejects_non_rgba_matrix(self) -> None:
        with self.assertRaises(ValueError):
            RasterCanvas(np.zeros((4, 4, 3), dtype=np.uint8))
        with self.assertRaises(ValueError):
            RasterCanvas(np.zeros((4, 4, 4), dtype=np.float32))

    def test_clear_fills_every_pixel(self) -> None:
        canvas = RasterCanvas.create(6, 4)
        canvas.clear(WHITE)
        self.assertEqual(canvas.pixels.shape, (4, 6, 4))
        self.assertTrue(np.all(canvas.pixels == 255))

    def test_rect_fills_its_pixel_span(self) -> None:
        canvas = RasterCanvas.create(10, 10)
        canvas.draw_rect(Rect(2, 2, 4, 4), GREEN)
        self.assertEqual(tuple(canvas.pixels[3, 3]), GREEN)
        self.assertEqual(tuple(canvas.pixels[5, 5]), GREEN)
        self.assertEqual(int(canvas.pixels[7, 7, 3]), 0)
        self.assertEqual(int(canvas.pixels[1, 1, 3]), 0)

    def test_gradient_rect_fades_between_end_points(self) -> None:
        canvas = RasterCanvas.create(10, 20)
        shader = canvas.create_linear_gradient((0.0, 0.0), (0.0, 20.0), ((255, 0, 0, 200), (255, 0, 0, 20)))
        canvas.draw_rect(Rect(0, 0, 10, 20), RED, shader=shader)
        column = canvas.pixels[:, 5, 3].astype(int)
        self.assertGreater(column[0], column[-1])
        self.assertTrue(np.all(np.diff(column) <= 0))

    def test_circle_and_square_markers(self) -> None:
        canvas = RasterCanvas.create(20, 20)
        canvas.draw_point(10, 10, RED, 10, "circle")
        self.assertEqual(tuple(canvas.pixels[10, 10]), RED)
        self.assertEqual(int(canvas.pixels[5, 5, 3]), 0)

        canvas = RasterCanvas.create(20, 20)
        canvas.draw_point(10, 10, RED, 10, "square")
        self.assertEqual(tuple(canvas.pixels[5, 5]), RED)
        self.assertEqual(int(canvas.pixels[3, 3, 3]), 0)

    def test_marker_mode_none_draws_nothing(self) -> None:
        canvas = RasterCanvas.create(20, 20)
        canvas.draw_point(10, 10, RED, 10, "none")
        self.assertFalse(np.any(canvas.pixels[:, :, 3]))

    def test_dashed_line_leaves_gaps(self) -> None:
        canvas = RasterCanvas.create(40, 10)
        canvas.draw_line(0, 5, 30, 5, RED, dash=(10.0, 2.0))
        row = canvas.pixels[5, :, 3]
        self.assertEqual(int(row[0]), 255)
        self.assertEqual(int(row[9]), 255)
        self.assertEqual(int(row[10]), 0)
        self.assertEqual(int(row[11]), 0)
        self.assertEqual(int(row[12]), 255)

    def test_solid_vertical_line_covers_both_end_points(self) -> None:
        canvas = RasterCanvas.create(10, 10)
        canvas.draw_line(4, 1, 4, 8, BLUE)
        self.assertTrue(np.all(canvas.pixels[1:9, 4, 3] == 255))
        self.assertEqual(int(canvas.pixels[0, 4, 3]), 0)

    def test_translucent_color_blends_over_background(self) -> None:
        canvas = RasterCanvas.create(4, 4, WHITE)
        canvas.draw_rect(Rect(0, 0, 4, 4), (0, 0, 0, 127))
        px = canvas.pixels[1, 1]
        self.assertEqual(int(px[3]), 255)
        self.assertTrue(120 <= int(px[0]) <= 135)

    def test_round_rect_leaves_corners_empty(self) -> None:
        canvas = RasterCanvas.create(20, 20)
        canvas.draw_round_rect(Rect(0, 0, 20, 20), 5, 5, BLUE)
        self.assertEqual(int(canvas.pixels[0, 0, 3]), 0)
        self.assertEqual(tuple(canvas.pixels[10, 10]), BLUE)
        self.assertEqual(tuple(canvas.pixels[0, 10]), BLUE)

    def test_path_fills_triangle(self) -> None:
        canvas = RasterCanvas.create(20, 20)
        canvas.draw_path(Path().move_to(2, 2).line_to(18, 2).line_to(10, 18).close(), GREEN)
        self.assertEqual(tuple(canvas.pixels[6, 10]), GREEN)
        self.assertEqual(int(canvas.pixels[17, 2, 3]), 0)


class RasterCanvasTransformTests(unittest.TestCase):
    def test_translate_is_undone_by_restore(self) -> None:
        canvas = RasterCanvas.create(10, 10)
        canvas.save()
        canvas.translate(5, 5)
        canvas.draw_rect(Rect(0, 0, 2, 2), RED)
        canvas.restore()
        canvas.draw_rect(Rect(0, 0, 1, 1), BLUE)
        self.assertEqual(tuple(canvas.pixels[5, 5]), RED)
        self.assertEqual(tuple(canvas.pixels[6, 6]), RED)
        self.assertEqual(tuple(canvas.pixels[0, 0]), BLUE)
        np.testing.assert_array_equal(canvas.matrix, np.eye(3))

    def test_restore_without_save_raises(self) -> None:
        with self.assertRaises(RuntimeError):
            RasterCanvas.create(4, 4).restore()

    def test_non_quarter_turn_rotation_is_rejected_for_text(self) -> None:
        canvas = RasterCanvas.create(40, 40)
        canvas.rotate(45)
        with self.assertRaises(ValueError):
            canvas.draw_text("A", 10, 10, color=RED, size=12)
        with self.assertRaises(ValueError):
            canvas.draw_rect(Rect(0, 0, 4, 4), RED)

    def test_quarter_turn_rotation_maps_rects(self) -> None:
        canvas = RasterCanvas.create(20, 20)
        canvas.rotate(-90)
        canvas.translate(-10, 0)
        canvas.draw_rect(Rect(0, 0, 4, 2), RED)
        xs, ys = _ink(canvas)
        self.assertEqual(int(xs.max() - xs.min() + 1), 2)
        self.assertEqual(int(ys.max() - ys.min() + 1), 4)


class RasterCanvasTextTests(unittest.TestCase):
    def test_text_draws_ink_near_baseline(self) -> None:
        canvas = RasterCanvas.create(80, 40)
        canvas.draw_text("Hi", 5, 30, color=RED, size=16)
        xs, ys = _ink(canvas)
        self.assertGreater(xs.size, 0)
        self.assertGreaterEqual(int(xs.min()), 4)
        self.assertLessEqual(int(ys.max()), 34)

    def test_measure_text_reports_baseline_relative_bounds(self) -> None:
        canvas = RasterCanvas.create(4, 4)
        normal = canvas.measure_text("Hello", size=16)
        bold = canvas.measure_text("Hello", size=16, bold=True)
        self.assertGreater(normal.width, 0)
        self.assertLess(normal.top, 0)
        self.assertGreaterEqual(bold.right, normal.right)
        self.assertTrue(canvas.measure_text("", size=16).is_empty)

    def test_right_aligned_text_ends_at_anchor(self) -> None:
        canvas = RasterCanvas.create(100, 40)
        canvas.draw_text("25", 60, 30, color=RED, size=16, align="right")
        xs, _ = _ink(canvas)
        self.assertLessEqual(int(xs.max()), 60)
        self.assertGreater(int(xs.min()), 30)

    def test_rotated_text_reads_bottom_to_top(self) -> None:
        canvas = RasterCanvas.create(100, 100)
        canvas.save()
        canvas.rotate(-90)
        canvas.translate(-80, 20)
        canvas.draw_text("Hello", 0, 0, color=RED, size=16)
        canvas.restore()
        xs, ys = _ink(canvas)
        self.assertGreater(xs.size, 0)
        self.assertGreater(int(ys.max() - ys.min()), int(xs.max() - xs.min()))
        self.assertLessEqual(int(ys.max()), 81)


class RasterPointChartTests(unittest.TestCase):
    def test_point_chart_renders_markers_and_halo(self) -> None:
        entries = [Entry(value=v, color=SERIES) for v in (10, 14, 16, 25, 10, 15, 2, 19)]
        entries[2].selected = True
        chart = PointChart(entries)
        canvas = RasterCanvas.create(800, 400)
        chart.draw(canvas, 800, 400)
        layout = chart.last_layout
        assert layout is not None

        x, y = layout.point(6)
        self.assertEqual(tuple(canvas.pixels[int(y), int(x)]), SERIES)
        x, y = layout.point(2)
        self.assertEqual(tuple(canvas.pixels[int(y), int(x)]), (0, 0, 0, 255))
        self.assertEqual(tuple(canvas.pixels[2, 2]), WHITE)


if __name__ == "__main__":
    unittest.main()

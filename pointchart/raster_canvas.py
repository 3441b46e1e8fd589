from __future__ import annotations

import math

import numpy as np

from pointchart.canvas import LinearGradient, Path, Rect, TextAlign, TextBounds
from pointchart.entry import RGBA
from pointchart.raster import (
    draw_hline,
    draw_line,
    draw_marker,
    draw_text,
    draw_vline,
    fill,
    fill_polygon,
    fill_rect,
    fill_rect_gradient,
    fill_round_rect,
    new_canvas,
    text_bounds,
)
from pointchart.raster.draw_text import DEFAULT_FONT_FAMILY
from pointchart.style import PointMode


BOLD_EMBOLDEN_PX = 2


class RasterCanvas:
    """`Canvas` implementation drawing into an RGBA255 numpy matrix of shape (H, W, 4).

    Transforms are affine; text and rects require the current rotation to be
    a quarter turn.
    """

    def __init__(self, pixels: np.ndarray, *, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        if pixels.dtype != np.uint8:
            raise ValueError("pixels must be uint8")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError("pixels must have shape (H, W, 4)")
        self.pixels = pixels
        self.font_family = font_family
        self._matrix = np.eye(3, dtype=np.float64)
        self._stack: list[np.ndarray] = []

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        color: RGBA = (0, 0, 0, 0),
        *,
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> "RasterCanvas":
        return cls(new_canvas(width, height, color), font_family=font_family)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    def to_rgba(self) -> np.ndarray:
        return self.pixels.copy()

    # transforms

    def save(self) -> None:
        self._stack.append(self._matrix.copy())

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() called without a matching save()")
        self._matrix = self._stack.pop()

    def rotate(self, degrees: float) -> None:
        rad = math.radians(degrees)
        c = math.cos(rad)
        s = math.sin(rad)
        # Snap quarter turns so repeated rotations stay exact.
        c = 0.0 if abs(c) < 1e-12 else c
        s = 0.0 if abs(s) < 1e-12 else s
        rot = np.asarray([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
        self._matrix = self._matrix @ rot

    def translate(self, dx: float, dy: float) -> None:
        move = np.asarray([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]], dtype=np.float64)
        self._matrix = self._matrix @ move

    # primitives

    def clear(self, color: RGBA) -> None:
        fill(self.pixels, color)

    def draw_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: RGBA,
        *,
        width: float = 1.0,
        dash: tuple[float, float] | None = None,
        dash_phase: float = 0.0,
    ) -> None:
        ax, ay = self._map_int(x0, y0)
        bx, by = self._map_int(x1, y1)
        brush = max(1, int(round(width)))
        if dash is None and brush == 1 and ax == bx:
            draw_vline(self.pixels, ax, ay, by, color)
            return
        if dash is None and brush == 1 and ay == by:
            draw_hline(self.pixels, ax, bx, ay, color)
            return
        draw_line(self.pixels, ax, ay, bx, by, color, width=brush, dash=dash, dash_phase=dash_phase)

    def draw_point(self, x: float, y: float, color: RGBA, size: float, mode: PointMode) -> None:
        cx, cy = self._map(x, y)
        draw_marker(self.pixels, cx, cy, color, size, mode)

    def draw_rect(self, rect: Rect, color: RGBA, *, shader: LinearGradient | None = None) -> None:
        left, top, right, bottom = self._map_rect(rect)
        if shader is None:
            fill_rect(self.pixels, left, top, right, bottom, color)
            return
        fill_rect_gradient(
            self.pixels,
            left,
            top,
            right,
            bottom,
            start=self._map(*shader.start),
            end=self._map(*shader.end),
            colors=shader.colors,
        )

    def draw_round_rect(self, rect: Rect, rx: float, ry: float, color: RGBA) -> None:
        left, top, right, bottom = self._map_rect(rect)
        fill_round_rect(self.pixels, left, top, right, bottom, rx, ry, color)

    def draw_path(self, path: Path, color: RGBA, *, stroke_width: float = 1.0) -> None:
        points = [self._map(x, y) for x, y in path.points]
        fill_polygon(self.pixels, points, color, outline_width=max(0, int(round(stroke_width))))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        color: RGBA,
        size: float,
        align: TextAlign = "left",
        bold: bool = False,
        antialias: bool = True,
    ) -> None:
        if not text:
            return
        embolden = BOLD_EMBOLDEN_PX if bold else 1
        if align != "left":
            bounds = self.measure_text(text, size=size, bold=bold)
            x -= bounds.right if align == "right" else (bounds.left + bounds.right) / 2.0
        ox, oy = self._map_int(x, y)
        draw_text(
            self.pixels,
            ox,
            oy,
            text,
            color,
            font_family=self.font_family,
            font_size_px=size,
            embolden_px=embolden,
            antialias=antialias,
            rotate_deg=self._quarter_turn_deg(),
        )

    def measure_text(self, text: str, *, size: float, bold: bool = False) -> TextBounds:
        left, top, right, bottom = text_bounds(
            text,
            font_family=self.font_family,
            font_size_px=size,
            embolden_px=BOLD_EMBOLDEN_PX if bold else 1,
        )
        return TextBounds(left=float(left), top=float(top), right=float(right), bottom=float(bottom))

    def create_linear_gradient(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        colors: tuple[RGBA, RGBA],
    ) -> LinearGradient:
        return LinearGradient(start=(float(start[0]), float(start[1])), end=(float(end[0]), float(end[1])), colors=colors)

    # helpers

    def _map(self, x: float, y: float) -> tuple[float, float]:
        m = self._matrix
        return (
            float(m[0, 0] * x + m[0, 1] * y + m[0, 2]),
            float(m[1, 0] * x + m[1, 1] * y + m[1, 2]),
        )

    def _map_int(self, x: float, y: float) -> tuple[int, int]:
        mx, my = self._map(x, y)
        return int(round(mx)), int(round(my))

    def _map_rect(self, rect: Rect) -> tuple[float, float, float, float]:
        self._quarter_turn_deg()
        xs = []
        ys = []
        for cx, cy in ((rect.x, rect.y), (rect.right, rect.y), (rect.x, rect.bottom), (rect.right, rect.bottom)):
            mx, my = self._map(cx, cy)
            xs.append(mx)
            ys.append(my)
        return min(xs), min(ys), max(xs), max(ys)

    def _quarter_turn_deg(self) -> int:
        """Counter-clockwise quarter turns of the current transform, in degrees."""

        angle = math.degrees(math.atan2(self._matrix[1, 0], self._matrix[0, 0]))
        turns = round(angle / 90.0)
        if abs(angle - turns * 90.0) > 1e-6:
            raise ValueError(f"only quarter-turn rotations are supported, got {angle:.3f} degrees")
        return int((-turns * 90) % 360)

from __future__ import annotations

import numpy as np

from pointchart.entry import RGBA
from pointchart.raster.canvas import blend_mask


def draw_line(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    *,
    width: int = 1,
    dash: tuple[float, float] | None = None,
    dash_phase: float = 0.0,
) -> None:
    """Bresenham line with a square brush; `dash` is an (on, off) run length in pixels."""

    on = 0.0
    period = 0.0
    if dash is not None:
        on = float(dash[0])
        period = on + float(dash[1])
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    step = 0

    while True:
        if period <= 0 or (step + dash_phase) % period < on:
            _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
        step += 1


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    size = 2 * radius + 1
    blend_mask(dst, x - radius, y - radius, np.full((size, size), 255, dtype=np.uint8), color)

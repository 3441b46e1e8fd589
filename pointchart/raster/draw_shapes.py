from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from pointchart.entry import RGBA
from pointchart.raster.canvas import blend_mask, blend_rgba


def fill_rect(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA) -> None:
    left, top, right, bottom = _pixel_span(x0, y0, x1, y1)
    if right <= left or bottom <= top:
        return
    blend_mask(dst, left, top, np.full((bottom - top, right - left), 255, dtype=np.uint8), color)


def fill_rect_gradient(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    start: tuple[float, float],
    end: tuple[float, float],
    colors: tuple[RGBA, RGBA],
) -> None:
    """Fill a rect with a two-stop linear gradient, clamped beyond its end points."""

    left, top, right, bottom = _pixel_span(x0, y0, x1, y1)
    if right <= left or bottom <= top:
        return
    yy, xx = np.mgrid[top:bottom, left:right].astype(np.float32) + 0.5
    gx = float(end[0]) - float(start[0])
    gy = float(end[1]) - float(start[1])
    length_sq = gx * gx + gy * gy
    if length_sq <= 1e-12:
        t = np.zeros(xx.shape, dtype=np.float32)
    else:
        t = ((xx - float(start[0])) * gx + (yy - float(start[1])) * gy) / length_sq
        t = np.clip(t, 0.0, 1.0)
    c0 = np.asarray(colors[0], dtype=np.float32)
    c1 = np.asarray(colors[1], dtype=np.float32)
    rgba = c0 + t[:, :, None] * (c1 - c0)
    blend_rgba(dst, left, top, rgba)


def fill_round_rect(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, rx: float, ry: float, color: RGBA) -> None:
    left, top, right, bottom = _pixel_span(x0, y0, x1, y1)
    if right <= left or bottom <= top:
        return
    rx = max(0.0, min(float(rx), (right - left) / 2.0))
    ry = max(0.0, min(float(ry), (bottom - top) / 2.0))
    yy, xx = np.mgrid[top:bottom, left:right].astype(np.float32) + 0.5
    inside = np.ones(xx.shape, dtype=bool)
    if rx > 0 and ry > 0:
        # Distance into each corner box, zero outside the corners.
        cx = np.maximum(np.maximum(left + rx - xx, xx - (right - rx)), 0.0)
        cy = np.maximum(np.maximum(top + ry - yy, yy - (bottom - ry)), 0.0)
        inside = (cx / rx) ** 2 + (cy / ry) ** 2 <= 1.0
    blend_mask(dst, left, top, np.where(inside, 255, 0).astype(np.uint8), color)


def fill_polygon(
    dst: np.ndarray,
    points: Sequence[tuple[float, float]],
    color: RGBA,
    *,
    outline_width: int = 1,
    antialias: bool = True,
) -> None:
    if len(points) < 2:
        return
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    left = int(np.floor(min(xs))) - outline_width
    top = int(np.floor(min(ys))) - outline_width
    right = int(np.ceil(max(xs))) + outline_width + 1
    bottom = int(np.ceil(max(ys))) + outline_width + 1
    scale = 4 if antialias else 1
    image = Image.new("L", ((right - left) * scale, (bottom - top) * scale), 0)
    draw = ImageDraw.Draw(image)
    local = [((x - left) * scale, (y - top) * scale) for x, y in points]
    if len(local) >= 3:
        draw.polygon(local, fill=255)
    if outline_width > 0:
        draw.line(local + [local[0]], fill=255, width=outline_width * scale)
    if scale > 1:
        image = image.resize((right - left, bottom - top), Image.Resampling.BOX)
    blend_mask(dst, left, top, np.asarray(image, dtype=np.uint8), color)


def _pixel_span(x0: float, y0: float, x1: float, y1: float) -> tuple[int, int, int, int]:
    left = int(round(min(x0, x1)))
    right = int(round(max(x0, x1)))
    top = int(round(min(y0, y1)))
    bottom = int(round(max(y0, y1)))
    return left, top, right, bottom

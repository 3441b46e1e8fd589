from __future__ import annotations

import numpy as np

from pointchart.entry import RGBA
from pointchart.raster.canvas import blend_mask


def draw_marker(dst: np.ndarray, cx: float, cy: float, color: RGBA, size: float, mode: str) -> None:
    """Fill a circle or square of diameter `size` centered on (cx, cy)."""

    if mode == "none" or size <= 0:
        return
    if mode not in ("circle", "square"):
        raise ValueError(f"unsupported marker mode: {mode}")
    radius = size / 2.0
    x0 = int(np.floor(cx - radius))
    y0 = int(np.floor(cy - radius))
    x1 = int(np.ceil(cx + radius))
    y1 = int(np.ceil(cy + radius))
    # Sample at pixel centers.
    yy, xx = np.mgrid[y0:y1, x0:x1].astype(np.float32) + 0.5
    if mode == "circle":
        inside = (xx - cx) ** 2 + (yy - cy) ** 2 <= radius * radius
    else:
        inside = (np.abs(xx - cx) <= radius) & (np.abs(yy - cy) <= radius)
    blend_mask(dst, x0, y0, np.where(inside, 255, 0).astype(np.uint8), color)

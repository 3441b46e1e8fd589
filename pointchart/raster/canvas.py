from __future__ import annotations

import numpy as np

from pointchart.entry import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    if width < 0 or height < 0:
        raise ValueError("canvas width/height must be >= 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :] = np.asarray(color, dtype=np.uint8)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    blend_mask(dst, xa, y, np.full((1, xb - xa + 1), 255, dtype=np.uint8), color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    blend_mask(dst, x, ya, np.full((yb - ya + 1, 1), 255, dtype=np.uint8), color)


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Composite `color` over `dst` with per-pixel coverage `mask` (uint8) at (x, y)."""

    h, w = mask.shape
    clip = _clip(dst, x, y, w, h)
    if clip is None:
        return
    x0, y0, x1, y1, sx0, sy0 = clip
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return
    src_rgb = np.broadcast_to(np.asarray(color[:3], dtype=np.float32), cov.shape + (3,))
    _composite(dst[y0:y1, x0:x1], src_rgb, src_alpha)


def blend_rgba(dst: np.ndarray, x: int, y: int, rgba: np.ndarray) -> None:
    """Composite a float `(h, w, 4)` RGBA patch (0..255 channels) over `dst` at (x, y)."""

    h, w, _ = rgba.shape
    clip = _clip(dst, x, y, w, h)
    if clip is None:
        return
    x0, y0, x1, y1, sx0, sy0 = clip
    patch = rgba[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)]
    src_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    if not np.any(src_alpha > 0):
        return
    _composite(dst[y0:y1, x0:x1], patch[:, :, :3].astype(np.float32), src_alpha)


def _clip(dst: np.ndarray, x: int, y: int, w: int, h: int) -> tuple[int, int, int, int, int, int] | None:
    if h <= 0 or w <= 0:
        return None
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1, x0 - x, y0 - y


def _composite(patch: np.ndarray, src_rgb: np.ndarray, src_alpha: np.ndarray) -> None:
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]
    patch[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)

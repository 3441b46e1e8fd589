from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from pointchart.entry import RGBA
from pointchart.raster.canvas import blend_mask


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 16.0
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
)
FontLike = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    antialias: bool = True,
    rotate_deg: int = 0,
) -> None:
    """Draw `text` with its left baseline point at (x, y).

    `rotate_deg` turns the glyphs counter-clockwise around that point in
    quarter turns.
    """

    if not text:
        return
    mask, left, top = text_mask(
        text,
        font_family=font_family,
        font_size_px=font_size_px,
        embolden_px=embolden_px,
        antialias=antialias,
    )
    h, w = mask.shape
    turns = normalize_quarter_turns(rotate_deg)
    # Offsets of the rotated mask's top-left corner from the baseline point.
    corners = {
        0: (left, top),
        1: (top, -(left + w)),
        2: (-(left + w), -(top + h)),
        3: (-(top + h), left),
    }
    ox, oy = corners[turns]
    blend_mask(dst, x + ox, y + oy, rotate_mask(mask, rotate_deg=rotate_deg), color)


def text_bounds(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
) -> tuple[int, int, int, int]:
    """Return the (left, top, right, bottom) ink box relative to the left baseline point."""

    if not text:
        return (0, 0, 0, 0)
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    left, top, right, bottom = font.getbbox(text, anchor="ls")
    return (int(left), int(top), int(right) + max(0, embolden_px - 1), int(bottom))


def text_mask(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    antialias: bool = True,
) -> tuple[np.ndarray, int, int]:
    """Render `text` to a coverage mask; also returns the mask's baseline offsets."""

    font = load_font(font_family=font_family, font_size_px=font_size_px)
    mask, left, top = _render_mask(text, font)
    if embolden_px > 1:
        mask = _embolden(mask, embolden_px)
    if not antialias:
        mask = np.where(mask >= 128, 255, 0).astype(np.uint8)
    return mask, left, top


def normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    if embolden_px <= 1:
        return mask
    out = np.zeros((mask.shape[0], mask.shape[1] + embolden_px - 1), dtype=np.uint8)
    for shift in range(embolden_px):
        dst = out[:, shift : shift + mask.shape[1]]
        np.maximum(dst, mask, out=dst)
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: FontLike) -> tuple[np.ndarray, int, int]:
    if not text:
        return np.zeros((1, 1), dtype=np.uint8), 0, 0
    left, top, right, bottom = font.getbbox(text, anchor="ls")
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font, anchor="ls")
    return np.asarray(image, dtype=np.uint8), int(left), int(top)


@lru_cache(maxsize=64)
def load_font(font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> FontLike:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.debug("font %s could not be loaded (%s); using bundled default", font_path, exc)
    else:
        LOGGER.debug("no system font matches %r; using bundled default", font_family)
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if stem == p:
                return path
    return None

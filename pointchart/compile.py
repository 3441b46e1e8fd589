from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TypeAlias

import numpy as np
import torch

from pointchart.canvas import Rect


@dataclass(frozen=True)
class FullRewrite:
    tensor_h_w_4: torch.Tensor


@dataclass(frozen=True)
class ReplaceRect:
    x: int
    y: int
    width: int
    height: int
    rect_h_w_4: torch.Tensor


WriteOp: TypeAlias = FullRewrite | ReplaceRect


@dataclass(frozen=True)
class WriteBatch:
    operations: list[WriteOp]

    @property
    def is_empty(self) -> bool:
        return not self.operations


def compile_frame_batch(frame_rgba: np.ndarray, dirty: Rect | None = None) -> WriteBatch:
    """Wrap a rendered chart frame as a write batch for a display host.

    Without `dirty` the whole frame is rewritten. A dirty rect is grown to
    whole pixels and clipped to the frame; nothing left after clipping yields
    an empty batch.
    """

    if frame_rgba.dtype != np.uint8 or frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame must be a uint8 (H, W, 4) matrix")
    if dirty is None:
        return WriteBatch([FullRewrite(torch.from_numpy(np.ascontiguousarray(frame_rgba)))])

    frame_h, frame_w = frame_rgba.shape[:2]
    left = max(0, math.floor(dirty.x))
    top = max(0, math.floor(dirty.y))
    right = min(frame_w, math.ceil(dirty.right))
    bottom = min(frame_h, math.ceil(dirty.bottom))
    if right <= left or bottom <= top:
        return WriteBatch([])
    patch = torch.from_numpy(np.ascontiguousarray(frame_rgba[top:bottom, left:right]))
    return WriteBatch([ReplaceRect(x=left, y=top, width=right - left, height=bottom - top, rect_h_w_4=patch)])

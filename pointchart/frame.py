from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pointchart.canvas import Rect


@dataclass(frozen=True)
class TouchRegion:
    rect: Rect
    on_hit: Callable[[], None]
    index: int | None = None


@dataclass
class FrameContext:
    """Per-draw state: surface size and the hit regions registered while drawing."""

    width: int
    height: int
    touch_regions: list[TouchRegion] = field(default_factory=list)

    def register(self, rect: Rect, on_hit: Callable[[], None], index: int | None = None) -> TouchRegion:
        region = TouchRegion(rect=rect, on_hit=on_hit, index=index)
        self.touch_regions.append(region)
        return region

    def hit_test(self, x: float, y: float) -> TouchRegion | None:
        for region in self.touch_regions:
            if region.rect.contains(x, y):
                return region
        return None

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from pointchart.canvas import Rect
from pointchart.chart import Chart
from pointchart.raster.draw_text import DEFAULT_FONT_FAMILY
from pointchart.raster_canvas import RasterCanvas

if TYPE_CHECKING:
    from pointchart.compile import WriteBatch


LOGGER = logging.getLogger(__name__)

RELEASE_EVENT_TYPES = ("pointer_up", "click", "tap")


@dataclass(frozen=True)
class PointerRelease:
    x: float
    y: float


def parse_pointer_release(event_type: str, payload: object) -> PointerRelease | None:
    """Parse a normalized pointer release event; anything else yields None."""

    if event_type not in RELEASE_EVENT_TYPES or not isinstance(payload, Mapping):
        return None
    if "x" not in payload or "y" not in payload:
        return None
    try:
        x = float(payload["x"])
        y = float(payload["y"])
    except (TypeError, ValueError):
        return None
    return PointerRelease(x=x, y=y)


@dataclass
class DirtyState:
    dirty: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)


class ChartView:
    """Host-side surface for one chart: repaints on demand and routes releases to hit testing.

    Rendering happens lazily: `render()` redraws only after the view was
    invalidated by a new chart, a resize or a touch that hit a region. A view
    without a chart renders a transparent frame.
    """

    def __init__(
        self,
        chart: Chart | None,
        width: int,
        height: int,
        *,
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._chart = chart
        self._width = width
        self._height = height
        self._font_family = font_family
        self._dirty = DirtyState()
        self._frame: np.ndarray | None = None

    @property
    def chart(self) -> Chart | None:
        return self._chart

    @chart.setter
    def chart(self, chart: Chart | None) -> None:
        self._chart = chart
        self.invalidate("chart_changed")

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    @property
    def is_dirty(self) -> bool:
        return self._dirty.dirty

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if (width, height) == (self._width, self._height):
            return
        self._width = width
        self._height = height
        self.invalidate("resized")

    def invalidate(self, reason: str = "invalidate") -> None:
        self._dirty.dirty = True
        self._dirty.metadata["reason"] = reason

    def render(self) -> np.ndarray:
        if not self._dirty.dirty and self._frame is not None:
            return self._frame
        canvas = RasterCanvas.create(self._width, self._height, font_family=self._font_family)
        if self._chart is not None:
            self._chart.draw(canvas, self._width, self._height)
        self._frame = canvas.pixels
        LOGGER.debug("ChartView rendered %dx%d (%s)", self._width, self._height, self._dirty.metadata.get("reason"))
        self._dirty = DirtyState(dirty=False)
        return self._frame

    def compile_write_batch(self, dirty: Rect | None = None) -> WriteBatch:
        # Keeps torch out of `import pointchart`.
        from pointchart.compile import compile_frame_batch

        return compile_frame_batch(self.render(), dirty)

    def handle_pointer_event(self, event_type: str, payload: object) -> bool:
        """Forward a release to the chart; True when a region was hit and a repaint is due."""

        release = parse_pointer_release(event_type, payload)
        if release is None or self._chart is None:
            return False
        if not self._chart.handle_touch(release.x, release.y):
            return False
        self.invalidate("touch")
        return True

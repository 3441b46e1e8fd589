from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Callable

from pointchart.canvas import Canvas, Rect
from pointchart.entry import Entry
from pointchart.errors import ChartDataError
from pointchart.frame import FrameContext, TouchRegion
from pointchart.selection import SelectionController
from pointchart.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)

DEFAULT_MARGIN = 20.0
DEFAULT_LABEL_TEXT_SIZE = 16.0


class Chart(ABC):
    """Shared chart state: configuration, value range and the per-frame touch registry.

    `entries` is held by reference. Hosts may keep mutating the same `Entry`
    objects; the next `draw` observes the change.

    `draw` and `handle_touch` must not run concurrently on one instance.
    """

    def __init__(
        self,
        entries: list[Entry] | None = None,
        *,
        margin: float = DEFAULT_MARGIN,
        label_text_size: float = DEFAULT_LABEL_TEXT_SIZE,
        min_value: float | None = None,
        max_value: float | None = None,
        style: ChartStyle | None = None,
    ) -> None:
        self.entries: list[Entry] = entries if entries is not None else []
        self.margin = float(margin)
        self.label_text_size = float(label_text_size)
        self._min_value = None if min_value is None else float(min_value)
        self._max_value = None if max_value is None else float(max_value)
        self.style = style if style is not None else DEFAULT_STYLE
        self._frame: FrameContext | None = None

    @property
    def min_value(self) -> float:
        if self._min_value is not None:
            return self._min_value
        if not self.entries:
            return 0.0
        return min(0.0, min(e.value for e in self.entries))

    @min_value.setter
    def min_value(self, value: float | None) -> None:
        self._min_value = None if value is None else float(value)

    @property
    def max_value(self) -> float:
        if self._max_value is not None:
            return self._max_value
        if not self.entries:
            return 0.0
        return max(0.0, max(e.value for e in self.entries))

    @max_value.setter
    def max_value(self, value: float | None) -> None:
        self._max_value = None if value is None else float(value)

    def value_range(self) -> float:
        return self.max_value - self.min_value

    @property
    def frame(self) -> FrameContext | None:
        """Context of the most recent `draw`, or None before the first draw."""

        return self._frame

    def selection(self) -> SelectionController:
        return SelectionController(self.entries)

    def register_touch_target(
        self,
        rect: Rect,
        on_hit: Callable[[], None],
        index: int | None = None,
    ) -> TouchRegion:
        if self._frame is None:
            raise RuntimeError("touch targets can only be registered during draw()")
        return self._frame.register(rect, on_hit, index=index)

    def handle_touch(self, x: float, y: float) -> bool:
        """Fire the first touch region containing (x, y); True means the host should repaint."""

        if self._frame is None:
            LOGGER.debug("touch at (%.1f, %.1f) ignored: chart has not been drawn", x, y)
            return False
        region = self._frame.hit_test(x, y)
        if region is None:
            return False
        LOGGER.debug("touch at (%.1f, %.1f) hit region %s", x, y, region.index)
        region.on_hit()
        return True

    def draw(self, canvas: Canvas, width: int, height: int) -> FrameContext:
        if width < 0 or height < 0:
            raise ValueError("draw width/height must be >= 0")
        if self.max_value < self.min_value:
            raise ChartDataError(f"max_value ({self.max_value}) is below min_value ({self.min_value})")

        # A new frame replaces the previous one; regions never accumulate.
        frame = FrameContext(width=width, height=height)
        self._frame = frame
        canvas.clear(self.style.background_color)
        if not self.entries:
            LOGGER.debug("%s has no entries; drew background only", type(self).__name__)
            return frame

        self.draw_content(canvas, width, height, frame)
        LOGGER.debug(
            "%s drew %d entries at %dx%d with %d touch regions",
            type(self).__name__,
            len(self.entries),
            width,
            height,
            len(frame.touch_regions),
        )
        return frame

    @abstractmethod
    def draw_content(self, canvas: Canvas, width: int, height: int, frame: FrameContext) -> None:
        ...

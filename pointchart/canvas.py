from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Literal, Protocol

from pointchart.entry import RGBA
from pointchart.style import PointMode


TextAlign = Literal["left", "center", "right"]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centered(cls, cx: float, cy: float, size: float) -> "Rect":
        half = size / 2.0
        return cls(x=cx - half, y=cy - half, width=size, height=size)

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        x0, x1 = min(left, right), max(left, right)
        y0, y1 = min(top, bottom), max(top, bottom)
        return cls(x=x0, y=y0, width=x1 - x0, height=y1 - y0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom


@dataclass(frozen=True)
class TextBounds:
    """Ink bounds of a text run relative to its left baseline origin.

    `top` is negative for glyphs above the baseline.
    """

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


EMPTY_BOUNDS = TextBounds()


@dataclass(frozen=True)
class LinearGradient:
    """Two-stop linear gradient, clamped outside `start..end`."""

    start: tuple[float, float]
    end: tuple[float, float]
    colors: tuple[RGBA, RGBA]


@dataclass
class Path:
    """Polygon path built from absolute and relative segments."""

    points: list[tuple[float, float]] = field(default_factory=list)
    closed: bool = False

    def move_to(self, x: float, y: float) -> "Path":
        self.points = [(float(x), float(y))]
        self.closed = False
        return self

    def line_to(self, x: float, y: float) -> "Path":
        if not self.points:
            return self.move_to(x, y)
        self.points.append((float(x), float(y)))
        return self

    def r_line_to(self, dx: float, dy: float) -> "Path":
        if not self.points:
            raise ValueError("r_line_to requires a current point; call move_to first")
        x, y = self.points[-1]
        self.points.append((x + float(dx), y + float(dy)))
        return self

    def close(self) -> "Path":
        self.closed = True
        return self


class Canvas(Protocol):
    """Drawing surface consumed by chart renderers.

    Coordinates are pixels with the origin at the top-left and y growing
    downward. `rotate` takes degrees, positive turning clockwise on screen.
    Text is positioned by its left/center/right baseline point.
    """

    def clear(self, color: RGBA) -> None:
        ...

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
        ...

    def draw_point(self, x: float, y: float, color: RGBA, size: float, mode: PointMode) -> None:
        ...

    def draw_rect(self, rect: Rect, color: RGBA, *, shader: LinearGradient | None = None) -> None:
        ...

    def draw_round_rect(self, rect: Rect, rx: float, ry: float, color: RGBA) -> None:
        ...

    def draw_path(self, path: Path, color: RGBA, *, stroke_width: float = 1.0) -> None:
        ...

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
        ...

    def measure_text(self, text: str, *, size: float, bold: bool = False) -> TextBounds:
        ...

    def create_linear_gradient(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        colors: tuple[RGBA, RGBA],
    ) -> LinearGradient:
        ...

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def rotate(self, degrees: float) -> None:
        ...

    def translate(self, dx: float, dy: float) -> None:
        ...


@contextmanager
def saved(canvas: Canvas) -> Iterator[Canvas]:
    """Scope transform changes; the saved transform is restored on exit."""

    canvas.save()
    try:
        yield canvas
    finally:
        canvas.restore()

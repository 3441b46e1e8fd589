from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pointchart.canvas import LinearGradient, Path, Rect, TextBounds


DRAW_OPS = frozenset(
    {
        "clear",
        "draw_line",
        "draw_point",
        "draw_rect",
        "draw_round_rect",
        "draw_path",
        "draw_text",
        "save",
        "rotate",
        "translate",
        "restore",
    }
)


@dataclass
class Call:
    name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


class RecordingCanvas:
    """Canvas double that records every call and measures text with fixed metrics.

    A glyph is `0.6 * size` wide; ink spans `0.75 * size` above and `0.2 * size`
    below the baseline. Bold adds one pixel of width.
    """

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self.depth = 0

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append(Call(name, args, kwargs))

    def ops(self) -> list[str]:
        return [c.name for c in self.calls if c.name in DRAW_OPS]

    def named(self, name: str) -> list[Call]:
        return [c for c in self.calls if c.name == name]

    def texts(self) -> list[str]:
        return [c.args[0] for c in self.named("draw_text")]

    def clear(self, color):
        self._record("clear", color)

    def draw_line(self, x0, y0, x1, y1, color, *, width=1.0, dash=None, dash_phase=0.0):
        self._record("draw_line", x0, y0, x1, y1, color, width=width, dash=dash, dash_phase=dash_phase)

    def draw_point(self, x, y, color, size, mode):
        self._record("draw_point", x, y, color, size, mode)

    def draw_rect(self, rect: Rect, color, *, shader: LinearGradient | None = None):
        self._record("draw_rect", rect, color, shader=shader)

    def draw_round_rect(self, rect: Rect, rx, ry, color):
        self._record("draw_round_rect", rect, rx, ry, color)

    def draw_path(self, path: Path, color, *, stroke_width=1.0):
        self._record("draw_path", list(path.points), color, stroke_width=stroke_width)

    def draw_text(self, text, x, y, *, color, size, align="left", bold=False, antialias=True):
        self._record("draw_text", text, x, y, color=color, size=size, align=align, bold=bold, antialias=antialias)

    def measure_text(self, text, *, size, bold=False) -> TextBounds:
        self._record("measure_text", text, size=size, bold=bold)
        if not text:
            return TextBounds()
        width = 0.6 * size * len(text) + (1.0 if bold else 0.0)
        return TextBounds(left=0.0, top=-0.75 * size, right=width, bottom=0.2 * size)

    def create_linear_gradient(self, start, end, colors) -> LinearGradient:
        self._record("create_linear_gradient", start, end, colors)
        return LinearGradient(start=start, end=end, colors=colors)

    def save(self):
        self.depth += 1
        self._record("save")

    def restore(self):
        self.depth -= 1
        self._record("restore")

    def rotate(self, degrees):
        self._record("rotate", degrees)

    def translate(self, dx, dy):
        self._record("translate", dx, dy)

from __future__ import annotations

from dataclasses import dataclass
import math

from pointchart.errors import ChartDataError


RGBA = tuple[int, int, int, int]

BLACK: RGBA = (0, 0, 0, 255)
GRAY: RGBA = (128, 128, 128, 255)


def with_alpha(color: RGBA, alpha: int) -> RGBA:
    a = max(0, min(255, int(alpha)))
    return (color[0], color[1], color[2], a)


@dataclass(eq=False)
class Entry:
    """One data point of a chart.

    Entries compare by identity: a chart holds the host's entry objects by
    reference and `selected` is mutated in place.
    """

    value: float
    label: str | None = None
    value_label: str | None = None
    annotation_label: str | None = None
    annotation_heading_label: str | None = None
    color: RGBA = BLACK
    text_color: RGBA = GRAY
    selected: bool = False

    def __post_init__(self) -> None:
        try:
            value = float(self.value)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"entry value must be numeric, got {self.value!r}") from exc
        if not math.isfinite(value):
            raise ChartDataError(f"entry value must be finite, got {value}")
        self.value = value

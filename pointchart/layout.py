from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from pointchart.canvas import EMPTY_BOUNDS, Canvas, TextBounds
from pointchart.entry import Entry
from pointchart.errors import ChartDataError


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointLayout:
    """Pixel geometry of one point-chart frame.

    `xs[i]`, `ys[i]` is the center of entry `i`; `origin_y` is the pixel row of value 0.
    """

    value_label_bounds: tuple[TextBounds, ...]
    footer_height: float
    header_height: float
    item_width: float
    item_height: float
    origin_y: float
    xs: np.ndarray
    ys: np.ndarray

    def point(self, index: int) -> tuple[float, float]:
        return float(self.xs[index]), float(self.ys[index])


def measure_value_labels(canvas: Canvas, entries: Sequence[Entry], text_size: float) -> tuple[TextBounds, ...]:
    return tuple(
        canvas.measure_text(e.value_label, size=text_size) if e.value_label else EMPTY_BOUNDS
        for e in entries
    )


def calculate_footer_height(entries: Sequence[Entry], margin: float, label_text_size: float) -> float:
    result = margin
    if any(e.label for e in entries):
        result += label_text_size + margin
    return result


def calculate_header_height(value_label_bounds: Sequence[TextBounds], margin: float) -> float:
    result = margin
    max_width = max((b.width for b in value_label_bounds), default=0.0)
    if max_width > 0:
        result += max_width + margin
    return result


def calculate_item_size(
    count: int,
    width: float,
    height: float,
    margin: float,
    footer_height: float,
    header_height: float,
) -> tuple[float, float]:
    if count <= 0:
        raise ChartDataError("point layout requires at least one entry")
    item_width = (width - (count + 1) * margin) / count
    item_height = height - margin - footer_height - header_height
    if item_width <= 0 or item_height <= 0:
        LOGGER.warning(
            "degenerate point layout: item size %.1fx%.1f for %d entries on %.0fx%.0f",
            item_width,
            item_height,
            count,
            width,
            height,
        )
    return item_width, item_height


def calculate_y_origin(min_value: float, max_value: float, item_height: float, header_height: float) -> float:
    if max_value <= 0:
        return header_height
    if min_value > 0:
        return header_height + item_height
    # max > 0 >= min here, so the range is positive.
    return header_height + (max_value / (max_value - min_value)) * item_height


def calculate_points(
    values: np.ndarray,
    *,
    min_value: float,
    max_value: float,
    margin: float,
    item_width: float,
    item_height: float,
    header_height: float,
) -> tuple[np.ndarray, np.ndarray]:
    values = np.asarray(values, dtype=np.float64)
    index = np.arange(values.size, dtype=np.float64)
    xs = margin + item_width / 2.0 + index * (item_width + margin)
    value_range = max_value - min_value
    if value_range == 0:
        ys = np.full(values.size, header_height + item_height / 2.0, dtype=np.float64)
    else:
        ys = header_height + ((max_value - values) / value_range) * item_height
    return xs, ys


def compute_point_layout(
    canvas: Canvas,
    entries: Sequence[Entry],
    width: int,
    height: int,
    *,
    margin: float,
    label_text_size: float,
    min_value: float,
    max_value: float,
) -> PointLayout:
    """Measure labels, then derive the item grid, the zero line and every point center."""

    bounds = measure_value_labels(canvas, entries, label_text_size)
    footer_height = calculate_footer_height(entries, margin, label_text_size)
    header_height = calculate_header_height(bounds, margin)
    item_width, item_height = calculate_item_size(len(entries), width, height, margin, footer_height, header_height)
    origin_y = calculate_y_origin(min_value, max_value, item_height, header_height)
    xs, ys = calculate_points(
        np.asarray([e.value for e in entries], dtype=np.float64),
        min_value=min_value,
        max_value=max_value,
        margin=margin,
        item_width=item_width,
        item_height=item_height,
        header_height=header_height,
    )
    return PointLayout(
        value_label_bounds=bounds,
        footer_height=footer_height,
        header_height=header_height,
        item_width=item_width,
        item_height=item_height,
        origin_y=origin_y,
        xs=xs,
        ys=ys,
    )

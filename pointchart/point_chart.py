from __future__ import annotations

from functools import partial

from pointchart.canvas import Canvas, Path, Rect, TextBounds, saved
from pointchart.chart import Chart
from pointchart.entry import Entry, with_alpha
from pointchart.errors import ChartDataError
from pointchart.frame import FrameContext
from pointchart.labels import format_axis_value, truncate_label
from pointchart.layout import PointLayout, compute_point_layout
from pointchart.style import POINT_MODES, PointMode


DEFAULT_POINT_SIZE = 14.0
DEFAULT_POINT_AREA_ALPHA = 100


class PointChart(Chart):
    """Point chart: one marker per entry, a dropped connector to the zero line and
    a gradient area bar behind it.

    Draw phases run in a fixed order (areas, points, footer, value labels) so
    labels land on top of fills and touch regions match the final point
    positions. Touching a point toggles its selection and clears every other
    selection.
    """

    def __init__(
        self,
        entries: list[Entry] | None = None,
        *,
        point_size: float = DEFAULT_POINT_SIZE,
        point_mode: PointMode = "circle",
        point_area_alpha: int = DEFAULT_POINT_AREA_ALPHA,
        **kwargs,
    ) -> None:
        super().__init__(entries, **kwargs)
        self.point_size = float(point_size)
        self.point_mode: PointMode = point_mode
        self.point_area_alpha = point_area_alpha
        self._last_layout: PointLayout | None = None

    @property
    def last_layout(self) -> PointLayout | None:
        return self._last_layout

    def compute_layout(self, canvas: Canvas, width: int, height: int) -> PointLayout:
        return compute_point_layout(
            canvas,
            self.entries,
            width,
            height,
            margin=self.margin,
            label_text_size=self.label_text_size,
            min_value=self.min_value,
            max_value=self.max_value,
        )

    def draw_content(self, canvas: Canvas, width: int, height: int, frame: FrameContext) -> None:
        self._validate_options()
        layout = self.compute_layout(canvas, width, height)
        self._last_layout = layout

        self.draw_point_areas(canvas, layout)
        self.draw_points(canvas, layout, frame)
        self.draw_footer(canvas, layout, height)
        self.draw_value_labels(canvas, layout)

    def draw_point_areas(self, canvas: Canvas, layout: PointLayout) -> None:
        alpha = self.point_area_alpha
        if alpha <= 0:
            return
        origin = layout.origin_y
        for i, entry in enumerate(self.entries):
            x, y = layout.point(i)
            data_color = with_alpha(entry.color, alpha)
            shader = canvas.create_linear_gradient(
                (0.0, y),
                (0.0, origin),
                (data_color, with_alpha(entry.color, alpha // 3)),
            )
            rect = Rect(
                x=x - self.point_size / 2.0,
                y=min(origin, y),
                width=self.point_size,
                height=max(2.0, abs(origin - y)),
            )
            canvas.draw_rect(rect, data_color, shader=shader)

    def draw_points(self, canvas: Canvas, layout: PointLayout, frame: FrameContext) -> None:
        if self.point_mode == "none":
            return
        style = self.style
        callout = style.callout
        selection = self.selection()
        origin = layout.origin_y
        for i, entry in enumerate(self.entries):
            x, y = layout.point(i)
            if entry.selected:
                canvas.draw_line(x, y, x, origin, style.selected_connector_color)
                self._draw_callout(canvas, entry, x, y, opens_right=(i == 0))
                size = callout.selected_point_size
                canvas.draw_point(x, y, entry.color, size, self.point_mode)
                canvas.draw_point(x, y, callout.halo_color, size - callout.halo_inset, self.point_mode)
            else:
                canvas.draw_line(
                    x,
                    y,
                    x,
                    origin,
                    style.connector_color,
                    dash=style.connector_dash,
                    dash_phase=style.connector_dash_phase,
                )
                canvas.draw_point(x, y, entry.color, self.point_size, self.point_mode)

            frame.register(
                Rect.centered(x, y, style.touch_target_size),
                partial(selection.toggle_entry, entry),
                index=i,
            )

    def draw_footer(self, canvas: Canvas, layout: PointLayout, height: int) -> None:
        style = self.style
        size = self.label_text_size
        last = len(self.entries) - 1
        for i, entry in enumerate(self.entries):
            if not entry.label:
                continue
            x, _ = layout.point(i)
            color = style.selected_label_color if entry.selected else entry.text_color
            text = truncate_label(
                entry.label,
                layout.item_width,
                lambda t: canvas.measure_text(t, size=size).width,
            )
            if style.boundary_marker and i in (0, last):
                marker_y = height - self.margin - size - style.boundary_marker_gap
                canvas.draw_text(style.boundary_marker, x, marker_y, color=color, size=size, align="center")
            canvas.draw_text(text, x, height - self.margin, color=color, size=size, align="center")

        self._draw_axis_labels(canvas, layout, height)

    def draw_value_labels(self, canvas: Canvas, layout: PointLayout) -> None:
        rotation = self.style.value_label_rotation_deg
        for i, entry in enumerate(self.entries):
            if not entry.value_label:
                continue
            x, _ = layout.point(i)
            bounds = canvas.measure_text(entry.value_label, size=self.label_text_size, bold=True)
            with saved(canvas):
                canvas.rotate(rotation)
                canvas.translate(*_value_label_translation(rotation, x, bounds, self.margin))
                canvas.draw_text(
                    entry.value_label,
                    0.0,
                    0.0,
                    color=entry.color,
                    size=self.label_text_size,
                    bold=True,
                )

    def _draw_axis_labels(self, canvas: Canvas, layout: PointLayout, height: int) -> None:
        style = self.style
        x = self.margin + style.axis_label_offset
        low = format_axis_value(0)
        high = format_axis_value(max(e.value for e in self.entries))
        baseline_low = height - self.margin - layout.footer_height
        canvas.draw_text(low, x, baseline_low, color=style.axis_label_color, size=self.label_text_size, align="right")
        canvas.draw_text(high, x, layout.header_height, color=style.axis_label_color, size=self.label_text_size, align="right")

    def _draw_callout(self, canvas: Canvas, entry: Entry, x: float, y: float, *, opens_right: bool) -> None:
        c = self.style.callout
        direction = 1.0 if opens_right else -1.0
        box = Rect.from_ltrb(x + direction * c.width, y - c.top_offset, x, y - c.bottom_offset)
        canvas.draw_round_rect(box, c.corner_radius, c.corner_radius, c.fill_color)

        pointer = (
            Path()
            .move_to(x, y - c.pointer_offset)
            .r_line_to(0.0, -c.pointer_height)
            .r_line_to(direction * c.pointer_width, 0.0)
            .line_to(x, y - c.pointer_offset)
            .close()
        )
        canvas.draw_path(pointer, c.fill_color)

        amount = entry.annotation_label if entry.annotation_label is not None else c.placeholder_amount
        heading = entry.annotation_heading_label if entry.annotation_heading_label is not None else c.placeholder_heading
        text_x = x + direction * c.width / 2.0
        canvas.draw_text(amount, text_x, y - c.amount_baseline_offset, color=c.amount_color, size=c.amount_text_size, align="center")
        canvas.draw_text(heading, text_x, y - c.heading_baseline_offset, color=c.heading_color, size=c.heading_text_size, align="center")

    def _validate_options(self) -> None:
        if self.point_mode not in POINT_MODES:
            raise ChartDataError(f"unsupported point mode: {self.point_mode}")
        alpha = self.point_area_alpha
        if isinstance(alpha, bool) or not isinstance(alpha, int) or not 0 <= alpha <= 255:
            raise ChartDataError(f"point_area_alpha must be an integer in 0..255, got {alpha!r}")


def _value_label_translation(rotation: int, x: float, bounds: TextBounds, margin: float) -> tuple[float, float]:
    """Translation, in rotated space, that puts the label's ink top edge at `margin`
    and centers it horizontally on `x`.
    """

    mid_u = (bounds.left + bounds.right) / 2.0
    mid_v = (bounds.top + bounds.bottom) / 2.0
    turns = (rotation // 90) % 4
    if turns == 0:
        return x - mid_u, margin - bounds.top
    if turns == 1:
        # Clockwise: reads top to bottom.
        return margin - bounds.left, -x - mid_v
    if turns == 2:
        return -x - mid_u, -(margin + bounds.bottom)
    # Counter-clockwise: reads bottom to top.
    return -(margin + bounds.right), x - mid_v

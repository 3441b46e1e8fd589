from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Literal, Mapping

from pointchart.entry import RGBA


PointMode = Literal["none", "circle", "square"]
POINT_MODES: tuple[str, ...] = ("none", "circle", "square")


@dataclass(frozen=True)
class CalloutStyle:
    """Geometry and text of the annotation drawn above a selected point.

    Offsets are measured from the point center; the box spans
    `top_offset..bottom_offset` above the point and `width` to one side.
    """

    fill_color: RGBA = (255, 255, 255, 255)
    width: float = 90.0
    top_offset: float = 70.0
    bottom_offset: float = 20.0
    corner_radius: float = 5.0
    pointer_offset: float = 15.0
    pointer_height: float = 10.0
    pointer_width: float = 20.0
    amount_text_size: float = 20.0
    amount_baseline_offset: float = 30.0
    amount_color: RGBA = (0, 0, 0, 255)
    heading_text_size: float = 11.0
    heading_baseline_offset: float = 55.0
    heading_color: RGBA = (61, 61, 61, 255)
    placeholder_amount: str = "$790"
    placeholder_heading: str = "3/14 - 7/14"
    selected_point_size: float = 20.0
    halo_inset: float = 12.0
    halo_color: RGBA = (0, 0, 0, 255)


@dataclass(frozen=True)
class ChartStyle:
    background_color: RGBA = (255, 255, 255, 255)
    selected_label_color: RGBA = (255, 255, 255, 255)
    axis_label_color: RGBA = (255, 255, 255, 255)
    axis_label_offset: float = 30.0
    # Drawn above the first and last footer labels when set.
    boundary_marker: str | None = None
    boundary_marker_gap: float = 5.0
    connector_color: RGBA = (255, 255, 255, 127)
    connector_dash: tuple[float, float] = (10.0, 2.0)
    connector_dash_phase: float = 20.0
    selected_connector_color: RGBA = (255, 255, 255, 255)
    touch_target_size: float = 40.0
    value_label_rotation_deg: int = -90
    callout: CalloutStyle = field(default_factory=CalloutStyle)


DEFAULT_STYLE = ChartStyle()

_CHART_COLOR_KEYS = (
    "background_color",
    "selected_label_color",
    "axis_label_color",
    "connector_color",
    "selected_connector_color",
)
_CHART_POSITIVE_KEYS = ("touch_target_size",)
_CHART_NON_NEGATIVE_KEYS = ("axis_label_offset", "boundary_marker_gap", "connector_dash_phase")
_CALLOUT_COLOR_KEYS = ("fill_color", "amount_color", "heading_color", "halo_color")
_CALLOUT_TEXT_KEYS = ("placeholder_amount", "placeholder_heading")


def validate_chart_style(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Merge `overrides` into the default chart style.

    A nested `callout` mapping is merged into the default `CalloutStyle`.
    Unknown keys and malformed values raise `ValueError`.
    """

    raw: dict[str, Any] = {f.name: getattr(DEFAULT_STYLE, f.name) for f in fields(ChartStyle)}
    callout_raw: dict[str, Any] = asdict(DEFAULT_STYLE.callout)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown chart style key: {key}")
            if key == "callout":
                if isinstance(value, CalloutStyle):
                    callout_raw = asdict(value)
                    continue
                if not isinstance(value, Mapping):
                    raise ValueError("Style `callout` must be a mapping or CalloutStyle")
                for ckey, cvalue in value.items():
                    if ckey not in callout_raw:
                        raise ValueError(f"Unknown callout style key: {ckey}")
                    callout_raw[ckey] = cvalue
                continue
            raw[key] = value

    for key in _CHART_COLOR_KEYS:
        raw[key] = _coerce_rgba(key, raw[key])
    for key in _CHART_POSITIVE_KEYS:
        raw[key] = _coerce_number(key, raw[key], allow_zero=False)
    for key in _CHART_NON_NEGATIVE_KEYS:
        raw[key] = _coerce_number(key, raw[key], allow_zero=True)

    marker = raw["boundary_marker"]
    if marker is not None and not isinstance(marker, str):
        raise ValueError("Style `boundary_marker` must be a string or None")

    dash = raw["connector_dash"]
    if not isinstance(dash, (list, tuple)) or len(dash) != 2:
        raise ValueError("Style `connector_dash` must be an (on, off) pair")
    on = _coerce_number("connector_dash", dash[0], allow_zero=False)
    off = _coerce_number("connector_dash", dash[1], allow_zero=True)
    raw["connector_dash"] = (on, off)

    rotation = raw["value_label_rotation_deg"]
    if not isinstance(rotation, int) or isinstance(rotation, bool) or rotation % 90 != 0:
        raise ValueError("Style `value_label_rotation_deg` must be a multiple of 90")

    for key in _CALLOUT_COLOR_KEYS:
        callout_raw[key] = _coerce_rgba(f"callout.{key}", callout_raw[key])
    for key in _CALLOUT_TEXT_KEYS:
        if not isinstance(callout_raw[key], str):
            raise ValueError(f"Style `callout.{key}` must be a string")
    for key, value in list(callout_raw.items()):
        if key in _CALLOUT_COLOR_KEYS or key in _CALLOUT_TEXT_KEYS:
            continue
        allow_zero = key in ("corner_radius", "halo_inset")
        callout_raw[key] = _coerce_number(f"callout.{key}", value, allow_zero=allow_zero)
    if callout_raw["halo_inset"] >= callout_raw["selected_point_size"]:
        raise ValueError("Style `callout.halo_inset` must be smaller than `callout.selected_point_size`")

    raw["callout"] = CalloutStyle(**callout_raw)
    return ChartStyle(**raw)


def _coerce_rgba(key: str, value: Any) -> RGBA:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise ValueError(f"Style `{key}` must be an RGB or RGBA tuple")
    channels = list(value) if len(value) == 4 else list(value) + [255]
    out: list[int] = []
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ValueError(f"Style `{key}` channels must be integers in 0..255")
        out.append(channel)
    return (out[0], out[1], out[2], out[3])


def _coerce_number(key: str, value: Any, *, allow_zero: bool) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Style `{key}` must be a number")
    number = float(value)
    if number < 0 or (number == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise ValueError(f"Style `{key}` must be {bound}")
    return number

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from PIL import Image

from pointchart.entry import Entry
from pointchart.errors import ChartDataError
from pointchart.point_chart import PointChart
from pointchart.style import POINT_MODES, validate_chart_style
from pointchart.view import ChartView


LOGGER = logging.getLogger(__name__)

SAMPLE_VALUES = (10.0, 14.0, 16.0, 25.0, 10.0, 15.0, 2.0, 19.0)
SERIES_COLOR = (62, 149, 255, 255)
LABEL_COLOR = (255, 255, 255, 127)
DARK_BACKGROUND = (12, 16, 23, 255)


def build_sample_entries(values: Sequence[float], labels: Sequence[str] | None = None) -> list[Entry]:
    entries = []
    for i, value in enumerate(values):
        label = labels[i] if labels is not None and i < len(labels) else str(i + 1)
        entries.append(
            Entry(
                value=value,
                label=label,
                value_label=f"{value:g}",
                color=SERIES_COLOR,
                text_color=LABEL_COLOR,
            )
        )
    return entries


def _parse_floats(raw: str) -> list[float]:
    try:
        return [float(part) for part in raw.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got {raw!r}") from exc


def _parse_point(raw: str) -> tuple[float, float]:
    values = _parse_floats(raw)
    if len(values) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {raw!r}")
    return values[0], values[1]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pointchart")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a point chart to a PNG file.")
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--values", type=_parse_floats, default=list(SAMPLE_VALUES))
    render.add_argument("--labels", type=lambda raw: raw.split(","), default=None)
    render.add_argument("--width", type=int, default=800)
    render.add_argument("--height", type=int, default=400)
    render.add_argument("--margin", type=float, default=20.0)
    render.add_argument("--label-text-size", type=float, default=16.0)
    render.add_argument("--point-size", type=float, default=14.0)
    render.add_argument("--point-mode", choices=POINT_MODES, default="circle")
    render.add_argument("--area-alpha", type=int, default=100)
    render.add_argument("--boundary-marker", default=None, help="Text drawn above the first and last labels.")
    render.add_argument("--select", type=int, default=None, help="Index of the entry to select.")
    render.add_argument(
        "--touch",
        type=_parse_point,
        action="append",
        default=[],
        help="Simulate a release at X,Y after the first draw; repeatable.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        try:
            return _render(args)
        except (ChartDataError, IndexError) as exc:
            parser.error(str(exc))
    return 2


def _render(args: argparse.Namespace) -> int:
    entries = build_sample_entries(args.values, args.labels)
    style = validate_chart_style(
        {"background_color": DARK_BACKGROUND, "boundary_marker": args.boundary_marker}
    )
    chart = PointChart(
        entries,
        margin=args.margin,
        label_text_size=args.label_text_size,
        point_size=args.point_size,
        point_mode=args.point_mode,
        point_area_alpha=args.area_alpha,
        style=style,
    )
    if args.select is not None:
        chart.selection().apply_selection(args.select)

    view = ChartView(chart, args.width, args.height)
    view.render()
    for x, y in args.touch:
        hit = view.handle_pointer_event("pointer_up", {"x": x, "y": y})
        LOGGER.info("touch at (%.1f, %.1f): %s", x, y, "hit" if hit else "miss")
    frame = view.render()

    args.out.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(frame).save(args.out)
    LOGGER.info("wrote %s (%dx%d)", args.out, args.width, args.height)
    print(args.out)
    return 0

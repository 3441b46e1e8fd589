from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from pointchart.cli import build_parser, build_sample_entries, main


class CliTests(unittest.TestCase):
    def test_sample_entries_use_labels_when_given(self) -> None:
        entries = build_sample_entries([1.0, 2.5], ["Jan"])
        self.assertEqual([e.label for e in entries], ["Jan", "2"])
        self.assertEqual([e.value_label for e in entries], ["1", "2.5"])

    def test_parser_reads_touch_points(self) -> None:
        args = build_parser().parse_args(["render", "--out", "x.png", "--touch", "10,20", "--touch", "3,4"])
        self.assertEqual(args.touch, [(10.0, 20.0), (3.0, 4.0)])
        self.assertEqual(args.values[3], 25.0)

    def test_render_writes_png_of_requested_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "chart.png"
            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                code = main(["render", "--out", str(out), "--width", "320", "--height", "200", "--select", "3"])
            self.assertEqual(code, 0)
            self.assertEqual(buf.getvalue().strip(), str(out))
            with Image.open(out) as image:
                self.assertEqual(image.size, (320, 200))
                self.assertEqual(image.mode, "RGBA")

    def test_bad_selection_exits_with_usage_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "chart.png"
            with contextlib.redirect_stderr(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    main(["render", "--out", str(out), "--select", "42"])
            self.assertEqual(ctx.exception.code, 2)
            self.assertFalse(out.exists())


if __name__ == "__main__":
    unittest.main()

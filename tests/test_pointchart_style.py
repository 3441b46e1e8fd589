from __future__ import annotations

import unittest

from pointchart.entry import Entry, with_alpha
from pointchart.style import DEFAULT_STYLE, CalloutStyle, ChartStyle, validate_chart_style


class ChartStyleTests(unittest.TestCase):
    def test_defaults_round_trip_without_overrides(self) -> None:
        self.assertEqual(validate_chart_style(), DEFAULT_STYLE)
        self.assertEqual(validate_chart_style({}), ChartStyle())

    def test_overrides_merge_into_defaults(self) -> None:
        style = validate_chart_style(
            {
                "background_color": (12, 16, 23),
                "boundary_marker": "Apr",
                "connector_dash": [4, 4],
                "callout": {"placeholder_amount": "--", "width": 120},
            }
        )
        self.assertEqual(style.background_color, (12, 16, 23, 255))
        self.assertEqual(style.boundary_marker, "Apr")
        self.assertEqual(style.connector_dash, (4.0, 4.0))
        self.assertEqual(style.callout.placeholder_amount, "--")
        self.assertEqual(style.callout.width, 120.0)
        self.assertEqual(style.callout.heading_color, CalloutStyle().heading_color)

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            validate_chart_style({"font": "Arial"})
        with self.assertRaises(ValueError):
            validate_chart_style({"callout": {"radius": 3}})

    def test_malformed_values_are_rejected(self) -> None:
        for overrides in (
            {"axis_label_color": (300, 0, 0, 255)},
            {"axis_label_color": "#ffffff"},
            {"touch_target_size": 0},
            {"connector_dash": (0, 2)},
            {"value_label_rotation_deg": 45},
            {"boundary_marker": 7},
            {"callout": {"halo_inset": 25}},
            {"callout": "big"},
        ):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    validate_chart_style(overrides)


class EntryTests(unittest.TestCase):
    def test_entries_compare_by_identity(self) -> None:
        a = Entry(value=1)
        b = Entry(value=1)
        self.assertNotEqual(a, b)
        self.assertEqual(a, a)
        self.assertFalse(a.selected)

    def test_value_is_coerced_to_float(self) -> None:
        self.assertIsInstance(Entry(value=3).value, float)

    def test_with_alpha_clamps(self) -> None:
        self.assertEqual(with_alpha((1, 2, 3, 255), 300), (1, 2, 3, 255))
        self.assertEqual(with_alpha((1, 2, 3, 255), 33), (1, 2, 3, 33))


if __name__ == "__main__":
    unittest.main()

"""
Series Builder Tests
====================

Verifies that raw thrust-test rows are cleaned and ordered correctly:
- Rows with non-numeric or non-finite current/thrust are dropped
- Output is sorted by current regardless of input order
- Spec-sheet and DataFrame inputs are both accepted
"""

import itertools
import math
import sys
from pathlib import Path
import unittest

import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.hover_analyzer import SeriesPoint, build_series
from src.hover_analyzer.series import sort_by_thrust, thrust_range


ROWS = [
    {"current": 10.0, "thrust": 2.0, "throttle": 60},
    {"current": 5.0, "thrust": 1.0, "throttle": 40},
    {"current": 15.0, "thrust": 3.0, "throttle": 80},
    {"current": 7.5, "thrust": 1.5, "throttle": 50},
]


class TestBuildSeries(unittest.TestCase):
    """Test cleaning and ordering of raw rows."""

    def test_empty_and_none_input(self):
        self.assertEqual(build_series(None), [])
        self.assertEqual(build_series([]), [])

    def test_maps_fields(self):
        series = build_series([{"current": 4.0, "thrust": 0.8, "throttle": 35}])
        self.assertEqual(series, [SeriesPoint(x=4.0, y=0.8, throttle=35.0)])

    def test_sorted_for_every_permutation(self):
        """Output is non-decreasing in current for any input order."""
        expected = build_series(ROWS)
        for perm in itertools.permutations(ROWS):
            series = build_series(list(perm))
            currents = [p.x for p in series]
            self.assertEqual(currents, sorted(currents))
            self.assertEqual(series, expected)

    def test_nan_thrust_is_dropped(self):
        rows = ROWS + [{"current": 12.0, "thrust": float("nan"), "throttle": 70}]
        series = build_series(rows)
        self.assertEqual(len(series), len(ROWS))
        for p in series:
            self.assertTrue(math.isfinite(p.x))
            self.assertTrue(math.isfinite(p.y))

    def test_non_numeric_rows_are_dropped(self):
        rows = [
            {"current": "10", "thrust": 2.0},
            {"current": None, "thrust": 2.0},
            {"current": 3.0, "thrust": float("inf")},
            {"current": True, "thrust": 1.0},
            {"thrust": 1.0},
            {"current": 3.0, "thrust": 0.5},
        ]
        series = build_series(rows)
        self.assertEqual(series, [SeriesPoint(3.0, 0.5, None)])

    def test_thrust_kg_field_name(self):
        """Spec sheets store thrust as thrust_kg."""
        series = build_series([{"current": 4.1, "thrust_kg": 2.0, "throttle": 40}])
        self.assertEqual(series[0].y, 2.0)

    def test_null_thrust_falls_back_to_thrust_kg(self):
        series = build_series([
            {"current": 4.1, "thrust": None, "thrust_kg": 1.2},
            {"current": 6.0, "thrust": float("nan"), "thrust_kg": 1.6},
        ])
        self.assertEqual([p.y for p in series], [1.2, 1.6])

    def test_thrust_preferred_over_thrust_kg(self):
        series = build_series([{"current": 4.1, "thrust": 1.0, "thrust_kg": 1.2}])
        self.assertEqual(series[0].y, 1.0)

    def test_missing_throttle_is_none(self):
        series = build_series([
            {"current": 1.0, "thrust": 0.2},
            {"current": 2.0, "thrust": 0.4, "throttle": float("nan")},
        ])
        self.assertIsNone(series[0].throttle)
        self.assertIsNone(series[1].throttle)
        self.assertEqual(series[0].throttle_or_zero, 0.0)

    def test_dataframe_input(self):
        df = pd.DataFrame({
            "current": [10.0, 5.0, None],
            "thrust": [2.0, 1.0, 3.0],
            "throttle": [60.0, None, 80.0],
        })
        series = build_series(df)
        self.assertEqual([p.x for p in series], [5.0, 10.0])
        self.assertIsNone(series[0].throttle)
        self.assertEqual(series[1].throttle, 60.0)

    def test_input_not_mutated(self):
        rows = [dict(r) for r in ROWS]
        build_series(rows)
        self.assertEqual(rows, ROWS)


class TestSeriesHelpers(unittest.TestCase):
    """Test thrust ordering helpers."""

    def test_sort_by_thrust(self):
        series = [SeriesPoint(10, 1.0), SeriesPoint(8, 2.0), SeriesPoint(9, 0.5)]
        self.assertEqual([p.y for p in sort_by_thrust(series)], [0.5, 1.0, 2.0])

    def test_thrust_range(self):
        self.assertIsNone(thrust_range([]))
        self.assertEqual(thrust_range(build_series(ROWS)), (1.0, 3.0))


if __name__ == "__main__":
    unittest.main()

"""
Plotting and Launcher Tests
===========================

Renders the hover charts off-screen and runs the command-line launcher
against a temporary spec sheet.
"""

import io
import json
import sys
import tempfile
from contextlib import redirect_stdout
from pathlib import Path
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.hover_analyzer import (
    HoverPlotter,
    LimitMode,
    SeriesPoint,
    build_flight_curve,
    current_limits,
)
import run_hover_analyzer


SERIES = [
    SeriesPoint(5.0, 1.0, 40),
    SeriesPoint(10.0, 2.0, 60),
    SeriesPoint(15.0, 3.0, 80),
]


class TestHoverPlotter(unittest.TestCase):
    """Test chart generation."""

    def setUp(self):
        self.plotter = HoverPlotter()

    def tearDown(self):
        plt.close("all")

    def test_thrust_current_per_motor(self):
        limits = current_limits(100.0, 4, LimitMode.PER_MOTOR)
        fig = self.plotter.plot_thrust_current({"A": SERIES, "B": []}, 4, limits)
        ax = fig.axes[0]
        self.assertEqual(len(ax.get_lines()), 1)
        self.assertEqual(ax.get_xlabel(), "Current per Motor (A)")
        self.assertEqual(ax.get_ylabel(), "Lift (kg) • Per motor")
        self.assertAlmostEqual(ax.get_xlim()[1], 27.5)

    def test_thrust_current_total(self):
        limits = current_limits(100.0, 4, LimitMode.TOTAL)
        fig = self.plotter.plot_thrust_current({"A": SERIES}, 4, limits)
        ax = fig.axes[0]
        line = ax.get_lines()[0]
        self.assertEqual(list(line.get_xdata()), [20.0, 40.0, 60.0])
        self.assertEqual(list(line.get_ydata()), [4.0, 8.0, 12.0])
        self.assertEqual(ax.get_xlabel(), "Total Current (A)")

    def test_thrust_current_without_limits(self):
        fig = self.plotter.plot_thrust_current({"A": SERIES}, 4)
        self.assertEqual(fig.axes[0].get_xlabel(), "Current per Motor (A)")

    def test_flight_time(self):
        curve = build_flight_curve(SERIES, 4, 20.0, 80.0)
        fig = self.plotter.plot_flight_time({"A": curve}, takeoff_weight_kg=6.0)
        ax = fig.axes[0]
        # measured, estimated, takeoff marker
        self.assertEqual(len(ax.get_lines()), 3)
        self.assertEqual(ax.get_ylim(), (0.0, 120.0))

        measured, estimated = ax.get_lines()[0], ax.get_lines()[1]
        self.assertEqual(estimated.get_linestyle(), "--")
        self.assertAlmostEqual(estimated.get_xdata()[-1], measured.get_xdata()[0])

    def test_flight_time_empty(self):
        fig = self.plotter.plot_flight_time({"A": []})
        self.assertEqual(len(fig.axes[0].get_lines()), 0)

    def test_existing_axes(self):
        fig, ax = plt.subplots()
        returned = self.plotter.plot_flight_time({"A": build_flight_curve(SERIES, 4, 20.0, 80.0)}, ax=ax)
        self.assertIs(returned, fig)


class TestLauncher(unittest.TestCase):
    """Test the run_hover_analyzer command line."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.spec_path = self.root / "x8.json"
        self.spec_path.write_text(json.dumps({
            "id": "x8",
            "name": "T-Motor X8",
            "props": [{
                "id": "2880",
                "name": "28x8.0",
                "data": {"12S": [
                    {"current": 5.0, "thrust_kg": 1.0, "throttle": 40},
                    {"current": 10.0, "thrust_kg": 2.0, "throttle": 60},
                    {"current": 15.0, "thrust_kg": 3.0, "throttle": 80},
                ]},
            }],
        }), encoding="utf-8")

    def tearDown(self):
        plt.close("all")
        self._tmp.cleanup()

    def run_main(self, *args):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = run_hover_analyzer.main([str(self.spec_path), *args])
        return code, buffer.getvalue()

    def test_report(self):
        code, output = self.run_main("--prop", "2880", "--takeoff", "6")
        self.assertEqual(code, 0)
        self.assertIn("Hover current per motor: 7.50 A", output)
        self.assertIn("Max thrust (drone): 12.00 kg", output)
        self.assertIn("Current limit: ok", output)

    def test_unknown_prop(self):
        code, output = self.run_main("--prop", "9999")
        self.assertEqual(code, 1)
        self.assertIn("2880", output)

    def test_missing_spec(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = run_hover_analyzer.main([str(self.root / "missing.json"), "--prop", "2880"])
        self.assertEqual(code, 1)

    def test_saves_charts(self):
        out_dir = self.root / "charts"
        code, _ = self.run_main("--prop", "2880", "--output-dir", str(out_dir))
        self.assertEqual(code, 0)
        self.assertTrue((out_dir / "lift_current.png").exists())
        self.assertTrue((out_dir / "flight_time.png").exists())

    def test_negative_sample_count(self):
        out_dir = self.root / "charts"
        code, output = self.run_main(
            "--prop", "2880", "--samples", "-1", "--output-dir", str(out_dir)
        )
        self.assertEqual(code, 1)
        self.assertIn("[ERROR] Sample count cannot be negative", output)
        self.assertFalse(out_dir.exists())


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Hover Analyzer Launcher
=======================

Prints the hover report of one motor/prop/voltage selection from a motor
spec sheet and optionally saves the lift-current and flight-time charts.

Usage:
------
    # From the project root directory:
    python run_hover_analyzer.py motors/x8.json --prop 2880 --voltage 12S \
        --takeoff 10 --motors 4 --capacity 20 --usable 80 --battery-max 100

    # Save charts as PNG files
    python run_hover_analyzer.py motors/x8.json --prop 2880 --output-dir charts/

Requirements:
------------
- Python 3.9+
- numpy
- pandas
- scipy
- matplotlib
"""

import argparse
import sys
from pathlib import Path

# -------------------------------------------------------------------------
# Path Configuration
# -------------------------------------------------------------------------

project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate multirotor hover current and flight time from thrust-test data."
    )
    parser.add_argument("spec", type=Path, help="Motor spec sheet (JSON)")
    parser.add_argument("--prop", required=True, help="Propeller id in the spec sheet")
    parser.add_argument("--voltage", default="12S", help="Battery voltage label (default: 12S)")
    parser.add_argument("--takeoff", type=float, default=10.0, help="Takeoff weight in kg")
    parser.add_argument("--motors", type=int, default=4, help="Number of motors")
    parser.add_argument("--capacity", type=float, default=20.0, help="Battery capacity in Ah")
    parser.add_argument("--usable", type=float, default=80.0, help="Usable capacity in percent")
    parser.add_argument("--battery-max", type=float, default=100.0,
                        help="Battery max continuous current in A")
    parser.add_argument("--limit-mode", choices=["perMotor", "total"], default="perMotor",
                        help="Compare currents per motor or for the whole drone")
    parser.add_argument("--samples", type=int, default=60, help="Flight-curve sample count")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Directory to save PNG charts into")
    return parser


# -------------------------------------------------------------------------
# Main Entry Point
# -------------------------------------------------------------------------

def main(argv=None) -> int:
    """
    Run the hover analysis for one selection.

    Returns:
    -------
    int
        0 on success, 1 when the spec sheet or propeller cannot be used.
    """
    args = build_parser().parse_args(argv)

    from src.hover_analyzer import (
        LimitMode,
        build_flight_curve,
        build_series,
        current_limits,
        estimate_hover,
        load_motor_spec,
        max_lift_within_current,
        series_totals,
    )

    print("=" * 60)
    print("  Drone Hover Analyzer")
    print("=" * 60)

    try:
        spec = load_motor_spec(args.spec)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n[ERROR] Could not load motor spec: {e}")
        return 1

    prop = spec.get_prop(args.prop)
    if prop is None:
        available = ", ".join(p.id for p in spec.props_for_voltage(args.voltage)) or "none"
        print(f"\n[ERROR] Prop '{args.prop}' not found in {spec.name}")
        print(f"  Props with {args.voltage} data: {available}")
        return 1

    series = build_series(spec.samples(prop.id, args.voltage))
    mode = LimitMode(args.limit_mode)

    try:
        hover = estimate_hover(series, args.takeoff, args.motors, args.capacity, args.usable)
        limits = current_limits(args.battery_max, args.motors, mode)
        curve = build_flight_curve(series, args.motors, args.capacity, args.usable, args.samples)
    except ValueError as e:
        print(f"\n[ERROR] {e}")
        return 1

    print(f"Motor: {spec.name} • {prop.name} @ {args.voltage}")
    print(f"Takeoff weight: {args.takeoff:g} kg on {args.motors} motors "
          f"({hover.lift_per_motor:.3f} kg per motor)")
    print(f"Battery: {args.capacity:g} Ah × {args.usable:g}% usable")
    print("-" * 60)
    print(hover.describe())

    totals = series_totals(series, args.motors)
    if totals is not None:
        print("-" * 60)
        print(f"Max thrust (drone): {totals.max_thrust_kg:.2f} kg")
        print(f"Peak current (drone): {totals.peak_current_a:.1f} A")

    if hover.ok:
        compared = hover.total_current_a if mode == LimitMode.TOTAL else hover.current_per_motor_a
        print(f"Current limit: {limits.classify(compared).value} "
              f"(warn ≥ {limits.warn_current_a:.0f} A, max = {limits.max_current_a:.0f} A)")

    per_motor_limit = limits.max_current_a if mode == LimitMode.PER_MOTOR \
        else limits.max_current_a / args.motors
    lift_limit = max_lift_within_current(series, per_motor_limit)
    if lift_limit is not None:
        print(f"Max takeoff weight within current limit: {lift_limit * args.motors:.2f} kg")

    if args.output_dir is not None:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from src.hover_analyzer import HoverPlotter

        label = f"{spec.name} • {prop.name}"
        plotter = HoverPlotter()

        args.output_dir.mkdir(parents=True, exist_ok=True)
        fig = plotter.plot_thrust_current({label: series}, args.motors, limits)
        fig.savefig(args.output_dir / "lift_current.png", dpi=150)
        plt.close(fig)
        fig = plotter.plot_flight_time({label: curve}, args.takeoff)
        fig.savefig(args.output_dir / "flight_time.png", dpi=150)
        plt.close(fig)
        print(f"Charts saved to {args.output_dir}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

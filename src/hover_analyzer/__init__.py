"""
Hover Analyzer Module
=====================

Estimates the hover current and flight time of a multirotor from sparse
motor thrust-test data (current, thrust, throttle per propeller/voltage).

Pipeline:
---------
1. build_series()        raw rows -> series sorted by current
2. interpolate_lift()    lift per motor -> current/throttle (measured or estimated)
3. build_flight_curve()  lift sweep -> takeoff weight vs flight time
4. split_curve()         flight curve -> measured/estimated segments

Every step is a pure function; nothing is cached between calls.

Example Usage:
-------------
    from src.hover_analyzer import build_series, interpolate_lift, build_flight_curve

    series = build_series(rows)
    result = interpolate_lift(series, 2.5)
    if result.ok:
        print(f"Hover current: {result.current_a:.2f} A"
              f"{' (estimated)' if result.below_measured_range else ''}")

    curve = build_flight_curve(series, unit_count=4,
                               battery_capacity_ah=20.0, usable_percent=80.0)

Units Convention:
----------------
- Current: A
- Lift/thrust: kg
- Throttle: %
- Capacity: Ah
- Flight time: min
"""

from .config import HoverAnalyzerConfig, DEFAULT_CONFIG
from .series import SeriesPoint, build_series
from .interpolator import (
    InterpolationError,
    InterpolationResult,
    EXTRAPOLATION_STRATEGIES,
    interpolate_lift,
)
from .flight_curve import (
    FlightCurvePoint,
    PartitionedCurve,
    build_flight_curve,
    endurance_minutes,
    split_curve,
)
from .hover import HoverEstimate, SeriesTotals, estimate_hover, series_totals
from .limits import (
    CurrentLimits,
    LimitMode,
    LimitStatus,
    current_limits,
    max_lift_within_current,
    scale_series,
)
from .catalog import (
    CatalogEntry,
    MotorSpec,
    PropSpec,
    load_catalog,
    load_motor_spec,
    samples_dataframe,
)
from .plotting import HoverPlotter

__all__ = [
    # Config
    "HoverAnalyzerConfig",
    "DEFAULT_CONFIG",
    # Core pipeline
    "SeriesPoint",
    "build_series",
    "InterpolationError",
    "InterpolationResult",
    "EXTRAPOLATION_STRATEGIES",
    "interpolate_lift",
    "FlightCurvePoint",
    "PartitionedCurve",
    "build_flight_curve",
    "endurance_minutes",
    "split_curve",
    # Hover queries
    "HoverEstimate",
    "SeriesTotals",
    "estimate_hover",
    "series_totals",
    # Limits
    "CurrentLimits",
    "LimitMode",
    "LimitStatus",
    "current_limits",
    "max_lift_within_current",
    "scale_series",
    # Catalog
    "CatalogEntry",
    "MotorSpec",
    "PropSpec",
    "load_catalog",
    "load_motor_spec",
    "samples_dataframe",
    # Plotting
    "HoverPlotter",
]

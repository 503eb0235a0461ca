"""
Flight Curve Module
===================

Projects a measured lift->current series into a takeoff-weight ->
flight-time curve for a multirotor.

For each swept per-motor lift L:
    I_total = max(I(L), floor) × motor_count
    t       = min(usable_Ah / I_total × 60, 120)   [min]
    usable_Ah = capacity_Ah × usable% / 100

The sweep starts 30% below the lowest measured lift so the extrapolated
(estimated) part of the curve is visible, and stops just inside the
highest measured lift. A point exactly at the lowest measured lift is
always present so the measured and estimated segments share an endpoint.

Classes:
--------
- FlightCurvePoint: One (weight, time) sample with provenance
- PartitionedCurve: Measured and estimated segments of one curve

Usage:
------
    from src.hover_analyzer import build_flight_curve, split_curve

    curve = build_flight_curve(series, unit_count=4,
                               battery_capacity_ah=20, usable_percent=80)
    parts = split_curve(curve)
    parts.measured[0].total_weight == parts.estimated[-1].total_weight
"""

import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .config import HoverAnalyzerConfig, DEFAULT_CONFIG
from .interpolator import interpolate_lift
from .series import SeriesPoint, thrust_range


@dataclass(frozen=True)
class FlightCurvePoint:
    """
    One sample of the weight vs flight-time curve.

    Attributes:
    ----------
    lift_per_unit : float
        Lift per motor (kg)

    total_weight : float
        Takeoff weight the whole aircraft can hover (kg) = lift × motors

    minutes : float
        Estimated flight time (min), 0-120

    estimated : bool
        True when the point relies on extrapolated data
    """
    lift_per_unit: float
    total_weight: float
    minutes: float
    estimated: bool = False


@dataclass
class PartitionedCurve:
    """Measured and estimated segments of a flight curve, stitched at the boundary."""
    measured: List[FlightCurvePoint] = field(default_factory=list)
    estimated: List[FlightCurvePoint] = field(default_factory=list)


def endurance_minutes(
    total_current_a: float,
    capacity_ah: float,
    usable_percent: float,
    config: Optional[HoverAnalyzerConfig] = None
) -> float:
    """
    Convert a total current draw into flight time.

    Parameters:
    ----------
    total_current_a : float
        Current drawn by all motors together (A).

    capacity_ah : float
        Nominal battery capacity (Ah).

    usable_percent : float
        Share of the capacity that may be discharged (%).

    Returns:
    -------
    float
        Flight time in minutes, capped at config.max_flight_minutes.
        Zero when the current is not positive.
    """
    config = config if config is not None else DEFAULT_CONFIG

    if total_current_a <= 0:
        return 0.0

    usable_ah = capacity_ah * (usable_percent / 100.0)
    return min(usable_ah / total_current_a * 60.0, config.max_flight_minutes)


def validate_battery_inputs(unit_count: int, capacity_ah: float, usable_percent: float):
    if unit_count < 1:
        raise ValueError(f"Motor count must be at least 1, got {unit_count}")
    if capacity_ah < 0:
        raise ValueError(f"Battery capacity cannot be negative, got {capacity_ah} Ah")
    if not 0 <= usable_percent <= 100:
        raise ValueError(f"Usable capacity must be 0-100%, got {usable_percent}")


def build_flight_curve(
    series: Sequence[SeriesPoint],
    unit_count: int,
    battery_capacity_ah: float,
    usable_percent: float,
    sample_count: Optional[int] = None,
    config: Optional[HoverAnalyzerConfig] = None
) -> List[FlightCurvePoint]:
    """
    Sweep per-motor lift and compute flight time at each takeoff weight.

    Parameters:
    ----------
    series : sequence of SeriesPoint
        Measured series for one motor/prop/voltage.

    unit_count : int
        Number of motors.

    battery_capacity_ah : float
        Nominal battery capacity (Ah).

    usable_percent : float
        Usable share of the battery capacity (%).

    sample_count : int, optional
        Number of evenly spaced lift samples (inclusive of both ends).
        Defaults to config.default_sample_count.

    config : HoverAnalyzerConfig, optional
        Engine constants.

    Returns:
    -------
    list of FlightCurvePoint
        Points sorted ascending by total weight. Empty for an empty series.

    Raises:
    ------
    ValueError
        If the motor count, capacity, usable share or sample count is invalid.
    """
    config = config if config is not None else DEFAULT_CONFIG
    if sample_count is None:
        sample_count = config.default_sample_count

    validate_battery_inputs(unit_count, battery_capacity_ah, usable_percent)
    if sample_count < 0:
        raise ValueError(f"Sample count cannot be negative, got {sample_count}")

    bounds = thrust_range(series)
    if bounds is None:
        return []
    min_lift, max_lift = bounds

    start = max(0.0, min_lift * config.sweep_start_factor)
    end = max(start + config.sweep_min_span, max_lift * config.sweep_end_factor)

    def point_at(lift: float, estimated: bool) -> Optional[FlightCurvePoint]:
        result = interpolate_lift(series, lift, config)
        if not result.ok:
            return None
        per_unit_a = max(result.current_a, config.current_floor_a)
        minutes = endurance_minutes(
            per_unit_a * unit_count, battery_capacity_ah, usable_percent, config
        )
        return FlightCurvePoint(
            lift_per_unit=lift,
            total_weight=lift * unit_count,
            minutes=minutes,
            estimated=estimated,
        )

    curve = []
    for lift in np.linspace(start, end, sample_count):
        lift = float(lift)
        point = point_at(lift, lift < min_lift - config.estimated_tolerance)
        if point is not None:
            curve.append(point)

    if min_lift > 0:
        boundary = point_at(min_lift, False)
        if boundary is not None and not any(
            abs(p.total_weight - boundary.total_weight) < config.boundary_tolerance
            for p in curve
        ):
            curve.append(boundary)

    curve.sort(key=lambda p: p.total_weight)
    return curve


def split_curve(
    curve: Sequence[FlightCurvePoint],
    config: Optional[HoverAnalyzerConfig] = None
) -> PartitionedCurve:
    """
    Split a flight curve into measured and estimated segments.

    When both segments exist, the first measured point (the boundary) is
    copied onto the end of the estimated segment, flagged as estimated,
    unless the estimated segment already ends at that weight. Drawn as two
    lines, the segments then meet without a gap.

    Parameters:
    ----------
    curve : sequence of FlightCurvePoint
        Curve sorted ascending by weight, as built by build_flight_curve().

    Returns:
    -------
    PartitionedCurve
    """
    config = config if config is not None else DEFAULT_CONFIG

    measured = [p for p in curve if not p.estimated]
    estimated = [p for p in curve if p.estimated]

    if measured and estimated:
        boundary = measured[0]
        if abs(estimated[-1].total_weight - boundary.total_weight) > config.boundary_tolerance:
            estimated.append(dataclasses.replace(boundary, estimated=True))

    return PartitionedCurve(measured=measured, estimated=estimated)

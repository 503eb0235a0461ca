"""
Hover Estimation Module
=======================

Point queries on a measured series for a complete multirotor: hover
current and flight time at a takeoff weight, and the whole-aircraft
totals of the strongest measured operating point.

Usage:
------
    from src.hover_analyzer import build_series, estimate_hover

    hover = estimate_hover(series, takeoff_weight_kg=10.0, motor_count=4,
                           battery_capacity_ah=20.0, usable_percent=80.0)
    print(hover.describe())
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import HoverAnalyzerConfig, DEFAULT_CONFIG
from .flight_curve import endurance_minutes, validate_battery_inputs
from .interpolator import InterpolationError, interpolate_lift
from .series import SeriesPoint


@dataclass(frozen=True)
class HoverEstimate:
    """
    Hover operating point of a multirotor at one takeoff weight.

    Attributes:
    ----------
    ok : bool
        Whether a current could be determined

    reason : InterpolationError or None
        Failure reason when ok is False

    lift_per_motor : float
        Lift each motor must produce (kg)

    motor_count : int
        Number of motors sharing the takeoff weight

    current_per_motor_a : float
        Hover current per motor (A)

    total_current_a : float
        Hover current of all motors (A)

    throttle : float
        Hover throttle (%)

    flight_minutes : float or None
        Flight time (min), None when no positive current was found

    estimated : bool
        True when the hover point lies below the measured range
    """
    ok: bool
    lift_per_motor: float
    motor_count: int
    reason: Optional[InterpolationError] = None
    current_per_motor_a: float = 0.0
    total_current_a: float = 0.0
    throttle: float = 0.0
    flight_minutes: Optional[float] = None
    estimated: bool = False

    def describe(self) -> str:
        """Generate a formatted summary string."""
        if not self.ok:
            if self.reason == InterpolationError.EXCEEDS_MAX:
                return "Required lift exceeds the max in the spec sheet."
            return "No data for this selection."

        mark = "*" if self.estimated else ""
        lines = [
            f"Hover current per motor: {self.current_per_motor_a:.2f} A{mark}",
            f"Estimated throttle: {self.throttle:.1f}%{mark}",
            f"Total current ({self.motor_count} motors): {self.total_current_a:.1f} A{mark}",
        ]
        if self.flight_minutes is None:
            lines.append("Add battery info to see flight time.")
        else:
            lines.append(f"Estimated flight time: {self.flight_minutes:.1f} min{mark}")
        if self.estimated:
            lines.append("* below the measured range (extrapolated)")
        return "\n".join(lines)


@dataclass(frozen=True)
class SeriesTotals:
    """Whole-aircraft figures at the strongest measured operating point."""
    max_thrust_kg: float
    peak_current_a: float


def estimate_hover(
    series: Sequence[SeriesPoint],
    takeoff_weight_kg: float,
    motor_count: int,
    battery_capacity_ah: float,
    usable_percent: float,
    config: Optional[HoverAnalyzerConfig] = None
) -> HoverEstimate:
    """
    Estimate hover current and flight time at a takeoff weight.

    Parameters:
    ----------
    series : sequence of SeriesPoint
        Measured per-motor series.

    takeoff_weight_kg : float
        Total takeoff weight (kg), shared evenly by all motors.

    motor_count : int
        Number of motors.

    battery_capacity_ah : float
        Nominal battery capacity (Ah).

    usable_percent : float
        Usable share of the capacity (%).

    Returns:
    -------
    HoverEstimate

    Raises:
    ------
    ValueError
        If the motor count, capacity or usable share is invalid.
    """
    config = config if config is not None else DEFAULT_CONFIG
    validate_battery_inputs(motor_count, battery_capacity_ah, usable_percent)

    lift = takeoff_weight_kg / motor_count
    result = interpolate_lift(series, lift, config)
    if not result.ok:
        return HoverEstimate(
            ok=False, lift_per_motor=lift, motor_count=motor_count, reason=result.reason
        )

    total_current = result.current_a * motor_count
    minutes = None
    if total_current > 0:
        minutes = endurance_minutes(total_current, battery_capacity_ah, usable_percent, config)

    return HoverEstimate(
        ok=True,
        lift_per_motor=lift,
        motor_count=motor_count,
        current_per_motor_a=result.current_a,
        total_current_a=total_current,
        throttle=result.throttle,
        flight_minutes=minutes,
        estimated=result.below_measured_range,
    )


def series_totals(series: Sequence[SeriesPoint], motor_count: int) -> Optional[SeriesTotals]:
    """
    Get the max thrust and peak current of the whole aircraft.

    Uses the sample with the highest thrust (the first one on ties).
    Returns None for an empty series.
    """
    if not series:
        return None

    strongest = series[0]
    for point in series[1:]:
        if point.y > strongest.y:
            strongest = point

    return SeriesTotals(
        max_thrust_kg=strongest.y * motor_count,
        peak_current_a=strongest.x * motor_count,
    )

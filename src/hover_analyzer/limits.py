"""
Current Limits Module
=====================

Relates a measured series to the battery's maximum current: the limit and
its warning threshold per motor or for the whole aircraft, and the highest
lift that stays within a current limit.

Limit Modes:
-----------
- PER_MOTOR: battery limit shared evenly by the motors
- TOTAL: battery limit compared with the summed current of all motors

The warning threshold is warn_fraction (default 80%) of the limit.

Usage:
------
    from src.hover_analyzer.limits import LimitMode, current_limits

    limits = current_limits(100.0, motor_count=4, mode=LimitMode.PER_MOTOR)
    limits.max_current_a   # 25.0
    limits.warn_current_a  # 20.0
    limits.classify(22.0)  # LimitStatus.WARN
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from scipy import optimize

from .config import HoverAnalyzerConfig, DEFAULT_CONFIG
from .interpolator import interpolate_lift
from .series import SeriesPoint, sort_by_thrust


class LimitMode(Enum):
    """How currents are compared with the battery limit."""
    PER_MOTOR = "perMotor"
    TOTAL = "total"


class LimitStatus(Enum):
    """Where a current sits relative to the limit."""
    OK = "ok"
    WARN = "warn"     # At or above the warning threshold
    OVER = "over"     # At or above the limit


@dataclass(frozen=True)
class CurrentLimits:
    """
    Current limit and warning threshold in the units of one limit mode.

    Attributes:
    ----------
    mode : LimitMode
        Per motor or whole aircraft

    max_current_a : float
        Maximum allowed current (A)

    warn_current_a : float
        Warning threshold (A)
    """
    mode: LimitMode
    max_current_a: float
    warn_current_a: float

    def classify(self, current_a: float) -> LimitStatus:
        """Classify a current (in this mode's units) against the limit."""
        if current_a >= self.max_current_a:
            return LimitStatus.OVER
        if current_a >= self.warn_current_a:
            return LimitStatus.WARN
        return LimitStatus.OK

    @property
    def axis_label(self) -> str:
        if self.mode == LimitMode.TOTAL:
            return "Total Current (A)"
        return "Current per Motor (A)"


def current_limits(
    battery_max_a: float,
    motor_count: int,
    mode: LimitMode = LimitMode.PER_MOTOR,
    config: Optional[HoverAnalyzerConfig] = None
) -> CurrentLimits:
    """
    Express the battery current limit in the units of a limit mode.

    Parameters:
    ----------
    battery_max_a : float
        Maximum continuous battery current (A).

    motor_count : int
        Number of motors.

    mode : LimitMode
        PER_MOTOR divides the limit by the motor count.

    Raises:
    ------
    ValueError
        If the motor count is below 1 or the limit is negative.
    """
    config = config if config is not None else DEFAULT_CONFIG

    if motor_count < 1:
        raise ValueError(f"Motor count must be at least 1, got {motor_count}")
    if battery_max_a < 0:
        raise ValueError(f"Battery current limit cannot be negative, got {battery_max_a} A")

    if mode == LimitMode.PER_MOTOR:
        max_current = battery_max_a / motor_count
    else:
        max_current = battery_max_a

    return CurrentLimits(
        mode=mode,
        max_current_a=max_current,
        warn_current_a=max_current * config.warn_fraction,
    )


def scale_series(
    series: Sequence[SeriesPoint],
    motor_count: int,
    mode: LimitMode = LimitMode.PER_MOTOR
) -> List[Tuple[float, float, Optional[float]]]:
    """
    Get (current, lift, throttle) tuples in the units of a limit mode.

    TOTAL mode multiplies current and lift by the motor count; throttle is
    left unchanged.
    """
    scale = motor_count if mode == LimitMode.TOTAL else 1
    return [(p.x * scale, p.y * scale, p.throttle) for p in series]


def max_lift_within_current(
    series: Sequence[SeriesPoint],
    current_limit_a: float,
    config: Optional[HoverAnalyzerConfig] = None
) -> Optional[float]:
    """
    Find the highest measured-range lift per motor within a current limit.

    Walks the thrust-sorted samples to the first segment whose current
    crosses the limit and solves for the crossing with Brent's method.

    Parameters:
    ----------
    series : sequence of SeriesPoint
        Measured per-motor series.

    current_limit_a : float
        Maximum current per motor (A).

    Returns:
    -------
    float or None
        Lift per motor (kg). The highest measured thrust when the whole
        range fits; None for an empty series or when even the lowest
        measured point draws more than the limit.
    """
    config = config if config is not None else DEFAULT_CONFIG

    if not series:
        return None

    def current_at(lift: float) -> float:
        return interpolate_lift(series, lift, config).current_a

    thrusts = [p.y for p in sort_by_thrust(series)]
    if current_at(thrusts[0]) > current_limit_a:
        return None

    for low, high in zip(thrusts, thrusts[1:]):
        if current_at(high) <= current_limit_a:
            continue
        if high == low:
            return low
        return optimize.brentq(
            lambda lift: current_at(lift) - current_limit_a,
            low,
            high,
        )

    return thrusts[-1]

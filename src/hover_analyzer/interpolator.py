"""
Lift Interpolator Module
========================

Answers "how much current (and throttle) does one motor need to produce
this much lift?" from a sparse measured series.

Theory Background:
-----------------
Inside the measured thrust range the answer is a straight-line
interpolation between the two bracketing samples.

Below the lowest measured thrust the series is extrapolated from its two
lowest samples. Propeller current is closer to a power law of thrust than
to a straight line near zero, so the strategies are tried in order:

1. Power law      I = a * T^b          (both anchors strictly positive)
2. Linear         I = I1 + (T - T1) * dI/dT
3. Origin scaling I = I1 * T / T1      (single sample)

For throttle, the power-law strategy fits throttle = c * T^d when both
anchors recorded a positive throttle. Otherwise it uses throttle ~ sqrt(T):
thrust scales with RPM^2 and throttle roughly with RPM.

Above the highest measured thrust nothing is extrapolated; the request is
reported as exceeding the data.

Usage:
------
    from src.hover_analyzer import build_series, interpolate_lift

    series = build_series(rows)
    result = interpolate_lift(series, 1.25)
    if result.ok:
        print(f"{result.current_a:.2f} A at {result.throttle:.1f}%")
    else:
        print(result.reason.value)  # "no-data", "exceeds-max", ...
"""

import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .config import HoverAnalyzerConfig, DEFAULT_CONFIG
from .series import SeriesPoint, sort_by_thrust


class InterpolationError(Enum):
    """Reasons a lift query produced no number."""
    NO_DATA = "no-data"                       # Empty series
    EXCEEDS_MAX = "exceeds-max"               # Lift above highest measured thrust
    SEGMENT_NOT_FOUND = "segment-not-found"   # No bracketing pair (should not happen)


@dataclass(frozen=True)
class InterpolationResult:
    """
    Outcome of a lift query.

    Attributes:
    ----------
    ok : bool
        True when current_a/throttle hold a usable answer

    current_a : float
        Current per motor (A)

    throttle : float
        Throttle setting (%)

    below_measured_range : bool
        True when the answer was extrapolated below the lowest sample

    reason : InterpolationError or None
        Why no answer was produced (only set when ok is False)
    """
    ok: bool
    current_a: float = 0.0
    throttle: float = 0.0
    below_measured_range: bool = False
    reason: Optional[InterpolationError] = None

    @classmethod
    def success(
        cls,
        current_a: float,
        throttle: float,
        below_measured_range: bool = False
    ) -> "InterpolationResult":
        return cls(
            ok=True,
            current_a=current_a,
            throttle=throttle,
            below_measured_range=below_measured_range,
        )

    @classmethod
    def failure(cls, reason: InterpolationError) -> "InterpolationResult":
        return cls(ok=False, reason=reason)


# =============================================================================
# Extrapolation Strategies
# =============================================================================
# Each strategy is a (name, applies, compute) triple. Both receive the
# thrust-sorted points, the target lift and the config; ``compute`` returns
# unclamped (current, throttle).

# Largest x with math.exp(x) representable as a float
_MAX_LOG_FLOAT = math.log(sys.float_info.max)


def _scaled_power(anchor_value: float, ratio: float, exponent: float) -> Optional[float]:
    """
    Evaluate anchor_value * ratio ** exponent in log space.

    Returns None when the result is not a finite float. A result too small
    to represent comes back as 0.0.
    """
    log_scale = exponent * math.log(ratio)
    if not math.isfinite(log_scale):
        return None
    if log_scale > _MAX_LOG_FLOAT - math.log(anchor_value):
        return None
    return anchor_value * math.exp(log_scale)


def _power_law_exponent(
    a: SeriesPoint,
    b: SeriesPoint,
    a_value: float,
    b_value: float
) -> Optional[float]:
    exponent = math.log(b_value / a_value) / math.log(b.y / a.y)
    return exponent if math.isfinite(exponent) else None


def can_fit_power_law(
    pts: Sequence[SeriesPoint],
    target: float,
    config: HoverAnalyzerConfig
) -> bool:
    """
    Two lowest samples have strictly positive, distinct thrust and current,
    and the fitted current at target is a finite float.
    """
    if len(pts) < 2:
        return False
    a, b = pts[0], pts[1]
    if not (a.x > 0 and b.x > 0 and a.y > 0 and b.y > 0 and a.y != b.y):
        return False

    exponent = _power_law_exponent(a, b, a.x, b.x)
    if exponent is None:
        return False
    lift = max(target, config.power_law_epsilon)
    return _scaled_power(a.x, lift / a.y, exponent) is not None


def extrapolate_power_law(
    pts: Sequence[SeriesPoint],
    target: float,
    config: HoverAnalyzerConfig
) -> Tuple[float, float]:
    """
    Fit I = a * T^b through the two lowest samples and evaluate at target.

    The fit is written relative to the lowest sample, I = I1 * (T / T1)^b,
    so nearly equal anchor thrusts never raise T1 to a huge power.
    Throttle uses its own power law when both anchors have a positive
    throttle and that fit stays finite, otherwise throttle = k * sqrt(T)
    anchored at the lowest sample.
    """
    a, b = pts[0], pts[1]
    lift = max(target, config.power_law_epsilon)
    ratio = lift / a.y

    exponent = _power_law_exponent(a, b, a.x, b.x)
    current = _scaled_power(a.x, ratio, exponent)

    throttle = None
    if a.throttle_or_zero > 0 and b.throttle_or_zero > 0:
        thr_exponent = _power_law_exponent(a, b, a.throttle, b.throttle)
        if thr_exponent is not None:
            throttle = _scaled_power(a.throttle, ratio, thr_exponent)
    if throttle is None:
        k = a.throttle_or_zero / math.sqrt(a.y)
        throttle = k * math.sqrt(max(target, 0.0))

    return current, throttle


def can_fit_linear(
    pts: Sequence[SeriesPoint],
    target: float,
    config: HoverAnalyzerConfig
) -> bool:
    return len(pts) >= 2


def extrapolate_linear(
    pts: Sequence[SeriesPoint],
    target: float,
    config: HoverAnalyzerConfig
) -> Tuple[float, float]:
    """Extend the line through the two lowest samples down to target."""
    a, b = pts[0], pts[1]
    dy = (b.y - a.y) or config.slope_epsilon

    slope_current = (b.x - a.x) / dy
    slope_throttle = (b.throttle_or_zero - a.throttle_or_zero) / dy

    current = a.x + (target - a.y) * slope_current
    throttle = a.throttle_or_zero + (target - a.y) * slope_throttle
    return current, throttle


def can_scale_from_origin(
    pts: Sequence[SeriesPoint],
    target: float,
    config: HoverAnalyzerConfig
) -> bool:
    return len(pts) >= 1


def extrapolate_from_origin(
    pts: Sequence[SeriesPoint],
    target: float,
    config: HoverAnalyzerConfig
) -> Tuple[float, float]:
    """Scale the lowest sample toward the origin by target / thrust."""
    lowest = pts[0]
    scale = max(0.0, target / max(lowest.y, config.slope_epsilon))
    return lowest.x * scale, lowest.throttle_or_zero * scale


ExtrapolationStrategy = Tuple[
    str,
    Callable[[Sequence[SeriesPoint], float, HoverAnalyzerConfig], bool],
    Callable[[Sequence[SeriesPoint], float, HoverAnalyzerConfig], Tuple[float, float]],
]

EXTRAPOLATION_STRATEGIES: List[ExtrapolationStrategy] = [
    ("power_law", can_fit_power_law, extrapolate_power_law),
    ("linear", can_fit_linear, extrapolate_linear),
    ("origin_scale", can_scale_from_origin, extrapolate_from_origin),
]


def extrapolate_below_range(
    pts: Sequence[SeriesPoint],
    target: float,
    config: Optional[HoverAnalyzerConfig] = None
) -> InterpolationResult:
    """
    Estimate current/throttle below the lowest sample of a thrust-sorted series.

    The first strategy whose precondition holds produces the answer; both
    values are clamped to be non-negative.
    """
    config = config if config is not None else DEFAULT_CONFIG

    for _name, applies, compute in EXTRAPOLATION_STRATEGIES:
        if applies(pts, target, config):
            current, throttle = compute(pts, target, config)
            return InterpolationResult.success(
                max(0.0, current), max(0.0, throttle), below_measured_range=True
            )

    return InterpolationResult.failure(InterpolationError.NO_DATA)


# =============================================================================
# Lift Query
# =============================================================================

def interpolate_lift(
    series: Sequence[SeriesPoint],
    target_lift: float,
    config: Optional[HoverAnalyzerConfig] = None
) -> InterpolationResult:
    """
    Get the current and throttle one motor needs to produce a lift.

    Parameters:
    ----------
    series : sequence of SeriesPoint
        Measured series in any order.

    target_lift : float
        Required lift per motor (kg).

    config : HoverAnalyzerConfig, optional
        Engine constants. Uses the default configuration if None.

    Returns:
    -------
    InterpolationResult
        ok=True with current/throttle, flagged below_measured_range when
        extrapolated; ok=False with a reason otherwise.

    Example:
    -------
        series = [SeriesPoint(5, 1), SeriesPoint(10, 2)]
        interpolate_lift(series, 1.5).current_a  # 7.5
        interpolate_lift(series, 3).reason       # InterpolationError.EXCEEDS_MAX
    """
    config = config if config is not None else DEFAULT_CONFIG

    if not series:
        return InterpolationResult.failure(InterpolationError.NO_DATA)

    pts = sort_by_thrust(series)
    lowest, highest = pts[0], pts[-1]

    if target_lift > highest.y:
        return InterpolationResult.failure(InterpolationError.EXCEEDS_MAX)

    if target_lift < lowest.y:
        return extrapolate_below_range(pts, target_lift, config)

    # A single sample brackets only its own thrust
    pairs = list(zip(pts, pts[1:])) or [(lowest, lowest)]
    for a, b in pairs:
        if a.y <= target_lift <= b.y:
            t = (target_lift - a.y) / ((b.y - a.y) or 1)
            current = a.x + t * (b.x - a.x)
            throttle = a.throttle_or_zero + t * (b.throttle_or_zero - a.throttle_or_zero)
            return InterpolationResult.success(current, throttle)

    if config.verbose:
        print(
            f"Warning: No bracketing segment for lift {target_lift} kg "
            f"within measured range {lowest.y}-{highest.y} kg"
        )
    return InterpolationResult.failure(InterpolationError.SEGMENT_NOT_FOUND)

"""
Hover Analyzer Configuration
============================

Contains the numeric constants and default values used by the lift curve
engine (series building, lift interpolation, flight-curve sweeps) and by
the hover/limit helpers built on top of it.

Units Convention:
----------------
- Current: amperes (A)
- Lift/thrust: kilograms-force (kg) per motor unless stated otherwise
- Throttle: percent (%)
- Battery capacity: amp-hours (Ah)
- Flight time: minutes (min)

Usage:
------
    from src.hover_analyzer.config import HoverAnalyzerConfig

    config = HoverAnalyzerConfig(max_flight_minutes=90.0, verbose=True)
    ok, message = config.validate()
"""

from dataclasses import dataclass


# =============================================================================
# Engine Constants
# =============================================================================

# Smallest thrust a power law is evaluated at (kg); keeps T^b finite at T=0
POWER_LAW_EPSILON = 1e-9

# Denominator guard for slopes between two samples of equal thrust
SLOPE_EPSILON = 1e-9

# Flight-curve sweep: start 30% below the lowest measured lift,
# stop just inside the highest measured lift
SWEEP_START_FACTOR = 0.7
SWEEP_END_FACTOR = 0.99
SWEEP_MIN_SPAN_KG = 0.01

# Per-motor current floor for the flight curve (A)
CURRENT_FLOOR_A = 0.1

# Flight time ceiling (min) - two hours is treated as "effectively unlimited"
MAX_FLIGHT_MINUTES = 120.0

# A swept lift counts as estimated when below min lift by more than this
ESTIMATED_TOLERANCE = 1e-9

# Two curve points closer than this (kg of total weight) are the same point
BOUNDARY_TOLERANCE = 1e-6

# Number of lift samples in a flight-curve sweep
DEFAULT_SAMPLE_COUNT = 60

# Warning threshold as a fraction of the battery current limit
WARN_FRACTION = 0.8


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class HoverAnalyzerConfig:
    """
    Configuration for lift interpolation and flight-time estimation.

    Attributes:
    ----------
    power_law_epsilon : float
        Lower bound of the thrust a power-law fit is evaluated at (kg).

    slope_epsilon : float
        Substitute denominator when two anchor points share the same thrust.

    sweep_start_factor : float
        Flight-curve sweep start as a fraction of the lowest measured lift.

    sweep_end_factor : float
        Flight-curve sweep end as a fraction of the highest measured lift.

    sweep_min_span : float
        Minimum width of the sweep range (kg per motor).

    current_floor_a : float
        Per-motor current floor applied to flight-curve samples (A).

    max_flight_minutes : float
        Ceiling for every flight time the engine reports (min).

    estimated_tolerance : float
        Tolerance used when tagging swept lifts as below the measured range.

    boundary_tolerance : float
        Weight tolerance for de-duplicating and stitching curve points (kg).

    default_sample_count : int
        Number of samples in a flight-curve sweep when none is given.

    warn_fraction : float
        Fraction of the current limit at which a warning is raised.

    verbose : bool
        Print warnings for internal-consistency failures.
    """
    # Extrapolation
    power_law_epsilon: float = POWER_LAW_EPSILON
    slope_epsilon: float = SLOPE_EPSILON

    # Flight-curve sweep
    sweep_start_factor: float = SWEEP_START_FACTOR
    sweep_end_factor: float = SWEEP_END_FACTOR
    sweep_min_span: float = SWEEP_MIN_SPAN_KG
    current_floor_a: float = CURRENT_FLOOR_A
    max_flight_minutes: float = MAX_FLIGHT_MINUTES
    estimated_tolerance: float = ESTIMATED_TOLERANCE
    boundary_tolerance: float = BOUNDARY_TOLERANCE
    default_sample_count: int = DEFAULT_SAMPLE_COUNT

    # Current limits
    warn_fraction: float = WARN_FRACTION

    # Runtime
    verbose: bool = False

    def validate(self) -> tuple[bool, str]:
        """Validate configuration values."""
        errors = []

        if self.power_law_epsilon <= 0 or self.slope_epsilon <= 0:
            errors.append("Epsilon values must be positive")
        if not 0 <= self.sweep_start_factor <= 1:
            errors.append("Sweep start factor should be between 0 and 1")
        if not 0 < self.sweep_end_factor <= 1:
            errors.append("Sweep end factor should be between 0 and 1")
        if self.sweep_min_span <= 0:
            errors.append("Sweep span must be positive")
        if self.current_floor_a < 0:
            errors.append("Current floor cannot be negative")
        if self.max_flight_minutes <= 0:
            errors.append("Flight time ceiling must be positive")
        if self.default_sample_count < 2:
            errors.append("Sample count must be at least 2")
        if not 0 < self.warn_fraction <= 1:
            errors.append("Warn fraction should be between 0 and 1")

        if errors:
            return False, "; ".join(errors)
        return True, ""


# =============================================================================
# Default Configuration Instance
# =============================================================================

DEFAULT_CONFIG = HoverAnalyzerConfig()

"""
Series Builder Module
=====================

Turns raw thrust-test rows into the canonical series used by the lift
interpolator and the flight-curve builder.

A raw row is any mapping with:
- current  : motor current (A)
- thrust   : thrust produced (kg); spec sheets may call it ``thrust_kg``
- throttle : throttle setting (%), optional

Rows are accepted as an iterable of mappings or as a pandas DataFrame
with the same column names.

Usage:
------
    from src.hover_analyzer.series import build_series

    rows = [
        {"current": 10.2, "thrust_kg": 1.8, "throttle": 50},
        {"current": 4.1, "thrust_kg": 0.9, "throttle": 35},
    ]
    series = build_series(rows)
    series[0].x  # 4.1 (sorted by current)
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd


@dataclass(frozen=True)
class SeriesPoint:
    """
    One measured operating point of a motor/prop/voltage combination.

    Attributes:
    ----------
    x : float
        Current per motor (A)

    y : float
        Thrust per motor (kg)

    throttle : float or None
        Throttle setting (%), None when the test bench did not record it
    """
    x: float
    y: float
    throttle: Optional[float] = None

    @property
    def throttle_or_zero(self) -> float:
        """Throttle with a missing value read as 0%."""
        return self.throttle if self.throttle is not None else 0.0


RowSource = Union[None, pd.DataFrame, Iterable[Mapping[str, Any]]]


def _finite_number(value: Any) -> Optional[float]:
    """Return value as float if it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _iter_rows(rows: RowSource) -> Iterable[Mapping[str, Any]]:
    if rows is None:
        return []
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict("records")
    return rows


def build_series(rows: RowSource) -> List[SeriesPoint]:
    """
    Build a canonical series from raw sample rows.

    Rows whose current or thrust is not a finite number are dropped.
    A "thrust" value that is missing or not a number falls back to "thrust_kg".
    A throttle that is missing or not finite is stored as None.

    Parameters:
    ----------
    rows : iterable of mappings, DataFrame or None
        Raw thrust-test rows.

    Returns:
    -------
    list of SeriesPoint
        Points sorted ascending by current (x). Empty for empty/None input.
    """
    points = []
    for row in _iter_rows(rows):
        current = _finite_number(row.get("current"))
        thrust = _finite_number(row.get("thrust"))
        if thrust is None:
            thrust = _finite_number(row.get("thrust_kg"))
        if current is None or thrust is None:
            continue
        points.append(SeriesPoint(
            x=current,
            y=thrust,
            throttle=_finite_number(row.get("throttle")),
        ))

    return sorted(points, key=lambda p: p.x)


def sort_by_thrust(series: Iterable[SeriesPoint]) -> List[SeriesPoint]:
    """Return a new list of the series points sorted ascending by thrust."""
    return sorted(series, key=lambda p: p.y)


def thrust_range(series: Iterable[SeriesPoint]) -> Optional[tuple]:
    """
    Get the (min, max) measured thrust of a series.

    Returns None for an empty series.
    """
    thrusts = [p.y for p in series]
    if not thrusts:
        return None
    return min(thrusts), max(thrusts)

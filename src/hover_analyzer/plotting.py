"""
Hover Analyzer Plotting Module
==============================

Visualization of measured lift/current series and of the takeoff-weight
vs flight-time curves derived from them.

Plot Types Available:
--------------------
- Lift vs current, with the battery limit (red) and warning (yellow) bands
- Flight time vs takeoff weight, measured segment solid and estimated
  segment dashed, joined at the lowest measured lift

Classes:
--------
- HoverPlotter: Generates the hover analysis figures

Usage:
-----
    from src.hover_analyzer.plotting import HoverPlotter

    plotter = HoverPlotter()
    fig = plotter.plot_flight_time({"X8 28x8": curve}, takeoff_weight_kg=10)
    fig.savefig("flight_time.png", dpi=150)
"""

from typing import Dict, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .config import HoverAnalyzerConfig, DEFAULT_CONFIG
from .flight_curve import FlightCurvePoint, split_curve
from .limits import CurrentLimits, LimitMode, scale_series
from .series import SeriesPoint


class HoverPlotter:
    """
    Hover analysis visualization class.

    Attributes:
    ----------
    config : HoverAnalyzerConfig
        Engine constants (flight time ceiling, stitching tolerance).

    Example:
    -------
        plotter = HoverPlotter()
        limits = current_limits(100.0, 4, LimitMode.PER_MOTOR)
        plotter.plot_thrust_current({"A": series_a, "B": series_b}, 4, limits)
        plt.show()
    """

    # =========================================================================
    # Default Plot Styling
    # =========================================================================

    DEFAULT_FIGURE_SIZE = (10, 6)
    SERIES_COLORS = ["#2563eb", "#16a34a", "#9333ea", "#dc2626"]
    ESTIMATED_COLOR = "#f59e0b"
    WARN_COLOR = "#facc15"
    OVER_COLOR = "#ef4444"

    def __init__(self, config: Optional[HoverAnalyzerConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def _get_axes(self, ax: Optional[Axes], figsize: Optional[Tuple[int, int]]):
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or self.DEFAULT_FIGURE_SIZE)
        else:
            fig = ax.get_figure()
        return fig, ax

    def _color(self, index: int) -> str:
        return self.SERIES_COLORS[index % len(self.SERIES_COLORS)]

    # =========================================================================
    # Lift vs Current
    # =========================================================================

    def plot_thrust_current(
        self,
        series_by_label: Dict[str, Sequence[SeriesPoint]],
        motor_count: int,
        limits: Optional[CurrentLimits] = None,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot measured lift against current for one or more selections.

        Parameters:
        ----------
        series_by_label : dict
            Legend label -> measured per-motor series.

        motor_count : int
            Number of motors (used to scale to whole-aircraft values).

        limits : CurrentLimits, optional
            Battery limit to shade. Its mode selects per-motor or total axes.

        Returns:
        -------
        Figure
            Matplotlib figure object.
        """
        fig, ax = self._get_axes(ax, figsize)
        mode = limits.mode if limits is not None else LimitMode.PER_MOTOR

        data_max_x = 0.0
        for i, (label, series) in enumerate(series_by_label.items()):
            scaled = scale_series(series, motor_count, mode)
            if not scaled:
                continue
            currents = [s[0] for s in scaled]
            lifts = [s[1] for s in scaled]
            data_max_x = max(data_max_x, max(currents))
            ax.plot(currents, lifts, color=self._color(i), linewidth=2, label=label)

        if limits is not None:
            chart_max_x = max(data_max_x, limits.max_current_a * 1.1)
            ax.axvspan(
                max(limits.warn_current_a, 0.0), limits.max_current_a,
                color=self.WARN_COLOR, alpha=0.25,
                label=f"Warn ≥ {limits.warn_current_a:.0f} A",
            )
            ax.axvspan(
                limits.max_current_a, chart_max_x,
                color=self.OVER_COLOR, alpha=0.15,
                label=f"Max = {limits.max_current_a:.0f} A",
            )
            ax.set_xlim(0, chart_max_x)
            ax.set_xlabel(limits.axis_label)
        else:
            ax.set_xlabel("Current per Motor (A)")

        ax.set_ylabel("Lift (kg) • Total" if mode == LimitMode.TOTAL else "Lift (kg) • Per motor")
        ax.set_title("Lift vs Current")
        ax.grid(True, alpha=0.3)
        if ax.get_legend_handles_labels()[0]:
            ax.legend(loc="lower right")

        return fig

    # =========================================================================
    # Flight Time vs Takeoff Weight
    # =========================================================================

    def plot_flight_time(
        self,
        curves_by_label: Dict[str, Sequence[FlightCurvePoint]],
        takeoff_weight_kg: Optional[float] = None,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot flight time against takeoff weight.

        Each curve is split into its measured part (solid, series colour)
        and estimated part (dashed, orange) sharing the boundary point.

        Parameters:
        ----------
        curves_by_label : dict
            Legend label -> flight curve from build_flight_curve().

        takeoff_weight_kg : float, optional
            Draw a vertical marker at this weight.

        Returns:
        -------
        Figure
            Matplotlib figure object.
        """
        fig, ax = self._get_axes(ax, figsize)

        weight_max = takeoff_weight_kg or 0.0
        for i, (label, curve) in enumerate(curves_by_label.items()):
            parts = split_curve(curve, self.config)

            if parts.measured:
                ax.plot(
                    [p.total_weight for p in parts.measured],
                    [p.minutes for p in parts.measured],
                    color=self._color(i), linewidth=2, label=f"{label} • time",
                )
            if parts.estimated:
                ax.plot(
                    [p.total_weight for p in parts.estimated],
                    [p.minutes for p in parts.estimated],
                    color=self.ESTIMATED_COLOR, linewidth=2, linestyle="--",
                    label=f"{label} • time (est)",
                )
            if curve:
                weight_max = max(weight_max, max(p.total_weight for p in curve))

        if takeoff_weight_kg is not None:
            ax.axvline(takeoff_weight_kg, color="gray", linestyle=":",
                       label=f"Takeoff {takeoff_weight_kg:g} kg")

        ax.set_xlim(0, weight_max if weight_max > 0 else 1.0)
        ax.set_ylim(0, self.config.max_flight_minutes)
        ax.set_xlabel("Takeoff Weight (kg)")
        ax.set_ylabel("Flight Time (min)")
        ax.set_title("Flight Time vs Takeoff Weight")
        ax.grid(True, alpha=0.3)
        if ax.get_legend_handles_labels()[0]:
            ax.legend(loc="upper right")

        return fig

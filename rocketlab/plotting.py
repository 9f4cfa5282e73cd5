"""Visualization module for rocketlab.

Provides plotting functions for:
- Rolling altitude and velocity strip charts (live telemetry)
- Post-flight dashboard from a full FlightLog

All plots use matplotlib with a consistent, professional style.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure
from numpy.typing import NDArray

from rocketlab.simulation.results import FlightLog
from rocketlab.simulation.telemetry import TelemetrySnapshot
from rocketlab.vehicle.state import FlightEvent

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "altitude": "#00f2ff",  # Cyan
    "velocity": "#ff0055",  # Magenta
    "accent": "#ffd700",  # Gold
    "fuel": "#00ff88",  # Green
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

# Strip chart floors so an idle chart is not stretched to noise
ALTITUDE_SCALE_FLOOR = 1000.0  # [m]
VELOCITY_SCALE_FLOOR = 100.0  # [m/s]

DEFAULT_FIGSIZE = (12, 6)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "figure.titlesize": 16,
            "grid.alpha": 0.5,
            "grid.linewidth": 0.8,
        }
    )


# =============================================================================
# Strip Charts
# =============================================================================


@beartype
def plot_strip_charts(
    altitude: NDArray[np.float64] | list[float] | tuple[float, ...],
    velocity: NDArray[np.float64] | list[float] | tuple[float, ...],
    capacity: int = 100,
    figsize: tuple[float, float] = (8, 5),
    fig: Figure | None = None,
) -> Figure:
    """Draw the rolling altitude and velocity strip charts.

    Samples are placed left to right by index over the history capacity,
    so a filling chart grows from the left edge.

    Args:
        altitude: Altitude samples, oldest first [m]
        velocity: Velocity samples, oldest first [m/s]
        capacity: Number of slots across the chart width
        figsize: Figure size (width, height) if a new figure is created
        fig: Existing figure to redraw into

    Returns:
        matplotlib Figure
    """
    _setup_style()

    if fig is None:
        fig, (ax_alt, ax_vel) = plt.subplots(2, 1, figsize=figsize, sharex=True)
    else:
        fig.clf()
        ax_alt, ax_vel = fig.subplots(2, 1, sharex=True)

    for ax, samples, floor, color, label in (
        (ax_alt, altitude, ALTITUDE_SCALE_FLOOR, COLORS["altitude"], "Altitude [m]"),
        (ax_vel, velocity, VELOCITY_SCALE_FLOOR, COLORS["velocity"], "Velocity [m/s]"),
    ):
        values = np.asarray(samples, dtype=np.float64)
        x = np.arange(values.size)
        top = max(floor, float(np.max(values))) if values.size else floor

        ax.fill_between(x, 0.0, values, color=color, alpha=0.2)
        ax.plot(x, values, color=color, linewidth=2)
        ax.set_xlim(0, capacity)
        ax.set_ylim(min(0.0, float(np.min(values))) if values.size else 0.0, top)
        ax.set_ylabel(label)
        ax.grid(True)

    ax_vel.set_xlabel("Sample")
    fig.tight_layout()

    return fig


@beartype
def plot_flight_log(
    log: FlightLog,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str = "Flight Telemetry",
) -> Figure:
    """Four-panel post-flight dashboard: altitude, velocity, Max-Q, fuel.

    MECO and apogee are marked with vertical lines when they occurred.

    Args:
        log: Recorded flight
        figsize: Figure size (width, height)
        title: Figure title

    Returns:
        matplotlib Figure
    """
    _setup_style()

    t = log.time
    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    panels = (
        (axes[0, 0], log.altitude / 1000.0, "Altitude [km]", COLORS["altitude"]),
        (axes[0, 1], log.velocity, "Velocity [m/s]", COLORS["velocity"]),
        (axes[1, 0], log.dynamic_pressure / 1000.0, "Dynamic Pressure [kPa]", COLORS["accent"]),
        (axes[1, 1], log.fuel_percent, "Fuel [%]", COLORS["fuel"]),
    )

    markers = [
        (log.event_time(FlightEvent.MECO), "MECO"),
        (log.event_time(FlightEvent.APOGEE), "Apogee"),
    ]

    for ax, values, label, color in panels:
        ax.plot(t, values, color=color, linewidth=2)
        ax.set_ylabel(label)
        ax.grid(True)
        for event_time, name in markers:
            if event_time is not None:
                ax.axvline(event_time, color=COLORS["text"], linestyle="--", alpha=0.6)
                ax.text(event_time, ax.get_ylim()[1], f" {name}", va="top", fontsize=9)

    for ax in axes[1]:
        ax.set_xlabel("Mission Time [s]")

    fig.suptitle(title, fontweight="bold")
    fig.tight_layout()

    return fig


# =============================================================================
# Live Sink
# =============================================================================


class StripChartSink:
    """Telemetry sink that redraws the strip charts as snapshots arrive.

    Redraws every `every` snapshots, and always on snapshots carrying events.
    With an interactive backend, call plt.ion() beforehand to watch the charts
    update live.

    Args:
        every: Redraw period in snapshots
        capacity: Number of slots across the chart width
    """

    def __init__(self, every: int = 5, capacity: int = 100) -> None:
        if every < 1:
            raise ValueError(f"every must be at least 1, got {every}")
        self.every = every
        self.capacity = capacity
        self.figure: Figure = plt.figure(figsize=(8, 5))
        self._count = 0

    def publish(self, snapshot: TelemetrySnapshot) -> None:
        self._count += 1
        if not snapshot.events and self._count % self.every != 0:
            return

        plot_strip_charts(
            snapshot.altitude_history,
            snapshot.velocity_history,
            capacity=self.capacity,
            fig=self.figure,
        )
        readout = snapshot.readouts()
        self.figure.suptitle(
            f"{readout['clock']}   {readout['status']}   FUEL {readout['fuel']}",
            color=snapshot.status.color if snapshot.status.color != "#ffffff" else COLORS["text"],
        )
        self.figure.canvas.draw_idle()

"""Full-run flight log and summary.

The rolling history behind the strip charts only keeps the latest samples.
FlightLog is a telemetry sink that keeps one row per published step for the
whole run, for post-flight analysis in memory.

Example:
    >>> from rocketlab.simulation import FlightLog, MissionController, run_fixed_step
    >>>
    >>> log = FlightLog()
    >>> controller = MissionController(sink=log)
    >>> controller.launch()
    >>> run_fixed_step(controller, dt=0.05)
    >>> print(format_flight_summary(log.summary()))
    >>> df = log.to_dataframe()
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from rocketlab.simulation.telemetry import TelemetrySnapshot
from rocketlab.vehicle.state import FlightEvent, MissionState


@beartype
@dataclass(frozen=True)
class FlightSummary:
    """Key figures of a run.

    Attributes:
        outcome: Final mission state
        flight_time: Mission time at the last record [s]
        max_altitude: Highest altitude reached [m]
        max_velocity: Highest upward velocity [m/s]
        min_velocity: Most negative (downward) velocity [m/s]
        peak_dynamic_pressure: Max-Q [Pa]
        meco_time: Mission time of engine cutoff, None if it never happened [s]
        apogee_time: Mission time of apogee, None if not reached [s]
    """
    outcome: MissionState
    flight_time: float
    max_altitude: float
    max_velocity: float
    min_velocity: float
    peak_dynamic_pressure: float
    meco_time: float | None = None
    apogee_time: float | None = None


@dataclass
class FlightLog:
    """Telemetry sink recording every step of the current run.

    Recording restarts at every launch (the launch snapshot has an empty
    rolling history). Aborts and resets return the controller to IDLE and
    discard the log, like the rest of the telemetry.
    """
    records: list[TelemetrySnapshot] = field(default_factory=list)

    def publish(self, snapshot: TelemetrySnapshot) -> None:
        if snapshot.mission_state is MissionState.IDLE:
            self.records.clear()
            return
        if snapshot.mission_state is MissionState.RUNNING and not snapshot.altitude_history:
            self.records.clear()
        self.records.append(snapshot)

    def __len__(self) -> int:
        return len(self.records)

    def _column(self, name: str) -> NDArray[np.float64]:
        return np.array([getattr(r, name) for r in self.records], dtype=np.float64)

    @property
    def time(self) -> NDArray[np.float64]:
        """Mission time [s]."""
        return self._column("mission_time")

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude [m]."""
        return self._column("altitude")

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity [m/s]."""
        return self._column("velocity")

    @property
    def acceleration(self) -> NDArray[np.float64]:
        """Acceleration [m/s^2]."""
        return self._column("acceleration")

    @property
    def dynamic_pressure(self) -> NDArray[np.float64]:
        """Dynamic pressure [Pa]."""
        return self._column("dynamic_pressure")

    @property
    def fuel_percent(self) -> NDArray[np.float64]:
        """Fuel remaining [%]."""
        return self._column("fuel_percent")

    def event_time(self, event: FlightEvent) -> float | None:
        """Mission time of the first occurrence of an event."""
        for record in self.records:
            if event in record.events:
                return record.mission_time
        return None

    def summary(self) -> FlightSummary:
        """Summarize the recorded run."""
        if not self.records:
            raise ValueError("Flight log is empty")

        last = self.records[-1]
        return FlightSummary(
            outcome=last.mission_state,
            flight_time=last.mission_time,
            max_altitude=float(np.max(self.altitude)),
            max_velocity=float(np.max(self.velocity)),
            min_velocity=float(np.min(self.velocity)),
            peak_dynamic_pressure=last.peak_dynamic_pressure,
            meco_time=self.event_time(FlightEvent.MECO),
            apogee_time=self.event_time(FlightEvent.APOGEE),
        )

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        return pl.DataFrame({
            "time": self.time,
            "altitude": self.altitude,
            "velocity": self.velocity,
            "acceleration": self.acceleration,
            "dynamic_pressure": self.dynamic_pressure,
            "fuel_percent": self.fuel_percent,
            "phase": [r.phase.value for r in self.records],
            "status": [r.status.text for r in self.records],
            "events": [",".join(e.value for e in r.events) for r in self.records],
        })


@beartype
def format_flight_summary(summary: FlightSummary) -> str:
    """Format a flight summary as a readable string."""
    def _event(t: float | None) -> str:
        return f"T+{t:.1f} s" if t is not None else "-"

    lines = [
        "=" * 50,
        "FLIGHT SUMMARY",
        "=" * 50,
        f"Outcome:              {summary.outcome.name}",
        f"Flight time:          {summary.flight_time:.1f} s",
        f"Max altitude:         {summary.max_altitude / 1000:.2f} km",
        f"Max velocity:         {summary.max_velocity:.0f} m/s",
        f"Max descent rate:     {-summary.min_velocity:.0f} m/s",
        f"Max-Q:                {summary.peak_dynamic_pressure / 1000:.1f} kPa",
        f"MECO:                 {_event(summary.meco_time)}",
        f"Apogee:               {_event(summary.apogee_time)}",
        "=" * 50,
    ]
    return "\n".join(lines)

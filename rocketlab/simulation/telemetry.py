"""Telemetry published by the mission controller.

The controller pushes one TelemetrySnapshot per step to an injected
TelemetrySink. Sinks decide how to render it: the recording sink keeps
every snapshot, the console sink prints readouts, and
rocketlab.plotting.StripChartSink draws the rolling strip charts.

Example:
    >>> from rocketlab.simulation import MissionController, RecordingSink
    >>>
    >>> sink = RecordingSink()
    >>> controller = MissionController(sink=sink)
    >>> controller.launch()
    >>> controller.step(0.016)
    >>> print(sink.latest.mission_clock, sink.latest.status)
"""

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from rocketlab.environment.atmosphere import G0
from rocketlab.vehicle.state import FlightEvent, FlightPhase, MissionState

IDLE_CLOCK = "T- 00:00:00"


# =============================================================================
# Formatting
# =============================================================================


@beartype
def format_mission_clock(mission_time: float | int) -> str:
    """Format elapsed mission time as 'T+ HH:MM:SS' (whole seconds)."""
    elapsed = int(max(mission_time, 0.0))
    hours, remainder = divmod(elapsed, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"T+ {hours:02d}:{minutes:02d}:{seconds:02d}"


# =============================================================================
# Status
# =============================================================================


@beartype
@dataclass(frozen=True)
class Status:
    """Status line shown next to the telemetry readouts."""
    text: str
    color: str


STATUS_READY = Status("SYSTEM READY", "#888888")
STATUS_LIFTOFF = Status("LIFTOFF!", "#00ff88")
STATUS_MAX_Q = Status("MAX Q (HIGH DYNAMIC PRESSURE)", "#ffd700")
STATUS_MECO = Status("MECO (MAIN ENGINE CUTOFF)", "#00f2ff")
STATUS_APOGEE = Status("APOGEE", "#ffffff")
STATUS_ABORTED = Status("MISSION ABORTED", "#ff0055")
STATUS_CRASHED = Status("CRASHED (MISSION FAILED)", "#ff0055")
STATUS_LANDED = Status("LANDING SUCCESSFUL", "#00ff88")

# MAX_Q_EXITED leaves the current status in place
EVENT_STATUS: dict[FlightEvent, Status] = {
    FlightEvent.MAX_Q_ENTERED: STATUS_MAX_Q,
    FlightEvent.MECO: STATUS_MECO,
    FlightEvent.APOGEE: STATUS_APOGEE,
    FlightEvent.CRASHED: STATUS_CRASHED,
    FlightEvent.LANDED: STATUS_LANDED,
}


@beartype
def status_after(current: Status, events: Iterable[FlightEvent]) -> Status:
    """Apply a step's events to the current status; the last event wins."""
    for event in events:
        current = EVENT_STATUS.get(event, current)
    return current


# =============================================================================
# Rolling History
# =============================================================================


class FlightHistory:
    """Fixed-capacity altitude/velocity history for the strip charts.

    Once full, each new sample evicts the oldest one.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._altitude: deque[float] = deque(maxlen=capacity)
        self._velocity: deque[float] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._altitude)

    def append(self, altitude: float, velocity: float) -> None:
        """Record one sample."""
        self._altitude.append(altitude)
        self._velocity.append(velocity)

    def clear(self) -> None:
        """Discard all samples."""
        self._altitude.clear()
        self._velocity.clear()

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude samples, oldest first [m]."""
        return np.array(self._altitude, dtype=np.float64)

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity samples, oldest first [m/s]."""
        return np.array(self._velocity, dtype=np.float64)


# =============================================================================
# Snapshot
# =============================================================================


@beartype
@dataclass(frozen=True)
class TelemetrySnapshot:
    """Everything the telemetry display needs after one step.

    Attributes:
        mission_state: Controller lifecycle state
        phase: Flight phase
        altitude: Altitude [m]
        velocity: Vertical velocity [m/s]
        acceleration: Vertical acceleration [m/s^2]
        dynamic_pressure: Dynamic pressure at the published altitude and
            velocity [Pa]
        peak_dynamic_pressure: Running Max-Q [Pa]
        fuel_percent: Fuel remaining, 0 to 100 [%]
        mission_time: Elapsed mission time [s]
        mission_clock: Clock text, 'T+ HH:MM:SS' or 'T- 00:00:00'
        status: Status line
        action_label: Label of the launch/abort/relaunch control
        max_q_active: Whether q is above the Max-Q threshold
        events: Events fired during the step
        altitude_history: Rolling altitude samples, oldest first [m]
        velocity_history: Rolling velocity samples, oldest first [m/s]
    """
    mission_state: MissionState
    phase: FlightPhase
    altitude: float
    velocity: float
    acceleration: float
    dynamic_pressure: float
    peak_dynamic_pressure: float
    fuel_percent: float
    mission_time: float
    mission_clock: str
    status: Status
    action_label: str
    max_q_active: bool = False
    events: tuple[FlightEvent, ...] = ()
    altitude_history: tuple[float, ...] = ()
    velocity_history: tuple[float, ...] = ()

    @property
    def acceleration_g(self) -> float:
        """Acceleration in multiples of standard gravity."""
        return self.acceleration / G0

    def readouts(self) -> dict[str, str]:
        """Display strings for the numeric readouts.

        Altitude and velocity are zero-padded to five and four digits. A
        negative value keeps its sign ahead of the padding, so -5 m/s reads
        "-005".
        """
        return {
            "altitude": f"{round(self.altitude):05d}",
            "velocity": f"{round(self.velocity):04d}",
            "acceleration": f"{self.acceleration_g:.1f}",
            "max_q": f"{round(self.peak_dynamic_pressure)}",
            "fuel": f"{round(self.fuel_percent)}%",
            "clock": self.mission_clock,
            "status": self.status.text,
        }


# =============================================================================
# Sinks
# =============================================================================


@runtime_checkable
class TelemetrySink(Protocol):
    """Consumer of telemetry snapshots."""

    def publish(self, snapshot: TelemetrySnapshot) -> None:
        """Receive one snapshot."""
        ...


@dataclass
class RecordingSink:
    """Sink that keeps every published snapshot."""
    snapshots: list[TelemetrySnapshot] = field(default_factory=list)

    def publish(self, snapshot: TelemetrySnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def latest(self) -> TelemetrySnapshot | None:
        """Most recent snapshot, or None before the first publish."""
        return self.snapshots[-1] if self.snapshots else None

    def events(self) -> list[FlightEvent]:
        """All events seen so far, in order."""
        return [event for snap in self.snapshots for event in snap.events]

    def clear(self) -> None:
        self.snapshots.clear()


class ConsoleSink:
    """Sink that prints a readout line every `every` snapshots.

    Snapshots carrying events are always printed.
    """

    def __init__(self, every: int = 30, write: Callable[[str], None] = print) -> None:
        if every < 1:
            raise ValueError(f"every must be at least 1, got {every}")
        self.every = every
        self._write = write
        self._count = 0

    def publish(self, snapshot: TelemetrySnapshot) -> None:
        self._count += 1
        if snapshot.events or self._count % self.every == 0:
            r = snapshot.readouts()
            self._write(
                f"{r['clock']}  ALT {r['altitude']} m  VEL {r['velocity']} m/s  "
                f"ACC {r['acceleration']} g  MAXQ {r['max_q']} Pa  "
                f"FUEL {r['fuel']}  {r['status']}"
            )


class MultiSink:
    """Sink that forwards every snapshot to several sinks, in order."""

    def __init__(self, *sinks: TelemetrySink) -> None:
        self.sinks = list(sinks)

    def publish(self, snapshot: TelemetrySnapshot) -> None:
        for sink in self.sinks:
            sink.publish(snapshot)

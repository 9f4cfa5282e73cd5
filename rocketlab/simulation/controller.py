"""Mission controller: launch / abort / reset lifecycle around the integrator.

The controller owns the flight session (vehicle state, run configuration,
rolling history, status line) and is driven by an external scheduler that
calls step() with the wall-clock time elapsed since the previous frame.

Lifecycle:
    IDLE --launch--> RUNNING --ground contact--> LANDED | CRASHED
    RUNNING --abort--> IDLE
    LANDED | CRASHED --launch (full reset first)--> RUNNING

A step requested while not RUNNING is a no-op, so a frame scheduled before
an abort or touchdown can never continue stale integration.

Example:
    >>> from rocketlab.simulation import ControlPanel, MissionController, RecordingSink
    >>>
    >>> panel = ControlPanel(fuel="10", payload="1", throttle="100")
    >>> sink = RecordingSink()
    >>> controller = MissionController(sink=sink, controls=panel)
    >>> controller.launch()
    >>> while controller.is_running:
    ...     controller.step(1 / 60)
    >>> print(controller.mission_state, sink.latest.status.text)
"""

import logging
from dataclasses import dataclass

from beartype import beartype

from rocketlab.environment.atmosphere import atmosphere
from rocketlab.inputs import RawValue, parse_or_zero, parse_percent
from rocketlab.simulation.integrator import FlightIntegrator, SimConfig, StepResult
from rocketlab.simulation.telemetry import (
    IDLE_CLOCK,
    STATUS_ABORTED,
    STATUS_LIFTOFF,
    STATUS_READY,
    FlightHistory,
    Status,
    TelemetrySink,
    TelemetrySnapshot,
    format_mission_clock,
    status_after,
)
from rocketlab.vehicle.state import (
    FlightEvent,
    MissionState,
    RunConfiguration,
    VehicleState,
)

logger = logging.getLogger(__name__)

ACTION_LABELS = {
    MissionState.IDLE: "LAUNCH",
    MissionState.RUNNING: "ABORT",
    MissionState.LANDED: "RELAUNCH",
    MissionState.CRASHED: "RELAUNCH",
}


# =============================================================================
# Control Panel
# =============================================================================


@dataclass
class ControlPanel:
    """User-facing inputs, stored exactly as entered.

    Fuel and payload are read once at launch; throttle is read on every
    step so it can be changed mid-flight.

    Attributes:
        fuel: Fuel load [t]
        payload: Payload mass [t]
        throttle: Throttle [%], integer 0 to 100
    """
    fuel: RawValue = "10"
    payload: RawValue = "1"
    throttle: RawValue = "100"

    def run_configuration(self) -> RunConfiguration:
        """Normalize fuel and payload into a run configuration."""
        return RunConfiguration.from_tonnes(
            fuel=parse_or_zero(self.fuel),
            payload=parse_or_zero(self.payload),
        )

    def throttle_fraction(self) -> float:
        """Current throttle setting as a fraction in [0, 1]."""
        return parse_percent(self.throttle) / 100.0


# =============================================================================
# Mission Controller
# =============================================================================


class MissionController:
    """Owns one flight session and its lifecycle.

    Args:
        sink: Telemetry consumer; receives a snapshot after every step and
            after every lifecycle transition
        controls: Control panel to read inputs from
        config: Integrator configuration
    """

    @beartype
    def __init__(
        self,
        sink: TelemetrySink | None = None,
        controls: ControlPanel | None = None,
        config: SimConfig | None = None,
    ) -> None:
        self.sink = sink
        self.controls = controls or ControlPanel()
        self.config = config or SimConfig()
        self.integrator = FlightIntegrator(self.config)

        self._state = VehicleState()
        self._run: RunConfiguration | None = None
        self._mission_state = MissionState.IDLE
        self._status = STATUS_READY
        self._history = FlightHistory(self.config.history_capacity)
        self._last_result: StepResult | None = None

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def state(self) -> VehicleState:
        """Copy of the current vehicle state."""
        return self._state.copy()

    @property
    def run(self) -> RunConfiguration | None:
        """Configuration of the current run, None when idle."""
        return self._run

    @property
    def mission_state(self) -> MissionState:
        return self._mission_state

    @property
    def is_running(self) -> bool:
        return self._mission_state is MissionState.RUNNING

    @property
    def status(self) -> Status:
        return self._status

    @property
    def history(self) -> FlightHistory:
        return self._history

    @property
    def last_result(self) -> StepResult | None:
        """Integrator result of the most recent step."""
        return self._last_result

    @property
    def action_label(self) -> str:
        """Label for the single launch / abort / relaunch control."""
        return ACTION_LABELS[self._mission_state]

    @property
    def fuel_percent(self) -> float:
        """Fuel remaining as a percentage of the initial load, in [0, 100]."""
        if self._run is None:
            return 0.0
        return 100.0 * self._state.fuel_fraction(self._run)

    @property
    def mission_clock(self) -> str:
        if self._mission_state is MissionState.IDLE:
            return IDLE_CLOCK
        return format_mission_clock(self._state.mission_time)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def press(self) -> TelemetrySnapshot:
        """Activate the tri-state control: launch, abort or relaunch."""
        if self.is_running:
            return self.abort()
        return self.launch()

    def launch(self) -> TelemetrySnapshot:
        """Start a run from the current control panel inputs.

        From LANDED or CRASHED the session is fully reset first. While
        RUNNING this is a no-op.
        """
        if self.is_running:
            logger.warning("Launch ignored: mission already running")
            return self.snapshot()

        if self._mission_state is not MissionState.IDLE:
            self.reset()

        self._run = self.controls.run_configuration()
        self._state = VehicleState.at_launch(self._run)
        self._history.clear()
        self._last_result = None
        self._mission_state = MissionState.RUNNING
        self._status = STATUS_LIFTOFF

        logger.info(
            "Launch: fuel=%.0f kg, payload=%.0f kg, liftoff mass=%.0f kg",
            self._run.fuel_mass_initial,
            self._run.payload_mass,
            self._run.initial_total_mass,
        )
        return self._publish()

    def abort(self) -> TelemetrySnapshot:
        """Stop a running mission and discard its telemetry.

        Aborting when not RUNNING changes nothing.
        """
        if not self.is_running:
            return self.snapshot()

        logger.info("Mission aborted at T+%.1f s", self._state.mission_time)
        self._clear_session()
        self._status = STATUS_ABORTED
        return self._publish()

    def reset(self) -> TelemetrySnapshot:
        """Return to IDLE with the zero state, as on a fresh start."""
        self._clear_session()
        self._status = STATUS_READY
        return self._publish()

    def step(self, raw_dt: float | int) -> TelemetrySnapshot | None:
        """Advance a running mission by one frame.

        Args:
            raw_dt: Wall-clock time since the previous frame [s]

        Returns:
            Published snapshot, or None if the mission is not running
        """
        if not self.is_running or self._run is None:
            return None

        result = self.integrator.step(
            self._state,
            self._run,
            throttle=self.controls.throttle_fraction(),
            raw_dt=float(raw_dt),
        )
        self._last_result = result
        self._history.append(self._state.altitude, self._state.velocity)
        self._status = status_after(self._status, result.events)

        for event in result.events:
            logger.debug("T+%.2f s: %s", self._state.mission_time, event.name)

        if FlightEvent.CRASHED in result.events:
            self._mission_state = MissionState.CRASHED
        elif FlightEvent.LANDED in result.events:
            self._mission_state = MissionState.LANDED

        if not self.is_running:
            logger.info(
                "Touchdown at T+%.1f s: %s (impact speed %.1f m/s)",
                self._state.mission_time,
                self._mission_state.name,
                result.impact_speed,
            )

        return self._publish(result.events)

    # -------------------------------------------------------------------------
    # Telemetry
    # -------------------------------------------------------------------------

    def snapshot(self, events: tuple[FlightEvent, ...] = ()) -> TelemetrySnapshot:
        """Build a snapshot of the current session without publishing it."""
        state = self._state
        q = 0.5 * atmosphere(state.altitude).density * state.velocity ** 2
        return TelemetrySnapshot(
            mission_state=self._mission_state,
            phase=state.phase,
            altitude=state.altitude,
            velocity=state.velocity,
            acceleration=state.acceleration,
            dynamic_pressure=q,
            peak_dynamic_pressure=state.peak_dynamic_pressure,
            fuel_percent=self.fuel_percent,
            mission_time=state.mission_time,
            mission_clock=self.mission_clock,
            status=self._status,
            action_label=self.action_label,
            max_q_active=state.max_q_active,
            events=events,
            altitude_history=tuple(self._history.altitude.tolist()),
            velocity_history=tuple(self._history.velocity.tolist()),
        )

    def _publish(self, events: tuple[FlightEvent, ...] = ()) -> TelemetrySnapshot:
        snap = self.snapshot(events)
        if self.sink is not None:
            self.sink.publish(snap)
        return snap

    def _clear_session(self) -> None:
        self._state = VehicleState()
        self._run = None
        self._history.clear()
        self._last_result = None
        self._mission_state = MissionState.IDLE

    def __repr__(self) -> str:
        return (
            f"MissionController(state={self._mission_state.name}, "
            f"phase={self._state.phase.name}, t={self._state.mission_time:.1f}s)"
        )

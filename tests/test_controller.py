"""Tests for the mission controller lifecycle."""

import pytest

from rocketlab.environment import atmosphere
from rocketlab.simulation import (
    ControlPanel,
    MissionController,
    RecordingSink,
    SimConfig,
    run_fixed_step,
)
from rocketlab.simulation.telemetry import (
    IDLE_CLOCK,
    STATUS_ABORTED,
    STATUS_CRASHED,
    STATUS_LANDED,
    STATUS_LIFTOFF,
    STATUS_READY,
)
from rocketlab.vehicle import FlightEvent, FlightPhase, MissionState, VehicleState


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def panel():
    return ControlPanel(fuel="10", payload="1", throttle="100")


@pytest.fixture
def controller(sink, panel):
    return MissionController(sink=sink, controls=panel)


# =============================================================================
# Initial State Tests
# =============================================================================


class TestIdle:
    """Test a freshly created controller."""

    def test_initial_state(self, controller, sink):
        """Starts idle, zeroed, with nothing published."""
        assert controller.mission_state is MissionState.IDLE
        assert controller.state == VehicleState()
        assert controller.status == STATUS_READY
        assert controller.action_label == "LAUNCH"
        assert controller.mission_clock == IDLE_CLOCK
        assert controller.fuel_percent == 0.0
        assert controller.run is None
        assert len(controller.history) == 0
        assert sink.snapshots == []

    def test_step_while_idle_is_noop(self, controller, sink):
        """Steps requested while idle do nothing."""
        assert controller.step(0.1) is None
        assert controller.state == VehicleState()
        assert sink.snapshots == []

    def test_works_without_sink(self):
        """A controller without a sink still flies."""
        controller = MissionController()
        controller.launch()
        controller.step(0.1)

        assert controller.state.altitude > 0


# =============================================================================
# Launch Tests
# =============================================================================


class TestLaunch:
    """Test launching a run."""

    def test_launch(self, controller, sink):
        """Launch reads the panel and publishes a liftoff snapshot."""
        snap = controller.launch()

        assert controller.mission_state is MissionState.RUNNING
        assert controller.action_label == "ABORT"
        assert controller.run.fuel_mass_initial == pytest.approx(10000.0)
        assert controller.state.total_mass == pytest.approx(12000.0)
        assert controller.fuel_percent == pytest.approx(100.0)
        assert snap.status == STATUS_LIFTOFF
        assert snap.mission_clock == "T+ 00:00:00"
        assert sink.latest is snap

    def test_press_launches_then_aborts(self, controller):
        """The single control toggles between launch and abort."""
        controller.press()
        assert controller.is_running

        controller.press()
        assert controller.mission_state is MissionState.IDLE
        assert controller.status == STATUS_ABORTED

    def test_launch_while_running_is_noop(self, controller, sink):
        """A second launch does not restart the flight."""
        controller.launch()
        controller.step(0.1)
        altitude = controller.state.altitude
        published = len(sink.snapshots)

        controller.launch()

        assert controller.state.altitude == altitude
        assert len(sink.snapshots) == published

    def test_fuel_and_payload_read_once(self, controller, panel):
        """Editing fuel mid-flight does not change the current run."""
        controller.launch()
        panel.fuel = "50"
        controller.step(0.1)

        assert controller.run.fuel_mass_initial == pytest.approx(10000.0)

    def test_throttle_read_every_step(self, controller, panel):
        """Throttle changes apply on the next step."""
        controller.launch()
        controller.step(0.1)
        assert controller.last_result.thrust == pytest.approx(5_000_000.0)

        panel.throttle = "50"
        controller.step(0.1)
        assert controller.last_result.thrust == pytest.approx(2_500_000.0)

    def test_mission_clock(self, controller):
        """Clock shows whole elapsed seconds."""
        controller.launch()
        for _ in range(25):
            controller.step(0.1)

        assert controller.mission_clock == "T+ 00:00:02"


# =============================================================================
# Abort and Reset Tests
# =============================================================================


class TestAbortAndReset:
    """Test abort and reset transitions."""

    def test_abort(self, controller, sink):
        """Abort zeroes the state and halts integration."""
        controller.launch()
        for _ in range(10):
            controller.step(0.1)

        snap = controller.abort()

        assert controller.mission_state is MissionState.IDLE
        assert controller.state == VehicleState()
        assert controller.mission_clock == IDLE_CLOCK
        assert len(controller.history) == 0
        assert snap.status == STATUS_ABORTED
        assert snap.action_label == "LAUNCH"
        assert snap.altitude_history == ()

    def test_abort_is_idempotent(self, controller, sink):
        """Aborting when not running changes nothing and publishes nothing."""
        controller.launch()
        controller.abort()
        published = len(sink.snapshots)

        snap = controller.abort()

        assert snap.status == STATUS_ABORTED
        assert controller.mission_state is MissionState.IDLE
        assert len(sink.snapshots) == published

    def test_step_after_abort_is_noop(self, controller):
        """A frame scheduled before the abort cannot resume the flight."""
        controller.launch()
        controller.step(0.1)
        controller.abort()

        assert controller.step(0.1) is None
        assert controller.state == VehicleState()

    def test_reset_round_trip(self, controller):
        """Reset returns exactly to the initial state."""
        controller.launch()
        for _ in range(30):
            controller.step(0.1)

        controller.reset()

        assert controller.state == VehicleState()
        assert controller.status == STATUS_READY
        assert controller.mission_state is MissionState.IDLE
        assert controller.last_result is None

    def test_mission_time_restarts(self, controller):
        """A relaunch after abort starts the clock from zero."""
        controller.launch()
        for _ in range(30):
            controller.step(0.1)
        controller.abort()

        controller.launch()

        assert controller.state.mission_time == 0.0
        assert controller.state.altitude == 0.0


# =============================================================================
# Touchdown Tests
# =============================================================================


class TestTouchdown:
    """Test landing and crash outcomes."""

    def test_zero_throttle_lands(self, controller, panel, sink):
        """An idle engine settles back on the pad: landing."""
        panel.throttle = "0"
        controller.launch()

        snap = controller.step(0.1)

        assert controller.mission_state is MissionState.LANDED
        assert controller.status == STATUS_LANDED
        assert controller.action_label == "RELAUNCH"
        assert snap.events == (FlightEvent.LANDED,)
        assert snap.phase is FlightPhase.LANDED
        assert controller.step(0.1) is None

    def test_ballistic_flight_crashes(self, controller, sink):
        """Full burn then free fall: crash."""
        controller.launch()

        steps = run_fixed_step(controller, dt=0.1)

        assert steps > 0
        assert controller.mission_state is MissionState.CRASHED
        assert controller.status == STATUS_CRASHED
        assert controller.action_label == "RELAUNCH"
        assert controller.state.altitude == 0.0
        assert controller.state.velocity == 0.0

        events = sink.events()
        assert events.count(FlightEvent.MECO) == 1
        assert events.count(FlightEvent.APOGEE) == 1
        assert events[-1] is FlightEvent.CRASHED
        assert events.index(FlightEvent.MECO) < events.index(FlightEvent.APOGEE)

    def test_relaunch_resets_first(self, controller, panel, sink):
        """Relaunching from a terminal state passes through a full reset."""
        panel.throttle = "0"
        controller.launch()
        controller.step(0.1)
        sink.clear()

        controller.press()

        assert [s.mission_state for s in sink.snapshots] == [
            MissionState.IDLE,
            MissionState.RUNNING,
        ]
        assert sink.snapshots[0].status == STATUS_READY
        assert controller.state.mission_time == 0.0
        assert controller.status == STATUS_LIFTOFF

    def test_fuel_percent_bounds(self, controller):
        """Fuel percent stays within [0, 100] for the whole flight."""
        controller.launch()
        while controller.is_running:
            snap = controller.step(0.1)
            assert 0.0 <= snap.fuel_percent <= 100.0

        assert snap.fuel_percent == 0.0


# =============================================================================
# History Tests
# =============================================================================


class TestHistory:
    """Test the rolling strip chart history."""

    def test_eviction(self, controller):
        """History keeps the latest 100 samples in order."""
        controller.launch()
        altitudes = []
        for _ in range(150):
            controller.step(1.0 / 60.0)
            altitudes.append(controller.state.altitude)

        history = controller.history
        assert len(history) == 100
        assert history.altitude.tolist() == altitudes[-100:]

    def test_snapshot_carries_history(self, controller, sink):
        """Published snapshots carry the rolling history."""
        controller.launch()
        controller.step(0.1)
        controller.step(0.1)

        assert len(sink.latest.altitude_history) == 2
        assert sink.latest.altitude_history[-1] == controller.state.altitude
        assert sink.latest.velocity_history[-1] == controller.state.velocity

    def test_custom_capacity(self, sink):
        """History capacity follows the configuration."""
        controller = MissionController(sink=sink, config=SimConfig(history_capacity=10))
        controller.launch()
        for _ in range(20):
            controller.step(0.01)

        assert len(controller.history) == 10


# =============================================================================
# Input Tolerance Tests
# =============================================================================


class TestTolerantInput:
    """Test degenerate control panel input."""

    @pytest.mark.parametrize(
        "fuel, payload",
        [("", ""), ("abc", "xyz"), ("-5", "-1"), (None, None), ("nan", "inf")],
    )
    def test_garbage_input_flies(self, sink, fuel, payload):
        """Garbage input launches a zero-mass vehicle that falls back."""
        panel = ControlPanel(fuel=fuel, payload=payload, throttle="100")
        controller = MissionController(sink=sink, controls=panel)

        controller.launch()
        controller.step(0.1)

        assert controller.run.fuel_mass_initial == 0.0
        assert controller.fuel_percent == 0.0
        assert controller.mission_state is MissionState.LANDED

    def test_garbage_throttle(self, controller, panel):
        """Unparseable throttle means engine idle."""
        panel.throttle = "full"
        controller.launch()
        controller.step(0.1)

        assert controller.last_result.thrust == 0.0

    def test_throttle_above_100(self, controller, panel):
        """Throttle above 100% is clamped."""
        panel.throttle = "250"
        controller.launch()
        controller.step(0.1)

        assert controller.last_result.thrust == pytest.approx(5_000_000.0)

    def test_partial_numeric_input(self, controller, panel):
        """Leading numbers are used, like a browser number field."""
        panel.fuel = "5t"
        controller.launch()

        assert controller.run.fuel_mass_initial == pytest.approx(5000.0)


# =============================================================================
# Snapshot Consistency Tests
# =============================================================================


class TestSnapshotDynamicPressure:
    """Published q matches the published altitude and velocity."""

    def test_matches_published_state(self, controller, sink):
        controller.launch()
        for _ in range(30):
            snap = controller.step(0.1)
            density = atmosphere(snap.altitude).density
            assert snap.dynamic_pressure == pytest.approx(0.5 * density * snap.velocity**2)

        assert snap.dynamic_pressure > 0.0
        assert snap.dynamic_pressure != pytest.approx(controller.last_result.dynamic_pressure)

    def test_zero_after_touchdown(self, controller, panel):
        panel.throttle = "0"
        controller.launch()

        snap = controller.step(0.1)

        assert snap.dynamic_pressure == 0.0

"""Tests for telemetry formatting, status rules and sinks."""

import pytest

from rocketlab.simulation import (
    ConsoleSink,
    FlightHistory,
    MultiSink,
    RecordingSink,
    TelemetrySink,
    TelemetrySnapshot,
    format_mission_clock,
)
from rocketlab.simulation.telemetry import (
    STATUS_APOGEE,
    STATUS_CRASHED,
    STATUS_LIFTOFF,
    STATUS_MAX_Q,
    STATUS_MECO,
    STATUS_READY,
    status_after,
)
from rocketlab.vehicle import FlightEvent, FlightPhase, MissionState


def make_snapshot(**overrides):
    values = dict(
        mission_state=MissionState.RUNNING,
        phase=FlightPhase.POWERED_FLIGHT,
        altitude=1234.4,
        velocity=56.6,
        acceleration=19.6133,
        dynamic_pressure=1500.0,
        peak_dynamic_pressure=2500.4,
        fuel_percent=87.5,
        mission_time=12.0,
        mission_clock="T+ 00:00:12",
        status=STATUS_LIFTOFF,
        action_label="ABORT",
    )
    values.update(overrides)
    return TelemetrySnapshot(**values)


class TestMissionClock:
    """Test the T+ clock format."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0.0, "T+ 00:00:00"),
            (0.99, "T+ 00:00:00"),
            (59.5, "T+ 00:00:59"),
            (61.0, "T+ 00:01:01"),
            (3725.0, "T+ 01:02:05"),
        ],
    )
    def test_format(self, seconds, expected):
        assert format_mission_clock(seconds) == expected


class TestStatus:
    """Test status line transitions."""

    def test_no_events_keeps_status(self):
        assert status_after(STATUS_LIFTOFF, ()) == STATUS_LIFTOFF

    def test_event_sets_status(self):
        assert status_after(STATUS_LIFTOFF, (FlightEvent.MAX_Q_ENTERED,)) == STATUS_MAX_Q
        assert status_after(STATUS_MAX_Q, (FlightEvent.MECO,)) == STATUS_MECO
        assert status_after(STATUS_MECO, (FlightEvent.APOGEE,)) == STATUS_APOGEE

    def test_max_q_exit_keeps_status(self):
        """Leaving Max-Q does not overwrite the status line."""
        assert status_after(STATUS_MAX_Q, (FlightEvent.MAX_Q_EXITED,)) == STATUS_MAX_Q

    def test_last_event_wins(self):
        """Several events in one step: the last one sets the status."""
        events = (FlightEvent.MAX_Q_ENTERED, FlightEvent.MECO, FlightEvent.CRASHED)

        assert status_after(STATUS_LIFTOFF, events) == STATUS_CRASHED

    def test_colors(self):
        assert STATUS_READY.color == "#888888"
        assert STATUS_MAX_Q.color == "#ffd700"
        assert STATUS_CRASHED.color == "#ff0055"


class TestSnapshot:
    """Test snapshot readouts."""

    def test_readouts(self):
        readout = make_snapshot().readouts()

        assert readout["altitude"] == "01234"
        assert readout["velocity"] == "0057"
        assert readout["acceleration"] == "2.0"
        assert readout["max_q"] == "2500"
        assert readout["fuel"] == "88%"
        assert readout["clock"] == "T+ 00:00:12"
        assert readout["status"] == "LIFTOFF!"

    def test_acceleration_g(self):
        assert make_snapshot(acceleration=9.80665).acceleration_g == pytest.approx(1.0)

    def test_frozen(self):
        snap = make_snapshot()

        with pytest.raises(AttributeError):
            snap.altitude = 0.0


class TestFlightHistory:
    """Test the fixed-capacity history buffer."""

    def test_eviction_order(self):
        history = FlightHistory(capacity=3)
        for i in range(5):
            history.append(float(i), float(-i))

        assert len(history) == 3
        assert history.altitude.tolist() == [2.0, 3.0, 4.0]
        assert history.velocity.tolist() == [-2.0, -3.0, -4.0]

    def test_clear(self):
        history = FlightHistory()
        history.append(1.0, 2.0)
        history.clear()

        assert len(history) == 0
        assert history.altitude.size == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError, match="capacity"):
            FlightHistory(capacity=0)


class TestSinks:
    """Test the bundled telemetry sinks."""

    def test_protocol(self):
        assert isinstance(RecordingSink(), TelemetrySink)
        assert isinstance(ConsoleSink(), TelemetrySink)
        assert isinstance(MultiSink(), TelemetrySink)

    def test_recording_sink(self):
        sink = RecordingSink()
        assert sink.latest is None

        first = make_snapshot(events=(FlightEvent.MAX_Q_ENTERED,))
        second = make_snapshot(events=(FlightEvent.MECO, FlightEvent.APOGEE))
        sink.publish(first)
        sink.publish(second)

        assert sink.latest is second
        assert sink.events() == [
            FlightEvent.MAX_Q_ENTERED,
            FlightEvent.MECO,
            FlightEvent.APOGEE,
        ]

    def test_console_sink_period(self):
        lines = []
        sink = ConsoleSink(every=3, write=lines.append)

        for _ in range(6):
            sink.publish(make_snapshot())

        assert len(lines) == 2
        assert "ALT 01234 m" in lines[0]
        assert "LIFTOFF!" in lines[0]

    def test_console_sink_prints_events(self):
        lines = []
        sink = ConsoleSink(every=100, write=lines.append)

        sink.publish(make_snapshot(events=(FlightEvent.MECO,), status=STATUS_MECO))

        assert len(lines) == 1
        assert "MECO" in lines[0]

    def test_multi_sink(self):
        a, b = RecordingSink(), RecordingSink()
        sink = MultiSink(a, b)
        snap = make_snapshot()

        sink.publish(snap)

        assert a.snapshots == [snap]
        assert b.snapshots == [snap]


class TestIntegerInput:
    """Whole-number values are accepted where floats are."""

    def test_mission_clock(self):
        assert format_mission_clock(5) == "T+ 00:00:05"
        assert format_mission_clock(3725) == "T+ 01:02:05"

    def test_negative_readouts_keep_sign(self):
        readout = make_snapshot(velocity=-5.2).readouts()

        assert readout["velocity"] == "-005"

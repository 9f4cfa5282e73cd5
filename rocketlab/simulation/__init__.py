"""Simulation module for the vertical ascent/descent flight simulator.

Provides the step-driven interface: an external driver owns the loop and
calls MissionController.step() with the time elapsed since the previous
frame; the controller advances the vehicle and publishes telemetry.

Example:
    >>> from rocketlab.simulation import (
    ...     ControlPanel, FlightLog, MissionController, run_fixed_step,
    ... )
    >>>
    >>> panel = ControlPanel(fuel="10", payload="1", throttle="80")
    >>> log = FlightLog()
    >>> controller = MissionController(sink=log, controls=panel)
    >>> controller.launch()
    >>> run_fixed_step(controller, dt=1 / 60)
    >>> print(log.summary().max_altitude)
"""

from rocketlab.simulation.controller import (
    ACTION_LABELS,
    ControlPanel,
    MissionController,
)
from rocketlab.simulation.driver import (
    RealTimeDriver,
    run_fixed_step,
)
from rocketlab.simulation.integrator import (
    FlightIntegrator,
    SimConfig,
    StepResult,
)
from rocketlab.simulation.results import (
    FlightLog,
    FlightSummary,
    format_flight_summary,
)
from rocketlab.simulation.telemetry import (
    IDLE_CLOCK,
    ConsoleSink,
    FlightHistory,
    MultiSink,
    RecordingSink,
    Status,
    TelemetrySink,
    TelemetrySnapshot,
    format_mission_clock,
)

__all__ = [
    # Controller
    "ACTION_LABELS",
    "ControlPanel",
    "MissionController",
    # Drivers
    "RealTimeDriver",
    "run_fixed_step",
    # Integrator
    "FlightIntegrator",
    "SimConfig",
    "StepResult",
    # Results
    "FlightLog",
    "FlightSummary",
    "format_flight_summary",
    # Telemetry
    "IDLE_CLOCK",
    "ConsoleSink",
    "FlightHistory",
    "MultiSink",
    "RecordingSink",
    "Status",
    "TelemetrySink",
    "TelemetrySnapshot",
    "format_mission_clock",
]

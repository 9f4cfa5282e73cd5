"""rocketlab - Vertical rocket flight simulator and rocketry calculators.

This package provides a step-driven single-vehicle ascent/descent
simulator (gravity, exponential atmosphere, drag, Max-Q tracking, thrust
and propellant depletion) with a launch/abort/reset mission controller
and pluggable telemetry sinks, plus quick rocketry calculators.

Example:
    >>> from rocketlab import ControlPanel, FlightLog, MissionController, run_fixed_step
    >>>
    >>> panel = ControlPanel(fuel="10", payload="1", throttle="100")
    >>> log = FlightLog()
    >>> controller = MissionController(sink=log, controls=panel)
    >>> controller.launch()
    >>> run_fixed_step(controller, dt=1 / 60)
    >>> summary = log.summary()
    >>> print(f"Apogee: {summary.max_altitude / 1000:.1f} km, outcome: {summary.outcome.name}")
"""

__version__ = "0.1.0"

# Quick calculators
from rocketlab.calculators import (
    LiftoffVerdict,
    OrbitRegime,
    TWRAssessment,
    delta_v,
    orbit_regime,
    thrust_to_weight,
)

# Environment
from rocketlab.environment import (
    AtmosphereReadout,
    AtmosphereSample,
    ExponentialAtmosphere,
    atmosphere,
)

# Input normalization
from rocketlab.inputs import (
    parse_or_zero,
    parse_percent,
)

# Simulation
from rocketlab.simulation import (
    ConsoleSink,
    ControlPanel,
    FlightHistory,
    FlightIntegrator,
    FlightLog,
    FlightSummary,
    MissionController,
    MultiSink,
    RealTimeDriver,
    RecordingSink,
    SimConfig,
    Status,
    StepResult,
    TelemetrySink,
    TelemetrySnapshot,
    format_flight_summary,
    format_mission_clock,
    run_fixed_step,
)

# Vehicle
from rocketlab.vehicle import (
    FlightEvent,
    FlightPhase,
    MissionState,
    RunConfiguration,
    VehicleState,
)

__all__ = [
    # Version
    "__version__",
    # Calculators
    "LiftoffVerdict",
    "OrbitRegime",
    "TWRAssessment",
    "delta_v",
    "orbit_regime",
    "thrust_to_weight",
    # Environment
    "AtmosphereReadout",
    "AtmosphereSample",
    "ExponentialAtmosphere",
    "atmosphere",
    # Inputs
    "parse_or_zero",
    "parse_percent",
    # Simulation
    "ConsoleSink",
    "ControlPanel",
    "FlightHistory",
    "FlightIntegrator",
    "FlightLog",
    "FlightSummary",
    "MissionController",
    "MultiSink",
    "RealTimeDriver",
    "RecordingSink",
    "SimConfig",
    "Status",
    "StepResult",
    "TelemetrySink",
    "TelemetrySnapshot",
    "format_flight_summary",
    "format_mission_clock",
    "run_fixed_step",
    # Vehicle
    "FlightEvent",
    "FlightPhase",
    "MissionState",
    "RunConfiguration",
    "VehicleState",
]

"""Vehicle state for the vertical flight simulator.

Example:
    >>> from rocketlab.vehicle import RunConfiguration, VehicleState
    >>>
    >>> run = RunConfiguration.from_tonnes(fuel=10.0, payload=1.0)
    >>> state = VehicleState.at_launch(run)
    >>> print(f"Liftoff mass: {state.total_mass:.0f} kg")
"""

from rocketlab.vehicle.state import (
    KG_PER_TONNE,
    MAX_THRUST,
    SPECIFIC_IMPULSE,
    STRUCTURE_MASS_FRACTION,
    FlightEvent,
    FlightPhase,
    MissionState,
    RunConfiguration,
    VehicleState,
)

__all__ = [
    # Constants
    "KG_PER_TONNE",
    "MAX_THRUST",
    "SPECIFIC_IMPULSE",
    "STRUCTURE_MASS_FRACTION",
    # Enumerations
    "FlightEvent",
    "FlightPhase",
    "MissionState",
    # State
    "RunConfiguration",
    "VehicleState",
]

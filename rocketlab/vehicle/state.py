"""Vehicle state and run configuration for the vertical flight simulator.

The state is one-dimensional: everything moves along the local vertical,
positive up.

- VehicleState: mutable record advanced by the flight integrator
- RunConfiguration: immutable vehicle definition snapshotted at launch
- FlightPhase / MissionState / FlightEvent: enumerations shared by the
  integrator, the mission controller and telemetry

Mass bookkeeping:
    total_mass = structure_mass + payload_mass + fuel_mass
    structure_mass = structure_mass_fraction * fuel_mass_initial
"""

from dataclasses import dataclass, replace
from enum import Enum

from beartype import beartype

# =============================================================================
# Vehicle Constants
# =============================================================================

STRUCTURE_MASS_FRACTION = 0.1  # Structure mass per unit of initial fuel
MAX_THRUST = 5_000_000.0  # [N]
SPECIFIC_IMPULSE = 300.0  # [s]

KG_PER_TONNE = 1000.0


# =============================================================================
# Enumerations
# =============================================================================


class FlightPhase(Enum):
    """Physical phase of the vehicle."""

    IDLE = "idle"
    POWERED_FLIGHT = "powered_flight"
    MECO_COAST = "meco_coast"
    GROUND_IMPACT = "ground_impact"  # Crash
    LANDED = "landed"

    @property
    def is_terminal(self) -> bool:
        """True once the vehicle is back on the ground."""
        return self in (FlightPhase.GROUND_IMPACT, FlightPhase.LANDED)


class MissionState(Enum):
    """Lifecycle state of the mission controller."""

    IDLE = "idle"
    RUNNING = "running"
    LANDED = "landed"
    CRASHED = "crashed"


class FlightEvent(Enum):
    """Events reported by a single integration step."""

    MECO = "meco"
    APOGEE = "apogee"
    MAX_Q_ENTERED = "max_q_entered"
    MAX_Q_EXITED = "max_q_exited"
    LANDED = "landed"
    CRASHED = "crashed"


# =============================================================================
# Run Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class RunConfiguration:
    """Vehicle definition for one run.

    Throttle is not part of the configuration: it is sampled live from the
    control panel on every step.

    Attributes:
        fuel_mass_initial: Propellant loaded at launch [kg]
        payload_mass: Payload mass [kg]
        structure_mass_fraction: Structure mass per kg of initial fuel
        max_thrust: Thrust at 100% throttle [N]
        specific_impulse: Specific impulse [s]
    """
    fuel_mass_initial: float | int
    payload_mass: float | int
    structure_mass_fraction: float | int = STRUCTURE_MASS_FRACTION
    max_thrust: float | int = MAX_THRUST
    specific_impulse: float | int = SPECIFIC_IMPULSE

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.fuel_mass_initial < 0:
            raise ValueError(f"Fuel mass must be non-negative, got {self.fuel_mass_initial}")
        if self.payload_mass < 0:
            raise ValueError(f"Payload mass must be non-negative, got {self.payload_mass}")
        if self.structure_mass_fraction < 0:
            raise ValueError(
                f"Structure mass fraction must be non-negative, got {self.structure_mass_fraction}"
            )
        if self.max_thrust < 0:
            raise ValueError(f"Max thrust must be non-negative, got {self.max_thrust}")
        if self.specific_impulse <= 0:
            raise ValueError(f"Specific impulse must be positive, got {self.specific_impulse}")

    @classmethod
    def from_tonnes(cls, fuel: float | int, payload: float | int) -> "RunConfiguration":
        """Create from fuel and payload masses given in tonnes.

        Args:
            fuel: Fuel load [t]
            payload: Payload mass [t]
        """
        return cls(
            fuel_mass_initial=fuel * KG_PER_TONNE,
            payload_mass=payload * KG_PER_TONNE,
        )

    @property
    def structure_mass(self) -> float:
        """Structure mass [kg]."""
        return self.structure_mass_fraction * self.fuel_mass_initial

    @property
    def dry_mass(self) -> float:
        """Mass with empty tanks: structure + payload [kg]."""
        return self.structure_mass + self.payload_mass

    @property
    def initial_total_mass(self) -> float:
        """Liftoff mass [kg]."""
        return self.dry_mass + self.fuel_mass_initial


# =============================================================================
# Vehicle State
# =============================================================================


@beartype
@dataclass
class VehicleState:
    """Vertical flight state.

    The default instance is the zero form shown before any launch.

    Attributes:
        altitude: Height above the reference surface [m]
        velocity: Vertical velocity, positive up [m/s]
        acceleration: Vertical acceleration from the last step [m/s^2]
        fuel_mass: Remaining propellant [kg]
        total_mass: Current vehicle mass [kg]
        mission_time: Time since launch [s]
        peak_dynamic_pressure: Running maximum of q [Pa]
        phase: Current flight phase
        max_q_active: Whether q is above the Max-Q threshold
    """
    altitude: float = 0.0
    velocity: float = 0.0
    acceleration: float = 0.0
    fuel_mass: float = 0.0
    total_mass: float = 0.0
    mission_time: float = 0.0
    peak_dynamic_pressure: float = 0.0
    phase: FlightPhase = FlightPhase.IDLE
    max_q_active: bool = False

    @classmethod
    def at_launch(cls, run: RunConfiguration) -> "VehicleState":
        """Create the state on the pad for a run.

        A vehicle launched without fuel starts out coasting.
        """
        fuel = run.fuel_mass_initial
        return cls(
            fuel_mass=float(fuel),
            total_mass=float(run.initial_total_mass),
            phase=FlightPhase.POWERED_FLIGHT if fuel > 0 else FlightPhase.MECO_COAST,
        )

    def copy(self) -> "VehicleState":
        """Create a copy of this state."""
        return replace(self)

    def fuel_fraction(self, run: RunConfiguration) -> float:
        """Remaining fuel as a fraction of the initial load, in [0, 1]."""
        if run.fuel_mass_initial <= 0:
            return 0.0
        return min(1.0, max(0.0, self.fuel_mass / run.fuel_mass_initial))

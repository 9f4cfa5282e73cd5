"""Single-step flight integrator for the vertical ascent/descent simulator.

Advances a VehicleState by one time step under gravity, drag and thrust
using semi-implicit Euler, and reports the flight events the step produced.

Step sequence:
    1. Clamp the step size (long frames are capped, never compressed)
    2. Look up density and gravity at the current altitude
    3. Drag opposing the current velocity
    4. Dynamic pressure and the running Max-Q
    5. Thrust and propellant burn (MECO on depletion)
    6. Net force and acceleration
    7. Integrate velocity, then altitude with the updated velocity
    8. Ground contact (terminal): landed or crashed
    9. Apogee detection (informational)
    10. Advance mission time

Example:
    >>> from rocketlab.simulation import FlightIntegrator
    >>> from rocketlab.vehicle import RunConfiguration, VehicleState
    >>>
    >>> run = RunConfiguration.from_tonnes(fuel=10.0, payload=1.0)
    >>> state = VehicleState.at_launch(run)
    >>> integrator = FlightIntegrator()
    >>> result = integrator.step(state, run, throttle=1.0, raw_dt=0.016)
    >>> print(result.phase, result.events)
"""

import math
from dataclasses import dataclass, field

from beartype import beartype

from rocketlab.environment.atmosphere import G0, atmosphere
from rocketlab.vehicle.state import (
    FlightEvent,
    FlightPhase,
    RunConfiguration,
    VehicleState,
)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Integrator configuration.

    Attributes:
        max_dt: Upper bound on a single step [s]
        drag_area: Combined drag coefficient times reference area [m^2]
        max_q_threshold: Dynamic pressure flagged as Max-Q [Pa]
        crash_speed: Impact speed above which touchdown is a crash [m/s]
        apogee_min_altitude: Apogee is only reported above this altitude [m]
        history_capacity: Samples kept for the rolling strip charts
    """
    max_dt: float | int = 0.1
    drag_area: float | int = 0.5
    max_q_threshold: float | int = 5000.0
    crash_speed: float | int = 10.0
    apogee_min_altitude: float | int = 100.0
    history_capacity: int = 100

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {self.max_dt}")
        if self.drag_area < 0:
            raise ValueError(f"drag_area must be non-negative, got {self.drag_area}")
        if self.crash_speed < 0:
            raise ValueError(f"crash_speed must be non-negative, got {self.crash_speed}")
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be at least 1, got {self.history_capacity}")


# =============================================================================
# Step Result
# =============================================================================


@beartype
@dataclass(frozen=True)
class StepResult:
    """Outcome of one integration step.

    Attributes:
        dt: Step size actually integrated [s]
        phase: Flight phase after the step
        events: Events fired during the step, in firing order
        thrust: Thrust applied [N]
        drag: Drag force, signed along velocity [N]
        dynamic_pressure: q at the start of the step [Pa]
        density: Air density at the start of the step [kg/m^3]
        gravity: Gravitational acceleration at the start of the step [m/s^2]
        impact_speed: Speed at ground contact, 0 if no contact [m/s]
    """
    dt: float
    phase: FlightPhase
    events: tuple[FlightEvent, ...] = ()
    thrust: float = 0.0
    drag: float = 0.0
    dynamic_pressure: float = 0.0
    density: float = 0.0
    gravity: float = 0.0
    impact_speed: float = 0.0

    @property
    def terminal(self) -> bool:
        """True if the step ended the flight."""
        return self.phase.is_terminal


# =============================================================================
# Integrator
# =============================================================================


@beartype
@dataclass
class FlightIntegrator:
    """Semi-implicit Euler integrator for vertical flight.

    Stateless apart from its configuration: everything that evolves lives
    in the VehicleState passed to step().
    """
    config: SimConfig = field(default_factory=SimConfig)

    def clamp_dt(self, raw_dt: float | int) -> float:
        """Clamp a wall-clock delta to [0, max_dt]."""
        return float(min(max(raw_dt, 0.0), self.config.max_dt))

    def step(
        self,
        state: VehicleState,
        run: RunConfiguration,
        throttle: float | int,
        raw_dt: float | int,
    ) -> StepResult:
        """Advance the state in place by one step.

        Args:
            state: Vehicle state, mutated in place
            run: Vehicle definition for this run
            throttle: Throttle fraction (0 to 1), sampled for this step
            raw_dt: Elapsed time since the previous step [s]

        Returns:
            StepResult with the phase and events of this step
        """
        cfg = self.config
        events: list[FlightEvent] = []

        dt = self.clamp_dt(raw_dt)
        throttle = float(min(max(throttle, 0.0), 1.0))
        velocity_before = state.velocity

        # Environment
        density, gravity = atmosphere(state.altitude)

        # Drag opposes motion
        q = 0.5 * density * state.velocity ** 2
        drag = q * cfg.drag_area * math.copysign(1.0, state.velocity) if state.velocity else 0.0

        # Max-Q
        state.peak_dynamic_pressure = max(state.peak_dynamic_pressure, q)
        above_max_q = q > cfg.max_q_threshold
        if above_max_q and not state.max_q_active:
            events.append(FlightEvent.MAX_Q_ENTERED)
        elif not above_max_q and state.max_q_active:
            events.append(FlightEvent.MAX_Q_EXITED)
        state.max_q_active = above_max_q

        # Thrust and propellant burn
        thrust = 0.0
        if state.fuel_mass > 0:
            thrust = run.max_thrust * throttle
            mass_flow = thrust / (run.specific_impulse * G0)
            burned = min(mass_flow * dt, state.fuel_mass)

            state.fuel_mass -= burned
            state.total_mass -= burned

            if state.fuel_mass <= 0:
                state.fuel_mass = 0.0
                state.phase = FlightPhase.MECO_COAST
                events.append(FlightEvent.MECO)

        # Net force and acceleration
        weight = state.total_mass * gravity
        net_force = thrust - weight - drag
        if state.total_mass > 0:
            state.acceleration = net_force / state.total_mass
        else:
            state.acceleration = -gravity

        # Semi-implicit Euler
        state.velocity += state.acceleration * dt
        state.altitude += state.velocity * dt
        state.mission_time += dt

        impact_speed = 0.0
        if state.altitude < 0:
            impact_speed = abs(state.velocity)
            state.altitude = 0.0
            state.velocity = 0.0
            state.acceleration = 0.0

            if impact_speed > cfg.crash_speed:
                state.phase = FlightPhase.GROUND_IMPACT
                events.append(FlightEvent.CRASHED)
            else:
                state.phase = FlightPhase.LANDED
                events.append(FlightEvent.LANDED)
        elif (
            velocity_before > 0.0 >= state.velocity
            and state.altitude > cfg.apogee_min_altitude
        ):
            events.append(FlightEvent.APOGEE)

        return StepResult(
            dt=dt,
            phase=state.phase,
            events=tuple(events),
            thrust=thrust,
            drag=drag,
            dynamic_pressure=q,
            density=density,
            gravity=gravity,
            impact_speed=impact_speed,
        )

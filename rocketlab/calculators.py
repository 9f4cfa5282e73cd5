"""Quick rocketry calculators.

Stateless formulas evaluated on every input change, with the same
tolerant-input policy as the simulator: invalid or missing values give a
neutral zero result instead of an error.

- Ideal delta-v (Tsiolkovsky rocket equation)
- Thrust-to-weight ratio with a liftoff verdict
- Orbit regime from speed

Example:
    >>> from rocketlab.calculators import delta_v, thrust_to_weight, orbit_regime
    >>>
    >>> dv = delta_v(isp=311.0, wet_mass=549054.0, dry_mass=25600.0)
    >>> twr = thrust_to_weight(thrust=7.6e6, mass=549054.0)
    >>> print(f"dv = {dv:.0f} m/s, TWR = {twr.ratio:.2f} ({twr.verdict.value})")
    >>> print(orbit_regime(7800.0))
"""

import math
from dataclasses import dataclass
from enum import Enum

from beartype import beartype

from rocketlab.environment.atmosphere import G0
from rocketlab.inputs import RawValue, parse_or_zero

# Speed thresholds for the orbit regime classifier [m/s]
ORBITAL_SPEED = 7000.0
ESCAPE_SPEED = 11000.0

# Thrust-to-weight verdict thresholds
TWR_LIFTOFF = 1.0
TWR_COMFORTABLE = 1.2
TWR_INDICATOR_MAX = 3.0


# =============================================================================
# Delta-V
# =============================================================================


@beartype
def delta_v(isp: RawValue, wet_mass: RawValue, dry_mass: RawValue) -> float:
    """Ideal delta-v from the rocket equation.

    dv = Isp * g0 * ln(m_wet / m_dry)

    Args:
        isp: Specific impulse [s]
        wet_mass: Fueled mass [any unit, same as dry_mass]
        dry_mass: Empty mass

    Returns:
        Delta-v [m/s], 0.0 unless all inputs are positive and wet > dry
    """
    isp_s = parse_or_zero(isp)
    wet = parse_or_zero(wet_mass)
    dry = parse_or_zero(dry_mass)

    if isp_s > 0 and wet > 0 and dry > 0 and wet > dry:
        return isp_s * G0 * math.log(wet / dry)
    return 0.0


# =============================================================================
# Thrust-to-Weight
# =============================================================================


class LiftoffVerdict(Enum):
    """Liftoff assessment for a thrust-to-weight ratio."""

    NO_INPUT = "-"
    INSUFFICIENT = "insufficient thrust (cannot lift off)"
    MARGINAL = "marginal liftoff (very slow)"
    NOMINAL = "flight ready"


VERDICT_COLORS = {
    LiftoffVerdict.NO_INPUT: "#888888",
    LiftoffVerdict.INSUFFICIENT: "#ff0055",
    LiftoffVerdict.MARGINAL: "#ffd700",
    LiftoffVerdict.NOMINAL: "#00ff88",
}


@beartype
@dataclass(frozen=True)
class TWRAssessment:
    """Thrust-to-weight result.

    Attributes:
        ratio: Thrust / (mass * g0)
        verdict: Liftoff assessment
        indicator: Gauge fill, ratio mapped from [0, 3] to [0, 1]
    """
    ratio: float
    verdict: LiftoffVerdict
    indicator: float

    @property
    def color(self) -> str:
        return VERDICT_COLORS[self.verdict]


@beartype
def thrust_to_weight(thrust: RawValue, mass: RawValue) -> TWRAssessment:
    """Thrust-to-weight ratio at sea level.

    Args:
        thrust: Thrust [N]
        mass: Vehicle mass [kg]
    """
    thrust_n = parse_or_zero(thrust)
    mass_kg = parse_or_zero(mass)

    if thrust_n <= 0 or mass_kg <= 0:
        return TWRAssessment(ratio=0.0, verdict=LiftoffVerdict.NO_INPUT, indicator=0.0)

    ratio = thrust_n / (mass_kg * G0)

    if ratio < TWR_LIFTOFF:
        verdict = LiftoffVerdict.INSUFFICIENT
    elif ratio < TWR_COMFORTABLE:
        verdict = LiftoffVerdict.MARGINAL
    else:
        verdict = LiftoffVerdict.NOMINAL

    return TWRAssessment(
        ratio=ratio,
        verdict=verdict,
        indicator=min(ratio / TWR_INDICATOR_MAX, 1.0),
    )


# =============================================================================
# Orbit Regime
# =============================================================================


class OrbitRegime(Enum):
    """Trajectory class for a horizontal speed near low Earth orbit."""

    SUBORBITAL = "suborbital (falling back)"
    ORBITAL = "orbital (stable)"
    ESCAPE = "escape velocity"


@beartype
def orbit_regime(speed: RawValue) -> OrbitRegime:
    """Classify a speed [m/s] as suborbital, orbital or escape.

    Circular orbit speed in LEO is about 7.8 km/s and escape speed about
    11.2 km/s; the classifier uses rounded 7 and 11 km/s boundaries.
    """
    v = parse_or_zero(speed)
    if v < ORBITAL_SPEED:
        return OrbitRegime.SUBORBITAL
    if v < ESCAPE_SPEED:
        return OrbitRegime.ORBITAL
    return OrbitRegime.ESCAPE

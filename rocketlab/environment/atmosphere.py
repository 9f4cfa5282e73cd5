"""Exponential scale-height atmosphere with inverse-square gravity.

A deliberately simple Earth environment for the vertical flight simulator:

- Density falls off exponentially with a single scale height:
  rho = rho0 * exp(-h / H)
- Pressure uses the same scale height: p = p0 * exp(-h / H)
- Gravity falls off with the square of the distance from Earth's center:
  g = g0 * (R / (R + h))^2

The hot path used by the integrator is a numba-compiled kernel returning
(density, gravity) in one call.

Example:
    >>> from rocketlab.environment import atmosphere, ExponentialAtmosphere
    >>>
    >>> rho, g = atmosphere(10000.0)
    >>> print(f"Density: {rho:.4f} kg/m^3, gravity: {g:.3f} m/s^2")
    >>>
    >>> atm = ExponentialAtmosphere()
    >>> readout = atm.readout_km(50.0)
    >>> print(f"Pressure at 50 km: {readout.pressure:.0f} Pa")
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

G0 = 9.80665  # Standard gravity [m/s^2]
R_EARTH = 6371000.0  # Mean Earth radius [m]

# Sea level conditions
RHO0 = 1.225  # Density [kg/m^3]
P0 = 101325.0  # Pressure [Pa]

SCALE_HEIGHT = 8500.0  # [m]


# =============================================================================
# Numba-Optimized Core Function
# =============================================================================


@njit(cache=True, fastmath=True)
def _density_and_gravity(
    altitude: float,
    rho0: float = RHO0,
    scale_height: float = SCALE_HEIGHT,
    g0: float = G0,
    r_earth: float = R_EARTH,
) -> tuple[float, float]:
    """Numba-optimized environment lookup."""
    density = rho0 * np.exp(-altitude / scale_height)

    ratio = r_earth / (r_earth + altitude)
    gravity = g0 * ratio * ratio

    return (density, gravity)


# =============================================================================
# Result Classes
# =============================================================================


class AtmosphereSample(NamedTuple):
    """Environment seen by the vehicle at one altitude."""
    density: float   # Air density [kg/m^3]
    gravity: float   # Gravitational acceleration [m/s^2]


@beartype
@dataclass(frozen=True)
class AtmosphereReadout:
    """Atmospheric conditions for the altitude lookup tool.

    Attributes:
        altitude: Altitude [m]
        density: Air density [kg/m^3]
        pressure: Static pressure [Pa]
        gravity: Gravitational acceleration [m/s^2]
    """
    altitude: float
    density: float
    pressure: float
    gravity: float

    @property
    def altitude_km(self) -> float:
        """Altitude [km]."""
        return self.altitude / 1000.0

    @property
    def pressure_fraction(self) -> float:
        """Pressure as a fraction of sea level pressure."""
        return self.pressure / P0


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
def atmosphere(altitude: float | int) -> AtmosphereSample:
    """Get (density, gravity) at altitude.

    Defined for every real altitude; density tends to zero as altitude
    grows and is never negative.

    Args:
        altitude: Altitude above the reference surface [m]

    Returns:
        AtmosphereSample(density [kg/m^3], gravity [m/s^2])
    """
    density, gravity = _density_and_gravity(float(altitude))
    return AtmosphereSample(density=float(density), gravity=float(gravity))


@beartype
class ExponentialAtmosphere:
    """Exponential atmosphere model with configurable sea level parameters.

    Example:
        >>> atm = ExponentialAtmosphere()
        >>> rho = atm.density(10000.0)
        >>> q = atm.dynamic_pressure(10000.0, 300.0)
        >>> table = atm.profile(np.linspace(0.0, 100e3, 11))
    """

    def __init__(
        self,
        rho0: float | int = RHO0,
        p0: float | int = P0,
        scale_height: float | int = SCALE_HEIGHT,
        g0: float | int = G0,
        r_earth: float | int = R_EARTH,
    ) -> None:
        """Initialize atmosphere model.

        Args:
            rho0: Sea level density [kg/m^3]
            p0: Sea level pressure [Pa]
            scale_height: Scale height [m]
            g0: Surface gravity [m/s^2]
            r_earth: Planet radius [m]
        """
        if scale_height <= 0:
            raise ValueError(f"Scale height must be positive, got {scale_height}")
        if r_earth <= 0:
            raise ValueError(f"Planet radius must be positive, got {r_earth}")

        self.rho0 = rho0
        self.p0 = p0
        self.scale_height = scale_height
        self.g0 = g0
        self.r_earth = r_earth

    @beartype
    def density(self, altitude: float | int) -> float:
        """Get density at altitude [kg/m^3]."""
        rho, _ = _density_and_gravity(
            float(altitude), self.rho0, self.scale_height, self.g0, self.r_earth
        )
        return float(rho)

    @beartype
    def gravity(self, altitude: float | int) -> float:
        """Get gravitational acceleration at altitude [m/s^2]."""
        _, g = _density_and_gravity(
            float(altitude), self.rho0, self.scale_height, self.g0, self.r_earth
        )
        return float(g)

    @beartype
    def pressure(self, altitude: float | int) -> float:
        """Get static pressure at altitude [Pa]."""
        return float(self.p0 * np.exp(-altitude / self.scale_height))

    @beartype
    def dynamic_pressure(self, altitude: float | int, velocity: float | int) -> float:
        """Get dynamic pressure (q = 0.5 * rho * v^2) [Pa]."""
        return 0.5 * self.density(altitude) * velocity ** 2

    @beartype
    def at_altitude(self, altitude: float | int) -> AtmosphereReadout:
        """Get all properties at altitude [m]."""
        return AtmosphereReadout(
            altitude=float(altitude),
            density=self.density(altitude),
            pressure=self.pressure(altitude),
            gravity=self.gravity(altitude),
        )

    @beartype
    def readout_km(self, altitude_km: float | int) -> AtmosphereReadout:
        """Get all properties at an altitude given in kilometers."""
        return self.at_altitude(altitude_km * 1000.0)

    @beartype
    def profile(
        self,
        altitudes: NDArray[np.float64] | list[float],
    ) -> dict[str, NDArray[np.float64]]:
        """Get properties over a range of altitudes.

        Args:
            altitudes: Array of altitudes [m]

        Returns:
            Dictionary with arrays of density, pressure and gravity
        """
        altitudes = np.asarray(altitudes, dtype=np.float64)
        ratio = self.r_earth / (self.r_earth + altitudes)

        return {
            "altitude": altitudes,
            "density": self.rho0 * np.exp(-altitudes / self.scale_height),
            "pressure": self.p0 * np.exp(-altitudes / self.scale_height),
            "gravity": self.g0 * ratio ** 2,
        }

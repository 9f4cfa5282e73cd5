"""Environment model for the vertical flight simulator.

Provides the exponential atmosphere and inverse-square gravity used by
the flight integrator and the atmosphere lookup tool.

Example:
    >>> from rocketlab.environment import atmosphere
    >>>
    >>> rho, g = atmosphere(altitude=10000.0)
"""

from rocketlab.environment.atmosphere import (
    G0,
    P0,
    R_EARTH,
    RHO0,
    SCALE_HEIGHT,
    AtmosphereReadout,
    AtmosphereSample,
    ExponentialAtmosphere,
    atmosphere,
)

__all__ = [
    "G0",
    "P0",
    "R_EARTH",
    "RHO0",
    "SCALE_HEIGHT",
    "AtmosphereReadout",
    "AtmosphereSample",
    "ExponentialAtmosphere",
    "atmosphere",
]

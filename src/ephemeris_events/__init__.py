"""Rise, transit, set and satellite pass prediction for solar system objects.

The package computes apparent ephemerides (light time, aberration, phase,
visual magnitude) for the Sun, planets, moons, asteroids, comets and
Earth satellites, and from them:
- Rise, transit, and set times on a local day (events module)
- Artificial satellite passes over a time window (passes module)

Planetary positions come from SPICE kernels via cspyce when loaded, with
mean orbital elements as a fallback; satellites use sgp4; time conversions
use rms-julian.
"""

__all__: list[str] = []

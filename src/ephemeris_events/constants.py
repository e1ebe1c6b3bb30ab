"""Fixed constants: body IDs, NAIF codes, physical constants, event parameters."""

import math

# Solar system body identifiers (planet number; moons are 100 * planet + index)
SUN_ID = 0
MERCURY_ID = 1
VENUS_ID = 2
EARTH_ID = 3
MARS_ID = 4
JUPITER_ID = 5
SATURN_ID = 6
URANUS_ID = 7
NEPTUNE_ID = 8
PLUTO_ID = 9

LUNA_ID = 301
PHOBOS_ID = 401
DEIMOS_ID = 402
IO_ID = 501
EUROPA_ID = 502
GANYMEDE_ID = 503
CALLISTO_ID = 504
MIMAS_ID = 601
ENCELADUS_ID = 602
TETHYS_ID = 603
DIONE_ID = 604
RHEA_ID = 605
TITAN_ID = 606
HYPERION_ID = 607
IAPETUS_ID = 608
PHOEBE_ID = 609
MIRANDA_ID = 701
ARIEL_ID = 702
UMBRIEL_ID = 703
TITANIA_ID = 704
OBERON_ID = 705
TRITON_ID = 801
NEREID_ID = 802
CHARON_ID = 901

# Number of possible primaries (Sun + 9 planets); moons of unknown primary map to 0
NUM_PRIMARIES = 10

PLANET_NAMES: dict[int, str] = {
    SUN_ID: 'Sun',
    MERCURY_ID: 'Mercury',
    VENUS_ID: 'Venus',
    EARTH_ID: 'Earth',
    MARS_ID: 'Mars',
    JUPITER_ID: 'Jupiter',
    SATURN_ID: 'Saturn',
    URANUS_ID: 'Uranus',
    NEPTUNE_ID: 'Neptune',
    PLUTO_ID: 'Pluto',
}

# Body ID -> NAIF code for tabulated lookup (outer planets use system barycenters)
NAIF_CODES: dict[int, int] = {
    SUN_ID: 10,
    MERCURY_ID: 199,
    VENUS_ID: 299,
    EARTH_ID: 399,
    MARS_ID: 4,
    JUPITER_ID: 5,
    SATURN_ID: 6,
    URANUS_ID: 7,
    NEPTUNE_ID: 8,
    PLUTO_ID: 9,
    LUNA_ID: 301,
}
NAIF_SUN = 10

# Time
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_DAY = 86400.0
MINUTES_PER_DAY = 1440.0
HOURS_PER_DAY = 24.0
J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
SIDEREAL_PER_SOLAR_DAYS = 1.00273790935

# Distance and light
KM_PER_AU = 149597870.7
LIGHT_KM_PER_SEC = 299792.458
LIGHT_AU_PER_DAY = LIGHT_KM_PER_SEC * SECONDS_PER_DAY / KM_PER_AU
KM_PER_EARTH_RADII = 6378.137
EARTH_FLATTENING = 1.0 / 298.257
GAUSS_GRAV = 0.01720209895  # Gaussian gravitational constant, AU^1.5 / day

# Angles
TWOPI = 2.0 * math.pi
HALFPI = 0.5 * math.pi
RAD_PER_DEG = math.pi / 180.0
DEG_PER_RAD = 180.0 / math.pi
RAD_PER_ARCMIN = RAD_PER_DEG / 60.0
RAD_PER_ARCSEC = RAD_PER_DEG / 3600.0

# Sentinel for undefined magnitudes and vectors
HUGE_VAL = math.inf

# Event selectors
RISE = -1
TRANSIT = 0
SET = 1

# Standard horizon altitudes (radians)
ALT_SUN_MOON = -50.0 * RAD_PER_ARCMIN
ALT_POINT = -0.5 * RAD_PER_DEG
ALT_CIVIL_TWILIGHT = -6.0 * RAD_PER_DEG
ALT_NAUTICAL_TWILIGHT = -12.0 * RAD_PER_DEG
ALT_ASTRONOMICAL_TWILIGHT = -18.0 * RAD_PER_DEG

# Rise/transit/set iteration controls
SEARCH_MAX_ITERATIONS = 10
SEARCH_PRECISION_DAYS = 1.0 / SECONDS_PER_DAY

# Satellite pass scan
PASS_COARSE_STEP_DAYS = 1.0 / MINUTES_PER_DAY
PASS_FINE_STEP_DAYS = 1.0 / SECONDS_PER_DAY
PASS_FINE_ALTITUDE = -1.0 * RAD_PER_DEG

# Saturn's north pole (J2000 RA, Dec) for ring-plane inclination
SATURN_POLE_RA = 40.589 * RAD_PER_DEG
SATURN_POLE_DEC = 83.537 * RAD_PER_DEG

# Phase-law parameters for Earth's Moon and default slope for other moons
LUNA_H_MAG = 0.21
LUNA_G_MAG = 0.25
DEFAULT_MOON_G_MAG = 0.15


def planet_name_to_id(name: str) -> int | None:
    """Return planet ID (0-9) for a case-insensitive name, or None if unknown.

    Parameters:
        name: Planet name (e.g. 'Mars') or its number as a string.

    Returns:
        Planet ID or None if not recognized.
    """
    key = name.strip().lower()
    for body_id, body_name in PLANET_NAMES.items():
        if body_name.lower() == key:
            return body_id
    if key == 'moon' or key == 'luna':
        return LUNA_ID
    try:
        value = int(key)
    except ValueError:
        return None
    if value in PLANET_NAMES or value == LUNA_ID:
        return value
    return None

"""Fixed constants: angle conversions, standard epochs, DE403 physical values.

From Moshier's aa54e sources (DE403/DE404 fits).
"""

import math

# Angle conversions
DTR = 0.017453292519943295  # radians per degree
STR = 4.84813681109536e-6  # radians per arc second
PI = math.pi
TPI = 2.0 * PI
ARCSEC_PER_CIRCLE = 1296000.0
ARCSEC_HALF_WRAP = 645000.0  # lunar longitude wrap threshold (just under half a circle)

# Standard epochs (Julian epochs are measured in years of 365.25 days)
J2000 = 2451545.0  # 2000 January 1.5
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_JULIAN_MILLENNIUM = 365250.0
SECONDS_PER_DAY = 86400.0

# DE403 values
EMRAT = 81.300585  # Earth/Moon mass ratio
GAUSS_K = 0.01720209895  # Gaussian gravitational constant
DAILY_MOTION_1AU = 0.9856076686  # 180 k / pi, degrees per day at a = 1 AU
PARABOLIC_MOTION = 0.0364911624  # 3 k / sqrt(2)

# Series workspace bounds: argument slots x harmonic multiples
NARGS = 18
ARG_SLOTS = 19
MAX_HARMONICS = 32

# Newton iterations
KEPLER_TOLERANCE = 1.0e-11
DEFAULT_MAX_ITERATIONS = 100

# Velocity by central difference (days)
VELOCITY_STEP_DAYS = 0.01

# Body names with special handling
EARTH_NAME = 'Earth'

# Body name -> SPICE target for reference cross-checks (Sun-centred)
SPICE_TARGETS: dict[str, str] = {
    'Mercury': 'MERCURY BARYCENTER',
    'Venus': 'VENUS BARYCENTER',
    'Earth': 'EARTH',
    'Mars': 'MARS BARYCENTER',
    'Jupiter': 'JUPITER BARYCENTER',
    'Saturn': 'SATURN BARYCENTER',
    'Uranus': 'URANUS BARYCENTER',
    'Neptune': 'NEPTUNE BARYCENTER',
    'Pluto': 'PLUTO BARYCENTER',
}

# IAU 2012 astronomical unit (km)
AU_KM = 149597870.7

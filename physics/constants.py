"""
Physical constants and fixed conversion factors for run-based power estimation.

All quantities are SI unless the name says otherwise.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

# Standard gravity (CGPM 1901, exact)
G0 = 9.80665  # m/s^2

# Mechanical horsepower (550 ft*lbf/s)
W_PER_HP = 745.699872  # W

# 1 m/s = 3.6 km/h
KMH_PER_MPS = 3.6

# Drivetrain efficiency band. Caller guesses outside this range are
# clamped, never rejected.
ETA_MIN = 0.5
ETA_MAX = 0.98

# Air density used when the caller supplies none (kg/m^3)
RHO_DEFAULT = 1.20


def verify_eta_band():
    """Verify the efficiency band is a proper sub-interval of (0, 1)."""
    ok = 0.0 < ETA_MIN < ETA_MAX < 1.0
    return ok, (ETA_MIN, ETA_MAX)

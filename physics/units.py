"""
Unit helpers shared by the estimators and the display layer.
"""

from physics.constants import KMH_PER_MPS, W_PER_HP


def kmh_to_mps(kmh):
    """km/h -> m/s."""
    return kmh / KMH_PER_MPS


def mps_to_kmh(mps):
    """m/s -> km/h."""
    return mps * KMH_PER_MPS


def watts_to_hp(w):
    """Watts -> mechanical horsepower."""
    return w / W_PER_HP


def hp_to_watts(hp):
    """Mechanical horsepower -> watts."""
    return hp * W_PER_HP


def watts_to_kw(w):
    return w / 1000.0


def clamp(x, lo, hi):
    """Clamp x into [lo, hi]."""
    return min(hi, max(lo, x))

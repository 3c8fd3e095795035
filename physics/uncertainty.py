"""
Worst-case power interval by corner enumeration.

Each of six inputs (mass, grade, CdA, eta, rho, Crr) is replaced by its two
extremes, center - margin and center + margin, and estimate_power() is run
on all 2^6 = 64 combinations. The min/max over those runs is the interval.

This is an outer bound over the assumed perturbation box, not a
statistical confidence interval. Mass, grade and eta margins are absolute;
rho, Crr and CdA margins are fractions of the center value. Externally
supplied CdA bounds (e.g. from a measured-data profile) replace the
relative CdA fallback when both are finite and positive.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import itertools
import math
from dataclasses import dataclass, fields, replace

from physics.constants import ETA_MIN, ETA_MAX
from physics.power import estimate_power
from physics.units import clamp


@dataclass(frozen=True)
class UncertaintyConfig:
    mass_kg_plus_minus: float = 20.0
    grade_pct_plus_minus: float = 0.2
    eta_plus_minus: float = 0.03
    rho_rel_plus_minus: float = 0.04
    crr_rel_plus_minus: float = 0.10
    # Only used when no usable CdA bounds are passed
    cda_rel_plus_minus: float = 0.10


DEFAULT_UNCERTAINTY = UncertaintyConfig()

UNCERTAINTY_FIELDS = tuple(f.name for f in fields(UncertaintyConfig))


@dataclass(frozen=True)
class RangeResult:
    min_engine_w: float
    max_engine_w: float
    min_wheel_w: float
    max_wheel_w: float


def merge_uncertainty(overrides=None):
    """
    Overlay caller overrides on DEFAULT_UNCERTAINTY.

    Parameters
    ----------
    overrides : UncertaintyConfig, dict or None
        A full config is returned unchanged. A dict replaces only the
        fields it names; unknown names raise TypeError.

    Returns
    -------
    UncertaintyConfig
    """
    if overrides is None:
        return DEFAULT_UNCERTAINTY
    if isinstance(overrides, UncertaintyConfig):
        return overrides
    return replace(DEFAULT_UNCERTAINTY, **overrides)


def _usable_bound(x):
    return x is not None and math.isfinite(x) and x > 0


def cda_extremes(cda, cda_min=None, cda_max=None, rel_plus_minus=0.10):
    """
    The two CdA values to sweep.

    Bounds win over the relative fallback only if both are finite and > 0.
    """
    if _usable_bound(cda_min) and _usable_bound(cda_max):
        return [cda_min, cda_max]
    return [cda * (1.0 - rel_plus_minus), cda * (1.0 + rel_plus_minus)]


def perturbation_sets(base, cda_min=None, cda_max=None, uncertainty=None):
    """
    Two-valued extremes per perturbed input, in sweep order.

    Returns
    -------
    dict
        Keys mass_kg, grade_pct, cda, eta, rho, crr; each value is a
        two-element list [low, high].
    """
    u = merge_uncertainty(uncertainty)

    return {
        "mass_kg": [base.mass_kg - u.mass_kg_plus_minus,
                    base.mass_kg + u.mass_kg_plus_minus],
        "grade_pct": [base.grade_pct - u.grade_pct_plus_minus,
                      base.grade_pct + u.grade_pct_plus_minus],
        "cda": cda_extremes(base.cda, cda_min, cda_max, u.cda_rel_plus_minus),
        "eta": [clamp(base.eta - u.eta_plus_minus, ETA_MIN, ETA_MAX),
                clamp(base.eta + u.eta_plus_minus, ETA_MIN, ETA_MAX)],
        "rho": [base.rho * (1.0 - u.rho_rel_plus_minus),
                base.rho * (1.0 + u.rho_rel_plus_minus)],
        "crr": [base.crr * (1.0 - u.crr_rel_plus_minus),
                base.crr * (1.0 + u.crr_rel_plus_minus)],
    }


def estimate_range(base, cda_min=None, cda_max=None, uncertainty=None):
    """
    Worst-case [min, max] of wheel and engine power around a base run.

    Parameters
    ----------
    base : EstimatorInput
        Center of the perturbation box. Speeds, time and distance are
        never perturbed.
    cda_min, cda_max : float, optional
        Externally supplied CdA bounds.
    uncertainty : dict or UncertaintyConfig, optional
        Margin overrides, merged onto DEFAULT_UNCERTAINTY.

    Returns
    -------
    RangeResult

    Raises
    ------
    InvalidInputError
        Propagated from estimate_power() if any corner is invalid (for
        instance mass - margin <= 0). No partial interval is returned.
    """
    sets = perturbation_sets(base, cda_min, cda_max, uncertainty)
    names = list(sets)

    min_engine = math.inf
    max_engine = -math.inf
    min_wheel = math.inf
    max_wheel = -math.inf

    for combo in itertools.product(*(sets[n] for n in names)):
        res = estimate_power(replace(base, **dict(zip(names, combo))))
        min_engine = min(min_engine, res.engine_power_w)
        max_engine = max(max_engine, res.engine_power_w)
        min_wheel = min(min_wheel, res.wheel_power_w)
        max_wheel = max(max_wheel, res.wheel_power_w)

    return RangeResult(
        min_engine_w=min_engine,
        max_engine_w=max_engine,
        min_wheel_w=min_wheel,
        max_wheel_w=max_wheel,
    )

"""
Power estimation from a single acceleration run: energy balance.

Over a run from v1 to v2 in time t and distance s, the wheels deliver

    E_wheel = dE_kin + E_drag + E_roll + E_grade

    dE_kin  = 1/2 * m * (v2^2 - v1^2)
    E_drag  = 1/2 * rho * CdA * v_eq^2 * s
    E_roll  = m * g * Crr * s
    E_grade = m * g * (grade/100) * s

and the average powers are P_wheel = E_wheel / t, P_engine = P_wheel / eta.

Only the endpoint speeds are known, so the drag term uses the quadratic
mean v_eq = sqrt((v1^2 + v2^2) / 2) as a constant stand-in for v(t)^2
over the interval. Changing it shifts every result; keep it as is.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from dataclasses import dataclass

from physics.constants import G0, ETA_MIN, ETA_MAX, RHO_DEFAULT
from physics.units import kmh_to_mps, clamp


class InvalidInputError(ValueError):
    """A run that cannot be evaluated (non-positive extent or bad speeds)."""


@dataclass(frozen=True)
class EstimatorInput:
    """
    One fully specified run.

    Speeds are in km/h, everything else SI. cda, crr and eta have no
    defaults: the caller resolves them (see physics.defaults, data.cars).
    """

    mass_kg: float
    v1_kmh: float
    v2_kmh: float
    time_s: float
    distance_m: float
    cda: float
    crr: float
    eta: float
    grade_pct: float = 0.0
    rho: float = RHO_DEFAULT


@dataclass(frozen=True)
class EnergyBreakdown:
    """Additive energy terms of the balance, in joules."""

    de_j: float
    e_drag_j: float
    e_roll_j: float
    e_grade_j: float

    @property
    def total_j(self):
        return self.de_j + self.e_drag_j + self.e_roll_j + self.e_grade_j


@dataclass(frozen=True)
class EstimatorResult:
    wheel_power_w: float
    engine_power_w: float
    v_eq_mps: float
    breakdown: EnergyBreakdown


def equivalent_velocity(v1_mps, v2_mps):
    """Quadratic mean of the two endpoint speeds (m/s)."""
    return math.sqrt((v1_mps * v1_mps + v2_mps * v2_mps) / 2.0)


def estimate_power(inp):
    """
    Average wheel and engine power over one run.

    Parameters
    ----------
    inp : EstimatorInput
        The run. eta is clamped into [ETA_MIN, ETA_MAX].

    Returns
    -------
    EstimatorResult
        Average powers (W), v_eq (m/s) and the energy breakdown (J).

    Raises
    ------
    InvalidInputError
        If mass, time or distance is not > 0, or if the converted speeds
        do not satisfy 0 <= v1 < v2.
    """
    m = inp.mass_kg
    t = inp.time_s
    s = inp.distance_m

    # Written as "not > 0" so NaN is rejected too
    if not (m > 0) or not (t > 0) or not (s > 0):
        raise InvalidInputError("mass, time, and distance must be > 0")

    v1 = kmh_to_mps(inp.v1_kmh)
    v2 = kmh_to_mps(inp.v2_kmh)

    if not (v2 > v1) or v1 < 0:
        raise InvalidInputError("invalid velocity")

    eta = clamp(inp.eta, ETA_MIN, ETA_MAX)

    v_eq = equivalent_velocity(v1, v2)

    de = 0.5 * m * (v2 * v2 - v1 * v1)

    f_drag_eq = 0.5 * inp.rho * inp.cda * (v_eq * v_eq)
    e_drag = f_drag_eq * s

    f_roll = m * G0 * inp.crr
    e_roll = f_roll * s

    # Positive grade climbs; a descent makes this term negative
    f_grade = m * G0 * (inp.grade_pct / 100.0)
    e_grade = f_grade * s

    wheel_power = (de + e_drag + e_roll + e_grade) / t
    engine_power = wheel_power / eta

    return EstimatorResult(
        wheel_power_w=wheel_power,
        engine_power_w=engine_power,
        v_eq_mps=v_eq,
        breakdown=EnergyBreakdown(
            de_j=de,
            e_drag_j=e_drag,
            e_roll_j=e_roll,
            e_grade_j=e_grade,
        ),
    )

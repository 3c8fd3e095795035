"""
Fallback vehicle parameters for runs where the caller has no measured data.

Body type picks a typical CdA, drivetrain picks a typical efficiency.
"CUSTOM" body type means the caller types CdA in by hand.
"""

from physics.constants import RHO_DEFAULT

FWD_RWD = "FWD_RWD"
AWD = "AWD"

HATCH = "HATCH"
SEDAN = "SEDAN"
SUV = "SUV"
CUSTOM = "CUSTOM"

DEFAULTS = {
    "rho": RHO_DEFAULT,
    "crr": 0.015,
    # Two-wheel drive loses less through the driveline than AWD
    "eta": {FWD_RWD: 0.86, AWD: 0.80},
    # m^2
    "cda": {HATCH: 0.68, SEDAN: 0.60, SUV: 0.82},
}

BODY_TYPE_LABELS = {
    HATCH: "Hatchback / compact",
    SEDAN: "Sedan / coupe",
    SUV: "SUV / crossover",
    CUSTOM: "Enter CdA manually",
}

DRIVETRAIN_LABELS = {
    FWD_RWD: "FWD / RWD",
    AWD: "AWD",
}


def resolve_eta(drivetrain):
    """Default drivetrain efficiency for FWD_RWD or AWD."""
    try:
        return DEFAULTS["eta"][drivetrain]
    except KeyError:
        raise ValueError(
            "Unknown drivetrain '{}' (expected one of: {})".format(
                drivetrain, ", ".join(DRIVETRAIN_LABELS))
        ) from None


def resolve_cda(body_type, custom_cda=None):
    """
    CdA for a body type.

    A custom value always wins. CUSTOM without a value is an error, as is
    an unknown body type.
    """
    if custom_cda is not None:
        return custom_cda
    if body_type == CUSTOM:
        raise ValueError("cda is required when body_type is CUSTOM")
    try:
        return DEFAULTS["cda"][body_type]
    except KeyError:
        raise ValueError(
            "Unknown body_type '{}' (expected one of: {})".format(
                body_type, ", ".join(BODY_TYPE_LABELS))
        ) from None

"""
Power Estimator Service.

HTTP surface for the run-based energy balance (physics.power) and its
worst-case interval (physics.uncertainty).

POST /api/estimator/compute  - point estimate + range for one run
GET  /api/estimator/defaults - fallback parameters, labels, default margins

Parameter resolution (first match wins):
  CdA:  selected vehicle profile value -> caller cda -> body-type default
  eta:  caller eta -> drivetrain default
  rho, crr: caller value -> DEFAULTS
CdA bounds for the range come from the selected profile when one is
selected, otherwise from the caller's cda_min / cda_max.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math
from dataclasses import asdict

from flask import jsonify, request

from physics.services import DynolessService
from physics.defaults import (
    DEFAULTS,
    BODY_TYPE_LABELS,
    DRIVETRAIN_LABELS,
    FWD_RWD,
    HATCH,
    resolve_eta,
    resolve_cda,
)
from physics.power import EstimatorInput, estimate_power
from physics.uncertainty import (
    DEFAULT_UNCERTAINTY,
    UNCERTAINTY_FIELDS,
    estimate_range,
    merge_uncertainty,
)
from physics.units import mps_to_kmh, watts_to_hp, watts_to_kw
from data.cars import get_profile, profile_key

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("mass_kg", "v1_kmh", "v2_kmh", "time_s", "distance_m")


def _number(config, key, default=None, required=False):
    """Read a numeric field. Missing/empty -> default (or error if required)."""
    raw = config.get(key)
    if raw is None or raw == "":
        if required:
            raise ValueError("{} is required".format(key))
        return default
    if isinstance(raw, bool):
        raise ValueError("{} must be a number".format(key))
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError("{} must be a number".format(key)) from None
    if not math.isfinite(value):
        raise ValueError("{} must be a finite number".format(key))
    return value


def _text(config, key, default=None):
    """Read an optional string field. Missing/empty -> default."""
    raw = config.get(key)
    if raw is None or raw == "":
        return default
    if not isinstance(raw, str):
        raise ValueError("{} must be a string".format(key))
    return raw


def _uncertainty(raw):
    """Validate uncertainty overrides: known fields, numeric, >= 0."""
    if raw is None:
        return DEFAULT_UNCERTAINTY
    if not isinstance(raw, dict):
        raise ValueError("uncertainty must be an object")
    overrides = {}
    for key in raw:
        if key not in UNCERTAINTY_FIELDS:
            raise ValueError("Unknown uncertainty field '{}'".format(key))
        value = _number(raw, key, required=True)
        if value < 0:
            raise ValueError("{} must be >= 0".format(key))
        overrides[key] = value
    return merge_uncertainty(overrides)


class EstimatorService(DynolessService):

    id = "estimator"
    name = "Power Estimator"
    description = "Average wheel and engine power from one acceleration run"
    category = "core"
    endpoints = (
        "POST /api/estimator/compute",
        "GET /api/estimator/defaults",
    )

    def validate(self, config):
        """Normalize a run payload into an EstimatorInput plus range options."""
        if not isinstance(config, dict):
            raise ValueError("Request body must be JSON")

        run = {key: _number(config, key, required=True)
               for key in REQUIRED_FIELDS}

        drivetrain = _text(config, "drivetrain", FWD_RWD)
        if drivetrain not in DRIVETRAIN_LABELS:
            raise ValueError("Unknown drivetrain '{}'".format(drivetrain))
        body_type = _text(config, "body_type", HATCH)
        if body_type not in BODY_TYPE_LABELS:
            raise ValueError("Unknown body_type '{}'".format(body_type))

        eta = _number(config, "eta")
        if eta is None:
            eta = resolve_eta(drivetrain)

        make = _text(config, "make")
        model = _text(config, "model")
        key = _text(config, "profile")
        profile = None
        if key:
            profile = get_profile(make, model, key)
            if profile is None:
                raise ValueError("Unknown vehicle profile '{}'".format(key))

        custom_cda = _number(config, "cda")
        if profile is not None and profile["cda"]["value"] is not None:
            cda = profile["cda"]["value"]
            source = profile["source"]
        else:
            cda = resolve_cda(body_type, custom_cda)
            source = "custom" if custom_cda is not None else "body_type default"

        if profile is not None:
            cda_min = profile["cda"]["min"]
            cda_max = profile["cda"]["max"]
        else:
            cda_min = _number(config, "cda_min")
            cda_max = _number(config, "cda_max")

        inp = EstimatorInput(
            mass_kg=run["mass_kg"],
            v1_kmh=run["v1_kmh"],
            v2_kmh=run["v2_kmh"],
            time_s=run["time_s"],
            distance_m=run["distance_m"],
            grade_pct=_number(config, "grade_pct", 0.0),
            rho=_number(config, "rho", DEFAULTS["rho"]),
            cda=cda,
            crr=_number(config, "crr", DEFAULTS["crr"]),
            eta=eta,
        )

        return {
            "input": inp,
            "cda_min": cda_min,
            "cda_max": cda_max,
            "uncertainty": _uncertainty(config.get("uncertainty")),
            "cda_info": {
                "value": cda,
                "min": cda_min,
                "max": cda_max,
                "source": source,
                "profile": profile_key(profile) if profile else None,
                "notes": profile["notes"] if profile else None,
            },
        }

    def compute(self, config):
        """
        Point estimate and worst-case range.

        Raises InvalidInputError (a ValueError) for runs that cannot be
        evaluated; no partial result is returned.
        """
        inp = config["input"]
        u = config["uncertainty"]

        point = estimate_power(inp)
        rng = estimate_range(
            inp,
            cda_min=config["cda_min"],
            cda_max=config["cda_max"],
            uncertainty=u,
        )
        log.debug("estimator: engine=%.1f W range=[%.1f, %.1f] W",
                  point.engine_power_w, rng.min_engine_w, rng.max_engine_w)

        b = point.breakdown
        return {
            "input": asdict(inp),
            "result": {
                "wheel_power_w": round(point.wheel_power_w, 1),
                "engine_power_w": round(point.engine_power_w, 1),
                "wheel_power_kw": round(watts_to_kw(point.wheel_power_w), 3),
                "engine_power_kw": round(watts_to_kw(point.engine_power_w), 3),
                "wheel_power_hp": round(watts_to_hp(point.wheel_power_w), 2),
                "engine_power_hp": round(watts_to_hp(point.engine_power_w), 2),
                "v_eq_mps": round(point.v_eq_mps, 4),
                "v_eq_kmh": round(mps_to_kmh(point.v_eq_mps), 3),
                "breakdown": {
                    "de_j": round(b.de_j, 1),
                    "e_drag_j": round(b.e_drag_j, 1),
                    "e_roll_j": round(b.e_roll_j, 1),
                    "e_grade_j": round(b.e_grade_j, 1),
                    "total_j": round(b.total_j, 1),
                },
            },
            "range": {
                "min_engine_w": round(rng.min_engine_w, 1),
                "max_engine_w": round(rng.max_engine_w, 1),
                "min_wheel_w": round(rng.min_wheel_w, 1),
                "max_wheel_w": round(rng.max_wheel_w, 1),
                "min_engine_hp": round(watts_to_hp(rng.min_engine_w), 2),
                "max_engine_hp": round(watts_to_hp(rng.max_engine_w), 2),
                "min_wheel_hp": round(watts_to_hp(rng.min_wheel_w), 2),
                "max_wheel_hp": round(watts_to_hp(rng.max_wheel_w), 2),
            },
            "cda": config["cda_info"],
            "uncertainty": asdict(u),
        }

    def register_routes(self, bp):
        """Register estimator API endpoints on the given blueprint."""
        service = self

        @bp.route("/estimator/compute", methods=["POST"])
        def estimator_compute():
            data = request.get_json(silent=True)
            try:
                config = service.validate(data)
                result = service.compute(config)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(result)

        @bp.route("/estimator/defaults", methods=["GET"])
        def estimator_defaults():
            return jsonify({
                "defaults": DEFAULTS,
                "body_types": BODY_TYPE_LABELS,
                "drivetrains": DRIVETRAIN_LABELS,
                "uncertainty": asdict(DEFAULT_UNCERTAINTY),
            })

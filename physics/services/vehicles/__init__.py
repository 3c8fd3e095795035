"""
Vehicle Profile Service: CdA lookup by make / model.

GET /api/vehicles/makes                    - makes with at least one profile
GET /api/vehicles/models?make=X            - models of a make with profiles
GET /api/vehicles/profiles?make=X&model=Y  - profiles with their lookup keys

The returned "key" is what the estimator expects in its "profile" field.
"""

from flask import jsonify, request

from physics.services import DynolessService
from data.cars import find_profiles, profile_key, list_makes, list_models


class VehicleService(DynolessService):

    id = "vehicles"
    name = "Vehicle Profiles"
    description = "Measured / published drag area by make, model and variant"
    category = "lookup"
    endpoints = (
        "GET /api/vehicles/makes",
        "GET /api/vehicles/models",
        "GET /api/vehicles/profiles",
    )

    def validate(self, config):
        """Require non-empty make and model strings."""
        if not isinstance(config, dict):
            raise ValueError("make and model are required")
        make = (config.get("make") or "").strip()
        model = (config.get("model") or "").strip()
        if not make:
            raise ValueError("Missing make")
        if not model:
            raise ValueError("Missing model")
        return {"make": make, "model": model}

    def compute(self, config):
        profiles = []
        for p in find_profiles(config["make"], config["model"]):
            entry = dict(p)
            entry["key"] = profile_key(p)
            profiles.append(entry)
        return {
            "make": config["make"],
            "model": config["model"],
            "profiles": profiles,
        }

    def register_routes(self, bp):
        """Mount vehicle lookup endpoints."""

        @bp.route("/vehicles/makes", methods=["GET"])
        def vehicle_makes():
            return jsonify({"makes": list_makes()})

        @bp.route("/vehicles/models", methods=["GET"])
        def vehicle_models():
            make = (request.args.get("make") or "").strip()
            if not make:
                return jsonify({"error": "Missing make"}), 400
            return jsonify({"models": list_models(make)})

        @bp.route("/vehicles/profiles", methods=["GET"])
        def vehicle_profiles():
            try:
                config = self.validate(request.args.to_dict())
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(self.compute(config))

"""
vPIC catalog proxy service: make and model names for selection lists.

GET /api/vpic/makes          - {"makes": [...]}
GET /api/vpic/models?make=X  - {"models": [...]}

Passthrough to NHTSA vPIC with a 24 h cache (see client.py). It only
supplies make/model strings; the estimator never depends on it.

IMPORTANT: No unicode in code or messages (Windows charmap).
"""

import logging

from flask import jsonify, request

from physics.services import DynolessService
from physics.services.vpic.client import VpicClient, VpicError

log = logging.getLogger(__name__)


class VpicService(DynolessService):

    id = "vpic"
    name = "Make / Model Catalog"
    description = "NHTSA vPIC makes and models, cached for 24 hours"
    category = "lookup"
    endpoints = (
        "GET /api/vpic/makes",
        "GET /api/vpic/models",
    )

    def __init__(self, client=None):
        self.client = client or VpicClient()

    def validate(self, config):
        """Optional make; when present it must be non-blank."""
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError("Request must be an object")
        if "make" not in config:
            return {"make": None}
        make = (config.get("make") or "").strip()
        if not make:
            raise ValueError("Missing make")
        return {"make": make}

    def compute(self, config):
        """Makes, or models of config['make']. Raises VpicError upstream."""
        if config.get("make"):
            return {"models": self.client.fetch_models(config["make"])}
        return {"makes": self.client.fetch_makes()}

    def register_routes(self, bp):
        """Mount vPIC proxy endpoints."""

        @bp.route("/vpic/makes", methods=["GET"])
        def vpic_makes():
            try:
                return jsonify(self.compute({"make": None}))
            except VpicError as e:
                log.warning("vPIC makes failed: %s", e)
                return jsonify({"error": "VPIC makes fetch failed"}), 502

        @bp.route("/vpic/models", methods=["GET"])
        def vpic_models():
            try:
                config = self.validate({"make": request.args.get("make", "")})
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            try:
                return jsonify(self.compute(config))
            except VpicError as e:
                log.warning("vPIC models failed make=%s: %s", config["make"], e)
                return jsonify({"error": "VPIC models fetch failed"}), 502

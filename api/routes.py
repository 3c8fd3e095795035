"""
Flask API blueprint for DYNOLESS.

Shared endpoints:
  GET /api/services   - registry metadata for every registered service
  GET /api/constants  - fixed constants used by the estimators

Every registered service mounts its own namespaced endpoints (e.g.
/api/estimator/compute, /api/vpic/makes) through register_routes().
"""

from flask import Blueprint, jsonify

from physics import constants


def create_api_blueprint(registry):
    """
    Build the /api blueprint for a populated registry.

    Parameters
    ----------
    registry : DynolessRegistry
        Every registered service gets its routes mounted.

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata for all registered services."""
        return jsonify(registry.list_all())

    @api.route("/constants", methods=["GET"])
    def get_constants():
        """Return the constants used by the estimators."""
        return jsonify({
            "G0": constants.G0,
            "W_PER_HP": constants.W_PER_HP,
            "KMH_PER_MPS": constants.KMH_PER_MPS,
            "ETA_MIN": constants.ETA_MIN,
            "ETA_MAX": constants.ETA_MAX,
            "RHO_DEFAULT": constants.RHO_DEFAULT,
        })

    for service in registry.services():
        service.register_routes(api)

    return api

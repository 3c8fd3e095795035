"""
DYNOLESS - dyno-less power estimation from acceleration runs.
Flask application factory.

Serves the run form (Jinja2 template) and the REST API for power
estimation via registered DynolessService instances.

Configuration (app.config), overridable with DYNOLESS_-prefixed
environment variables or the mapping passed to create_app():
    VPIC_BASE_URL     - vPIC API root
    VPIC_CACHE_TTL_S  - make/model cache lifetime (seconds)
    VPIC_TIMEOUT_S    - upstream request timeout (seconds)

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI
"""

__version__ = "0.1.0"

import logging

from flask import Flask, render_template

from physics.services import DynolessRegistry
from physics.services.estimator import EstimatorService
from physics.services.vehicles import VehicleService
from physics.services.vpic import VpicService
from physics.services.vpic.client import (
    VpicClient,
    DEFAULT_BASE_URL,
    CACHE_TTL_S,
    TIMEOUT_S,
)

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "VPIC_BASE_URL": DEFAULT_BASE_URL,
    "VPIC_CACHE_TTL_S": CACHE_TTL_S,
    "VPIC_TIMEOUT_S": TIMEOUT_S,
}


def create_registry(config=None):
    """Build and populate the service registry."""
    config = config or DEFAULT_CONFIG
    vpic_client = VpicClient(
        base_url=config["VPIC_BASE_URL"],
        ttl_s=config["VPIC_CACHE_TTL_S"],
        timeout_s=config["VPIC_TIMEOUT_S"],
    )
    registry = DynolessRegistry()
    registry.register(EstimatorService())
    registry.register(VehicleService())
    registry.register(VpicService(vpic_client))
    return registry


def create_app(config=None):
    """Application factory for the DYNOLESS Flask app."""
    app = Flask(
        __name__,
        static_folder="static",
        template_folder="templates",
    )
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("DYNOLESS")
    if config:
        app.config.from_mapping(config)

    # Make app version available to all templates
    @app.context_processor
    def inject_version():
        return {"version": __version__}

    registry = create_registry(app.config)
    app.extensions["dynoless_registry"] = registry

    # Create and register API blueprint (shared + service-owned routes)
    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    # Home: run form + service list
    @app.route("/")
    def home():
        return render_template(
            "home.html",
            active_page="home",
            services=registry.list_all(),
        )

    log.info("DYNOLESS %s ready: %d services", __version__,
             len(registry.list_all()))
    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)

"""
DYNOLESS service layer.

Three services sit behind the /api blueprint: the power estimator, the
in-repo vehicle CdA profiles and the vPIC make/model catalog. Each one
validates its own payload, computes a JSON-ready result and mounts its
endpoints under its own id (/api/<id>/...). The registry keeps them in
registration order so /api/services and the home page list them the
same way every time.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from abc import ABC, abstractmethod


class DynolessService(ABC):
    """
    One API feature: validate -> compute -> routes.

    Class Attributes
    ----------------
    id : str
        URL namespace and registry key ("estimator", "vehicles", "vpic").
    name : str
        Display name.
    description : str
        One-liner for the home page.
    category : str
        "core" for the physics, "lookup" for CdA / catalog sources.
    endpoints : tuple of str
        "METHOD /api/path" strings mounted by register_routes().
    """

    id = ""
    name = ""
    description = ""
    category = ""
    endpoints = ()

    @abstractmethod
    def validate(self, config):
        """
        Turn a raw payload (JSON body or query args) into a normalized config.

        Raises
        ------
        ValueError
            With a user-facing message; the routes map it to 400.
        """

    @abstractmethod
    def compute(self, config):
        """Run on the output of validate(); returns a JSON-serializable dict."""

    @abstractmethod
    def register_routes(self, blueprint):
        """Mount this service's endpoints on the /api blueprint."""

    def metadata(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "endpoints": list(self.endpoints),
        }


class DynolessRegistry:
    """Services keyed by id, in registration order."""

    def __init__(self):
        self._services = {}

    def register(self, service):
        """
        Add a service.

        Raises
        ------
        ValueError
            If the id is empty or already taken (two services would
            share one URL namespace).
        """
        if not service.id:
            raise ValueError("Service id must not be empty")
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id)
            )
        self._services[service.id] = service

    def get(self, service_id):
        """Look up a service by id. Returns None if not found."""
        return self._services.get(service_id)

    def services(self):
        return list(self._services.values())

    def list_all(self):
        """Metadata for every service, for /api/services."""
        return [s.metadata() for s in self._services.values()]

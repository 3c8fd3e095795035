"""
Pytest fixtures for DYNOLESS test suite.
"""

import io
import json
import urllib.error

import pytest
from app import create_app
from physics.power import EstimatorInput
from physics.services.vpic.client import VpicClient


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({"TESTING": True})
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def golden_run():
    """1400 kg, 100 -> 200 km/h in 10 s over 350 m, flat road."""
    return EstimatorInput(
        mass_kg=1400.0,
        v1_kmh=100.0,
        v2_kmh=200.0,
        time_s=10.0,
        distance_m=350.0,
        grade_pct=0.0,
        rho=1.20,
        cda=0.68,
        crr=0.015,
        eta=0.86,
    )


class FakeOpener:
    """
    Stand-in for urllib.request.urlopen.

    routes maps a URL substring to a JSON-able payload; a payload that is
    an Exception instance is raised instead. Every call is recorded.
    """

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def __call__(self, req, timeout=None):
        url = req.full_url
        self.calls.append(url)
        for fragment, payload in self.routes.items():
            if fragment in url:
                if isinstance(payload, Exception):
                    raise payload
                return io.BytesIO(json.dumps(payload).encode("utf-8"))
        raise urllib.error.URLError("no route for " + url)


class FakeClock:

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


VPIC_MAKES = {"Results": [
    {"Make_Name": "volvo"},
    {"Make_Name": "BMW"},
    {"Make_Name": ""},
    {"Make_Name": "Audi"},
]}

VPIC_GOLF_MODELS = {"Results": [
    {"Model_Name": "Polo"},
    {"Model_Name": "golf"},
    {"Model_Name": None},
    {"Model_Name": "Arteon"},
]}


@pytest.fixture
def fake_opener():
    return FakeOpener({
        "getallmakes": VPIC_MAKES,
        "getmodelsformake/Volkswagen": VPIC_GOLF_MODELS,
    })


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def vpic_client(fake_opener, fake_clock):
    return VpicClient(base_url="https://vpic.test/api", ttl_s=100,
                      opener=fake_opener, clock=fake_clock)

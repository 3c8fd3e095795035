"""
Tests for constants and unit helpers.
"""

import pytest
from physics.constants import (
    G0, W_PER_HP, KMH_PER_MPS, ETA_MIN, ETA_MAX, RHO_DEFAULT, verify_eta_band,
)
from physics.units import (
    kmh_to_mps, mps_to_kmh, watts_to_hp, hp_to_watts, watts_to_kw, clamp,
)


class TestConstants:

    def test_standard_gravity(self):
        assert G0 == 9.80665

    def test_mechanical_horsepower(self):
        assert W_PER_HP == 745.699872

    def test_kmh_per_mps(self):
        assert KMH_PER_MPS == 3.6

    def test_default_air_density(self):
        assert RHO_DEFAULT == 1.20

    def test_eta_band(self):
        assert (ETA_MIN, ETA_MAX) == (0.5, 0.98)
        ok, band = verify_eta_band()
        assert ok is True
        assert band == (ETA_MIN, ETA_MAX)


class TestUnits:

    def test_kmh_to_mps(self):
        assert kmh_to_mps(36.0) == pytest.approx(10.0)
        assert kmh_to_mps(100.0) == pytest.approx(27.7777778)

    def test_mps_to_kmh_inverse(self):
        for v in [0.0, 13.3, 27.5, 88.0]:
            assert mps_to_kmh(kmh_to_mps(v)) == pytest.approx(v)

    def test_one_horsepower(self):
        assert watts_to_hp(745.699872) == 1.0

    def test_hp_round_trip(self):
        for hp in [1.0, 150.0, 306.86]:
            assert watts_to_hp(hp_to_watts(hp)) == pytest.approx(hp, rel=1e-15)

    def test_watts_to_kw(self):
        assert watts_to_kw(1500.0) == 1.5

    def test_clamp(self):
        assert clamp(0.3, 0.5, 0.98) == 0.5
        assert clamp(1.2, 0.5, 0.98) == 0.98
        assert clamp(0.86, 0.5, 0.98) == 0.86
        assert clamp(0.5, 0.5, 0.98) == 0.5

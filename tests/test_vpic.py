"""
Tests for the vPIC catalog client: parsing, sorting, TTL cache and
stale-on-error fallback. No network: a fake opener and clock are injected.
"""

import io
import threading
import urllib.error

import pytest
from physics.services.vpic.client import VpicClient, VpicError, CACHE_TTL_S


class TestUrls:

    def test_makes_url(self, vpic_client):
        assert vpic_client.makes_url() == \
            "https://vpic.test/api/vehicles/getallmakes?format=json"

    def test_models_url_quotes_make(self, vpic_client):
        url = vpic_client.models_url("Mercedes-Benz / AMG")
        assert url == ("https://vpic.test/api/vehicles/getmodelsformake/"
                       "Mercedes-Benz%20%2F%20AMG?format=json")

    def test_trailing_slash_stripped(self):
        c = VpicClient(base_url="https://vpic.test/api/")
        assert c.makes_url().startswith("https://vpic.test/api/vehicles/")

    def test_default_ttl_is_one_day(self):
        assert CACHE_TTL_S == 86400
        assert VpicClient().ttl_s == 86400


class TestParsing:

    def test_makes_sorted_blank_dropped(self, vpic_client):
        assert vpic_client.fetch_makes() == ["Audi", "BMW", "volvo"]

    def test_models(self, vpic_client):
        assert vpic_client.fetch_models("Volkswagen") == ["Arteon", "golf", "Polo"]

    def test_models_requires_make(self, vpic_client):
        with pytest.raises(ValueError, match="Missing make"):
            vpic_client.fetch_models("   ")

    def test_missing_results_key(self, fake_clock):
        def opener(req, timeout=None):
            return io.BytesIO(b'{"Count": 0}')
        c = VpicClient(opener=opener, clock=fake_clock)
        assert c.fetch_makes() == []

    def test_non_string_names_dropped(self, fake_clock):
        def opener(req, timeout=None):
            return io.BytesIO(b'{"Results": [{"Make_Name": 7}, "x", {"Make_Name": "Kia"}]}')
        c = VpicClient(opener=opener, clock=fake_clock)
        assert c.fetch_makes() == ["Kia"]

    def test_timeout_passed(self, fake_clock):
        seen = {}

        def opener(req, timeout=None):
            seen["timeout"] = timeout
            return io.BytesIO(b'{"Results": []}')
        VpicClient(timeout_s=3, opener=opener, clock=fake_clock).fetch_makes()
        assert seen["timeout"] == 3


class TestCache:

    def test_second_call_cached(self, vpic_client, fake_opener):
        vpic_client.fetch_makes()
        vpic_client.fetch_makes()
        assert len(fake_opener.calls) == 1

    def test_cache_per_url(self, vpic_client, fake_opener):
        vpic_client.fetch_makes()
        vpic_client.fetch_models("Volkswagen")
        assert len(fake_opener.calls) == 2

    def test_expiry_refetches(self, vpic_client, fake_opener, fake_clock):
        vpic_client.fetch_makes()
        fake_clock.now += 99
        vpic_client.fetch_makes()
        assert len(fake_opener.calls) == 1
        fake_clock.now += 2
        vpic_client.fetch_makes()
        assert len(fake_opener.calls) == 2

    def test_clear_cache(self, vpic_client, fake_opener):
        vpic_client.fetch_makes()
        vpic_client.clear_cache()
        vpic_client.fetch_makes()
        assert len(fake_opener.calls) == 2

    def test_returned_list_is_a_copy(self, vpic_client):
        first = vpic_client.fetch_makes()
        first.append("Tampered")
        assert "Tampered" not in vpic_client.fetch_makes()


class TestFailures:

    def test_network_error(self, fake_clock):
        def opener(req, timeout=None):
            raise urllib.error.URLError("down")
        c = VpicClient(opener=opener, clock=fake_clock)
        with pytest.raises(VpicError, match="VPIC makes fetch failed"):
            c.fetch_makes()

    def test_bad_json(self, fake_clock):
        def opener(req, timeout=None):
            return io.BytesIO(b"<html>oops</html>")
        c = VpicClient(opener=opener, clock=fake_clock)
        with pytest.raises(VpicError):
            c.fetch_makes()

    def test_unexpected_shape(self, fake_clock):
        def opener(req, timeout=None):
            return io.BytesIO(b"[1, 2, 3]")
        c = VpicClient(opener=opener, clock=fake_clock)
        with pytest.raises(VpicError, match="VPIC makes fetch failed"):
            c.fetch_makes()

    def test_stale_served_on_failure(self, vpic_client, fake_opener, fake_clock):
        assert vpic_client.fetch_makes() == ["Audi", "BMW", "volvo"]
        fake_opener.routes["getallmakes"] = urllib.error.URLError("down")
        fake_clock.now += 1000
        assert vpic_client.fetch_makes() == ["Audi", "BMW", "volvo"]
        assert len(fake_opener.calls) == 2


class TestConcurrency:

    def test_concurrent_misses_share_one_fetch(self, fake_clock):
        entered = threading.Event()
        release = threading.Event()
        calls = []

        def opener(req, timeout=None):
            calls.append(req.full_url)
            entered.set()
            release.wait(5)
            return io.BytesIO(b'{"Results": [{"Make_Name": "Kia"}]}')

        c = VpicClient(opener=opener, clock=fake_clock)
        results = []
        first = threading.Thread(target=lambda: results.append(c.fetch_makes()))
        second = threading.Thread(target=lambda: results.append(c.fetch_makes()))
        first.start()
        assert entered.wait(5)
        second.start()
        second.join(0.05)
        release.set()
        first.join(5)
        second.join(5)
        assert results == [["Kia"], ["Kia"]]
        assert len(calls) == 1

    def test_other_urls_not_blocked(self, fake_clock):
        release = threading.Event()

        def opener(req, timeout=None):
            if "getallmakes" in req.full_url:
                release.wait(5)
            return io.BytesIO(b'{"Results": [{"Model_Name": "Golf"}]}')

        c = VpicClient(opener=opener, clock=fake_clock)
        slow = threading.Thread(target=c.fetch_makes)
        slow.start()
        try:
            assert c.fetch_models("Volkswagen") == ["Golf"]
        finally:
            release.set()
            slow.join(5)

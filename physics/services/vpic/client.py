"""
NHTSA vPIC make/model catalog client with a per-URL TTL cache.

vPIC returns {"Results": [{"Make_Name": ...}, ...]} for makes and
{"Results": [{"Model_Name": ...}, ...]} for models of one make. Only the
names are kept, blanks dropped, sorted case-insensitively.

Cache entries live for ttl_s (24 h by default). When a refresh fails and
an expired entry exists, the expired entry is served and a warning is
logged; without any entry the failure is raised as VpicError.

Concurrent misses on the same URL are serialized: the first caller
fetches, the rest wait and read the entry it stored. Different URLs
refresh independently.
"""

import json
import logging
import threading
import time
import urllib.error
import urllib.parse
import urllib.request

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://vpic.nhtsa.dot.gov/api"
CACHE_TTL_S = 60 * 60 * 24
TIMEOUT_S = 15


class VpicError(RuntimeError):
    """Upstream vPIC request failed or returned something unreadable."""


class VpicClient:

    def __init__(self, base_url=DEFAULT_BASE_URL, ttl_s=CACHE_TTL_S,
                 timeout_s=TIMEOUT_S, opener=None, clock=None):
        self.base_url = base_url.rstrip("/")
        self.ttl_s = ttl_s
        self.timeout_s = timeout_s
        self._opener = opener or urllib.request.urlopen
        self._clock = clock or time.monotonic
        self._cache = {}
        self._lock = threading.Lock()
        self._fetching = {}

    def makes_url(self):
        return "{}/vehicles/getallmakes?format=json".format(self.base_url)

    def models_url(self, make):
        return "{}/vehicles/getmodelsformake/{}?format=json".format(
            self.base_url, urllib.parse.quote(make, safe=""))

    def fetch_makes(self):
        """All make names, sorted."""
        return self._names(self.makes_url(), "Make_Name", "makes")

    def fetch_models(self, make):
        """Model names for one make, sorted."""
        make = (make or "").strip()
        if not make:
            raise ValueError("Missing make")
        return self._names(self.models_url(make), "Model_Name", "models")

    def clear_cache(self):
        with self._lock:
            self._cache.clear()

    def _url_lock(self, url):
        with self._lock:
            return self._fetching.setdefault(url, threading.Lock())

    def _fresh(self, url, now):
        with self._lock:
            entry = self._cache.get(url)
        if entry is not None and entry[0] > now:
            return entry, True
        return entry, False

    def _names(self, url, field, what):
        entry, fresh = self._fresh(url, self._clock())
        if fresh:
            log.debug("vPIC cache hit: %s", url)
            return list(entry[1])

        # One upstream request per URL at a time; callers that queued
        # behind it pick up the entry it stored.
        with self._url_lock(url):
            now = self._clock()
            entry, fresh = self._fresh(url, now)
            if fresh:
                log.debug("vPIC cache filled while waiting: %s", url)
                return list(entry[1])

            try:
                data = self._fetch_json(url)
                results = data.get("Results") or []
                names = [r.get(field) for r in results if isinstance(r, dict)]
            except (VpicError, AttributeError) as e:
                if entry is not None:
                    log.warning("vPIC %s refresh failed (%s); serving stale cache",
                                what, e)
                    return list(entry[1])
                raise VpicError("VPIC {} fetch failed".format(what)) from e

            names = sorted((n for n in names if isinstance(n, str) and n),
                           key=str.casefold)
            with self._lock:
                self._cache[url] = (now + self.ttl_s, names)
        log.info("vPIC %s cache refreshed: %d entries", what, len(names))
        return list(names)

    def _fetch_json(self, url):
        req = urllib.request.Request(url, headers={"Accept": "application/json"})
        try:
            with self._opener(req, timeout=self.timeout_s) as resp:
                raw = resp.read()
            return json.loads(raw.decode("utf-8"))
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise VpicError(str(e)) from e

"""Tests for LookupCache - per-run memo tables."""

from venuehops.lookup.cache import LookupCache
from venuehops.models import RouteMetrics


def _metrics(hops=1, dist=5540, dur=420):
    return RouteMetrics(hops=hops, distance_km=dist, duration_min=dur)


class TestLookupCache:
    def test_airport_id_roundtrip(self):
        cache = LookupCache()
        cache.set_airport_id("JFK", 1)
        assert cache.get_airport_id("JFK") == 1

    def test_airport_code_case_insensitive(self):
        cache = LookupCache()
        cache.set_airport_id("jfk", 1)
        assert cache.get_airport_id("JFK") == 1

    def test_missing_airport(self):
        assert LookupCache().get_airport_id("JFK") is None

    def test_route_is_direction_free(self):
        cache = LookupCache()
        cache.set_route("LHR", "JFK", _metrics())
        assert cache.get_route("JFK", "LHR") == _metrics()
        assert cache.get_route("LHR", "JFK") == _metrics()

    def test_pair_key_sorted(self):
        assert LookupCache.pair_key("LHR", "JFK") == ("JFK", "LHR")
        assert LookupCache.pair_key("jfk", "lhr") == ("JFK", "LHR")

    def test_overwrite(self):
        cache = LookupCache()
        cache.set_route("JFK", "LHR", _metrics(dur=420))
        cache.set_route("JFK", "LHR", _metrics(dur=400))
        assert cache.get_route("JFK", "LHR").duration_min == 400

    def test_stats_count_hits_and_misses(self):
        cache = LookupCache()
        cache.get_route("JFK", "LHR")
        cache.set_route("JFK", "LHR", _metrics())
        cache.get_route("LHR", "JFK")
        cache.set_airport_id("JFK", 1)
        assert cache.stats() == {"airports": 1, "routes": 1, "hits": 1, "misses": 1}

    def test_clear(self):
        cache = LookupCache()
        cache.set_airport_id("JFK", 1)
        cache.set_route("JFK", "LHR", _metrics())
        cache.get_airport_id("JFK")
        cache.clear()
        assert cache.get_airport_id("JFK") is None
        assert cache.get_route("JFK", "LHR") is None
        assert cache.stats()["airports"] == 0
        assert cache.stats()["hits"] == 0

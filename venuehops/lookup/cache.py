"""In-memory lookup cache for a single run.

Holds airport IDs and pair distances so each is fetched from the route
service at most once. Nothing is written to disk; entries live as long as
the cache object.
"""

from typing import Optional

from venuehops.models import RouteMetrics


class LookupCache:
    """Memo tables for airport IDs and airport-pair route metrics."""

    def __init__(self) -> None:
        self._airport_ids: dict[str, int] = {}
        self._routes: dict[tuple[str, str], RouteMetrics] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def pair_key(src: str, dst: str) -> tuple[str, str]:
        """Canonical key for an airport pair; A->B and B->A share it."""
        a, b = sorted((src.upper(), dst.upper()))
        return (a, b)

    def _count(self, found: bool) -> None:
        if found:
            self.hits += 1
        else:
            self.misses += 1

    def get_airport_id(self, code: str) -> Optional[int]:
        """Return the cached service ID for an airport, or None."""
        airport_id = self._airport_ids.get(code.upper())
        self._count(airport_id is not None)
        return airport_id

    def set_airport_id(self, code: str, airport_id: int) -> None:
        self._airport_ids[code.upper()] = airport_id

    def get_route(self, src: str, dst: str) -> Optional[RouteMetrics]:
        """Return cached metrics for an airport pair in either direction, or None."""
        metrics = self._routes.get(self.pair_key(src, dst))
        self._count(metrics is not None)
        return metrics

    def set_route(self, src: str, dst: str, metrics: RouteMetrics) -> None:
        self._routes[self.pair_key(src, dst)] = metrics

    def stats(self) -> dict[str, int]:
        """Entry counts and hit/miss counters."""
        return {
            "airports": len(self._airport_ids),
            "routes": len(self._routes),
            "hits": self.hits,
            "misses": self.misses,
        }

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._airport_ids.clear()
        self._routes.clear()
        self.hits = 0
        self.misses = 0

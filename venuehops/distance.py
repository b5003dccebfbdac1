"""Best-case flight distance between cities, memoized per airport pair.

RouteFinder wraps the blocking route client: each request runs in a worker
thread, the airport pairs of a metro expansion are looked up concurrently,
and every airport ID and pair result is fetched at most once per run.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Hashable, Mapping, Optional

from venuehops.cities import expand
from venuehops.lookup.cache import LookupCache
from venuehops.lookup.flightconnections import FlightConnectionsClient
from venuehops.models import UNREACHABLE, ZERO, RouteMetrics, SourceResult, TravelConfig
from venuehops.stats import minimum

logger = logging.getLogger(__name__)

_DEFAULT_MAX_HOPS = 3


class RouteFinder:
    """Look up and memoize route metrics between airports and cities."""

    def __init__(
        self,
        client: FlightConnectionsClient,
        cache: Optional[LookupCache] = None,
        aliases: Optional[Mapping[str, list[str]]] = None,
        max_hops: int = _DEFAULT_MAX_HOPS,
    ) -> None:
        if max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {max_hops}")
        self.client = client
        self.cache = cache if cache is not None else LookupCache()
        self.aliases = aliases
        self.max_hops = max_hops
        self._inflight: dict[Hashable, asyncio.Task] = {}

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.to_thread(fn, *args)

    async def _shared(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> Any:
        """Run ``factory`` once per key, however many callers are waiting on it."""
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await task

    async def airport_id(self, code: str) -> int:
        """Service ID for an airport code."""
        code = code.upper()
        cached = self.cache.get_airport_id(code)
        if cached is not None:
            return cached
        return await self._shared(("airport", code), lambda: self._fetch_airport_id(code))

    async def _fetch_airport_id(self, code: str) -> int:
        airport_id = await self._call(self.client.airport_id, code)
        logger.debug("Airport %s has id %s", code, airport_id)
        self.cache.set_airport_id(code, airport_id)
        return airport_id

    async def pair_distance(self, src: str, dst: str) -> RouteMetrics:
        """Metrics of the shortest-hop route between two airports.

        Tries a direct flight first, then routes with 2 up to ``max_hops``
        segments. Returns UNREACHABLE when none is found.
        """
        src, dst = src.upper(), dst.upper()
        logger.debug("%s -> %s", src, dst)

        if src == dst:
            return ZERO

        cached = self.cache.get_route(src, dst)
        if cached is not None:
            logger.debug("Cache hit for %s -- %s", *LookupCache.pair_key(src, dst))
            return cached

        key = ("route", *LookupCache.pair_key(src, dst))
        return await self._shared(key, lambda: self._fetch_route(src, dst))

    async def _fetch_route(self, src: str, dst: str) -> RouteMetrics:
        src_id, dst_id = await asyncio.gather(self.airport_id(src), self.airport_id(dst))

        metrics = await self._call(self.client.direct_route, src_id, dst_id)
        hops = 2
        while metrics is None and hops <= self.max_hops:
            metrics = await self._call(self.client.multi_hop_route, src_id, dst_id, hops)
            hops += 1

        if metrics is None:
            logger.info("No route of up to %d segments between %s and %s", self.max_hops, src, dst)
            metrics = UNREACHABLE

        self.cache.set_route(src, dst, metrics)
        return metrics

    async def city_distance(self, src: str, dst: str) -> RouteMetrics:
        """Best case over every airport pair serving two cities.

        Each metric is minimised on its own, so the fewest hops and the
        shortest duration may come from different airport pairs.
        """
        src, dst = src.upper(), dst.upper()
        if src == dst:
            return ZERO

        pairs = [(a, b) for a in expand(src, self.aliases) for b in expand(dst, self.aliases)]
        results = await asyncio.gather(*(self.pair_distance(a, b) for a, b in pairs))

        return RouteMetrics(
            hops=minimum(r.hops for r in results),
            distance_km=minimum(r.distance_km for r in results),
            duration_min=minimum(r.duration_min for r in results),
        )


async def build_table(config: TravelConfig, finder: RouteFinder) -> dict[str, list[SourceResult]]:
    """Fill the destination -> per-source result table.

    ``table[dst][i]`` holds the metrics from ``config.src[i]`` to ``dst``.
    City pairs are looked up one after another, sources first.
    """
    table: dict[str, list[SourceResult]] = {dst: [] for dst in config.dst}

    for src in config.src:
        for dst in config.dst:
            metrics = await finder.city_distance(src, dst)
            table[dst].append(SourceResult(code=src, **metrics.model_dump()))

    logger.info("Lookup cache: %s", finder.cache.stats())
    return table

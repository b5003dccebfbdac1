"""Route lookups against the flightconnections.com JSON endpoints.

The service is undocumented; the endpoints below are the ones its route
map uses:

* ``/autocompl_airport.php?term=EZE`` -> ``[{"value": "Buenos Aires (EZE)", "id": 2561}]``
* ``/ro173_2561.json`` -> direct routes between two airport IDs
* ``/ro173_2561_2_0_0.json`` -> routes with two segments (``_3_`` for three)

Every failure raises RouteLookupError. There are no retries.
"""

from __future__ import annotations

import difflib
import functools
import logging
import os
from typing import Any, Optional

import airportsdata
import requests

from venuehops.models import RouteMetrics

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DEFAULT_BASE_URL = "http://www.flightconnections.com"
_BASE_URL_ENV = "VENUEHOPS_BASE_URL"
_API_VERSION = 705
_ROUTE_FILTER = "no0"
_TIMEOUT_S = 15

# Leg layout inside "routedata": [from_id, to_id, dist_km, dur_min, ...]
_LEG_DIST = 2
_LEG_DUR = 3

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RouteLookupError(Exception):
    """The route service could not answer a lookup."""


class UnknownAirportError(RouteLookupError):
    """The route service has no airport for a code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown airport code: {code}.{_suggestion(code)}")


@functools.lru_cache(maxsize=1)
def _known_airport_codes() -> list[str]:
    return list(airportsdata.load("IATA").keys())


def _suggestion(code: str) -> str:
    """Suggest close IATA codes using difflib."""
    matches = difflib.get_close_matches(code.upper(), _known_airport_codes(), n=3, cutoff=0.6)
    if matches:
        return f" Did you mean: {', '.join(matches)}?"
    return ""


def default_base_url() -> str:
    """Base URL from VENUEHOPS_BASE_URL, falling back to the public site."""
    return os.environ.get(_BASE_URL_ENV, "").strip() or _DEFAULT_BASE_URL


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class FlightConnectionsClient:
    """Blocking client for the flightconnections.com lookup endpoints.

    Usage::

        with FlightConnectionsClient() as client:
            src = client.airport_id("EZE")
            dst = client.airport_id("JFK")
            client.direct_route(src, dst)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        version: int = _API_VERSION,
        timeout: float = _TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or default_base_url()).rstrip("/")
        self.version = version
        self.timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self) -> FlightConnectionsClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RouteLookupError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise RouteLookupError(f"HTTP {resp.status_code} from {url}")

        try:
            return resp.json()
        except ValueError as exc:
            raise RouteLookupError(f"Non-JSON response from {url}") from exc

    def _route_params(self) -> dict[str, Any]:
        return {"v": self.version, "f": _ROUTE_FILTER}

    def airport_id(self, code: str) -> int:
        """Return the service's numeric ID for an airport code."""
        code = code.upper()
        payload = self._get_json("autocompl_airport.php", {"term": code})
        return _parse_airport_id(payload, code)

    def direct_route(self, src_id: int, dst_id: int) -> Optional[RouteMetrics]:
        """Metrics of the first non-stop route, or None if there is none."""
        payload = self._get_json(f"ro{src_id}_{dst_id}.json", self._route_params())
        return _parse_direct(payload)

    def multi_hop_route(self, src_id: int, dst_id: int, hops: int) -> Optional[RouteMetrics]:
        """Metrics of the first route with exactly ``hops`` segments, or None."""
        payload = self._get_json(f"ro{src_id}_{dst_id}_{hops}_0_0.json", self._route_params())
        return _parse_multi_hop(payload, hops)


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


def _parse_airport_id(payload: Any, code: str) -> int:
    """Pick the autocomplete entry for ``code``.

    The autocomplete endpoint also returns fuzzy matches, so prefer the
    entry labelled ``"... (CODE)"`` and otherwise take the first one.
    """
    if not isinstance(payload, list) or not payload:
        raise UnknownAirportError(code)

    label = f"({code})"
    entry = next((e for e in payload if label in str(e.get("value", ""))), payload[0])
    try:
        return int(entry["id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise RouteLookupError(f"Malformed airport entry for {code}: {entry!r}") from exc


def _parse_direct(payload: Any) -> Optional[RouteMetrics]:
    if not isinstance(payload, dict):
        raise RouteLookupError("Malformed direct route response")

    rows = payload.get("data") or []
    if not rows:
        return None

    first = rows[0]
    return RouteMetrics(hops=1, distance_km=first["dist"], duration_min=first["dur"])


def _parse_multi_hop(payload: Any, hops: int) -> Optional[RouteMetrics]:
    if not isinstance(payload, dict):
        raise RouteLookupError("Malformed multi-hop route response")

    routes = payload.get("routedata") or []
    if not routes:
        return None

    legs = routes[0]
    return RouteMetrics(
        hops=hops,
        distance_km=sum(leg[_LEG_DIST] for leg in legs),
        duration_min=sum(leg[_LEG_DUR] for leg in legs),
    )

"""Shared test fixtures for venuehops.

``fake_service`` replaces ``requests.Session.get`` with a canned copy of
the flightconnections.com endpoints, so the whole stack runs without the
network. The route data:

    NYC -> LON   best 1 hop / 5540 km / 420 min   (JFK-LHR)
    BOS -> LON   1 hop / 5260 km / 395 min        (BOS-LHR)
    NYC -> SFO   1 hop / 4130 km (EWR) / 375 min (JFK)
    BOS -> SFO   2 hops / 4450 km / 450 min       (via JFK)

LCY has no routes at all.
"""

import re
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

FIXTURES_DIR = Path(__file__).parent / "fixtures"

AIRPORT_IDS = {
    "JFK": 1,
    "LGA": 2,
    "EWR": 3,
    "LHR": 10,
    "LGW": 11,
    "LCY": 12,
    "SFO": 20,
    "BOS": 30,
    "EZE": 2561,
}

# Unordered airport pair -> (dist_km, dur_min)
DIRECT_ROUTES = {
    frozenset(("JFK", "LHR")): (5540, 420),
    frozenset(("JFK", "LGW")): (5550, 440),
    frozenset(("EWR", "LHR")): (5570, 430),
    frozenset(("JFK", "SFO")): (4150, 375),
    frozenset(("EWR", "SFO")): (4130, 380),
    frozenset(("BOS", "LHR")): (5260, 395),
    frozenset(("JFK", "BOS")): (300, 75),
    frozenset(("LGA", "BOS")): (300, 70),
    frozenset(("JFK", "EZE")): (8530, 650),
}

# (unordered pair, segments) -> legs of the first route
MULTI_HOP_ROUTES = {
    (frozenset(("LGA", "LHR")), 2): [[2, 30, 300, 70], [30, 10, 5260, 395]],
    (frozenset(("LGA", "SFO")), 2): [[2, 30, 300, 70], [30, 20, 4340, 390]],
    (frozenset(("BOS", "SFO")), 2): [[30, 1, 300, 75], [1, 20, 4150, 375]],
    (frozenset(("EZE", "SFO")), 2): [[2561, 1, 8530, 650], [1, 20, 4150, 385]],
}

_ROUTE_PATH = re.compile(r"ro(\d+)_(\d+)(?:_(\d+)_0_0)?\.json")


def make_response(payload, status_code=200):
    """A stand-in for requests.Response carrying a JSON payload."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    return resp


class FakeRouteService:
    """Answers flightconnections.com requests from the tables above."""

    def __init__(self):
        self.calls: list[str] = []
        self._codes = {v: k for k, v in AIRPORT_IDS.items()}

    def get(self, url, params=None, timeout=None):
        params = params or {}
        path = url.rsplit("/", 1)[-1]

        if path == "autocompl_airport.php":
            term = params["term"]
            self.calls.append(f"airport:{term}")
            if term not in AIRPORT_IDS:
                return make_response([])
            return make_response([{"value": f"Somewhere ({term})", "id": AIRPORT_IDS[term]}])

        match = _ROUTE_PATH.fullmatch(path)
        assert match, f"unexpected request {url}"
        assert params == {"v": 705, "f": "no0"}
        src = self._codes[int(match.group(1))]
        dst = self._codes[int(match.group(2))]
        key = frozenset((src, dst))

        if match.group(3) is None:
            self.calls.append(f"direct:{src}-{dst}")
            found = DIRECT_ROUTES.get(key)
            rows = [{"dist": found[0], "dur": found[1]}] if found else []
            return make_response({"data": rows})

        hops = int(match.group(3))
        self.calls.append(f"hops{hops}:{src}-{dst}")
        legs = MULTI_HOP_ROUTES.get((key, hops))
        return make_response({"routedata": [legs] if legs else []})

    def count(self, prefix: str) -> int:
        return sum(1 for c in self.calls if c.startswith(prefix))


@pytest.fixture
def fake_service(monkeypatch):
    """Route all HTTP traffic through a FakeRouteService."""
    service = FakeRouteService()

    def _get(session, url, params=None, timeout=None, **kwargs):
        return service.get(url, params=params, timeout=timeout)

    monkeypatch.setattr(requests.Session, "get", _get)
    return service


@pytest.fixture
def fixture_path():
    """Return a function that resolves a fixture file path as a string."""

    def _path(name: str) -> str:
        return str(FIXTURES_DIR / name)

    return _path

"""Remote route lookups for venuehops.

Provides the flightconnections.com client and the per-run lookup cache.
"""

from venuehops.lookup.cache import LookupCache
from venuehops.lookup.flightconnections import (
    FlightConnectionsClient,
    RouteLookupError,
    UnknownAirportError,
)

__all__ = [
    "FlightConnectionsClient",
    "LookupCache",
    "RouteLookupError",
    "UnknownAirportError",
]

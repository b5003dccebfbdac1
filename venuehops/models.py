"""Domain models for venuehops.

Pydantic models for the run configuration, per-pair route metrics and the
per-destination summaries built from them.
"""

import math
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Configuration ---


def _upper_codes(v):
    if isinstance(v, list):
        return [c.strip().upper() if isinstance(c, str) else c for c in v]
    return v


class TravelConfig(BaseModel):
    """Which attendees travel from where, and to which candidate venues."""

    model_config = ConfigDict(populate_by_name=True)

    src: list[str] = Field(min_length=1, description="Home city or airport codes")
    dst: list[str] = Field(min_length=1, description="Candidate destination codes")
    bc_threshold: float = Field(
        default=0,
        ge=0,
        alias="bcThreshold",
        description="Trip duration (minutes) above which business class is assumed",
    )
    cities: Optional[dict[str, Annotated[list[str], Field(min_length=1)]]] = Field(
        default=None,
        description="Extra metro code -> airport codes entries",
    )

    @field_validator("src", "dst", mode="before")
    @classmethod
    def uppercase_codes(cls, v):
        return _upper_codes(v)

    @field_validator("cities", mode="before")
    @classmethod
    def uppercase_cities(cls, v):
        if isinstance(v, dict):
            return {
                k.strip().upper() if isinstance(k, str) else k: _upper_codes(codes)
                for k, codes in v.items()
            }
        return v

    @field_validator("bc_threshold", mode="before")
    @classmethod
    def null_threshold(cls, v):
        # A missing or null threshold counts every attendee.
        return 0 if v is None else v


# --- Route metrics ---


class RouteMetrics(BaseModel):
    """Best-case cost of getting from one place to another.

    ``hops`` is the number of flight segments. When no route is known all
    three fields are ``math.inf``.
    """

    model_config = ConfigDict(frozen=True)

    hops: float = Field(ge=0)
    distance_km: float = Field(ge=0)
    duration_min: float = Field(ge=0)

    @property
    def reachable(self) -> bool:
        return not math.isinf(self.hops)


ZERO = RouteMetrics(hops=0, distance_km=0, duration_min=0)
UNREACHABLE = RouteMetrics(hops=math.inf, distance_km=math.inf, duration_min=math.inf)


class SourceResult(RouteMetrics):
    """Route metrics for one attendee city, tagged with its code."""

    code: str


# --- Aggregates ---


class DestinationSummary(BaseModel):
    """Summary statistics for everyone travelling to one destination."""

    dst: str
    min_hops: float
    max_hops: float
    avg_hops: float
    min_distance_km: float
    max_distance_km: float
    avg_distance_km: float
    min_duration_min: float
    max_duration_min: float
    avg_duration_min: float
    business_class_count: int = Field(ge=0)

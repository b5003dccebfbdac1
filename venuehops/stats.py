"""Summary statistics over the per-destination result table."""

from typing import Iterable, Sequence

from venuehops.models import DestinationSummary, SourceResult


def _non_empty(values: Iterable[float]) -> list[float]:
    values = list(values)
    if not values:
        raise ValueError("Cannot summarize an empty sequence")
    return values


def minimum(values: Iterable[float]) -> float:
    return min(_non_empty(values))


def maximum(values: Iterable[float]) -> float:
    return max(_non_empty(values))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean. A single infinite value makes the mean infinite."""
    values = _non_empty(values)
    return sum(values) / len(values)


def count_above(values: Iterable[float], threshold: float) -> int:
    """Number of values strictly greater than ``threshold``."""
    return sum(1 for v in values if v > threshold)


def summarize(dst: str, results: Sequence[SourceResult], bc_threshold: float = 0) -> DestinationSummary:
    """Reduce every attendee's trip to ``dst`` into one summary row."""
    hops = [r.hops for r in results]
    dist = [r.distance_km for r in results]
    dur = [r.duration_min for r in results]

    return DestinationSummary(
        dst=dst,
        min_hops=minimum(hops),
        max_hops=maximum(hops),
        avg_hops=mean(hops),
        min_distance_km=minimum(dist),
        max_distance_km=maximum(dist),
        avg_distance_km=mean(dist),
        min_duration_min=minimum(dur),
        max_duration_min=maximum(dur),
        avg_duration_min=mean(dur),
        business_class_count=count_above(dur, bc_threshold),
    )


def summarize_table(
    table: dict[str, list[SourceResult]], bc_threshold: float = 0
) -> list[DestinationSummary]:
    """Summaries for every destination, in table order."""
    return [summarize(dst, results, bc_threshold) for dst, results in table.items()]

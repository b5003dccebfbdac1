"""CSV output formatter -- one line per destination, no quoting surprises."""

from __future__ import annotations

import csv
from io import StringIO

from venuehops.models import DestinationSummary, RouteMetrics, SourceResult
from venuehops.output import format_number

SUMMARY_COLUMNS = [
    "dst",
    "minhops", "maxhops", "avghops",
    "mindist", "maxdist", "avgdist",
    "mindur", "maxdur", "avgdur",
    "bc",
]

PAIR_COLUMNS = ["src", "dst", "hops", "dist", "dur"]


def _summary_row(s: DestinationSummary) -> list[str]:
    metrics = [
        s.min_hops, s.max_hops, s.avg_hops,
        s.min_distance_km, s.max_distance_km, s.avg_distance_km,
        s.min_duration_min, s.max_duration_min, s.avg_duration_min,
    ]
    return [s.dst, *(format_number(m) for m in metrics), str(s.business_class_count)]


class CsvFormatter:
    """Format results as comma-separated lines."""

    def __init__(self, header: bool = False) -> None:
        self.header = header

    def _write(self, columns: list[str], rows: list[list[str]]) -> str:
        buf = StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        if self.header:
            writer.writerow(columns)
        writer.writerows(rows)
        return buf.getvalue().rstrip("\n")

    def format_summaries(
        self,
        summaries: list[DestinationSummary],
        table: dict[str, list[SourceResult]],
    ) -> str:
        """One line per destination; the raw table is not part of CSV output."""
        return self._write(SUMMARY_COLUMNS, [_summary_row(s) for s in summaries])

    def format_pair(self, src: str, dst: str, metrics: RouteMetrics) -> str:
        row = [
            src,
            dst,
            format_number(metrics.hops),
            format_number(metrics.distance_km),
            format_number(metrics.duration_min),
        ]
        return self._write(PAIR_COLUMNS, [row])

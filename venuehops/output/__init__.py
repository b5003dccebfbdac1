"""Output formatters for venuehops.

Provides a Formatter protocol and three implementations:
- CsvFormatter: one comma-separated line per destination (default)
- JsonFormatter: valid JSON for piping to jq
- RichFormatter: colored Rich tables
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from venuehops.models import DestinationSummary, RouteMetrics, SourceResult


class Formatter(Protocol):
    """Protocol for formatting venuehops results."""

    def format_summaries(
        self,
        summaries: list[DestinationSummary],
        table: dict[str, list[SourceResult]],
    ) -> str:
        """Format per-destination summaries (and, where supported, the raw table)."""
        ...

    def format_pair(self, src: str, dst: str, metrics: RouteMetrics) -> str:
        """Format the metrics of a single city pair."""
        ...


def format_number(value: float) -> str:
    """Render a metric: integers without a decimal point, infinity as ``Infinity``."""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def get_formatter(name: str = "csv", header: bool = False) -> Formatter:
    """Get a formatter by name.

    Args:
        name: One of "csv", "json", "rich".
        header: Prepend a column header line (csv only).

    Returns:
        A Formatter instance.

    Raises:
        ValueError: If the name is not recognized.
    """
    if name == "csv":
        from venuehops.output.csv_formatter import CsvFormatter

        return CsvFormatter(header=header)
    elif name == "json":
        from venuehops.output.json_formatter import JsonFormatter

        return JsonFormatter()
    elif name == "rich":
        from venuehops.output.rich_formatter import RichFormatter

        return RichFormatter()
    else:
        raise ValueError(f"Unknown formatter: {name!r}. Use 'csv', 'json', or 'rich'.")

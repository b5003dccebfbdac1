"""JSON output formatter -- valid JSON suitable for piping to jq."""

from __future__ import annotations

import json
import math
from typing import Any

from venuehops.models import DestinationSummary, RouteMetrics, SourceResult


def _json_number(v: Any) -> Any:
    if not isinstance(v, float):
        return v
    if math.isinf(v):
        return None
    if v.is_integer():
        return int(v)
    return v


def _finite(data: dict[str, Any]) -> dict[str, Any]:
    """Infinite floats become None (JSON has no Infinity), integral floats become ints."""
    return {k: _json_number(v) for k, v in data.items()}


class JsonFormatter:
    """Format venuehops results as pretty-printed JSON."""

    def format_summaries(
        self,
        summaries: list[DestinationSummary],
        table: dict[str, list[SourceResult]],
    ) -> str:
        """Summaries plus the full per-source table."""
        data = {
            "type": "destination_summaries",
            "destination_count": len(summaries),
            "summaries": [_finite(s.model_dump()) for s in summaries],
            "table": {
                dst: [_finite(r.model_dump()) for r in results]
                for dst, results in table.items()
            },
        }
        return json.dumps(data, indent=2)

    def format_pair(self, src: str, dst: str, metrics: RouteMetrics) -> str:
        data = {
            "type": "pair_distance",
            "src": src,
            "dst": dst,
            "reachable": metrics.reachable,
            **_finite(metrics.model_dump()),
        }
        return json.dumps(data, indent=2)

"""Rich-based output formatter with colored tables and panels."""

from __future__ import annotations

import math
from io import StringIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from venuehops.models import DestinationSummary, RouteMetrics, SourceResult
from venuehops.output import format_number


def _render(renderable) -> str:
    """Render a Rich object to a string."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=120)
    console.print(renderable)
    return buf.getvalue()


def _cell(value: float, precision: int = 0) -> Text:
    """Numeric cell; unreachable values show as a red dash."""
    if math.isinf(value):
        return Text("-", style="bold red")
    if precision:
        return Text(f"{value:,.{precision}f}")
    return Text(f"{value:,.0f}")


class RichFormatter:
    """Format venuehops results using Rich tables."""

    def format_summaries(
        self,
        summaries: list[DestinationSummary],
        table: dict[str, list[SourceResult]],
    ) -> str:
        """Summary table with the easiest destination highlighted."""
        finite = [s.avg_duration_min for s in summaries if not math.isinf(s.avg_duration_min)]
        best = min(finite) if finite else None

        out = Table(title="Travel Difficulty by Destination", show_lines=True)
        out.add_column("Destination", style="cyan")
        out.add_column("Hops min/max/avg", justify="right")
        out.add_column("Distance km min/max/avg", justify="right")
        out.add_column("Duration min/max/avg", justify="right")
        out.add_column("Business", justify="right", style="yellow")

        for s in summaries:
            dst = Text(s.dst, style="bold green" if s.avg_duration_min == best else "cyan")
            out.add_row(
                dst,
                Text(" / ").join([_cell(s.min_hops), _cell(s.max_hops), _cell(s.avg_hops, 2)]),
                Text(" / ").join(
                    [_cell(s.min_distance_km), _cell(s.max_distance_km), _cell(s.avg_distance_km)]
                ),
                Text(" / ").join(
                    [_cell(s.min_duration_min), _cell(s.max_duration_min), _cell(s.avg_duration_min)]
                ),
                str(s.business_class_count),
            )

        return _render(out)

    def format_pair(self, src: str, dst: str, metrics: RouteMetrics) -> str:
        """Single city pair as a panel."""
        if metrics.reachable:
            lines = [
                f"Hops:      {format_number(metrics.hops)}",
                f"Distance:  {metrics.distance_km:,.0f} km",
                f"Duration:  {metrics.duration_min:,.0f} min",
            ]
            text = Text("\n".join(lines))
            border = "green"
        else:
            text = Text("No route found", style="bold red")
            border = "red"
        return _render(Panel(text, title=f"{src} -> {dst}", border_style=border))

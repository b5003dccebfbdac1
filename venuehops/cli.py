"""venuehops CLI -- how hard is it for everyone to get to each venue?

Provides commands for the full source/destination analysis, single-pair
lookups and listing the metro city table.
"""

import asyncio
import json as json_mod
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from pydantic import ValidationError

from venuehops.models import TravelConfig

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="venuehops",
    help="Estimate travel difficulty (hops, distance, duration) from home cities to candidate venues.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Global option types
# ---------------------------------------------------------------------------


class OutputFormat(str, Enum):
    """Output formats accepted by --format."""

    CSV = "csv"
    JSON = "json"
    RICH = "rich"


FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", case_sensitive=False, help="Output format."),
]
JsonFlag = Annotated[bool, typer.Option("--json", help="Output as JSON.")]
RichFlag = Annotated[bool, typer.Option("--rich", help="Output as a colored table.")]
HeaderFlag = Annotated[bool, typer.Option("--header", help="Prepend a CSV header line.")]
VerboseFlag = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output.")]
QuietFlag = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress non-essential output.")]
BaseUrlOption = Annotated[
    Optional[str],
    typer.Option("--base-url", help="Route service base URL (default: $VENUEHOPS_BASE_URL or flightconnections.com)."),
]
MaxHopsOption = Annotated[
    int,
    typer.Option("--max-hops", min=1, help="Longest route to look for, in flight segments."),
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_format(
    output_format: OutputFormat = OutputFormat.CSV,
    json_flag: bool = False,
    rich_flag: bool = False,
) -> str:
    """Determine output format: --json > --rich > --format (default csv)."""
    if json_flag:
        return "json"
    if rich_flag:
        return "rich"
    return output_format.value


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)


def _parse_config_text(path: Path) -> object:
    """Parse a config file as JSON, or as YAML for .yaml/.yml files."""
    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            msg = f"YAML parse error in {path}"
            if hasattr(exc, "problem_mark") and exc.problem_mark is not None:
                mark = exc.problem_mark
                msg += f" at line {mark.line + 1}, column {mark.column + 1}"
            if hasattr(exc, "problem") and exc.problem:
                msg += f": {exc.problem}"
            raise typer.BadParameter(msg)

    try:
        return json_mod.loads(text)
    except json_mod.JSONDecodeError as exc:
        raise typer.BadParameter(
            f"JSON parse error in {path} at line {exc.lineno}, column {exc.colno}: {exc.msg}"
        )


def _load_config(file: str) -> TravelConfig:
    """Load a config file and validate it into a TravelConfig.

    Provides helpful error messages for:
    - File not found
    - JSON/YAML parse errors (with line/column)
    - Malformed configs (with field-level messages)
    """
    path = Path(file)

    if not path.exists():
        hint = ""
        if not path.is_absolute():
            hint = f" (looked in {Path.cwd()})"
        raise typer.BadParameter(
            f"File not found: {file}{hint}\n  Hint: Check the file path and try again."
        )

    raw = _parse_config_text(path)
    if not isinstance(raw, dict):
        raise typer.BadParameter(
            f"Malformed config file {file}: expected an object, got {type(raw).__name__}"
        )

    try:
        return TravelConfig(**raw)
    except ValidationError as exc:
        lines = [f"Malformed config file {file}:"]
        for err in exc.errors():
            loc = " -> ".join(str(x) for x in err["loc"])
            lines.append(f"  {loc}: {err['msg']}")
        raise typer.BadParameter("\n".join(lines))


def _error_panel(message: str) -> None:
    """Print an error message, using Rich panel if available."""
    try:
        from rich.console import Console
        from rich.panel import Panel

        console = Console(stderr=True)
        console.print(Panel(message, title="Error", border_style="red"))
    except Exception:
        typer.echo(f"Error: {message}", err=True)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def run(
    config: str = typer.Argument(help="Path to config JSON file (src, dst, bcThreshold)"),
    output_format: FormatOption = OutputFormat.CSV,
    json: JsonFlag = False,
    rich: RichFlag = False,
    header: HeaderFlag = False,
    base_url: BaseUrlOption = None,
    max_hops: MaxHopsOption = 3,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Summarize travel from every source city to each destination, one CSV line per destination."""
    _setup_logging(verbose, quiet)
    try:
        cfg = _load_config(config)
        from venuehops.cities import merged_aliases
        from venuehops.distance import RouteFinder, build_table
        from venuehops.lookup import FlightConnectionsClient
        from venuehops.output import get_formatter
        from venuehops.stats import summarize_table

        with FlightConnectionsClient(base_url=base_url) as client:
            finder = RouteFinder(client, aliases=merged_aliases(cfg.cities), max_hops=max_hops)
            table = asyncio.run(build_table(cfg, finder))

        summaries = summarize_table(table, cfg.bc_threshold)
        fmt = get_formatter(_get_format(output_format, json, rich), header=header)
        typer.echo(fmt.format_summaries(summaries, table))

    except typer.Exit:
        raise
    except typer.BadParameter:
        raise
    except Exception as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


@app.command()
def pair(
    src: str = typer.Argument(help="Source city or airport code"),
    dst: str = typer.Argument(help="Destination city or airport code"),
    output_format: FormatOption = OutputFormat.CSV,
    json: JsonFlag = False,
    rich: RichFlag = False,
    header: HeaderFlag = False,
    base_url: BaseUrlOption = None,
    max_hops: MaxHopsOption = 3,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Best-case hops, distance and duration between two cities."""
    _setup_logging(verbose, quiet)
    src, dst = src.upper(), dst.upper()
    try:
        from venuehops.distance import RouteFinder
        from venuehops.lookup import FlightConnectionsClient
        from venuehops.output import get_formatter

        with FlightConnectionsClient(base_url=base_url) as client:
            finder = RouteFinder(client, max_hops=max_hops)
            metrics = asyncio.run(finder.city_distance(src, dst))

        fmt = get_formatter(_get_format(output_format, json, rich), header=header)
        typer.echo(fmt.format_pair(src, dst, metrics))

    except typer.Exit:
        raise
    except Exception as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


@app.command()
def cities() -> None:
    """List metro codes and the airports they expand to."""
    from venuehops.cities import CITY_AIRPORTS

    for code, airports in sorted(CITY_AIRPORTS.items()):
        typer.echo(f"{code}: {', '.join(airports)}")

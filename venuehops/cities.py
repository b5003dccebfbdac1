"""Metro city codes and the airports that serve them."""

from pathlib import Path
from typing import Mapping, Optional

import yaml

_DATA_DIR = Path(__file__).parent / "data"

with open(_DATA_DIR / "cities.yaml") as f:
    CITY_AIRPORTS: dict[str, list[str]] = yaml.safe_load(f)


def expand(code: str, aliases: Optional[Mapping[str, list[str]]] = None) -> list[str]:
    """Return the airports for a city code.

    Codes missing from the alias table are returned as a one-element list,
    on the assumption that they are already airport codes.
    """
    table = CITY_AIRPORTS if aliases is None else aliases
    code = code.upper()
    return list(table.get(code, [code]))


def merged_aliases(extra: Optional[Mapping[str, list[str]]] = None) -> dict[str, list[str]]:
    """Built-in alias table with ``extra`` entries added or overriding."""
    table = {k: list(v) for k, v in CITY_AIRPORTS.items()}
    for code, airports in (extra or {}).items():
        table[code.upper()] = [a.upper() for a in airports]
    return table

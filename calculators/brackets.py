"""Tax bracket tables.

A bracket table is an ordered tuple of :class:`TaxBracket` rows, each one a
marginal-rate segment ``[min, max)``.  A well formed table starts at zero, has
no gaps or overlaps (``table[i + 1].min == table[i].max``) and its final row
extends to infinity.  Tables are immutable; the editing helpers in
``calculators.bracket_editor`` always hand back a new tuple.

Default tables for each supported tax year live in ``data/tax_tables.json``.
The JSON schema stores an open-ended ``max`` as ``null``:

>>> table = table_from_json([{"min": 0, "max": 10000, "rate": 0.1},
...                          {"min": 10000, "max": None, "rate": 0.2}])
>>> table[-1].max
inf
>>> table_to_json(table)[-1]
{'min': 10000.0, 'max': None, 'rate': 0.2}
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

INFINITY = math.inf

FILING_STATUSES = ("single", "marriedJoint")
FILING_STATUS_LABELS = {
    "single": "Single",
    "marriedJoint": "Married Filing Jointly",
    "marriedSeparate": "Married Filing Separately",
}

_DEFAULT_TAX_TABLE_PATH = Path(__file__).resolve().parent / "data" / "tax_tables.json"


@dataclass(frozen=True)
class TaxBracket:
    min: float
    max: float
    rate: float

    @property
    def is_open_ended(self) -> bool:
        return math.isinf(self.max)


BracketTable = Tuple[TaxBracket, ...]


def bracket_from_dict(row: Dict) -> TaxBracket:
    """Build a bracket from its JSON form.  ``max`` of ``None`` means infinity."""
    upper = row.get("max")
    return TaxBracket(
        min=float(row["min"]),
        max=INFINITY if upper is None else float(upper),
        rate=float(row["rate"]),
    )


def bracket_to_dict(bracket: TaxBracket) -> Dict:
    return {
        "min": bracket.min,
        "max": None if bracket.is_open_ended else bracket.max,
        "rate": bracket.rate,
    }


def table_from_json(rows: Iterable[Dict]) -> BracketTable:
    """Convert a list of JSON rows into a bracket table.

    Raises ``TypeError``, ``KeyError`` or ``ValueError`` when a row is
    malformed; callers restoring persisted data are expected to fall back to
    defaults in that case.
    """
    table = tuple(bracket_from_dict(row) for row in rows)
    if not table:
        raise ValueError("A bracket table needs at least one bracket")
    return table


def table_to_json(table: Iterable[TaxBracket]) -> List[Dict]:
    return [bracket_to_dict(b) for b in table]


def validate_table(table: BracketTable) -> List[str]:
    """Return a list of human readable problems with ``table``.

    An empty list means the table is a valid partition of the income line.
    """
    problems: List[str] = []
    if not table:
        return ["table has no brackets"]
    for i, bracket in enumerate(table):
        if bracket.max <= bracket.min:
            problems.append(f"bracket {i + 1} ends at or below its start")
        if bracket.is_open_ended and i != len(table) - 1:
            problems.append(f"bracket {i + 1} is open-ended but is not the last bracket")
        if i > 0 and bracket.min != table[i - 1].max:
            problems.append(f"bracket {i + 1} does not start where bracket {i} ends")
    if not table[-1].is_open_ended:
        problems.append("last bracket must extend to infinity")
    return problems


def is_valid_table(table: BracketTable) -> bool:
    return not validate_table(table)


@lru_cache(maxsize=4)
def _read_tax_tables(path: Path) -> Dict[str, Dict]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_tax_tables(path: Optional[Path] = None) -> Dict[str, Dict]:
    """Load the default bracket tables keyed by tax year.

    Parameters
    ----------
    path : Path, optional
        JSON file following the schema of ``data/tax_tables.json``.  The file
        shipped with the package is used when omitted.
    """
    return _read_tax_tables(Path(path or _DEFAULT_TAX_TABLE_PATH))


def available_years() -> List[int]:
    return sorted(int(year) for year in load_tax_tables())


def default_federal_tables(year: int = 2025) -> Dict[str, BracketTable]:
    federal = load_tax_tables()[str(year)]["federal"]
    return {status: table_from_json(federal[status]) for status in FILING_STATUSES}


def default_state_table(year: int = 2025) -> BracketTable:
    return table_from_json(load_tax_tables()[str(year)]["state"])


__all__ = [
    "INFINITY",
    "FILING_STATUSES",
    "FILING_STATUS_LABELS",
    "TaxBracket",
    "BracketTable",
    "bracket_from_dict",
    "bracket_to_dict",
    "table_from_json",
    "table_to_json",
    "validate_table",
    "is_valid_table",
    "load_tax_tables",
    "available_years",
    "default_federal_tables",
    "default_state_table",
]

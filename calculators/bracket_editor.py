"""Editing operations for bracket tables.

Every function takes a table and returns a new one; the argument is never
modified.  Form input arrives as raw strings, so the field parsers follow a
fail-safe-to-zero rule: anything that does not start with a number becomes
``0`` instead of raising.

``add_bracket`` and ``remove_bracket`` keep exactly one open-ended bracket at
the end of the table.  ``update_field`` and removal of a middle bracket do not
re-check the neighbouring boundaries; use ``brackets.validate_table`` to find
out whether an edited table is still contiguous.
"""

from __future__ import annotations

import math
import re
from dataclasses import replace
from typing import NamedTuple, Union

from .brackets import INFINITY, BracketTable, TaxBracket

EDITABLE_FIELDS = ("min", "max", "rate")

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

RawValue = Union[str, int, float, None]


class EditDefaults(NamedTuple):
    increment: float
    rate: float


FEDERAL_EDIT_DEFAULTS = EditDefaults(increment=50000.0, rate=0.35)
STATE_EDIT_DEFAULTS = EditDefaults(increment=25000.0, rate=0.099)


def parse_int(raw: RawValue) -> int:
    """Parse the leading integer of ``raw``; ``"12.9"`` gives 12, junk gives 0."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return int(raw) if math.isfinite(raw) else 0
    match = _INT_PREFIX.match(str(raw or ""))
    return int(match.group(1)) if match else 0


def parse_float(raw: RawValue) -> float:
    """Parse the leading decimal number of ``raw``; junk gives 0.0."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw) if math.isfinite(raw) else 0.0
    match = _FLOAT_PREFIX.match(str(raw or ""))
    if not match:
        return 0.0
    value = float(match.group(1))
    return value if math.isfinite(value) else 0.0


def update_field(table: BracketTable, index: int, field: str, raw_value: RawValue) -> BracketTable:
    """Replace one field of the bracket at ``index``.

    ``rate`` is parsed as a float and ``min``/``max`` as integers.  Only the
    targeted bracket changes.
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown bracket field {field!r}; expected one of {EDITABLE_FIELDS}")
    value = parse_float(raw_value) if field == "rate" else float(parse_int(raw_value))
    return tuple(
        replace(bracket, **{field: value}) if i == index else bracket
        for i, bracket in enumerate(table)
    )


def add_bracket(
    table: BracketTable,
    increment: float = FEDERAL_EDIT_DEFAULTS.increment,
    rate: float = FEDERAL_EDIT_DEFAULTS.rate,
) -> BracketTable:
    """Append a bracket after the current last one.

    If the last bracket is open ended it is closed at ``last.min + increment``
    and the new bracket takes over the infinite tail.  Otherwise the new
    bracket spans ``[last.max, last.max + increment)``.
    """
    if not table:
        return (TaxBracket(min=0.0, max=INFINITY, rate=rate),)
    last = table[-1]
    if last.is_open_ended:
        start = last.min + increment
        closed = replace(last, max=start)
        return table[:-1] + (closed, TaxBracket(min=start, max=INFINITY, rate=rate))
    return table + (TaxBracket(min=last.max, max=last.max + increment, rate=rate),)


def remove_bracket(table: BracketTable, index: int) -> BracketTable:
    """Drop the bracket at ``index``.

    A table always keeps at least one bracket, so removing from a single
    bracket table (or with an index out of range) returns it unchanged.  When
    the last bracket goes, the new last bracket is reopened to infinity.
    """
    if len(table) <= 1 or not 0 <= index < len(table):
        return table
    remaining = table[:index] + table[index + 1:]
    if index == len(table) - 1:
        remaining = remaining[:-1] + (replace(remaining[-1], max=INFINITY),)
    return remaining


__all__ = [
    "EDITABLE_FIELDS",
    "EditDefaults",
    "FEDERAL_EDIT_DEFAULTS",
    "STATE_EDIT_DEFAULTS",
    "parse_int",
    "parse_float",
    "update_field",
    "add_bracket",
    "remove_bracket",
]

"""Progressive tax calculation.

Only the slice of income falling inside each bracket is taxed at that
bracket's rate.  :func:`compute_tax` walks the table in ascending order and
stops at the first bracket that starts at or above the income, so brackets
above the income never show up in the breakdown.

Example
-------

>>> table = (TaxBracket(0, 10000, 0.10), TaxBracket(10000, INFINITY, 0.20))
>>> result = compute_tax(25000, table)
>>> round(result.total, 2)
4000.0
>>> [row.range_label for row in result.breakdown]
['$0 - $10,000', '$10,000 - ∞']

Amounts are plain floats and no rounding happens here; formatting is left to
the display layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .brackets import INFINITY, TaxBracket


@dataclass(frozen=True)
class BreakdownRow:
    range_label: str
    rate_label: str
    taxable_amount: float
    tax: float


@dataclass(frozen=True)
class TaxResult:
    total: float = 0.0
    breakdown: List[BreakdownRow] = field(default_factory=list)


def format_amount(amount: float) -> str:
    if amount == INFINITY:
        return "∞"
    if float(amount).is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def range_label(bracket: TaxBracket) -> str:
    return f"{format_amount(bracket.min)} - {format_amount(bracket.max)}"


def rate_label(rate: float) -> str:
    return f"{rate * 100:.2f}%"


def compute_tax(taxable_income: float, brackets: Sequence[TaxBracket]) -> TaxResult:
    """Compute progressive tax owed on ``taxable_income``.

    Parameters
    ----------
    taxable_income : float
        Income after deductions.  Zero or negative income owes nothing.
    brackets : sequence of TaxBracket
        Table sorted ascending by ``min`` whose last bracket is open ended.

    Returns
    -------
    TaxResult
        ``total`` is accumulated while iterating; ``breakdown`` holds one row
        per bracket that actually taxed a positive amount.
    """
    total = 0.0
    breakdown: List[BreakdownRow] = []
    for bracket in brackets:
        if taxable_income <= bracket.min:
            break
        in_bracket = min(taxable_income, bracket.max) - bracket.min
        if in_bracket <= 0:
            continue
        tax = in_bracket * bracket.rate
        total += tax
        breakdown.append(
            BreakdownRow(
                range_label=range_label(bracket),
                rate_label=rate_label(bracket.rate),
                taxable_amount=in_bracket,
                tax=tax,
            )
        )
    return TaxResult(total=total, breakdown=breakdown)


def active_bracket_index(income: float, brackets: Sequence[TaxBracket]) -> int:
    """Index of the bracket containing ``income``; the last one if none does."""
    for i, bracket in enumerate(brackets):
        if bracket.min <= income < bracket.max:
            return i
    return len(brackets) - 1


def marginal_rate(income: float, brackets: Sequence[TaxBracket]) -> float:
    if not brackets:
        return 0.0
    return brackets[active_bracket_index(income, brackets)].rate


def effective_rate_curve(
    brackets: Sequence[TaxBracket],
    upper: float,
    points: int = 200,
) -> Tuple[np.ndarray, np.ndarray]:
    """Incomes from 0 to ``upper`` and the effective rate (in %) at each."""
    incomes = np.linspace(0.0, max(float(upper), 1.0), points)
    rates = np.array(
        [compute_tax(x, brackets).total / x * 100.0 if x > 0 else 0.0 for x in incomes]
    )
    return incomes, rates


__all__ = [
    "BreakdownRow",
    "TaxResult",
    "format_amount",
    "range_label",
    "rate_label",
    "compute_tax",
    "active_bracket_index",
    "marginal_rate",
    "effective_rate_curve",
]

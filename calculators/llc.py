"""LLC passthrough tax estimate.

Single-member LLC profit is taxed on the owner's return.  On top of income
tax the owner pays self-employment tax (15.3 % on 92.35 % of net earnings),
half of which is deductible before income tax is figured.

>>> round(self_employment_tax(100000), 2)
14129.55
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .bracket_editor import parse_float
from .context import BracketContext, require_context
from .taxes import compute_tax

SE_EARNINGS_FACTOR = 0.9235
SE_TAX_RATE = 0.153

STANDARD_DEDUCTIONS: Dict[str, Dict[str, float]] = {
    "single": {"federal": 14600.0, "state": 2770.0},
    "marriedJoint": {"federal": 29200.0, "state": 5540.0},
}

INPUTS_KEY = "llcInputs"

DEFAULT_INPUTS = {
    "income": "",
    "filing_status": "single",
    "standard_deduction": True,
    "itemized_amount": "",
}


def self_employment_tax(net_earnings: float) -> float:
    return net_earnings * SE_EARNINGS_FACTOR * SE_TAX_RATE


def deductions_for(inputs: Mapping) -> Dict[str, float]:
    if inputs.get("standard_deduction", True):
        status = inputs.get("filing_status", "single")
        return dict(STANDARD_DEDUCTIONS.get(status, STANDARD_DEDUCTIONS["single"]))
    itemized = parse_float(inputs.get("itemized_amount"))
    return {"federal": itemized, "state": itemized}


def calculate_llc(inputs: Mapping, context: Optional[BracketContext]) -> Optional[Dict]:
    """Estimate federal, self-employment and state tax for an LLC owner.

    Returns ``None`` when no positive income has been entered so the caller
    can hide the results entirely.
    """
    context = require_context(context, "The LLC calculator")
    gross = parse_float(inputs.get("income"))
    if gross <= 0:
        return None

    status = inputs.get("filing_status", "single")
    deductions = deductions_for(inputs)

    se_tax = self_employment_tax(gross)
    se_deduction = se_tax / 2

    federal_taxable = max(0.0, gross - se_deduction - deductions["federal"])
    federal = compute_tax(federal_taxable, context.federal_for(status))

    state_taxable = max(0.0, gross - se_deduction - deductions["state"])
    state = compute_tax(state_taxable, context.state)

    total_federal = federal.total + se_tax
    total_tax = total_federal + state.total
    return {
        "gross_income": gross,
        "deductions": deductions,
        "se_tax": se_tax,
        "se_deduction": se_deduction,
        "federal_taxable_income": federal_taxable,
        "state_taxable_income": state_taxable,
        "federal_income_tax": federal.total,
        "state_income_tax": state.total,
        "total_federal_tax": total_federal,
        "total_tax": total_tax,
        "effective_rate": total_tax / gross * 100.0,
        "after_tax_income": gross - total_tax,
        "federal_breakdown": federal.breakdown,
        "state_breakdown": state.breakdown,
    }


__all__ = [
    "SE_EARNINGS_FACTOR",
    "SE_TAX_RATE",
    "STANDARD_DEDUCTIONS",
    "INPUTS_KEY",
    "DEFAULT_INPUTS",
    "self_employment_tax",
    "deductions_for",
    "calculate_llc",
]

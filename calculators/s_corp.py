"""S-Corp tax estimate with Oregon payroll taxes.

The owner draws a salary, which carries employee and employer payroll taxes,
and the remaining profit passes through to the owner's return.  Employer-side
payroll taxes (Social Security, Medicare, FUTA and SUTA) are business expenses
and reduce the passthrough profit.  Oregon's Corporate Activity Tax is shown
as its own line and never goes through the brackets.

Quarterly estimated payments use the higher of a quarter of this year's
non-payroll tax and a quarter of 110 % of last year's tax (the safe harbor).
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .bracket_editor import parse_float
from .context import BracketContext, require_context
from .taxes import compute_tax

CAT_EXEMPTION = 1_000_000.0
CAT_RATE = 0.0057
SAFE_HARBOR_FACTOR = 1.10

INPUTS_KEY = "sCorpInputs"
PAYROLL_RATES_KEY = "sCorpPayrollRates"

FILING_STATUS_OPTIONS = ("single", "marriedJoint", "marriedSeparate")

DEFAULT_INPUTS = {
    "revenue": 150000.0,
    "salary": 60000.0,
    "business_expenses": 20000.0,
    "health_insurance": 6000.0,
    "retirement_contribution": 5000.0,
    "home_office_deduction": 2000.0,
    "prior_year_tax": 0.0,
    "filing_status": "single",
    "commercial_activity": 150000.0,
}

DEFAULT_PAYROLL_RATES = {
    "social_security_employee": 0.062,
    "social_security_employer": 0.062,
    "social_security_wage_base": 168600.0,
    "medicare_employee": 0.0145,
    "medicare_employer": 0.0145,
    "medicare_surtax_threshold": 200000.0,
    "medicare_surtax_rate": 0.009,
    "oregon_paid_leave": 0.006,
    "oregon_transit": 0.001,
    "futa": 0.006,
    "futa_wage_base": 7000.0,
    "suta": 0.024,
}


def update_input(inputs: Mapping, field: str, raw_value) -> Dict:
    """Return a copy of ``inputs`` with a numeric field parsed from form text."""
    return {**inputs, field: parse_float(raw_value)}


def update_payroll_rate(rates: Mapping, field: str, raw_value) -> Dict:
    if field not in DEFAULT_PAYROLL_RATES:
        raise ValueError(f"Unknown payroll rate {field!r}")
    return {**rates, field: parse_float(raw_value)}


def employer_payroll_taxes(salary: float, rates: Mapping) -> Dict[str, float]:
    social_security = min(salary, rates["social_security_wage_base"]) * rates["social_security_employer"]
    medicare = salary * rates["medicare_employer"]
    futa = min(salary * rates["futa"], rates["futa_wage_base"] * rates["futa"])
    suta = salary * rates["suta"]
    return {
        "social_security": social_security,
        "medicare": medicare,
        "futa": futa,
        "suta": suta,
    }


def employee_payroll_taxes(salary: float, rates: Mapping) -> Dict[str, float]:
    return {
        "social_security": min(salary, rates["social_security_wage_base"]) * rates["social_security_employee"],
        "medicare": salary * rates["medicare_employee"],
        "medicare_surtax": max(
            0.0, (salary - rates["medicare_surtax_threshold"]) * rates["medicare_surtax_rate"]
        ),
        "oregon_paid_leave": salary * rates["oregon_paid_leave"],
        "oregon_transit": salary * rates["oregon_transit"],
    }


def corporate_activity_tax(commercial_activity: float) -> float:
    return max(0.0, (commercial_activity - CAT_EXEMPTION) * CAT_RATE)


def required_quarterly_payment(total_tax: float, payroll_tax: float, prior_year_tax: float) -> float:
    return max((total_tax - payroll_tax) / 4, prior_year_tax * SAFE_HARBOR_FACTOR / 4)


def calculate_s_corp(
    inputs: Mapping,
    context: Optional[BracketContext],
    rates: Optional[Mapping] = None,
) -> Optional[Dict]:
    """Estimate payroll, income and activity taxes for an S-Corp owner.

    Parameters
    ----------
    inputs : mapping
        Form values keyed as in ``DEFAULT_INPUTS``; numbers may arrive as
        strings and unreadable values count as zero.
    context : BracketContext
        Source of the federal and state bracket tables.
    rates : mapping, optional
        Payroll rates keyed as in ``DEFAULT_PAYROLL_RATES``.

    Returns
    -------
    dict or None
        ``None`` when there is no revenue to report on.
    """
    context = require_context(context, "The S-Corp calculator")
    rates = {**DEFAULT_PAYROLL_RATES, **(rates or {})}
    values = {k: parse_float(inputs.get(k)) for k in DEFAULT_INPUTS if k != "filing_status"}
    revenue = values["revenue"]
    if revenue <= 0:
        return None
    salary = values["salary"]

    employer = employer_payroll_taxes(salary, rates)
    employer_total = employer["social_security"] + employer["medicare"]
    total_business_expenses = (
        values["business_expenses"]
        + values["health_insurance"]
        + values["retirement_contribution"]
        + values["home_office_deduction"]
        + employer_total
        + employer["futa"]
        + employer["suta"]
    )
    business_profit = max(0.0, revenue - salary - total_business_expenses)

    employee = employee_payroll_taxes(salary, rates)
    total_income = salary + business_profit

    status = inputs.get("filing_status", "single")
    federal = compute_tax(total_income, context.federal_for(status))
    state = compute_tax(total_income, context.state)
    cat_tax = corporate_activity_tax(values["commercial_activity"])

    total_payroll = sum(employee.values()) + employer_total + employer["futa"] + employer["suta"]
    total_income_taxes = federal.total + state.total
    total_tax = total_payroll + total_income_taxes + cat_tax

    return {
        "business_profit": business_profit,
        "total_income": total_income,
        "total_business_expenses": total_business_expenses,
        "employer_payroll_taxes": employer_total,
        "futa": employer["futa"],
        "suta": employer["suta"],
        "social_security_employee": employee["social_security"],
        "medicare_employee": employee["medicare"],
        "medicare_surtax": employee["medicare_surtax"],
        "oregon_paid_leave": employee["oregon_paid_leave"],
        "oregon_transit": employee["oregon_transit"],
        "federal_tax": federal.total,
        "state_tax": state.total,
        "cat_tax": cat_tax,
        "total_payroll_taxes": total_payroll,
        "total_income_taxes": total_income_taxes,
        "total_tax": total_tax,
        "net_income": total_income - total_tax,
        "effective_rate": total_tax / total_income * 100.0 if total_income > 0 else 0.0,
        "required_quarterly": required_quarterly_payment(total_tax, total_payroll, values["prior_year_tax"]),
        "federal_breakdown": federal.breakdown,
        "state_breakdown": state.breakdown,
    }


__all__ = [
    "CAT_EXEMPTION",
    "CAT_RATE",
    "SAFE_HARBOR_FACTOR",
    "INPUTS_KEY",
    "PAYROLL_RATES_KEY",
    "FILING_STATUS_OPTIONS",
    "DEFAULT_INPUTS",
    "DEFAULT_PAYROLL_RATES",
    "update_input",
    "update_payroll_rate",
    "employer_payroll_taxes",
    "employee_payroll_taxes",
    "corporate_activity_tax",
    "required_quarterly_payment",
    "calculate_s_corp",
]

import streamlit as st

from calculators import llc, s_corp
from calculators.bracket_editor import parse_float
from calculators.brackets import FILING_STATUS_LABELS

# Stable widget keys so we can programmatically set values on load
WIDGET_KEYS = {
    "llc_income": "in_llc_income",
    "llc_filing": "in_llc_filing",
    "llc_standard": "in_llc_standard",
    "llc_itemized": "in_llc_itemized",

    "sc_revenue": "in_sc_revenue",
    "sc_salary": "in_sc_salary",
    "sc_business_expenses": "in_sc_business_expenses",
    "sc_health_insurance": "in_sc_health_insurance",
    "sc_retirement_contribution": "in_sc_retirement_contribution",
    "sc_home_office_deduction": "in_sc_home_office_deduction",
    "sc_prior_year_tax": "in_sc_prior_year_tax",
    "sc_filing": "in_sc_filing",
    "sc_commercial_activity": "in_sc_commercial_activity",
}

S_CORP_FIELDS = [
    ("revenue", "Annual revenue", "Gross receipts before any expenses."),
    ("salary", "Owner salary", "W-2 wages paid to yourself through payroll."),
    ("business_expenses", "Business expenses", None),
    ("health_insurance", "Health insurance", "Premiums paid by the S-Corp for the owner."),
    ("retirement_contribution", "Retirement contribution", None),
    ("home_office_deduction", "Home office deduction", None),
    ("prior_year_tax", "Prior year tax", "Used for the 110% safe harbor on quarterly payments."),
    ("commercial_activity", "Oregon commercial activity", "CAT applies above $1,000,000."),
]

PAYROLL_FIELDS = [
    ("social_security_employee", "Social Security (employee)", 0.001),
    ("social_security_employer", "Social Security (employer)", 0.001),
    ("social_security_wage_base", "Social Security wage base", 100.0),
    ("medicare_employee", "Medicare (employee)", 0.0005),
    ("medicare_employer", "Medicare (employer)", 0.0005),
    ("medicare_surtax_threshold", "Medicare surtax threshold", 1000.0),
    ("medicare_surtax_rate", "Medicare surtax rate", 0.001),
    ("oregon_paid_leave", "Oregon paid leave", 0.001),
    ("oregon_transit", "Oregon transit", 0.0005),
    ("futa", "FUTA rate", 0.001),
    ("futa_wage_base", "FUTA wage base", 100.0),
    ("suta", "SUTA rate", 0.001),
]


def _status_index(options, status):
    return options.index(status) if status in options else 0


def llc_form(state: dict) -> dict:
    """Sidebar inputs for the LLC calculator; returns the updated form state."""
    st.sidebar.header("Income & Deductions")
    income = st.sidebar.text_input(
        "Taxable LLC income", value=str(state.get("income", "")),
        key=WIDGET_KEYS["llc_income"], placeholder="Enter your taxable income",
    )
    options = list(llc.STANDARD_DEDUCTIONS)
    filing = st.sidebar.selectbox(
        "Filing status", options,
        index=_status_index(options, state.get("filing_status")),
        format_func=lambda s: FILING_STATUS_LABELS.get(s, s),
        key=WIDGET_KEYS["llc_filing"],
    )
    std = llc.STANDARD_DEDUCTIONS[filing]
    standard = st.sidebar.checkbox(
        "Use standard deduction", value=bool(state.get("standard_deduction", True)),
        key=WIDGET_KEYS["llc_standard"],
        help=f"Federal: ${std['federal']:,.0f}, Oregon: ${std['state']:,.0f}",
    )
    itemized = state.get("itemized_amount", "")
    if not standard:
        itemized = st.sidebar.text_input(
            "Itemized deduction amount", value=str(itemized),
            key=WIDGET_KEYS["llc_itemized"],
            placeholder="Enter itemized deduction amount",
        )
    return {
        "income": income,
        "filing_status": filing,
        "standard_deduction": bool(standard),
        "itemized_amount": itemized,
    }


def s_corp_form(state: dict) -> dict:
    """Sidebar inputs for the S-Corp calculator; returns the updated form state."""
    st.sidebar.header("Business Inputs")
    values = {}
    for field, label, help_text in S_CORP_FIELDS:
        raw = st.sidebar.number_input(
            label, min_value=0.0, step=1000.0,
            value=max(0.0, parse_float(state.get(field, s_corp.DEFAULT_INPUTS[field]))),
            key=WIDGET_KEYS[f"sc_{field}"], help=help_text,
        )
        values = s_corp.update_input(values, field, raw)
    options = list(s_corp.FILING_STATUS_OPTIONS)
    values["filing_status"] = st.sidebar.selectbox(
        "Filing status", options,
        index=_status_index(options, state.get("filing_status")),
        format_func=lambda s: FILING_STATUS_LABELS.get(s, s),
        key=WIDGET_KEYS["sc_filing"],
        help="Married filing separately uses the single brackets.",
    )
    return values


def payroll_rates_form(rates: dict) -> dict:
    """Editable payroll tax rates, laid out in three columns."""
    updated = dict(rates)
    cols = st.columns(3)
    for i, (field, label, step) in enumerate(PAYROLL_FIELDS):
        raw = cols[i % 3].number_input(
            label, min_value=0.0, step=step, format="%.4f" if step < 1 else "%.0f",
            value=max(0.0, parse_float(rates.get(field, s_corp.DEFAULT_PAYROLL_RATES[field]))),
            key=f"in_rate_{field}",
        )
        updated = s_corp.update_payroll_rate(updated, field, raw)
    return updated

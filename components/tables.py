"""pandas views of calculator results for st.dataframe and the PDF export."""

from typing import Dict, List, Sequence, Tuple

import pandas as pd

from calculators.taxes import BreakdownRow

BREAKDOWN_COLUMNS = ["Bracket", "Rate", "Taxable amount", "Tax"]


def breakdown_frame(rows: Sequence[BreakdownRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [[r.range_label, r.rate_label, r.taxable_amount, r.tax] for r in rows],
        columns=BREAKDOWN_COLUMNS,
    )


def summary_frame(lines: Sequence[Tuple[str, float]]) -> pd.DataFrame:
    return pd.DataFrame(lines, columns=["Item", "Amount"])


def frame_to_rows(df: pd.DataFrame) -> List[List[str]]:
    """Header plus formatted rows; floats become whole-dollar strings."""
    rows = [list(df.columns)]
    for record in df.itertuples(index=False):
        rows.append([f"${v:,.0f}" if isinstance(v, float) else str(v) for v in record])
    return rows


def llc_summary_lines(result: Dict) -> List[Tuple[str, float]]:
    return [
        ("Gross income", result["gross_income"]),
        ("Federal income tax", result["federal_income_tax"]),
        ("Self-employment tax", result["se_tax"]),
        ("Total federal", result["total_federal_tax"]),
        ("Oregon income tax", result["state_income_tax"]),
        ("Total tax liability", result["total_tax"]),
        ("After-tax income", result["after_tax_income"]),
    ]


def s_corp_summary_lines(result: Dict) -> List[Tuple[str, float]]:
    return [
        ("Business profit", result["business_profit"]),
        ("Total income", result["total_income"]),
        ("Employer payroll taxes", result["employer_payroll_taxes"]),
        ("Employee Social Security", result["social_security_employee"]),
        ("Employee Medicare", result["medicare_employee"]),
        ("Medicare surtax", result["medicare_surtax"]),
        ("Oregon paid leave", result["oregon_paid_leave"]),
        ("Oregon transit", result["oregon_transit"]),
        ("FUTA", result["futa"]),
        ("SUTA", result["suta"]),
        ("Federal income tax", result["federal_tax"]),
        ("Oregon income tax", result["state_tax"]),
        ("Oregon CAT", result["cat_tax"]),
        ("Total taxes", result["total_tax"]),
        ("Net income", result["net_income"]),
        ("Required quarterly payment", result["required_quarterly"]),
    ]

"""Tests for the S-Corp estimate and its payroll tax lines."""

import math

import pytest

from calculators import s_corp
from calculators.context import BracketContext
from calculators.errors import BracketScopeError
from calculators.persistence import MemoryStore
from calculators.taxes import compute_tax


@pytest.fixture
def ctx():
    return BracketContext.load(MemoryStore(), year=2025)


def test_default_scenario(ctx):
    res = s_corp.calculate_s_corp(s_corp.DEFAULT_INPUTS, ctx)

    # employer SS 3,720 + Medicare 870; FUTA capped at 7,000 * 0.6%; SUTA 2.4%
    assert res["employer_payroll_taxes"] == pytest.approx(4590.0)
    assert res["futa"] == pytest.approx(42.0)
    assert res["suta"] == pytest.approx(1440.0)
    assert res["total_business_expenses"] == pytest.approx(20000 + 6000 + 5000 + 2000 + 4590 + 42 + 1440)
    assert res["business_profit"] == pytest.approx(150000 - 60000 - 39072)
    assert res["total_income"] == pytest.approx(60000 + 50928)

    assert res["social_security_employee"] == pytest.approx(3720.0)
    assert res["medicare_employee"] == pytest.approx(870.0)
    assert res["medicare_surtax"] == 0.0
    assert res["oregon_paid_leave"] == pytest.approx(360.0)
    assert res["oregon_transit"] == pytest.approx(60.0)
    assert res["total_payroll_taxes"] == pytest.approx(3720 + 870 + 360 + 60 + 4590 + 42 + 1440)

    federal = compute_tax(110928, ctx.federal_for("single")).total
    state = compute_tax(110928, ctx.state).total
    assert res["federal_tax"] == pytest.approx(federal)
    assert res["state_tax"] == pytest.approx(state)
    assert res["cat_tax"] == 0.0
    assert res["total_tax"] == pytest.approx(res["total_payroll_taxes"] + federal + state)
    assert res["net_income"] == pytest.approx(110928 - res["total_tax"])
    assert res["required_quarterly"] == pytest.approx((federal + state) / 4)


def test_safe_harbor_wins_with_large_prior_year_tax(ctx):
    res = s_corp.calculate_s_corp({**s_corp.DEFAULT_INPUTS, "prior_year_tax": 100000}, ctx)
    assert res["required_quarterly"] == pytest.approx(100000 * 1.10 / 4)


def test_high_salary_caps_social_security_and_adds_surtax():
    employee = s_corp.employee_payroll_taxes(250000, s_corp.DEFAULT_PAYROLL_RATES)
    assert employee["social_security"] == pytest.approx(168600 * 0.062)
    assert employee["medicare"] == pytest.approx(250000 * 0.0145)
    assert employee["medicare_surtax"] == pytest.approx(50000 * 0.009)
    employer = s_corp.employer_payroll_taxes(250000, s_corp.DEFAULT_PAYROLL_RATES)
    assert employer["social_security"] == pytest.approx(168600 * 0.062)
    assert employer["futa"] == pytest.approx(42.0)


def test_corporate_activity_tax_threshold():
    assert s_corp.corporate_activity_tax(999_999) == 0.0
    assert s_corp.corporate_activity_tax(1_000_000) == 0.0
    assert math.isclose(s_corp.corporate_activity_tax(1_500_000), 2850.0)


def test_cat_is_a_separate_line(ctx):
    base = s_corp.calculate_s_corp(s_corp.DEFAULT_INPUTS, ctx)
    big = s_corp.calculate_s_corp({**s_corp.DEFAULT_INPUTS, "commercial_activity": 1_500_000}, ctx)
    assert big["cat_tax"] == pytest.approx(2850.0)
    assert big["federal_tax"] == pytest.approx(base["federal_tax"])
    assert big["total_tax"] == pytest.approx(base["total_tax"] + 2850.0)


def test_married_separate_falls_back_to_single_table(ctx):
    single = s_corp.calculate_s_corp(s_corp.DEFAULT_INPUTS, ctx)
    separate = s_corp.calculate_s_corp({**s_corp.DEFAULT_INPUTS, "filing_status": "marriedSeparate"}, ctx)
    assert separate["federal_tax"] == pytest.approx(single["federal_tax"])


def test_profit_never_negative(ctx):
    res = s_corp.calculate_s_corp({**s_corp.DEFAULT_INPUTS, "revenue": 50000}, ctx)
    assert res["business_profit"] == 0.0
    assert res["total_income"] == pytest.approx(60000)


def test_no_revenue_returns_none(ctx):
    assert s_corp.calculate_s_corp({**s_corp.DEFAULT_INPUTS, "revenue": 0}, ctx) is None
    assert s_corp.calculate_s_corp({**s_corp.DEFAULT_INPUTS, "revenue": "n/a"}, ctx) is None


def test_string_inputs_are_parsed(ctx):
    inputs = {k: str(v) for k, v in s_corp.DEFAULT_INPUTS.items()}
    assert s_corp.calculate_s_corp(inputs, ctx) == s_corp.calculate_s_corp(s_corp.DEFAULT_INPUTS, ctx)


def test_custom_rates_override_defaults(ctx):
    rates = s_corp.update_payroll_rate(s_corp.DEFAULT_PAYROLL_RATES, "suta", "0.01")
    res = s_corp.calculate_s_corp(s_corp.DEFAULT_INPUTS, ctx, rates)
    assert res["suta"] == pytest.approx(600.0)


def test_update_helpers_fail_safe_to_zero():
    assert s_corp.update_payroll_rate(s_corp.DEFAULT_PAYROLL_RATES, "futa", "abc")["futa"] == 0.0
    assert s_corp.update_input(s_corp.DEFAULT_INPUTS, "salary", "")["salary"] == 0.0
    with pytest.raises(ValueError):
        s_corp.update_payroll_rate(s_corp.DEFAULT_PAYROLL_RATES, "bogus", "1")


def test_requires_bracket_context():
    with pytest.raises(BracketScopeError, match="must be used within a bracket context"):
        s_corp.calculate_s_corp(s_corp.DEFAULT_INPUTS, None)

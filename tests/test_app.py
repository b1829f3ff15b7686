"""Run the Streamlit script headless and check each page renders."""

import json

import pytest
from streamlit.testing.v1 import AppTest

from calculators import s_corp
from calculators.brackets import INFINITY, default_state_table
from calculators.context import STATE_KEY
from calculators.persistence import MemoryStore
from config import get_settings


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("TAXDASH_STORAGE", "memory")
    monkeypatch.delenv("TAXDASH_TAX_YEAR", raising=False)
    get_settings.cache_clear()
    yield AppTest.from_file("../app.py", default_timeout=30)
    get_settings.cache_clear()


def test_home_lists_tools(app):
    app.run()
    assert not app.exception
    assert app.title[0].value == "Tax Gadgets"
    assert {b.label for b in app.button} == {"Open"}


def test_llc_page_without_income(app):
    app.session_state["tool"] = "llc-tax-calculator"
    app.run()
    assert not app.exception
    assert any("Enter your LLC income" in i.value for i in app.info)


def test_llc_page_with_income(app):
    app.session_state["tool"] = "llc-tax-calculator"
    app.run()
    app.text_input(key="in_llc_income").input("100000").run()
    assert not app.exception
    labels = [m.label for m in app.metric]
    assert "Total tax liability" in labels


def test_s_corp_page_renders_defaults(app):
    app.session_state["tool"] = "s-corp-tax-calculator"
    app.run()
    assert not app.exception
    assert "Quarterly payment" in [m.label for m in app.metric]


def test_s_corp_page_survives_non_numeric_blobs(app):
    app.session_state["store"] = MemoryStore({
        s_corp.INPUTS_KEY: json.dumps({"revenue": "abc", "salary": -5}),
        s_corp.PAYROLL_RATES_KEY: json.dumps({"futa": None}),
    })
    app.session_state["tool"] = "s-corp-tax-calculator"
    app.run()
    assert not app.exception
    assert app.number_input(key="in_sc_revenue").value == 0.0
    assert app.number_input(key="in_rate_futa").value == 0.0
    assert any("business revenue" in i.value for i in app.info)


def test_bracket_editor_buttons_update_and_persist(app):
    store = MemoryStore()
    app.session_state["store"] = store
    app.session_state["tool"] = "llc-tax-calculator"
    app.run()

    app.button(key="br_state_single_0_add").click().run()
    assert not app.exception
    ctx = app.session_state["bracket_context"]
    assert len(ctx.state) == 4
    assert ctx.state[-1].max == INFINITY
    assert len(json.loads(store.load(STATE_KEY))) == 4

    app.text_input(key="br_state_single_1_3_rate").input("0.12").run()
    assert app.session_state["bracket_context"].state[3].rate == 0.12
    assert json.loads(store.load(STATE_KEY))[3]["rate"] == 0.12

    app.button(key="br_state_single_1_3_del").click().run()
    assert not app.exception
    assert app.session_state["bracket_context"].state == default_state_table(2025)


def test_changed_inputs_clear_exported_pdf(app):
    app.session_state["tool"] = "llc-tax-calculator"
    app.run()
    app.text_input(key="in_llc_income").input("100000").run()
    next(b for b in app.button if b.label == "Export PDF").click().run()
    assert app.session_state["export_pdf_bytes"].startswith(b"%PDF")

    app.text_input(key="in_llc_income").input("90000").run()
    assert not app.exception
    assert app.session_state["export_pdf_bytes"] is None

# app.py
import streamlit as st

from calculators import llc, s_corp
from calculators.persistence import commit_state, load_state
from components.bracket_editor import bracket_editor, provide_context
from components.charts import breakdown_chart, effective_rate_chart, rate_gauge, tax_mix_chart
from components.forms import llc_form, payroll_rates_form, s_corp_form
from components.report import build_pdf
from components.tables import breakdown_frame, llc_summary_lines, s_corp_summary_lines
from components.tools import CATEGORIES, filter_tools, get_tool
from config import configure_logging, get_settings


# ---------- Page config ----------
st.set_page_config(
    page_title="Tax Gadgets",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="auto",
)

# Hide Streamlit's default menu and footer
HIDE_STREAMLIT_STYLE = """
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
"""
st.markdown(HIDE_STREAMLIT_STYLE, unsafe_allow_html=True)

st.markdown(
    """
<style>
.block-container {
    padding: 1.5rem 2rem;
    max-width: 1400px;
    margin: auto;
}
section[data-testid="stSidebar"] {
    background-color: #F3F6FA;
    border-right: 1px solid #D6DEE8;
}
div[data-testid="stMetric"] {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 1rem;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
    border: 1px solid #E6ECF2;
}
div.stPlotlyChart {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 0.75rem;
    border: 1px solid #E6ECF2;
}
div[data-testid="stDataFrame"] {
    border-radius: 12px;
    overflow: hidden;
}
</style>
""",
    unsafe_allow_html=True,
)

# ---------- Session boot ----------
settings = get_settings()
logger = configure_logging(settings)
st.session_state.setdefault("tool", None)
st.session_state.setdefault("export_pdf_bytes", None)
if "store" not in st.session_state:
    st.session_state["store"] = settings.blob_store()
    logger.info("Session started with %s storage, tax year %s", settings.storage, settings.tax_year)
store = st.session_state["store"]
ctx = provide_context(store, settings.tax_year)


def _money(v: float) -> str:
    return f"${v:,.0f}"


def _open_tool(tool_id):
    st.session_state["tool"] = tool_id
    st.session_state["export_pdf_bytes"] = None


def _commit(key: str, previous, current):
    # an exported PDF describes the previous inputs
    if commit_state(store, key, previous, current):
        st.session_state["export_pdf_bytes"] = None


def _pdf_download(title: str, summary, breakdowns, file_name: str):
    if st.button("Export PDF"):
        st.session_state["export_pdf_bytes"] = build_pdf(title, summary, breakdowns)
    if st.session_state.get("export_pdf_bytes"):
        st.download_button(
            "⬇️ Download PDF",
            data=st.session_state["export_pdf_bytes"],
            file_name=file_name,
            mime="application/pdf",
        )


def _breakdown_section(label: str, rows):
    st.markdown(f"**{label}**")
    if not rows:
        st.caption("No tax owed in any bracket.")
        return
    st.dataframe(
        breakdown_frame(rows).style.format({"Taxable amount": "${:,.0f}", "Tax": "${:,.0f}"}),
        use_container_width=True,
        hide_index=True,
    )
    st.plotly_chart(breakdown_chart(rows, title=f"{label} by Bracket"), use_container_width=True)


# ====== HOME: TOOL SEARCH ======
def home_page():
    st.title("Tax Gadgets")
    st.caption("Passthrough entity tax estimators with editable federal and Oregon brackets.")

    search = st.text_input("Search tools", placeholder="Search tools...")
    labels = {c["id"]: f"{c['name']} ({c['count']})" for c in CATEGORIES}
    category = st.radio(
        "Category", list(labels), format_func=labels.get, horizontal=True, key="category",
    )

    tools = filter_tools(search, category)
    if not tools:
        st.info("No tools match your search.")
        return
    cols = st.columns(min(3, len(tools)))
    for i, tool in enumerate(tools):
        with cols[i % len(cols)]:
            with st.container(border=True):
                st.markdown(f"### {tool.icon} {tool.name}")
                st.caption(tool.description)
                st.button("Open", key=f"open_{tool.id}", on_click=_open_tool, args=(tool.id,))


# ====== LLC CALCULATOR ======
def llc_page():
    state = load_state(store, llc.INPUTS_KEY, llc.DEFAULT_INPUTS)
    new_state = llc_form(state)
    _commit(llc.INPUTS_KEY, state, new_state)

    result = llc.calculate_llc(new_state, ctx)

    with st.expander("Tax brackets", expanded=False):
        bracket_editor(ctx, new_state["filing_status"], result["gross_income"] if result else 0.0)

    if result is None:
        st.info("Enter your LLC income in the sidebar to see an estimate.")
        return

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Gross income", _money(result["gross_income"]))
    k2.metric("Total tax liability", _money(result["total_tax"]))
    k3.metric("After-tax income", _money(result["after_tax_income"]))
    k4.metric("Effective rate", f"{result['effective_rate']:.1f}%")

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Tax Summary")
        st.markdown(
            f"""
            | | |
            |---|---:|
            | Federal income tax | {_money(result['federal_income_tax'])} |
            | Self-employment tax | {_money(result['se_tax'])} |
            | **Total federal** | **{_money(result['total_federal_tax'])}** |
            | Oregon income tax | {_money(result['state_income_tax'])} |
            | **Total tax liability** | **{_money(result['total_tax'])}** |
            """
        )
        st.caption(
            f"Half of self-employment tax ({_money(result['se_deduction'])}) is deducted "
            "before federal and Oregon income tax."
        )
    with c2:
        st.plotly_chart(tax_mix_chart({
            "Federal income": result["federal_income_tax"],
            "Self-employment": result["se_tax"],
            "Oregon income": result["state_income_tax"],
        }), use_container_width=True)

    st.divider()
    st.subheader("Tax Breakdown")
    b1, b2 = st.columns(2)
    with b1:
        _breakdown_section("Federal Tax Brackets", result["federal_breakdown"])
    with b2:
        _breakdown_section("Oregon Tax Brackets", result["state_breakdown"])

    st.plotly_chart(
        effective_rate_chart(ctx.federal_for(new_state["filing_status"]), result["federal_taxable_income"],
                             title="Federal Effective vs Marginal Rate"),
        use_container_width=True,
    )
    _pdf_download(
        "LLC Passthrough Tax Estimate",
        llc_summary_lines(result),
        {
            "Federal Tax Brackets": breakdown_frame(result["federal_breakdown"]),
            "Oregon Tax Brackets": breakdown_frame(result["state_breakdown"]),
        },
        "llc_tax_estimate.pdf",
    )


# ====== S-CORP CALCULATOR ======
def s_corp_page():
    state = load_state(store, s_corp.INPUTS_KEY, s_corp.DEFAULT_INPUTS)
    new_state = s_corp_form(state)
    _commit(s_corp.INPUTS_KEY, state, new_state)

    rates = load_state(store, s_corp.PAYROLL_RATES_KEY, s_corp.DEFAULT_PAYROLL_RATES)
    with st.expander("Payroll tax rates", expanded=False):
        new_rates = payroll_rates_form(rates)
        _commit(s_corp.PAYROLL_RATES_KEY, rates, new_rates)

    result = s_corp.calculate_s_corp(new_state, ctx, new_rates)

    with st.expander("Tax brackets", expanded=False):
        bracket_editor(ctx, new_state["filing_status"], result["total_income"] if result else 0.0)

    if result is None:
        st.info("Enter your business revenue in the sidebar to see an estimate.")
        return

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total income", _money(result["total_income"]))
    k2.metric("Total taxes", _money(result["total_tax"]))
    k3.metric("Net income", _money(result["net_income"]))
    k4.metric("Quarterly payment", _money(result["required_quarterly"]))

    c1, c2, c3 = st.columns([1.2, 1, 1])
    with c1:
        st.subheader("Payroll Taxes")
        st.markdown(
            f"""
            | | |
            |---|---:|
            | Social Security (employee) | {_money(result['social_security_employee'])} |
            | Medicare (employee) | {_money(result['medicare_employee'])} |
            | Medicare surtax | {_money(result['medicare_surtax'])} |
            | Employer SS + Medicare | {_money(result['employer_payroll_taxes'])} |
            | Oregon paid leave | {_money(result['oregon_paid_leave'])} |
            | Oregon transit | {_money(result['oregon_transit'])} |
            | FUTA | {_money(result['futa'])} |
            | SUTA | {_money(result['suta'])} |
            | **Total payroll** | **{_money(result['total_payroll_taxes'])}** |
            """
        )
    with c2:
        st.subheader("Income Taxes")
        st.markdown(
            f"""
            | | |
            |---|---:|
            | Business profit | {_money(result['business_profit'])} |
            | Federal income tax | {_money(result['federal_tax'])} |
            | Oregon income tax | {_money(result['state_tax'])} |
            | Oregon CAT | {_money(result['cat_tax'])} |
            """
        )
        st.caption("Quarterly payment is the higher of this year's estimate and 110% of last year's tax.")
    with c3:
        st.plotly_chart(rate_gauge(result["effective_rate"]), use_container_width=True)
        st.caption("Effective rate on total income.")

    st.plotly_chart(tax_mix_chart({
        "Payroll": result["total_payroll_taxes"],
        "Federal income": result["federal_tax"],
        "Oregon income": result["state_tax"],
        "Oregon CAT": result["cat_tax"],
    }), use_container_width=True)

    st.divider()
    st.subheader("Tax Breakdown")
    b1, b2 = st.columns(2)
    with b1:
        _breakdown_section("Federal Tax Brackets", result["federal_breakdown"])
    with b2:
        _breakdown_section("Oregon Tax Brackets", result["state_breakdown"])

    _pdf_download(
        "S-Corp Tax Estimate",
        s_corp_summary_lines(result),
        {
            "Federal Tax Brackets": breakdown_frame(result["federal_breakdown"]),
            "Oregon Tax Brackets": breakdown_frame(result["state_breakdown"]),
        },
        "s_corp_tax_estimate.pdf",
    )


PAGES = {
    "s-corp-tax-calculator": s_corp_page,
    "llc-tax-calculator": llc_page,
}

# ====== ROUTING ======
tool_id = st.session_state["tool"]
if tool_id is None:
    home_page()
else:
    tool = get_tool(tool_id)
    with st.sidebar:
        st.button("← All tools", on_click=_open_tool, args=(None,))
    st.title(f"{tool.icon} {tool.name}")
    PAGES[tool_id]()

# components/bracket_editor.py
# Streamlit controls for viewing and editing the federal and state bracket tables.
import streamlit as st

from calculators import bracket_editor as editor
from calculators.brackets import FILING_STATUS_LABELS, validate_table
from calculators.context import BracketContext, require_context
from calculators.persistence import BlobStore
from calculators.taxes import active_bracket_index

CONTEXT_KEY = "bracket_context"
REVISION_KEY = "bracket_rev"


def provide_context(store: BlobStore, year: int) -> BracketContext:
    """Create the session's bracket context once; later calls return it."""
    if st.session_state.get(CONTEXT_KEY) is None:
        st.session_state[CONTEXT_KEY] = BracketContext.load(store, year)
        st.session_state[REVISION_KEY] = 0
    return st.session_state[CONTEXT_KEY]


def get_context() -> BracketContext:
    return require_context(st.session_state.get(CONTEXT_KEY), "get_context")


def _status_key(ctx: BracketContext, status: str) -> str:
    return status if status in ctx.federal else "single"


def _table(ctx: BracketContext, kind: str, status: str):
    return ctx.federal_for(status) if kind == "federal" else ctx.state


def _store(ctx: BracketContext, kind: str, status: str, table) -> None:
    if kind == "federal":
        ctx.set_federal(status, table)
    else:
        ctx.set_state(table)


def _bump_revision():
    # row widgets are keyed by revision so they re-render after rows move
    st.session_state[REVISION_KEY] = st.session_state.get(REVISION_KEY, 0) + 1


def _on_field_change(kind: str, status: str, index: int, field: str, widget_key: str):
    ctx = get_context()
    table = editor.update_field(_table(ctx, kind, status), index, field, st.session_state[widget_key])
    _store(ctx, kind, status, table)


def _on_add(kind: str, status: str):
    ctx = get_context()
    defaults = editor.FEDERAL_EDIT_DEFAULTS if kind == "federal" else editor.STATE_EDIT_DEFAULTS
    _store(ctx, kind, status, editor.add_bracket(_table(ctx, kind, status), *defaults))
    _bump_revision()


def _on_remove(kind: str, status: str, index: int):
    ctx = get_context()
    _store(ctx, kind, status, editor.remove_bracket(_table(ctx, kind, status), index))
    _bump_revision()


def _on_reset():
    get_context().reset()
    _bump_revision()


def bracket_table_editor(ctx: BracketContext, kind: str, filing_status: str, income: float):
    status = _status_key(ctx, filing_status)
    table = _table(ctx, kind, status)
    active = active_bracket_index(income, table)
    rev = st.session_state.get(REVISION_KEY, 0)

    title = "Federal" if kind == "federal" else "Oregon"
    if kind == "federal":
        title += f" ({FILING_STATUS_LABELS.get(status, status)})"
    st.markdown(f"**{title} Tax Brackets**")
    st.caption(f"Income: ${income:,.0f}. The highlighted row is the bracket that income falls in.")

    for i, bracket in enumerate(table):
        prefix = f"br_{kind}_{status}_{rev}_{i}"
        c1, c2, c3, c4, c5 = st.columns([1.2, 1.2, 0.9, 0.7, 0.35], gap="small")
        c1.text_input(
            "From", value=f"{bracket.min:.0f}", key=f"{prefix}_min",
            on_change=_on_field_change, args=(kind, status, i, "min", f"{prefix}_min"),
            label_visibility="collapsed",
        )
        if bracket.is_open_ended:
            c2.text_input("To", value="∞", key=f"{prefix}_max_inf", disabled=True,
                          label_visibility="collapsed")
        else:
            c2.text_input(
                "To", value=f"{bracket.max:.0f}", key=f"{prefix}_max",
                on_change=_on_field_change, args=(kind, status, i, "max", f"{prefix}_max"),
                label_visibility="collapsed",
            )
        c3.text_input(
            "Rate", value=f"{bracket.rate:g}", key=f"{prefix}_rate",
            on_change=_on_field_change, args=(kind, status, i, "rate", f"{prefix}_rate"),
            label_visibility="collapsed",
        )
        pct = f"{bracket.rate * 100:.1f}%"
        c4.markdown(f":blue-background[**{pct}**]" if i == active else pct)
        if len(table) > 1:
            c5.button("✖", key=f"{prefix}_del", on_click=_on_remove, args=(kind, status, i),
                      help="Remove bracket")

    st.button("➕ Add bracket", key=f"br_{kind}_{status}_{rev}_add", on_click=_on_add,
              args=(kind, status))

    problems = validate_table(table)
    if problems:
        st.warning("Brackets are not contiguous: " + "; ".join(problems))


def bracket_editor(ctx: BracketContext, filing_status: str, income: float):
    """Side-by-side federal and state bracket editors with a reset button."""
    st.subheader("Tax Bracket Controls")
    st.caption(f"Adjust the {ctx.year} tax brackets. Changes are saved automatically.")
    left, right = st.columns(2)
    with left:
        bracket_table_editor(ctx, "federal", filing_status, income)
    with right:
        bracket_table_editor(ctx, "state", filing_status, income)
    st.button("Reset brackets to defaults", key="br_reset", on_click=_on_reset)

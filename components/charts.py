# components/charts.py
# Plotly chart helpers used across the app.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from typing import Dict, Sequence

import plotly.graph_objects as go
import plotly.io as pio

from calculators.brackets import TaxBracket
from calculators.taxes import BreakdownRow, effective_rate_curve, marginal_rate

pio.templates.default = "plotly_white"


# ---------- Tax per bracket ----------
def breakdown_chart(rows: Sequence[BreakdownRow], title: str = "Tax by Bracket") -> go.Figure:
    """Bars of tax owed per bracket, labelled with the bracket rate."""
    labels = [f"{r.rate_label} ({r.range_label})" for r in rows]
    fig = go.Figure(go.Bar(
        x=labels,
        y=[r.tax for r in rows],
        customdata=[r.taxable_amount for r in rows],
        hovertemplate="%{x}<br>Taxed: $%{customdata:,.0f}<br>Tax: $%{y:,.0f}<extra></extra>",
    ))
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=320,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis_title="",
        yaxis_title="Dollars",
    )
    return fig


# ---------- Where the tax goes ----------
def tax_mix_chart(parts: Dict[str, float], title: str = "Tax Mix") -> go.Figure:
    """Donut of the tax components; zero components are left out."""
    items = [(k, v) for k, v in parts.items() if v > 0]
    fig = go.Figure(go.Pie(
        labels=[k for k, _ in items],
        values=[v for _, v in items],
        hole=0.5,
        hovertemplate="%{label}<br>$%{value:,.0f}<extra></extra>",
    ))
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=320,
        margin=dict(l=10, r=10, t=40, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=-0.2, xanchor="center", x=0.5),
    )
    return fig


# ---------- Effective vs marginal rate ----------
def effective_rate_chart(brackets: Sequence[TaxBracket],
                         income: float,
                         title: str = "Effective vs Marginal Rate") -> go.Figure:
    upper = max(income * 2.0, 100000.0)
    incomes, effective = effective_rate_curve(brackets, upper)
    marginal = [marginal_rate(x, brackets) * 100.0 for x in incomes]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=incomes, y=effective, mode="lines", name="Effective",
        hovertemplate="$%{x:,.0f}<br>%{y:.2f}%<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=incomes, y=marginal, mode="lines", name="Marginal",
        line=dict(shape="hv", dash="dot"),
        hovertemplate="$%{x:,.0f}<br>%{y:.2f}%<extra></extra>",
    ))
    if income > 0:
        fig.add_vline(x=income, line_width=1, line_dash="dash", line_color="#18453B")
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=320,
        margin=dict(l=10, r=10, t=40, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        xaxis_title="Taxable income",
        yaxis_title="Rate (%)",
    )
    return fig


# ---------- Effective rate gauge ----------
def rate_gauge(effective_rate: float) -> go.Figure:
    pct = max(0.0, min(100.0, float(effective_rate)))  # clamp 0–100
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=round(pct, 1),
        number={"suffix": "%"},
        gauge={
            "axis": {"range": [0, 50]},
            "bar": {"thickness": 0.35},
            "steps": [
                {"range": [0, 20],  "color": "#22c55e"},  # green-500
                {"range": [20, 35], "color": "#f59e0b"},  # amber-500
                {"range": [35, 50], "color": "#ef4444"},  # red-500
            ],
        }
    ))
    fig.update_layout(template="plotly_white", height=220, margin=dict(l=10, r=10, t=10, b=10))
    return fig

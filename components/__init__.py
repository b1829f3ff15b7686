"""Expose component submodules for convenience."""

from .forms import llc_form, s_corp_form, payroll_rates_form
from .charts import breakdown_chart, tax_mix_chart, effective_rate_chart, rate_gauge
from .bracket_editor import bracket_editor, provide_context, get_context

__all__ = [
    "llc_form",
    "s_corp_form",
    "payroll_rates_form",
    "breakdown_chart",
    "tax_mix_chart",
    "effective_rate_chart",
    "rate_gauge",
    "bracket_editor",
    "provide_context",
    "get_context",
]

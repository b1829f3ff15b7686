"""Helper package that exposes the tax calculators.

The `calculators` package contains small, focused modules:

* ``brackets`` – bracket tables, their invariants and the default tables.
* ``taxes`` – the progressive tax engine and its per-bracket breakdown.
* ``bracket_editor`` – add, remove and edit brackets without mutating a table.
* ``context`` – the federal and state tables shared by a session.
* ``persistence`` – named-blob storage for form state and tables.
* ``llc`` – LLC passthrough estimate with self-employment tax.
* ``s_corp`` – S-Corp estimate with payroll taxes and quarterly payments.

None of these modules import Streamlit.
"""

from . import brackets, taxes, bracket_editor, context, persistence, llc, s_corp  # noqa: F401
from .errors import BracketScopeError, TaxDashboardError

__all__ = [
    "brackets",
    "taxes",
    "bracket_editor",
    "context",
    "persistence",
    "llc",
    "s_corp",
    "BracketScopeError",
    "TaxDashboardError",
]

"""Exception types raised by the calculators package."""


class TaxDashboardError(RuntimeError):
    """Base class for errors raised deliberately by the dashboard."""


class BracketScopeError(TaxDashboardError):
    """Bracket data was requested without an initialised bracket context."""


__all__ = ["TaxDashboardError", "BracketScopeError"]

"""Bracket tables shared by the calculators.

A :class:`BracketContext` owns the federal tables (one per filing status) and
the state table for a session.  It is created explicitly and handed to
whatever needs brackets; every change is written straight back to the blob
store.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .brackets import BracketTable, default_federal_tables, default_state_table
from .errors import BracketScopeError
from .persistence import BlobStore, MemoryStore, load_table, load_tables, save_table, save_tables

logger = logging.getLogger("tax_dashboard")

FEDERAL_KEY = "federalBrackets"
STATE_KEY = "oregonBrackets"


class BracketContext:
    def __init__(
        self,
        federal: Dict[str, BracketTable],
        state: BracketTable,
        store: Optional[BlobStore] = None,
        year: int = 2025,
    ):
        self.federal = dict(federal)
        self.state = state
        self.store = store if store is not None else MemoryStore()
        self.year = year

    @classmethod
    def load(cls, store: BlobStore, year: int = 2025) -> "BracketContext":
        """Restore tables from ``store``, using the ``year`` defaults where absent."""
        federal = load_tables(store, FEDERAL_KEY, default_federal_tables(year))
        state = load_table(store, STATE_KEY, default_state_table(year))
        return cls(federal, state, store=store, year=year)

    def federal_for(self, filing_status: str) -> BracketTable:
        """Federal table for ``filing_status``.

        Statuses without their own table (``marriedSeparate``) use the single
        filer table.
        """
        table = self.federal.get(filing_status)
        if table is None:
            return self.federal["single"]
        return table

    def set_federal(self, filing_status: str, table: BracketTable) -> None:
        self.federal[filing_status] = table
        save_tables(self.store, FEDERAL_KEY, self.federal)

    def set_state(self, table: BracketTable) -> None:
        self.state = table
        save_table(self.store, STATE_KEY, self.state)

    def reset(self) -> None:
        """Restore and persist the default tables for this context's year."""
        logger.info("Resetting bracket tables to %s defaults", self.year)
        self.federal = default_federal_tables(self.year)
        self.state = default_state_table(self.year)
        save_tables(self.store, FEDERAL_KEY, self.federal)
        save_table(self.store, STATE_KEY, self.state)


def require_context(context: Optional[BracketContext], user: str = "Bracket data") -> BracketContext:
    if context is None:
        raise BracketScopeError(f"{user} must be used within a bracket context")
    return context


__all__ = ["FEDERAL_KEY", "STATE_KEY", "BracketContext", "require_context"]

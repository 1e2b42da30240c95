# backend/wealthvault/services/valuation/service.py
"""
Valuation Service - orchestrates the valuation calculators.

Loads records through the RecordStore and runs them through the
calculators. All arithmetic lives in the calculators; this class only
wires inputs to outputs, so every call re-runs the pipeline from
freshly loaded records.

Usage:
    service = ValuationService()
    snapshot = service.get_snapshot(db)
    history = service.get_history(db)
"""

import logging

from sqlalchemy.orm import Session

from wealthvault.services.store import RecordStore
from wealthvault.services.valuation.calculators import (
    AllocationCalculator,
    PortfolioValuator,
)
from wealthvault.services.valuation.history_calculator import WealthHistoryCalculator
from wealthvault.services.valuation.types import (
    AllocationDrift,
    AllocationSlice,
    HistoryPoint,
    PortfolioSnapshot,
    TransactionRecord,
)

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Service for portfolio valuation read models.

    Stateless apart from its calculator instances, which hold no state
    themselves; safe to share as a singleton.
    """

    def __init__(self) -> None:
        self._valuator = PortfolioValuator()
        self._history_calc = WealthHistoryCalculator()
        self._allocation_calc = AllocationCalculator()

    def get_snapshot(self, db: Session) -> PortfolioSnapshot:
        """Value every asset from the current ledger."""
        snapshot, _ = self.get_snapshot_with_transactions(db)
        return snapshot

    def get_snapshot_with_transactions(
            self,
            db: Session,
    ) -> tuple[PortfolioSnapshot, list[TransactionRecord]]:
        """
        Snapshot plus the transactions it was built from, so callers that
        also need cash flows (XIRR) work from the same single read.
        """
        store = RecordStore(db)
        assets = store.get_all("assets")
        transactions = store.get_all("transactions")

        snapshot = self._valuator.calculate(assets=assets, transactions=transactions)

        logger.debug(
            f"Snapshot: {len(snapshot.lines)} lines from {len(transactions)} transactions, "
            f"net wealth {snapshot.net_wealth}"
        )
        return snapshot, transactions

    def get_history(self, db: Session) -> list[HistoryPoint]:
        """Monthly cumulative invested capital."""
        transactions = RecordStore(db).get_all("transactions")
        return self._history_calc.calculate(transactions)

    def get_allocation(
            self,
            db: Session,
            include_liabilities: bool = False,
    ) -> tuple[list[AllocationSlice], list[AllocationDrift]]:
        """Category breakdown plus per-asset drift from target allocation."""
        snapshot = self.get_snapshot(db)
        return (
            self._allocation_calc.by_category(snapshot, include_liabilities=include_liabilities),
            self._allocation_calc.drift(snapshot),
        )

# backend/wealthvault/services/valuation/history_calculator.py
"""
Wealth history approximation.

There is no historical price data, so the wealth chart is approximated
by cumulative invested capital rather than mark-to-market value:

    BUY      → cumulative += quantity × price
    SELL     → cumulative -= quantity × price
    DIVIDEND → no effect

Fees are ignored. The series has one point per calendar month that
contains at least one transaction, holding the running total after
the last transaction of that month.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from wealthvault.models import TransactionType
from wealthvault.services.constants import ZERO
from wealthvault.services.valuation.types import HistoryPoint, TransactionRecord

logger = logging.getLogger(__name__)


class WealthHistoryCalculator:
    """Monthly cumulative invested capital across all transactions."""

    def calculate(self, transactions: Iterable[TransactionRecord]) -> list[HistoryPoint]:
        """
        Build the monthly series.

        Args:
            transactions: All transactions, any order

        Returns:
            HistoryPoints in chronological order (empty if no transactions)
        """
        ordered = sorted(transactions, key=lambda t: t.date)
        if not ordered:
            return []

        cumulative_invested = ZERO
        # dict preserves insertion order, and months arrive in ascending order
        timeline: dict[str, Decimal] = {}

        for txn in ordered:
            if txn.transaction_type == TransactionType.BUY:
                cumulative_invested += txn.gross_amount
            elif txn.transaction_type == TransactionType.SELL:
                cumulative_invested -= txn.gross_amount

            timeline[txn.date.strftime("%Y-%m")] = cumulative_invested

        logger.debug(f"Wealth history: {len(ordered)} transactions over {len(timeline)} months")

        return [HistoryPoint(period=period, value=value) for period, value in timeline.items()]

# backend/wealthvault/services/valuation/calculators.py
"""
Point-in-time valuation calculators.

Each calculator does one thing:
- CostBasisAccumulator: Folds one asset's transactions into units/cost/income
- PortfolioValuator: Combines accumulator output with prices into snapshot lines
- AllocationCalculator: Groups snapshot value by category and measures drift

Design Principles:
- Stateless (no instance state, every call starts from zero)
- Receives plain records, returns frozen result objects
- Uses Decimal for ALL financial calculations
- Never raises on degenerate input; ratios are zero-guarded

Usage:
    valuator = PortfolioValuator()
    snapshot = valuator.calculate(assets=assets, transactions=transactions)
    snapshot.net_wealth
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal

from wealthvault.models import AssetCategory, TransactionType
from wealthvault.services.constants import HUNDRED, ZERO
from wealthvault.services.valuation.types import (
    AllocationDrift,
    AllocationSlice,
    AssetRecord,
    CostBasisResult,
    PortfolioSnapshot,
    SnapshotLine,
    TransactionRecord,
)

logger = logging.getLogger(__name__)


# =============================================================================
# COST BASIS ACCUMULATOR
# =============================================================================

class CostBasisAccumulator:
    """
    Running units, cost basis and income for a single asset.

    Uses the Average Cost method:
    - BUY:      units += qty; cost += qty × price + fees
    - SELL:     avg = cost / units; cost -= avg × qty; units -= qty
    - DIVIDEND: income += qty × price

    Note:
        Fees on a SELL are not applied to cost or income. Selling more
        units than are held is not rejected here (units go negative);
        the ledger guards against it before records are stored.
    """

    def calculate(self, transactions: Iterable[TransactionRecord]) -> CostBasisResult:
        """
        Fold transactions in date order.

        Args:
            transactions: Transactions of one asset, in any order.
                          Same-day entries keep their input order.

        Returns:
            CostBasisResult with final units, cost and income
        """
        units = ZERO
        total_cost = ZERO
        total_income = ZERO

        # sorted() is stable, so same-day entries keep their input order
        for txn in sorted(transactions, key=lambda t: t.date):
            if txn.transaction_type == TransactionType.BUY:
                units += txn.quantity
                total_cost += txn.gross_amount + txn.fees

            elif txn.transaction_type == TransactionType.SELL:
                avg_cost_per_unit = (
                    total_cost / units
                    if total_cost > ZERO and units > ZERO
                    else ZERO
                )
                total_cost -= avg_cost_per_unit * txn.quantity
                units -= txn.quantity

            elif txn.transaction_type == TransactionType.DIVIDEND:
                total_income += txn.gross_amount

        return CostBasisResult(
            units=units,
            total_cost=total_cost,
            total_income=total_income,
        )

    @staticmethod
    def running_units(transactions: Iterable[TransactionRecord]) -> list[tuple[TransactionRecord, Decimal]]:
        """
        Units held after each transaction, in date order.

        Used by the ledger to detect a SELL that would go short at any
        point in the asset's history.

        Returns:
            List of (transaction, units_after) pairs
        """
        units = ZERO
        steps = []
        for txn in sorted(transactions, key=lambda t: t.date):
            if txn.transaction_type == TransactionType.BUY:
                units += txn.quantity
            elif txn.transaction_type == TransactionType.SELL:
                units -= txn.quantity
            steps.append((txn, units))
        return steps


# =============================================================================
# PORTFOLIO VALUATOR
# =============================================================================

class PortfolioValuator:
    """
    Builds a PortfolioSnapshot from assets and the full transaction list.

    Per asset:
        current_value   = units × current_price
        absolute_return = current_value - total_cost
        return_pct      = absolute_return / total_cost × 100 (0 if cost <= 0)
        is_liability    = category == DEBT

    Lines follow the asset input order with assets and liabilities
    interleaved. Transactions pointing at an unknown asset are ignored.
    """

    def __init__(self, accumulator: CostBasisAccumulator | None = None) -> None:
        self._accumulator = accumulator or CostBasisAccumulator()

    def calculate(
            self,
            assets: Sequence[AssetRecord],
            transactions: Sequence[TransactionRecord],
    ) -> PortfolioSnapshot:
        """
        Value every asset.

        Args:
            assets: All assets (and liabilities)
            transactions: All transactions, any order

        Returns:
            PortfolioSnapshot with one line per asset
        """
        transactions_by_asset: dict[int, list[TransactionRecord]] = defaultdict(list)
        for txn in transactions:
            transactions_by_asset[txn.asset_id].append(txn)

        known_ids = {asset.id for asset in assets}
        orphaned = [asset_id for asset_id in transactions_by_asset if asset_id not in known_ids]
        if orphaned:
            logger.debug(f"Ignoring transactions for unknown assets: {sorted(orphaned)}")

        lines = tuple(
            self.value_asset(asset, transactions_by_asset.get(asset.id, []))
            for asset in assets
        )
        return PortfolioSnapshot(lines=lines)

    def value_asset(
            self,
            asset: AssetRecord,
            transactions: Sequence[TransactionRecord],
    ) -> SnapshotLine:
        """Value a single asset from its own transactions."""
        basis = self._accumulator.calculate(transactions)

        current_value = basis.units * asset.current_price
        absolute_return = current_value - basis.total_cost

        if basis.total_cost > ZERO:
            return_pct = absolute_return / basis.total_cost * HUNDRED
        else:
            return_pct = ZERO

        return SnapshotLine(
            asset=asset,
            units=basis.units,
            total_cost=basis.total_cost,
            total_income=basis.total_income,
            current_value=current_value,
            absolute_return=absolute_return,
            return_pct=return_pct,
            is_liability=asset.is_liability,
        )


# =============================================================================
# ALLOCATION CALCULATOR
# =============================================================================

class AllocationCalculator:
    """
    Category breakdown and target drift.

    Shares are percentages of the grouped total; liabilities are left
    out unless include_liabilities is set.
    """

    def by_category(
            self,
            snapshot: PortfolioSnapshot,
            include_liabilities: bool = False,
    ) -> list[AllocationSlice]:
        """
        Sum current value per category.

        Returns:
            One slice per category, in order of first appearance
        """
        lines = snapshot.lines if include_liabilities else snapshot.asset_lines

        values: dict[AssetCategory, Decimal] = {}
        for line in lines:
            values[line.category] = values.get(line.category, ZERO) + line.current_value

        total = sum(values.values(), ZERO)

        return [
            AllocationSlice(
                category=category,
                value=value,
                share_pct=(value / total * HUNDRED) if total != ZERO else ZERO,
            )
            for category, value in values.items()
        ]

    def drift(self, snapshot: PortfolioSnapshot) -> list[AllocationDrift]:
        """Actual weight vs target allocation for every non-liability asset."""
        return [
            AllocationDrift(
                asset_id=line.asset_id,
                name=line.name,
                actual_pct=snapshot.weight_of(line),
                target_pct=line.asset.target_allocation,
            )
            for line in snapshot.asset_lines
        ]

# backend/wealthvault/services/valuation/types.py
"""
Data types for the valuation engine.

These dataclasses are the engine's inputs and outputs. They are NOT
Pydantic schemas (see wealthvault/schemas/ for API serialization) and
NOT ORM models (see wealthvault/models.py); the record store maps
ORM rows into them before any calculation runs.

Design Principles:
- Immutable (frozen=True) so a snapshot can be shared by every consumer
- Use Decimal for ALL financial values
- Use date (not datetime) for transaction dates
- Derived totals are properties over the lines, never stored state

Type Hierarchy:
    AssetRecord         - An asset or liability as entered by the user
    TransactionRecord   - A BUY / SELL / DIVIDEND entry
    GoalRecord          - A savings target
    CostBasisResult     - Accumulator output for one asset
    SnapshotLine        - Valuation of one asset
    PortfolioSnapshot   - All lines plus derived totals
    HistoryPoint        - Monthly cumulative invested capital
    AllocationSlice     - Value grouped by category
    AllocationDrift     - Actual vs target allocation for one asset
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from wealthvault.models import AssetCategory, TransactionType
from wealthvault.services.constants import HUNDRED, ZERO


# =============================================================================
# INPUT RECORDS
# =============================================================================

@dataclass(frozen=True)
class AssetRecord:
    """
    An asset (or liability, when category is DEBT).

    Attributes:
        id: Unique asset id
        name: Display name
        category: Category tag
        current_price: Latest manually entered price (>= 0)
        target_allocation: Desired share of the portfolio in percent
        ticker: Optional trading symbol
    """
    id: int
    name: str
    category: AssetCategory
    current_price: Decimal = ZERO
    target_allocation: Decimal = ZERO
    ticker: str | None = None

    @property
    def is_liability(self) -> bool:
        return self.category == AssetCategory.DEBT


@dataclass(frozen=True)
class TransactionRecord:
    """
    A ledger entry.

    Quantity is always positive; the direction comes from transaction_type.
    For DIVIDEND entries quantity x price is the cash amount received.
    """
    asset_id: int
    transaction_type: TransactionType
    date: date
    quantity: Decimal
    price: Decimal
    fees: Decimal = ZERO
    id: int | None = None

    @property
    def gross_amount(self) -> Decimal:
        """quantity x price, without fees."""
        return self.quantity * self.price


@dataclass(frozen=True)
class GoalRecord:
    """
    A savings target.

    An empty linked_asset_ids tuple means the goal tracks total net wealth.
    """
    id: int
    name: str
    target_amount: Decimal
    linked_asset_ids: tuple[int, ...] = ()


# =============================================================================
# ACCUMULATOR OUTPUT
# =============================================================================

@dataclass(frozen=True)
class CostBasisResult:
    """
    Running totals for one asset after folding over its transactions.

    Attributes:
        units: Units held (negative only after an oversell)
        total_cost: Remaining average-cost basis, including purchase fees
        total_income: Cash distributions received (DIVIDEND)
    """
    units: Decimal = ZERO
    total_cost: Decimal = ZERO
    total_income: Decimal = ZERO


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class SnapshotLine:
    """
    Valuation of a single asset.

    Liabilities keep a positive current_value; they are subtracted when
    net wealth is computed.
    """
    asset: AssetRecord
    units: Decimal
    total_cost: Decimal
    total_income: Decimal
    current_value: Decimal
    absolute_return: Decimal
    return_pct: Decimal
    is_liability: bool

    @property
    def asset_id(self) -> int:
        return self.asset.id

    @property
    def name(self) -> str:
        return self.asset.name

    @property
    def category(self) -> AssetCategory:
        return self.asset.category

    @property
    def current_price(self) -> Decimal:
        return self.asset.current_price

    @property
    def avg_cost_per_unit(self) -> Decimal:
        """Cost per unit held; the raw cost when no units are held."""
        if self.units == ZERO:
            return self.total_cost
        return self.total_cost / self.units


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Immutable valuation of the whole ledger.

    Every consumer (dashboard, health score, goals, XIRR) receives the
    same snapshot; totals are derived from the lines on access.
    """
    lines: tuple[SnapshotLine, ...] = field(default_factory=tuple)

    @property
    def asset_lines(self) -> tuple[SnapshotLine, ...]:
        return tuple(line for line in self.lines if not line.is_liability)

    @property
    def liability_lines(self) -> tuple[SnapshotLine, ...]:
        return tuple(line for line in self.lines if line.is_liability)

    @property
    def total_asset_value(self) -> Decimal:
        return sum((line.current_value for line in self.asset_lines), ZERO)

    @property
    def total_liability_value(self) -> Decimal:
        return sum((line.current_value for line in self.liability_lines), ZERO)

    @property
    def net_wealth(self) -> Decimal:
        """Total asset value minus total liability value."""
        return self.total_asset_value - self.total_liability_value

    @property
    def total_cost(self) -> Decimal:
        """Invested capital still held (non-liability lines only)."""
        return sum((line.total_cost for line in self.asset_lines), ZERO)

    @property
    def total_income(self) -> Decimal:
        return sum((line.total_income for line in self.lines), ZERO)

    @property
    def total_pnl(self) -> Decimal:
        return self.total_asset_value - self.total_cost

    @property
    def total_pnl_pct(self) -> Decimal:
        if self.total_cost <= ZERO:
            return ZERO
        return self.total_pnl / self.total_cost * HUNDRED

    def get_line(self, asset_id: int) -> SnapshotLine | None:
        """First line for asset_id, or None if the asset is not in the snapshot."""
        for line in self.lines:
            if line.asset_id == asset_id:
                return line
        return None

    def weight_of(self, line: SnapshotLine) -> Decimal:
        """Line value as a percentage of total asset value (0 when empty)."""
        total = self.total_asset_value
        if total == ZERO:
            return ZERO
        return line.current_value / total * HUNDRED


# =============================================================================
# DERIVED SERIES
# =============================================================================

@dataclass(frozen=True)
class HistoryPoint:
    """
    Cumulative invested capital at the end of a calendar month.

    Attributes:
        period: Month as "YYYY-MM"
        value: Cumulative BUY amounts minus SELL amounts up to that month
    """
    period: str
    value: Decimal


@dataclass(frozen=True)
class AllocationSlice:
    """Current value of one category and its share of the grouped total."""
    category: AssetCategory
    value: Decimal
    share_pct: Decimal


@dataclass(frozen=True)
class AllocationDrift:
    """Actual allocation of one asset compared with its target."""
    asset_id: int
    name: str
    actual_pct: Decimal
    target_pct: Decimal

    @property
    def drift_pct(self) -> Decimal:
        return self.actual_pct - self.target_pct

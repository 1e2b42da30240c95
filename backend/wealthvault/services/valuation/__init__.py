# backend/wealthvault/services/valuation/__init__.py
"""
Valuation Service Package.

Architecture:
    valuation/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Engine records and snapshot types
    ├── calculators.py           # Accumulator, valuator, allocation
    ├── history_calculator.py    # Monthly invested-capital series
    └── service.py               # ValuationService (import from .service: it reads
                                 # through services.store, which imports types.py)

Data Flow:
    Transactions (per asset) → CostBasisAccumulator → CostBasisResult
    CostBasisResult + Asset price → PortfolioValuator → SnapshotLine
    All lines → PortfolioSnapshot → analytics, goals, dashboard
"""

from wealthvault.services.valuation.calculators import (
    AllocationCalculator,
    CostBasisAccumulator,
    PortfolioValuator,
)
from wealthvault.services.valuation.history_calculator import WealthHistoryCalculator
from wealthvault.services.valuation.types import (
    AllocationDrift,
    AllocationSlice,
    AssetRecord,
    CostBasisResult,
    GoalRecord,
    HistoryPoint,
    PortfolioSnapshot,
    SnapshotLine,
    TransactionRecord,
)

__all__ = [
    "AssetRecord",
    "TransactionRecord",
    "GoalRecord",
    "CostBasisResult",
    "SnapshotLine",
    "PortfolioSnapshot",
    "HistoryPoint",
    "AllocationSlice",
    "AllocationDrift",

    "CostBasisAccumulator",
    "PortfolioValuator",
    "AllocationCalculator",
    "WealthHistoryCalculator",
]

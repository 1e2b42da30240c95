# backend/wealthvault/routers/__init__.py
"""
API routers for WealthVault.

Each router handles a specific domain:
- assets: Assets and liabilities, manual price updates
- transactions: BUY / SELL / DIVIDEND ledger
- goals: Savings goals
- portfolio: Valuation, dashboard summary, history, allocation
- analytics: XIRR, health score, goal progress, analysis report
- backup: Export, import and wipe
"""

from wealthvault.routers.analytics import router as analytics_router
from wealthvault.routers.assets import router as assets_router
from wealthvault.routers.backup import router as backup_router
from wealthvault.routers.goals import router as goals_router
from wealthvault.routers.portfolio import router as portfolio_router
from wealthvault.routers.transactions import router as transactions_router

__all__ = [
    "assets_router",
    "transactions_router",
    "goals_router",
    "portfolio_router",
    "analytics_router",
    "backup_router",
]

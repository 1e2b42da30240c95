# backend/wealthvault/services/constants.py
"""
Centralized constants for the WealthVault services.

Single source of truth for solver parameters, health-score thresholds
and shared labels.

Usage:
    from wealthvault.services.constants import (
        CALENDAR_DAYS_PER_YEAR,
        IRR_MAX_ITERATIONS,
        ZERO,
    )
"""

from decimal import Decimal


# =============================================================================
# FINANCIAL CALENDAR CONSTANTS
# =============================================================================

# XIRR year fractions use a fixed 365-day year
CALENDAR_DAYS_PER_YEAR: int = 365


# =============================================================================
# IRR/XIRR CALCULATION SETTINGS
# =============================================================================

# Maximum Newton-Raphson iterations before reporting non-convergence
IRR_MAX_ITERATIONS: int = 100

# Converged when two successive rate estimates differ by less than this
IRR_TOLERANCE: float = 1e-6

# Initial guess (10% annual return)
IRR_INITIAL_GUESS: float = 0.1


# =============================================================================
# HEALTH SCORE
# =============================================================================

HEALTH_MAX_SCORE: int = 100

# Largest single asset as a share of total assets
CONCENTRATION_WARNING_RATIO: Decimal = Decimal("0.5")
CONCENTRATION_CRITICAL_RATIO: Decimal = Decimal("0.8")
CONCENTRATION_PENALTY: int = 20

# Fewer distinct asset categories than this is under-diversified
MIN_DISTINCT_CATEGORIES: int = 3
DIVERSIFICATION_PENALTY: int = 15

# Cash share bounds (emergency buffer vs cash drag)
CASH_MIN_RATIO: Decimal = Decimal("0.05")
CASH_MAX_RATIO: Decimal = Decimal("0.40")
CASH_PENALTY: int = 10

# Debt as a share of total assets
DEBT_WARNING_RATIO: Decimal = Decimal("0.5")
DEBT_CRITICAL_RATIO: Decimal = Decimal("0.8")
DEBT_PENALTY: int = 20

# High-volatility (crypto) share
CRYPTO_MAX_RATIO: Decimal = Decimal("0.25")
CRYPTO_PENALTY: int = 5

# Rating bands used by clients to colour the score
HEALTH_GOOD_THRESHOLD: int = 70
HEALTH_FAIR_THRESHOLD: int = 40


# =============================================================================
# GOALS
# =============================================================================

GOAL_MAX_PROGRESS: Decimal = Decimal("100")


# =============================================================================
# UTILITY CONSTANTS
# =============================================================================

ZERO: Decimal = Decimal("0")
HUNDRED: Decimal = Decimal("100")

# Label shown for transactions whose asset has been deleted
UNKNOWN_ASSET_NAME: str = "Unknown"

# Collections exposed by the record store and the backup document
COLLECTIONS: tuple[str, ...] = ("assets", "transactions", "goals")

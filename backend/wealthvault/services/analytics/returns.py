# backend/wealthvault/services/analytics/returns.py
"""
Money-weighted return (XIRR) and projection functions.

This module contains pure functions:
- build_cash_flows: Ledger entries + net wealth → dated cash flows
- calculate_xirr: Newton-Raphson solver over dated cash flows
- calculate_portfolio_xirr: The two above, as a percentage (0 on failure)
- project_future_value: Compound growth at a given annual rate

All functions are stateless. No external dependencies (scipy, numpy) - pure Python only.

Formulas:
    XIRR solves: f(r) = Σ CF_i / (1 + r)^t_i = 0,  t_i = (d_i - d_0) / 365
    f'(r) = Σ -t_i · CF_i / (1 + r)^(t_i + 1)
    r_{n+1} = r_n - f(r_n) / f'(r_n)

Precision Note (Decimal vs Float):
    The solver operates entirely in float (100 iterations with fractional
    exponents, which Decimal handles slowly). Inputs are converted once
    and the converged rate is converted back to Decimal with 8 decimal
    places. Float64 keeps ~15 significant digits, far more than any
    displayed return needs.
"""

import logging
import math
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from wealthvault.models import TransactionType
from wealthvault.services.analytics.types import CashFlow
from wealthvault.services.constants import (
    CALENDAR_DAYS_PER_YEAR,
    HUNDRED,
    IRR_INITIAL_GUESS,
    IRR_MAX_ITERATIONS,
    IRR_TOLERANCE,
    ZERO,
)
from wealthvault.services.valuation.types import TransactionRecord

logger = logging.getLogger(__name__)

RATE_PRECISION = Decimal("0.00000001")


# =============================================================================
# CASH FLOWS
# =============================================================================

def build_cash_flows(
        transactions: Iterable[TransactionRecord],
        net_wealth: Decimal,
        as_of: date | None = None,
) -> list[CashFlow]:
    """
    Turn ledger entries into XIRR cash flows.

    Sign convention (from the investor's point of view):
        BUY              → -(quantity × price + fees)
        SELL / DIVIDEND  → +(quantity × price + fees)
        terminal flow    → +net_wealth, dated as_of

    Note:
        Fees are added with the same sign as the gross amount for every
        type, so SELL fees increase the inflow. This differs from the
        cost-basis accumulator, which ignores SELL fees entirely.

    Args:
        transactions: All ledger entries, any order
        net_wealth: Current net wealth (the liquidation value)
        as_of: Valuation date for the terminal flow (default today)

    Returns:
        Cash flows in input order followed by the terminal flow
    """
    flows = []
    for txn in transactions:
        amount = txn.gross_amount + txn.fees
        if txn.transaction_type == TransactionType.BUY:
            amount = -amount
        flows.append(CashFlow(date=txn.date, amount=amount))

    flows.append(CashFlow(date=as_of or date.today(), amount=net_wealth))
    return flows


# =============================================================================
# XIRR SOLVER
# =============================================================================

def calculate_xirr(
        cash_flows: list[CashFlow],
        max_iterations: int = IRR_MAX_ITERATIONS,
        tolerance: float = IRR_TOLERANCE,
        initial_guess: float = IRR_INITIAL_GUESS,
) -> Decimal | None:
    """
    Calculate Extended Internal Rate of Return (XIRR).

    Uses Newton-Raphson, stopping when two successive estimates differ
    by less than tolerance.

    Args:
        cash_flows: Dated flows, any order
        max_iterations: Maximum solver iterations
        tolerance: Convergence threshold on the step size
        initial_guess: Starting rate (0.1 = 10%)

    Returns:
        XIRR as decimal (e.g., 0.10 = 10%), or None if no solution found.
        Never raises: fewer than two flows, a zero derivative, a rate at
        or below -100%, overflow, NaN and a rate too large to quantize are
        all reported as None.

    Example:
        cash_flows = [
            CashFlow(date(2023, 1, 1), Decimal("-1000")),   # Investment
            CashFlow(date(2024, 1, 1), Decimal("1100")),    # Value a year later
        ]
        xirr = calculate_xirr(cash_flows)  # ~0.10 (10% return)
    """
    if len(cash_flows) < 2:
        return None

    sorted_flows = sorted(cash_flows, key=lambda cf: cf.date)
    base_date = sorted_flows[0].date

    # (years since first flow, amount) pairs
    flows = [
        ((cf.date - base_date).days / CALENDAR_DAYS_PER_YEAR, float(cf.amount))
        for cf in sorted_flows
    ]

    rate = float(initial_guess)

    try:
        for _ in range(max_iterations):
            base = 1.0 + rate
            if base <= 0:
                logger.warning(f"XIRR diverged to a rate of {rate:.4f} (<= -100%)")
                return None

            npv = 0.0
            npv_derivative = 0.0
            for years, amount in flows:
                discount = base ** years
                npv += amount / discount
                # d/dr [CF / (1+r)^t] = -t * CF / (1+r)^(t+1)
                npv_derivative -= years * amount / (discount * base)

            if npv_derivative == 0:
                logger.warning("XIRR derivative is zero, cannot continue")
                return None

            next_rate = rate - npv / npv_derivative

            if math.isnan(next_rate) or math.isinf(next_rate):
                logger.warning("XIRR produced a non-finite rate")
                return None

            if abs(next_rate - rate) < tolerance:
                return _to_rate(next_rate)

            rate = next_rate

    except (OverflowError, ZeroDivisionError):
        logger.warning("XIRR overflowed during iteration")
        return None

    logger.warning(f"XIRR did not converge after {max_iterations} iterations")
    return None


def _to_rate(value: float) -> Decimal | None:
    """
    Quantize a converged rate, or None when it has too many digits for the
    decimal context (e.g. a 20% gain over one day annualizes to ~8e28).
    """
    try:
        return Decimal(repr(value)).quantize(RATE_PRECISION, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning(f"XIRR converged to {value:.3e}, too large to represent")
        return None


def calculate_portfolio_xirr(
        transactions: Iterable[TransactionRecord],
        net_wealth: Decimal,
        as_of: date | None = None,
) -> Decimal:
    """
    Portfolio money-weighted return as a percentage.

    Returns:
        XIRR × 100 (e.g., 10.0 = 10%), or 0 when there are fewer than
        two flows or the solver finds no rate
    """
    flows = build_cash_flows(transactions, net_wealth, as_of)
    if len(flows) < 2:
        return ZERO

    rate = calculate_xirr(flows)
    if rate is None:
        return ZERO

    return rate * HUNDRED


# =============================================================================
# PROJECTION
# =============================================================================

def project_future_value(
        present_value: Decimal,
        annual_rate_pct: Decimal,
        years: int,
) -> Decimal:
    """
    Compound present_value at annual_rate_pct for a whole number of years.

    Formula: PV × (1 + rate/100)^years

    Integer exponents keep the calculation in Decimal.
    """
    if years < 0:
        raise ValueError(f"years must be non-negative, got {years}")

    growth = Decimal("1") + annual_rate_pct / HUNDRED
    return present_value * growth ** years

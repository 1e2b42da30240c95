# backend/wealthvault/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

This module provides:
- Ticker normalization
- Display name normalization
- Transaction date bounds

These validators ensure consistent input handling across all schemas.
"""

import re
from datetime import date

# =============================================================================
# CONSTANTS
# =============================================================================

# Ticker: 1-20 chars, alphanumeric plus dots, dashes and carets (BRK.B, BTC-USD, ^SPX)
TICKER_PATTERN = re.compile(r'^[\^]?[A-Z0-9][A-Z0-9.\-]{0,19}$')
TICKER_MAX_LENGTH = 20

# Date limits for reasonable ledger entries
MIN_VALID_DATE = date(1900, 1, 1)


# =============================================================================
# TICKER VALIDATION
# =============================================================================

def normalize_ticker(value: str | None) -> str | None:
    """
    Normalize an optional ticker symbol.

    Blank input means "no ticker" and becomes None.

    Raises:
        ValueError: If the ticker format is invalid
    """
    if value is None:
        return None

    normalized = value.strip().upper()
    if not normalized:
        return None

    if len(normalized) > TICKER_MAX_LENGTH:
        raise ValueError(f"Ticker cannot exceed {TICKER_MAX_LENGTH} characters")

    if not TICKER_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid ticker format: '{normalized}'. "
            "Ticker must be alphanumeric, may include dots (.) or dashes (-) "
            "or start with caret (^)"
        )

    return normalized


# =============================================================================
# NAME VALIDATION
# =============================================================================

def normalize_name(value: str) -> str:
    """Trim and collapse internal whitespace; reject blank names."""
    normalized = " ".join(value.split())
    if not normalized:
        raise ValueError("Name cannot be blank")
    return normalized


# =============================================================================
# DATE VALIDATION
# =============================================================================

def validate_transaction_date(value: date) -> date:
    """
    Validate a transaction date.

    Future dates are allowed (scheduled entries); only implausibly old
    dates are rejected.

    Raises:
        ValueError: If the date is before MIN_VALID_DATE
    """
    if value < MIN_VALID_DATE:
        raise ValueError(f"Date cannot be before {MIN_VALID_DATE}")
    return value

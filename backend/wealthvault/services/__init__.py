# backend/wealthvault/services/__init__.py
"""
Service layer for business logic.

This package contains the service layer which encapsulates business logic
separate from the API (router) layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions
- Receive database sessions as parameters (not via Depends)
- Are easily testable via dependency injection

Usage:
    from wealthvault.services import LedgerService
    from wealthvault.services import ValuationService
    from wealthvault.services import AnalyticsService
    from wealthvault.services.backup import BackupService

Architecture:
    services/
    ├── __init__.py                  # This file - main exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Solver parameters, health thresholds
    ├── protocols.py                 # Service interfaces (Protocol classes)
    ├── store.py                     # RecordStore (ORM rows → engine records)
    ├── ledger.py                    # Validated writes, oversell guard, cascade delete
    ├── backup.py                    # Export / import / wipe (uses schemas)
    ├── analytics/                   # Analytics engine
    │   ├── service.py               # Main analytics orchestrator
    │   ├── types.py                 # Analytics data types
    │   ├── returns.py               # Cash flows, XIRR, projection
    │   ├── health.py                # Health score rules
    │   └── goals.py                 # Goal progress
    └── valuation/                   # Valuation service
        ├── service.py               # Main valuation orchestrator
        ├── types.py                 # Engine records and snapshot types
        ├── calculators.py           # Cost basis, valuation, allocation
        └── history_calculator.py    # Monthly invested capital

BackupService is imported from its module directly: it depends on the
schemas package, which in turn depends on the analytics types.
"""

# Exceptions
from wealthvault.services.exceptions import (
    # Base exceptions
    ServiceError,
    ValidationError,
    NotFoundError,
    # Specific
    OversellError,
    InvalidBackupError,
    AssetNotFoundError,
    TransactionNotFoundError,
    GoalNotFoundError,
)
# Record store
from wealthvault.services.store import RecordStore
# Ledger
from wealthvault.services.ledger import LedgerEntry, LedgerService
# Valuation Service
from wealthvault.services.valuation.service import ValuationService
# Analytics Service
from wealthvault.services.analytics import AnalyticsService

__all__ = [
    # ==========================================================================
    # Services
    # ==========================================================================
    "RecordStore",
    "LedgerService",
    "LedgerEntry",
    "ValuationService",
    "AnalyticsService",

    # ==========================================================================
    # Exceptions
    # ==========================================================================
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "OversellError",
    "InvalidBackupError",
    "AssetNotFoundError",
    "TransactionNotFoundError",
    "GoalNotFoundError",
]

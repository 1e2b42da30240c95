# backend/wealthvault/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- Existing classes satisfy protocols without modification
- Test stubs work without explicit inheritance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from wealthvault.services.valuation.types import PortfolioSnapshot, TransactionRecord


class ValuationServiceProtocol(Protocol):
    """Interface required by AnalyticsService."""

    def get_snapshot(self, db: Session) -> PortfolioSnapshot:
        ...

    def get_snapshot_with_transactions(
            self, db: Session
    ) -> tuple[PortfolioSnapshot, list[TransactionRecord]]:
        ...

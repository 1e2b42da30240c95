# backend/wealthvault/dependencies.py
"""
Service providers for FastAPI's Depends().

Services are stateless (all state lives in the Session passed per call),
so each is built once, lazily, and shared by every request.
"""

import logging
from functools import lru_cache

from wealthvault.services.analytics.service import AnalyticsService
from wealthvault.services.backup import BackupService
from wealthvault.services.ledger import LedgerService
from wealthvault.services.valuation.service import ValuationService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_valuation_service() -> ValuationService:
    logger.debug("Building ValuationService")
    return ValuationService()


@lru_cache(maxsize=1)
def get_analytics_service() -> AnalyticsService:
    """Shares the valuation singleton so reports and snapshots agree."""
    logger.debug("Building AnalyticsService")
    return AnalyticsService(valuation_service=get_valuation_service())


@lru_cache(maxsize=1)
def get_ledger_service() -> LedgerService:
    """Oversell policy comes from settings.reject_oversell."""
    logger.debug("Building LedgerService")
    return LedgerService()


@lru_cache(maxsize=1)
def get_backup_service() -> BackupService:
    logger.debug("Building BackupService")
    return BackupService()

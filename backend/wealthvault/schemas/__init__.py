# backend/wealthvault/schemas/__init__.py
"""
Pydantic schemas for request validation and response serialization.

Schemas are the API boundary: malformed numbers (NaN, inf, negative
prices, non-positive quantities and targets) are rejected here with a
422 before any service code runs.
"""

from wealthvault.schemas.analytics import (
    AnalysisReportResponse,
    HealthPenaltyResponse,
    HealthReportResponse,
    ProjectionResponse,
    XirrResponse,
)
from wealthvault.schemas.assets import (
    AssetCreate,
    AssetDeleteResponse,
    AssetResponse,
    AssetUpdate,
    PriceUpdate,
)
from wealthvault.schemas.backup import (
    BackupDocument,
    BackupImportResponse,
    WipeResponse,
)
from wealthvault.schemas.errors import ErrorDetail, FieldError, ValidationErrorDetail
from wealthvault.schemas.goals import (
    GoalCreate,
    GoalProgressResponse,
    GoalResponse,
    GoalUpdate,
)
from wealthvault.schemas.portfolio import (
    AllocationResponse,
    HistoryPointResponse,
    PortfolioResponse,
    PortfolioSummaryResponse,
    SnapshotLineResponse,
)
from wealthvault.schemas.transactions import TransactionCreate, TransactionResponse

__all__ = [
    # Assets
    "AssetCreate",
    "AssetUpdate",
    "PriceUpdate",
    "AssetResponse",
    "AssetDeleteResponse",
    # Transactions
    "TransactionCreate",
    "TransactionResponse",
    # Goals
    "GoalCreate",
    "GoalUpdate",
    "GoalResponse",
    "GoalProgressResponse",
    # Portfolio
    "SnapshotLineResponse",
    "PortfolioResponse",
    "PortfolioSummaryResponse",
    "HistoryPointResponse",
    "AllocationResponse",
    # Analytics
    "XirrResponse",
    "HealthPenaltyResponse",
    "HealthReportResponse",
    "ProjectionResponse",
    "AnalysisReportResponse",
    # Backup
    "BackupDocument",
    "BackupImportResponse",
    "WipeResponse",
    # Errors
    "ErrorDetail",
    "FieldError",
    "ValidationErrorDetail",
]

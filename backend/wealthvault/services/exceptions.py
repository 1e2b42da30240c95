# backend/wealthvault/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
main.py maps them to HTTP responses.

The calculation engine itself never raises: degenerate inputs are
zero-guarded and solver failures are reported as "no rate". These
exceptions come from the ledger, the record store and backup restore.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── OversellError
    │   └── InvalidBackupError
    └── NotFoundError
        ├── AssetNotFoundError
        ├── TransactionNotFoundError
        └── GoalNotFoundError
"""

from datetime import date
from decimal import Decimal


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when a record is rejected before it reaches the engine.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class OversellError(ValidationError):
    """
    Raised when a SELL would leave an asset with negative units.

    Attributes:
        asset_id: Asset being sold
        requested: Units in the rejected sale
        available: Units held on the sale date before the sale
        on_date: Date at which the running balance would go short
    """

    def __init__(
            self,
            asset_id: int,
            requested: Decimal,
            available: Decimal,
            on_date: date,
    ) -> None:
        self.asset_id = asset_id
        self.requested = requested
        self.available = available
        self.on_date = on_date
        super().__init__(
            f"Cannot sell {requested} units of asset {asset_id}: "
            f"only {available} held on {on_date.isoformat()}",
            field="quantity",
        )


class InvalidBackupError(ValidationError):
    """Raised when a backup document cannot be restored."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid backup file: {reason}", field="backup")


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Asset", "Goal")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class AssetNotFoundError(NotFoundError):
    """Raised when an asset id does not exist."""

    def __init__(self, asset_id: int) -> None:
        self.asset_id = asset_id
        super().__init__(
            f"Asset {asset_id} not found",
            resource_type="Asset",
            resource_id=asset_id,
        )


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction id does not exist."""

    def __init__(self, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction {transaction_id} not found",
            resource_type="Transaction",
            resource_id=transaction_id,
        )


class GoalNotFoundError(NotFoundError):
    """Raised when a goal id does not exist."""

    def __init__(self, goal_id: int) -> None:
        self.goal_id = goal_id
        super().__init__(
            f"Goal {goal_id} not found",
            resource_type="Goal",
            resource_id=goal_id,
        )

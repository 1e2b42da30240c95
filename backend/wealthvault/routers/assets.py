# backend/wealthvault/routers/assets.py
"""
Asset management endpoints.

Provides CRUD operations for assets and liabilities (category DEBT),
plus the manual price update. Writes go through LedgerService; service
exceptions are mapped to HTTP responses by the handlers in main.py.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from wealthvault.database import get_db
from wealthvault.dependencies import get_ledger_service
from wealthvault.models import AssetCategory
from wealthvault.schemas.assets import (
    AssetCreate,
    AssetDeleteResponse,
    AssetResponse,
    AssetUpdate,
    PriceUpdate,
)
from wealthvault.services.ledger import LedgerService
from wealthvault.services.store import RecordStore
from wealthvault.services.valuation.types import AssetRecord

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/assets",
    tags=["Assets"],
)


def to_response(asset: AssetRecord) -> AssetResponse:
    return AssetResponse.model_validate(asset)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new asset",
    response_description="The created asset"
)
def create_asset(
        asset: AssetCreate,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> AssetResponse:
    """
    Create a new asset or liability.

    - **name**: Display name
    - **category**: STOCK, ETF, MUTUAL_FUND, BOND, REAL_ESTATE, GOLD, CRYPTO, CASH, DEBT or OTHER
    - **current_price**: Latest price per unit (entered manually)
    - **target_allocation**: Desired portfolio share in percent
    """
    return to_response(ledger.create_asset(db, asset.model_dump()))


@router.get(
    "/",
    response_model=list[AssetResponse],
    summary="List assets",
)
def list_assets(
        category: AssetCategory | None = Query(default=None, description="Filter by category"),
        db: Session = Depends(get_db),
) -> list[AssetResponse]:
    assets = RecordStore(db).get_all("assets")
    if category is not None:
        assets = [a for a in assets if a.category == category]
    return [to_response(a) for a in assets]


@router.get(
    "/{asset_id}",
    response_model=AssetResponse,
    summary="Get asset by ID",
)
def get_asset(asset_id: int, db: Session = Depends(get_db)) -> AssetResponse:
    return to_response(RecordStore(db).get("assets", asset_id))


@router.patch(
    "/{asset_id}",
    response_model=AssetResponse,
    summary="Update an asset",
)
def update_asset(
        asset_id: int,
        asset_update: AssetUpdate,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> AssetResponse:
    """
    Partial update: only provided fields are changed.

    Sending a blank or null ticker clears it; null is ignored for other fields.
    """
    values = {
        key: value
        for key, value in asset_update.model_dump(exclude_unset=True).items()
        if value is not None or key == "ticker"
    }
    return to_response(ledger.update_asset(db, asset_id, values))


@router.put(
    "/{asset_id}/price",
    response_model=AssetResponse,
    summary="Set the current price of an asset",
)
def update_price(
        asset_id: int,
        price_update: PriceUpdate,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> AssetResponse:
    return to_response(ledger.update_price(db, asset_id, price_update.current_price))


@router.delete(
    "/{asset_id}",
    response_model=AssetDeleteResponse,
    summary="Delete an asset",
)
def delete_asset(
        asset_id: int,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> AssetDeleteResponse:
    """
    Delete an asset together with its transactions.

    The asset is also removed from any goal that links it.
    """
    removed = ledger.delete_asset(db, asset_id)
    return AssetDeleteResponse(asset_id=asset_id, deleted_transactions=removed)

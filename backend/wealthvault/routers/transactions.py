# backend/wealthvault/routers/transactions.py
"""
Transaction (ledger) endpoints.

Transactions are immutable once recorded: they can be created, listed
and deleted. The listing is newest first, and entries whose asset no
longer exists are shown with asset_name "Unknown".
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from wealthvault.database import get_db
from wealthvault.dependencies import get_ledger_service
from wealthvault.schemas.transactions import TransactionCreate, TransactionResponse
from wealthvault.services.ledger import LedgerEntry, LedgerService

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)


@router.post(
    "/",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a transaction",
)
def create_transaction(
        txn: TransactionCreate,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """
    Record a BUY, SELL or DIVIDEND.

    A SELL larger than the units held on its date is rejected with 400
    (unless REJECT_OVERSELL is disabled).
    """
    record = ledger.record_transaction(db, txn.model_dump())
    return ledger_response(ledger.get_transaction(db, record.id))


@router.get(
    "/",
    response_model=list[TransactionResponse],
    summary="List transactions (newest first)",
)
def list_transactions(
        asset_id: int | None = Query(default=None, description="Only entries of this asset"),
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> list[TransactionResponse]:
    return [ledger_response(entry) for entry in ledger.list_transactions(db, asset_id)]


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get transaction by ID",
)
def get_transaction(
        transaction_id: int,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    return ledger_response(ledger.get_transaction(db, transaction_id))


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a transaction",
)
def delete_transaction(
        transaction_id: int,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    ledger.delete_transaction(db, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def ledger_response(entry: LedgerEntry) -> TransactionResponse:
    return TransactionResponse.from_entry(entry)

# backend/wealthvault/routers/backup.py
"""
Backup endpoints.

- GET    /backup/export   Download every collection as one JSON document
- POST   /backup/import   Replace all data with an uploaded document (atomic)
- DELETE /backup/wipe     Delete all data
"""

from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wealthvault.database import get_db
from wealthvault.dependencies import get_backup_service
from wealthvault.schemas.backup import BackupDocument, BackupImportResponse, WipeResponse
from wealthvault.services.backup import BackupService

router = APIRouter(
    prefix="/backup",
    tags=["Backup"],
)


@router.get(
    "/export",
    response_model=BackupDocument,
    summary="Export all data",
)
def export_backup(
        db: Session = Depends(get_db),
        service: BackupService = Depends(get_backup_service),
) -> JSONResponse:
    document = service.export(db)
    filename = f"wealthvault_backup_{date.today().isoformat()}.json"
    return JSONResponse(
        content=document.model_dump(mode="json"),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/import",
    response_model=BackupImportResponse,
    summary="Restore from a backup document",
)
def import_backup(
        payload: dict[str, Any] = Body(..., description="Backup document"),
        db: Session = Depends(get_db),
        service: BackupService = Depends(get_backup_service),
) -> BackupImportResponse:
    """
    Replace assets, transactions and goals with the request body.

    The body is a document produced by /backup/export. assets and
    transactions are required; goals are optional. Any invalid record
    rejects the whole import with 400 and leaves existing data untouched.
    """
    counts = service.import_document(db, payload)
    return BackupImportResponse(**counts)


@router.delete(
    "/wipe",
    response_model=WipeResponse,
    summary="Delete all data",
)
def wipe(
        db: Session = Depends(get_db),
        service: BackupService = Depends(get_backup_service),
) -> WipeResponse:
    return WipeResponse(**service.wipe(db))

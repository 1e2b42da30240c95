# backend/wealthvault/main.py
"""
WealthVault API application.

Import order matters here: logging is configured first so that table
creation and router registration are already logged in the chosen format.
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from wealthvault.config import settings
from wealthvault.database import get_db, init_db
from wealthvault.middleware import CorrelationIdMiddleware
from wealthvault.routers import (
    analytics_router,
    assets_router,
    backup_router,
    goals_router,
    portfolio_router,
    transactions_router,
)
from wealthvault.schemas.errors import ErrorDetail, FieldError, ValidationErrorDetail
from wealthvault.services.exceptions import (
    InvalidBackupError,
    NotFoundError,
    OversellError,
    ServiceError,
    ValidationError,
)
from wealthvault.utils import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

init_db()

app = FastAPI(
    title=settings.app_name,
    description="Personal net-worth tracker: ledger, valuation, XIRR and portfolio health",
    version="0.1.0",
)

# =============================================================================
# MIDDLEWARE
# =============================================================================
# Starlette runs the last-added middleware first, so the correlation ID is
# bound before CORS handling and is present on preflight responses too.

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# ERROR RESPONSES
# =============================================================================
# Service exceptions carry no HTTP knowledge; the status codes live here.
# Starlette resolves handlers along the exception's MRO, so OversellError
# and InvalidBackupError get their own handlers ahead of ValidationError.

_HTTP_ERROR_NAMES = {
    400: "BadRequestError",
    404: "NotFoundError",
    405: "MethodNotAllowedError",
    409: "ConflictError",
    422: "ValidationError",
    500: "InternalServerError",
    503: "ServiceUnavailableError",
}


def _error_response(
        status_code: int,
        error: str,
        message: str,
        details: dict | None = None,
        headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorDetail(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return _error_response(
        404,
        type(exc).__name__,
        str(exc),
        {"resource_type": exc.resource_type, "resource_id": exc.resource_id},
    )


@app.exception_handler(OversellError)
async def oversell_handler(request: Request, exc: OversellError) -> JSONResponse:
    """A SELL (or a BUY removal) would leave the asset short."""
    logger.warning(f"Oversell rejected for asset {exc.asset_id}: {exc}")
    return _error_response(
        400,
        "OversellError",
        str(exc),
        {
            "field": exc.field,
            "asset_id": exc.asset_id,
            "requested": str(exc.requested),
            "available": str(exc.available),
            "date": exc.on_date.isoformat(),
        },
    )


@app.exception_handler(InvalidBackupError)
async def invalid_backup_handler(request: Request, exc: InvalidBackupError) -> JSONResponse:
    logger.warning(f"Backup import rejected, nothing restored: {exc.reason}")
    return _error_response(400, "InvalidBackupError", str(exc), {"reason": exc.reason})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    details = {"field": exc.field} if exc.field else None
    return _error_response(400, "ValidationError", str(exc), details)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.error(f"Unhandled service error on {request.url.path}: {exc}")
    return _error_response(500, "ServiceError", str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same shape as service errors."""
    return _error_response(
        exc.status_code,
        _HTTP_ERROR_NAMES.get(exc.status_code, "HTTPError"),
        str(exc.detail) if exc.detail else "An error occurred",
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
        request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one FieldError per rejected input, e.g. field='body.quantity'."""
    field_errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]
    body = ValidationErrorDetail(details=field_errors)
    return JSONResponse(status_code=422, content=body.model_dump())


# =============================================================================
# ROUTERS
# =============================================================================

for router in (
    assets_router,
    transactions_router,
    goals_router,
    portfolio_router,
    analytics_router,
    backup_router,
):
    app.include_router(router)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================

def _database_error(db: Session) -> str | None:
    """None when the database answers a trivial query, else the error text."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database check failed: {e}")
        return str(e)
    return None


@app.get("/", tags=["Health"])
def root():
    return {
        "message": f"Welcome to {settings.app_name}!",
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", tags=["Health"])
def health_check(db: Session = Depends(get_db)):
    """Overall status with per-dependency checks; 503 when the database is down."""
    error = _database_error(db)
    database = {"status": "healthy" if error is None else "unhealthy", "critical": True}
    if error is not None:
        database["error"] = error
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "checks": {"database": database}},
        )

    return {
        "status": "healthy",
        "environment": settings.environment,
        "checks": {"database": database},
    }


@app.get("/health/live", tags=["Health"])
def liveness_check():
    """Process is up. Does not touch the database."""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
def readiness_check(db: Session = Depends(get_db)):
    """Ready to serve ledger traffic, i.e. the database is reachable."""
    if _database_error(db) is not None:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": "Database unavailable"},
        )
    return {"status": "ready"}

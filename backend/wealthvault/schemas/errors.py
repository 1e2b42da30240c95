# backend/wealthvault/schemas/errors.py
"""
Error bodies returned by the API.

Every non-2xx response has the same top-level keys: `error` (a stable
machine-readable name), `message` and `details`. Request validation
failures list one FieldError per rejected input.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of 4xx/5xx responses raised by the service layer or routing."""

    error: str = Field(..., description="Error name, e.g. 'OversellError' or 'AssetNotFoundError'")
    message: str = Field(..., description="Human-readable explanation")
    details: dict | None = Field(
        default=None,
        description="Structured context such as the asset id or units available",
    )


class FieldError(BaseModel):
    field: str = Field(..., description="Dotted location, e.g. 'body.quantity'")
    message: str
    type: str = Field(..., description="Pydantic error type, e.g. 'greater_than'")


class ValidationErrorDetail(BaseModel):
    """Body of 422 responses."""

    error: str = "ValidationError"
    message: str = "Request validation failed"
    details: list[FieldError]

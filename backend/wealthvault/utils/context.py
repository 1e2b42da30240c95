# backend/wealthvault/utils/context.py
"""
Per-request context for log correlation.

The correlation ID of the request being served lives in a ContextVar,
so every log record emitted while handling that request (ledger writes,
XIRR warnings, backup restores) carries the same ID. Each request runs
in its own context copy, so concurrent requests never see each other's ID.

Usage:
    with correlation_scope("abc-123"):
        ...  # get_correlation_id() == "abc-123"
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """The current request's correlation ID, or None outside a request."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id_var.set(None)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Bind correlation_id for the duration of the block, then restore the previous value."""
    token = _correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id_var.reset(token)

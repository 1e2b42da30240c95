# backend/wealthvault/utils/__init__.py
"""
Cross-cutting utilities.

- logging: Logging configuration with correlation ID support
- context: Request context (correlation IDs)

Usage:
    from wealthvault.utils import setup_logging
    from wealthvault.utils import get_correlation_id, set_correlation_id
"""

from wealthvault.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    correlation_scope,
)
from wealthvault.utils.logging import setup_logging

__all__ = [
    "setup_logging",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "correlation_scope",
]

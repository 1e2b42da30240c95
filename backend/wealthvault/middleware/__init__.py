# backend/wealthvault/middleware/__init__.py
"""
ASGI middleware.

Usage:
    from wealthvault.middleware import CorrelationIdMiddleware

    app.add_middleware(CorrelationIdMiddleware)
"""

from wealthvault.middleware.correlation import CorrelationIdMiddleware

__all__ = [
    "CorrelationIdMiddleware",
]

"""Shared HTTP client with connection pooling for calls to the backing service.

One module-level httpx.AsyncClient instance, created at import and closed
from the app lifespan. Per-request timeout overrides via http.get(url, timeout=5).

Usage:
    from portfolio_api.http_client import http
    resp = await http.get(url, headers=headers)
"""

import httpx

from .config import settings

_LIMITS = httpx.Limits(
    max_connections=50,
    max_keepalive_connections=20,
    keepalive_expiry=30,
)

http = httpx.AsyncClient(
    timeout=settings.request_timeout,
    limits=_LIMITS,
    follow_redirects=False,
)


async def close_clients():
    """Shut down the shared client. Call from app lifespan shutdown."""
    try:
        await http.aclose()
    except RuntimeError:
        pass

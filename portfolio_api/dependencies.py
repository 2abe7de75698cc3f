"""
dependencies.py — Shared FastAPI Dependencies

The shared backing-service client and the bearer-token auth guard used by
every admin route.

Business Rules:
- get_data_service returns the single DataService built at startup
- require_user raises 401 if no bearer token is sent
- require_user raises 403 if the backing service does not accept the token
- Exactly one token verification call per request, no retries
- The verified identity lives on request.state.user for that request only

Called by: routers/admin.py, routers/auth.py
Depends on: services/data_service.py
"""

import logging

from fastapi import Depends, HTTPException, Request

from .services.data_service import DataService, DataServiceError

log = logging.getLogger(__name__)


def get_data_service(request: Request) -> DataService:
    """Dependency: the process-wide backing-service client."""
    return request.app.state.data_service


def bearer_token(authorization: str | None) -> str | None:
    """Extract <token> from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def require_user(
    request: Request, data_service: DataService = Depends(get_data_service)
) -> dict:
    """Dependency: raises 401 without a token, 403 if the token is rejected."""
    token = bearer_token(request.headers.get("authorization"))
    if not token:
        raise HTTPException(401, "Access Denied")

    try:
        user = await data_service.get_user(token)
    except DataServiceError as e:
        log.info(f"Token rejected by backing service ({e.status_code}): {e.message}")
        raise HTTPException(403, "Invalid or expired token")

    request.state.user = user
    return user

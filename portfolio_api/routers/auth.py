"""
routers/auth.py — Login and token check routes

Authentication is delegated to the backing service: the gateway forwards
credentials, hands back the access token it issues, and never stores it.

Business Rules:
- Login failures return 400 with the provider's message
- The returned token is what admin clients send as `Authorization: Bearer`

Called by: main.py (router mount)
Depends on: dependencies, services/data_service.py
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_data_service, require_user
from ..schemas.auth import LoginRequest, LoginResponse
from ..services.data_service import DataService, DataServiceError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, data_service: DataService = Depends(get_data_service)):
    try:
        session = await data_service.sign_in_with_password(body.email, body.password)
    except DataServiceError as e:
        log.info(f"Login failed for {body.email}: {e.message}")
        raise HTTPException(400, e.message)

    log.info(f"Login succeeded for {body.email}")
    return {"token": session["access_token"], "user": session.get("user") or {}}


@router.get("/me")
async def me(user: dict = Depends(require_user)):
    """Echo the identity behind the presented token."""
    return user

"""
schemas/errors.py — Structured error response model

Shared by the HTTPException, RequestValidationError and catch-all handlers
in main.py. Backing-service write errors are forwarded raw and do not use it.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    message: str
    status_code: int
    request_id: str = ""
    detail: list | None = None

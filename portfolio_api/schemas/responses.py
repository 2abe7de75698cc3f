"""
schemas/responses.py — Shared response models for OpenAPI documentation

Content rows are opaque dicts owned by the backing service, so only the
fixed-shape gateway responses are modelled here.

Called by: main.py, routers/*.py
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str

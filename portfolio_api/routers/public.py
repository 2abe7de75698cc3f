"""
routers/public.py — Unauthenticated portfolio read routes and contact form

Business Rules:
- GET /api/about returns the single about row as an object
- GET /api/<table> returns every row ascending by id
- POST /api/contact stores the body verbatim in `messages`
- Read failures surface as 502; write failures forward the raw error as 400

Called by: main.py (router mount)
Depends on: content_tables.py, dependencies, services/data_service.py
"""

import logging

from fastapi import APIRouter, Body, Depends

from ..content_tables import ABOUT_TABLE, MESSAGES_TABLE, ContentTable, public_tables
from ..dependencies import get_data_service
from ..schemas.responses import MessageResponse
from ..services.data_service import DataService, DataServiceError
from .common import read_rows, write_failed

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/about")
async def get_about(data_service: DataService = Depends(get_data_service)):
    return await read_rows(data_service, ABOUT_TABLE, single=True)


def _register_public_list(table: ContentTable) -> None:
    async def list_rows(data_service: DataService = Depends(get_data_service)):
        return await read_rows(data_service, table.name, order="id", ascending=True)

    router.add_api_route(
        f"/{table.name}", list_rows, methods=["GET"], name=f"list_{table.name}"
    )


for _table in public_tables():
    _register_public_list(_table)


@router.post("/contact", response_model=MessageResponse)
async def contact(
    body: dict = Body(...), data_service: DataService = Depends(get_data_service)
):
    try:
        await data_service.insert(MESSAGES_TABLE, [body], returning=False)
    except DataServiceError as e:
        return write_failed(MESSAGES_TABLE, e)
    log.info("Contact message stored")
    return {"message": "Sent!"}

"""
routers/admin.py — Admin CMS API (bearer token required)

Generated list/create/update/delete routes for every content table, plus the
singleton `about` update and the read/delete-only `messages` inbox.

Business Rules:
- Every route sits behind require_user (401 no token, 403 rejected token)
- Lists are newest first (descending by the table's order column)
- Request bodies are forwarded verbatim; the backing service validates them
- Write failures return 400 with the backing service's raw error object
- PUT /api/admin/about always targets row id 1; a payload `id` is dropped

Called by: main.py (router mount)
Depends on: content_tables.py, dependencies, services/data_service.py
"""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from ..content_tables import (
    ABOUT_ROW_ID,
    ABOUT_TABLE,
    MESSAGES_TABLE,
    ContentTable,
    admin_tables,
    get_table,
)
from ..dependencies import get_data_service, require_user
from ..services.data_service import DataService, DataServiceError
from .common import read_rows, write_failed

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_user)]
)


async def _update_one(data_service: DataService, table: str, values: dict, row_id):
    try:
        rows = await data_service.update(table, values, {"id": row_id})
    except DataServiceError as e:
        return write_failed(table, e)
    if not rows:
        raise HTTPException(404, "Row not found")
    log.info(f"Updated {table} id={row_id}")
    return rows[0]


async def _delete_one(data_service: DataService, table: ContentTable, row_id: str):
    try:
        await data_service.delete(table.name, {"id": row_id})
    except DataServiceError as e:
        return write_failed(table.name, e)
    log.info(f"Deleted {table.name} id={row_id}")
    return {"message": table.delete_message}


# ── About (singleton) ────────────────────────────────────────────────


@router.put("/about")
async def update_about(
    body: dict = Body(...), data_service: DataService = Depends(get_data_service)
):
    values = {k: v for k, v in body.items() if k != "id"}
    return await _update_one(data_service, ABOUT_TABLE, values, ABOUT_ROW_ID)


# ── Generated CRUD ───────────────────────────────────────────────────


def _register_crud(table: ContentTable) -> None:
    async def list_rows(data_service: DataService = Depends(get_data_service)):
        return await read_rows(
            data_service, table.name, order=table.order_column, ascending=False
        )

    async def create_row(
        body: dict = Body(...), data_service: DataService = Depends(get_data_service)
    ):
        try:
            rows = await data_service.insert(table.name, [body])
        except DataServiceError as e:
            return write_failed(table.name, e)
        log.info(f"Created row in {table.name}")
        return rows[0] if rows else None

    async def update_row(
        row_id: str,
        body: dict = Body(...),
        data_service: DataService = Depends(get_data_service),
    ):
        return await _update_one(data_service, table.name, body, row_id)

    async def delete_row(row_id: str, data_service: DataService = Depends(get_data_service)):
        return await _delete_one(data_service, table, row_id)

    path = f"/{table.name}"
    router.add_api_route(path, list_rows, methods=["GET"], name=f"admin_list_{table.name}")
    router.add_api_route(
        path, create_row, methods=["POST"], status_code=201, name=f"admin_create_{table.name}"
    )
    router.add_api_route(
        f"{path}/{{row_id}}", update_row, methods=["PUT"], name=f"admin_update_{table.name}"
    )
    router.add_api_route(
        f"{path}/{{row_id}}", delete_row, methods=["DELETE"], name=f"admin_delete_{table.name}"
    )


for _table in admin_tables():
    _register_crud(_table)


# ── Messages (contact inbox) ─────────────────────────────────────────

_messages = get_table(MESSAGES_TABLE)


@router.get("/messages")
async def list_messages(data_service: DataService = Depends(get_data_service)):
    return await read_rows(
        data_service, MESSAGES_TABLE, order=_messages.order_column, ascending=False
    )


@router.delete("/messages/{row_id}")
async def delete_message(row_id: str, data_service: DataService = Depends(get_data_service)):
    return await _delete_one(data_service, _messages, row_id)

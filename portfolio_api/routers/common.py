"""Response helpers shared by the public and admin routers."""

import logging

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from ..services.data_service import DataService, DataServiceError

log = logging.getLogger(__name__)


async def read_rows(data_service: DataService, table: str, **query):
    """Run a select; a failed read becomes 502 instead of an empty body."""
    try:
        return await data_service.select(table, **query)
    except DataServiceError as e:
        log.warning(f"Read of {table} failed ({e.status_code}): {e.message}")
        raise HTTPException(502, e.message)


def write_failed(table: str, e: DataServiceError) -> JSONResponse:
    """400 carrying the backing service's error object unchanged."""
    log.info(f"Write to {table} rejected ({e.status_code}): {e.message}")
    return JSONResponse(e.payload, status_code=400)

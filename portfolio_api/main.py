"""
main.py — Portfolio CMS gateway

FastAPI app that exposes the portfolio content (about, skills, projects,
blogs, experience, testimonials, services, contact messages) over JSON,
passing every read and write through to the backing data/auth service.

Business Rules:
- One DataService per process, built in the lifespan and shared by all requests
- Every response carries X-Request-ID and the security headers below
- Gateway-originated errors share the ErrorResponse shape

Called by: uvicorn (portfolio_api.main:app), `python -m portfolio_api`
Depends on: config, logging_config, http_client, routers/*
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import APP_VERSION, settings
from .http_client import close_clients, http
from .logging_config import setup_logging
from .routers import admin, auth, public
from .schemas.errors import ErrorResponse
from .schemas.responses import HealthResponse
from .services.data_service import DataService

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("SUPABASE_URL / SUPABASE_KEY not set, backing service calls will fail")
    app.state.data_service = DataService(settings.supabase_url, settings.supabase_key, http)
    logger.info(f"Portfolio gateway v{APP_VERSION} ready on port {settings.port}")
    yield
    await close_clients()


app = FastAPI(title="Portfolio CMS API", version=APP_VERSION, lifespan=lifespan)


# ── Middleware ───────────────────────────────────────────────────────


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    start = time.perf_counter()
    with logger.contextualize(request_id=request_id):
        try:
            response = await call_next(request)
        except Exception as exc:
            # Rendered here so the 500 carries the headers below
            response = await unhandled_exception_handler(request, exc)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.0f}ms)"
        )
    response.headers["X-Request-ID"] = request_id
    for name, value in _SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handlers ───────────────────────────────────────────────────


def _error(request: Request, status_code: int, message: str, detail=None, headers=None):
    body = ErrorResponse(
        message=message,
        status_code=status_code,
        request_id=getattr(request.state, "request_id", ""),
        detail=detail,
    )
    return JSONResponse(body.model_dump(), status_code=status_code, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(
        request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _error(request, 400, "Invalid request body", detail=jsonable_encoder(exc.errors()))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return _error(request, 500, "Internal server error")


# ── Routes ───────────────────────────────────────────────────────────


@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "version": APP_VERSION}


app.include_router(auth.router)
app.include_router(public.router)
app.include_router(admin.router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)

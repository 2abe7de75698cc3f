"""
logging_config.py — Centralized Logging Configuration

Sets up Loguru as the single logging backend. Intercepts Python's stdlib
logging module so uvicorn, httpx and any getLogger() call route through
Loguru with the same format and request context.

Business Rules:
- JSON lines in production (any APP_URL that is not localhost)
- Human-readable, colored output in development
- Request ID from middleware is included when available
- Noisy third-party loggers are capped at WARNING

Called by: main.py (lifespan startup)
Depends on: config.py (log_level, app_url)
"""

import logging
import sys

from loguru import logger

from .config import Settings, get_settings

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "0.0.0.0")


def _is_production(app_url: str) -> bool:
    return bool(app_url) and not any(host in app_url for host in _LOCAL_HOSTS)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Loguru and intercept stdlib logging.

    Level and output format come from `settings` (LOG_LEVEL, APP_URL, either
    exported or in .env). Safe to call more than once; each call replaces
    the previous sinks.
    """
    settings = settings or get_settings()
    logger.remove()

    log_level = settings.log_level.upper()
    is_production = _is_production(settings.app_url)

    if is_production:
        # Container runtimes collect stdout
        logger.add(
            sys.stdout,
            level=log_level,
            format="{message}",
            serialize=True,
        )
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<magenta>{extra[request_id]}</magenta> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            colorize=True,
        )

    logger.configure(extra={"request_id": "-"})

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured", level=log_level, production=is_production)


class _InterceptHandler(logging.Handler):
    """Route stdlib logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames from stdlib logging internals
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )

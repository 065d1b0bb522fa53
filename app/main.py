from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, DisconnectionError, InterfaceError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.error_codes import STORAGE_UNAVAILABLE_MESSAGE, ErrorCode
from app.exceptions import MobilePostError
from app.schemas.envelope import error_response, success_response

logger = logging.getLogger(__name__)

_NUMERIC_ERROR_TYPES = frozenset(
    {
        "int_parsing",
        "int_type",
        "int_from_float",
        "float_parsing",
        "float_type",
        "finite_number",
    }
)

_HTTP_STATUS_CODES: dict[int, ErrorCode] = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.INVALID_PARAMETER,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorCode.RECORD_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.INVALID_PARAMETER,
    status.HTTP_409_CONFLICT: ErrorCode.DUPLICATE_RECORD,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ErrorCode.INVALID_PARAMETER,
}


def _validate_env() -> None:
    """
    Fail fast when no PostgreSQL URL is configured.

    Runs before any service or database connection is initialised. Empty
    values count as missing; SQLite and local fallbacks are not permitted.
    """

    from db.config import load_env_files

    load_env_files()

    errors: list[str] = []

    database_url = os.getenv("DATABASE_URL", "").strip()
    cloud_database_url = os.getenv("CLOUD_DATABASE_URL", "").strip()
    if not database_url and not cloud_database_url:
        errors.append(
            "No database URL configured. Set DATABASE_URL or CLOUD_DATABASE_URL. "
            "SQLite and local database fallbacks are not permitted."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed, missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Fail startup when the directory database cannot be reached."""
    from db.session import ping_database

    ping_database()


def _check_schema() -> None:
    """
    Every table registered on Base.metadata must exist in the database.

    Does NOT auto-migrate; a missing table aborts startup.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    inspector = sa_inspect(get_engine())
    actual: set[str] = set(inspector.get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        logger.critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot."""
    _check_db()
    logger.info("Database connectivity confirmed")
    _check_schema()
    logger.info("Database schema validated")
    yield


def _is_connectivity_error(exc: SQLAlchemyError) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def _format_validation_errors(errors: list[dict]) -> str:
    parts: list[str] = []
    for error in errors:
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in {"body", "query", "path"}
        )
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return ", ".join(parts)


def _register_exception_handlers(application: FastAPI) -> None:
    @application.exception_handler(MobilePostError)
    async def handle_mobile_post_error(request: Request, exc: MobilePostError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed code=%s error=%s", request.method, request.url.path, exc.code.value, exc)
        return error_response(exc.code, exc.message, status_code=exc.status_code)

    @application.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = list(exc.errors())
        code = ErrorCode.INVALID_PARAMETER
        if any(error.get("type") in _NUMERIC_ERROR_TYPES for error in errors):
            code = ErrorCode.INVALID_NUMERIC_VALUE
        return error_response(code, _format_validation_errors(errors))

    @application.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.SERVER_ERROR)
        message = exc.detail if isinstance(exc.detail, str) else None
        return error_response(code, message, status_code=exc.status_code)

    @application.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        if _is_connectivity_error(exc):
            logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc)
            return error_response(
                ErrorCode.SERVER_ERROR,
                STORAGE_UNAVAILABLE_MESSAGE,
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        logger.exception("Database error during %s %s", request.method, request.url.path)
        return error_response(ErrorCode.SERVER_ERROR)

    @application.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error during %s %s", request.method, request.url.path)
        return error_response(ErrorCode.SERVER_ERROR)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Mobile Post Office Directory API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    _register_exception_handlers(application)

    from app.api.routers import mobile_posts_router

    application.include_router(mobile_posts_router)

    @application.get("/health")
    def healthcheck() -> JSONResponse:
        return success_response("Service healthy", {"status": "ok"})

    return application


app = create_app()

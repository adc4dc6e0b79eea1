"""Error Handlers — global exception handlers for the deck API.

Invariants:
    - DeckApiError → its own status with {"error": <message>}
    - RequestValidationError → 400 with a summary plus field-level details
    - Starlette HTTPException (unknown route, wrong method) → same envelope
    - SQLAlchemyError → 500 {"error": "Database error"}; Exception → 500, no internals

Design Decisions:
    - Four-layer handler: domain, validation, storage, catch-all
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from deck_api.core.errors import (
    DatabaseError, DeckApiError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_storage_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DeckApiError)
    async def domain_error_handler(request: Request, exc: DeckApiError):
        logger.log(
            LOG_LEVELS[exc.severity],
            f"{type(exc).__name__}: {getattr(exc, 'detail', exc.message)}",
            extra={
                "error_code": exc.code,
                "category": exc.category.value,
                "path": request.url.path,
            },
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_storage_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Storage failure on {request.url.path}: {exc}",
            extra={
                "error_code": "DATABASE_ERROR",
                "category": ErrorCategory.DATABASE.value,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=DatabaseError(str(exc), "unknown").to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"category": ErrorCategory.INTERNAL.value, "path": request.url.path},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def build_validation_error_response(errors) -> dict:
    """Summarize pydantic errors; list every violation under details."""
    details = [
        {
            "field": _field_path(e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    if details and all(d["type"] == "missing" for d in details):
        summary = "Missing fields: " + ", ".join(d["field"] for d in details)
    else:
        summary = "Invalid request data"
    return {"error": summary, "details": details}


def _field_path(loc) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI adds.
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts) or "body"

"""Error Handlers — global exception handlers for the Cardsmith API.

Invariants:
    - CardsmithError → its own to_response() envelope and http_status
    - RequestValidationError → 400 VALIDATION_ERROR with one entry per offending field
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - Every envelope carries code, message, category, severity and retryable
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from cardsmith.core.errors import CardsmithError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CardsmithError, handle_cardsmith_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_cardsmith_error(request: Request, exc: CardsmithError) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "card_id": exc.context.card_id,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _field_path(loc: tuple) -> str:
    # ("body", "links", 0, "url") -> "links.0.url"; header/query names keep their source
    parts = [str(p) for p in loc]
    if parts and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts) or "body"


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {"field": _field_path(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}: {[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.WARNING.value,
                "retryable": False,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
                "retryable": False,
            },
        },
    )

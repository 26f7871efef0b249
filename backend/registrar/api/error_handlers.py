"""Error Handlers — map every failure to one JSON error envelope.

Invariants:
    - RegistrarError → its own http_status and to_response() body
    - RequestValidationError → 400 with one detail per invalid field
    - Anything else → 500 INTERNAL_ERROR; the exception text stays in the logs
    - Every envelope has code, message, category, severity under "error"

Design Decisions:
    - Log level follows the status: client mistakes (4xx) at WARNING,
      store/assembly failures (5xx) at ERROR with the cause chain
    - Field paths drop the leading "body"/"path" segment the client never sent
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from registrar.core.errors import ErrorCategory, ErrorSeverity, RegistrarError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "path", "query"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistrarError, _handle_registrar_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_registrar_error(request: Request, exc: RegistrarError):
    server_side = exc.http_status >= 500
    logger.log(
        logging.ERROR if server_side else logging.WARNING,
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "entity_kind": exc.context.entity_kind,
            "entity_id": exc.context.entity_id,
        },
        exc_info=exc if server_side and exc.__cause__ else None,
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{len(details)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    body = error_envelope(
        "VALIDATION_ERROR", "Invalid request data", ErrorCategory.VALIDATION,
    )
    body["error"]["details"] = details
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
) -> dict:
    """Envelope for failures that are not RegistrarErrors."""
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
        },
    }


def _field_detail(error: dict) -> dict:
    loc = list(error.get("loc", ()))
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    return {
        "field": ".".join(str(part) for part in loc),
        "message": error["msg"],
        "type": error["type"],
    }

"""
Exception Handlers.

Turn ApplicationError subclasses, request parsing failures and anything
unexpected into an ErrorResponse envelope with the right status code.
Each failure is logged once here; create_app() registers the handlers.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cardbox.backend.core.exceptions import (
    ApplicationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from cardbox.backend.core.logging import get_logger
from cardbox.backend.schemas.base import ErrorResponse

logger = get_logger(__name__)

# Unlisted ApplicationError subclasses answer 500
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    DatabaseError: 503,
}


def _get_request_id(request: Request) -> str | None:
    """The middleware's id, else the caller's header, else None."""
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _respond(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse.build(code, message, details, _get_request_id(request))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _error_details(exc: ApplicationError) -> dict[str, Any] | None:
    if isinstance(exc, ValidationError):
        return exc.details or None
    if isinstance(exc, NotFoundError) and exc.resource_id is not None:
        return {"id": exc.resource_id}
    return None


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """
    4xx are logged as warnings and 5xx as errors. A chained storage error
    is logged as `cause` but never sent to the client.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Application error",
        extra={
            "code": exc.code,
            "error_message": exc.message,
            "status": status_code,
            "cause": repr(exc.__cause__) if exc.__cause__ else None,
        },
    )
    return _respond(request, status_code, exc.code, exc.message, _error_details(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests (unparseable JSON and the like), caught before card validation."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]
    logger.warning("Request validation failed", extra={"error_count": len(errors)})
    return _respond(
        request, 422, "VAL_REQUEST_INVALID", "Request validation failed",
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside the request middleware, so the log context is already cleared
    logger.exception(
        "Unhandled exception",
        extra={
            "exception_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
            "request_id": _get_request_id(request),
        },
    )
    return _respond(request, 500, "SYS_INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

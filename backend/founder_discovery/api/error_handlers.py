"""Error Handlers: map every failure to the {"error": {...}} envelope.

Invariants:
    - DiscoveryError keeps its own code and HTTP status
    - RequestValidationError (bad ratings, unknown enums, malformed ids) -> 400 VALIDATION_ERROR
    - Anything else -> 500 INTERNAL_ERROR with no internal detail in the body

Design Decisions:
    - Domain 4xx log at WARNING, 5xx at ERROR, both with the entity ids as extras
    - Kept out of main.py so the entry point only wires routers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from founder_discovery.core.errors import DiscoveryError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DiscoveryError, handle_discovery_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_discovery_error(request: Request, exc: DiscoveryError) -> JSONResponse:
    ctx = exc.context
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.WARNING,
        f"{request.method} {request.url.path} -> {exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "project_id": ctx.project_id,
            "assumption_id": ctx.assumption_id,
            "interview_id": ctx.interview_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = field_errors(exc)
    logger.warning(
        f"{request.method} {request.url.path} rejected: "
        + "; ".join(f"{d['field']} {d['message']}" for d in details),
        extra={"error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data", "validation",
            ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", "internal",
            ErrorSeverity.CRITICAL,
        ),
    )


def field_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic errors to {field, message, type}; 'body'/'path' prefixes kept."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def _envelope(
    code: str, message: str, category: str, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": severity.value,
            **extra,
        },
    }

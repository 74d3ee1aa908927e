"""Error Handlers — render every failure as {"error": {...}} with the right status.

Invariants:
    - PledgebookError keeps its own status (400/401/500) and envelope
    - Body validation failures are 400 VALIDATION_ERROR listing each bad field
    - Anything else is a 500 INTERNAL_ERROR whose message reveals nothing
    - 4xx logged at WARNING, 5xx at ERROR with the request path
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ErrorCategory, ErrorSeverity, PledgebookError

logger = logging.getLogger(__name__)


def _envelope(
    status_code: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "category": category.value,
                "severity": severity.value,
                **extra,
            },
        },
    )


async def handle_pledgebook_error(request: Request, exc: PledgebookError) -> JSONResponse:
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.WARNING,
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "user_iden": exc.context.user_iden,
            "store_key": exc.context.store_key,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    fields = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected body: {[f['field'] for f in fields]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Invalid request data",
        ErrorCategory.VALIDATION,
        ErrorSeverity.WARNING,
        details=fields,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PledgebookError, handle_pledgebook_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

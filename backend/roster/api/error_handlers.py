"""Error Handlers — global exception handlers for the Roster API.

Invariants:
    - RosterError → its own http_status and to_response() envelope, path filled in
    - Exception (catch-all) → 500 envelope, never leaks internal details
    - Query parameters are never validated by FastAPI, so there is no 4xx layer

Design Decisions:
    - Kept out of main.py so the app module stays a wiring list
    - Log level follows error severity: a CRITICAL store outage is not a WARNING
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from roster.core.errors import RosterError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain and catch-all handlers on the FastAPI app."""
    app.add_exception_handler(RosterError, roster_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    """Render a RosterError (DatabaseError, store not initialized) as its envelope."""
    exc.context.path = request.url.path
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{type(exc).__name__}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all — never leaks internal details."""
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
                "context": {"path": request.url.path},
            },
        },
    )

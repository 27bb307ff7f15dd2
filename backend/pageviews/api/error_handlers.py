"""Error Handlers — global exception handlers for the page-view API.

Invariants:
    - PageViewsError → {"error": message} with the error's status and headers
    - Client errors (400-level) are not logged; server errors always are
    - Exception (catch-all) → 500 "Internal server error.", never leaks internal details

Design Decisions:
    - Two-layer handler: domain (PageViewsError), catch-all (Exception)
    - No RequestValidationError handler: analytics routes parse query strings
      themselves, so Pydantic request validation never runs
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pageviews.core.errors import INTERNAL_ERROR_MESSAGE, PageViewsError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register page-view domain/storage error handler."""

    @app.exception_handler(PageViewsError)
    async def pageviews_error_handler(request: Request, exc: PageViewsError):
        if exc.is_server_error:
            logger.error(
                f"PageViewsError: {exc.message}",
                extra={"error_code": exc.code, "pathname": request.url.path},
            )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

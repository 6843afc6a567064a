"""Error Handlers — centralized error formatter for the Bank API.

Invariants:
    - DatabaseError → 400 {success: false, message: "Database operation failed"}
      plus error=<detail> in development only
    - Other BankApiError → its own http_status and to_response()
    - Unmatched route (404) or unsupported verb on a known path (405) → 404 "Route not found"
    - Exception (catch-all) → 500; message and stack echoed in development only
    - Every handled error is logged once, here

Design Decisions:
    - Layered handlers: domain (BankApiError), HTTP (router fallbacks), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
    - Development flag captured at registration: handlers never read settings per request
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bank_api.core.errors import BankApiError, DatabaseError, RouteNotFoundError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, development: bool = False) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bank_api_error_handler(app, development)
    _register_http_error_handler(app)
    _register_generic_error_handler(app, development)


def _register_bank_api_error_handler(app: FastAPI, development: bool) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(BankApiError)
    async def bank_api_error_handler(request: Request, exc: BankApiError):
        """Handle all Bank API domain/infrastructure errors."""
        logger.error(
            f"BankApiError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "method": request.method, "status_code": exc.http_status,
            },
        )
        content = exc.to_response()
        if development and (
            isinstance(exc, DatabaseError) or exc.http_status >= 500
        ):
            content["error"] = exc.message
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register router fallback handler (no matching route / method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors in the uniform envelope."""
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            error = RouteNotFoundError(request.url.path)
            logger.info(
                f"Route not found: {request.method} {request.url.path}",
                extra={"error_code": error.code, "path": request.url.path},
            )
            return JSONResponse(
                status_code=error.http_status, content=error.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI, development: bool) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — internal details only leave the process in development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_build_unexpected_error_response(exc, development),
        )


def _build_unexpected_error_response(exc: Exception, development: bool) -> dict:
    """Build the 500 envelope for an unexpected exception."""
    if not development:
        return {"success": False, "message": "Internal Server Error"}
    return {
        "success": False,
        "message": str(exc) or "Internal Server Error",
        "stack": "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__),
        ),
    }

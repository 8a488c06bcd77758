"""Error Handlers — global exception handlers that keep the envelope shape.

Invariants:
    - RequestValidationError (body is not valid JSON) → 400 error envelope
    - Exception (catch-all) → 500 error envelope, never leaks internal details
    - `command` echoes the header selector when present, else "eval"

Design Decisions:
    - Two-layer handler: validation (FastAPI), catch-all (Exception); structured and
      unstructured evaluation failures never reach here, the dispatcher absorbs them
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from evaluation_base.core.domain_types import DEFAULT_COMMAND
from evaluation_base.core.envelope import build_failure
from evaluation_base.schemas.request import format_validation_errors

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _command_of(request: Request) -> str:
    return request.headers.get("command") or DEFAULT_COMMAND.value


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request body validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle unparseable request bodies."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_failure(_command_of(request), {
                "message": "Schema validation error",
                "detail": format_validation_errors(exc.errors()),
            }),
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
            content=build_failure(_command_of(request), {
                "message": "An unexpected error occurred",
            }),
        )

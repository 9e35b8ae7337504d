"""Error Handlers: global exception handlers that render every failure as an envelope.

Invariants:
    - BookApiError -> its own status and envelope
    - RequestValidationError (query/path params, undecodable JSON) -> 400 envelope
      with field-level details, same shape as gate failures
    - Starlette HTTPException (unknown route, wrong method) -> envelope with its status
    - Exception (catch-all) -> 500 envelope carrying str(exc) in errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from book_api.core.envelope import failure_envelope
from book_api.core.errors import BookApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_book_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_book_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BookApiError)
    async def book_api_error_handler(request: Request, exc: BookApiError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"{exc.code}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=failure_envelope(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. The underlying message is passed through in errors."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_envelope(
                "An unexpected error occurred",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(exc),
            ),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    envelope = failure_envelope(
        "Validation failed",
        status.HTTP_400_BAD_REQUEST,
        [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    )
    return {"status": "error", **envelope}

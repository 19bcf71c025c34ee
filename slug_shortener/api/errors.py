"""
Translation of exceptions into HTTP responses.

Create-path failures become ``{success: false, message, stack}`` JSON.
Anything that ends up as a 404 gets the static not-found page instead.
"""

import logging
import traceback
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slug_shortener.exceptions import ShortenerError, TooManyRequestsError

logger = logging.getLogger(__name__)

NOT_FOUND_PAGE = Path(__file__).resolve().parent.parent / "static" / "404.html"
STACK_PLACEHOLDER = "🥞"
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def not_found_response() -> FileResponse:
    return FileResponse(NOT_FOUND_PAGE, status_code=status.HTTP_404_NOT_FOUND, media_type="text/html")


def error_body(message: str, exc: BaseException, production: bool) -> dict:
    """Error payload; the stack trace is replaced by a placeholder in production."""
    if production:
        stack = STACK_PLACEHOLDER
    else:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {"success": False, "message": message, "stack": stack}


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``; reads ``app.state.settings`` per request."""

    def is_production(request: Request) -> bool:
        return request.app.state.settings.is_production

    @app.exception_handler(ShortenerError)
    async def shortener_error_handler(request: Request, exc: ShortenerError):
        production = is_production(request)
        message = exc.message
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.__class__.__name__, exc.message)
            if production:
                message = GENERIC_ERROR_MESSAGE

        headers = None
        if isinstance(exc, TooManyRequestsError):
            headers = {"Retry-After": str(exc.retry_after)}

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message, exc, production),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(f"Invalid request: {details}", exc, is_production(request)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return not_found_response()
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), exc, is_production(request)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {exc.__class__.__name__}: {str(exc)}",
            exc_info=exc,
            extra={
                "path": request.url.path,
                "method": request.method,
            },
        )
        production = is_production(request)
        message = GENERIC_ERROR_MESSAGE if production else str(exc) or exc.__class__.__name__
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(message, exc, production),
        )

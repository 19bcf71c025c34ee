"""
Request logging middleware.

Production writes Common Log Format lines for log collectors; every other
environment writes a short colourless dev line. Both name the client by the
same address the create throttle is keyed on.
"""

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from slug_shortener.dependencies import get_client_ip


def format_common(request: Request, response: Response, client: str) -> str:
    """``host - - [time] "METHOD path HTTP/x" status bytes``"""
    timestamp = time.strftime("%d/%b/%Y:%H:%M:%S %z")
    http_version = request.scope.get("http_version", "1.1")
    content_length = response.headers.get("content-length", "-")
    return (
        f'{client} - - [{timestamp}] "{request.method} {request.url.path} HTTP/{http_version}" '
        f"{response.status_code} {content_length}"
    )


def format_dev(request: Request, response: Response, client: str, duration_ms: float) -> str:
    return f"{request.method} {request.url.path} {response.status_code} {duration_ms:.2f} ms - {client}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log: one line per request, format chosen by environment."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("slug_shortener.access")

    async def dispatch(self, request: Request, call_next: Callable):
        settings = request.app.state.settings
        client = get_client_ip(request, settings.trust_forwarded_for)
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.time() - start_time) * 1000
            self.logger.error(
                f"{request.method} {request.url.path} failed after {duration_ms:.2f} ms - {client}"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        if settings.is_production:
            self.logger.info(format_common(request, response, client))
        else:
            self.logger.info(format_dev(request, response, client, duration_ms))
        return response

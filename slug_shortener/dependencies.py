"""
FastAPI dependencies for dependency injection.

Everything is built once by the application factory and kept on
``app.state``; these functions only hand it to the routes. Nothing here is a
module-level singleton, so every app (and every test) has its own store.
"""

from fastapi import Request

from slug_shortener.services.slug_resolver import SlugResolver


def get_slug_resolver(request: Request) -> SlugResolver:
    """Get the resolver wired at startup."""
    return request.app.state.slug_resolver


def get_client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    """
    Client address used to key the create throttle.

    ``X-Forwarded-For`` is only read when the app sits behind a proxy that
    sets it (``trust_forwarded_for``); otherwise any caller could pick its own key.
    """
    forwarded_for = request.headers.get("X-Forwarded-For") if trust_forwarded_for else None
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def enforce_create_rate_limit(request: Request) -> None:
    """
    Throttle mapping creation per client IP.

    Raises:
        TooManyRequestsError: translated to 429 by the app's error handler
    """
    settings = request.app.state.settings
    if not settings.rate_limit_enabled:
        return
    client_ip = get_client_ip(request, settings.trust_forwarded_for)
    await request.app.state.create_throttle.check(client_ip)

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from slug_shortener.config import Settings, settings as default_settings
from slug_shortener.api.errors import register_exception_handlers
from slug_shortener.api.v1 import urls, redirect
from slug_shortener.cache import CacheBackend, CacheFactory, CacheStrategy
from slug_shortener.logging_config import setup_logging
from slug_shortener.middleware.logging import RequestLoggingMiddleware
from slug_shortener.rate_limiter import CreateThrottle
from slug_shortener.services.slug_resolver import SlugResolver
from slug_shortener.storage import SlugStore, SlugStoreBackend, SlugStoreFactory

logger = logging.getLogger("slug_shortener.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build whatever was not injected, then wire the resolver."""
    app_settings: Settings = app.state.settings

    if app.state.slug_store is None:
        app.state.slug_store = SlugStoreFactory.create(
            SlugStoreBackend(app_settings.store_backend), app_settings
        )
    if app.state.cache is None:
        app.state.cache = CacheFactory.create(
            CacheBackend(app_settings.cache_backend), app_settings.redis_url
        )

    app.state.slug_resolver = SlugResolver(
        store=app.state.slug_store,
        settings=app_settings,
        cache=app.state.cache,
    )
    logger.info(
        "%s %s started (environment=%s)",
        app_settings.app_name, app_settings.app_version, app_settings.environment,
    )
    yield


def create_app(
    app_settings: Optional[Settings] = None,
    slug_store: Optional[SlugStore] = None,
    cache: Optional[CacheStrategy] = None,
) -> FastAPI:
    """
    Create the FastAPI app.

    Store and cache may be injected (tests do); otherwise they are built from
    settings when the app starts.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="A slug-based URL shortener built with FastAPI",
        debug=app_settings.debug,
        lifespan=lifespan,
        # "/redoc" would shadow a valid slug
        redoc_url=None,
    )

    app.state.settings = app_settings
    app.state.slug_store = slug_store
    app.state.cache = cache
    app.state.create_throttle = CreateThrottle.from_settings(app_settings)

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {app_settings.app_name}",
            "version": app_settings.app_version,
            "docs": "/docs",
        }

    # Under /api/v1 so it never shadows a slug
    @app.get("/api/v1/health")
    def health_check(request: Request):
        """Health check endpoint"""
        return {"status": "healthy", "environment": request.app.state.settings.environment}

    ######## Include routers (redirect last: it matches every single-segment path)
    app.include_router(urls.router)
    app.include_router(redirect.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)

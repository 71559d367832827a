"""FastAPI application entry point for the DaySync API."""

import logging
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings
from errors import register_error_handlers
from services.cache import TTLCache

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings, force: bool = False) -> None:
    # Structured logging: JSON for production, human-readable for local
    if settings.is_production:
        logging.basicConfig(
            level=logging.INFO,
            format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
            stream=sys.stdout,
            force=force,
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s", force=force)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(title="DaySync API", version="1.0.0")
    app.state.settings = settings
    # One cache per app, shared by every handler
    app.state.cache = TTLCache(settings.cache_timeout)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Request log + security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        client = request.client.host if request.client else "-"
        logger.info("Incoming request: %s %s from %s", request.method, request.url.path, client)
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.feeds import router as feeds_router
    from routes.health import router as health_router
    from routes.motogp import router as motogp_router

    app.include_router(health_router)
    app.include_router(feeds_router)
    app.include_router(motogp_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        if settings.test_mode:
            logger.info("Running in test mode - using dummy data")
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (provider routes may fail): %s", ", ".join(missing))
        logger.info("Cache timeout: %ss", settings.cache_timeout)

    return app


app = create_app()

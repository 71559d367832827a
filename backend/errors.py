"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DaySyncError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class MissingParameterError(DaySyncError):
    def __init__(self, name: str):
        super().__init__(f"{name} parameter is required", status_code=400)


class InvalidTimezoneError(DaySyncError):
    def __init__(self, abbr: str):
        super().__init__(f"unsupported timezone abbreviation: {abbr}", status_code=400)


class ConfigError(DaySyncError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class UpstreamError(DaySyncError):
    """A provider call failed: network error, non-200 status or bad body."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}", status_code=502)
        self.provider = provider


class DataFileError(DaySyncError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class NotFoundError(DaySyncError):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(DaySyncError)
    async def handle_daysync_error(_request: Request, exc: DaySyncError):
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )

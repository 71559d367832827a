"""Shared FastAPI dependencies: settings, the process cache, the HTTP client."""

from collections.abc import AsyncIterator

import httpx
from fastapi import Request

from config import Settings
from services.cache import TTLCache

HTTP_TIMEOUT_SECONDS = 10


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as client:
        yield client

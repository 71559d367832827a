"""Readiness check route."""

from fastapi import APIRouter, Depends

from config import Settings
from routes.deps import get_cache, get_settings
from services.cache import TTLCache

router = APIRouter()


@router.get("/ready")
async def ready(
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Lightweight readiness check. No external calls."""
    return {
        "status": "ok",
        "service": "daysync-api",
        "commit": settings.git_sha,
        "environment": settings.environment,
        "test_mode": settings.test_mode,
        "cache_entries": len(cache),
    }

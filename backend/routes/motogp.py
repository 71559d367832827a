"""MotoGP calendar routes, served from the local season file."""

from fastapi import APIRouter, Depends, Query

from config import Settings
from routes.deps import get_cache, get_settings
from services import motogp
from services.cache import TTLCache

router = APIRouter(prefix="/api")


@router.get("/motogp")
def season(
    timezone: str = Query(""),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Whole season, session times as RFC 3339 in the requested timezone."""
    return motogp.get_season(timezone or settings.timezone, cache=cache, settings=settings)


@router.get("/motogpnextrace")
def next_race(
    timezone: str = Query(""),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Next upcoming race with readable session times."""
    return motogp.get_next_race(timezone or settings.timezone, cache=cache, settings=settings)

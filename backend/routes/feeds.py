"""Proxied provider routes: weather, crypto price, news headlines."""

import httpx
from fastapi import APIRouter, Depends, Query

from config import Settings
from errors import MissingParameterError
from routes.deps import get_cache, get_http_client, get_settings
from services import news as news_service
from services.cache import TTLCache
from services.crypto import get_crypto_price
from services.weather import get_weather

router = APIRouter(prefix="/api")


@router.get("/weather")
async def weather(
    location: str = Query(""),
    cache: TTLCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Current conditions for `location` (city name, postcode or lat,lon)."""
    if not location:
        raise MissingParameterError("location")
    return await get_weather(location, cache=cache, client=client, settings=settings)


@router.get("/crypto")
async def crypto(
    symbol: str = Query(""),
    cache: TTLCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Latest price for a trading pair, e.g. BTCUSDT."""
    if not symbol:
        raise MissingParameterError("symbol")
    return await get_crypto_price(symbol, cache=cache, client=client, settings=settings)


@router.get("/news")
async def news(
    category: str = Query(""),
    lang: str = Query(""),
    country: str = Query(""),
    max_results: str = Query("", alias="max"),
    cache: TTLCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Top headlines. Empty parameters fall back to general/en/au/10."""
    return await news_service.get_news(
        category or news_service.DEFAULT_CATEGORY,
        lang or news_service.DEFAULT_LANG,
        country or news_service.DEFAULT_COUNTRY,
        max_results or news_service.DEFAULT_MAX,
        cache=cache,
        client=client,
        settings=settings,
    )

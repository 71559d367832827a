"""API Ninjas crypto price client."""

import logging
from datetime import datetime, timezone

import httpx

from config import Settings
from errors import ConfigError, NotFoundError, UpstreamError
from services import fixtures
from services.cache import TTLCache

logger = logging.getLogger(__name__)

CRYPTO_URL = "https://api.api-ninjas.com/v1/cryptoprice"

# dd/mm/yy hh:mm:ss
TIMESTAMP_FORMAT = "%d/%m/%y %H:%M:%S"


def format_timestamp(unix_seconds: int | float) -> str:
    return datetime.fromtimestamp(unix_seconds, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)


async def _fetch(client: httpx.AsyncClient, api_key: str, symbol: str) -> dict:
    try:
        resp = await client.get(
            CRYPTO_URL,
            params={"symbol": symbol},
            headers={"X-Api-Key": api_key},
        )
    except httpx.HTTPError as e:
        raise UpstreamError("crypto", f"error making API request: {e}") from e

    if resp.status_code != 200:
        raise UpstreamError("crypto", f"API request failed with status: {resp.status_code}")

    try:
        data = resp.json()
        return {
            "symbol": data["symbol"],
            "price": data["price"],
            "timestamp": format_timestamp(data["timestamp"]),
        }
    except (ValueError, KeyError, TypeError, OverflowError, OSError) as e:
        raise UpstreamError("crypto", f"error parsing API response: {e}") from e


async def get_crypto_price(
    symbol: str,
    *,
    cache: TTLCache,
    client: httpx.AsyncClient,
    settings: Settings,
) -> dict:
    """Latest price for a trading pair such as BTCUSDT."""
    key = f"crypto:{symbol}"
    cached, found = cache.get(key)
    if found:
        logger.info("[CACHE HIT] Returning cached crypto data for %s", symbol)
        return cached

    if settings.test_mode:
        logger.info("[API CALL] No cache found for crypto data, using test data for %s", symbol)
        result = fixtures.crypto_price(settings.data_dir, symbol)
        if result is None:
            raise NotFoundError("no test crypto data available")
    else:
        if not settings.api_ninjas_key:
            raise ConfigError("API key not configured")
        logger.info("[API CALL] No cache found for crypto data, calling API Ninjas for %s", symbol)
        result = await _fetch(client, settings.api_ninjas_key, symbol)

    cache.set(key, result)
    logger.info("[CACHE SET] Cached crypto data for %s", symbol)
    return result

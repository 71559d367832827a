"""weatherapi.com client: current conditions for a location.

Requires WEATHER_API_KEY. Returns metric units (Celsius, kph, mm).
"""

import logging
from datetime import datetime, timezone

import httpx

from config import Settings
from errors import ConfigError, NotFoundError, UpstreamError
from services import fixtures
from services.cache import TTLCache

logger = logging.getLogger(__name__)

WEATHER_URL = "http://api.weatherapi.com/v1/current.json"


async def _fetch(client: httpx.AsyncClient, api_key: str, location: str) -> dict:
    """Call weatherapi.com and flatten the parts we serve."""
    try:
        resp = await client.get(
            WEATHER_URL,
            params={"key": api_key, "q": location, "aqi": "no"},
        )
    except httpx.HTTPError as e:
        raise UpstreamError("weather", f"error making weather API request: {e}") from e

    if resp.status_code != 200:
        raise UpstreamError("weather", f"weather API returned status {resp.status_code}: {resp.text}")

    try:
        data = resp.json()
        loc = data["location"]
        current = data["current"]
        return {
            "location": loc["name"],
            "region": loc["region"],
            "local_time": loc["localtime"],
            "temperature": current["temp_c"],
            "wind_speed": current["wind_kph"],
            "precipitation": current["precip_mm"],
            "humidity": current["humidity"],
            "feels_like": current["feelslike_c"],
            "uv_index": current["uv"],
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
    except (ValueError, KeyError, TypeError) as e:
        raise UpstreamError("weather", f"error parsing weather API response: {e}") from e


async def get_weather(
    location: str,
    *,
    cache: TTLCache,
    client: httpx.AsyncClient,
    settings: Settings,
) -> dict:
    """Current weather for a location, served from cache when fresh."""
    key = f"weather:{location}"
    cached, found = cache.get(key)
    if found:
        logger.info("[CACHE HIT] Returning cached weather data for %s", location)
        return cached

    if settings.test_mode:
        logger.info("[API CALL] No cache found for weather data, using test data for %s", location)
        result = fixtures.weather(settings.data_dir, location)
        if result is None:
            raise NotFoundError("no test weather data available")
    else:
        if not settings.weather_api_key:
            raise ConfigError("no weather api key specified")
        logger.info("[API CALL] No cache found for weather data, calling weather API for %s", location)
        result = await _fetch(client, settings.weather_api_key, location)

    cache.set(key, result)
    logger.info("[CACHE SET] Cached weather data for %s", location)
    return result

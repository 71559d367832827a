"""GNews top-headlines client. The provider's JSON body is passed through as is."""

import logging

import httpx

from config import Settings
from errors import ConfigError, NotFoundError, UpstreamError
from services import fixtures
from services.cache import TTLCache

logger = logging.getLogger(__name__)

NEWS_URL = "https://gnews.io/api/v4/top-headlines"

DEFAULT_CATEGORY = "general"
DEFAULT_LANG = "en"
DEFAULT_COUNTRY = "au"
DEFAULT_MAX = "10"


async def _fetch(client: httpx.AsyncClient, api_key: str, params: dict) -> dict:
    try:
        resp = await client.get(NEWS_URL, params={**params, "apikey": api_key})
    except httpx.HTTPError as e:
        raise UpstreamError("news", f"error making API request: {e}") from e

    if resp.status_code != 200:
        raise UpstreamError("news", f"API request failed with status: {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError("news", f"error parsing news response: {e}") from e


async def get_news(
    category: str = DEFAULT_CATEGORY,
    lang: str = DEFAULT_LANG,
    country: str = DEFAULT_COUNTRY,
    max_results: str = DEFAULT_MAX,
    *,
    cache: TTLCache,
    client: httpx.AsyncClient,
    settings: Settings,
) -> dict:
    key = f"news:{category}:{lang}:{country}:{max_results}"
    cached, found = cache.get(key)
    if found:
        logger.info(
            "[CACHE HIT] Returning cached news data for category %s, lang %s, country %s", category, lang, country
        )
        return cached

    if settings.test_mode:
        logger.info("[API CALL] No cache found for news data, using test data for category %s", category)
        result = fixtures.news(settings.data_dir, category, lang, country, max_results)
        if result is None:
            raise NotFoundError("no test news data available")
    else:
        if not settings.gnews_api_key:
            raise ConfigError("API key not configured")
        logger.info(
            "[API CALL] No cache found for news data, calling GNews API for category %s, lang %s, country %s",
            category,
            lang,
            country,
        )
        params = {"category": category, "lang": lang, "country": country, "max": max_results}
        result = await _fetch(client, settings.gnews_api_key, params)

    cache.set(key, result)
    logger.info("[CACHE SET] Cached news data for category %s, lang %s, country %s", category, lang, country)
    return result

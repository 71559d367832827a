"""Canned provider responses served in test mode (no network, no API keys)."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from errors import DataFileError

logger = logging.getLogger(__name__)

FIXTURES_FILE = "test_responses.json"


@lru_cache(maxsize=4)
def _load(data_dir: Path) -> dict:
    path = data_dir / FIXTURES_FILE
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DataFileError(f"error reading test data: {e}") from e
    except json.JSONDecodeError as e:
        raise DataFileError(f"error parsing test data: {e}") from e
    logger.info("Loaded test fixtures from %s", path)
    return data


def _lookup(data_dir: Path, section: str, key: str):
    """Exact match in a fixture section, else its first entry, else None."""
    entries = _load(data_dir).get(section) or {}
    if key in entries:
        return entries[key]
    return next(iter(entries.values()), None)


def weather(data_dir: Path, location: str):
    return _lookup(data_dir, "weather", location.lower())


def crypto_price(data_dir: Path, symbol: str):
    return _lookup(data_dir, "crypto", symbol.upper())


def news(data_dir: Path, category: str, lang: str, country: str, max_results: str):
    return _lookup(data_dir, "news", f"{category}_{lang}_{country}_{max_results}")

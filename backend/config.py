"""Centralized configuration: env vars first, then config.yaml, then defaults."""

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml

from errors import ConfigError, InvalidTimezoneError
from services.timezones import resolve_timezone

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CACHE_TIMEOUT = 30 * 60.0  # seconds
DEFAULT_TIMEZONE = "UTC"

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNIT_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}

_TRUTHY = {"1", "true", "yes", "on"}


def parse_duration(value) -> float | None:
    """Parse a duration into seconds.

    Accepts plain numbers (seconds) and unit strings such as "90s", "30m",
    "1h30m" or "250ms". Returns None for anything unparsable or negative.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if value >= 0 else None

    text = str(value).strip().lower()
    if not text:
        return None
    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        return seconds if seconds >= 0 else None

    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            return None
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        return None
    return total


def _load_yaml(path: Path) -> dict:
    if not path.is_file():
        logger.info("No config file at %s, using environment and defaults", path)
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


class Settings:
    """Application settings loaded from environment variables and config.yaml."""

    def __init__(self, config_path: str | os.PathLike | None = None, environ: Mapping[str, str] | None = None):
        env = os.environ if environ is None else environ
        path = Path(config_path or env.get("DAYSYNC_CONFIG", DEFAULT_CONFIG_PATH))
        file_cfg = _load_yaml(path)

        def pick(env_var: str, key: str, default=None):
            value = env.get(env_var)
            if value not in (None, ""):
                return value
            value = file_cfg.get(key)
            return default if value in (None, "") else value

        tz_name = str(pick("TIMEZONE", "timezone", DEFAULT_TIMEZONE))
        try:
            resolve_timezone(tz_name)
        except InvalidTimezoneError:
            logger.warning("Invalid timezone %r, falling back to %s", tz_name, DEFAULT_TIMEZONE)
            tz_name = DEFAULT_TIMEZONE
        self.timezone: str = tz_name

        # Provider keys
        self.weather_api_key: str | None = pick("WEATHER_API_KEY", "weather_api_key")
        self.api_ninjas_key: str | None = pick("API_NINJAS_KEY", "api_ninjas_key")
        self.gnews_api_key: str | None = pick("GNEWS_API_KEY", "gnews_api_key")

        raw_timeout = pick("CACHE_TIMEOUT", "cache_timeout")
        timeout = parse_duration(raw_timeout)
        if timeout is None:
            if raw_timeout is not None:
                logger.warning(
                    "Invalid cache_timeout %r, falling back to %ss", raw_timeout, DEFAULT_CACHE_TIMEOUT
                )
            timeout = DEFAULT_CACHE_TIMEOUT
        self.cache_timeout: float = timeout

        self.data_dir: Path = Path(pick("DATA_DIR", "data_dir", DEFAULT_DATA_DIR))
        self.test_mode: bool = str(pick("TEST_MODE", "test_mode", False)).strip().lower() in _TRUTHY

        origins = pick("CORS_ORIGINS", "cors_origins", "*")
        if isinstance(origins, str):
            origins = origins.split(",")
        self.cors_origins: list[str] = [str(o).strip() for o in origins if str(o).strip()]
        self.git_sha: str = str(pick("GIT_SHA", "git_sha", "unknown"))
        self.environment: str = str(pick("ENVIRONMENT", "environment", "local"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing provider API keys."""
        if self.test_mode:
            return []
        required = ["WEATHER_API_KEY", "API_NINJAS_KEY", "GNEWS_API_KEY"]
        return [var for var in required if not getattr(self, _attr_for(var))]


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "API_NINJAS_KEY": "api_ninjas_key",
        "GNEWS_API_KEY": "gnews_api_key",
        "WEATHER_API_KEY": "weather_api_key",
    }
    return mapping.get(env_var, env_var.lower())

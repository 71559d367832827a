"""Tests for settings loading and duration parsing."""

import pytest

from config import DEFAULT_CACHE_TIMEOUT, Settings, parse_duration
from errors import ConfigError


@pytest.mark.parametrize(
    "raw, expected",
    [
        (45, 45.0),
        (1.5, 1.5),
        ("90", 90.0),
        ("90s", 90.0),
        ("30m", 1800.0),
        ("1h30m", 5400.0),
        ("250ms", 0.25),
        (" 2H ", 7200.0),
    ],
)
def test_parse_duration_valid(raw, expected):
    assert parse_duration(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "abc", "5x", "m30", "30m abc", "-5", -1, True])
def test_parse_duration_invalid(raw):
    assert parse_duration(raw) is None


def test_settings_defaults(make_settings):
    settings = make_settings()
    assert settings.cache_timeout == DEFAULT_CACHE_TIMEOUT == 1800
    assert settings.timezone == "UTC"
    assert settings.test_mode is False
    assert settings.cors_origins == ["*"]
    assert settings.environment == "local"
    assert not settings.is_production
    assert settings.weather_api_key is None
    assert (settings.data_dir / "motogp-2025.json").is_file()


def test_settings_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "timezone: Australia/Sydney\n"
        "weather_api_key: wkey\n"
        "cache_timeout: 5m\n"
        "test_mode: true\n"
        "cors_origins:\n  - https://a.example\n  - https://b.example\n"
    )
    settings = Settings(config_path=path, environ={})
    assert settings.timezone == "Australia/Sydney"
    assert settings.weather_api_key == "wkey"
    assert settings.cache_timeout == 300
    assert settings.test_mode is True
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_env_overrides_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("weather_api_key: from-file\ncache_timeout: 5m\n")
    settings = Settings(
        config_path=path,
        environ={"WEATHER_API_KEY": "from-env", "CACHE_TIMEOUT": "10s"},
    )
    assert settings.weather_api_key == "from-env"
    assert settings.cache_timeout == 10


def test_config_path_from_env(tmp_path):
    path = tmp_path / "other.yaml"
    path.write_text("gnews_api_key: g\n")
    settings = Settings(environ={"DAYSYNC_CONFIG": str(path)})
    assert settings.gnews_api_key == "g"


@pytest.mark.parametrize("raw", ["soon", "-10", "-1m"])
def test_invalid_cache_timeout_falls_back(make_settings, raw):
    assert make_settings(CACHE_TIMEOUT=raw).cache_timeout == DEFAULT_CACHE_TIMEOUT


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("timezone: [unclosed\n")
    with pytest.raises(ConfigError):
        Settings(config_path=path, environ={})


def test_non_mapping_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError):
        Settings(config_path=path, environ={})


def test_cors_origins_from_env(make_settings):
    settings = make_settings(CORS_ORIGINS="https://a.example, https://b.example")
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_validate_lists_missing_keys(make_settings):
    settings = make_settings(WEATHER_API_KEY="w")
    assert settings.validate() == ["API_NINJAS_KEY", "GNEWS_API_KEY"]


def test_validate_skipped_in_test_mode(make_settings):
    assert make_settings(TEST_MODE="1").validate() == []


def test_is_production(make_settings):
    assert make_settings(ENVIRONMENT="production").is_production


@pytest.mark.parametrize("name", ["Australia/Sidney", "XYZ", "Mars/Olympus_Mons"])
def test_invalid_timezone_falls_back_to_utc(make_settings, name):
    assert make_settings(TIMEZONE=name).timezone == "UTC"


def test_invalid_timezone_in_yaml_falls_back_to_utc(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Nowhere/Special\n")
    assert Settings(config_path=path, environ={}).timezone == "UTC"


@pytest.mark.parametrize("name", ["AEST", "aedt", "Europe/Madrid"])
def test_valid_timezone_kept(make_settings, name):
    assert make_settings(TIMEZONE=name).timezone == name

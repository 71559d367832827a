"""MotoGP season calendar read from the local data directory.

The calendar file holds session times in RFC 3339. Responses convert them
to the caller's timezone; the file contents are never modified.
"""

import copy
import json
import logging
from datetime import datetime, timezone, tzinfo
from pathlib import Path

from config import Settings
from errors import DataFileError, NotFoundError
from services.cache import TTLCache
from services.timezones import resolve_timezone

logger = logging.getLogger(__name__)

CALENDAR_FILE = "motogp-2025.json"
SESSIONS = ("q1", "q2", "sprint", "race")


def load_calendar(data_dir: Path) -> dict:
    path = data_dir / CALENDAR_FILE
    try:
        with path.open("r", encoding="utf-8") as f:
            calendar = json.load(f)
    except OSError as e:
        raise DataFileError("error reading data") from e
    except json.JSONDecodeError as e:
        raise DataFileError("error parsing data") from e

    # Expect {"year": ..., "races": [{...}, ...]}
    if not isinstance(calendar, dict):
        raise DataFileError("error parsing data")
    races = calendar.setdefault("races", [])
    if not isinstance(races, list) or not all(isinstance(race, dict) for race in races):
        raise DataFileError("error parsing data")
    for race in races:
        if not isinstance(race.get("sessions") or {}, dict):
            raise DataFileError("error parsing data")
    return calendar


def parse_time(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp, None when it is not one."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def to_rfc3339(value: str, tz: tzinfo) -> str:
    parsed = parse_time(value)
    if parsed is None:
        return value
    formatted = parsed.astimezone(tz).isoformat()
    if formatted.endswith("+00:00"):
        formatted = formatted[:-6] + "Z"
    return formatted


def ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def to_display(value: str, tz: tzinfo) -> str:
    """Format as e.g. "5th April 2025 at 14:00" in the given timezone."""
    parsed = parse_time(value)
    if parsed is None:
        logger.warning("Error parsing time string: %r", value)
        return value
    local = parsed.astimezone(tz)
    return f"{local.day}{ordinal(local.day)} {local.strftime('%B')} {local.year} at {local:%H:%M}"


def _convert_sessions(race: dict, tz: tzinfo, fmt) -> dict:
    race = copy.deepcopy(race)
    sessions = race.get("sessions") or {}
    for name in SESSIONS:
        if name in sessions:
            sessions[name] = fmt(sessions[name], tz)
    return race


def get_season(tz_name: str, *, cache: TTLCache, settings: Settings) -> dict:
    """Full season with session times converted to `tz_name`."""
    key = f"motogp:season:{tz_name}"
    cached, found = cache.get(key)
    if found:
        logger.info("[CACHE HIT] Returning cached MotoGP season data for timezone %s", tz_name)
        return cached

    tz = resolve_timezone(tz_name)
    logger.info("[API CALL] No cache found for MotoGP season data, reading from file for timezone %s", tz_name)
    calendar = load_calendar(settings.data_dir)

    result = {
        "year": calendar.get("year"),
        "races": [_convert_sessions(race, tz, to_rfc3339) for race in calendar.get("races", [])],
    }
    cache.set(key, result)
    logger.info("[CACHE SET] Cached MotoGP season data for timezone %s", tz_name)
    return result


def find_next_race(races: list[dict], now: datetime) -> dict | None:
    """First race whose race session starts after `now`."""
    for race in races:
        race_time = parse_time((race.get("sessions") or {}).get("race"))
        if race_time is None:
            logger.warning("Error parsing race time for %s", race.get("name"))
            continue
        if race_time > now:
            return race
    return None


def get_next_race(
    tz_name: str,
    *,
    cache: TTLCache,
    settings: Settings,
    now: datetime | None = None,
) -> dict:
    """Next upcoming race with human-readable session times in `tz_name`."""
    key = f"motogp:nextrace:{tz_name}"
    cached, found = cache.get(key)
    if found:
        logger.info("[CACHE HIT] Returning cached next MotoGP race data for timezone %s", tz_name)
        return cached

    tz = resolve_timezone(tz_name)
    logger.info("[API CALL] No cache found for next MotoGP race, reading from file for timezone %s", tz_name)
    calendar = load_calendar(settings.data_dir)

    race = find_next_race(calendar.get("races", []), now or datetime.now(timezone.utc))
    if race is None:
        raise NotFoundError("no upcoming races found")

    result = _convert_sessions(race, tz, to_display)
    cache.set(key, result)
    logger.info("[CACHE SET] Cached next MotoGP race data for timezone %s", tz_name)
    return result

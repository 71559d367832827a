"""Timezone abbreviation lookup for calendar display."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from errors import InvalidTimezoneError

# Abbreviation -> IANA zone
TIMEZONE_ABBREVIATIONS = {
    # Australia
    "ACDT": "Australia/Adelaide",
    "ACST": "Australia/Darwin",
    "AEDT": "Australia/Sydney",
    "AEST": "Australia/Brisbane",
    "AWDT": "Australia/Perth",
    "AWST": "Australia/Perth",
    # US
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    # Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    "EET": "Europe/Bucharest",
    "EEST": "Europe/Bucharest",
    # Asia
    "JST": "Asia/Tokyo",
    "KST": "Asia/Seoul",
    "CNST": "Asia/Shanghai",
    "IST": "Asia/Kolkata",
    "UTC": "UTC",
}


def resolve_timezone(name: str) -> ZoneInfo:
    """Resolve an abbreviation (e.g. "AEST") or an IANA name to a ZoneInfo."""
    iana = TIMEZONE_ABBREVIATIONS.get(name.upper())
    if iana:
        return ZoneInfo(iana)
    # Bare abbreviations like "EST" exist as legacy zones; only accept region/city names here.
    if "/" in name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass
    raise InvalidTimezoneError(name)

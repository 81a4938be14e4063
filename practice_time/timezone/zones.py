"""
Zone validation and lookup.

Every zone string that reaches date arithmetic goes through ensure_zone()
first. Validation never raises: unknown input walks the fallback chain
(alias table -> configured local zone -> fallback) and logs a warning.
"""

import logging
import os
from functools import lru_cache
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from practice_time.config import FALLBACK_TIMEZONE, get_timezone_settings

logger = logging.getLogger(__name__)

# Standard options for UI dropdowns, in display order
TIMEZONE_OPTIONS: List[Tuple[str, str]] = [
    ("America/New_York", "Eastern Time (ET)"),
    ("America/Chicago", "Central Time (CT)"),
    ("America/Denver", "Mountain Time (MT)"),
    ("America/Los_Angeles", "Pacific Time (PT)"),
    ("America/Anchorage", "Alaska Time"),
    ("Pacific/Honolulu", "Hawaii Time"),
    ("America/Phoenix", "Arizona"),
    ("Europe/London", "London"),
    ("Europe/Paris", "Paris"),
    ("Europe/Berlin", "Berlin"),
    ("Asia/Tokyo", "Tokyo"),
    ("Asia/Shanghai", "Shanghai"),
    ("Australia/Sydney", "Sydney"),
    ("UTC", "UTC"),
]

# Long names used by display_label(); the offset is appended at render time
FRIENDLY_NAMES: Dict[str, str] = {
    "America/New_York": "Eastern Time",
    "America/Chicago": "Central Time",
    "America/Denver": "Mountain Time",
    "America/Los_Angeles": "Pacific Time",
    "America/Anchorage": "Alaska Time",
    "Pacific/Honolulu": "Hawaii Time",
    "America/Phoenix": "Arizona Time",
    "UTC": "UTC",
}

# Abbreviations and loose labels seen in stored profile data. Spellings the
# zone database already knows (EST, MST, HST, GMT) resolve there instead.
_EXTRA_ALIASES: Dict[str, str] = {
    "EDT": "America/New_York",
    "ET": "America/New_York",
    "Eastern": "America/New_York",
    "Eastern Time": "America/New_York",
    "Eastern Standard Time": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "CT": "America/Chicago",
    "Central": "America/Chicago",
    "Central Time": "America/Chicago",
    "Central Standard Time": "America/Chicago",
    "MDT": "America/Denver",
    "MT": "America/Denver",
    "Mountain": "America/Denver",
    "Mountain Time": "America/Denver",
    "Mountain Standard Time": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    "PT": "America/Los_Angeles",
    "Pacific": "America/Los_Angeles",
    "Pacific Time": "America/Los_Angeles",
    "Pacific Standard Time": "America/Los_Angeles",
    "AKST": "America/Anchorage",
    "AKDT": "America/Anchorage",
    "Z": "UTC",
}


def _build_alias_table() -> Dict[str, str]:
    aliases = {label.lower(): value for value, label in TIMEZONE_OPTIONS}
    aliases.update({key.lower(): value for key, value in _EXTRA_ALIASES.items()})
    return aliases


ZONE_ALIASES: Dict[str, str] = _build_alias_table()


def is_valid_zone(name: Optional[str]) -> bool:
    """Return True when the zone database can load ``name``."""
    if not isinstance(name, str) or not name:
        return False
    return _zone_loads(name)


@lru_cache(maxsize=512)
def _zone_loads(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
        return False
    return True


@lru_cache(maxsize=1)
def _zone_names_by_lower() -> Dict[str, str]:
    return {name.lower(): name for name in available_timezones()}


def _canonical_zone(candidate: str) -> Optional[str]:
    """Zone database spelling of ``candidate`` in any letter case ("est" -> "EST")."""
    canonical = _zone_names_by_lower().get(candidate.lower())
    if canonical:
        return canonical
    return candidate if is_valid_zone(candidate) else None


def detect_local_zone() -> Optional[str]:
    """
    Detect the environment's zone from the TZ variable.

    Handles the ":America/Chicago" and "/usr/share/zoneinfo/America/Chicago"
    spellings. Returns None when TZ is unset or does not name a real zone.
    """
    raw = (os.getenv("TZ") or "").strip().lstrip(":")
    if not raw:
        return None
    if "zoneinfo/" in raw:
        raw = raw.split("zoneinfo/", 1)[1]
    return raw if is_valid_zone(raw) else None


def ensure_zone(
    candidate: Optional[str],
    fallback: Optional[str] = None,
    local_zone: Optional[str] = None,
) -> str:
    """
    Return a valid IANA zone identifier for ``candidate``.

    A name the zone database knows wins in any letter case ("est" and "EST"
    both give EST); the alias table only covers names it does not know.

    Args:
        candidate: IANA id, display label ("Eastern Time (ET)"),
            abbreviation ("CDT"), or empty value
        fallback: Zone returned when nothing else resolves; defaults to the
            configured fallback zone
        local_zone: Environment zone tried before ``fallback``; defaults to
            the configured local zone

    Returns:
        A zone identifier that ZoneInfo accepts
    """
    if fallback is None:
        fallback = get_timezone_settings().fallback_timezone
    if not is_valid_zone(fallback):
        logger.warning(f"Fallback timezone '{fallback}' is invalid; using {FALLBACK_TIMEZONE}")
        fallback = FALLBACK_TIMEZONE

    if not isinstance(candidate, str) or not candidate.strip():
        return fallback

    candidate = candidate.strip()
    canonical = _canonical_zone(candidate)
    if canonical:
        return canonical

    mapped = ZONE_ALIASES.get(candidate.lower())
    if mapped and is_valid_zone(mapped):
        logger.debug(f"Mapped timezone alias '{candidate}' to {mapped}")
        return mapped

    if local_zone is None:
        local_zone = get_timezone_settings().local_timezone
    if local_zone and is_valid_zone(local_zone):
        logger.warning(f"Invalid timezone '{candidate}'; using local timezone {local_zone}")
        return local_zone

    logger.warning(f"Invalid timezone '{candidate}'; defaulting to {fallback}")
    return fallback


def get_display_name(zone: Optional[str]) -> str:
    """Return the dropdown label for a zone, or the zone id itself."""
    valid_zone = ensure_zone(zone)
    for value, label in TIMEZONE_OPTIONS:
        if value == valid_zone:
            return label
    return valid_zone


def get_zone_from_display_name(display_name: Optional[str], fallback: Optional[str] = None) -> str:
    """
    Map a dropdown label back to its IANA id.

    Unknown labels resolve like any other invalid candidate, ending at
    ``fallback`` (the configured default zone when omitted).
    """
    if fallback is None:
        fallback = get_timezone_settings().default_timezone
    for value, label in TIMEZONE_OPTIONS:
        if label == display_name:
            return value
    return ensure_zone(display_name, fallback=fallback)

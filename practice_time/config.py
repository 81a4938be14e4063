"""
Application Configuration
Centralized timezone and backend settings loaded from the environment.

Settings are loaded once into a TimezoneSettings instance; call
reload_timezone_settings() after changing environment variables (tests).
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Zone used when a user or clinician has no time zone on file
DEFAULT_TIMEZONE = "America/Chicago"

# Last link of the validator fallback chain
FALLBACK_TIMEZONE = "UTC"

# Supabase profile lookup
PROFILES_TABLE = "profiles"
PROFILE_TIMEZONE_COLUMN = "time_zone"


@dataclass
class TimezoneSettings:
    """Timezone configuration"""
    default_timezone: str = DEFAULT_TIMEZONE
    fallback_timezone: str = FALLBACK_TIMEZONE
    local_timezone: Optional[str] = None
    profiles_table: str = PROFILES_TABLE
    profile_timezone_column: str = PROFILE_TIMEZONE_COLUMN


def _read_env(name: str) -> Optional[str]:
    """Return a stripped environment value, or None when unset or blank"""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_timezone_settings() -> TimezoneSettings:
    """
    Load timezone settings from environment variables

    LOCAL_TIMEZONE wins over the zone detected from TZ. Values are not
    validated here; the zone validator checks them at use.

    Returns:
        TimezoneSettings instance with current configuration
    """
    from practice_time.timezone.zones import detect_local_zone

    settings = TimezoneSettings(
        default_timezone=_read_env("DEFAULT_TIMEZONE") or DEFAULT_TIMEZONE,
        fallback_timezone=_read_env("FALLBACK_TIMEZONE") or FALLBACK_TIMEZONE,
        local_timezone=_read_env("LOCAL_TIMEZONE") or detect_local_zone(),
        profiles_table=_read_env("PROFILES_TABLE") or PROFILES_TABLE,
        profile_timezone_column=_read_env("PROFILE_TIMEZONE_COLUMN") or PROFILE_TIMEZONE_COLUMN,
    )

    logger.info(
        f"Timezone settings loaded: "
        f"default={settings.default_timezone}, "
        f"fallback={settings.fallback_timezone}, "
        f"local={settings.local_timezone}"
    )

    return settings


# Global instance (singleton pattern)
_timezone_settings: Optional[TimezoneSettings] = None


def get_timezone_settings() -> TimezoneSettings:
    """
    Get global timezone settings instance (singleton)

    Returns:
        TimezoneSettings instance
    """
    global _timezone_settings
    if _timezone_settings is None:
        _timezone_settings = load_timezone_settings()
    return _timezone_settings


def reload_timezone_settings() -> TimezoneSettings:
    """
    Reload timezone settings from environment (for testing/debugging)
    """
    global _timezone_settings
    _timezone_settings = load_timezone_settings()
    logger.info("Timezone settings reloaded")
    return _timezone_settings

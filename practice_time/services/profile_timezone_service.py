"""
Profile timezone lookup.

Reads a user's stored zone from the profiles table and runs it through the
zone validator. Lookup failures never propagate: the configured default zone
is returned and the failure is logged.
"""

import logging
from typing import Optional

from supabase import Client

from practice_time.config import get_timezone_settings
from practice_time.timezone.zones import ensure_zone

logger = logging.getLogger(__name__)


def get_user_timezone(user_id: Optional[str], supabase_client: Client) -> str:
    """
    Get the timezone for a specific user.

    Args:
        user_id: Profile ID
        supabase_client: Supabase client instance

    Returns:
        Valid IANA timezone string (e.g., 'America/Chicago')
    """
    settings = get_timezone_settings()
    default_zone = ensure_zone(settings.default_timezone)

    if not user_id:
        return default_zone

    try:
        result = supabase_client.table(settings.profiles_table).select(
            settings.profile_timezone_column
        ).eq('id', user_id).single().execute()
    except Exception as e:
        logger.warning(f"Failed to get timezone for user {user_id}: {e}")
        return default_zone

    stored = (result.data or {}).get(settings.profile_timezone_column)
    if not stored:
        logger.info(f"No timezone on file for user {user_id}; using {default_zone}")
        return default_zone

    return ensure_zone(stored, fallback=default_zone)

"""
Timezone normalization for calendar data.

Zone validation, UTC conversion, display formatting and calendar event
projection. Everything here is synchronous and free of I/O.
"""
from practice_time.timezone.errors import FormatTokenError, ParseError, TimeZoneError
from practice_time.timezone.zones import (
    TIMEZONE_OPTIONS,
    detect_local_zone,
    ensure_zone,
    get_display_name,
    get_zone_from_display_name,
    is_valid_zone,
)
from practice_time.timezone.conversion import (
    UTC,
    add_duration,
    convert,
    convert_time_of_day,
    create_from_parts,
    date_difference,
    from_utc,
    is_same_day,
    localize,
    now_in_zone,
    parse_flexible,
    parse_instant,
    start_of_week,
    to_utc,
    to_utc_iso,
)
from practice_time.timezone.formatting import (
    DisplayFormat,
    common_timezones,
    display_label,
    format_date_range,
    format_duration,
    format_instant,
    month_name,
    offset_label,
    render_local,
    resolve_format,
    time_slot_options,
    weekday_name,
    zone_abbreviation,
)
from practice_time.timezone.events import project_events, project_to_zone

__all__ = [
    "TimeZoneError",
    "ParseError",
    "FormatTokenError",
    "TIMEZONE_OPTIONS",
    "detect_local_zone",
    "ensure_zone",
    "get_display_name",
    "get_zone_from_display_name",
    "is_valid_zone",
    "UTC",
    "add_duration",
    "convert",
    "convert_time_of_day",
    "create_from_parts",
    "date_difference",
    "from_utc",
    "is_same_day",
    "localize",
    "now_in_zone",
    "parse_flexible",
    "parse_instant",
    "start_of_week",
    "to_utc",
    "to_utc_iso",
    "DisplayFormat",
    "common_timezones",
    "display_label",
    "format_date_range",
    "format_duration",
    "format_instant",
    "month_name",
    "offset_label",
    "render_local",
    "resolve_format",
    "time_slot_options",
    "weekday_name",
    "zone_abbreviation",
    "project_events",
    "project_to_zone",
]

"""
Display formatting for instants and zones.

Output uses fixed English templates selected by DisplayFormat; nothing here
consults the process locale, so the same arguments always render the same
string.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Union

from practice_time.timezone.conversion import UTC, InstantInput, from_utc
from practice_time.timezone.errors import FormatTokenError
from practice_time.timezone.zones import FRIENDLY_NAMES, TIMEZONE_OPTIONS, ensure_zone

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Largest unit first; months and years are approximate for relative text
_RELATIVE_UNITS = (
    ("year", 365 * 86400),
    ("month", 30 * 86400),
    ("week", 7 * 86400),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


class DisplayFormat(str, Enum):
    """Closed set of display templates."""
    DATE_ONLY_LONG = "date-only-long"      # May 1, 2025
    DATE_ONLY_SHORT = "date-only-short"    # 5/1/2025
    TIME_12H = "time-12h"                  # 4:00 AM
    TIME_24H = "time-24h"                  # 04:00
    DATETIME_LONG = "datetime-long"        # May 1, 2025, 4:00 AM
    DATETIME_SHORT = "datetime-short"      # 5/1/2025, 4:00 AM
    ISO = "iso"                            # 2025-05-01T04:00:00-05:00
    SQL = "sql"                            # 2025-05-01 04:00:00
    RELATIVE = "relative"                  # in 3 hours / 2 days ago


def resolve_format(token: Union[DisplayFormat, str]) -> DisplayFormat:
    """
    Resolve a token to a DisplayFormat.

    Accepts a member, its value ("time-12h") or its name ("TIME_12H").

    Raises:
        FormatTokenError: for anything else; tokens are never used as
            free-form templates
    """
    if isinstance(token, DisplayFormat):
        return token
    if isinstance(token, str):
        text = token.strip()
        try:
            return DisplayFormat(text.lower())
        except ValueError:
            pass
        member = DisplayFormat.__members__.get(text.upper().replace("-", "_"))
        if member is not None:
            return member
    raise FormatTokenError(token)


def _time_12h(dt: datetime) -> str:
    period = "AM" if dt.hour < 12 else "PM"
    return f"{dt.hour % 12 or 12}:{dt.minute:02d} {period}"


def _date_long(dt: datetime) -> str:
    return f"{MONTH_NAMES[dt.month - 1]} {dt.day}, {dt.year}"


def _date_short(dt: datetime) -> str:
    return f"{dt.month}/{dt.day}/{dt.year}"


def _relative(dt: datetime, reference: datetime) -> str:
    seconds = int((dt - reference).total_seconds())
    if seconds == 0:
        return "just now"

    magnitude = abs(seconds)
    for unit, size in _RELATIVE_UNITS:
        if magnitude >= size:
            count = magnitude // size
            break
    label = f"{count} {unit}{'' if count == 1 else 's'}"
    return f"in {label}" if seconds > 0 else f"{label} ago"


_RENDERERS = {
    DisplayFormat.DATE_ONLY_LONG: _date_long,
    DisplayFormat.DATE_ONLY_SHORT: _date_short,
    DisplayFormat.TIME_12H: _time_12h,
    DisplayFormat.TIME_24H: lambda dt: f"{dt.hour:02d}:{dt.minute:02d}",
    DisplayFormat.DATETIME_LONG: lambda dt: f"{_date_long(dt)}, {_time_12h(dt)}",
    DisplayFormat.DATETIME_SHORT: lambda dt: f"{_date_short(dt)}, {_time_12h(dt)}",
    DisplayFormat.ISO: lambda dt: dt.isoformat(),
    DisplayFormat.SQL: lambda dt: dt.strftime("%Y-%m-%d %H:%M:%S"),
}


def format_instant(
    instant: InstantInput,
    token: Union[DisplayFormat, str] = DisplayFormat.DATETIME_SHORT,
    zone: Optional[str] = "UTC",
    reference: Optional[InstantInput] = None,
) -> str:
    """
    Render an instant in ``zone`` with the template for ``token``.

    Args:
        instant: Instant to render; naive values are read as UTC
        token: DisplayFormat member, value or name
        zone: Display zone
        reference: Point that relative text is measured from; the current
            time when omitted

    Raises:
        FormatTokenError: for an unknown token
        ParseError: for an unreadable instant
    """
    display_format = resolve_format(token)
    local = from_utc(instant, zone)

    if display_format is DisplayFormat.RELATIVE:
        ref = from_utc(reference, zone) if reference is not None else datetime.now(UTC)
        return _relative(local, ref)

    return _RENDERERS[display_format](local)


def render_local(local: datetime, token: Union[DisplayFormat, str]) -> str:
    """Render an aware datetime in its own zone, without projecting it."""
    display_format = resolve_format(token)
    if display_format is DisplayFormat.RELATIVE:
        return _relative(local, datetime.now(UTC))
    return _RENDERERS[display_format](local)


def _format_offset(offset: Optional[timedelta]) -> str:
    total_minutes = int((offset or timedelta()).total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def offset_label(zone: Optional[str], at: Optional[InstantInput] = None) -> str:
    """
    UTC offset of ``zone`` at ``at`` (now by default), e.g. "UTC-05:00".
    """
    moment = at if at is not None else datetime.now(UTC)
    return _format_offset(from_utc(moment, zone).utcoffset())


def zone_abbreviation(zone: Optional[str], at: Optional[InstantInput] = None) -> str:
    """Zone abbreviation in effect at ``at``, e.g. "CDT"."""
    moment = at if at is not None else datetime.now(UTC)
    return from_utc(moment, zone).tzname() or ensure_zone(zone)


def display_label(zone: Optional[str], at: Optional[InstantInput] = None) -> str:
    """
    Human-readable zone name with its offset at ``at``.

    >>> display_label("America/Chicago", "2025-01-15T12:00:00Z")
    'Central Time (UTC-06:00)'
    >>> display_label("America/Sao_Paulo", "2025-01-15T12:00:00Z")
    'Sao Paulo (UTC-03:00)'
    """
    valid_zone = ensure_zone(zone)
    name = FRIENDLY_NAMES.get(valid_zone) or valid_zone.split("/")[-1].replace("_", " ")
    return f"{name} ({offset_label(valid_zone, at)})"


def common_timezones(at: Optional[InstantInput] = None) -> List[Dict[str, str]]:
    """Dropdown options with labels carrying the current offset."""
    return [
        {"value": value, "label": display_label(value, at)}
        for value, _ in TIMEZONE_OPTIONS
    ]


def weekday_name(instant: InstantInput, zone: Optional[str] = "UTC", short: bool = False) -> str:
    """Weekday of ``instant`` in ``zone``: "Thursday", or "Thu" when short."""
    name = WEEKDAY_NAMES[from_utc(instant, zone).weekday()]
    return name[:3] if short else name


def month_name(instant: InstantInput, zone: Optional[str] = "UTC", short: bool = False) -> str:
    """Month of ``instant`` in ``zone``: "September", or "Sep" when short."""
    name = MONTH_NAMES[from_utc(instant, zone).month - 1]
    return name[:3] if short else name


def format_date_range(
    start: InstantInput,
    end: InstantInput,
    zone: Optional[str] = "UTC",
    include_year: bool = True,
) -> str:
    """
    Compact date range, e.g. "May 1 - 5, 2025" or "Dec 30, 2024 - Jan 2, 2025".
    """
    first = from_utc(start, zone)
    last = from_utc(end, zone)

    first_label = f"{MONTH_NAMES[first.month - 1][:3]} {first.day}"
    last_label = f"{MONTH_NAMES[last.month - 1][:3]} {last.day}"

    if first.year != last.year:
        return f"{first_label}, {first.year} - {last_label}, {last.year}"

    year_suffix = f", {first.year}" if include_year else ""
    if first.month == last.month:
        day_suffix = f" - {last.day}" if first.day != last.day else ""
        return f"{first_label}{day_suffix}{year_suffix}"
    return f"{first_label} - {last_label}{year_suffix}"


def format_duration(duration_minutes: int, style: str = "long") -> str:
    """
    Format a duration in minutes.

    Styles: "long" (2 hours 30 minutes), "short" (2 hrs 30 min),
    "compact" (2h 30m).
    """
    if duration_minutes < 0:
        raise ValueError(f"Duration must not be negative, got {duration_minutes}")

    hours, minutes = divmod(int(duration_minutes), 60)

    if style == "compact":
        if hours:
            return f"{hours}h" + (f" {minutes}m" if minutes else "")
        return f"{minutes}m"

    if style == "short":
        if hours:
            return f"{hours} hr{'s' if hours != 1 else ''}" + (f" {minutes} min" if minutes else "")
        return f"{minutes} min"

    if style == "long":
        minute_text = f"{minutes} minute{'s' if minutes != 1 else ''}"
        if hours:
            hour_text = f"{hours} hour{'s' if hours != 1 else ''}"
            return f"{hour_text} {minute_text}" if minutes else hour_text
        return minute_text

    raise ValueError(f"Unsupported duration style: {style}")


def time_slot_options(interval: int = 30, is_24_hour: bool = False) -> List[Dict[str, str]]:
    """
    Time-of-day options for a dropdown, one every ``interval`` minutes.

    Values are always "HH:MM"; labels follow the requested clock.
    """
    if interval <= 0:
        raise ValueError(f"Interval must be positive, got {interval}")

    options = []
    for minutes in range(0, 24 * 60, interval):
        hour, minute = divmod(minutes, 60)
        value = f"{hour:02d}:{minute:02d}"
        if is_24_hour:
            label = value
        else:
            label = f"{hour % 12 or 12}:{minute:02d} {'AM' if hour < 12 else 'PM'}"
        options.append({"value": value, "label": label})
    return options

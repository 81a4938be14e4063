"""
Timezone conversion functions.

All results are timezone-aware datetimes. Wall-clock digits without an
offset are only ever interpreted in a zone the caller names explicitly.

DST policy for wall-clock times that do not map to exactly one instant:

- Ambiguous (fall back, the time occurs twice): the later occurrence, which
  carries the standard-time offset. 2024-11-03 01:30 America/Chicago is
  01:30 CST = 07:30 UTC.
- Non-existent (spring forward gap): shifted forward by the length of the
  gap. 2024-03-10 02:30 America/Chicago becomes 03:30 CDT = 08:30 UTC.
"""

import logging
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from dateutil import parser
from dateutil.relativedelta import relativedelta

from practice_time.config import get_timezone_settings
from practice_time.timezone.errors import ParseError
from practice_time.timezone.zones import ensure_zone

logger = logging.getLogger(__name__)

UTC = ZoneInfo("UTC")

InstantInput = Union[datetime, date, str, int, float]

# Shape of time-of-day text; dateutil does the actual parsing
_TIME_SHAPE_RE = re.compile(
    r"^\s*(\d{1,2})(?::(\d{2}))?(?::(\d{2}))?\s*(?:([AaPp])\.?\s*[Mm]?\.?)?\s*$"
)
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_US_DATE_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")
_EU_DATE_RE = re.compile(r"^\s*(\d{1,2})\.(\d{1,2})\.(\d{4})\s*$")
_YEAR_RE = re.compile(r"\d{4}")

# Units add_duration() applies to wall-clock time rather than elapsed time
_CALENDAR_UNITS = ("years", "months", "weeks", "days")
_ELAPSED_UNITS = ("hours", "minutes", "seconds", "microseconds")

# Seconds per unit for date_difference()
_DIFFERENCE_UNITS = {
    "weeks": 7 * 86400,
    "days": 86400,
    "hours": 3600,
    "minutes": 60,
    "seconds": 1,
}


def localize(naive: datetime, zone: Optional[str]) -> datetime:
    """
    Attach a zone to wall-clock digits using the module DST policy.

    Args:
        naive: Wall-clock datetime (any tzinfo is ignored)
        zone: Zone the digits belong to

    Returns:
        Timezone-aware datetime
    """
    tz = ZoneInfo(ensure_zone(zone))
    wall = naive.replace(tzinfo=None, fold=0)
    earlier = wall.replace(tzinfo=tz, fold=0)
    later = wall.replace(tzinfo=tz, fold=1)

    if earlier.utcoffset() == later.utcoffset():
        return earlier

    # Offsets differ for fold=0/1: either a repeated hour or a skipped one
    roundtrip = earlier.astimezone(UTC).astimezone(tz).replace(tzinfo=None)
    if roundtrip == wall:
        logger.debug(f"Ambiguous time {wall.isoformat()} in {tz.key}; using later occurrence")
        return later

    shifted = earlier.astimezone(tz)
    logger.debug(
        f"Non-existent time {wall.isoformat()} in {tz.key}; shifted to {shifted.isoformat()}"
    )
    return shifted


def parse_instant(value: InstantInput, zone: Optional[str] = "UTC") -> datetime:
    """
    Parse an instant into a timezone-aware datetime.

    Accepts aware or naive datetimes, dates (midnight), ISO-8601 strings with
    or without an offset or ``Z`` suffix, and epoch seconds. Anything without
    an offset is wall-clock time in ``zone``.

    Raises:
        ParseError: if ``value`` cannot be read as an instant
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return value
        return localize(value, zone)

    if isinstance(value, date):
        return localize(datetime.combine(value, time()), zone)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise ParseError(f"Invalid epoch timestamp: {value}", {"value": value}) from e

    if not isinstance(value, str):
        raise ParseError(f"Unsupported instant type: {type(value).__name__}", {"value": repr(value)})

    text = value.strip()
    if not text:
        raise ParseError("Empty timestamp", {"value": value})

    # isoparse takes what Postgres emits: "+00" offsets, 1-6 fraction digits
    try:
        parsed = parser.isoparse(text)
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Invalid ISO timestamp: {value}", {"value": value}) from e

    if parsed.tzinfo is None:
        return localize(parsed, zone)
    return _fixed_offset(parsed)


def _fixed_offset(parsed: datetime) -> datetime:
    """Swap a dateutil tzinfo for the equivalent datetime.timezone offset."""
    return parsed.replace(tzinfo=timezone(parsed.utcoffset()))


def to_utc(instant: InstantInput, zone: Optional[str] = "UTC") -> datetime:
    """
    Convert an instant to UTC.

    Args:
        instant: Instant to convert; values without an offset are wall-clock
            time in ``zone``
        zone: Source zone for wall-clock values

    Returns:
        The same moment tagged with UTC
    """
    return parse_instant(instant, zone).astimezone(UTC)


def from_utc(instant_utc: InstantInput, target_zone: Optional[str]) -> datetime:
    """
    Convert a UTC instant to the target zone.

    Naive input is treated as UTC. ``target_zone`` is validated first.
    """
    target = ZoneInfo(ensure_zone(target_zone))
    return parse_instant(instant_utc, "UTC").astimezone(target)


def convert(instant: InstantInput, source_zone: Optional[str], target_zone: Optional[str]) -> datetime:
    """
    Convert an instant from ``source_zone`` to ``target_zone``.

    Instants that carry an offset keep their absolute moment; wall-clock
    values are read in ``source_zone``.
    """
    return from_utc(to_utc(instant, ensure_zone(source_zone)), target_zone)


def _parse_date_part(date_part: Union[str, date]) -> date:
    if isinstance(date_part, datetime):
        return date_part.date()
    if isinstance(date_part, date):
        return date_part
    if not isinstance(date_part, str) or not _ISO_DATE_RE.match(date_part.strip()):
        raise ParseError(f"Invalid date: {date_part!r}", {"date": date_part})

    # Strict ISO; parser.parse would silently swap "2025-13-01" into January 13
    try:
        return parser.isoparse(date_part.strip()).date()
    except ValueError as e:
        raise ParseError(f"Invalid date: {date_part!r}", {"date": date_part}) from e


def _parse_time_part(time_part: str, day: date) -> datetime:
    match = _TIME_SHAPE_RE.match(time_part) if isinstance(time_part, str) else None
    if not match:
        raise ParseError(f"Invalid time: {time_part!r}", {"time": time_part})

    hour, minute, second, meridiem = match.groups()
    if meridiem and not 1 <= int(hour) <= 12:
        raise ParseError(f"Invalid 12-hour time: {time_part!r}", {"time": time_part})

    # "7 a.m." -> "7:00:00 AM"
    text = f"{hour}:{minute or '00'}:{second or '00'}"
    if meridiem:
        text += f" {meridiem.upper()}M"

    try:
        return parser.parse(text, default=datetime.combine(day, time()))
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Invalid time: {time_part!r}", {"time": time_part}) from e


def create_from_parts(date_part: Union[str, date], time_part: str, zone: Optional[str]) -> datetime:
    """
    Build an instant from separate date and time text.

    Args:
        date_part: "YYYY-MM-DD"
        time_part: "HH:MM", "HH:MM:SS", "h:mm AM/PM" or "h AM/PM"
        zone: Zone the wall-clock time belongs to

    Raises:
        ParseError: if either part is malformed
    """
    day = _parse_date_part(date_part)
    return localize(_parse_time_part(time_part, day), zone)


def parse_flexible(text: Optional[str], zone: Optional[str] = "UTC") -> Optional[datetime]:
    """
    Parse date text in whatever shape the backend or a user typed it.

    Tries ISO-8601 / SQL first, then US "MM/DD/YYYY", EU "DD.MM.YYYY", and
    finally free text such as HTTP dates ("Thu, 01 May 2025 09:00:00 GMT").
    Values without an offset are wall-clock time in ``zone``.

    Returns:
        Timezone-aware datetime, or None when nothing matches
    """
    if not isinstance(text, str) or not text.strip():
        return None
    valid_zone = ensure_zone(zone)

    try:
        return parse_instant(text, valid_zone)
    except ParseError:
        pass

    numeric = _US_DATE_RE.match(text)
    if numeric:
        month, day, year = (int(part) for part in numeric.groups())
    else:
        numeric = _EU_DATE_RE.match(text)
        if numeric:
            day, month, year = (int(part) for part in numeric.groups())
    if numeric:
        try:
            return localize(datetime(year, month, day), valid_zone)
        except ValueError:
            logger.debug(f"Rejected out-of-range date {text!r}")
            return None

    # Free text without a year would be filled in from today's date
    if not _YEAR_RE.search(text):
        return None
    try:
        parsed = parser.parse(text)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Could not parse date {text!r}: {e}")
        return None

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        return localize(parsed, valid_zone)
    return _fixed_offset(parsed)


def to_utc_iso(instant: InstantInput, zone: Optional[str] = "UTC") -> str:
    """Return the UTC storage string for an instant, e.g. 2025-05-01T09:00:00Z."""
    return to_utc(instant, zone).isoformat().replace("+00:00", "Z")


def now_in_zone(zone: Optional[str] = None) -> datetime:
    """
    Get current time in specified timezone.

    Args:
        zone: Timezone string; the configured default zone when omitted
    """
    if zone is None:
        zone = get_timezone_settings().default_timezone
    return datetime.now(ZoneInfo(ensure_zone(zone)))


def convert_time_of_day(
    time_text: str,
    source_zone: Optional[str],
    target_zone: Optional[str],
    on_date: Optional[date] = None,
) -> str:
    """
    Convert a wall-clock time ("14:30") between zones on a given day.

    ``on_date`` defaults to today in the source zone; the result depends on
    the date whenever the two zones observe DST differently.
    """
    source = ensure_zone(source_zone)
    if on_date is None:
        on_date = now_in_zone(source).date()
    local = create_from_parts(on_date, time_text, source)
    return from_utc(local, target_zone).strftime("%H:%M")


def is_same_day(first: InstantInput, second: InstantInput, zone: Optional[str] = "UTC") -> bool:
    """Check whether two instants fall on the same calendar day in ``zone``."""
    return from_utc(first, zone).date() == from_utc(second, zone).date()


def start_of_week(instant: InstantInput, week_starts_on: int = 0, zone: Optional[str] = "UTC") -> datetime:
    """
    Midnight at the start of the week containing ``instant`` in ``zone``.

    Args:
        week_starts_on: 0 = Sunday ... 6 = Saturday
    """
    if not 0 <= week_starts_on <= 6:
        raise ValueError(f"week_starts_on must be between 0 and 6, got {week_starts_on}")

    valid_zone = ensure_zone(zone)
    local = from_utc(parse_instant(instant, valid_zone), valid_zone)
    current_day = local.isoweekday() % 7
    diff = (current_day + 7 - week_starts_on) % 7
    first_day = local.date() - timedelta(days=diff)
    return localize(datetime.combine(first_day, time()), valid_zone)


def _zone_key(tz: Optional[tzinfo]) -> Optional[str]:
    return getattr(tz, "key", None)


def _normalize_unit(unit: str) -> str:
    """Map "Month", "months" and "MONTHS" to the same unit name."""
    if not isinstance(unit, str):
        raise ValueError(f"Unsupported duration unit: {unit!r}")
    unit = unit.strip().lower()
    return unit if unit.endswith("s") else unit + "s"


def add_duration(instant: InstantInput, amount: int, unit: str, zone: Optional[str] = "UTC") -> datetime:
    """
    Add ``amount`` of ``unit`` to an instant.

    Years, quarters, months, weeks and days move the wall clock (09:00 stays
    09:00 across a DST change, Jan 31 + 1 month is Feb 28); hours, minutes,
    seconds and milliseconds move elapsed time.

    Raises:
        ValueError: for an unknown unit, or a fractional year/month amount
    """
    dt = parse_instant(instant, zone)
    unit = _normalize_unit(unit)
    if unit == "quarters":
        unit, amount = "months", amount * 3
    elif unit == "milliseconds":
        unit, amount = "microseconds", amount * 1000

    if unit in _ELAPSED_UNITS:
        return (dt.astimezone(UTC) + relativedelta(**{unit: amount})).astimezone(dt.tzinfo)

    if unit in _CALENDAR_UNITS:
        shifted = dt.replace(tzinfo=None) + relativedelta(**{unit: amount})
        key = _zone_key(dt.tzinfo)
        if key is None:
            # Fixed offsets have no DST to re-resolve
            return shifted.replace(tzinfo=dt.tzinfo)
        return localize(shifted, key)

    raise ValueError(f"Unsupported duration unit: {unit}")


def date_difference(
    start: InstantInput,
    end: InstantInput,
    unit: str = "days",
    zone: Optional[str] = "UTC",
) -> float:
    """
    Elapsed time from ``start`` to ``end`` in ``unit``.

    Negative when ``end`` is before ``start``. Offset-less values are read
    in ``zone``.

    Args:
        unit: weeks, days, hours, minutes or seconds
    """
    unit = _normalize_unit(unit)
    if unit not in _DIFFERENCE_UNITS:
        raise ValueError(f"Unsupported difference unit: {unit}")
    elapsed = to_utc(end, zone) - to_utc(start, zone)
    return elapsed.total_seconds() / _DIFFERENCE_UNITS[unit]

"""
Calendar event adapter.

Projects calendar records into a viewer's zone and precomputes the display
strings the calendar views render. Records are never mutated; a record that
cannot be projected is returned as-is so one bad row does not break a list.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from practice_time.schemas.calendar import CalendarEvent, EventDisplay
from practice_time.timezone.conversion import from_utc, parse_instant
from practice_time.timezone.errors import ParseError
from practice_time.timezone.formatting import MONTH_NAMES, WEEKDAY_NAMES, DisplayFormat, render_local
from practice_time.timezone.zones import ensure_zone

logger = logging.getLogger(__name__)

CalendarRecord = Union[CalendarEvent, Mapping[str, Any]]


def _record_data(record: CalendarRecord) -> Dict[str, Any]:
    if isinstance(record, CalendarEvent):
        return record.model_dump()
    return dict(record)


def project_to_zone(record: CalendarRecord, target_zone: Optional[str]) -> CalendarRecord:
    """
    Return a copy of ``record`` projected into ``target_zone``.

    Start/end become ISO strings in the target zone and extended_props (or
    extendedProps, whichever the record carries) gains timezone,
    display_start, display_end, display_day and display_date.
    All-day records keep their dates and only gain the display fields.

    Args:
        record: CalendarEvent or mapping with start/end and an optional
            ``timezone`` naming the zone of offset-less values
        target_zone: Viewer's zone

    Returns:
        A new record of the same kind, or ``record`` itself when start or
        end is missing or unparsable, or extended props is not a mapping
    """
    data = _record_data(record)
    record_id = data.get("id")
    start, end = data.get("start"), data.get("end")

    if not start or not end:
        logger.warning(f"Calendar record {record_id} has no start/end; leaving it unprojected")
        return record

    # Merge into the key the record already uses
    props_key = "extended_props"
    if "extendedProps" in data and "extended_props" not in data:
        props_key = "extendedProps"
    props = data.get(props_key) or {}
    if not isinstance(props, Mapping):
        logger.warning(
            f"Calendar record {record_id} has non-mapping {props_key} "
            f"({type(props).__name__}); leaving it unprojected"
        )
        return record

    source_zone = ensure_zone(data.get("timezone"))
    try:
        start_dt = parse_instant(start, source_zone)
        end_dt = parse_instant(end, source_zone)
    except ParseError as e:
        logger.warning(f"Calendar record {record_id} has unparsable times ({e}); leaving it unprojected")
        return record

    valid_zone = ensure_zone(target_zone)
    all_day = bool(data.get("all_day") or data.get("allDay"))

    if all_day:
        local_start, local_end = start_dt, end_dt
        updates: Dict[str, Any] = {}
    else:
        local_start = from_utc(start_dt, valid_zone)
        local_end = from_utc(end_dt, valid_zone)
        updates = {"start": local_start.isoformat(), "end": local_end.isoformat()}

    display = EventDisplay(
        timezone=valid_zone,
        display_start=render_local(local_start, DisplayFormat.TIME_12H),
        display_end=render_local(local_end, DisplayFormat.TIME_12H),
        display_day=WEEKDAY_NAMES[local_start.weekday()][:3],
        display_date=f"{MONTH_NAMES[local_start.month - 1][:3]} {local_start.day}",
    )
    updates[props_key] = {**props, **display.model_dump()}

    if isinstance(record, CalendarEvent):
        return record.model_copy(update=updates)
    return {**data, **updates}


def project_events(records: Iterable[CalendarRecord], target_zone: Optional[str]) -> List[CalendarRecord]:
    """Project a batch of records; unprojectable records pass through unchanged."""
    valid_zone = ensure_zone(target_zone)
    return [project_to_zone(record, valid_zone) for record in records]

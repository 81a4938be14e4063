"""
Tests for the calendar event adapter
"""

import copy
import logging
from datetime import datetime

from practice_time.schemas.calendar import CalendarEvent
from practice_time.timezone.events import project_events, project_to_zone
from tests.fixtures import TEST_CLINICIAN_ID, create_test_event


class TestProjectToZone:
    """Test projecting single records"""

    def test_projects_into_target_zone(self):
        record = {"start": "2025-05-01T09:00:00Z", "end": "2025-05-01T10:00:00Z"}

        projected = project_to_zone(record, "America/New_York")

        assert projected["start"] == "2025-05-01T05:00:00-04:00"
        assert projected["end"] == "2025-05-01T06:00:00-04:00"
        assert projected["extended_props"] == {
            "timezone": "America/New_York",
            "display_start": "5:00 AM",
            "display_end": "6:00 AM",
            "display_day": "Thu",
            "display_date": "May 1",
        }

    def test_input_is_not_mutated(self):
        record = create_test_event()
        snapshot = copy.deepcopy(record)

        projected = project_to_zone(record, "America/Chicago")

        assert record == snapshot
        assert projected is not record
        assert projected["extended_props"]["clinician_id"] == TEST_CLINICIAN_ID
        assert projected["extended_props"]["display_start"] == "4:00 AM"
        assert projected["title"] == "Intake Session"

    def test_declared_source_zone_for_wall_clock_times(self):
        record = create_test_event(
            start="2025-05-01 09:00",
            end="2025-05-01 10:30",
            timezone="America/Chicago",
        )

        projected = project_to_zone(record, "America/New_York")

        assert projected["extended_props"]["display_start"] == "10:00 AM"
        assert projected["extended_props"]["display_end"] == "11:30 AM"

    def test_naive_datetimes_are_utc(self):
        record = create_test_event(start=datetime(2025, 5, 1, 9), end=datetime(2025, 5, 1, 10))

        projected = project_to_zone(record, "America/New_York")

        assert projected["extended_props"]["display_start"] == "5:00 AM"

    def test_day_and_date_follow_target_zone(self):
        record = create_test_event(start="2025-05-01T02:00:00Z", end="2025-05-01T03:00:00Z")

        projected = project_to_zone(record, "America/Los_Angeles")

        assert projected["extended_props"]["display_day"] == "Wed"
        assert projected["extended_props"]["display_date"] == "Apr 30"

    def test_all_day_keeps_dates(self):
        record = create_test_event(start="2025-05-01", end="2025-05-02", all_day=True)

        projected = project_to_zone(record, "America/Los_Angeles")

        assert projected["start"] == "2025-05-01"
        assert projected["end"] == "2025-05-02"
        assert projected["extended_props"]["display_date"] == "May 1"
        assert projected["extended_props"]["display_day"] == "Thu"
        assert projected["extended_props"]["timezone"] == "America/Los_Angeles"

    def test_invalid_target_zone_falls_back(self):
        projected = project_to_zone(create_test_event(), "not-a-zone")

        assert projected["extended_props"]["timezone"] == "UTC"
        assert projected["extended_props"]["display_start"] == "9:00 AM"

    def test_missing_end_returns_original(self, caplog):
        record = {"id": "evt-1", "start": "2025-05-01T09:00:00Z"}

        with caplog.at_level(logging.WARNING, logger="practice_time.timezone.events"):
            projected = project_to_zone(record, "America/Chicago")

        assert projected is record
        assert "evt-1" in caplog.text

    def test_unparsable_start_returns_original(self, caplog):
        record = create_test_event(id="evt-2", start="next tuesday")

        with caplog.at_level(logging.WARNING, logger="practice_time.timezone.events"):
            projected = project_to_zone(record, "America/Chicago")

        assert projected is record
        assert "unparsable" in caplog.text

    def test_non_mapping_props_returns_original(self, caplog):
        record = create_test_event(id="evt-6", extended_props="x")

        with caplog.at_level(logging.WARNING, logger="practice_time.timezone.events"):
            projected = project_to_zone(record, "America/Chicago")

        assert projected is record
        assert "non-mapping" in caplog.text

    def test_camel_case_props_are_merged(self):
        record = {
            "id": "evt-7",
            "start": "2025-05-01T09:00:00Z",
            "end": "2025-05-01T10:00:00Z",
            "extendedProps": {"clientName": "A"},
        }

        projected = project_to_zone(record, "America/New_York")

        assert "extended_props" not in projected
        assert projected["extendedProps"]["clientName"] == "A"
        assert projected["extendedProps"]["display_start"] == "5:00 AM"
        assert record["extendedProps"] == {"clientName": "A"}

    def test_snake_case_props_win_when_both_present(self):
        record = {**create_test_event(), "extendedProps": {"clientName": "A"}}

        projected = project_to_zone(record, "America/New_York")

        assert projected["extended_props"]["display_start"] == "5:00 AM"
        assert projected["extendedProps"] == {"clientName": "A"}


class TestProjectCalendarEventModel:
    """Test projecting pydantic CalendarEvent records"""

    def test_returns_new_model(self):
        event = CalendarEvent(
            id="evt-3",
            start="2025-05-01T09:00:00Z",
            end="2025-05-01T10:00:00Z",
            extended_props={"status": "scheduled"},
            clinician_id="c-1",
        )

        projected = project_to_zone(event, "America/New_York")

        assert isinstance(projected, CalendarEvent)
        assert projected is not event
        assert projected.start == "2025-05-01T05:00:00-04:00"
        assert projected.extended_props["display_start"] == "5:00 AM"
        assert projected.extended_props["status"] == "scheduled"
        assert projected.clinician_id == "c-1"

    def test_model_is_not_mutated(self):
        event = CalendarEvent(id="evt-4", start="2025-05-01T09:00:00Z", end="2025-05-01T10:00:00Z")

        project_to_zone(event, "America/New_York")

        assert event.extended_props == {}
        assert event.start == "2025-05-01T09:00:00Z"

    def test_model_without_times_returned_as_is(self):
        event = CalendarEvent(id="evt-5")
        assert project_to_zone(event, "America/New_York") is event


class TestProjectEvents:
    """Test batch projection"""

    def test_bad_record_does_not_break_batch(self):
        good = create_test_event(id="a")
        bad = create_test_event(id="b", start="garbage", end="garbage")
        other = create_test_event(id="c", start="2025-05-01T15:00:00Z", end="2025-05-01T16:00:00Z")

        projected = project_events([good, bad, other], "America/Chicago")

        assert len(projected) == 3
        assert projected[0]["extended_props"]["display_start"] == "4:00 AM"
        assert projected[1] is bad
        assert projected[2]["extended_props"]["display_start"] == "10:00 AM"

    def test_empty_batch(self):
        assert project_events([], "America/Chicago") == []

    def test_non_mapping_props_pass_through_batch(self):
        bad = create_test_event(id="b", extended_props=["not", "a", "mapping"])

        projected = project_events([create_test_event(id="a"), bad], "America/Chicago")

        assert projected[0]["extended_props"]["display_start"] == "4:00 AM"
        assert projected[1] is bad

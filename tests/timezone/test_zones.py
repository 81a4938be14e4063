"""
Tests for zone validation and lookup
"""

import logging
from zoneinfo import available_timezones

import pytest

from practice_time.config import reload_timezone_settings
from practice_time.timezone.conversion import from_utc
from practice_time.timezone.zones import (
    TIMEZONE_OPTIONS,
    ZONE_ALIASES,
    detect_local_zone,
    ensure_zone,
    get_display_name,
    get_zone_from_display_name,
    is_valid_zone,
)


class TestIsValidZone:
    """Test raw zone database checks"""

    def test_real_zones(self):
        assert is_valid_zone("America/Chicago") is True
        assert is_valid_zone("UTC") is True
        assert is_valid_zone("Asia/Kolkata") is True

    def test_rejects_garbage(self):
        assert is_valid_zone("garbage123") is False
        assert is_valid_zone("Eastern Time (ET)") is False
        assert is_valid_zone("") is False
        assert is_valid_zone(None) is False

    def test_unhashable_values(self):
        assert is_valid_zone(["UTC"]) is False
        assert is_valid_zone({"zone": "UTC"}) is False

    def test_rejects_path_like_keys(self):
        assert is_valid_zone("../../etc/passwd") is False
        assert is_valid_zone("/etc/localtime") is False

    def test_alias_targets_are_real_zones(self):
        for zone in ZONE_ALIASES.values():
            assert is_valid_zone(zone), zone
        for zone, _ in TIMEZONE_OPTIONS:
            assert is_valid_zone(zone), zone


class TestEnsureZone:
    """Test the validator fallback chain"""

    def test_valid_zone_returned_unchanged(self):
        assert ensure_zone("America/Chicago") == "America/Chicago"
        assert ensure_zone("Europe/Berlin") == "Europe/Berlin"

    def test_whitespace_is_stripped(self):
        assert ensure_zone("  America/Chicago  ") == "America/Chicago"

    def test_display_label(self):
        assert ensure_zone("Eastern Time (ET)") == "America/New_York"
        assert ensure_zone("Pacific Time (PT)") == "America/Los_Angeles"

    def test_display_label_is_case_insensitive(self):
        assert ensure_zone("eastern time (et)") == "America/New_York"

    def test_abbreviations(self):
        assert ensure_zone("PDT") == "America/Los_Angeles"
        assert ensure_zone("CDT") == "America/Chicago"
        assert ensure_zone("cst") == "America/Chicago"
        assert ensure_zone("AKDT") == "America/Anchorage"

    def test_case_slip_in_iana_id(self):
        assert ensure_zone("america/chicago") == "America/Chicago"

    @pytest.mark.parametrize("candidate", [None, "", "   "])
    def test_empty_values_use_fallback(self, candidate):
        assert ensure_zone(candidate) == "UTC"
        assert ensure_zone(candidate, fallback="America/Denver") == "America/Denver"

    def test_unknown_zone_defaults_to_utc(self):
        assert ensure_zone("not-a-zone") == "UTC"

    def test_unknown_zone_uses_explicit_fallback(self):
        assert ensure_zone("not-a-zone", fallback="America/Denver") == "America/Denver"

    def test_unknown_zone_prefers_local_zone(self):
        assert ensure_zone("not-a-zone", local_zone="Europe/Berlin") == "Europe/Berlin"

    def test_invalid_local_zone_is_skipped(self):
        assert ensure_zone("not-a-zone", local_zone="Mars/Olympus_Mons") == "UTC"

    def test_invalid_fallback_becomes_utc(self):
        assert ensure_zone(None, fallback="garbage") == "UTC"
        assert ensure_zone("not-a-zone", fallback="garbage") == "UTC"

    def test_configured_local_zone(self, monkeypatch):
        monkeypatch.setenv("LOCAL_TIMEZONE", "Asia/Tokyo")
        reload_timezone_settings()

        assert ensure_zone("garbage123") == "Asia/Tokyo"
        # Valid input still wins over the local zone
        assert ensure_zone("America/Chicago") == "America/Chicago"

    @pytest.mark.parametrize("lower, canonical", [
        ("est", "EST"),
        ("EST", "EST"),
        ("gmt", "GMT"),
        ("utc", "UTC"),
        ("europe/london", "Europe/London"),
    ])
    def test_database_names_in_any_case(self, lower, canonical):
        assert ensure_zone(lower) == canonical

    def test_aliases_never_shadow_database_names(self):
        names = {name.lower(): name for name in available_timezones()}
        for alias, target in ZONE_ALIASES.items():
            assert names.get(alias, target) == target, alias

    def test_configured_fallback(self, monkeypatch):
        monkeypatch.setenv("FALLBACK_TIMEZONE", "Europe/London")
        reload_timezone_settings()

        assert ensure_zone("garbage") == "Europe/London"
        assert ensure_zone(None) == "Europe/London"
        assert from_utc("2025-07-01T12:00:00Z", "garbage").hour == 13
        # An explicit fallback still wins
        assert ensure_zone("garbage", fallback="Asia/Tokyo") == "Asia/Tokyo"

    def test_invalid_configured_fallback_becomes_utc(self, monkeypatch):
        monkeypatch.setenv("FALLBACK_TIMEZONE", "Nowhere/Special")
        reload_timezone_settings()

        assert ensure_zone("garbage") == "UTC"

    @pytest.mark.parametrize("fallback", [["UTC"], {"zone": "UTC"}, 42])
    def test_unusable_fallback_type(self, fallback):
        assert ensure_zone("garbage", fallback=fallback) == "UTC"
        assert ensure_zone(None, fallback=fallback) == "UTC"

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="practice_time.timezone.zones"):
            ensure_zone("not-a-zone")

        assert "Invalid timezone 'not-a-zone'" in caplog.text

    @pytest.mark.parametrize("candidate", [
        "",
        None,
        "garbage123",
        "America/Chicago",
        "Eastern Time (ET)",
        "../../etc/passwd",
        "UTC+5",
        42,
    ])
    def test_result_is_always_a_real_zone(self, candidate):
        assert is_valid_zone(ensure_zone(candidate))


class TestDetectLocalZone:
    """Test TZ environment detection"""

    def test_unset(self):
        assert detect_local_zone() is None

    def test_plain_zone(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/Phoenix")
        assert detect_local_zone() == "America/Phoenix"

    def test_colon_prefix(self, monkeypatch):
        monkeypatch.setenv("TZ", ":America/Phoenix")
        assert detect_local_zone() == "America/Phoenix"

    def test_zoneinfo_path(self, monkeypatch):
        monkeypatch.setenv("TZ", "/usr/share/zoneinfo/Europe/London")
        assert detect_local_zone() == "Europe/London"

    def test_bogus_value(self, monkeypatch):
        monkeypatch.setenv("TZ", "bogus")
        assert detect_local_zone() is None


class TestDisplayNames:
    """Test dropdown label lookups"""

    def test_known_zone_label(self):
        assert get_display_name("America/Chicago") == "Central Time (CT)"

    def test_unknown_zone_label_is_id(self):
        assert get_display_name("Asia/Kolkata") == "Asia/Kolkata"

    def test_label_to_zone(self):
        assert get_zone_from_display_name("Hawaii Time") == "Pacific/Honolulu"
        assert get_zone_from_display_name("Arizona") == "America/Phoenix"

    def test_unknown_label_uses_default_zone(self):
        assert get_zone_from_display_name("Somewhere Time") == "America/Chicago"

    def test_unknown_label_with_explicit_fallback(self):
        assert get_zone_from_display_name("Somewhere Time", fallback="UTC") == "UTC"

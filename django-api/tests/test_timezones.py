"""Unit tests for TimezoneService.

Run with: pytest tests/test_timezones.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from scheduling.domain.errors import InvalidTimezoneError
from scheduling.services import TimezoneService

ZONES = [
    "UTC",
    "Asia/Kolkata",
    "America/New_York",
    "Europe/London",
    "Australia/Lord_Howe",
    "Asia/Kathmandu",
    "Pacific/Chatham",
]


class TestZoneList:
    """Tests for the canonical zone list."""

    def test_contains_common_zones(self, timezones: TimezoneService):
        zones = timezones.list_zones()
        assert {"UTC", "Asia/Kolkata", "America/New_York"} <= zones

    def test_utc_always_present(self):
        assert TimezoneService(zones=["Asia/Kolkata"]).list_zones() == {"Asia/Kolkata", "UTC"}

    def test_is_valid_zone(self, timezones: TimezoneService):
        assert timezones.is_valid_zone("Europe/Berlin")
        assert not timezones.is_valid_zone("Mars/Olympus_Mons")
        assert not timezones.is_valid_zone("")
        assert not timezones.is_valid_zone(None)

    @pytest.mark.parametrize("zone", ["Mars/Olympus_Mons", "", None, "+05:30"])
    def test_validate_zone_rejects_unknown(self, timezones: TimezoneService, zone):
        with pytest.raises(InvalidTimezoneError):
            timezones.validate_zone(zone)

    def test_to_zone_rejects_unknown(self, timezones: TimezoneService):
        with pytest.raises(InvalidTimezoneError):
            timezones.to_zone(datetime(2025, 1, 1, tzinfo=timezone.utc), "Nowhere/City")


class TestProjection:
    """Tests for projecting instants between zones."""

    def test_kolkata_projection(self, timezones: TimezoneService):
        start = datetime(2025, 10, 18, 10, 0, tzinfo=timezone.utc)
        assert timezones.format_local(start, "Asia/Kolkata") == "2025-10-18T15:30:00+05:30"

    def test_dst_resolved_at_the_instant(self, timezones: TimezoneService):
        winter = datetime(2025, 1, 15, 17, 0, tzinfo=timezone.utc)
        summer = datetime(2025, 7, 15, 17, 0, tzinfo=timezone.utc)
        assert timezones.format_local(winter, "America/New_York") == "2025-01-15T12:00:00-05:00"
        assert timezones.format_local(summer, "America/New_York") == "2025-07-15T13:00:00-04:00"

    def test_projection_across_spring_forward(self, timezones: TimezoneService):
        # 2025-03-09 02:00 local does not exist in New York.
        before = datetime(2025, 3, 9, 6, 59, tzinfo=timezone.utc)
        after = before + timedelta(minutes=1)
        assert timezones.format_local(before, "America/New_York") == "2025-03-09T01:59:00-05:00"
        assert timezones.format_local(after, "America/New_York") == "2025-03-09T03:00:00-04:00"

    def test_naive_instant_is_taken_as_utc(self, timezones: TimezoneService):
        assert timezones.as_utc(datetime(2025, 1, 1, 12, 0)) == datetime(
            2025, 1, 1, 12, 0, tzinfo=timezone.utc
        )

    def test_local_wall_time_to_utc(self, timezones: TimezoneService):
        local = datetime(2025, 10, 18, 15, 30)
        assert timezones.to_utc(local, "Asia/Kolkata") == datetime(
            2025, 10, 18, 10, 0, tzinfo=timezone.utc
        )

    def test_ambiguous_wall_time_uses_fold(self, timezones: TimezoneService):
        # 01:30 happens twice in New York on 2025-11-02.
        first = timezones.to_utc(datetime(2025, 11, 2, 1, 30, fold=0), "America/New_York")
        second = timezones.to_utc(datetime(2025, 11, 2, 1, 30, fold=1), "America/New_York")
        assert first == datetime(2025, 11, 2, 5, 30, tzinfo=timezone.utc)
        assert second == datetime(2025, 11, 2, 6, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("zone", ZONES)
    def test_round_trip_is_exact(self, timezones: TimezoneService, zone):
        instants = [
            datetime(2025, 10, 18, 10, 0, 0, 123000, tzinfo=timezone.utc),
            datetime(2025, 11, 2, 5, 30, tzinfo=timezone.utc),
            datetime(2025, 11, 2, 6, 30, tzinfo=timezone.utc),
            datetime(2025, 4, 5, 15, 15, tzinfo=timezone.utc),
        ]
        for instant in instants:
            local = timezones.to_zone(instant, zone)
            assert timezones.to_utc(local, zone) == instant
            assert timezones.to_utc(local.replace(tzinfo=None), zone) == instant

    def test_convert_payload(self, timezones: TimezoneService):
        result = timezones.convert(datetime(2025, 10, 18, 10, 0, tzinfo=timezone.utc), "Asia/Tokyo")
        assert result == {
            "original": "2025-10-18T10:00:00Z",
            "converted": "2025-10-18T19:00:00+09:00",
            "timezone": "Asia/Tokyo",
        }

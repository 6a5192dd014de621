"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from scheduling.domain import Event, EventId, ProfileId, TimeRange, snapshot_event
from scheduling.domain.errors import (
    ErrorCode,
    EventNotFoundError,
    InvalidTimezoneError,
    NotFoundError,
    ValidationError,
)

START = datetime(2025, 10, 18, 10, 0, tzinfo=timezone.utc)


def _event(**overrides) -> Event:
    fields = dict(
        id=EventId.from_string("6f1c1f5e-3c1a-4a53-9a57-0f4d0a0a1b01"),
        title="Planning",
        description="",
        timezone="Asia/Kolkata",
        start_utc=START,
        end_utc=START + timedelta(hours=2),
        created_at=START - timedelta(days=1),
        updated_at=START - timedelta(days=1),
    )
    fields.update(overrides)
    return Event(**fields)


class TestTimeRange:
    """Tests for TimeRange value object."""

    def test_accepts_end_after_start(self):
        """TimeRange can be created when end is after start."""
        time_range = TimeRange(START, START + timedelta(milliseconds=1))
        assert time_range.end > time_range.start

    def test_rejects_equal_bounds(self):
        """TimeRange raises ValueError when end equals start."""
        with pytest.raises(ValueError):
            TimeRange(START, START)

    def test_rejects_end_before_start(self):
        """TimeRange raises ValueError when end precedes start."""
        with pytest.raises(ValueError):
            TimeRange(START, START - timedelta(minutes=1))

    def test_rejects_naive_bounds(self):
        """TimeRange raises ValueError for naive datetimes."""
        with pytest.raises(ValueError):
            TimeRange(datetime(2025, 1, 1), datetime(2025, 1, 2))


class TestIds:
    """Tests for id value objects."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        value = "6f1c1f5e-3c1a-4a53-9a57-0f4d0a0a1b01"
        assert EventId.from_string(value).value == UUID(value)

    def test_from_string_invalid_uuid(self):
        """ProfileId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            ProfileId.from_string("not-a-uuid")

    def test_str_is_canonical_uuid(self):
        value = "6F1C1F5E-3C1A-4A53-9A57-0F4D0A0A1B01"
        assert str(ProfileId.from_string(value)) == value.lower()

    def test_ids_are_hashable_set_members(self):
        a = ProfileId.from_string("6f1c1f5e-3c1a-4a53-9a57-0f4d0a0a1b01")
        b = ProfileId.from_string("6f1c1f5e-3c1a-4a53-9a57-0f4d0a0a1b01")
        assert {a, b} == {a}


class TestSnapshot:
    """Tests for snapshot_event."""

    def test_snapshot_contains_every_field(self):
        creator = ProfileId.new()
        member = ProfileId.new()
        event = _event(profile_ids=frozenset({member}), created_by=creator)

        snapshot = snapshot_event(event)

        assert snapshot == {
            "id": str(event.id),
            "title": "Planning",
            "description": "",
            "timezone": "Asia/Kolkata",
            "start_utc": "2025-10-18T10:00:00+00:00",
            "end_utc": "2025-10-18T12:00:00+00:00",
            "profile_ids": [str(member)],
            "created_by": str(creator),
            "created_at": "2025-10-17T10:00:00+00:00",
            "updated_at": "2025-10-17T10:00:00+00:00",
        }

    def test_snapshot_is_independent_of_later_changes(self):
        event = _event()
        snapshot = snapshot_event(event)

        changed = replace(event, title="Renamed", profile_ids=frozenset({ProfileId.new()}))
        snapshot_event(changed)
        snapshot["profile_ids"].append("x")

        assert snapshot["title"] == "Planning"
        assert snapshot_event(event)["profile_ids"] == []

    def test_profile_ids_are_sorted(self):
        ids = [ProfileId.new() for _ in range(3)]
        snapshot = snapshot_event(_event(profile_ids=frozenset(ids)))
        assert snapshot["profile_ids"] == sorted(str(pid) for pid in ids)


class TestErrors:
    """Tests for the domain error hierarchy."""

    def test_invalid_timezone_is_validation_error(self):
        error = InvalidTimezoneError("Mars/Olympus")
        assert isinstance(error, ValidationError)
        assert error.code is ErrorCode.INVALID_TIMEZONE
        assert error.zone == "Mars/Olympus"

    def test_event_not_found_is_not_found_error(self):
        error = EventNotFoundError("abc")
        assert isinstance(error, NotFoundError)
        assert str(error) == "EVENT_NOT_FOUND: Event not found"

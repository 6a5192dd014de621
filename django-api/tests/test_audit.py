"""Unit tests for AuditLogService.

Run with: pytest tests/test_audit.py -v
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from scheduling.domain.errors import EventLogNotFoundError, InvalidIdError, InvalidTimezoneError

START = datetime(2025, 10, 18, 10, 0, tzinfo=timezone.utc)
END = datetime(2025, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def event(services):
    return services.events.create_event(title="Old", start_utc=START, end_utc=END)


class TestRecord:
    """Tests for the write side of the audit log."""

    def test_before_and_after_match_the_update(self, services, event):
        before = services.events.get_event(str(event.id))
        after = services.events.replace_event(str(event.id), {"title": "New"})

        log = services.audit.list_for_event(str(event.id))[0].log

        assert log.event_id == event.id
        assert log.before["title"] == before.title
        assert log.after["title"] == after.title
        assert log.before["updated_at"] == before.updated_at.isoformat()

    def test_stored_log_survives_later_mutations(self, services, event):
        services.events.replace_event(str(event.id), {"title": "Second"})
        services.events.patch_event(str(event.id), {"title": "Third"})
        services.events.delete_event(str(event.id))

        log = services.audit.list_for_event(str(event.id))[0].log
        assert log.before["title"] == "Old"
        assert log.after["title"] == "Second"

    def test_returned_snapshots_do_not_alias_storage(self, services, event):
        services.events.replace_event(str(event.id), {"title": "New"})

        leaked = services.audit.list_for_event(str(event.id))[0].log
        leaked.after["title"] = "Tampered"

        assert services.audit.list_for_event(str(event.id))[0].log.after["title"] == "New"

    def test_record_copies_snapshots(self, services, event, log_store):
        log = services.audit.record(event.id, None, event, event)
        log.before["title"] = "changed"
        assert log_store.get_log(event.id, log.id).before["title"] == "Old"


class TestQueries:
    """Tests for listing and fetching log entries."""

    def test_list_is_newest_first(self, services, event, clock):
        services.events.replace_event(str(event.id), {"title": "One"})
        clock.advance(minutes=1)
        services.events.replace_event(str(event.id), {"title": "Two"})

        titles = [e.log.after["title"] for e in services.audit.list_for_event(str(event.id))]

        assert titles == ["Two", "One"]

    def test_list_without_zone_has_no_local_timestamp(self, services, event):
        services.events.replace_event(str(event.id), {"title": "New"})
        entry = services.audit.list_for_event(str(event.id))[0]
        assert entry.timestamp_local is None

    def test_list_projects_into_display_zone(self, services, event, clock):
        services.events.replace_event(str(event.id), {"title": "New"})

        entry = services.audit.list_for_event(str(event.id), "Asia/Kolkata")[0]

        assert entry.timestamp_local == "2025-10-01T14:30:00+05:30"
        assert entry.log.timestamp_utc == clock.now

    def test_list_rejects_unknown_zone(self, services, event):
        with pytest.raises(InvalidTimezoneError):
            services.audit.list_for_event(str(event.id), "Nowhere/Land")

    def test_list_for_event_without_logs(self, services):
        assert services.audit.list_for_event(str(uuid4())) == []

    def test_get_one(self, services, event):
        services.events.replace_event(str(event.id), {"title": "New"})
        log = services.audit.list_for_event(str(event.id))[0].log

        entry = services.audit.get_one(str(event.id), str(log.id), "America/New_York")

        assert entry.log == log
        assert entry.timestamp_local == "2025-10-01T05:00:00-04:00"

    def test_get_one_from_another_event(self, services, event):
        other = services.events.create_event(title="Other", start_utc=START, end_utc=END)
        services.events.replace_event(str(event.id), {"title": "New"})
        log = services.audit.list_for_event(str(event.id))[0].log

        with pytest.raises(EventLogNotFoundError):
            services.audit.get_one(str(other.id), str(log.id))

    def test_entries_resolve_updater(self, services, event, clock):
        editor = services.profiles.create_profile("Editor", timezone="Asia/Tokyo")
        services.events.replace_event(str(event.id), {"title": "One"}, updated_by=str(editor.id))
        clock.advance(minutes=1)
        services.events.replace_event(str(event.id), {"title": "Two"}, updated_by=str(uuid4()))

        unknown, known = services.audit.list_for_event(str(event.id))

        assert known.updater.name == "Editor"
        assert known.updater.timezone == "Asia/Tokyo"
        assert unknown.updater is None
        one = services.audit.get_one(str(event.id), str(known.log.id))
        assert one.updater == known.updater

    def test_get_one_invalid_id(self, services, event):
        with pytest.raises(InvalidIdError):
            services.audit.get_one(str(event.id), "bad")

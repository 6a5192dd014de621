"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from scheduling.domain import Event, EventId, ProfileId, TimeRange
from scheduling.domain.errors import (
    EmptySelectionError,
    EventNotFoundError,
    InvalidTimeRangeError,
    MissingFieldError,
    ProfilesNotFoundError,
    UnknownFieldError,
)
from scheduling.services._common import Clock, parse_id, utc_now
from scheduling.services.audit_service import AuditLogService
from scheduling.services.timezone_service import UTC_ZONE, TimezoneService
from scheduling.stores.interfaces import EventStore, ProfileStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"title", "description", "timezone", "start_utc", "end_utc", "profile_ids"}
)


class EventService:
    """Service for event scheduling operations."""

    def __init__(
        self,
        store: EventStore,
        profiles: ProfileStore,
        audit: AuditLogService,
        timezones: TimezoneService,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._profiles = profiles
        self._audit = audit
        self._timezones = timezones
        self._clock = clock

    def create_event(
        self,
        title: str | None,
        start_utc: datetime | None,
        end_utc: datetime | None,
        description: str | None = None,
        timezone: str | None = None,
        profile_ids: Iterable[str] = (),
        created_by: str | None = None,
    ) -> Event:
        """Create an event.

        Profile ids are not checked for existence here; only explicit
        assignment enforces that.

        Raises:
            MissingFieldError: If title, start_utc or end_utc is missing.
            InvalidTimeRangeError: If end_utc is not after start_utc.
            InvalidTimezoneError: If the timezone is not supported.
            InvalidIdError: If a profile id or created_by is not a valid UUID.
        """
        missing = [
            name
            for name, value in (("title", title), ("start_utc", start_utc), ("end_utc", end_utc))
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise MissingFieldError(*missing)
        time_range = self._time_range(start_utc, end_utc)
        zone = timezone or UTC_ZONE
        self._timezones.validate_zone(zone)
        now = self._clock()
        event = Event(
            id=EventId.new(),
            title=title.strip(),
            description=(description or "").strip(),
            timezone=zone,
            start_utc=time_range.start,
            end_utc=time_range.end,
            profile_ids=self._parse_profile_ids(profile_ids or ()),
            created_by=(
                parse_id(ProfileId, created_by, "created_by") if created_by else None
            ),
            created_at=now,
            updated_at=now,
        )
        self._store.add_event(event)
        logger.info("Created event %s", event.id)
        return event

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_id(EventId, event_id, "event id"))
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def list_events(self) -> list[Event]:
        """Return all events, earliest start first."""
        return self._store.list_events()

    def replace_event(
        self,
        event_id: str,
        changes: Mapping[str, Any],
        updated_by: str | None = None,
    ) -> Event:
        """Apply a full update and record it in the audit log.

        The event write and the log write share one unit of work.

        Raises:
            EventNotFoundError: If the event does not exist.
            ValidationError: If the changes are invalid.
        """
        actor = parse_id(ProfileId, updated_by, "updated_by") if updated_by else None
        with self._store.atomic():
            before = self._get_for_update(event_id)
            after = self._store.save_event(
                self._apply(before, changes), include_profiles="profile_ids" in changes
            )
            self._audit.record(after.id, actor, before, after)
        logger.info("Replaced event %s by %s", after.id, actor)
        return after

    def patch_event(self, event_id: str, changes: Mapping[str, Any]) -> Event:
        """Apply a partial update. Partial updates are not audited.

        Raises:
            EventNotFoundError: If the event does not exist.
            ValidationError: If the changes are invalid.
        """
        with self._store.atomic():
            event = self._store.save_event(
                self._apply(self._get_for_update(event_id), changes),
                include_profiles="profile_ids" in changes,
            )
        logger.info("Patched event %s fields=%s", event.id, sorted(changes))
        return event

    def delete_event(self, event_id: str) -> Event:
        """Remove an event. Its audit log entries are kept.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.delete_event(parse_id(EventId, event_id, "event id"))
        if event is None:
            raise EventNotFoundError(str(event_id))
        logger.info("Deleted event %s", event.id)
        return event

    def assign_profiles(self, event_id: str, profile_ids: Iterable[str]) -> Event:
        """Add existing profiles to the event's assigned set.

        Assigning an already assigned profile changes nothing for that id.

        Raises:
            EmptySelectionError: If ``profile_ids`` is empty.
            EventNotFoundError: If the event does not exist.
            ProfilesNotFoundError: If any profile does not exist.
        """
        requested = list(profile_ids or ())
        if not requested:
            raise EmptySelectionError("profile_ids")
        wanted = self._parse_profile_ids(requested)
        event = self.get_event(event_id)
        found = {profile.id for profile in self._profiles.get_profiles(wanted)}
        missing = wanted - found
        if missing:
            logger.info("Assignment to event %s rejected, %d unknown profiles", event.id, len(missing))
            raise ProfilesNotFoundError(frozenset(missing))
        updated = self._store.add_profiles(event.id, wanted, self._clock())
        if updated is None:
            raise EventNotFoundError(str(event_id))
        logger.info("Assigned %d profiles to event %s", len(wanted), event.id)
        return updated

    def unassign_profile(self, event_id: str, profile_id: str) -> Event:
        """Remove a profile from the event's assigned set.

        Removing a profile that is not assigned is a no-op.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        eid = parse_id(EventId, event_id, "event id")
        pid = parse_id(ProfileId, profile_id, "profile id")
        updated = self._store.remove_profile(eid, pid, self._clock())
        if updated is None:
            raise EventNotFoundError(str(event_id))
        logger.info("Unassigned profile %s from event %s", pid, eid)
        return updated

    def _get_for_update(self, event_id: str) -> Event:
        event = self._store.get_event_for_update(parse_id(EventId, event_id, "event id"))
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def _apply(self, event: Event, changes: Mapping[str, Any]) -> Event:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise UnknownFieldError(*unknown)
        fields: dict[str, Any] = {}
        if "title" in changes:
            title = changes["title"]
            if not isinstance(title, str) or not title.strip():
                raise MissingFieldError("title")
            fields["title"] = title.strip()
        if "description" in changes:
            fields["description"] = (changes["description"] or "").strip()
        if "timezone" in changes:
            zone = changes["timezone"] or UTC_ZONE
            self._timezones.validate_zone(zone)
            fields["timezone"] = zone
        start = changes.get("start_utc")
        end = changes.get("end_utc")
        if start is not None and end is not None:
            time_range = self._time_range(start, end)
            fields["start_utc"] = time_range.start
            fields["end_utc"] = time_range.end
        elif start is not None:
            fields["start_utc"] = self._timezones.as_utc(start)
        elif end is not None:
            fields["end_utc"] = self._timezones.as_utc(end)
        if "profile_ids" in changes:
            fields["profile_ids"] = self._parse_profile_ids(changes["profile_ids"] or ())
        return replace(event, **fields, updated_at=self._clock())

    def _time_range(self, start: datetime, end: datetime) -> TimeRange:
        try:
            return TimeRange(self._timezones.as_utc(start), self._timezones.as_utc(end))
        except ValueError:
            raise InvalidTimeRangeError() from None

    @staticmethod
    def _parse_profile_ids(profile_ids: Iterable[str]) -> frozenset[ProfileId]:
        return frozenset(parse_id(ProfileId, pid, "profile id") for pid in profile_ids)

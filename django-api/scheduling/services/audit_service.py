"""Audit log engine - immutable before/after snapshots of full event updates.

``record`` is only called from the full-update path of EventService, right
after the event write, so a log entry always follows the write it describes.
"""

import logging

from scheduling.domain import (
    Event,
    EventId,
    EventLog,
    EventLogEntry,
    EventLogId,
    ProfileId,
    ProfileSummary,
    snapshot_event,
)
from scheduling.domain.errors import EventLogNotFoundError
from scheduling.services._common import Clock, parse_id, utc_now
from scheduling.services.timezone_service import TimezoneService
from scheduling.stores.interfaces import EventLogStore, ProfileStore

logger = logging.getLogger(__name__)


class AuditLogService:
    """Records and serves the audit trail of event updates."""

    def __init__(
        self,
        store: EventLogStore,
        profiles: ProfileStore,
        timezones: TimezoneService,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._profiles = profiles
        self._timezones = timezones
        self._clock = clock

    def record(
        self,
        event_id: EventId,
        updated_by: ProfileId | None,
        before: Event,
        after: Event,
    ) -> EventLog:
        """Persist one log entry for a completed update of ``event_id``."""
        log = EventLog(
            id=EventLogId.new(),
            event_id=event_id,
            updated_by=updated_by,
            before=snapshot_event(before),
            after=snapshot_event(after),
            timestamp_utc=self._clock(),
        )
        self._store.add_log(log)
        logger.info("Recorded log %s for event %s by %s", log.id, event_id, updated_by)
        return log

    def list_for_event(
        self, event_id: str, display_zone: str | None = None
    ) -> list[EventLogEntry]:
        """Return the event's logs, newest first.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            InvalidTimezoneError: If ``display_zone`` is given and not supported.
        """
        if display_zone is not None:
            self._timezones.validate_zone(display_zone)
        logs = self._store.list_logs(parse_id(EventId, event_id, "event id"))
        updaters = self._summaries(log.updated_by for log in logs)
        return [self._entry(log, display_zone, updaters) for log in logs]

    def get_one(
        self, event_id: str, log_id: str, display_zone: str | None = None
    ) -> EventLogEntry:
        """Return one log entry of the event.

        Raises:
            InvalidIdError: If either id is not a valid UUID.
            InvalidTimezoneError: If ``display_zone`` is given and not supported.
            EventLogNotFoundError: If the log does not exist for this event.
        """
        if display_zone is not None:
            self._timezones.validate_zone(display_zone)
        log = self._store.get_log(
            parse_id(EventId, event_id, "event id"),
            parse_id(EventLogId, log_id, "log id"),
        )
        if log is None:
            raise EventLogNotFoundError(str(log_id))
        return self._entry(log, display_zone, self._summaries([log.updated_by]))

    def _summaries(self, profile_ids) -> dict[ProfileId, ProfileSummary]:
        ids = {pid for pid in profile_ids if pid is not None}
        return {p.id: ProfileSummary.of(p) for p in self._profiles.get_profiles(ids)}

    def _entry(
        self,
        log: EventLog,
        display_zone: str | None,
        updaters: dict[ProfileId, ProfileSummary],
    ) -> EventLogEntry:
        local = None
        if display_zone is not None:
            local = self._timezones.format_local(log.timestamp_utc, display_zone)
        return EventLogEntry(
            log=log, timestamp_local=local, updater=updaters.get(log.updated_by)
        )

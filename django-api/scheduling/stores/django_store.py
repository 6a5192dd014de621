"""Django ORM implementations of the stores."""

import logging
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import datetime

from django.db import transaction

from scheduling import models
from scheduling.domain import Event, EventId, EventLog, EventLogId, Profile, ProfileId
from scheduling.stores.interfaces import EventLogStore, EventStore, ProfileStore

logger = logging.getLogger(__name__)


def _profile_to_domain(row: models.Profile) -> Profile:
    return Profile(
        id=ProfileId(row.id),
        name=row.name,
        timezone=row.timezone,
        active_profile_ids=frozenset(
            ProfileId.from_string(pid) for pid in row.active_profile_ids or []
        ),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _event_to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        description=row.description,
        timezone=row.timezone,
        start_utc=row.start_utc,
        end_utc=row.end_utc,
        profile_ids=frozenset(ProfileId(a.profile_id) for a in row.assignments.all()),
        created_by=ProfileId(row.created_by) if row.created_by else None,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _log_to_domain(row: models.EventLog) -> EventLog:
    return EventLog(
        id=EventLogId(row.id),
        event_id=EventId(row.event_id),
        updated_by=ProfileId(row.updated_by) if row.updated_by else None,
        before=row.before,
        after=row.after,
        timestamp_utc=row.timestamp_utc,
    )


class DjangoProfileStore(ProfileStore):
    """Profile store backed by the Django ORM."""

    def add_profile(self, profile: Profile) -> Profile:
        models.Profile.objects.create(
            id=profile.id.value,
            name=profile.name,
            timezone=profile.timezone,
            active_profile_ids=sorted(str(pid) for pid in profile.active_profile_ids),
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
        return profile

    def get_profile(self, profile_id: ProfileId) -> Profile | None:
        row = models.Profile.objects.filter(pk=profile_id.value).first()
        return _profile_to_domain(row) if row else None

    def get_profiles(self, profile_ids: Iterable[ProfileId]) -> list[Profile]:
        ids = {pid.value for pid in profile_ids}
        if not ids:
            return []
        return [_profile_to_domain(row) for row in models.Profile.objects.filter(pk__in=ids)]

    def list_profiles(self) -> list[Profile]:
        return [
            _profile_to_domain(row)
            for row in models.Profile.objects.order_by("-created_at")
        ]

    def save_profile(self, profile: Profile) -> Profile:
        row = models.Profile.objects.get(pk=profile.id.value)
        row.name = profile.name
        row.timezone = profile.timezone
        row.active_profile_ids = sorted(str(pid) for pid in profile.active_profile_ids)
        row.updated_at = profile.updated_at
        row.save(update_fields=["name", "timezone", "active_profile_ids", "updated_at"])
        return profile


class DjangoEventStore(EventStore):
    """Event store backed by the Django ORM.

    The assigned profile set lives in ``EventAssignment`` rows, one per
    member, so adding and removing members never rewrites the whole set.
    """

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def _events(self):
        return models.Event.objects.prefetch_related("assignments")

    def add_event(self, event: Event) -> Event:
        with transaction.atomic():
            row = models.Event.objects.create(
                id=event.id.value,
                title=event.title,
                description=event.description,
                timezone=event.timezone,
                start_utc=event.start_utc,
                end_utc=event.end_utc,
                created_by=event.created_by.value if event.created_by else None,
                created_at=event.created_at,
                updated_at=event.updated_at,
            )
            models.EventAssignment.objects.bulk_create(
                [models.EventAssignment(event=row, profile_id=pid.value) for pid in event.profile_ids]
            )
        return event

    def get_event(self, event_id: EventId) -> Event | None:
        row = self._events().filter(pk=event_id.value).first()
        return _event_to_domain(row) if row else None

    def get_event_for_update(self, event_id: EventId) -> Event | None:
        row = self._events().select_for_update().filter(pk=event_id.value).first()
        return _event_to_domain(row) if row else None

    def list_events(self) -> list[Event]:
        return [_event_to_domain(row) for row in self._events().order_by("start_utc")]

    def list_events_for_profiles(self, profile_ids: Iterable[ProfileId]) -> list[Event]:
        ids = {pid.value for pid in profile_ids}
        if not ids:
            return []
        rows = (
            self._events()
            .filter(assignments__profile_id__in=ids)
            .distinct()
            .order_by("start_utc")
        )
        return [_event_to_domain(row) for row in rows]

    def save_event(self, event: Event, include_profiles: bool = True) -> Event:
        with transaction.atomic():
            row = models.Event.objects.select_for_update().get(pk=event.id.value)
            row.title = event.title
            row.description = event.description
            row.timezone = event.timezone
            row.start_utc = event.start_utc
            row.end_utc = event.end_utc
            row.updated_at = event.updated_at
            row.save(
                update_fields=[
                    "title",
                    "description",
                    "timezone",
                    "start_utc",
                    "end_utc",
                    "updated_at",
                ]
            )
            if include_profiles:
                wanted = {pid.value for pid in event.profile_ids}
                row.assignments.exclude(profile_id__in=wanted).delete()
                self._insert_missing(row, wanted)
            return self.get_event(event.id)

    def delete_event(self, event_id: EventId) -> Event | None:
        with transaction.atomic():
            row = self._events().select_for_update().filter(pk=event_id.value).first()
            if row is None:
                return None
            event = _event_to_domain(row)
            row.delete()
        logger.debug("Deleted event row %s", event_id)
        return event

    def add_profiles(
        self, event_id: EventId, profile_ids: Iterable[ProfileId], updated_at: datetime
    ) -> Event | None:
        with transaction.atomic():
            row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
            if row is None:
                return None
            self._insert_missing(row, {pid.value for pid in profile_ids})
            self._touch(row, updated_at)
        return self.get_event(event_id)

    def remove_profile(
        self, event_id: EventId, profile_id: ProfileId, updated_at: datetime
    ) -> Event | None:
        with transaction.atomic():
            row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
            if row is None:
                return None
            row.assignments.filter(profile_id=profile_id.value).delete()
            self._touch(row, updated_at)
        return self.get_event(event_id)

    @staticmethod
    def _insert_missing(row: models.Event, profile_ids: set) -> None:
        models.EventAssignment.objects.bulk_create(
            [models.EventAssignment(event=row, profile_id=pid) for pid in profile_ids],
            ignore_conflicts=True,
        )

    @staticmethod
    def _touch(row: models.Event, updated_at: datetime) -> None:
        row.updated_at = updated_at
        row.save(update_fields=["updated_at"])


class DjangoEventLogStore(EventLogStore):
    """Append-only log store backed by the Django ORM."""

    def add_log(self, log: EventLog) -> EventLog:
        models.EventLog.objects.create(
            id=log.id.value,
            event_id=log.event_id.value,
            updated_by=log.updated_by.value if log.updated_by else None,
            before=log.before,
            after=log.after,
            timestamp_utc=log.timestamp_utc,
        )
        return log

    def list_logs(self, event_id: EventId) -> list[EventLog]:
        rows = models.EventLog.objects.filter(event_id=event_id.value).order_by("-timestamp_utc")
        return [_log_to_domain(row) for row in rows]

    def get_log(self, event_id: EventId, log_id: EventLogId) -> EventLog | None:
        row = models.EventLog.objects.filter(pk=log_id.value, event_id=event_id.value).first()
        return _log_to_domain(row) if row else None

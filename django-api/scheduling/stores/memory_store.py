"""In-memory implementations of the stores.

Used by the service tests and for running the services without a database.
Uses plain dict storage with linear scans for queries.
"""

import copy
from collections.abc import Iterable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import replace
from datetime import datetime

from scheduling.domain import Event, EventId, EventLog, EventLogId, Profile, ProfileId
from scheduling.stores.interfaces import EventLogStore, EventStore, ProfileStore


class InMemoryProfileStore(ProfileStore):
    """Dict-backed profile store."""

    def __init__(self) -> None:
        self._profiles: dict[ProfileId, Profile] = {}

    def add_profile(self, profile: Profile) -> Profile:
        self._profiles[profile.id] = profile
        return profile

    def get_profile(self, profile_id: ProfileId) -> Profile | None:
        return self._profiles.get(profile_id)

    def get_profiles(self, profile_ids: Iterable[ProfileId]) -> list[Profile]:
        return [self._profiles[pid] for pid in set(profile_ids) if pid in self._profiles]

    def list_profiles(self) -> list[Profile]:
        return sorted(self._profiles.values(), key=lambda p: p.created_at, reverse=True)

    def save_profile(self, profile: Profile) -> Profile:
        self._profiles[profile.id] = profile
        return profile


class InMemoryEventStore(EventStore):
    """Dict-backed event store."""

    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}

    def atomic(self) -> AbstractContextManager:
        return nullcontext()

    def add_event(self, event: Event) -> Event:
        self._events[event.id] = event
        return event

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def get_event_for_update(self, event_id: EventId) -> Event | None:
        return self.get_event(event_id)

    def list_events(self) -> list[Event]:
        return sorted(self._events.values(), key=lambda e: e.start_utc)

    def list_events_for_profiles(self, profile_ids: Iterable[ProfileId]) -> list[Event]:
        wanted = frozenset(profile_ids)
        return [event for event in self.list_events() if event.profile_ids & wanted]

    def save_event(self, event: Event, include_profiles: bool = True) -> Event:
        if not include_profiles:
            event = replace(event, profile_ids=self._events[event.id].profile_ids)
        self._events[event.id] = event
        return event

    def delete_event(self, event_id: EventId) -> Event | None:
        return self._events.pop(event_id, None)

    def add_profiles(
        self, event_id: EventId, profile_ids: Iterable[ProfileId], updated_at: datetime
    ) -> Event | None:
        event = self._events.get(event_id)
        if event is None:
            return None
        event = replace(
            event,
            profile_ids=event.profile_ids | frozenset(profile_ids),
            updated_at=updated_at,
        )
        self._events[event_id] = event
        return event

    def remove_profile(
        self, event_id: EventId, profile_id: ProfileId, updated_at: datetime
    ) -> Event | None:
        event = self._events.get(event_id)
        if event is None:
            return None
        event = replace(
            event,
            profile_ids=event.profile_ids - {profile_id},
            updated_at=updated_at,
        )
        self._events[event_id] = event
        return event


class InMemoryEventLogStore(EventLogStore):
    """Append-only list of log entries.

    Snapshots are deep-copied on the way in and out so callers can never
    change what is stored.
    """

    def __init__(self) -> None:
        self._logs: list[EventLog] = []

    def add_log(self, log: EventLog) -> EventLog:
        self._logs.append(copy.deepcopy(log))
        return copy.deepcopy(log)

    def list_logs(self, event_id: EventId) -> list[EventLog]:
        logs = [log for log in self._logs if log.event_id == event_id]
        logs.sort(key=lambda log: log.timestamp_utc, reverse=True)
        return [copy.deepcopy(log) for log in logs]

    def get_log(self, event_id: EventId, log_id: EventLogId) -> EventLog | None:
        for log in self._logs:
            if log.id == log_id and log.event_id == event_id:
                return copy.deepcopy(log)
        return None

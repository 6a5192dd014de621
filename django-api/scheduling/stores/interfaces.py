"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import datetime

from scheduling.domain import Event, EventId, EventLog, EventLogId, Profile, ProfileId


class ProfileStore(ABC):
    """Interface for profile persistence operations."""

    @abstractmethod
    def add_profile(self, profile: Profile) -> Profile:
        """Persist a new profile."""
        ...

    @abstractmethod
    def get_profile(self, profile_id: ProfileId) -> Profile | None:
        """Return a profile by ID, or None if not found."""
        ...

    @abstractmethod
    def get_profiles(self, profile_ids: Iterable[ProfileId]) -> list[Profile]:
        """Return the profiles among ``profile_ids`` that exist."""
        ...

    @abstractmethod
    def list_profiles(self) -> list[Profile]:
        """Return all profiles ordered by created_at descending."""
        ...

    @abstractmethod
    def save_profile(self, profile: Profile) -> Profile:
        """Overwrite the stored state of an existing profile."""
        ...


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager that commits enclosed writes together."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> Event:
        """Persist a new event with its assigned profile set."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_event_for_update(self, event_id: EventId) -> Event | None:
        """Return an event by ID, locked until the enclosing atomic block ends."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by start_utc ascending."""
        ...

    @abstractmethod
    def list_events_for_profiles(self, profile_ids: Iterable[ProfileId]) -> list[Event]:
        """Return events assigned to any of ``profile_ids``, by start_utc ascending."""
        ...

    @abstractmethod
    def save_event(self, event: Event, include_profiles: bool = True) -> Event:
        """Overwrite the stored state of an existing event and return it.

        The assigned profile set is only rewritten when ``include_profiles``
        is true; otherwise the stored set is kept as it is.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> Event | None:
        """Remove an event and return its last state, or None if not found."""
        ...

    @abstractmethod
    def add_profiles(
        self, event_id: EventId, profile_ids: Iterable[ProfileId], updated_at: datetime
    ) -> Event | None:
        """Add profiles to the stored assigned set, or return None if not found.

        Ids already assigned are left as they are.
        """
        ...

    @abstractmethod
    def remove_profile(
        self, event_id: EventId, profile_id: ProfileId, updated_at: datetime
    ) -> Event | None:
        """Remove a profile from the stored assigned set, or return None if not found."""
        ...


class EventLogStore(ABC):
    """Interface for append-only event log persistence."""

    @abstractmethod
    def add_log(self, log: EventLog) -> EventLog:
        """Persist a new log entry."""
        ...

    @abstractmethod
    def list_logs(self, event_id: EventId) -> list[EventLog]:
        """Return all logs for an event ordered by timestamp_utc descending."""
        ...

    @abstractmethod
    def get_log(self, event_id: EventId, log_id: EventLogId) -> EventLog | None:
        """Return a log entry of the given event, or None if not found."""
        ...

"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in scheduling/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from scheduling.domain.value_objects import EventId, EventLogId, ProfileId


@dataclass(frozen=True)
class Profile:
    """Domain representation of a Profile."""

    id: ProfileId
    name: str
    timezone: str
    created_at: datetime
    updated_at: datetime
    active_profile_ids: frozenset[ProfileId] = frozenset()


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    ``start_utc``, ``end_utc``, ``created_at`` and ``updated_at`` are aware UTC
    instants. ``timezone`` is the zone the event was authored in and is only
    used for display.
    """

    id: EventId
    title: str
    description: str
    timezone: str
    start_utc: datetime
    end_utc: datetime
    created_at: datetime
    updated_at: datetime
    profile_ids: frozenset[ProfileId] = frozenset()
    created_by: ProfileId | None = None


@dataclass(frozen=True)
class EventLog:
    """Immutable before/after record of a full update to an Event."""

    id: EventLogId
    event_id: EventId
    updated_by: ProfileId | None
    before: dict[str, Any]
    after: dict[str, Any]
    timestamp_utc: datetime


@dataclass(frozen=True)
class ProfileSummary:
    """The identifying fields of a Profile shown alongside events."""

    id: ProfileId
    name: str
    timezone: str

    @classmethod
    def of(cls, profile: Profile) -> "ProfileSummary":
        return cls(id=profile.id, name=profile.name, timezone=profile.timezone)


@dataclass(frozen=True)
class EventLogEntry:
    """An EventLog with its commit instant in a display zone and its updater."""

    log: EventLog
    timestamp_local: str | None = None
    updater: ProfileSummary | None = None


@dataclass(frozen=True)
class EventDetail:
    """An Event with the profiles it references resolved to summaries.

    Ids that no longer resolve to a profile are left out of ``profiles``
    and give a ``creator`` of None.
    """

    event: Event
    profiles: tuple[ProfileSummary, ...] = ()
    creator: ProfileSummary | None = None


@dataclass(frozen=True)
class ProjectedEvent:
    """An Event with its instants projected into a display zone."""

    event: Event
    display_timezone: str
    start_local: str
    end_local: str
    created_at_local: str
    updated_at_local: str
    profiles: tuple[ProfileSummary, ...] = ()
    creator: ProfileSummary | None = None


@dataclass(frozen=True)
class ProfileEvents:
    """Events visible to a profile, projected into one display zone."""

    profile: Profile
    display_timezone: str
    events: tuple[ProjectedEvent, ...] = field(default_factory=tuple)


def snapshot_event(event: Event) -> dict[str, Any]:
    """Return a JSON-safe copy of every field of ``event``.

    The result shares no mutable state with the Event, so later changes to
    the Event never reach a snapshot taken earlier.
    """
    return {
        "id": str(event.id),
        "title": event.title,
        "description": event.description,
        "timezone": event.timezone,
        "start_utc": event.start_utc.isoformat(),
        "end_utc": event.end_utc.isoformat(),
        "profile_ids": sorted(str(pid) for pid in event.profile_ids),
        "created_by": str(event.created_by) if event.created_by else None,
        "created_at": event.created_at.isoformat(),
        "updated_at": event.updated_at.isoformat(),
    }

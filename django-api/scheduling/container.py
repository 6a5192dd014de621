"""Explicit construction of stores and services.

The Django app config builds one ``Services`` at startup; tests build their
own from the in-memory stores.
"""

from dataclasses import dataclass

from scheduling.services import (
    AuditLogService,
    EventService,
    ProfileService,
    ProjectionService,
    TimezoneService,
)
from scheduling.services._common import Clock, utc_now
from scheduling.stores.interfaces import EventLogStore, EventStore, ProfileStore


@dataclass(frozen=True)
class Services:
    timezones: TimezoneService
    profiles: ProfileService
    events: EventService
    audit: AuditLogService
    projections: ProjectionService


def build_services(
    profile_store: ProfileStore,
    event_store: EventStore,
    log_store: EventLogStore,
    timezones: TimezoneService | None = None,
    clock: Clock = utc_now,
) -> Services:
    timezones = timezones or TimezoneService()
    profiles = ProfileService(profile_store, timezones, clock=clock)
    audit = AuditLogService(log_store, profile_store, timezones, clock=clock)
    events = EventService(event_store, profile_store, audit, timezones, clock=clock)
    projections = ProjectionService(event_store, profile_store, profiles, timezones)
    return Services(
        timezones=timezones,
        profiles=profiles,
        events=events,
        audit=audit,
        projections=projections,
    )


def build_django_services() -> Services:
    from scheduling.stores.django_store import (
        DjangoEventLogStore,
        DjangoEventStore,
        DjangoProfileStore,
    )

    return build_services(DjangoProfileStore(), DjangoEventStore(), DjangoEventLogStore())

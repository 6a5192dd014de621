"""Query/projection layer - profile-scoped, zone-projected event views.

Everything here is read-only. Stored UTC instants are never modified;
projections only add display fields.
"""

import logging
from collections.abc import Iterable

from scheduling.domain import (
    Event,
    EventDetail,
    Profile,
    ProfileEvents,
    ProfileSummary,
    ProjectedEvent,
)
from scheduling.services.profile_service import ProfileService
from scheduling.services.timezone_service import UTC_ZONE, TimezoneService
from scheduling.stores.interfaces import EventStore, ProfileStore

logger = logging.getLogger(__name__)


class ProjectionService:
    """Builds event views projected into a display zone."""

    def __init__(
        self,
        events: EventStore,
        profile_store: ProfileStore,
        profiles: ProfileService,
        timezones: TimezoneService,
    ) -> None:
        self._events = events
        self._profile_store = profile_store
        self._profiles = profiles
        self._timezones = timezones

    def events_for_profile(
        self, profile_id: str, display_zone: str | None = None
    ) -> ProfileEvents:
        """Return the events assigned to a profile.

        Instants are projected into ``display_zone``, or into the profile's
        own timezone when none is given.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            InvalidTimezoneError: If ``display_zone`` is not supported.
        """
        profile = self._profiles.get_profile(profile_id)
        zone = self._resolve_zone(profile, display_zone)
        events = self._events.list_events_for_profiles([profile.id])
        return ProfileEvents(
            profile=profile,
            display_timezone=zone,
            events=self._project_all(events, zone),
        )

    def events_for_actor(
        self, actor_id: str, display_zone: str | None = None
    ) -> ProfileEvents:
        """Return the events assigned to any of the actor's active profiles.

        Raises:
            ProfileNotFoundError: If the actor's profile does not exist.
            InvalidTimezoneError: If ``display_zone`` is not supported.
        """
        actor = self._profiles.get_profile(actor_id)
        zone = self._resolve_zone(actor, display_zone)
        events = self._events.list_events_for_profiles(actor.active_profile_ids)
        logger.debug(
            "Actor %s sees %d events through %d active profiles",
            actor.id,
            len(events),
            len(actor.active_profile_ids),
        )
        return ProfileEvents(
            profile=actor,
            display_timezone=zone,
            events=self._project_all(events, zone),
        )

    def project(self, event: Event, zone: str) -> ProjectedEvent:
        """Project one event's instants into ``zone``."""
        return self._project_all([event], zone)[0]

    def describe(self, event: Event) -> EventDetail:
        """Return ``event`` with its assigned profiles and creator resolved."""
        return self.describe_all([event])[0]

    def describe_all(self, events: Iterable[Event]) -> list[EventDetail]:
        events = list(events)
        summaries = self._summaries(events)
        return [
            EventDetail(
                event=event,
                profiles=self._members(event, summaries),
                creator=summaries.get(event.created_by),
            )
            for event in events
        ]

    def _resolve_zone(self, profile: Profile, display_zone: str | None) -> str:
        zone = display_zone or profile.timezone or UTC_ZONE
        self._timezones.validate_zone(zone)
        return zone

    def _summaries(self, events: list[Event]) -> dict:
        ids = {pid for event in events for pid in event.profile_ids}
        ids.update(event.created_by for event in events if event.created_by)
        return {
            profile.id: ProfileSummary.of(profile)
            for profile in self._profile_store.get_profiles(ids)
        }

    @staticmethod
    def _members(event: Event, summaries: dict) -> tuple[ProfileSummary, ...]:
        return tuple(
            sorted(
                (summaries[pid] for pid in event.profile_ids if pid in summaries),
                key=lambda summary: summary.name,
            )
        )

    def _project_all(self, events: Iterable[Event], zone: str) -> tuple[ProjectedEvent, ...]:
        events = list(events)
        summaries = self._summaries(events)
        return tuple(self._project(event, zone, summaries) for event in events)

    def _project(self, event: Event, zone: str, summaries: dict) -> ProjectedEvent:
        fmt = self._timezones.format_local
        return ProjectedEvent(
            event=event,
            display_timezone=zone,
            start_local=fmt(event.start_utc, zone),
            end_local=fmt(event.end_utc, zone),
            created_at_local=fmt(event.created_at, zone),
            updated_at_local=fmt(event.updated_at, zone),
            profiles=self._members(event, summaries),
            creator=summaries.get(event.created_by),
        )

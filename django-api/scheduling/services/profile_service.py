"""Profile registry - profiles, their preferred zones and active-profile sessions."""

import logging
from collections.abc import Iterable
from dataclasses import replace

from scheduling.domain import Profile, ProfileId
from scheduling.domain.errors import (
    EmptySelectionError,
    MissingFieldError,
    ProfileNotFoundError,
)
from scheduling.services._common import Clock, parse_id, utc_now
from scheduling.services.timezone_service import UTC_ZONE, TimezoneService
from scheduling.stores.interfaces import ProfileStore

logger = logging.getLogger(__name__)


def _clean_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise MissingFieldError("name")
    return name.strip()


class ProfileService:
    """Service for profile registration, updates and sessions."""

    def __init__(
        self,
        store: ProfileStore,
        timezones: TimezoneService,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._timezones = timezones
        self._clock = clock

    def create_profile(self, name: str, timezone: str | None = None) -> Profile:
        """Register a new profile.

        Raises:
            MissingFieldError: If the name is blank after trimming.
            InvalidTimezoneError: If the timezone is not supported.
        """
        clean_name = _clean_name(name)
        zone = timezone or UTC_ZONE
        self._timezones.validate_zone(zone)
        now = self._clock()
        profile = Profile(
            id=ProfileId.new(),
            name=clean_name,
            timezone=zone,
            created_at=now,
            updated_at=now,
        )
        self._store.add_profile(profile)
        logger.info("Created profile %s", profile.id)
        return profile

    def get_profile(self, profile_id: str) -> Profile:
        """Return a profile by ID.

        Raises:
            InvalidIdError: If the profile_id is not a valid UUID.
            ProfileNotFoundError: If the profile does not exist.
        """
        profile = self._store.get_profile(parse_id(ProfileId, profile_id, "profile id"))
        if profile is None:
            raise ProfileNotFoundError(str(profile_id))
        return profile

    def list_profiles(self) -> list[Profile]:
        """Return all profiles, newest first."""
        return self._store.list_profiles()

    def update_profile(
        self,
        profile_id: str,
        name: str | None = None,
        timezone: str | None = None,
    ) -> Profile:
        """Apply the supplied fields to a profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            MissingFieldError: If a supplied name is blank.
            InvalidTimezoneError: If a supplied timezone is not supported.
        """
        profile = self.get_profile(profile_id)
        changes = {}
        if name is not None:
            changes["name"] = _clean_name(name)
        if timezone is not None:
            self._timezones.validate_zone(timezone)
            changes["timezone"] = timezone
        profile = replace(profile, **changes, updated_at=self._clock())
        self._store.save_profile(profile)
        logger.info("Updated profile %s fields=%s", profile.id, sorted(changes))
        return profile

    def get_timezone(self, profile_id: str) -> str:
        return self.get_profile(profile_id).timezone or UTC_ZONE

    def update_timezone(self, profile_id: str, timezone: str | None) -> Profile:
        if not timezone:
            raise MissingFieldError("timezone")
        return self.update_profile(profile_id, timezone=timezone)

    def set_active_profiles(
        self, actor_id: str, profile_ids: Iterable[str]
    ) -> frozenset[ProfileId]:
        """Replace the set of profiles the actor is acting as.

        Raises:
            EmptySelectionError: If ``profile_ids`` is empty.
            InvalidIdError: If any id is not a valid UUID.
            ProfileNotFoundError: If the actor's profile does not exist.
        """
        selected = frozenset(
            parse_id(ProfileId, pid, "profile id") for pid in profile_ids or ()
        )
        if not selected:
            raise EmptySelectionError("active_profiles")
        actor = self.get_profile(actor_id)
        actor = replace(actor, active_profile_ids=selected)
        self._store.save_profile(actor)
        logger.info("Set %d active profiles for actor %s", len(selected), actor.id)
        return selected

    def get_active_profiles(self, actor_id: str) -> frozenset[ProfileId]:
        return self.get_profile(actor_id).active_profile_ids

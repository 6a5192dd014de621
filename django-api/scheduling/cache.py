"""Cache keys and invalidation helpers for serialized read payloads."""

from collections.abc import Iterable

from django.conf import settings
from django.core.cache import cache

EVENTS_LIST_KEY = "events:list"
PROFILES_LIST_KEY = "profiles:list"
TIMEZONES_LIST_KEY = "timezones:list"


def event_detail_key(event_id: object) -> str:
    return f"events:{event_id}"


def timeout() -> int:
    return getattr(settings, "SCHEDULING_CACHE_TIMEOUT", 300)


def invalidate_event(event_id: object) -> None:
    cache.delete_many([EVENTS_LIST_KEY, event_detail_key(event_id)])


def invalidate_profile(event_ids: Iterable[object] = ()) -> None:
    """Drop the profile list and the events whose payloads show the profile.

    Event payloads embed profile names and zones, so a renamed profile makes
    the event list and each listed event detail stale.
    """
    keys = [PROFILES_LIST_KEY, EVENTS_LIST_KEY]
    keys.extend(event_detail_key(event_id) for event_id in event_ids)
    cache.delete_many(keys)

"""Tests for cache behavior.

Invalidation runs on transaction commit, so writes made inside a test
transaction are wrapped in ``django_capture_on_commit_callbacks``.
Run with: pytest tests/test_cache.py -v
"""

from datetime import datetime, timezone

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from scheduling import cache as cache_keys
from scheduling.models import Event, EventAssignment, Profile

BASE = "/api/v1"


def _event_row(**overrides) -> Event:
    fields = dict(
        title="Launch",
        start_utc=datetime(2025, 10, 18, 10, 0, tzinfo=timezone.utc),
        end_utc=datetime(2025, 10, 18, 12, 0, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Event.objects.create(**fields)


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_event_list_is_cached(self, api_client: APIClient):
        """Listing events stores the payload under the events:list key."""
        _event_row()
        api_client.get(f"{BASE}/events")
        assert len(cache.get(cache_keys.EVENTS_LIST_KEY)) == 1

    def test_event_save_invalidates_list_cache(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Saving an event invalidates the events:list cache key."""
        row = _event_row()
        api_client.get(f"{BASE}/events")

        with django_capture_on_commit_callbacks(execute=True):
            row.title = "Renamed"
            row.save()

        assert cache.get(cache_keys.EVENTS_LIST_KEY) is None
        data = api_client.get(f"{BASE}/events").json()["data"]
        assert data[0]["title"] == "Renamed"

    def test_event_save_invalidates_detail_cache(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Saving an event invalidates the events:{id} cache key."""
        row = _event_row()
        api_client.get(f"{BASE}/events/{row.id}")
        assert cache.get(cache_keys.event_detail_key(row.id)) is not None

        with django_capture_on_commit_callbacks(execute=True):
            row.title = "Renamed"
            row.save()

        assert cache.get(cache_keys.event_detail_key(row.id)) is None

    def test_invalidation_waits_for_commit(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Cached payloads stay until the writing transaction commits."""
        row = _event_row()
        api_client.get(f"{BASE}/events/{row.id}")
        key = cache_keys.event_detail_key(row.id)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            row.title = "Renamed"
            row.save()
            assert cache.get(key) is not None

        assert len(callbacks) == 1
        assert cache.get(key) is None

    def test_event_delete_invalidates_detail_cache(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Deleting an event invalidates its cached detail."""
        row = _event_row()
        event_id = row.id
        api_client.get(f"{BASE}/events/{event_id}")

        with django_capture_on_commit_callbacks(execute=True):
            row.delete()

        assert api_client.get(f"{BASE}/events/{event_id}").status_code == 404

    def test_assignment_refreshes_cached_detail(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Assigning a profile through the API is visible on the next read."""
        row = _event_row()
        profile = Profile.objects.create(name="Asha")
        api_client.get(f"{BASE}/events/{row.id}")

        with django_capture_on_commit_callbacks(execute=True):
            api_client.post(
                f"{BASE}/events/{row.id}/assign",
                {"profile_ids": [str(profile.id)]},
                format="json",
            )

        data = api_client.get(f"{BASE}/events/{row.id}").json()["data"]
        assert data["profile_ids"] == [str(profile.id)]
        assert data["profiles"][0]["name"] == "Asha"
        assert EventAssignment.objects.filter(event=row).count() == 1

    def test_profile_save_invalidates_profiles_cache(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Saving a profile invalidates the profiles:list cache key."""
        profile = Profile.objects.create(name="Asha")
        api_client.get(f"{BASE}/profiles")
        assert cache.get(cache_keys.PROFILES_LIST_KEY) is not None

        with django_capture_on_commit_callbacks(execute=True):
            profile.name = "Asha R"
            profile.save()

        assert cache.get(cache_keys.PROFILES_LIST_KEY) is None

    def test_profile_rename_refreshes_event_payloads(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        """Renaming a profile drops cached events that show its name."""
        profile = Profile.objects.create(name="Asha")
        assigned = _event_row()
        EventAssignment.objects.create(event=assigned, profile_id=profile.id)
        created = _event_row(title="Planning", created_by=profile.id)
        unrelated = _event_row(title="Other")
        for row in (assigned, created, unrelated):
            api_client.get(f"{BASE}/events/{row.id}")
        api_client.get(f"{BASE}/events")

        with django_capture_on_commit_callbacks(execute=True):
            profile.name = "Asha R"
            profile.save()

        assert cache.get(cache_keys.EVENTS_LIST_KEY) is None
        assert cache.get(cache_keys.event_detail_key(assigned.id)) is None
        assert cache.get(cache_keys.event_detail_key(created.id)) is None
        assert cache.get(cache_keys.event_detail_key(unrelated.id)) is not None
        data = api_client.get(f"{BASE}/events/{created.id}").json()["data"]
        assert data["creator"]["name"] == "Asha R"

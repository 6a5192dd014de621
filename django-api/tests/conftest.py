"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from scheduling.container import Services, build_services
from scheduling.services import TimezoneService
from scheduling.stores import InMemoryEventLogStore, InMemoryEventStore, InMemoryProfileStore


class FakeClock:
    """Clock returning a fixed instant that tests move forward explicitly."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(scope="session")
def timezones() -> TimezoneService:
    return TimezoneService()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 10, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def log_store() -> InMemoryEventLogStore:
    return InMemoryEventLogStore()


@pytest.fixture
def services(timezones, clock, log_store) -> Services:
    return build_services(
        InMemoryProfileStore(),
        InMemoryEventStore(),
        log_store,
        timezones=timezones,
        clock=clock,
    )


@pytest.fixture
def utc():
    def make(*args) -> datetime:
        return datetime(*args, tzinfo=timezone.utc)

    return make

from scheduling.stores.interfaces import EventLogStore, EventStore, ProfileStore
from scheduling.stores.memory_store import (
    InMemoryEventLogStore,
    InMemoryEventStore,
    InMemoryProfileStore,
)

__all__ = [
    "EventLogStore",
    "EventStore",
    "ProfileStore",
    "InMemoryEventLogStore",
    "InMemoryEventStore",
    "InMemoryProfileStore",
]

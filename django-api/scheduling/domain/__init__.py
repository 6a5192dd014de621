from scheduling.domain.models import (
    Event,
    EventDetail,
    EventLog,
    EventLogEntry,
    Profile,
    ProfileEvents,
    ProfileSummary,
    ProjectedEvent,
    snapshot_event,
)
from scheduling.domain.value_objects import EventId, EventLogId, ProfileId, TimeRange

__all__ = [
    "Event",
    "EventDetail",
    "EventLog",
    "EventLogEntry",
    "Profile",
    "ProfileEvents",
    "ProfileSummary",
    "ProjectedEvent",
    "snapshot_event",
    "EventId",
    "EventLogId",
    "ProfileId",
    "TimeRange",
]

from scheduling.handlers.views import (
    EventAssignView,
    EventDetailView,
    EventListView,
    EventLogDetailView,
    EventLogListView,
    EventUnassignView,
    IndexView,
    ProfileDetailView,
    ProfileEventsView,
    ProfileListView,
    ProfileTimezoneView,
    SessionEventsView,
    SessionView,
    TimezoneConvertView,
    TimezoneListView,
)

__all__ = [
    "EventAssignView",
    "EventDetailView",
    "EventListView",
    "EventLogDetailView",
    "EventLogListView",
    "EventUnassignView",
    "IndexView",
    "ProfileDetailView",
    "ProfileEventsView",
    "ProfileListView",
    "ProfileTimezoneView",
    "SessionEventsView",
    "SessionView",
    "TimezoneConvertView",
    "TimezoneListView",
]

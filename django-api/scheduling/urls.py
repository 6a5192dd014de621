from django.urls import path

from scheduling.handlers import (
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

urlpatterns = [
    path("", IndexView.as_view(), name="index"),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/assign", EventAssignView.as_view(), name="event-assign"),
    path(
        "events/<str:event_id>/unassign/<str:profile_id>",
        EventUnassignView.as_view(),
        name="event-unassign",
    ),
    path("events/<str:event_id>/logs", EventLogListView.as_view(), name="event-log-list"),
    path(
        "events/<str:event_id>/logs/<str:log_id>",
        EventLogDetailView.as_view(),
        name="event-log-detail",
    ),
    path("profiles", ProfileListView.as_view(), name="profile-list"),
    path("profiles/<str:profile_id>", ProfileDetailView.as_view(), name="profile-detail"),
    path(
        "profiles/<str:profile_id>/events",
        ProfileEventsView.as_view(),
        name="profile-events",
    ),
    path("session", SessionView.as_view(), name="session"),
    path("session/events", SessionEventsView.as_view(), name="session-events"),
    path("timezones", TimezoneListView.as_view(), name="timezone-list"),
    path("timezone/convert", TimezoneConvertView.as_view(), name="timezone-convert"),
    path(
        "timezone/<str:profile_id>",
        ProfileTimezoneView.as_view(),
        name="profile-timezone",
    ),
]

"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let the configured exception handler map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.apps import apps
from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from scheduling import cache as cache_keys
from scheduling.container import Services
from scheduling.domain import EventId
from scheduling.domain.errors import MissingFieldError, UnknownFieldError
from scheduling.handlers.responses import api_response
from scheduling.handlers.serializers import (
    ActiveProfilesSerializer,
    AssignProfilesSerializer,
    ConvertTimezoneSerializer,
    EventCreateSerializer,
    EventDetailSerializer,
    EventLogSerializer,
    EventSerializer,
    EventUpdateSerializer,
    ProfileEventsSerializer,
    ProfileSerializer,
    ProfileTimezoneSerializer,
    ProfileWriteSerializer,
    ProjectedEventSerializer,
    SessionSerializer,
)
from scheduling.services._common import parse_id

ACTOR_HEADER = "X-Actor-Id"


def get_services() -> Services:
    return apps.get_app_config("scheduling").services


def _parse(serializer_class, request: Request) -> dict:
    serializer = serializer_class(data=request.data, partial=True)
    if hasattr(request.data, "keys"):
        unknown = set(request.data.keys()) - set(serializer.fields)
        if unknown:
            raise UnknownFieldError(*unknown)
    serializer.is_valid(raise_exception=True)
    return dict(serializer.validated_data)


def _display_zone(request: Request) -> str | None:
    return request.query_params.get("timezone") or None


def _actor_id(request: Request) -> str:
    actor_id = request.headers.get(ACTOR_HEADER)
    if not actor_id:
        raise MissingFieldError(ACTOR_HEADER)
    return actor_id


class IndexView(APIView):
    """Handler for GET /api/v1/"""

    def get(self, request: Request) -> Response:
        return api_response(status.HTTP_200_OK, True, "Event Management System API is running")


class EventListView(APIView):
    """Handler for GET and POST /api/v1/events"""

    def get(self, request: Request) -> Response:
        data = cache.get(cache_keys.EVENTS_LIST_KEY)
        if data is None:
            services = get_services()
            details = services.projections.describe_all(services.events.list_events())
            data = EventDetailSerializer(details, many=True).data
            cache.set(cache_keys.EVENTS_LIST_KEY, data, cache_keys.timeout())
        return api_response(status.HTTP_200_OK, True, "Events fetched successfully", data)

    def post(self, request: Request) -> Response:
        body = _parse(EventCreateSerializer, request)
        event = get_services().events.create_event(
            title=body.get("title"),
            start_utc=body.get("start_utc"),
            end_utc=body.get("end_utc"),
            description=body.get("description"),
            timezone=body.get("timezone"),
            profile_ids=body.get("profile_ids", ()),
            created_by=body.get("created_by"),
        )
        return api_response(
            status.HTTP_201_CREATED,
            True,
            "Event created successfully",
            EventSerializer(event).data,
        )


class EventDetailView(APIView):
    """Handler for GET, PUT, PATCH and DELETE /api/v1/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        services = get_services()
        zone = _display_zone(request)
        if zone is not None:
            services.timezones.validate_zone(zone)
            projected = services.projections.project(services.events.get_event(event_id), zone)
            data = ProjectedEventSerializer(projected).data
        else:
            key = cache_keys.event_detail_key(parse_id(EventId, event_id, "event id"))
            data = cache.get(key)
            if data is None:
                detail = services.projections.describe(services.events.get_event(event_id))
                data = EventDetailSerializer(detail).data
                cache.set(key, data, cache_keys.timeout())
        return api_response(status.HTTP_200_OK, True, "Event fetched successfully", data)

    def put(self, request: Request, event_id: str) -> Response:
        body = _parse(EventUpdateSerializer, request)
        updated_by = body.pop("updated_by", None)
        event = get_services().events.replace_event(event_id, body, updated_by=updated_by)
        return api_response(
            status.HTTP_200_OK, True, "Event updated successfully", EventSerializer(event).data
        )

    def patch(self, request: Request, event_id: str) -> Response:
        body = _parse(EventUpdateSerializer, request)
        body.pop("updated_by", None)
        event = get_services().events.patch_event(event_id, body)
        return api_response(
            status.HTTP_200_OK, True, "Event partially updated", EventSerializer(event).data
        )

    def delete(self, request: Request, event_id: str) -> Response:
        event = get_services().events.delete_event(event_id)
        return api_response(
            status.HTTP_200_OK, True, "Event deleted successfully", EventSerializer(event).data
        )


class EventAssignView(APIView):
    """Handler for POST /api/v1/events/{event_id}/assign"""

    def post(self, request: Request, event_id: str) -> Response:
        body = _parse(AssignProfilesSerializer, request)
        event = get_services().events.assign_profiles(event_id, body.get("profile_ids", []))
        return api_response(
            status.HTTP_200_OK, True, "Profiles assigned successfully", EventSerializer(event).data
        )


class EventUnassignView(APIView):
    """Handler for DELETE /api/v1/events/{event_id}/unassign/{profile_id}"""

    def delete(self, request: Request, event_id: str, profile_id: str) -> Response:
        event = get_services().events.unassign_profile(event_id, profile_id)
        return api_response(
            status.HTTP_200_OK, True, "Profile unassigned successfully", EventSerializer(event).data
        )


class EventLogListView(APIView):
    """Handler for GET /api/v1/events/{event_id}/logs"""

    def get(self, request: Request, event_id: str) -> Response:
        entries = get_services().audit.list_for_event(event_id, _display_zone(request))
        return api_response(
            status.HTTP_200_OK,
            True,
            "Event logs fetched successfully",
            EventLogSerializer(entries, many=True).data,
        )


class EventLogDetailView(APIView):
    """Handler for GET /api/v1/events/{event_id}/logs/{log_id}"""

    def get(self, request: Request, event_id: str, log_id: str) -> Response:
        entry = get_services().audit.get_one(event_id, log_id, _display_zone(request))
        return api_response(
            status.HTTP_200_OK,
            True,
            "Log entry fetched successfully",
            EventLogSerializer(entry).data,
        )


class ProfileListView(APIView):
    """Handler for GET and POST /api/v1/profiles"""

    def get(self, request: Request) -> Response:
        data = cache.get(cache_keys.PROFILES_LIST_KEY)
        if data is None:
            data = ProfileSerializer(get_services().profiles.list_profiles(), many=True).data
            cache.set(cache_keys.PROFILES_LIST_KEY, data, cache_keys.timeout())
        return api_response(status.HTTP_200_OK, True, "Profiles fetched successfully", data)

    def post(self, request: Request) -> Response:
        body = _parse(ProfileWriteSerializer, request)
        profile = get_services().profiles.create_profile(
            name=body.get("name"), timezone=body.get("timezone")
        )
        return api_response(
            status.HTTP_201_CREATED,
            True,
            "Profile created successfully",
            ProfileSerializer(profile).data,
        )


class ProfileDetailView(APIView):
    """Handler for GET, PUT and PATCH /api/v1/profiles/{profile_id}"""

    def get(self, request: Request, profile_id: str) -> Response:
        profile = get_services().profiles.get_profile(profile_id)
        return api_response(
            status.HTTP_200_OK, True, "Profile fetched successfully", ProfileSerializer(profile).data
        )

    def put(self, request: Request, profile_id: str) -> Response:
        body = _parse(ProfileWriteSerializer, request)
        profile = get_services().profiles.update_profile(
            profile_id,
            name=body.get("name"),
            timezone=body.get("timezone") or None,
        )
        return api_response(
            status.HTTP_200_OK, True, "Profile updated successfully", ProfileSerializer(profile).data
        )

    patch = put


class ProfileEventsView(APIView):
    """Handler for GET /api/v1/profiles/{profile_id}/events"""

    def get(self, request: Request, profile_id: str) -> Response:
        result = get_services().projections.events_for_profile(
            profile_id, _display_zone(request)
        )
        return api_response(
            status.HTTP_200_OK,
            True,
            "Events for profile fetched successfully",
            ProfileEventsSerializer(result).data,
        )


class SessionView(APIView):
    """Handler for GET and POST /api/v1/session"""

    def get(self, request: Request) -> Response:
        actor = get_services().profiles.get_profile(_actor_id(request))
        return api_response(
            status.HTTP_200_OK,
            True,
            "Active profiles fetched successfully",
            SessionSerializer(actor).data,
        )

    def post(self, request: Request) -> Response:
        actor_id = _actor_id(request)
        body = _parse(ActiveProfilesSerializer, request)
        services = get_services()
        services.profiles.set_active_profiles(actor_id, body.get("active_profiles", []))
        actor = services.profiles.get_profile(actor_id)
        return api_response(
            status.HTTP_200_OK,
            True,
            "Active profiles updated successfully",
            SessionSerializer(actor).data,
        )


class SessionEventsView(APIView):
    """Handler for GET /api/v1/session/events"""

    def get(self, request: Request) -> Response:
        result = get_services().projections.events_for_actor(
            _actor_id(request), _display_zone(request)
        )
        return api_response(
            status.HTTP_200_OK,
            True,
            "Events for active profiles fetched successfully",
            ProfileEventsSerializer(result).data,
        )


class TimezoneListView(APIView):
    """Handler for GET /api/v1/timezones"""

    def get(self, request: Request) -> Response:
        data = cache.get(cache_keys.TIMEZONES_LIST_KEY)
        if data is None:
            data = sorted(get_services().timezones.list_zones())
            cache.set(cache_keys.TIMEZONES_LIST_KEY, data, None)
        return api_response(
            status.HTTP_200_OK, True, "Supported timezones fetched successfully", data
        )


class ProfileTimezoneView(APIView):
    """Handler for GET and PATCH /api/v1/timezone/{profile_id}"""

    def get(self, request: Request, profile_id: str) -> Response:
        profile = get_services().profiles.get_profile(profile_id)
        return api_response(
            status.HTTP_200_OK,
            True,
            "User timezone fetched successfully",
            {"user_id": str(profile.id), "name": profile.name, "timezone": profile.timezone},
        )

    def patch(self, request: Request, profile_id: str) -> Response:
        body = _parse(ProfileTimezoneSerializer, request)
        profile = get_services().profiles.update_timezone(profile_id, body.get("timezone"))
        return api_response(
            status.HTTP_200_OK,
            True,
            "User timezone updated successfully",
            {"user_id": str(profile.id), "name": profile.name, "timezone": profile.timezone},
        )


class TimezoneConvertView(APIView):
    """Handler for POST /api/v1/timezone/convert"""

    def post(self, request: Request) -> Response:
        serializer = ConvertTimezoneSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        timezones = get_services().timezones
        zone = serializer.validated_data["timezone"]
        timezones.validate_zone(zone)
        data = timezones.convert(serializer.validated_data["timestamp_utc"], zone)
        return api_response(status.HTTP_200_OK, True, "Timestamp converted successfully", data)

"""Serializers for parsing request bodies and rendering domain models.

Input serializers only check shapes and types. Business rules (required
fields, time ranges, zone validity, id existence) are enforced by the
services so the rules are the same for every caller.
"""

from rest_framework import serializers


class IdField(serializers.Field):
    """Renders a domain id value object as its UUID string."""

    def to_representation(self, value):
        return str(value)


def _sorted_ids(ids) -> list[str]:
    return sorted(str(pid) for pid in ids)


# Input


class EventWriteSerializer(serializers.Serializer):
    """Body of event create, replace and patch requests."""

    title = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    timezone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    start_utc = serializers.DateTimeField(required=False, allow_null=True)
    end_utc = serializers.DateTimeField(required=False, allow_null=True)
    profile_ids = serializers.ListField(child=serializers.CharField(), required=False)


class EventCreateSerializer(EventWriteSerializer):
    created_by = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EventUpdateSerializer(EventWriteSerializer):
    updated_by = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AssignProfilesSerializer(serializers.Serializer):
    profile_ids = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )


class ProfileWriteSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    timezone = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProfileTimezoneSerializer(serializers.Serializer):
    timezone = serializers.CharField(required=False, allow_blank=True)


class ActiveProfilesSerializer(serializers.Serializer):
    active_profiles = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )


class ConvertTimezoneSerializer(serializers.Serializer):
    timestamp_utc = serializers.DateTimeField()
    timezone = serializers.CharField()


# Output


class ProfileSerializer(serializers.Serializer):
    """Serializer for Profile domain model."""

    id = IdField()
    name = serializers.CharField()
    timezone = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class ProfileSummarySerializer(serializers.Serializer):
    """Serializer for the identifying fields of a profile."""

    id = IdField()
    name = serializers.CharField()
    timezone = serializers.CharField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = IdField()
    title = serializers.CharField()
    description = serializers.CharField()
    timezone = serializers.CharField()
    start_utc = serializers.DateTimeField()
    end_utc = serializers.DateTimeField()
    profile_ids = serializers.SerializerMethodField()
    created_by = IdField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()

    def get_profile_ids(self, event) -> list[str]:
        return _sorted_ids(event.profile_ids)


class EventDetailSerializer(serializers.Serializer):
    """Serializer for an Event with its referenced profiles resolved.

    Works for both EventDetail and ProjectedEvent, which wrap the Event the
    same way.
    """

    id = IdField(source="event.id")
    title = serializers.CharField(source="event.title")
    description = serializers.CharField(source="event.description")
    timezone = serializers.CharField(source="event.timezone")
    start_utc = serializers.DateTimeField(source="event.start_utc")
    end_utc = serializers.DateTimeField(source="event.end_utc")
    profile_ids = serializers.SerializerMethodField()
    profiles = ProfileSummarySerializer(many=True)
    created_by = IdField(source="event.created_by")
    creator = ProfileSummarySerializer(allow_null=True)
    created_at = serializers.DateTimeField(source="event.created_at")
    updated_at = serializers.DateTimeField(source="event.updated_at")

    def get_profile_ids(self, detail) -> list[str]:
        return _sorted_ids(detail.event.profile_ids)


class ProjectedEventSerializer(EventDetailSerializer):
    """Serializer for an Event projected into a display zone."""

    display_timezone = serializers.CharField()
    start_local = serializers.CharField()
    end_local = serializers.CharField()
    created_at_local = serializers.CharField()
    updated_at_local = serializers.CharField()


class ProfileEventsSerializer(serializers.Serializer):
    """Serializer for a profile's projected events."""

    profile = ProfileSummarySerializer()
    display_timezone = serializers.CharField()
    events = ProjectedEventSerializer(many=True)


class EventLogSerializer(serializers.Serializer):
    """Serializer for an EventLogEntry."""

    id = IdField(source="log.id")
    event_id = IdField(source="log.event_id")
    updated_by = IdField(source="log.updated_by")
    updater = ProfileSummarySerializer(allow_null=True)
    before = serializers.DictField(source="log.before")
    after = serializers.DictField(source="log.after")
    timestamp_utc = serializers.DateTimeField(source="log.timestamp_utc")
    timestamp_local = serializers.CharField(allow_null=True)


class SessionSerializer(serializers.Serializer):
    """Serializer for an actor's active-profile session."""

    user_id = IdField(source="id")
    name = serializers.CharField()
    active_profiles = serializers.SerializerMethodField()

    def get_active_profiles(self, profile) -> list[str]:
        return _sorted_ids(profile.active_profile_ids)

"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.utils import timezone as dj_timezone

from scheduling.domain.errors import ImmutableLogError


class Profile(models.Model):
    """Persistence model for profiles."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    timezone = models.CharField(max_length=64, default="UTC")
    active_profile_ids = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(default=dj_timezone.now)
    updated_at = models.DateTimeField(default=dj_timezone.now)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="profile_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    timezone = models.CharField(max_length=64, default="UTC")
    start_utc = models.DateTimeField()
    end_utc = models.DateTimeField()
    # Not a foreign key: creators are not checked for existence.
    created_by = models.UUIDField(blank=True, null=True)
    created_at = models.DateTimeField(default=dj_timezone.now)
    updated_at = models.DateTimeField(default=dj_timezone.now)

    class Meta:
        ordering = ["start_utc"]
        indexes = [
            models.Index(fields=["start_utc"], name="event_start_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class EventAssignment(models.Model):
    """One member of an event's assigned profile set."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="assignments")
    profile_id = models.UUIDField()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["event", "profile_id"], name="unique_event_profile"
            ),
        ]
        indexes = [
            models.Index(fields=["profile_id"], name="assignment_profile_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.profile_id}"


class EventLogQuerySet(models.QuerySet):
    """Queryset refusing bulk update and delete of log rows."""

    def update(self, **kwargs):
        raise ImmutableLogError()

    def delete(self):
        raise ImmutableLogError()


class EventLog(models.Model):
    """Persistence model for the audit trail of full event updates.

    ``event_id`` is a plain column so logs outlive the event they describe.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(db_index=True)
    updated_by = models.UUIDField(blank=True, null=True)
    before = models.JSONField()
    after = models.JSONField()
    timestamp_utc = models.DateTimeField(default=dj_timezone.now)

    objects = EventLogQuerySet.as_manager()

    class Meta:
        ordering = ["-timestamp_utc"]
        indexes = [
            models.Index(fields=["event_id", "-timestamp_utc"], name="eventlog_event_ts_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} @ {self.timestamp_utc.isoformat()}"

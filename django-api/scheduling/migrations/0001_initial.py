import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("timezone", models.CharField(default="UTC", max_length=64)),
                ("start_utc", models.DateTimeField()),
                ("end_utc", models.DateTimeField()),
                ("created_by", models.UUIDField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["start_utc"],
                "indexes": [
                    models.Index(fields=["start_utc"], name="event_start_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="EventLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("event_id", models.UUIDField(db_index=True)),
                ("updated_by", models.UUIDField(blank=True, null=True)),
                ("before", models.JSONField()),
                ("after", models.JSONField()),
                (
                    "timestamp_utc",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
            ],
            options={
                "ordering": ["-timestamp_utc"],
                "indexes": [
                    models.Index(
                        fields=["event_id", "-timestamp_utc"],
                        name="eventlog_event_ts_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("timezone", models.CharField(default="UTC", max_length=64)),
                ("active_profile_ids", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="profile_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="EventAssignment",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("profile_id", models.UUIDField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignments",
                        to="scheduling.event",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["profile_id"], name="assignment_profile_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "profile_id"), name="unique_event_profile"
                    ),
                ],
            },
        ),
    ]

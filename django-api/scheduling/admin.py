from django.contrib import admin

from scheduling.models import Event, EventAssignment, EventLog, Profile


class EventAssignmentInline(admin.TabularInline):
    model = EventAssignment
    extra = 1


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ["name", "timezone", "created_at"]
    search_fields = ["name"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "timezone", "start_utc", "end_utc", "updated_at"]
    search_fields = ["title"]
    inlines = [EventAssignmentInline]


@admin.register(EventLog)
class EventLogAdmin(admin.ModelAdmin):
    list_display = ["event_id", "updated_by", "timestamp_utc"]
    list_filter = ["timestamp_utc"]
    readonly_fields = ["id", "event_id", "updated_by", "before", "after", "timestamp_utc"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

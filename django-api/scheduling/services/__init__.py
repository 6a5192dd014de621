from scheduling.services.audit_service import AuditLogService
from scheduling.services.event_service import EventService
from scheduling.services.profile_service import ProfileService
from scheduling.services.projection_service import ProjectionService
from scheduling.services.timezone_service import TimezoneService

__all__ = [
    "AuditLogService",
    "EventService",
    "ProfileService",
    "ProjectionService",
    "TimezoneService",
]

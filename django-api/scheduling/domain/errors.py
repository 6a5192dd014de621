"""Domain error codes for the scheduling module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"
    MISSING_FIELD = "MISSING_FIELD"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    INVALID_TIMEZONE = "INVALID_TIMEZONE"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    PROFILES_NOT_FOUND = "PROFILES_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    EVENT_LOG_NOT_FOUND = "EVENT_LOG_NOT_FOUND"
    IMMUTABLE_LOG = "IMMUTABLE_LOG"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Malformed or semantically invalid input."""


class NotFoundError(DomainError):
    """A referenced id does not resolve."""


class ConflictError(DomainError):
    """Reserved for concurrent-mutation conflicts."""

    def __init__(self, message: str = "Concurrent modification detected") -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=message)


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, field: str = "id") -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {field} format",
        )
        self.field = field


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or blank."""

    def __init__(self, *fields: str) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELD,
            message=f"Missing required fields: {', '.join(fields)}",
        )
        self.fields = fields


class UnknownFieldError(ValidationError):
    """Raised when a request names a field that is not accepted."""

    def __init__(self, *fields: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_FIELD,
            message=f"Unknown fields: {', '.join(sorted(fields))}",
        )
        self.fields = fields


class InvalidTimeRangeError(ValidationError):
    """Raised when an end instant is not strictly after its start."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIME_RANGE,
            message="End date/time must be after start date/time",
        )


class InvalidTimezoneError(ValidationError):
    """Raised when a zone identifier is not a recognized IANA zone."""

    def __init__(self, zone: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIMEZONE,
            message="Invalid timezone provided",
        )
        self.zone = zone


class EmptySelectionError(ValidationError):
    """Raised when a required set of ids is empty."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_SELECTION,
            message=f"{field} must be a non-empty array",
        )
        self.field = field


class ProfilesNotFoundError(ValidationError):
    """Raised when some profiles named in an assignment do not exist."""

    def __init__(self, missing: frozenset) -> None:
        super().__init__(
            code=ErrorCode.PROFILES_NOT_FOUND,
            message="Some profiles not found",
        )
        self.missing = missing


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class ProfileNotFoundError(NotFoundError):
    """Raised when a profile is not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
        )
        self.profile_id = profile_id


class EventLogNotFoundError(NotFoundError):
    """Raised when a log entry is absent or belongs to another event."""

    def __init__(self, log_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_LOG_NOT_FOUND,
            message="Log entry not found",
        )
        self.log_id = log_id


class ImmutableLogError(DomainError):
    """Raised when something tries to change or remove a stored log entry."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.IMMUTABLE_LOG,
            message="Event log entries cannot be modified or deleted",
        )

"""Helpers shared by the services."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar

from scheduling.domain.errors import InvalidIdError

Clock = Callable[[], datetime]

IdT = TypeVar("IdT")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_id(id_type: type[IdT], value: object, field: str = "id") -> IdT:
    """Parse ``value`` into ``id_type``.

    Raises:
        InvalidIdError: If ``value`` is not a valid UUID.
    """
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError(field) from None

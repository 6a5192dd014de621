"""Timezone service - the single place where zone rules are applied.

Zone rules come from ``zoneinfo`` backed by the ``tzdata`` package, so
offsets and DST transitions are resolved for the specific instant being
converted rather than from a fixed offset.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, available_timezones

from scheduling.domain.errors import InvalidTimezoneError

UTC_ZONE = "UTC"


class TimezoneService:
    """Validates zone identifiers and projects instants between zones."""

    def __init__(self, zones: Iterable[str] | None = None) -> None:
        names = available_timezones() if zones is None else zones
        self._zones = frozenset(names) | {UTC_ZONE}

    def list_zones(self) -> frozenset[str]:
        """Return every supported IANA zone identifier."""
        return self._zones

    def is_valid_zone(self, zone: object) -> bool:
        return isinstance(zone, str) and zone in self._zones

    def validate_zone(self, zone: object) -> ZoneInfo:
        """Return the ZoneInfo for ``zone``.

        Raises:
            InvalidTimezoneError: If ``zone`` is not a supported identifier.
        """
        if not self.is_valid_zone(zone):
            raise InvalidTimezoneError(zone)
        return ZoneInfo(zone)

    @staticmethod
    def as_utc(value: datetime) -> datetime:
        """Normalize an instant to aware UTC. Naive values are taken as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_zone(self, instant_utc: datetime, zone: str) -> datetime:
        """Return ``instant_utc`` as an aware datetime in ``zone``."""
        return self.as_utc(instant_utc).astimezone(self.validate_zone(zone))

    def to_utc(self, local: datetime, zone: str) -> datetime:
        """Return the UTC instant for a wall-clock time in ``zone``.

        A naive ``local`` is read in ``zone`` using its ``fold`` attribute to
        pick between the two instants of an ambiguous wall-clock time. An
        aware ``local`` already names an instant and is converted directly.
        """
        tz = self.validate_zone(zone)
        if local.tzinfo is None:
            local = local.replace(tzinfo=tz)
        return local.astimezone(timezone.utc)

    def format_local(self, instant_utc: datetime, zone: str) -> str:
        """Return ``instant_utc`` in ``zone`` as ISO-8601 with offset."""
        return self.to_zone(instant_utc, zone).isoformat(timespec="seconds")

    def convert(self, timestamp_utc: datetime, zone: str) -> dict[str, str]:
        """Convert an arbitrary UTC instant for display in ``zone``."""
        instant = self.as_utc(timestamp_utc)
        return {
            "original": instant.isoformat().replace("+00:00", "Z"),
            "converted": self.format_local(instant, zone),
            "timezone": zone,
        }

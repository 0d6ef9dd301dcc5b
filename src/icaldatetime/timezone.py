"""Timezone resolution for floating date-time values.

A floating value carries civil wall-clock fields without a zone anchor. A
resolver turns those fields into an absolute instant for one zone.

Resolution policy:
    - Out-of-month days roll over first (February 31 becomes early March),
      the same normalization used for fixed (UTC) values.
    - Wall times are interpreted with fold=0 (PEP 495): an ambiguous wall time
      in a backward transition takes the earlier instant, and a wall time
      inside a forward gap uses the offset in effect before the gap, which
      lands on the instant the gap length later on the wall clock.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .epoch import civil_to_seconds, normalize_civil
from .exceptions import ICalTimezoneError

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class TimezoneResolver(Protocol):
    """Capability that resolves civil fields to an absolute instant in a zone."""

    def to_timestamp(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        """Return seconds since the Unix epoch for the civil fields in this zone."""
        ...


class TzInfoResolver:
    """Resolver backed by any Python ``tzinfo`` implementation."""

    tzinfo: tzinfo

    def __init__(self, zone: tzinfo) -> None:
        self.tzinfo = zone

    def utc_offset(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        """Offset from UTC in seconds for the (normalized) civil fields.

        Raises:
            ICalTimezoneError: If the fields fall outside 0001-9999 after
                normalization or the zone provides no offset
        """
        year, month, day, hour, minute, second = normalize_civil(year, month, day, hour, minute, second)

        if not 1 <= year <= 9999:
            raise ICalTimezoneError(f"Cannot resolve year {year} in zone {self}")

        wall = datetime(year, month, day, hour, minute, second, tzinfo=self.tzinfo)
        offset = wall.utcoffset()
        if offset is None:
            raise ICalTimezoneError(f"Zone {self} provides no UTC offset")

        if wall.replace(fold=1).utcoffset() != offset:
            _LOGGER.debug("Wall time %s is ambiguous or skipped in zone %s, using fold=0", wall.isoformat(), self)

        return offset // timedelta(seconds=1)

    def to_timestamp(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        offset = self.utc_offset(year, month, day, hour, minute, second)
        return civil_to_seconds(year, month, day, hour, minute, second) - offset

    def __str__(self) -> str:
        return str(self.tzinfo)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tzinfo!r})"


class ZoneInfoResolver(TzInfoResolver):
    """Resolver for an IANA timezone key such as ``Europe/Copenhagen``."""

    key: str

    def __init__(self, key: str) -> None:
        try:
            zone = ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ICalTimezoneError(f"Unknown timezone {key!r}: {e}") from e

        super().__init__(zone)
        self.key = key

    def __repr__(self) -> str:
        return f"ZoneInfoResolver({self.key!r})"


class FixedOffsetResolver(TzInfoResolver):
    """Resolver for a constant UTC offset, given in seconds east of UTC."""

    offset_seconds: int

    def __init__(self, offset_seconds: int) -> None:
        try:
            zone = timezone(timedelta(seconds=offset_seconds))
        except ValueError as e:
            raise ICalTimezoneError(f"Invalid UTC offset {offset_seconds}s: {e}") from e

        super().__init__(zone)
        self.offset_seconds = offset_seconds

    def to_timestamp(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        # Constant offset: no zone lookup and no year restriction
        return civil_to_seconds(year, month, day, hour, minute, second) - self.offset_seconds

    def __repr__(self) -> str:
        return f"FixedOffsetResolver({self.offset_seconds})"

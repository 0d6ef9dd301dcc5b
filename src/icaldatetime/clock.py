"""Time sources providing the current instant and the local zone.

Floating values without an explicit timezone are read in the local zone of a
time source. ``SystemClock`` uses the process clock and zone, ``FixedClock``
pins both for deterministic use.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Protocol, runtime_checkable

from .epoch import CivilFields, civil_to_seconds, seconds_to_civil
from .exceptions import FieldRangeError, ICalTimezoneError
from .timezone import TzInfoResolver

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class TimeSource(Protocol):
    """Clock and local zone collaborator."""

    def now(self) -> int:
        """Current instant in whole seconds since the Unix epoch."""
        ...

    def local_civil(self, timestamp: int) -> CivilFields:
        """Civil fields of an instant on the local wall clock."""
        ...

    def local_timestamp(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        """Instant of civil fields read as local wall-clock time."""
        ...


def _unrenderable(timestamp: int) -> FieldRangeError:
    """Range error for an instant outside what a clock can render."""
    if timestamp < 0:
        return FieldRangeError("year", "minimum", 0)
    return FieldRangeError("year", "maximum", 9999)


class SystemClock:
    """Process clock and the process's configured local zone."""

    def now(self) -> int:
        return int(time.time())

    def local_civil(self, timestamp: int) -> CivilFields:
        """Render an instant with ``time.localtime``.

        Raises:
            FieldRangeError: If the platform cannot render the instant
        """
        try:
            local = time.localtime(timestamp)
        except (OverflowError, OSError, ValueError) as e:
            _LOGGER.debug("Platform cannot render timestamp %d in local time: %s", timestamp, e)
            raise _unrenderable(timestamp) from e

        return local.tm_year, local.tm_mon, local.tm_mday, local.tm_hour, local.tm_min, local.tm_sec

    def local_timestamp(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        """Resolve local civil fields the way ``mktime`` does.

        The offset is looked up twice: once for the wall time read as UTC and
        once for the resulting guess. The second offset wins only when it maps
        back onto itself, so wall times inside a forward gap keep the offset in
        effect before the gap.
        """
        wall = civil_to_seconds(year, month, day, hour, minute, second)

        first_offset = self._offset(wall)
        guess = wall - first_offset

        second_offset = self._offset(guess)
        if second_offset == first_offset:
            return guess

        candidate = wall - second_offset
        if self._offset(candidate) == second_offset:
            return candidate

        _LOGGER.debug("Local wall time %d falls into a transition gap, keeping offset %ds", wall, first_offset)
        return guess

    @staticmethod
    def _offset(timestamp: int) -> int:
        try:
            return time.localtime(timestamp).tm_gmtoff
        except (OverflowError, OSError, ValueError) as e:
            raise ICalTimezoneError(f"Cannot determine local UTC offset at {timestamp}: {e}") from e

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Time source frozen at one instant with an explicit local zone.

    Zones with a constant offset, such as UTC, are applied with plain integer
    arithmetic and cover year 0. Zones with transitions go through
    ``datetime`` and are limited to years 1-9999.

    Args:
        timestamp: Instant returned by ``now()``
        zone: Zone used as "local" time (default UTC)
    """

    timestamp: int
    zone: tzinfo
    _fixed_offset: int | None

    def __init__(self, timestamp: int, zone: tzinfo = UTC) -> None:
        self.timestamp = timestamp
        self.zone = zone
        self._resolver = TzInfoResolver(zone)

        offset = zone.utcoffset(None)
        self._fixed_offset = None if offset is None else offset // timedelta(seconds=1)

    def now(self) -> int:
        return self.timestamp

    def local_civil(self, timestamp: int) -> CivilFields:
        if self._fixed_offset is not None:
            return seconds_to_civil(timestamp + self._fixed_offset)

        try:
            local = datetime.fromtimestamp(timestamp, tz=self.zone)
        except (OverflowError, OSError, ValueError) as e:
            _LOGGER.debug("Cannot render timestamp %d in zone %s: %s", timestamp, self.zone, e)
            raise _unrenderable(timestamp) from e

        return local.year, local.month, local.day, local.hour, local.minute, local.second

    def local_timestamp(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
        if self._fixed_offset is not None:
            return civil_to_seconds(year, month, day, hour, minute, second) - self._fixed_offset

        return self._resolver.to_timestamp(year, month, day, hour, minute, second)

    def __repr__(self) -> str:
        return f"FixedClock({self.timestamp}, {self.zone!r})"

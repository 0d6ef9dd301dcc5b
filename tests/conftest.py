"""Shared test fixtures for pyICalDateTime tests."""

from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from icaldatetime.clock import FixedClock
from icaldatetime.timezone import ZoneInfoResolver

# 2024-01-01T00:00:00Z
NEW_YEAR_2024 = 1704067200


class StubDate:
    """External date object returning canned values."""

    def __init__(self, timestamp: int, civil_text: str) -> None:
        self.timestamp = timestamp
        self.civil_text = civil_text

    def get_timestamp(self) -> int:
        return self.timestamp

    def format_civil(self) -> str:
        return self.civil_text


@pytest.fixture
def utc_clock() -> FixedClock:
    """Clock frozen at 2024-01-01T00:00:00Z with UTC as local zone."""
    return FixedClock(NEW_YEAR_2024)


@pytest.fixture
def copenhagen_clock() -> FixedClock:
    """Clock frozen at 2024-01-01T00:00:00Z with Europe/Copenhagen as local zone."""
    return FixedClock(NEW_YEAR_2024, ZoneInfo("Europe/Copenhagen"))


@pytest.fixture
def new_york() -> ZoneInfoResolver:
    return ZoneInfoResolver("America/New_York")


@pytest.fixture
def stub_date() -> StubDate:
    """Date object at 2024-01-01T00:00:00Z whose civil text reads 2024-06-15 12:30."""
    return StubDate(NEW_YEAR_2024, "20240615123000")


@pytest.fixture
def make_stub_date() -> type[StubDate]:
    """Factory for external date objects with custom values."""
    return StubDate

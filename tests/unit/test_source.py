"""Unit tests for construction inputs and raw value coercion."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from icaldatetime.clock import FixedClock
from icaldatetime.exceptions import InvalidInputTypeError
from icaldatetime.value.source import (
    DateTimeAdapter,
    EncodedText,
    ExternalDateTime,
    ExternalObject,
    FieldSet,
    NumericInstant,
    as_number,
    coerce,
)

TEST_NEW_YEAR_2024 = 1704067200  # 2024-01-01T00:00:00Z


@pytest.mark.unit
class TestAsNumber:
    """Tests for as_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, 42),
            (-7, -7),
            (2.5, 2.5),
            (Decimal("12.5"), 12.5),
            ("2024", 2024),
            (" 42 ", 42),
            ("-7", -7),
            ("+3", 3),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("59.9", 59.9),
        ],
    )
    def test_numeric_values(self, value: Any, expected: float) -> None:
        """Test values that are accepted as numbers."""
        assert as_number(value) == expected

    def test_numeric_text_without_fraction_is_int(self) -> None:
        assert isinstance(as_number("2024"), int)

    @pytest.mark.parametrize(
        "value",
        [
            None, True, False, "", "abc", "1_000", "nan", "inf", "12abc", "٢٠٢٤",
            float("nan"), float("inf"), Decimal("sNaN"), Decimal("1e400"), "1" * 5000, [1],
        ],
    )
    def test_non_numeric_values(self, value: Any) -> None:
        """Test values that are not numbers, including booleans and non-finite floats."""
        assert as_number(value) is None


@pytest.mark.unit
class TestCoerce:
    """Tests for mapping raw values onto input variants."""

    @pytest.mark.parametrize(
        "source",
        [
            NumericInstant(0),
            FieldSet({}),
            EncodedText("20240101T000000Z"),
        ],
    )
    def test_variants_pass_through(self, source: Any) -> None:
        assert coerce(source) is source

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (TEST_NEW_YEAR_2024, NumericInstant(TEST_NEW_YEAR_2024)),
            ("1704067200", NumericInstant(TEST_NEW_YEAR_2024)),
            (1.5e9, NumericInstant(1.5e9)),
            ("20240101T000000Z", EncodedText("20240101T000000Z")),
            ("2024-01-01", EncodedText("2024-01-01")),
        ],
    )
    def test_numbers_and_text(self, raw: Any, expected: Any) -> None:
        """Test that numbers and numeric text become instants, other text encoded text."""
        assert coerce(raw) == expected

    def test_mapping(self) -> None:
        fields = {"year": 2024}
        assert coerce(fields) == FieldSet(fields)

    def test_datetime_is_wrapped(self, utc_clock: FixedClock) -> None:
        """Test that a datetime is wrapped in an adapter using the given clock."""
        value = datetime(2024, 1, 1)
        source = coerce(value, utc_clock)

        assert isinstance(source, ExternalObject)
        assert isinstance(source.obj, DateTimeAdapter)
        assert source.obj.value is value
        assert source.obj.clock is utc_clock

    def test_external_date_object(self, stub_date: Any) -> None:
        """Test that any object with get_timestamp and format_civil is accepted."""
        assert coerce(stub_date) == ExternalObject(stub_date)
        assert coerce(ExternalObject(stub_date)).obj is stub_date

    @pytest.mark.parametrize(
        "raw",
        [True, [2024, 1, 1], object(), date(2024, 1, 1), float("nan"), b"20240101T000000Z"],
    )
    def test_unsupported_types_raise(self, raw: Any) -> None:
        """Test that unsupported types raise InvalidInputTypeError naming the type."""
        with pytest.raises(InvalidInputTypeError, match=type(raw).__name__):
            coerce(raw)

    def test_invalid_input_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            coerce(object())


@pytest.mark.unit
class TestDateTimeAdapter:
    """Tests for exposing datetime objects as external date objects."""

    def test_is_external_date_time(self) -> None:
        assert isinstance(DateTimeAdapter(datetime(2024, 1, 1)), ExternalDateTime)

    def test_aware_timestamp(self) -> None:
        """Test that aware datetimes report their own instant."""
        value = datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=1)))
        assert DateTimeAdapter(value).get_timestamp() == TEST_NEW_YEAR_2024

    def test_naive_timestamp_uses_clock(self, copenhagen_clock: FixedClock) -> None:
        """Test that naive datetimes are local time of the clock."""
        adapter = DateTimeAdapter(datetime(2024, 1, 1, 1, 0, 0), copenhagen_clock)
        assert adapter.get_timestamp() == TEST_NEW_YEAR_2024

    def test_format_civil_drops_microseconds(self) -> None:
        value = datetime(2024, 6, 15, 12, 30, 5, 999999, tzinfo=timezone.utc)
        assert DateTimeAdapter(value).format_civil() == "20240615123005"

    def test_format_civil_pads_early_years(self) -> None:
        assert DateTimeAdapter(datetime(5, 1, 2, 3, 4, 5)).format_civil() == "00050102030405"

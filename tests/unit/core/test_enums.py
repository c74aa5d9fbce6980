"""Unit tests for ColumnType resolution and conversion."""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from decimal import Decimal

import pytest

from cdp.queryservice.core import ColumnType, RequestKind


class TestFromDeclared:
    """Test declared type name resolution."""

    @pytest.mark.parametrize(
        "declared,expected",
        [
            ("VARCHAR", ColumnType.VARCHAR),
            ("varchar(255)", ColumnType.VARCHAR),
            ("string", ColumnType.VARCHAR),
            ("DECIMAL(18,2)", ColumnType.DECIMAL),
            ("Number", ColumnType.DECIMAL),
            ("int", ColumnType.INTEGER),
            ("BIGINT", ColumnType.BIGINT),
            ("float", ColumnType.DOUBLE),
            ("BOOLEAN", ColumnType.BOOLEAN),
            ("TIMESTAMP WITH TIME ZONE", ColumnType.TIMESTAMP),
            (" date ", ColumnType.DATE),
            ("GEOGRAPHY", ColumnType.OTHER),
            (None, ColumnType.OTHER),
            ("", ColumnType.OTHER),
        ],
    )
    def test_resolution(self, declared, expected):
        assert ColumnType.from_declared(declared) is expected


class TestInfer:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, ColumnType.BOOLEAN),
            (1, ColumnType.BIGINT),
            (1.5, ColumnType.DOUBLE),
            ("x", ColumnType.VARCHAR),
            ({"a": 1}, ColumnType.OTHER),
        ],
    )
    def test_infer(self, value, expected):
        assert ColumnType.infer(value) is expected


class TestTypeCodes:
    def test_jdbc_codes(self):
        assert ColumnType.VARCHAR.type_code == 12
        assert ColumnType.DECIMAL.type_code == 3
        assert ColumnType.BIGINT.type_code == -5
        assert ColumnType.TIMESTAMP.type_code == 93
        assert ColumnType.OTHER.type_code == 1111


class TestConvert:
    """Test cell conversion per type."""

    def test_none_passes_through(self):
        for column_type in ColumnType:
            assert column_type.convert(None) is None

    def test_decimal_keeps_float_repr(self):
        assert ColumnType.DECIMAL.convert(0.1) == Decimal("0.1")
        assert ColumnType.DECIMAL.convert("123.45") == Decimal("123.45")

    def test_integer(self):
        assert ColumnType.INTEGER.convert("42") == 42
        assert ColumnType.BIGINT.convert(7.0) == 7

    def test_integer_rejects_lossy_float(self):
        with pytest.raises(ValueError):
            ColumnType.INTEGER.convert(1.5)

    @pytest.mark.parametrize("value,expected", [("true", True), ("F", False), (0, False), (True, True)])
    def test_boolean(self, value, expected):
        assert ColumnType.BOOLEAN.convert(value) is expected

    def test_boolean_rejects_text(self):
        with pytest.raises(ValueError):
            ColumnType.BOOLEAN.convert("maybe")

    def test_varchar(self):
        assert ColumnType.VARCHAR.convert(12) == "12"
        assert ColumnType.VARCHAR.convert(False) == "false"

    def test_timestamp(self):
        assert ColumnType.TIMESTAMP.convert("2021-06-01T10:00:00Z") == datetime(
            2021, 6, 1, 10, tzinfo=UTC
        )
        assert ColumnType.TIMESTAMP.convert(0) == datetime(1970, 1, 1, tzinfo=UTC)
        assert ColumnType.TIMESTAMP.convert("2021-06-01 10:00:00") == datetime(2021, 6, 1, 10)

    def test_date_and_time(self):
        assert ColumnType.DATE.convert("2021-06-01") == date(2021, 6, 1)
        assert ColumnType.DATE.convert("2021-06-01T10:00:00Z") == date(2021, 6, 1)
        assert ColumnType.TIME.convert("10:30:00") == time(10, 30)

    def test_other_is_untouched(self):
        value = {"lat": 1.0}
        assert ColumnType.OTHER.convert(value) is value


def test_request_kinds_are_strings():
    assert RequestKind.METADATA == "metadata"

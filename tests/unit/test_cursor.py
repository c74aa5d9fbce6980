"""Unit tests for ResultCursor."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from cdp.queryservice import CursorState, ResultCursor
from cdp.queryservice.core import ColumnType, MalformedResponseError, OutOfRangeError
from cdp.queryservice.models import ColumnMeta


@pytest.fixture
def declared_columns():
    return (
        ColumnMeta(name="count_num", declared_type="DECIMAL", ordinal=0, type_code=3),
        ColumnMeta(name="telephonenumber__c", declared_type="VARCHAR", ordinal=1, type_code=12),
        ColumnMeta(name="created", declared_type="TIMESTAMP", ordinal=2),
    )


@pytest.fixture
def cursor(declared_columns):
    return ResultCursor(
        [
            [12.5, "001 6723213", "2021-06-01T10:00:00Z"],
            [3, None, None],
        ],
        declared_columns,
    )


class TestNavigation:
    """Test the forward-only state machine."""

    def test_walks_every_row_then_exhausts(self, cursor):
        assert cursor.state is CursorState.UNSTARTED
        assert cursor.position == -1

        assert cursor.next() is True
        assert cursor.state is CursorState.POSITIONED
        assert cursor.position == 0
        assert cursor.next() is True
        assert cursor.position == 1
        assert cursor.next() is False
        assert cursor.state is CursorState.EXHAUSTED
        assert cursor.next() is False

    def test_empty_result(self):
        """Test an empty result is exhausted on the first call."""
        cursor = ResultCursor([], [])

        assert cursor.next() is False
        assert cursor.state is CursorState.EXHAUSTED
        assert cursor.row_count == 0

    def test_close_is_terminal(self, cursor):
        cursor.next()
        cursor.close()

        assert cursor.closed is True
        assert cursor.next() is False
        with pytest.raises(OutOfRangeError):
            cursor.value(0)

    def test_context_manager_closes(self, cursor):
        with cursor as c:
            c.next()
        assert cursor.closed is True

    def test_iteration_yields_typed_rows(self, cursor):
        rows = list(cursor)

        assert rows[0][0] == Decimal("12.5")
        assert rows[1] == (Decimal("3"), None, None)
        assert cursor.state is CursorState.EXHAUSTED

    def test_repr(self, cursor):
        assert "state=unstarted" in repr(cursor)


class TestRowAccess:
    """Test typed accessors on the current row."""

    def test_access_before_next_raises(self, cursor):
        with pytest.raises(OutOfRangeError):
            cursor.value(0)

    def test_access_after_exhaustion_raises(self, cursor):
        while cursor.next():
            pass
        with pytest.raises(OutOfRangeError):
            cursor.get_string(1)

    def test_out_of_range_is_an_index_error(self, cursor):
        cursor.next()
        with pytest.raises(IndexError):
            cursor.value(3)

    @pytest.mark.parametrize("column", [-1, 3, True, 1.0, None, "missing"])
    def test_bad_column_reference(self, cursor, column):
        cursor.next()
        with pytest.raises(OutOfRangeError):
            cursor.value(column)

    def test_typed_values(self, cursor):
        cursor.next()

        assert cursor.value(0) == Decimal("12.5")
        assert cursor.value("TELEPHONENUMBER__C") == "001 6723213"
        assert cursor.value("created") == datetime(2021, 6, 1, 10, 0, tzinfo=UTC)

    def test_nulls_stay_none(self, cursor):
        cursor.next()
        cursor.next()

        assert cursor.value(1) is None
        assert cursor.get_string(1) is None
        assert cursor.value(2) is None

    def test_get_string_and_raw(self, cursor):
        cursor.next()

        assert cursor.get_string(0) == "12.5"
        assert cursor.raw(0) == 12.5

    def test_as_dict(self, cursor):
        cursor.next()
        cursor.next()

        assert cursor.as_dict() == {
            "count_num": Decimal("3"),
            "telephonenumber__c": None,
            "created": None,
        }

    def test_bad_cell_is_malformed(self):
        cursor = ResultCursor([["abc"]], [ColumnMeta(name="n", declared_type="DECIMAL", ordinal=0)])
        cursor.next()

        with pytest.raises(MalformedResponseError, match="DECIMAL"):
            cursor.value("n")

    def test_undeclared_cells_keep_json_types(self):
        columns = [ColumnMeta(name=f"col_{i}", ordinal=i) for i in range(4)]
        cursor = ResultCursor([[1, 2.5, True, "x"]], columns)
        cursor.next()

        assert cursor.row() == (1, 2.5, True, "x")


class TestColumnMetadata:
    """Test column accessors, which work in any state."""

    def test_declared_types(self, cursor):
        assert cursor.column_count == 3
        assert cursor.column_name(1) == "telephonenumber__c"
        assert cursor.column_type("count_num") is ColumnType.DECIMAL
        assert cursor.column_type(1).type_code == 12
        assert cursor.column_type_name(2) == "TIMESTAMP"

    def test_metadata_after_close(self, cursor):
        cursor.close()

        assert cursor.column_name(0) == "count_num"

    def test_inferred_type_skips_nulls(self):
        cursor = ResultCursor([[None], [7]], [ColumnMeta(name="n", ordinal=0)])

        assert cursor.column_type(0) is ColumnType.BIGINT
        assert cursor.column_type_name(0) == "BIGINT"

    def test_all_null_column_is_varchar(self):
        cursor = ResultCursor([[None]], [ColumnMeta(name="n", ordinal=0)])

        assert cursor.column_type(0) is ColumnType.VARCHAR

    def test_declared_name_kept_verbatim(self):
        cursor = ResultCursor([], [ColumnMeta(name="n", declared_type="varchar(255)", ordinal=0)])

        assert cursor.column_type(0) is ColumnType.VARCHAR
        assert cursor.column_type_name(0) == "varchar(255)"

"""Forward-only cursor over an assembled query result.

Architecture:
    The pagination driver hands the cursor a finished list of rows and the
    schema recorded from the first page. The cursor freezes both and only
    moves forward:

        UNSTARTED --next()--> POSITIONED --next() [no more rows]--> EXHAUSTED

    EXHAUSTED and CLOSED are terminal; ``next()`` keeps returning False.
    Row accessors need a POSITIONED cursor. Column metadata is available in
    every state.

Design Decisions:
    - Zero-based ordinals, or case-insensitive column names
    - Values converted with the declared column type; cells of undeclared
      columns are converted by their own JSON shape
    - OutOfRangeError is also an IndexError
    - Single owner: no locking, sequential use only
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any

from .core.enums import ColumnType
from .core.exceptions import MalformedResponseError, OutOfRangeError
from .models import ColumnMeta


class CursorState(str, Enum):
    UNSTARTED = "unstarted"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class ResultCursor:
    """Forward-only, typed view over query rows."""

    def __init__(self, rows: Sequence[Sequence[Any]], columns: Sequence[ColumnMeta]) -> None:
        self._rows: tuple[tuple[Any, ...], ...] = tuple(tuple(row) for row in rows)
        self._columns: tuple[ColumnMeta, ...] = tuple(columns)
        self._by_name = {col.name.lower(): i for i, col in enumerate(self._columns)}
        self._position = -1
        self._state = CursorState.UNSTARTED

    # -- navigation ---------------------------------------------------------

    def next(self) -> bool:
        """Advance to the next row.

        Returns:
            True if a row is now available, False once the rows are exhausted
            (or the cursor was closed)
        """
        if self._state in (CursorState.EXHAUSTED, CursorState.CLOSED):
            return False
        if self._position + 1 < len(self._rows):
            self._position += 1
            self._state = CursorState.POSITIONED
            return True
        self._state = CursorState.EXHAUSTED
        return False

    def close(self) -> None:
        """Discard the cursor; further ``next()`` calls return False."""
        self._state = CursorState.CLOSED

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is CursorState.CLOSED

    @property
    def position(self) -> int:
        """Zero-based index of the current row (-1 before the first ``next()``)."""
        return self._position

    @property
    def row_count(self) -> int:
        """Total rows in the result."""
        return len(self._rows)

    # -- column metadata ------------------------------------------------------

    @property
    def columns(self) -> tuple[ColumnMeta, ...]:
        return self._columns

    @property
    def column_count(self) -> int:
        return len(self._columns)

    def column_name(self, column: int | str) -> str:
        return self._columns[self._index(column)].name

    def column_type(self, column: int | str) -> ColumnType:
        """Declared type, or the type of the first non-null value when undeclared."""
        index = self._index(column)
        meta = self._columns[index]
        if meta.declared_type:
            return meta.column_type
        for row in self._rows:
            if row[index] is not None:
                return ColumnType.infer(row[index])
        return ColumnType.VARCHAR

    def column_type_name(self, column: int | str) -> str:
        """Type name as declared by the server, else the inferred type's name."""
        index = self._index(column)
        declared = self._columns[index].declared_type
        return declared if declared else self.column_type(index).value

    # -- row access ------------------------------------------------------------

    def value(self, column: int | str) -> Any:
        """Typed value of ``column`` in the current row.

        Raises:
            OutOfRangeError: Cursor not positioned on a row, or unknown column
            MalformedResponseError: Cell does not fit its declared type
        """
        index = self._index(column)
        raw = self._current()[index]
        meta = self._columns[index]
        column_type = meta.column_type if meta.declared_type else ColumnType.infer(raw)
        try:
            return column_type.convert(raw)
        except (ValueError, TypeError) as e:
            raise MalformedResponseError(
                f"Column {meta.name!r} value {raw!r} is not a valid {column_type.value}"
            ) from e

    def get_string(self, column: int | str) -> str | None:
        """Value of ``column`` in the current row as text (None stays None)."""
        raw = self._current()[self._index(column)]
        if raw is None:
            return None
        return ColumnType.VARCHAR.convert(raw)

    def raw(self, column: int | str) -> Any:
        """Untouched JSON cell of ``column`` in the current row."""
        return self._current()[self._index(column)]

    def row(self) -> tuple[Any, ...]:
        """All typed values of the current row."""
        self._current()
        return tuple(self.value(i) for i in range(len(self._columns)))

    def as_dict(self) -> dict[str, Any]:
        """Current row keyed by column name."""
        return dict(zip((c.name for c in self._columns), self.row()))

    # -- protocols ---------------------------------------------------------------

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        while self.next():
            yield self.row()

    def __enter__(self) -> ResultCursor:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"ResultCursor(state={self._state.value}, position={self._position}, "
            f"rows={len(self._rows)}, columns={len(self._columns)})"
        )

    # -- internals -----------------------------------------------------------------

    def _current(self) -> tuple[Any, ...]:
        if self._state is not CursorState.POSITIONED:
            raise OutOfRangeError(f"Cursor is not positioned on a row (state: {self._state.value})")
        return self._rows[self._position]

    def _index(self, column: int | str) -> int:
        if isinstance(column, str):
            try:
                return self._by_name[column.lower()]
            except KeyError:
                raise OutOfRangeError(f"Unknown column {column!r}") from None
        if (
            isinstance(column, bool)
            or not isinstance(column, int)
            or not 0 <= column < len(self._columns)
        ):
            raise OutOfRangeError(
                f"Column ordinal {column!r} out of range (0..{len(self._columns) - 1})"
            )
        return column

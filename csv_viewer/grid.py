import logging
from typing import Iterable, List, Optional, Sequence

from csv_viewer.history import (
    DeleteColumnsRecord,
    DeletedColumn,
    DeletedRow,
    DeleteRowsRecord,
    EditHistory,
)
from csv_viewer.selection import Selection
from csv_viewer.sorting import SortState, sorted_order

logger = logging.getLogger(__name__)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _fit(values: Sequence[str], width: int) -> List[str]:
    fitted = [str(value) for value in values[:width]]
    if len(fitted) < width:
        fitted.extend([""] * (width - len(fitted)))
    return fitted


class Grid:
    """Rectangular header + rows store with undoable deletes.

    Every row always has exactly ``column_count`` cells. Row and column indices
    are positions, so they shift whenever a structural edit runs; the grid
    repairs or clears its own selection in the same call.
    """

    def __init__(self) -> None:
        self._header: List[str] = []
        self._rows: List[List[str]] = []
        self.selection = Selection()
        self.history = EditHistory()
        self.sort_state = SortState()

    @property
    def header(self) -> List[str]:
        return list(self._header)

    @property
    def rows(self) -> List[List[str]]:
        return [list(row) for row in self._rows]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return len(self._header)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def load(self, header: Sequence[str], records: Iterable[Sequence[str]]) -> None:
        self._header = [str(name) for name in header]
        width = len(self._header)
        self._rows = [_fit(record, width) for record in records]
        self._reset_session_state()
        logger.debug("Loaded grid with %d columns and %d rows", width, len(self._rows))

    def clear(self) -> None:
        self._header = []
        self._rows = []
        self._reset_session_state()

    def _reset_session_state(self) -> None:
        self.selection.clear()
        self.history.clear()
        self.sort_state.reset()

    def cell(self, row: int, column: int) -> str:
        if 0 <= row < len(self._rows) and 0 <= column < len(self._header):
            return self._rows[row][column]
        return ""

    def set_cell(self, row: int, column: int, value: str) -> bool:
        if not (0 <= row < len(self._rows) and 0 <= column < len(self._header)):
            return False
        self._rows[row][column] = str(value)
        return True

    def rename_column(self, index: int, name: str) -> bool:
        if not 0 <= index < len(self._header):
            return False
        self._header[index] = str(name)
        return True

    def insert_column(self, at_index: int, name: str, default_value: str = "") -> int:
        index = _clamp(at_index, 0, len(self._header))
        self._header.insert(index, str(name))
        for row in self._rows:
            row.insert(index, default_value)
        self.selection.select_only_columns([index])
        logger.debug("Inserted column %r at %d", name, index)
        return index

    def insert_row(self, at_index: int, default_values: Optional[Sequence[str]] = None) -> int:
        index = _clamp(at_index, 0, len(self._rows))
        self._rows.insert(index, _fit(default_values or [], len(self._header)))
        self.selection.select_only_rows([index])
        logger.debug("Inserted row at %d", index)
        return index

    def delete_columns(self, indices: Iterable[int]) -> bool:
        valid = sorted({index for index in indices if 0 <= index < len(self._header)})
        if not valid:
            return False
        record = DeleteColumnsRecord(
            [
                DeletedColumn(index, self._header[index], [row[index] for row in self._rows])
                for index in valid
            ]
        )
        for index in reversed(valid):
            del self._header[index]
            for row in self._rows:
                del row[index]
        self.history.push(record)
        self.selection.clear()
        self.sort_state.reset()
        logger.debug("Deleted columns %s", valid)
        return True

    def delete_rows(self, indices: Iterable[int]) -> bool:
        valid = sorted({index for index in indices if 0 <= index < len(self._rows)})
        if not valid:
            return False
        record = DeleteRowsRecord([DeletedRow(index, list(self._rows[index])) for index in valid])
        for index in reversed(valid):
            del self._rows[index]
        self.history.push(record)
        self.selection.clear()
        logger.debug("Deleted rows %s", valid)
        return True

    def undo_last(self) -> bool:
        record = self.history.pop()
        if record is None:
            return False
        if isinstance(record, DeleteColumnsRecord):
            restored = []
            for column in sorted(record.columns, key=lambda item: item.index):
                index = _clamp(column.index, 0, len(self._header))
                self._header.insert(index, column.name)
                for row_index, row in enumerate(self._rows):
                    value = column.values[row_index] if row_index < len(column.values) else ""
                    row.insert(index, value)
                restored.append(column.index)
            self.selection.select_only_columns(restored)
        else:
            restored = []
            width = len(self._header)
            for deleted in sorted(record.rows, key=lambda item: item.index):
                index = _clamp(deleted.index, 0, len(self._rows))
                self._rows.insert(index, _fit(deleted.values, width))
                restored.append(deleted.index)
            self.selection.select_only_rows(restored)
        logger.debug("Undid delete of %s", record.indices)
        return True

    def sort_by_column(self, index: int, ascending: bool = True) -> bool:
        if not 0 <= index < len(self._header):
            return False
        order = sorted_order(self._rows, index, ascending)
        self._rows = [self._rows[position] for position in order]
        self.selection.remap_rows(order)
        self.sort_state.record(index, ascending)
        return True

    def toggle_sort(self, index: int) -> bool:
        return self.sort_by_column(index, self.sort_state.next_direction(index))

    def select_column(self, index: int, extend: bool = False, toggle: bool = False) -> bool:
        if not 0 <= index < len(self._header):
            return False
        self.selection.select_column(index, extend, toggle)
        return True

    def select_row(self, index: int, extend: bool = False, toggle: bool = False) -> bool:
        if not 0 <= index < len(self._rows):
            return False
        self.selection.select_row(index, extend, toggle)
        return True

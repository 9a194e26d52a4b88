from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from PyQt6 import QtCore, QtGui

from csv_viewer.grid import Grid
from csv_viewer.search import SearchState

SELECTION_COLOR = "#8FB8F0"
MATCH_COLOR = "#FFF1A8"
CURRENT_MATCH_COLOR = "#F2A93B"


@dataclass
class CsvDocument:
    path: Optional[str]
    encoding: str
    header: List[str]
    rows: List[List[str]]
    is_preview: bool = False


class CSVTableModel(QtCore.QAbstractTableModel):
    selection_changed = QtCore.pyqtSignal()
    content_edited = QtCore.pyqtSignal()

    def __init__(
        self,
        grid: Optional[Grid] = None,
        search: Optional[SearchState] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._grid = grid if grid is not None else Grid()
        self._search = search if search is not None else SearchState()

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def search_state(self) -> SearchState:
        return self._search

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._grid.row_count

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._grid.column_count

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        row, column = index.row(), index.column()
        if role in (QtCore.Qt.ItemDataRole.DisplayRole, QtCore.Qt.ItemDataRole.EditRole):
            return self._grid.cell(row, column)
        if role == QtCore.Qt.ItemDataRole.BackgroundRole:
            color = self._background_color(row, column)
            if color:
                return QtGui.QBrush(QtGui.QColor(color))
        return None

    def _background_color(self, row: int, column: int) -> Optional[str]:
        if self._search.is_current(row, column):
            return CURRENT_MATCH_COLOR
        if self._search.is_match(row, column):
            return MATCH_COLOR
        if self._grid.selection.is_cell_selected(row, column):
            return SELECTION_COLOR
        return None

    def setData(self, index: QtCore.QModelIndex, value, role: int = QtCore.Qt.ItemDataRole.EditRole) -> bool:
        if not index.isValid() or role != QtCore.Qt.ItemDataRole.EditRole:
            return False
        if self._grid.cell(index.row(), index.column()) == str(value):
            return False
        if not self._grid.set_cell(index.row(), index.column(), str(value)):
            return False
        self.dataChanged.emit(index, index, [role])
        self.content_edited.emit()
        return True

    def flags(self, index: QtCore.QModelIndex) -> QtCore.Qt.ItemFlag:
        if not index.isValid():
            return QtCore.Qt.ItemFlag.NoItemFlags
        return (
            QtCore.Qt.ItemFlag.ItemIsSelectable
            | QtCore.Qt.ItemFlag.ItemIsEnabled
            | QtCore.Qt.ItemFlag.ItemIsEditable
        )

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation, role: int = QtCore.Qt.ItemDataRole.DisplayRole):
        if orientation == QtCore.Qt.Orientation.Horizontal:
            if role == QtCore.Qt.ItemDataRole.DisplayRole:
                header = self._grid.header
                if section < len(header):
                    return header[section]
                return f"Column {section + 1}"
            if role == QtCore.Qt.ItemDataRole.BackgroundRole and section in self._grid.selection.columns:
                return QtGui.QBrush(QtGui.QColor(SELECTION_COLOR))
            return None
        if role == QtCore.Qt.ItemDataRole.DisplayRole:
            return str(section + 1)
        if role == QtCore.Qt.ItemDataRole.BackgroundRole and section in self._grid.selection.rows:
            return QtGui.QBrush(QtGui.QColor(SELECTION_COLOR))
        return None

    def setHeaderData(
        self,
        section: int,
        orientation: QtCore.Qt.Orientation,
        value,
        role: int = QtCore.Qt.ItemDataRole.EditRole,
    ) -> bool:
        if orientation != QtCore.Qt.Orientation.Horizontal:
            return False
        if role != QtCore.Qt.ItemDataRole.EditRole:
            return False
        if not self._grid.rename_column(section, str(value)):
            return False
        self.headerDataChanged.emit(orientation, section, section)
        self.content_edited.emit()
        return True

    def load(self, header: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
        self.beginResetModel()
        self._grid.load(header, rows)
        self._search.clear()
        self.endResetModel()
        self.selection_changed.emit()

    def clear(self) -> None:
        self.beginResetModel()
        self._grid.clear()
        self._search.clear()
        self.endResetModel()
        self.selection_changed.emit()

    def insert_column(self, at_index: int, name: str, default_value: str = "") -> int:
        column = max(0, min(at_index, self._grid.column_count))
        self.beginInsertColumns(QtCore.QModelIndex(), column, column)
        column = self._grid.insert_column(column, name, default_value)
        self.endInsertColumns()
        self._refresh_highlights()
        return column

    def insert_row(self, at_index: int, default_values: Optional[Sequence[str]] = None) -> int:
        row = max(0, min(at_index, self._grid.row_count))
        self.beginInsertRows(QtCore.QModelIndex(), row, row)
        row = self._grid.insert_row(row, default_values)
        self.endInsertRows()
        self._refresh_highlights()
        return row

    def delete_columns(self, indices: Iterable[int]) -> bool:
        return self._reset_around(lambda: self._grid.delete_columns(indices))

    def delete_rows(self, indices: Iterable[int]) -> bool:
        return self._reset_around(lambda: self._grid.delete_rows(indices))

    def undo_last(self) -> bool:
        if not self._grid.can_undo():
            return False
        return self._reset_around(self._grid.undo_last)

    def sort_by_column(self, index: int, ascending: bool = True) -> bool:
        if not 0 <= index < self._grid.column_count:
            return False
        self.layoutAboutToBeChanged.emit()
        self._grid.sort_by_column(index, ascending)
        self.layoutChanged.emit()
        self._refresh_highlights()
        return True

    def toggle_sort(self, index: int) -> bool:
        return self.sort_by_column(index, self._grid.sort_state.next_direction(index))

    def select_column(self, index: int, extend: bool = False, toggle: bool = False) -> bool:
        if not self._grid.select_column(index, extend, toggle):
            return False
        self._refresh_highlights()
        return True

    def select_row(self, index: int, extend: bool = False, toggle: bool = False) -> bool:
        if not self._grid.select_row(index, extend, toggle):
            return False
        self._refresh_highlights()
        return True

    def clear_selection(self) -> None:
        self._grid.selection.clear()
        self._refresh_highlights()

    def run_search(self, query: str, scope_columns: Optional[Iterable[int]] = None) -> int:
        self._search.search(self._grid.rows, query, scope_columns)
        self._refresh_highlights()
        return len(self._search.matches)

    def clear_search(self) -> None:
        self._search.clear()
        self._refresh_highlights()

    def advance_search(self, forward: bool = True) -> Optional[QtCore.QModelIndex]:
        match = self._search.advance(forward)
        self._refresh_highlights()
        if match is None:
            return None
        return self.index(match.row, match.column)

    def _reset_around(self, operation) -> bool:
        self.beginResetModel()
        changed = operation()
        self.endResetModel()
        self.selection_changed.emit()
        return changed

    def _refresh_highlights(self) -> None:
        self.selection_changed.emit()
        if self.rowCount() <= 0 or self.columnCount() <= 0:
            return
        start = self.index(0, 0)
        end = self.index(self.rowCount() - 1, self.columnCount() - 1)
        self.dataChanged.emit(start, end, [QtCore.Qt.ItemDataRole.BackgroundRole])
        self.headerDataChanged.emit(QtCore.Qt.Orientation.Horizontal, 0, self.columnCount() - 1)
        self.headerDataChanged.emit(QtCore.Qt.Orientation.Vertical, 0, self.rowCount() - 1)

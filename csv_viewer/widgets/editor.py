from typing import List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from csv_viewer.clipboard import selection_text
from csv_viewer.grid import Grid
from csv_viewer.models import CsvDocument, CSVTableModel


class EditorWidget(QtWidgets.QWidget):
    document_changed = QtCore.pyqtSignal()
    selection_changed = QtCore.pyqtSignal()
    search_invalidated = QtCore.pyqtSignal()

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._path: Optional[str] = None
        self._encoding = "utf-8"
        self._is_preview = False
        self._dirty = False

        self._table_view = QtWidgets.QTableView(self)
        self._table_view.setAlternatingRowColors(True)
        self._table_view.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectItems)
        self._table_view.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        self._table_view.setTextElideMode(QtCore.Qt.TextElideMode.ElideRight)
        self._table_view.horizontalHeader().setStretchLastSection(True)
        self._table_view.horizontalHeader().setHighlightSections(False)
        self._table_view.verticalHeader().setHighlightSections(False)
        self._table_view.horizontalHeader().setSortIndicatorShown(False)
        self._table_view.installEventFilter(self)
        self._table_view.setContextMenuPolicy(QtCore.Qt.ContextMenuPolicy.CustomContextMenu)
        self._table_view.customContextMenuRequested.connect(self._show_context_menu)
        self._table_view.verticalHeader().setContextMenuPolicy(
            QtCore.Qt.ContextMenuPolicy.CustomContextMenu
        )
        self._table_view.horizontalHeader().setContextMenuPolicy(
            QtCore.Qt.ContextMenuPolicy.CustomContextMenu
        )
        self._table_view.verticalHeader().customContextMenuRequested.connect(
            self._show_row_header_menu
        )
        self._table_view.horizontalHeader().customContextMenuRequested.connect(
            self._show_col_header_menu
        )
        self._table_view.horizontalHeader().sectionClicked.connect(self._on_column_header_clicked)
        self._table_view.verticalHeader().sectionClicked.connect(self._on_row_header_clicked)
        self._table_view.horizontalHeader().sectionDoubleClicked.connect(self._rename_column_at)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._table_view)

        self._model = CSVTableModel(Grid(), parent=self)
        self._table_view.setModel(self._model)
        self._model.content_edited.connect(lambda: self.set_dirty(True))
        self._model.selection_changed.connect(self.selection_changed.emit)

    @property
    def grid(self) -> Grid:
        return self._model.grid

    @property
    def model(self) -> CSVTableModel:
        return self._model

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def is_preview(self) -> bool:
        return self._is_preview

    def is_dirty(self) -> bool:
        return self._dirty

    def set_dirty(self, dirty: bool) -> None:
        self._dirty = dirty
        self.document_changed.emit()

    def set_document(self, document: CsvDocument) -> None:
        self._path = document.path
        self._encoding = document.encoding
        self._is_preview = document.is_preview
        self._model.load(document.header, document.rows)
        self._update_sort_indicator()
        self.set_dirty(False)

    def clear_document(self) -> None:
        self._path = None
        self._encoding = "utf-8"
        self._is_preview = False
        self._model.clear()
        self._update_sort_indicator()
        self.set_dirty(False)

    def mark_saved(self, path: str) -> None:
        self._path = path
        self._encoding = "utf-8"
        self._is_preview = False
        self.set_dirty(False)

    def _modifiers(self) -> tuple[bool, bool]:
        modifiers = QtWidgets.QApplication.keyboardModifiers()
        extend = bool(modifiers & QtCore.Qt.KeyboardModifier.ShiftModifier)
        toggle = bool(
            modifiers
            & (QtCore.Qt.KeyboardModifier.ControlModifier | QtCore.Qt.KeyboardModifier.MetaModifier)
        )
        return extend, toggle

    def _on_column_header_clicked(self, column: int) -> None:
        extend, toggle = self._modifiers()
        self._model.select_column(column, extend=extend, toggle=toggle)

    def _on_row_header_clicked(self, row: int) -> None:
        extend, toggle = self._modifiers()
        self._model.select_row(row, extend=extend, toggle=toggle)

    def selected_rows(self) -> List[int]:
        return sorted(self.grid.selection.rows)

    def selected_columns(self) -> List[int]:
        return sorted(self.grid.selection.columns)

    def _current_cell(self) -> Optional[tuple[int, int]]:
        current = self._table_view.selectionModel().currentIndex()
        if not current.isValid():
            return None
        return current.row(), current.column()

    def _anchor_row(self, below: bool) -> int:
        rows = self.selected_rows()
        if rows:
            return rows[-1] + 1 if below else rows[0]
        current = self._current_cell()
        if current is not None:
            return current[0] + 1 if below else current[0]
        return self.grid.row_count if below else 0

    def _anchor_column(self, right: bool) -> int:
        columns = self.selected_columns()
        if columns:
            return columns[-1] + 1 if right else columns[0]
        current = self._current_cell()
        if current is not None:
            return current[1] + 1 if right else current[1]
        return self.grid.column_count if right else 0

    def insert_row_above(self) -> None:
        self._insert_row_at(self._anchor_row(below=False))

    def insert_row_below(self) -> None:
        self._insert_row_at(self._anchor_row(below=True))

    def insert_col_left(self) -> None:
        self._insert_col_at(self._anchor_column(right=False))

    def insert_col_right(self) -> None:
        self._insert_col_at(self._anchor_column(right=True))

    def delete_rows(self) -> None:
        rows = self.selected_rows()
        if not rows:
            current = self._current_cell()
            if current is None:
                return
            rows = [current[0]]
        if not self._confirm_delete("Delete Rows", self._delete_rows_message(rows)):
            return
        if self._model.delete_rows(rows):
            self._structure_changed()

    def delete_cols(self) -> None:
        columns = self.selected_columns()
        if not columns:
            current = self._current_cell()
            if current is None:
                return
            columns = [current[1]]
        if not self._confirm_delete("Delete Columns", self._delete_columns_message(columns)):
            return
        if self._model.delete_columns(columns):
            self._update_sort_indicator()
            self._structure_changed()

    def can_undo(self) -> bool:
        return self.grid.can_undo()

    def undo(self) -> None:
        if self._model.undo_last():
            self._structure_changed()

    def sort_column(self, column: int, ascending: bool) -> None:
        if self._model.sort_by_column(column, ascending):
            self._update_sort_indicator()
            self._structure_changed()

    def toggle_sort_column(self, column: int) -> None:
        if self._model.toggle_sort(column):
            self._update_sort_indicator()
            self._structure_changed()

    def _structure_changed(self) -> None:
        # Match positions are stale once rows or columns move.
        if self._model.search_state.query:
            self._model.clear_search()
            self.search_invalidated.emit()
        self.set_dirty(True)

    def _update_sort_indicator(self) -> None:
        header = self._table_view.horizontalHeader()
        state = self.grid.sort_state
        if state.column is None:
            header.setSortIndicatorShown(False)
            return
        order = (
            QtCore.Qt.SortOrder.AscendingOrder
            if state.ascending
            else QtCore.Qt.SortOrder.DescendingOrder
        )
        header.setSortIndicatorShown(True)
        header.setSortIndicator(state.column, order)

    def _generate_column_name(self) -> str:
        base = "New Column"
        existing = {name for name in self.grid.header if name}
        if base not in existing:
            return base
        counter = 2
        while f"{base} {counter}" in existing:
            counter += 1
        return f"{base} {counter}"

    def _delete_columns_message(self, columns: List[int]) -> str:
        header = self.grid.header
        names = [header[index] for index in columns if index < len(header)]
        if len(names) == 1:
            return f"Delete column {names[0]}?"
        if len(names) <= 3:
            return "Delete columns " + ", ".join(names) + "?"
        return f"Delete {len(names)} columns?"

    def _delete_rows_message(self, rows: List[int]) -> str:
        if len(rows) == 1:
            return f"Delete row {rows[0] + 1}?"
        if len(rows) <= 3:
            return "Delete rows " + ", ".join(str(row + 1) for row in rows) + "?"
        return f"Delete {len(rows)} rows?"

    def _confirm_delete(self, title: str, message: str) -> bool:
        result = QtWidgets.QMessageBox.question(
            self,
            title,
            f"{message}\n\nYou can undo this with Undo Delete.",
            QtWidgets.QMessageBox.StandardButton.Yes | QtWidgets.QMessageBox.StandardButton.Cancel,
        )
        return result == QtWidgets.QMessageBox.StandardButton.Yes

    def _show_context_menu(self, position: QtCore.QPoint) -> None:
        menu = QtWidgets.QMenu(self)

        insert_row_above = menu.addAction("Insert Row Above")
        insert_row_below = menu.addAction("Insert Row Below")
        delete_rows = menu.addAction("Delete Row(s)")
        menu.addSeparator()
        insert_col_left = menu.addAction("Insert Column Left")
        insert_col_right = menu.addAction("Insert Column Right")
        delete_cols = menu.addAction("Delete Column(s)")
        menu.addSeparator()
        copy_action = menu.addAction("Copy")

        insert_row_above.triggered.connect(self.insert_row_above)
        insert_row_below.triggered.connect(self.insert_row_below)
        delete_rows.triggered.connect(self.delete_rows)
        insert_col_left.triggered.connect(self.insert_col_left)
        insert_col_right.triggered.connect(self.insert_col_right)
        delete_cols.triggered.connect(self.delete_cols)
        copy_action.triggered.connect(self.copy_selection_to_clipboard)

        has_target = bool(self.selected_rows() or self.selected_columns() or self._current_cell())
        delete_rows.setEnabled(has_target and self.grid.row_count > 0)
        delete_cols.setEnabled(has_target and self.grid.column_count > 0)

        menu.exec(self._table_view.viewport().mapToGlobal(position))

    def _show_row_header_menu(self, position: QtCore.QPoint) -> None:
        row = self._table_view.verticalHeader().logicalIndexAt(position)
        menu = QtWidgets.QMenu(self)
        insert_above = menu.addAction("Insert Row Above")
        insert_below = menu.addAction("Insert Row Below")
        delete_row = menu.addAction("Delete Row(s)")
        insert_above.triggered.connect(lambda: self._insert_row_at(row))
        insert_below.triggered.connect(lambda: self._insert_row_at(row + 1))
        delete_row.triggered.connect(lambda: self._delete_rows_from_header(row))
        delete_row.setEnabled(row >= 0)
        menu.exec(self._table_view.verticalHeader().mapToGlobal(position))

    def _show_col_header_menu(self, position: QtCore.QPoint) -> None:
        col = self._table_view.horizontalHeader().logicalIndexAt(position)
        menu = self._column_header_menu(col)
        menu.exec(self._table_view.horizontalHeader().mapToGlobal(position))

    def _column_header_menu(self, col: int) -> QtWidgets.QMenu:
        menu = QtWidgets.QMenu(self)
        sort_toggle = menu.addAction(self._toggle_sort_label(col))
        sort_asc = menu.addAction("Sort Ascending")
        sort_desc = menu.addAction("Sort Descending")
        menu.addSeparator()
        insert_left = menu.addAction("Insert Column Left")
        insert_right = menu.addAction("Insert Column Right")
        rename_col = menu.addAction("Rename Column")
        delete_col = menu.addAction("Delete Column(s)")
        sort_toggle.triggered.connect(lambda: self.toggle_sort_column(col))
        sort_asc.triggered.connect(lambda: self.sort_column(col, True))
        sort_desc.triggered.connect(lambda: self.sort_column(col, False))
        insert_left.triggered.connect(lambda: self._insert_col_at(col))
        insert_right.triggered.connect(lambda: self._insert_col_at(col + 1))
        rename_col.triggered.connect(lambda: self._rename_column_at(col))
        delete_col.triggered.connect(lambda: self._delete_cols_from_header(col))
        for action in (sort_toggle, sort_asc, sort_desc, rename_col, delete_col):
            action.setEnabled(col >= 0)
        return menu

    def _toggle_sort_label(self, col: int) -> str:
        if self.grid.sort_state.next_direction(col):
            return "Sort (A to Z)"
        return "Sort (Z to A)"

    def _insert_row_at(self, row: int) -> None:
        if self.grid.column_count == 0:
            return
        self._model.insert_row(row)
        self._structure_changed()

    def _insert_col_at(self, col: int) -> None:
        self._model.insert_column(col, self._generate_column_name())
        self._structure_changed()

    def _delete_rows_from_header(self, row: int) -> None:
        if row not in self.grid.selection.rows:
            self._model.select_row(row)
        self.delete_rows()

    def _delete_cols_from_header(self, col: int) -> None:
        if col not in self.grid.selection.columns:
            self._model.select_column(col)
        self.delete_cols()

    def _rename_column_at(self, col: int) -> None:
        header = self.grid.header
        if col < 0 or col >= len(header):
            return
        new_name, ok = QtWidgets.QInputDialog.getText(
            self, "Rename Column", "Column name:", text=header[col]
        )
        if not ok:
            return
        self._model.setHeaderData(col, QtCore.Qt.Orientation.Horizontal, new_name)

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if obj is self._table_view and event.type() == QtCore.QEvent.Type.KeyPress:
            if event.matches(QtGui.QKeySequence.StandardKey.Copy):
                self.copy_selection_to_clipboard()
                return True
            if event.key() == QtCore.Qt.Key.Key_Escape:
                self._model.clear_selection()
                return True
        return super().eventFilter(obj, event)

    def copy_selection_to_clipboard(self) -> bool:
        text = selection_text(self.grid)
        if text is None:
            return False
        QtWidgets.QApplication.clipboard().setText(text)
        return True

    def select_cell(self, row: int, col: int) -> None:
        index = self._model.index(row, col)
        if not index.isValid():
            return
        selection = self._table_view.selectionModel()
        selection.setCurrentIndex(
            index, QtCore.QItemSelectionModel.SelectionFlag.ClearAndSelect
        )
        self._table_view.scrollTo(index)

    def find_in_grid(self, text: str, selected_columns_only: bool) -> int:
        scope = self.selected_columns() if selected_columns_only else None
        count = self._model.run_search(text, scope)
        match = self._model.search_state.current_match
        if match is not None:
            self.select_cell(match.row, match.column)
        return count

    def find_step(self, forward: bool) -> bool:
        index = self._model.advance_search(forward)
        if index is None:
            return False
        self.select_cell(index.row(), index.column())
        return True

from typing import Optional, TYPE_CHECKING

from PyQt6 import QtCore, QtWidgets

from csv_viewer.search import SearchState
from csv_viewer.widgets.editor import EditorWidget

if TYPE_CHECKING:
    from csv_viewer.windows.main_window import MainWindow


class FindPanel(QtWidgets.QWidget):
    def __init__(self, parent: "MainWindow") -> None:
        super().__init__(parent)
        self._main_window = parent
        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QGridLayout()

        self._find_input = QtWidgets.QLineEdit(self)
        self._find_input.setPlaceholderText("Search cells...")
        self._scope_check = QtWidgets.QCheckBox("Selected columns only", self)
        find_label = QtWidgets.QLabel("Find:", self)

        self._find_btn = QtWidgets.QPushButton("Find", self)
        self._prev_btn = QtWidgets.QPushButton("Previous", self)
        self._next_btn = QtWidgets.QPushButton("Next", self)
        self._status = QtWidgets.QLabel("", self)

        form.addWidget(find_label, 0, 0)
        form.addWidget(self._find_input, 0, 1, 1, 3)
        form.addWidget(self._scope_check, 1, 1, 1, 3)
        form.addWidget(self._find_btn, 2, 0)
        form.addWidget(self._prev_btn, 2, 1)
        form.addWidget(self._next_btn, 2, 2)
        form.addWidget(self._status, 3, 0, 1, 4)

        self._results = QtWidgets.QListWidget(self)
        self._results.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)

        layout.addLayout(form)
        layout.addWidget(self._results)

        self._find_input.returnPressed.connect(self._on_find)
        self._find_btn.clicked.connect(self._on_find)
        self._next_btn.clicked.connect(self.find_next)
        self._prev_btn.clicked.connect(self.find_previous)
        self._results.itemDoubleClicked.connect(self._on_result_activated)

    def focus_input(self) -> None:
        self._find_input.setFocus()
        self._find_input.selectAll()

    def reset(self) -> None:
        self._results.clear()
        self._status.setText("")

    def _current_editor(self) -> Optional[EditorWidget]:
        return self._main_window.editor

    def _on_find(self) -> None:
        editor = self._current_editor()
        if not editor:
            return
        self._results.clear()
        count = editor.find_in_grid(self._find_input.text(), self._scope_check.isChecked())
        header = editor.grid.header
        for match in editor.model.search_state.matches:
            value = editor.grid.cell(match.row, match.column)
            preview = self._ellipsize(" ".join(value.split()), 40)
            name = header[match.column] if match.column < len(header) else f"Col {match.column + 1}"
            item = QtWidgets.QListWidgetItem(f"Row {match.row + 1}, {name}: {preview}")
            item.setData(QtCore.Qt.ItemDataRole.UserRole, (match.row, match.column))
            self._results.addItem(item)
        self._update_status(editor)
        if not count and self._find_input.text():
            QtWidgets.QMessageBox.information(self, "Find", "No matches found.")

    def find_next(self) -> None:
        self._step(True)

    def find_previous(self) -> None:
        self._step(False)

    def _step(self, forward: bool) -> None:
        editor = self._current_editor()
        if not editor:
            return
        state = editor.model.search_state
        if not state.matches or self._is_stale(state):
            self._on_find()
            return
        editor.find_step(forward)
        self._results.setCurrentRow(editor.model.search_state.current_index)
        self._update_status(editor)

    def _is_stale(self, state: SearchState) -> bool:
        return (
            state.query != self._find_input.text()
            or state.is_column_scoped != self._scope_check.isChecked()
        )

    def _update_status(self, editor: EditorWidget) -> None:
        state = editor.model.search_state
        if not state.matches:
            self._status.setText("No matches" if state.query else "")
            return
        scope = " in selected columns" if state.is_column_scoped else ""
        self._status.setText(f"{state.current_index + 1} of {len(state.matches)}{scope}")

    def _on_result_activated(self, item: QtWidgets.QListWidgetItem) -> None:
        editor = self._current_editor()
        if not editor:
            return
        data = item.data(QtCore.Qt.ItemDataRole.UserRole)
        if isinstance(data, tuple) and len(data) == 2:
            row, col = data
            editor.select_cell(row, col)

    def _ellipsize(self, text: str, limit: int) -> str:
        if len(text) <= limit:
            return text
        return f"{text[:limit - 1]}…"

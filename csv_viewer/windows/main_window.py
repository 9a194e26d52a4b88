import logging
import os
from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from csv_viewer.errors import CsvViewerError
from csv_viewer.file_io import encoding_label, load_csv, save_csv, should_preview
from csv_viewer.settings import Preferences, RecentFiles, default_settings
from csv_viewer.widgets.editor import EditorWidget
from csv_viewer.widgets.find_panel import FindPanel
from csv_viewer.widgets.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)

APP_TITLE = "CSV Viewer"


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Optional[QtCore.QSettings] = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(1200, 720)
        self._settings = settings if settings is not None else default_settings()
        self._preferences = Preferences(self._settings)
        self._recent_files = RecentFiles(self._settings)

        splitter = QtWidgets.QSplitter(self)
        splitter.setOrientation(QtCore.Qt.Orientation.Horizontal)

        self._editor = EditorWidget(self)
        self._editor.document_changed.connect(self._on_document_changed)
        self._editor.selection_changed.connect(self._update_status)
        self._find_panel = FindPanel(self)
        self._editor.search_invalidated.connect(self._find_panel.reset)

        splitter.addWidget(self._editor)
        splitter.addWidget(self._find_panel)
        splitter.setStretchFactor(0, 1)
        self._find_panel.hide()

        self.setCentralWidget(splitter)
        self._status_bar = self.statusBar()
        self._status_bar.showMessage("Ready")

        self._build_actions()
        self._update_window_title()
        self._update_status()

    @property
    def editor(self) -> EditorWidget:
        return self._editor

    @property
    def find_panel(self) -> FindPanel:
        return self._find_panel

    def _build_actions(self) -> None:
        open_action = QtGui.QAction("Open...", self)
        open_action.setShortcut(QtGui.QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self.open_file_dialog)

        save_action = QtGui.QAction("Save", self)
        save_action.setShortcut(QtGui.QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self.save_current)

        save_as_action = QtGui.QAction("Save As...", self)
        save_as_action.setShortcut(QtGui.QKeySequence.StandardKey.SaveAs)
        save_as_action.triggered.connect(self.save_as_current)

        close_action = QtGui.QAction("Close File", self)
        close_action.setShortcut(QtGui.QKeySequence.StandardKey.Close)
        close_action.triggered.connect(self.close_current)

        self._undo_action = QtGui.QAction("Undo Delete", self)
        self._undo_action.setShortcut(QtGui.QKeySequence.StandardKey.Undo)
        self._undo_action.triggered.connect(self._editor.undo)

        copy_action = QtGui.QAction("Copy", self)
        copy_action.setShortcut(QtGui.QKeySequence.StandardKey.Copy)
        copy_action.triggered.connect(self._editor.copy_selection_to_clipboard)

        find_action = QtGui.QAction("Find...", self)
        find_action.setShortcut(QtGui.QKeySequence.StandardKey.Find)
        find_action.triggered.connect(self.open_find_panel)

        find_next_action = QtGui.QAction("Find Next", self)
        find_next_action.setShortcut(QtGui.QKeySequence.StandardKey.FindNext)
        find_next_action.triggered.connect(self._find_panel.find_next)

        find_prev_action = QtGui.QAction("Find Previous", self)
        find_prev_action.setShortcut(QtGui.QKeySequence.StandardKey.FindPrevious)
        find_prev_action.triggered.connect(self._find_panel.find_previous)

        insert_row_above_action = QtGui.QAction("Insert Row Above", self)
        insert_row_above_action.triggered.connect(self._editor.insert_row_above)
        insert_row_below_action = QtGui.QAction("Insert Row Below", self)
        insert_row_below_action.triggered.connect(self._editor.insert_row_below)
        delete_rows_action = QtGui.QAction("Delete Row(s)", self)
        delete_rows_action.triggered.connect(self._editor.delete_rows)
        delete_rows_action.setShortcuts(
            [QtGui.QKeySequence("Ctrl+Backspace"), QtGui.QKeySequence("Meta+Backspace")]
        )

        insert_col_left_action = QtGui.QAction("Insert Column Left", self)
        insert_col_left_action.triggered.connect(self._editor.insert_col_left)
        insert_col_right_action = QtGui.QAction("Insert Column Right", self)
        insert_col_right_action.triggered.connect(self._editor.insert_col_right)
        delete_cols_action = QtGui.QAction("Delete Column(s)", self)
        delete_cols_action.triggered.connect(self._editor.delete_cols)
        delete_cols_action.setShortcuts(
            [QtGui.QKeySequence("Ctrl+Shift+Backspace"), QtGui.QKeySequence("Meta+Shift+Backspace")]
        )

        settings_action = QtGui.QAction("Settings...", self)
        settings_action.setShortcut(QtGui.QKeySequence.StandardKey.Preferences)
        settings_action.triggered.connect(self.open_settings)

        file_menu = self.menuBar().addMenu("File")
        file_menu.addAction(open_action)
        self._recent_menu = file_menu.addMenu("Open Recent")
        self._recent_menu.aboutToShow.connect(self._rebuild_recent_menu)
        file_menu.addSeparator()
        file_menu.addAction(save_action)
        file_menu.addAction(save_as_action)
        file_menu.addSeparator()
        file_menu.addAction(close_action)

        edit_menu = self.menuBar().addMenu("Edit")
        edit_menu.addAction(self._undo_action)
        edit_menu.addAction(copy_action)
        edit_menu.addSeparator()
        edit_menu.addAction(find_action)
        edit_menu.addAction(find_next_action)
        edit_menu.addAction(find_prev_action)
        edit_menu.addSeparator()
        edit_menu.addAction(insert_row_above_action)
        edit_menu.addAction(insert_row_below_action)
        edit_menu.addAction(delete_rows_action)
        edit_menu.addSeparator()
        edit_menu.addAction(insert_col_left_action)
        edit_menu.addAction(insert_col_right_action)
        edit_menu.addAction(delete_cols_action)

        view_menu = self.menuBar().addMenu("View")
        view_menu.addAction(settings_action)

        # Ensure shortcuts work even when focus is in the table widget.
        for action in (
            open_action,
            save_action,
            save_as_action,
            close_action,
            self._undo_action,
            find_action,
            find_next_action,
            find_prev_action,
            delete_rows_action,
            delete_cols_action,
            settings_action,
        ):
            action.setShortcutContext(QtCore.Qt.ShortcutContext.ApplicationShortcut)
            action.setShortcutVisibleInContextMenu(True)
            self.addAction(action)

    def _rebuild_recent_menu(self) -> None:
        self._recent_menu.clear()
        paths = self._recent_files.paths()
        if not paths:
            empty = self._recent_menu.addAction("No recent files")
            empty.setEnabled(False)
            return
        for path in paths:
            action = self._recent_menu.addAction(os.path.basename(path))
            action.setToolTip(path)
            action.triggered.connect(lambda _=False, p=path: self.open_file(p))
        self._recent_menu.addSeparator()
        clear_action = self._recent_menu.addAction("Clear Recent")
        clear_action.triggered.connect(self._recent_files.clear)

    def open_file_dialog(self) -> None:
        start = os.path.dirname(self._editor.path) if self._editor.path else QtCore.QDir.currentPath()
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self,
            "Open CSV File",
            start,
            "CSV Files (*.csv);;All Files (*)",
        )
        if path:
            self.open_file(path)

    def open_file(self, path: str) -> None:
        if self._editor.is_dirty() and not self._confirm_discard():
            return
        limit: Optional[int] = None
        if should_preview(path, self._preferences):
            choice = self._ask_preview()
            if choice is None:
                return
            if choice:
                limit = self._preferences.preview_row_limit
        try:
            document = load_csv(path, limit)
        except CsvViewerError as exc:
            QtWidgets.QMessageBox.warning(self, "Open failed", str(exc))
            if path in self._recent_files.paths():
                self._recent_files.remove(path)
            return
        self._editor.set_document(document)
        self._find_panel.reset()
        self._recent_files.record(path)
        self._status_bar.showMessage(f"Opened: {os.path.basename(path)}", 3000)
        self._update_status()

    def _ask_preview(self) -> Optional[bool]:
        limit = self._preferences.preview_row_limit
        box = QtWidgets.QMessageBox(self)
        box.setWindowTitle("Large File")
        box.setText(f"This file is large. Load a {limit}-row preview or open the full file?")
        preview_btn = box.addButton("Load Preview", QtWidgets.QMessageBox.ButtonRole.AcceptRole)
        full_btn = box.addButton("Load All", QtWidgets.QMessageBox.ButtonRole.DestructiveRole)
        box.addButton(QtWidgets.QMessageBox.StandardButton.Cancel)
        box.exec()
        clicked = box.clickedButton()
        if clicked is preview_btn:
            return True
        if clicked is full_btn:
            return False
        return None

    def open_find_panel(self) -> None:
        self._find_panel.show()
        self._find_panel.focus_input()

    def open_settings(self) -> None:
        SettingsDialog(self._preferences, self).exec()

    def save_current(self) -> bool:
        if not self._editor.path:
            return self.save_as_current()
        return self._save_editor(self._editor.path)

    def save_as_current(self) -> bool:
        suggested = self._editor.path or os.path.join(QtCore.QDir.currentPath(), "Untitled.csv")
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            "Save CSV As",
            suggested,
            "CSV Files (*.csv)",
        )
        if not path:
            return False
        return self._save_editor(path)

    def _save_editor(self, path: str) -> bool:
        if self._editor.is_preview:
            result = QtWidgets.QMessageBox.question(
                self,
                "Save Preview",
                "Only a preview of this file is loaded. Saving will write the preview rows only. Continue?",
                QtWidgets.QMessageBox.StandardButton.Save
                | QtWidgets.QMessageBox.StandardButton.Cancel,
            )
            if result != QtWidgets.QMessageBox.StandardButton.Save:
                return False
        grid = self._editor.grid
        try:
            save_csv(path, grid.header, grid.rows)
        except CsvViewerError as exc:
            QtWidgets.QMessageBox.warning(self, "Save failed", str(exc))
            return False
        self._editor.mark_saved(path)
        self._recent_files.record(path)
        self._status_bar.showMessage(f"Saved: {os.path.basename(path)}", 3000)
        return True

    def close_current(self) -> None:
        if self._editor.is_dirty() and not self._confirm_discard():
            return
        self._editor.clear_document()
        self._find_panel.reset()

    def _confirm_discard(self) -> bool:
        name = os.path.basename(self._editor.path) if self._editor.path else "Untitled"
        result = QtWidgets.QMessageBox.question(
            self,
            "Unsaved Changes",
            f"Save changes to {name}?",
            QtWidgets.QMessageBox.StandardButton.Save
            | QtWidgets.QMessageBox.StandardButton.Discard
            | QtWidgets.QMessageBox.StandardButton.Cancel,
        )
        if result == QtWidgets.QMessageBox.StandardButton.Save:
            return self.save_current()
        if result == QtWidgets.QMessageBox.StandardButton.Discard:
            return True
        return False

    def _on_document_changed(self) -> None:
        self._update_window_title()
        self._update_status()

    def _update_status(self) -> None:
        grid = self._editor.grid
        if grid.column_count == 0 and not self._editor.path:
            self._status_bar.clearMessage()
            self._undo_action.setEnabled(False)
            return
        parts = [
            f"Encoding: {encoding_label(self._editor.encoding)}",
            f"Rows: {grid.row_count}",
            f"Cols: {grid.column_count}",
        ]
        selection = grid.selection
        if selection.rows:
            parts.append(f"Selected rows: {len(selection.rows)}")
        elif selection.columns:
            parts.append(f"Selected cols: {len(selection.columns)}")
        if self._editor.is_preview:
            parts.append("Preview")
        self._status_bar.showMessage(" | ".join(parts))
        self._undo_action.setEnabled(self._editor.can_undo())

    def _update_window_title(self) -> None:
        if not self._editor.path:
            title = APP_TITLE
            if self._editor.is_dirty():
                title = f"*Untitled - {APP_TITLE}"
            self.setWindowTitle(title)
            return
        name = os.path.basename(self._editor.path)
        if self._editor.is_preview:
            name = f"{name} (preview)"
        if self._editor.is_dirty():
            name = f"*{name}"
        self.setWindowTitle(f"{name} - {APP_TITLE}")

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        if self._editor.is_dirty() and not self._confirm_discard():
            event.ignore()
            return
        event.accept()

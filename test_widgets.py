import pytest
from PyQt6 import QtCore, QtWidgets

from csv_viewer.models import CsvDocument
from csv_viewer.settings import RecentFiles
from csv_viewer.widgets.editor import EditorWidget
from csv_viewer.windows.main_window import MainWindow


def _document(path=None, is_preview=False) -> CsvDocument:
    return CsvDocument(path, "utf-8", ["Name", "Age"], [["Ann", "30"], ["Bo", "5"]], is_preview)


@pytest.fixture
def settings(tmp_path):
    return QtCore.QSettings(str(tmp_path / "settings.ini"), QtCore.QSettings.Format.IniFormat)


@pytest.fixture
def window(qapp, settings):
    main = MainWindow(settings)
    main.editor.set_document(_document())
    yield main
    main.editor.set_dirty(False)
    main.deleteLater()


def test_header_menu_sort_flips_direction(qapp):
    editor = EditorWidget()
    editor.set_document(_document())
    editor._column_header_menu(1).actions()[0].trigger()
    assert editor.grid.sort_state.is_sorted_by(1, True)
    assert editor.grid.cell(0, 0) == "Bo"
    editor._column_header_menu(1).actions()[0].trigger()
    assert editor.grid.sort_state.is_sorted_by(1, False)
    assert editor.grid.cell(0, 0) == "Ann"
    assert editor.is_dirty()


def test_saving_a_preview_makes_it_a_full_document(qapp, tmp_path):
    editor = EditorWidget()
    editor.set_document(_document(str(tmp_path / "big.csv"), is_preview=True))
    assert editor.is_preview
    editor.mark_saved(str(tmp_path / "copy.csv"))
    assert not editor.is_preview
    assert editor.path.endswith("copy.csv")


def test_find_next_reruns_search_after_query_changes(window):
    panel = window.find_panel
    panel._find_input.setText("Ann")
    panel.find_next()
    state = window.editor.model.search_state
    assert state.query == "Ann"
    panel._find_input.setText("Bo")
    panel.find_next()
    assert state.query == "Bo"
    assert (state.current_match.row, state.current_match.column) == (1, 0)


def test_find_next_reruns_search_after_scope_changes(window):
    panel = window.find_panel
    panel._find_input.setText("o")
    panel.find_next()
    state = window.editor.model.search_state
    assert not state.is_column_scoped
    window.editor.model.select_column(0)
    panel._scope_check.setChecked(True)
    panel.find_next()
    assert state.is_column_scoped


def test_failed_open_drops_recent_entry(window, settings, tmp_path, monkeypatch):
    warnings = []
    monkeypatch.setattr(QtWidgets.QMessageBox, "warning", lambda *args: warnings.append(args))
    missing = str(tmp_path / "gone.csv")
    recent = RecentFiles(settings)
    recent.record(str(tmp_path / "kept.csv"))
    recent.record(missing)
    window.open_file(missing)
    assert len(warnings) == 1
    assert recent.paths() == [str(tmp_path / "kept.csv")]
    assert window.editor.grid.cell(0, 0) == "Ann"

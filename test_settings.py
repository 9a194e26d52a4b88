import pytest
from PyQt6 import QtCore

from csv_viewer.settings import (
    LARGE_FILE_MB_DEFAULT,
    PREVIEW_ROW_LIMIT_DEFAULT,
    Preferences,
    RecentFiles,
)


@pytest.fixture
def settings(tmp_path):
    return QtCore.QSettings(str(tmp_path / "settings.ini"), QtCore.QSettings.Format.IniFormat)


def test_preference_defaults(settings):
    preferences = Preferences(settings)
    assert preferences.preview_row_limit == PREVIEW_ROW_LIMIT_DEFAULT == 10000
    assert preferences.large_file_mb == LARGE_FILE_MB_DEFAULT == 50
    assert preferences.preview_large_files is True


def test_preferences_are_clamped(settings):
    preferences = Preferences(settings)
    preferences.preview_row_limit = 5
    preferences.large_file_mb = 10_000
    assert preferences.preview_row_limit == 1000
    assert preferences.large_file_mb == 500
    settings.setValue("preview_row_limit", 999_999)
    assert preferences.preview_row_limit == 100000


def test_preview_toggle_persists(settings):
    Preferences(settings).preview_large_files = False
    assert Preferences(settings).preview_large_files is False


def test_recent_files_are_capped_and_most_recent_first(settings):
    recent = RecentFiles(settings)
    for index in range(7):
        recent.record(f"/data/{index}.csv")
    assert recent.paths() == [f"/data/{index}.csv" for index in (6, 5, 4, 3, 2)]


def test_recording_again_moves_path_to_front(settings):
    recent = RecentFiles(settings)
    recent.record("/a.csv")
    recent.record("/b.csv")
    recent.record("/a.csv")
    assert recent.paths() == ["/a.csv", "/b.csv"]


def test_remove_and_clear(settings):
    recent = RecentFiles(settings)
    assert recent.paths() == []
    recent.record("/a.csv")
    recent.record("/b.csv")
    assert recent.remove("/a.csv") == ["/b.csv"]
    recent.clear()
    assert recent.paths() == []

import logging
from typing import List, Optional

from PyQt6 import QtCore

logger = logging.getLogger(__name__)

ORGANIZATION = "CsvViewer"
APPLICATION = "CsvViewer"

PREVIEW_ROW_LIMIT_DEFAULT = 10000
PREVIEW_ROW_LIMIT_RANGE = (1000, 100000)
LARGE_FILE_MB_DEFAULT = 50
LARGE_FILE_MB_RANGE = (10, 500)
PREVIEW_LARGE_FILES_DEFAULT = True
RECENT_FILES_LIMIT = 5


def default_settings() -> QtCore.QSettings:
    return QtCore.QSettings(ORGANIZATION, APPLICATION)


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(value, high))


class Preferences:
    def __init__(self, settings: Optional[QtCore.QSettings] = None) -> None:
        self._settings = settings if settings is not None else default_settings()

    @property
    def preview_row_limit(self) -> int:
        value = self._settings.value("preview_row_limit", PREVIEW_ROW_LIMIT_DEFAULT, type=int)
        return _clamp(value, PREVIEW_ROW_LIMIT_RANGE)

    @preview_row_limit.setter
    def preview_row_limit(self, value: int) -> None:
        self._settings.setValue("preview_row_limit", _clamp(int(value), PREVIEW_ROW_LIMIT_RANGE))

    @property
    def large_file_mb(self) -> int:
        value = self._settings.value("large_file_mb", LARGE_FILE_MB_DEFAULT, type=int)
        return _clamp(value, LARGE_FILE_MB_RANGE)

    @large_file_mb.setter
    def large_file_mb(self, value: int) -> None:
        self._settings.setValue("large_file_mb", _clamp(int(value), LARGE_FILE_MB_RANGE))

    @property
    def preview_large_files(self) -> bool:
        return self._settings.value("preview_large_files", PREVIEW_LARGE_FILES_DEFAULT, type=bool)

    @preview_large_files.setter
    def preview_large_files(self, value: bool) -> None:
        self._settings.setValue("preview_large_files", bool(value))


class RecentFiles:
    def __init__(
        self, settings: Optional[QtCore.QSettings] = None, limit: int = RECENT_FILES_LIMIT
    ) -> None:
        self._settings = settings if settings is not None else default_settings()
        self._limit = limit

    def paths(self) -> List[str]:
        if not self._settings.contains("recent_files"):
            return []
        raw = self._settings.value("recent_files", [], type=list)
        return [path for path in raw if isinstance(path, str) and path][: self._limit]

    def record(self, path: str) -> List[str]:
        updated = [path] + [item for item in self.paths() if item != path]
        updated = updated[: self._limit]
        self._settings.setValue("recent_files", updated)
        logger.debug("Recent files: %s", updated)
        return updated

    def remove(self, path: str) -> List[str]:
        updated = [item for item in self.paths() if item != path]
        if updated:
            self._settings.setValue("recent_files", updated)
        else:
            self._settings.remove("recent_files")
        return updated

    def clear(self) -> None:
        self._settings.remove("recent_files")

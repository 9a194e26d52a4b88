from typing import Optional

from PyQt6 import QtWidgets

from csv_viewer.settings import LARGE_FILE_MB_RANGE, PREVIEW_ROW_LIMIT_RANGE, Preferences


class SettingsDialog(QtWidgets.QDialog):
    def __init__(self, preferences: Preferences, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._preferences = preferences
        self.setWindowTitle("Settings")
        layout = QtWidgets.QGridLayout(self)

        self._preview_check = QtWidgets.QCheckBox("Preview large files", self)
        self._preview_check.setChecked(preferences.preview_large_files)

        self._row_limit = QtWidgets.QSpinBox(self)
        self._row_limit.setRange(*PREVIEW_ROW_LIMIT_RANGE)
        self._row_limit.setSingleStep(1000)
        self._row_limit.setValue(preferences.preview_row_limit)

        self._large_file_mb = QtWidgets.QSpinBox(self)
        self._large_file_mb.setRange(*LARGE_FILE_MB_RANGE)
        self._large_file_mb.setSingleStep(10)
        self._large_file_mb.setValue(preferences.large_file_mb)

        buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok
            | QtWidgets.QDialogButtonBox.StandardButton.Cancel,
            self,
        )

        layout.addWidget(self._preview_check, 0, 0, 1, 2)
        layout.addWidget(QtWidgets.QLabel("Preview rows:", self), 1, 0)
        layout.addWidget(self._row_limit, 1, 1)
        layout.addWidget(QtWidgets.QLabel("Large file threshold (MB):", self), 2, 0)
        layout.addWidget(self._large_file_mb, 2, 1)
        layout.addWidget(buttons, 3, 0, 1, 2)

        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)

    def _on_accept(self) -> None:
        self._preferences.preview_large_files = self._preview_check.isChecked()
        self._preferences.preview_row_limit = self._row_limit.value()
        self._preferences.large_file_mb = self._large_file_mb.value()
        self.accept()

import faulthandler
import logging
import os
import signal
import sys
from typing import List, Optional

from PyQt6 import QtCore, QtWidgets

from csv_viewer.settings import APPLICATION, ORGANIZATION
from csv_viewer.windows.main_window import MainWindow

logger = logging.getLogger("csv_viewer")


def configure_logging() -> None:
    level_name = os.environ.get("CSV_VIEWER_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> None:
    argv = list(sys.argv if argv is None else argv)
    configure_logging()

    def _log_unhandled(exc_type, exc_value, exc_traceback) -> None:
        logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = _log_unhandled
    faulthandler.enable()

    def _log_sigterm(signum, frame) -> None:
        logger.warning("Received signal %s, dumping stack.", signum)
        faulthandler.dump_traceback(file=sys.stderr, all_threads=True)

    signal.signal(signal.SIGTERM, _log_sigterm)
    QtCore.QCoreApplication.setOrganizationName(ORGANIZATION)
    QtCore.QCoreApplication.setApplicationName(APPLICATION)
    app = QtWidgets.QApplication(argv)
    window = MainWindow()
    window.show()
    window.raise_()
    window.activateWindow()
    if len(argv) > 1:
        QtCore.QTimer.singleShot(0, lambda: window.open_file(argv[1]))
    QtCore.QTimer.singleShot(0, window.activateWindow)
    app.exec()


if __name__ == "__main__":
    main()

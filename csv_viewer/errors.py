from typing import Optional


class CsvViewerError(Exception):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class DecodeFailure(CsvViewerError):
    """Raised when a source could not be read or decoded with any attempted encoding."""


class WriteFailure(CsvViewerError):
    """Raised when writing a document to disk fails."""

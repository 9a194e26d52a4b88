import codecs
import logging
import os
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import chardet

from csv_viewer.codec import format_document, parse_record, split_records
from csv_viewer.errors import DecodeFailure, WriteFailure
from csv_viewer.models import CsvDocument

if TYPE_CHECKING:
    from csv_viewer.settings import Preferences

logger = logging.getLogger(__name__)

CHARDET_MIN_CONFIDENCE = 0.75
CHARDET_SAMPLE_SIZE = 1024 * 20
FALLBACK_ENCODING = "cp1252"

_BOMS: List[Tuple[bytes, str]] = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]

_LABELS = {
    "utf-8": "UTF-8",
    "utf-8-sig": "UTF-8",
    "utf-16": "UTF-16",
    "utf-16-le": "UTF-16 LE",
    "utf-16-be": "UTF-16 BE",
    "utf-32": "UTF-32",
    "ascii": "ASCII",
}


def encoding_label(encoding: str) -> str:
    try:
        name = codecs.lookup(encoding).name
    except LookupError:
        return encoding.upper()
    return _LABELS.get(name, name.upper())


def _candidate_encodings(data: bytes) -> List[str]:
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return [encoding]
    candidates = ["utf-8"]
    result = chardet.detect(data[:CHARDET_SAMPLE_SIZE])
    guess = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logger.debug("chardet guessed %r with confidence %.2f", guess, confidence)
    if guess and confidence >= CHARDET_MIN_CONFIDENCE:
        candidates.append(guess)
    candidates.append(FALLBACK_ENCODING)
    unique: List[str] = []
    for encoding in candidates:
        if encoding.lower() not in (item.lower() for item in unique):
            unique.append(encoding)
    return unique


def decode_bytes(data: bytes, path: Optional[str] = None) -> Tuple[str, str]:
    for encoding in _candidate_encodings(data):
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            logger.warning("Could not decode %s as %s: %s", path or "<bytes>", encoding, exc)
            continue
        return text, encoding
    logger.error("All attempts to decode %s failed", path or "<bytes>")
    raise DecodeFailure("Could not decode file with any supported encoding.", path)


def parse_csv_bytes(
    data: bytes, path: Optional[str] = None, limit_rows: Optional[int] = None
) -> CsvDocument:
    text, encoding = decode_bytes(data, path)
    records = split_records(text)
    if not records:
        return CsvDocument(path, encoding, [], [])
    header = parse_record(records[0])
    body = records[1:]
    is_preview = False
    if limit_rows is not None and len(body) > limit_rows:
        body = body[: max(0, limit_rows)]
        is_preview = True
    rows = [parse_record(record) for record in body]
    return CsvDocument(path, encoding, header, rows, is_preview)


def load_csv(path: str, limit_rows: Optional[int] = None) -> CsvDocument:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        logger.error("Failed to read %s: %s", path, exc)
        raise DecodeFailure(str(exc), path) from exc
    document = parse_csv_bytes(data, path, limit_rows)
    logger.info(
        "Loaded %s (%s, %d rows%s)",
        path,
        document.encoding,
        len(document.rows),
        ", preview" if document.is_preview else "",
    )
    return document


def save_csv(path: str, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    text = format_document(header, rows)
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        logger.error("Failed to save %s: %s", path, exc)
        raise WriteFailure(str(exc), path) from exc
    logger.info("Saved %s (%d rows)", path, len(rows))


def should_preview(path: str, preferences: "Preferences") -> bool:
    if not preferences.preview_large_files:
        return False
    try:
        size = os.path.getsize(path)
    except OSError:
        return False
    return size >= preferences.large_file_mb * 1024 * 1024

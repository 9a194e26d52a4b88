from typing import Iterable, List, Sequence

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def parse_record(line: str) -> List[str]:
    fields: List[str] = []
    current: List[str] = []
    inside_quotes = False
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == '"':
            if inside_quotes and index + 1 < length and line[index + 1] == '"':
                current.append('"')
                index += 2
                continue
            inside_quotes = not inside_quotes
        elif char == "," and not inside_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current))
    return fields


def escape_field(field: str) -> str:
    if any(token in field for token in _NEEDS_QUOTES):
        return '"' + field.replace('"', '""') + '"'
    return field


def format_record(fields: Iterable[str]) -> str:
    values = list(fields)
    line = ",".join(escape_field(field) for field in values)
    # A lone blank field would read back as a skipped blank line.
    if len(values) == 1 and not line.strip():
        return '"' + values[0] + '"'
    return line


def split_records(text: str) -> List[str]:
    """Split decoded text into logical records.

    Line breaks only separate records outside of quotes, so a quoted field may
    span several physical lines. Blank and whitespace-only records are dropped.
    """
    records: List[str] = []
    current: List[str] = []
    inside_quotes = False
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == '"':
            inside_quotes = not inside_quotes
            current.append(char)
        elif char in "\r\n" and not inside_quotes:
            records.append("".join(current))
            current = []
            if char == "\r" and index + 1 < length and text[index + 1] == "\n":
                index += 1
        else:
            current.append(char)
        index += 1
    records.append("".join(current))
    return [record for record in records if record.strip()]


def format_document(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    lines = [format_record(header)]
    lines.extend(format_record(row) for row in rows)
    return "".join(f"{line}\n" for line in lines)

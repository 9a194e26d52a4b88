import re
from functools import cmp_to_key
from typing import List, Optional, Sequence

# Optional sign, digits with an optional fraction, optional exponent.
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: str) -> Optional[float]:
    if not _DECIMAL.fullmatch(value):
        return None
    try:
        return float(value)
    except (ValueError, OverflowError):
        return None


def compare_values(left: str, right: str) -> int:
    left_number = parse_number(left)
    right_number = parse_number(right)
    if left_number is not None and right_number is not None:
        return (left_number > right_number) - (left_number < right_number)
    left_key = left.casefold()
    right_key = right.casefold()
    return (left_key > right_key) - (left_key < right_key)


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def sorted_order(rows: Sequence[Sequence[str]], index: int, ascending: bool = True) -> List[int]:
    """Return the stable permutation of row positions sorted by column ``index``.

    Mixed numeric and text cells fall back to case-insensitive comparison pair
    by pair, which is not transitive; callers get whatever order that yields.
    """
    direction = 1 if ascending else -1

    def compare(a: int, b: int) -> int:
        return direction * compare_values(_cell(rows[a], index), _cell(rows[b], index))

    return sorted(range(len(rows)), key=cmp_to_key(compare))


class SortState:
    def __init__(self) -> None:
        self.column: Optional[int] = None
        self.ascending = True

    def reset(self) -> None:
        self.column = None
        self.ascending = True

    def record(self, column: int, ascending: bool) -> None:
        self.column = column
        self.ascending = ascending

    def next_direction(self, column: int) -> bool:
        if self.column == column:
            return not self.ascending
        return True

    def is_sorted_by(self, column: int, ascending: bool) -> bool:
        return self.column == column and self.ascending == ascending

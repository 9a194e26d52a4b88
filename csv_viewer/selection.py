from typing import Iterable, List, Optional, Set


class Selection:
    def __init__(self) -> None:
        self.rows: Set[int] = set()
        self.columns: Set[int] = set()
        self.last_row: Optional[int] = None
        self.last_column: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.columns

    def clear(self) -> None:
        self.rows = set()
        self.columns = set()
        self.last_row = None
        self.last_column = None

    def select_column(self, index: int, extend: bool = False, toggle: bool = False) -> None:
        self.rows = set()
        self.last_row = None
        self.columns = self._apply(self.columns, self.last_column, index, extend, toggle)
        self.last_column = index

    def select_row(self, index: int, extend: bool = False, toggle: bool = False) -> None:
        self.columns = set()
        self.last_column = None
        self.rows = self._apply(self.rows, self.last_row, index, extend, toggle)
        self.last_row = index

    def select_only_columns(self, indices: Iterable[int]) -> None:
        ordered = sorted(set(indices))
        self.clear()
        self.columns = set(ordered)
        self.last_column = ordered[-1] if ordered else None

    def select_only_rows(self, indices: Iterable[int]) -> None:
        ordered = sorted(set(indices))
        self.clear()
        self.rows = set(ordered)
        self.last_row = ordered[-1] if ordered else None

    def remap_rows(self, order: List[int]) -> None:
        # order[new_position] == old_position
        if not self.rows and self.last_row is None:
            return
        positions = {old: new for new, old in enumerate(order)}
        self.rows = {positions[row] for row in self.rows if row in positions}
        if self.last_row is not None:
            self.last_row = positions.get(self.last_row)

    def is_cell_selected(self, row: int, column: int) -> bool:
        return row in self.rows or column in self.columns

    @staticmethod
    def _apply(
        current: Set[int], anchor: Optional[int], index: int, extend: bool, toggle: bool
    ) -> Set[int]:
        if extend and anchor is not None:
            span = set(range(min(anchor, index), max(anchor, index) + 1))
            if toggle:
                return current | span
            return span
        if toggle:
            if index in current:
                return current - {index}
            return current | {index}
        return {index}

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set


@dataclass(frozen=True)
class SearchMatch:
    row: int
    column: int


class SearchState:
    def __init__(self) -> None:
        self.query = ""
        self.matches: List[SearchMatch] = []
        self.match_set: Set[SearchMatch] = set()
        self.current_index = 0
        self.is_column_scoped = False

    @property
    def current_match(self) -> Optional[SearchMatch]:
        if 0 <= self.current_index < len(self.matches):
            return self.matches[self.current_index]
        return None

    def search(
        self,
        rows: Sequence[Sequence[str]],
        query: str,
        scope_columns: Optional[Iterable[int]] = None,
    ) -> List[SearchMatch]:
        self.query = query
        self.is_column_scoped = scope_columns is not None
        self.current_index = 0
        scope = sorted(set(scope_columns)) if scope_columns is not None else None
        matches: List[SearchMatch] = []
        if query:
            needle = query.casefold()
            for row_index, row in enumerate(rows):
                columns = range(len(row)) if scope is None else scope
                for column in columns:
                    if 0 <= column < len(row) and needle in row[column].casefold():
                        matches.append(SearchMatch(row_index, column))
        self.matches = matches
        self.match_set = set(matches)
        return list(matches)

    def advance(self, forward: bool = True) -> Optional[SearchMatch]:
        if not self.matches:
            return None
        step = 1 if forward else -1
        self.current_index = (self.current_index + step) % len(self.matches)
        return self.matches[self.current_index]

    def clear(self) -> None:
        self.query = ""
        self.matches = []
        self.match_set = set()
        self.current_index = 0
        self.is_column_scoped = False

    def is_match(self, row: int, column: int) -> bool:
        return SearchMatch(row, column) in self.match_set

    def is_current(self, row: int, column: int) -> bool:
        return self.current_match == SearchMatch(row, column)

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class DeletedColumn:
    index: int
    name: str
    values: List[str]


@dataclass(frozen=True)
class DeletedRow:
    index: int
    values: List[str]


@dataclass
class DeleteColumnsRecord:
    columns: List[DeletedColumn] = field(default_factory=list)

    @property
    def indices(self) -> List[int]:
        return [column.index for column in self.columns]


@dataclass
class DeleteRowsRecord:
    rows: List[DeletedRow] = field(default_factory=list)

    @property
    def indices(self) -> List[int]:
        return [row.index for row in self.rows]


UndoRecord = Union[DeleteColumnsRecord, DeleteRowsRecord]


class EditHistory:
    def __init__(self) -> None:
        self._stack: List[UndoRecord] = []

    def __len__(self) -> int:
        return len(self._stack)

    def can_undo(self) -> bool:
        return bool(self._stack)

    def push(self, record: UndoRecord) -> None:
        self._stack.append(record)

    def pop(self) -> Optional[UndoRecord]:
        if not self._stack:
            return None
        return self._stack.pop()

    def peek(self) -> Optional[UndoRecord]:
        if not self._stack:
            return None
        return self._stack[-1]

    def clear(self) -> None:
        self._stack.clear()

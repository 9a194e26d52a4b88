from typing import Optional

from csv_viewer.codec import format_record
from csv_viewer.grid import Grid


def selection_text(grid: Grid) -> Optional[str]:
    if grid.column_count == 0 or grid.row_count == 0:
        return None
    selection = grid.selection
    row_indices = [index for index in sorted(selection.rows) if index < grid.row_count]
    column_indices = [index for index in sorted(selection.columns) if index < grid.column_count]
    if not row_indices:
        row_indices = list(range(grid.row_count))
    if not column_indices:
        column_indices = list(range(grid.column_count))
    header = grid.header
    lines = [format_record(header[index] for index in column_indices)]
    for row_index in row_indices:
        lines.append(format_record(grid.cell(row_index, index) for index in column_indices))
    return "\n".join(lines)

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

# (plain text, styled text); widths are measured on the plain text so escape
# codes in the styled text never affect alignment
Cell = Tuple[str, str]


def _single_line_width(cells: Sequence[Cell], indent: str, gap: str) -> int:
    return len(indent) + sum(len(plain) for plain, _ in cells) + len(gap) * (len(cells) - 1)


def _column_widths(cells: Sequence[Cell], rows: int) -> List[int]:
    return [
        max(len(plain) for plain, _ in cells[start:start + rows])
        for start in range(0, len(cells), rows)
    ]


def layout_cells(
    cells: Sequence[Cell],
    width: Optional[int] = None,
    indent: str = "  ",
    gap: str = "  ",
) -> List[str]:
    """Lay out cells as one line, or as aligned columns when ``width`` is exceeded.

    Columns are filled top to bottom, left to right, so reading down each
    column keeps the input order. The fewest rows that fit are used; when
    nothing fits, every cell gets its own row.
    """
    if not cells:
        return []
    if width is None or _single_line_width(cells, indent, gap) <= width:
        return [indent + gap.join(styled for _, styled in cells)]

    count = len(cells)
    rows = count
    widths = _column_widths(cells, rows)
    for candidate in range(2, count + 1):
        candidate_widths = _column_widths(cells, candidate)
        total = len(indent) + sum(candidate_widths) + len(gap) * (len(candidate_widths) - 1)
        if total <= width:
            rows, widths = candidate, candidate_widths
            break

    lines = []
    for row in range(rows):
        row_cells = [
            (column, cells[column * rows + row])
            for column in range(math.ceil(count / rows))
            if column * rows + row < count
        ]
        parts = []
        for position, (column, (plain, styled)) in enumerate(row_cells):
            if position == len(row_cells) - 1:
                parts.append(styled)
            else:
                parts.append(styled + " " * (widths[column] - len(plain)) + gap)
        lines.append(indent + "".join(parts))
    return lines

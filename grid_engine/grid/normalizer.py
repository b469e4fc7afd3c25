"""
Grid normalization: pad to a rectangle and trim cells.
Blank rows are kept so row positions match the source document.
"""

from typing import List, Sequence

from ..types import Grid


def normalize_grid(rows: Sequence[Sequence[str]]) -> Grid:
    width = max((len(row) for row in rows), default=0)
    return [
        [cell.strip() for cell in row] + [''] * (width - len(row))
        for row in rows
    ]


def grid_width(grid: Grid) -> int:
    return len(grid[0]) if grid else 0


def is_rectangular(grid: List[List[str]]) -> bool:
    return len({len(row) for row in grid}) <= 1

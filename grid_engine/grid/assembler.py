"""
Grid Assembly
=============
Places each fragment of a row band into its nearest column cell.
Rows keep page-then-band order; nothing is merged across pages.
"""

from typing import List, Sequence

from ..types import RowBand, ColumnSet, Grid


def nearest_column(x: float, columns: Sequence[float]) -> int:
    """
    Index of the column center closest to x.

    Ties go to the lowest index. Returns -1 when there are no columns.
    """
    best_idx = -1
    best_dist = float('inf')
    for i, center in enumerate(columns):
        dist = abs(x - center)
        if dist < best_dist:
            best_idx = i
            best_dist = dist
    return best_idx


class GridAssembler:
    """
    Build the cell matrix from row bands and column centers.

    Process:
    1. One row of |columns| empty cells per band
    2. Band fragments sorted left to right
    3. Each text appended to its nearest column, space-separated
    """

    def assemble_row(self, band: RowBand, columns: ColumnSet) -> List[str]:
        """Cells for a single row band"""
        cells = [''] * len(columns)
        if not columns:
            return cells
        for frag in sorted(band.fragments, key=lambda f: f.x):
            idx = nearest_column(frag.x, columns)
            cells[idx] = f"{cells[idx]} {frag.text}" if cells[idx] else frag.text
        return cells

    def assemble(self, bands: List[RowBand], columns: ColumnSet) -> Grid:
        """
        Assemble the grid.

        Args:
            bands: Row bands in page order, then top-to-bottom
            columns: Column centers, ascending

        Returns:
            One row per band
        """
        return [self.assemble_row(band, columns) for band in bands]


def assemble_grid(bands: List[RowBand], columns: ColumnSet) -> Grid:
    """Convenience function to assemble a grid"""
    return GridAssembler().assemble(bands, columns)

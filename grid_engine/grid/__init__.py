"""
Grid Module
===========
Cell assembly and normalization.
"""

from .assembler import GridAssembler, assemble_grid, nearest_column
from .normalizer import normalize_grid, grid_width, is_rectangular

__all__ = [
    'GridAssembler', 'assemble_grid', 'nearest_column',
    'normalize_grid', 'grid_width', 'is_rectangular',
]

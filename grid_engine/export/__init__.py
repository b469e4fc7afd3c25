"""
Export Module
=============
Spreadsheet output for reconstructed tables and reports.
"""

from .workbook import (
    build_workbook,
    write_workbook,
    clean_cell_text,
    write_table_workbook,
    DEFAULT_TABLE_SHEET,
    DEFAULT_TABLE_FILENAME,
)

__all__ = [
    'build_workbook', 'write_workbook', 'clean_cell_text', 'write_table_workbook',
    'DEFAULT_TABLE_SHEET', 'DEFAULT_TABLE_FILENAME',
]

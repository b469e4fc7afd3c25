"""
Workbook Export
===============
Writes row matrices to .xlsx sheets with openpyxl.
No styling: values only, one row per list.

Text cells are always stored as strings: a leading "=" does not turn into
a formula, and control characters openpyxl refuses are removed.
"""

import os
from typing import List, Sequence, Tuple, Any, Union

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE


Sheet = Tuple[str, Sequence[Sequence[Any]]]

DEFAULT_TABLE_SHEET = "PDF Table"
DEFAULT_TABLE_FILENAME = "pdf_table.xlsx"


def clean_cell_text(value: str) -> str:
    """Drop characters that cannot be stored in a worksheet (e.g. \\x02)."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _write_row(ws, row_idx: int, row: Sequence[Any]):
    for col_idx, value in enumerate(row, start=1):
        if isinstance(value, str):
            value = clean_cell_text(value)
        cell = ws.cell(row=row_idx, column=col_idx, value=value)
        if isinstance(value, str):
            cell.data_type = "s"


def build_workbook(sheets: List[Sheet]) -> Workbook:
    """
    Build a workbook with one sheet per (name, rows) pair, in order.

    An empty sheet list still yields a workbook with the default sheet.
    """
    wb = Workbook()
    for i, (name, rows) in enumerate(sheets):
        if i == 0:
            ws = wb.active
            ws.title = name
        else:
            ws = wb.create_sheet(name)
        for row_idx, row in enumerate(rows, start=1):
            _write_row(ws, row_idx, row)
    return wb


def write_workbook(sheets: List[Sheet], path: Union[str, os.PathLike]) -> str:
    """Build and save a workbook. Returns the absolute output path."""
    wb = build_workbook(sheets)
    wb.save(path)
    return os.path.abspath(path)


def write_table_workbook(
    grid: Sequence[Sequence[str]],
    path: Union[str, os.PathLike] = DEFAULT_TABLE_FILENAME,
    sheet_name: str = DEFAULT_TABLE_SHEET
) -> str:
    """Write the reconstructed table as a single sheet, no header row."""
    return write_workbook([(sheet_name, grid)], path)

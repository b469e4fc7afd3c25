"""
Attendance Report Export
========================
Two-sheet workbook: detailed records and point totals.
"""

import os
from typing import List, Tuple, Union

from grid_engine.export import write_workbook

from .book import AttendanceBook


DETAIL_SHEET = "Detailed Attendance"
SUMMARY_SHEET = "Summary Report"
DETAIL_HEADER = ["Student Name", "Day of Week", "Mass Time", "Meeting Attended", "Points"]
SUMMARY_HEADER = ["Student Name", "Total Points"]
DEFAULT_REPORT_FILENAME = "attendance_report.xlsx"


def build_report_sheets(book: AttendanceBook) -> List[Tuple[str, List[List]]]:
    """(sheet name, rows) pairs, header row first on each sheet"""
    detail = [DETAIL_HEADER] + [r.as_row() for r in book.records]
    summary = [SUMMARY_HEADER] + [[name, points] for name, points in book.student_points.items()]
    return [(DETAIL_SHEET, detail), (SUMMARY_SHEET, summary)]


def export_attendance_report(
    book: AttendanceBook,
    path: Union[str, os.PathLike] = DEFAULT_REPORT_FILENAME
) -> str:
    """Write the attendance report. Returns the absolute output path."""
    return write_workbook(build_report_sheets(book), path)

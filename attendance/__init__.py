"""
Attendance Tracker
==================
Mass/meeting attendance points, roster persistence and report export.

Usage:
    from attendance import AttendanceBook, RosterStore, export_attendance_report
    book = AttendanceBook()
    book.record("Alice", "Sunday", "9:30 AM", "Yes")
    export_attendance_report(book)
"""

from .points import MASS_SCHEDULE, MEETING_OPTIONS, calculate_points, mass_times_for
from .book import AttendanceRecord, AttendanceBook
from .roster import RosterStore, ROSTER_KEY
from .report import export_attendance_report, build_report_sheets

__all__ = [
    'MASS_SCHEDULE', 'MEETING_OPTIONS', 'calculate_points', 'mass_times_for',
    'AttendanceRecord', 'AttendanceBook',
    'RosterStore', 'ROSTER_KEY',
    'export_attendance_report', 'build_report_sheets',
]

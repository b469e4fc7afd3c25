"""
Attendance Book
===============
In-memory attendance records and running point totals.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple

from .points import MASS_SCHEDULE, MEETING_OPTIONS, calculate_points


@dataclass
class AttendanceRecord:
    """
    One recorded attendance.

    Attributes:
        student_name: Roster name
        day_of_week: "Monday" .. "Sunday"
        mass_time: One of the day's mass times (e.g. "6:30 AM")
        meeting_attended: "Yes" or "No"
        points: Points earned for this attendance
    """
    student_name: str
    day_of_week: str
    mass_time: str
    meeting_attended: str
    points: int

    def as_row(self) -> List:
        return [self.student_name, self.day_of_week, self.mass_time, self.meeting_attended, self.points]

    def describe(self) -> str:
        return f"{self.student_name} - {self.day_of_week} - {self.mass_time} - {self.points} point(s)"


@dataclass
class AttendanceBook:
    """
    Append-only attendance records plus totals per student.

    Totals keep first-recorded order; `ranking()` sorts by points.
    """
    student_points: Dict[str, int] = field(default_factory=dict)
    records: List[AttendanceRecord] = field(default_factory=list)

    def record(
        self,
        student_name: str,
        day_of_week: str,
        mass_time: str,
        meeting_attended: str
    ) -> AttendanceRecord:
        """
        Record one attendance and update the student's total.

        Raises:
            ValueError: missing field, unknown day, mass time not offered
                that day, or meeting value other than Yes/No
        """
        if not (student_name and day_of_week and mass_time and meeting_attended):
            raise ValueError("Please fill in all fields")
        if day_of_week not in MASS_SCHEDULE:
            raise ValueError(f"Unknown day: {day_of_week}")
        if mass_time not in MASS_SCHEDULE[day_of_week]:
            raise ValueError(f"No {mass_time} mass on {day_of_week}")
        if meeting_attended not in MEETING_OPTIONS:
            raise ValueError(f"Meeting attended must be Yes or No, got {meeting_attended!r}")

        points = calculate_points(mass_time, meeting_attended)
        rec = AttendanceRecord(
            student_name=student_name,
            day_of_week=day_of_week,
            mass_time=mass_time,
            meeting_attended=meeting_attended,
            points=points,
        )
        self.records.append(rec)
        self.student_points[student_name] = self.student_points.get(student_name, 0) + points
        return rec

    def remove_student(self, student_name: str) -> int:
        """Drop a student's total and records. Returns the number of records removed."""
        self.student_points.pop(student_name, None)
        before = len(self.records)
        self.records = [r for r in self.records if r.student_name != student_name]
        return before - len(self.records)

    def ranking(self) -> List[Tuple[str, int]]:
        """(name, points), highest first"""
        return sorted(self.student_points.items(), key=lambda kv: -kv[1])

    def recent(self, limit: int = 10) -> List[AttendanceRecord]:
        """Latest records, newest first"""
        return list(reversed(self.records[-limit:]))

    @property
    def count(self) -> int:
        return len(self.records)

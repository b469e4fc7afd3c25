"""
Attendance Points
=================
Mass schedule and point rules.

- Morning (AM) mass: 2 points
- Evening (PM) mass: 1 point
- Meeting attended: +5 points
"""

from typing import Dict, List


MASS_SCHEDULE: Dict[str, List[str]] = {
    "Monday": ["6:30 AM", "7:00 PM"],
    "Tuesday": ["6:30 AM", "7:00 PM"],
    "Wednesday": ["6:30 AM", "7:00 PM"],
    "Thursday": ["6:30 AM", "7:00 PM"],
    "Friday": ["6:30 AM", "7:00 PM"],
    "Saturday": ["6:30 AM", "7:00 PM"],
    "Sunday": ["7:30 AM", "8:30 AM", "9:30 AM", "6:00 PM"],
}

MEETING_OPTIONS = ("Yes", "No")

AM_MASS_POINTS = 2
PM_MASS_POINTS = 1
MEETING_POINTS = 5


def mass_times_for(day_of_week: str) -> List[str]:
    """Mass times offered on a day (empty for unknown days)"""
    return list(MASS_SCHEDULE.get(day_of_week, []))


def calculate_points(mass_time: str, meeting_attended: str) -> int:
    """
    Points for one attendance.

    Examples:
    - ("6:30 AM", "No") -> 2
    - ("7:00 PM", "No") -> 1
    - ("6:30 AM", "Yes") -> 7
    """
    points = 0
    if "AM" in mass_time:
        points += AM_MASS_POINTS
    if "PM" in mass_time:
        points += PM_MASS_POINTS
    if meeting_attended == "Yes":
        points += MEETING_POINTS
    return points

"""
Student Roster Store
====================
Student names persisted as a JSON array under a fixed key.

File format:
    {"students": ["Alice", "Bob"]}

A bare array (["Alice", "Bob"]) is read too and rewritten in the keyed
form on the next mutation.

Every mutation rewrites the file.
"""

import json
import os
from typing import List, Union


ROSTER_KEY = "students"
DEFAULT_ROSTER_PATH = os.path.join(os.path.expanduser("~"), ".attendance_roster.json")


class RosterStore:
    """
    Sorted, de-duplicated list of student names backed by a JSON file.

    Usage:
        store = RosterStore("roster.json")
        store.load()
        store.add("Alice")
    """

    def __init__(self, path: Union[str, os.PathLike] = DEFAULT_ROSTER_PATH):
        self.path = path
        self.students: List[str] = []

    def load(self) -> List[str]:
        """
        Read the roster; a missing file is an empty roster.

        Accepts {"students": [...]} or a bare JSON array of names.
        """
        if not os.path.exists(self.path):
            self.students = []
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, list):
            names = data
        elif isinstance(data, dict):
            names = data.get(ROSTER_KEY, [])
        else:
            names = []
        self.students = sorted({str(n).strip() for n in names if str(n).strip()})
        return list(self.students)

    def save(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({ROSTER_KEY: self.students}, f, ensure_ascii=False, indent=2)

    def add(self, name: str) -> str:
        """
        Add a student (trimmed). Keeps the roster sorted.

        Raises:
            ValueError: empty name or already on the roster
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a student name")
        if name in self.students:
            raise ValueError(f"{name} is already in the list")
        self.students = sorted(self.students + [name])
        self.save()
        return name

    def remove(self, name: str) -> str:
        """
        Remove a student (trimmed).

        Raises:
            ValueError: empty name or not on the roster
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Please enter a student name to remove")
        if name not in self.students:
            raise ValueError(f'Student "{name}" not found')
        self.students = [s for s in self.students if s != name]
        self.save()
        return name

    def __contains__(self, name: str) -> bool:
        return name in self.students

    def __len__(self) -> int:
        return len(self.students)

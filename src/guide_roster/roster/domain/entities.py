"""
Roster Domain Entities
======================

Plain Python objects for guides and the students they look after.

A guide's repr never lists its students, so a student can safely show the
guide it belongs to.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Guide:
    """A staff member who guides students."""
    id: Optional[int]  # None until persisted
    staff_id: str
    name: str
    salary: int

    # Populated only by queries that fetch the collection
    students: List["Student"] = field(default_factory=list, repr=False, compare=False)


@dataclass
class Student:
    """An enrolled student, optionally assigned to a guide."""
    id: Optional[int]  # None until persisted
    enrollment_id: str
    name: str
    guide: Optional[Guide] = None

    @property
    def has_guide(self) -> bool:
        return self.guide is not None

"""
Roster Domain Layer
===================

Contains:
- Entities: Guide, Student
- Value Objects: SalaryStatistics, NamedQuery, TourStep

This layer is framework-agnostic.
"""

from guide_roster.roster.domain.entities import Guide, Student
from guide_roster.roster.domain.value_objects import (
    SalaryStatistics,
    NamedQuery,
    TourStep,
)

__all__ = [
    "Guide",
    "Student",
    "SalaryStatistics",
    "NamedQuery",
    "TourStep",
]

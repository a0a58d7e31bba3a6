"""
Roster Value Objects
====================

Immutable results and definitions used by the query tour.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class SalaryStatistics:
    """
    Aggregate view over every guide's salary.

    On an empty table count is 0 and every other figure is None.
    """
    count: int
    minimum: Optional[int]
    maximum: Optional[int]
    average: Optional[float]
    total: Optional[int]


@dataclass(frozen=True)
class NamedQuery:
    """
    A query predefined in external configuration and invoked by name.

    entity names the mapped class the rows load into ("Guide" or "Student");
    None returns plain tuples.
    """
    name: str
    sql: str
    entity: Optional[str] = None
    description: str = ""


@dataclass
class TourStep:
    """One labelled query of the tour together with its results."""
    label: str
    description: str
    rows: List[Any] = field(default_factory=list)

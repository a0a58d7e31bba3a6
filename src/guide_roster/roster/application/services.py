"""
Roster Application Services
============================

Application services drive the repositories through the three programs:
seeding the fixture roster, enrolling a student, and the query tour.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (repositories), not concrete implementations
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from guide_roster.config import FIXTURE_GUIDES, FIXTURE_STUDENTS
from guide_roster.core import ResourceNotFoundException, ValidationException
from guide_roster.roster.domain import Guide, Student, SalaryStatistics, NamedQuery, TourStep
from guide_roster.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class INamedQueryProvider(ABC):
    """Interface for looking up named queries."""

    @abstractmethod
    def get(self, name: str) -> NamedQuery:
        """Get a named query by name."""

    @abstractmethod
    def names(self) -> List[str]:
        """List every known query name."""


class IGuideRepository(ABC):
    """Interface for guide data access."""

    @abstractmethod
    def list_all(self) -> List[Guide]:
        """Entity query over every guide."""

    @abstractmethod
    def list_names(self) -> List[str]:
        """Projection of guide names."""

    @abstractmethod
    def list_by_salary(self, salary: int) -> List[Guide]:
        """Guides earning exactly salary."""

    @abstractmethod
    def list_name_and_salary(self) -> List[tuple]:
        """Reporting query of (name, salary) pairs."""

    @abstractmethod
    def get_by_name(self, name: str) -> Guide:
        """The single guide with this name."""

    @abstractmethod
    def list_name_like(self, pattern: str) -> List[Guide]:
        """Guides whose name matches a LIKE pattern."""

    @abstractmethod
    def list_native(self) -> List[Guide]:
        """Every guide through a native SQL statement."""

    @abstractmethod
    def run_named_query(self, name: str, /, **params: Any) -> List[Any]:
        """Execute a named query."""

    @abstractmethod
    def count_loaded(self) -> int:
        """Count guides by loading them all."""

    @abstractmethod
    def count(self) -> int:
        """Count guides with COUNT."""

    @abstractmethod
    def max_salary(self) -> Optional[int]:
        """Highest salary with MAX."""

    @abstractmethod
    def salary_statistics(self) -> SalaryStatistics:
        """COUNT/MIN/MAX/AVG/SUM over salaries."""

    @abstractmethod
    def list_with_students(self) -> List[Guide]:
        """Guides having students, collection left unloaded."""

    @abstractmethod
    def list_join_fetch(self) -> List[Guide]:
        """Guides having students, collection fetched in the same query."""

    @abstractmethod
    def get_by_staff_id(self, staff_id: str) -> Optional[Guide]:
        """Get guide by staff ID."""

    @abstractmethod
    def create(self, guide: Guide) -> Guide:
        """Insert a new guide."""


class IStudentRepository(ABC):
    """Interface for student data access."""

    @abstractmethod
    def list_inner_join(self) -> List[Student]:
        """Students that have a guide."""

    @abstractmethod
    def list_left_join(self) -> List[Student]:
        """Every student, guide or not."""

    @abstractmethod
    def list_right_join(self) -> List[Optional[Student]]:
        """Students seen from the guide side of the join."""

    @abstractmethod
    def get_by_enrollment_id(self, enrollment_id: str) -> Optional[Student]:
        """Get student by enrollment ID."""

    @abstractmethod
    def create(self, student: Student, guide_staff_id: Optional[str] = None) -> Student:
        """Insert a new student, attached to a guide when a staff ID is given."""


# ========== Services ==========

@dataclass(frozen=True)
class TourParameters:
    """Values bound into the parameterised queries of the tour."""
    guide_name: str = "Homer Simpson"
    salary: int = 1200
    name_pattern: str = "M%"
    named_query: str = "find_by_guide"


class QueryTourService:
    """
    Runs the fixed sequence of demonstration queries.

    Every step is executed once, in order, inside the caller's transaction.
    """

    def __init__(
        self,
        guides: IGuideRepository,
        students: IStudentRepository,
        parameters: Optional[TourParameters] = None,
    ):
        self._guides = guides
        self._students = students
        self._parameters = parameters or TourParameters()

    def run(self) -> List[TourStep]:
        """Execute every query and return the labelled results."""
        p = self._parameters
        plan = [
            ("ROW", "Selecting all fields from Guide",
             self._guides.list_all),
            ("NAME", "Selecting name field from Guide",
             self._guides.list_names),
            ("ROW AGAIN", f"Selecting all fields from Guide where salary is {p.salary}",
             lambda: self._guides.list_by_salary(p.salary)),
            ("NAME AND SALARY", "Reporting query with name and salary",
             self._guides.list_name_and_salary),
            ("SINGLE RESULT", "Selecting the guide whose name is bound as a parameter",
             lambda: [self._guides.get_by_name(p.guide_name)]),
            ("WILDCARD", f"Selecting guides whose name is like {p.name_pattern!r}",
             lambda: self._guides.list_name_like(p.name_pattern)),
            ("NATIVE SQL QUERY", "Using native SQL query",
             self._guides.list_native),
            ("NAMED QUERY", f"Named query {p.named_query!r}",
             lambda: self._guides.run_named_query(p.named_query, name=p.guide_name)),
            ("NUMBER OF GUIDES WITHOUT AGGREGATE FUNCTIONS", "Counting loaded guides",
             lambda: [self._guides.count_loaded()]),
            ("NUMBER OF GUIDES USING COUNT", "Aggregate functions - COUNT",
             lambda: [self._guides.count()]),
            ("MAXIMUM SALARY USING MAX", "Aggregate functions - MAX",
             lambda: [self._guides.max_salary()]),
            ("SALARY STATISTICS", "Aggregate functions - COUNT, MIN, MAX, AVG, SUM",
             lambda: [self._guides.salary_statistics()]),
            ("STUDENT - INNER JOIN", "Join (inner join)",
             self._students.list_inner_join),
            ("STUDENT - LEFT JOIN", "Left join = left outer join",
             self._students.list_left_join),
            ("STUDENT - RIGHT JOIN", "Right join = right outer join",
             self._students.list_right_join),
            ("GUIDE - JOIN FETCH", "Join fetch = inner join fetch",
             self._guides.list_join_fetch),
        ]

        steps = []
        for label, description, query in plan:
            logger.debug(description)
            with log_latency(logger, "tour_step", label=label):
                rows = list(query())
            steps.append(TourStep(label=label, description=description, rows=rows))
        return steps


class EnrollmentService:
    """Inserts new students."""

    def __init__(self, guides: IGuideRepository, students: IStudentRepository):
        self._guides = guides
        self._students = students

    def enroll(
        self,
        enrollment_id: str,
        name: str,
        guide_staff_id: Optional[str] = None,
    ) -> Student:
        """
        Enroll a student, optionally under an existing guide.

        Raises:
            ValidationException: enrollment_id or name is blank
            ResourceNotFoundException: guide_staff_id names no guide
        """
        if not enrollment_id or not enrollment_id.strip():
            raise ValidationException("enrollment_id must not be blank")
        if not name or not name.strip():
            raise ValidationException("name must not be blank")

        if guide_staff_id is not None and self._guides.get_by_staff_id(guide_staff_id) is None:
            raise ResourceNotFoundException("Guide", guide_staff_id)

        student = self._students.create(
            Student(id=None, enrollment_id=enrollment_id, name=name),
            guide_staff_id=guide_staff_id,
        )
        logger.info("Enrolled student", extra={
            "enrollment_id": student.enrollment_id,
            "student_id": student.id,
            "guide_staff_id": guide_staff_id,
        })
        return student


class RosterSeeder:
    """Inserts the fixture guides and their students."""

    def __init__(
        self,
        guides: IGuideRepository,
        students: IStudentRepository,
        fixture_guides: Sequence[dict] = FIXTURE_GUIDES,
        fixture_students: Sequence[dict] = FIXTURE_STUDENTS,
    ):
        self._guides = guides
        self._students = students
        self._fixture_guides = fixture_guides
        self._fixture_students = fixture_students

    def seed(self) -> int:
        """
        Insert every fixture row that is not present yet.

        Returns:
            Number of rows inserted (guides plus students)
        """
        inserted = 0
        for row in self._fixture_guides:
            if self._guides.get_by_staff_id(row["staff_id"]) is not None:
                continue
            self._guides.create(Guide(id=None, **row))
            inserted += 1

        enrollment = EnrollmentService(self._guides, self._students)
        for row in self._fixture_students:
            if self._students.get_by_enrollment_id(row["enrollment_id"]) is not None:
                continue
            enrollment.enroll(row["enrollment_id"], row["name"], row["guide_staff_id"])
            inserted += 1

        logger.info("Roster seeded", extra={"inserted": inserted})
        return inserted

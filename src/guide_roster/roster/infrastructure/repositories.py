"""
Roster Infrastructure Repositories
===================================

SQLAlchemy implementations of the roster repositories.

Every dynamic value reaches the database as a bound parameter; no statement
is assembled by string concatenation.
"""

from typing import Any, List, Optional

from sqlalchemy import select, func, text
from sqlalchemy.exc import MultipleResultsFound, NoResultFound, StatementError
from sqlalchemy.orm import Session, contains_eager

from guide_roster.core import ConfigurationException, RepositoryException, ResourceNotFoundException
from guide_roster.roster.application import IGuideRepository, IStudentRepository, INamedQueryProvider
from guide_roster.roster.domain import Guide, Student, SalaryStatistics
from guide_roster.roster.infrastructure.models import GuideModel, StudentModel


ENTITY_MODELS = {
    "Guide": GuideModel,
    "Student": StudentModel,
}


def to_guide_entity(model: GuideModel, with_students: bool = False) -> Guide:
    """Convert a GuideModel to a Guide, optionally copying its loaded students."""
    guide = Guide(
        id=model.id,
        staff_id=model.staff_id,
        name=model.name,
        salary=model.salary,
    )
    if with_students:
        guide.students = [
            Student(id=s.id, enrollment_id=s.enrollment_id, name=s.name, guide=guide)
            for s in model.students
        ]
    return guide


def to_student_entity(model: StudentModel) -> Student:
    """Convert a StudentModel to a Student together with its guide."""
    return Student(
        id=model.id,
        enrollment_id=model.enrollment_id,
        name=model.name,
        guide=to_guide_entity(model.guide) if model.guide is not None else None,
    )


class SQLAlchemyGuideRepository(IGuideRepository):
    """
    SQLAlchemy implementation of guide repository.

    Named queries are resolved through the provider given at construction.
    """

    def __init__(self, session: Session, named_queries: Optional[INamedQueryProvider] = None):
        self._session = session
        self._named_queries = named_queries

    # ========== Entity and projection queries ==========

    def list_all(self) -> List[Guide]:
        """select guide from Guide"""
        stmt = select(GuideModel).order_by(GuideModel.id)
        return [to_guide_entity(m) for m in self._session.scalars(stmt)]

    def list_names(self) -> List[str]:
        """select guide.name from Guide"""
        stmt = select(GuideModel.name).order_by(GuideModel.id)
        return list(self._session.scalars(stmt))

    def list_by_salary(self, salary: int) -> List[Guide]:
        stmt = (
            select(GuideModel)
            .where(GuideModel.salary == salary)
            .order_by(GuideModel.id)
        )
        return [to_guide_entity(m) for m in self._session.scalars(stmt)]

    def list_name_and_salary(self) -> List[tuple]:
        """Reporting query: one (name, salary) tuple per guide."""
        stmt = select(GuideModel.name, GuideModel.salary).order_by(GuideModel.id)
        return [tuple(row) for row in self._session.execute(stmt)]

    def get_by_name(self, name: str) -> Guide:
        """
        Get exactly one guide by name.

        Raises:
            ResourceNotFoundException: No guide has this name
            RepositoryException: More than one guide has this name
        """
        stmt = select(GuideModel).where(GuideModel.name == name)
        try:
            model = self._session.scalars(stmt).one()
        except NoResultFound:
            raise ResourceNotFoundException("Guide", name) from None
        except MultipleResultsFound as e:
            raise RepositoryException(
                f"More than one guide named '{name}'", {"name": name}
            ) from e
        return to_guide_entity(model)

    def list_name_like(self, pattern: str) -> List[Guide]:
        stmt = (
            select(GuideModel)
            .where(GuideModel.name.like(pattern))
            .order_by(GuideModel.id)
        )
        return [to_guide_entity(m) for m in self._session.scalars(stmt)]

    # ========== Native and named queries ==========

    def list_native(self) -> List[Guide]:
        """Plain SQL, rows mapped onto GuideModel by column name."""
        stmt = select(GuideModel).from_statement(text("select * from guide"))
        return [to_guide_entity(m) for m in self._session.scalars(stmt)]

    def run_named_query(self, name: str, /, **params: Any) -> List[Any]:
        """
        Execute a named query with bound parameters.

        Entity-typed queries return entities; the rest return tuples.

        Raises:
            ConfigurationException: No named query provider configured
            ResourceNotFoundException: Unknown query name
            RepositoryException: The statement failed (e.g. a missing parameter)
        """
        if self._named_queries is None:
            raise ConfigurationException("No named query provider configured")

        query = self._named_queries.get(name)
        clause = text(query.sql)
        try:
            if query.entity is None:
                return [tuple(row) for row in self._session.execute(clause, params)]

            model_class = ENTITY_MODELS[query.entity]
            models = self._session.scalars(select(model_class).from_statement(clause), params).all()
        except StatementError as e:
            raise RepositoryException(
                f"Named query '{name}' failed: {e.orig or e}",
                {"query": name, "params": sorted(params)},
            ) from e

        if model_class is GuideModel:
            return [to_guide_entity(m) for m in models]
        return [to_student_entity(m) for m in models]

    # ========== Aggregates ==========

    def count_loaded(self) -> int:
        """Count by loading every guide; COUNT does this in the database."""
        return len(self.list_all())

    def count(self) -> int:
        return self._session.scalar(select(func.count(GuideModel.id)))

    def max_salary(self) -> Optional[int]:
        return self._session.scalar(select(func.max(GuideModel.salary)))

    def salary_statistics(self) -> SalaryStatistics:
        stmt = select(
            func.count(GuideModel.id),
            func.min(GuideModel.salary),
            func.max(GuideModel.salary),
            func.avg(GuideModel.salary),
            func.sum(GuideModel.salary),
        )
        count, minimum, maximum, average, total = self._session.execute(stmt).one()
        return SalaryStatistics(
            count=count,
            minimum=minimum,
            maximum=maximum,
            average=float(average) if average is not None else None,
            total=total,
        )

    # ========== Joins ==========

    def list_with_students(self) -> List[Guide]:
        """Inner join without fetch: the students collection stays unloaded."""
        stmt = (
            select(GuideModel)
            .join(GuideModel.students)
            .distinct()
            .order_by(GuideModel.id)
        )
        return [to_guide_entity(m) for m in self._session.scalars(stmt)]

    def list_join_fetch(self) -> List[Guide]:
        """Inner join fetch: students are loaded by the same statement."""
        stmt = (
            select(GuideModel)
            .join(GuideModel.students)
            .options(contains_eager(GuideModel.students))
            .order_by(GuideModel.id, StudentModel.id)
        )
        models = self._session.scalars(stmt).unique().all()
        return [to_guide_entity(m, with_students=True) for m in models]

    # ========== Lookups and inserts ==========

    def get_by_staff_id(self, staff_id: str) -> Optional[Guide]:
        stmt = select(GuideModel).where(GuideModel.staff_id == staff_id)
        model = self._session.scalars(stmt).one_or_none()
        return to_guide_entity(model) if model is not None else None

    def create(self, guide: Guide) -> Guide:
        model = GuideModel(
            staff_id=guide.staff_id,
            name=guide.name,
            salary=guide.salary,
        )
        self._session.add(model)
        self._session.flush()

        guide.id = model.id
        return guide


class SQLAlchemyStudentRepository(IStudentRepository):
    """SQLAlchemy implementation of student repository."""

    def __init__(self, session: Session):
        self._session = session

    def list_inner_join(self) -> List[Student]:
        """Students with a null guide drop out of the inner join."""
        stmt = (
            select(StudentModel)
            .join(StudentModel.guide)
            .options(contains_eager(StudentModel.guide))
            .order_by(StudentModel.id)
        )
        return [to_student_entity(m) for m in self._session.scalars(stmt)]

    def list_left_join(self) -> List[Student]:
        """Every student; guide is None where guide_id is null."""
        stmt = (
            select(StudentModel)
            .outerjoin(StudentModel.guide)
            .options(contains_eager(StudentModel.guide))
            .order_by(StudentModel.id)
        )
        return [to_student_entity(m) for m in self._session.scalars(stmt)]

    def list_right_join(self) -> List[Optional[Student]]:
        """
        student RIGHT JOIN guide, written as guide LEFT JOIN student.

        Students without a guide are excluded; a guide without students
        yields a None entry.
        """
        stmt = (
            select(StudentModel)
            .select_from(GuideModel)
            .outerjoin(GuideModel.students)
            .options(contains_eager(StudentModel.guide))
            .order_by(GuideModel.id, StudentModel.id)
        )
        return [
            to_student_entity(m) if m is not None else None
            for m in self._session.scalars(stmt)
        ]

    def get_by_enrollment_id(self, enrollment_id: str) -> Optional[Student]:
        stmt = select(StudentModel).where(StudentModel.enrollment_id == enrollment_id)
        model = self._session.scalars(stmt).one_or_none()
        return to_student_entity(model) if model is not None else None

    def create(self, student: Student, guide_staff_id: Optional[str] = None) -> Student:
        guide_model = None
        if guide_staff_id is not None:
            stmt = select(GuideModel).where(GuideModel.staff_id == guide_staff_id)
            guide_model = self._session.scalars(stmt).one_or_none()
            if guide_model is None:
                raise ResourceNotFoundException("Guide", guide_staff_id)

        model = StudentModel(
            enrollment_id=student.enrollment_id,
            name=student.name,
            guide=guide_model,
        )
        self._session.add(model)
        self._session.flush()

        return to_student_entity(model)

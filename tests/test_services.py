"""Query tour, enrollment and seeding services."""

import pytest
from sqlalchemy.orm import Session

from guide_roster.core import ResourceNotFoundException, ValidationException
from guide_roster.roster.application import (
    EnrollmentService,
    QueryTourService,
    RosterSeeder,
    TourParameters,
)
from guide_roster.roster.domain import SalaryStatistics
from guide_roster.roster.infrastructure import SQLAlchemyGuideRepository, SQLAlchemyStudentRepository

TOUR_LABELS = [
    "ROW",
    "NAME",
    "ROW AGAIN",
    "NAME AND SALARY",
    "SINGLE RESULT",
    "WILDCARD",
    "NATIVE SQL QUERY",
    "NAMED QUERY",
    "NUMBER OF GUIDES WITHOUT AGGREGATE FUNCTIONS",
    "NUMBER OF GUIDES USING COUNT",
    "MAXIMUM SALARY USING MAX",
    "SALARY STATISTICS",
    "STUDENT - INNER JOIN",
    "STUDENT - LEFT JOIN",
    "STUDENT - RIGHT JOIN",
    "GUIDE - JOIN FETCH",
]


class TestQueryTourService:

    @pytest.fixture
    def steps(self, guides, students):
        return {step.label: step for step in QueryTourService(guides, students).run()}

    def test_runs_every_step_in_order(self, guides, students):
        steps = QueryTourService(guides, students).run()

        assert [step.label for step in steps] == TOUR_LABELS
        assert all(step.description for step in steps)

    def test_filter_and_single_result(self, steps):
        assert [g.name for g in steps["ROW AGAIN"].rows] == ["Homer Simpson"]
        assert [g.name for g in steps["SINGLE RESULT"].rows] == ["Homer Simpson"]
        assert [g.name for g in steps["NAMED QUERY"].rows] == ["Homer Simpson"]
        assert [g.name for g in steps["WILDCARD"].rows] == ["Marge Simpson"]

    def test_aggregates(self, steps):
        assert steps["NUMBER OF GUIDES WITHOUT AGGREGATE FUNCTIONS"].rows == [2]
        assert steps["NUMBER OF GUIDES USING COUNT"].rows == [2]
        assert steps["MAXIMUM SALARY USING MAX"].rows == [1600]
        assert steps["SALARY STATISTICS"].rows == [SalaryStatistics(2, 1200, 1600, 1400.0, 2800)]

    def test_joins(self, steps):
        assert len(steps["STUDENT - INNER JOIN"].rows) == 2
        assert len(steps["STUDENT - LEFT JOIN"].rows) == 3
        assert len(steps["STUDENT - RIGHT JOIN"].rows) == 2
        assert len(steps["GUIDE - JOIN FETCH"].rows) == 2

    def test_parameters_are_used(self, guides, students):
        parameters = TourParameters(guide_name="Marge Simpson", salary=1600, name_pattern="H%")
        steps = {s.label: s for s in QueryTourService(guides, students, parameters).run()}

        assert [g.name for g in steps["ROW AGAIN"].rows] == ["Marge Simpson"]
        assert [g.name for g in steps["SINGLE RESULT"].rows] == ["Marge Simpson"]
        assert [g.name for g in steps["WILDCARD"].rows] == ["Homer Simpson"]

    def test_missing_guide_aborts_the_tour(self, guides, students):
        parameters = TourParameters(guide_name="Ned Flanders")

        with pytest.raises(ResourceNotFoundException):
            QueryTourService(guides, students, parameters).run()


class TestEnrollmentService:

    @pytest.fixture
    def service(self, guides, students):
        return EnrollmentService(guides, students)

    def test_enroll_without_guide(self, service, students):
        student = service.enroll("ST200001", "Milhouse Van Houten")

        assert student.id == 4
        assert student.guide is None
        assert students.get_by_enrollment_id("ST200001") == student

    def test_enroll_with_guide(self, service):
        student = service.enroll("ST200002", "Maggie Simpson", guide_staff_id="GD200332")

        assert student.guide.name == "Marge Simpson"

    def test_unknown_guide(self, service):
        with pytest.raises(ResourceNotFoundException):
            service.enroll("ST200003", "Nelson Muntz", guide_staff_id="GD000000")

    @pytest.mark.parametrize("enrollment_id, name", [("", "Nelson Muntz"), ("ST200004", "  ")])
    def test_blank_fields(self, service, enrollment_id, name):
        with pytest.raises(ValidationException):
            service.enroll(enrollment_id, name)


class TestRosterSeeder:

    def test_seed_then_reseed(self, engine):
        with Session(engine) as session:
            seeder = RosterSeeder(
                SQLAlchemyGuideRepository(session),
                SQLAlchemyStudentRepository(session),
            )

            assert seeder.seed() == 4
            assert seeder.seed() == 0

            bart = SQLAlchemyStudentRepository(session).get_by_enrollment_id("ST109883")
            assert bart.guide.staff_id == "GD200331"

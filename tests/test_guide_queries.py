"""Entity, projection, filter, native, named and aggregate queries over guides."""

import pytest
from sqlalchemy.orm import Session

from guide_roster.core import ConfigurationException, RepositoryException, ResourceNotFoundException
from guide_roster.roster.domain import Guide, SalaryStatistics
from guide_roster.roster.infrastructure import SQLAlchemyGuideRepository

HOMER = Guide(id=1, staff_id="GD200331", name="Homer Simpson", salary=1200)
MARGE = Guide(id=2, staff_id="GD200332", name="Marge Simpson", salary=1600)


class TestEntityQueries:

    def test_list_all_returns_every_guide(self, guides):
        assert guides.list_all() == [HOMER, MARGE]

    def test_list_names_is_a_projection(self, guides):
        assert guides.list_names() == ["Homer Simpson", "Marge Simpson"]

    def test_list_by_salary_filters(self, guides):
        assert guides.list_by_salary(1200) == [HOMER]
        assert guides.list_by_salary(999) == []

    def test_name_and_salary_report(self, guides):
        assert guides.list_name_and_salary() == [
            ("Homer Simpson", 1200),
            ("Marge Simpson", 1600),
        ]

    def test_list_name_like(self, guides):
        assert guides.list_name_like("M%") == [MARGE]
        assert guides.list_name_like("%Simpson") == [HOMER, MARGE]
        assert guides.list_name_like("Z%") == []

    def test_native_query_maps_rows_onto_guides(self, guides):
        assert guides.list_native() == [HOMER, MARGE]

    def test_guides_are_printed_without_students(self, guides):
        assert repr(guides.list_all()[0]) == (
            "Guide(id=1, staff_id='GD200331', name='Homer Simpson', salary=1200)"
        )


class TestSingleResult:

    def test_get_by_name_returns_exactly_one(self, guides):
        assert guides.get_by_name("Homer Simpson") == HOMER

    def test_get_by_name_missing(self, guides):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            guides.get_by_name("Ned Flanders")

        assert exc_info.value.resource_type == "Guide"
        assert exc_info.value.resource_id == "Ned Flanders"

    def test_get_by_name_binds_the_value(self, guides):
        with pytest.raises(ResourceNotFoundException):
            guides.get_by_name("Homer Simpson' or '1'='1")

    def test_get_by_name_ambiguous(self, guides):
        guides.create(Guide(id=None, staff_id="GD999999", name="Homer Simpson", salary=900))

        with pytest.raises(RepositoryException, match="More than one guide"):
            guides.get_by_name("Homer Simpson")


class TestNamedQueries:

    def test_find_by_guide(self, guides):
        assert guides.run_named_query("find_by_guide", name="Homer Simpson") == [HOMER]

    def test_entity_query_with_ordering(self, guides):
        assert guides.run_named_query("guides_by_min_salary", salary=1000) == [MARGE, HOMER]

    def test_untyped_query_returns_tuples(self, guides):
        rows = guides.run_named_query("student_names_by_guide", name="Marge Simpson")

        assert rows == [("Lisa Simpson",)]

    def test_unknown_query(self, guides):
        with pytest.raises(ResourceNotFoundException):
            guides.run_named_query("find_everyone")

    def test_missing_parameter(self, guides):
        with pytest.raises(RepositoryException, match="find_by_guide"):
            guides.run_named_query("find_by_guide")

    def test_without_provider(self, session):
        repository = SQLAlchemyGuideRepository(session)

        with pytest.raises(ConfigurationException):
            repository.run_named_query("find_by_guide", name="Homer Simpson")


class TestAggregates:

    def test_count_without_aggregate(self, guides):
        assert guides.count_loaded() == 2

    def test_count(self, guides):
        assert guides.count() == 2

    def test_max_salary(self, guides):
        assert guides.max_salary() == 1600

    def test_salary_statistics(self, guides):
        assert guides.salary_statistics() == SalaryStatistics(
            count=2, minimum=1200, maximum=1600, average=1400.0, total=2800,
        )

    def test_aggregates_on_empty_table(self, engine):
        with Session(engine) as session:
            repository = SQLAlchemyGuideRepository(session)

            assert repository.count() == 0
            assert repository.count_loaded() == 0
            assert repository.max_salary() is None
            assert repository.salary_statistics() == SalaryStatistics(
                count=0, minimum=None, maximum=None, average=None, total=None,
            )


class TestLookups:

    def test_get_by_staff_id(self, guides):
        assert guides.get_by_staff_id("GD200332") == MARGE
        assert guides.get_by_staff_id("GD000000") is None

    def test_create_assigns_id(self, guides):
        guide = guides.create(Guide(id=None, staff_id="GD300001", name="Ned Flanders", salary=1000))

        assert guide.id == 3
        assert guides.count() == 3


def test_named_query_parameter_may_be_called_name(guides):
    assert guides.run_named_query("find_by_guide", name="Marge Simpson") == [MARGE]

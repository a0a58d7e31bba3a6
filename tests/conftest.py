"""
Shared fixtures: an in-memory SQLite roster.

Seeded rows (ids in insertion order):
    guide 1  GD200331  Homer Simpson  1200
    guide 2  GD200332  Marge Simpson  1600
    student 1  ST109883    Bart Simpson    -> Homer
    student 2  ST109884    Lisa Simpson    -> Marge
    student 3  1299384FFG  Sheldon Cooper  -> no guide
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from guide_roster.config import BUNDLED_NAMED_QUERIES, UNGUIDED_STUDENT
from guide_roster.infrastructure.database import Base, close_database
from guide_roster.roster.application import EnrollmentService, RosterSeeder
from guide_roster.roster.infrastructure import (
    SQLAlchemyGuideRepository,
    SQLAlchemyStudentRepository,
    YAMLNamedQueryProvider,
)


@pytest.fixture
def engine():
    """Empty schema in a private in-memory database."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def roster(engine):
    """Engine whose database holds the committed fixture roster."""
    with Session(engine) as session:
        guides = SQLAlchemyGuideRepository(session)
        students = SQLAlchemyStudentRepository(session)
        RosterSeeder(guides, students).seed()
        EnrollmentService(guides, students).enroll(**UNGUIDED_STUDENT)
        session.commit()
    return engine


@pytest.fixture
def session(roster):
    with Session(roster, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def named_queries():
    return YAMLNamedQueryProvider(BUNDLED_NAMED_QUERIES)


@pytest.fixture
def guides(session, named_queries):
    return SQLAlchemyGuideRepository(session, named_queries)


@pytest.fixture
def students(session):
    return SQLAlchemyStudentRepository(session)


@pytest.fixture(autouse=True)
def reset_database_globals():
    """Tests that touch init_database() must not leak the global engine."""
    yield
    close_database()

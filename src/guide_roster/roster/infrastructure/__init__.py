"""
Roster Infrastructure Layer
============================

Infrastructure implementations for the roster module.

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
- Named queries: YAML-backed query registry
"""

from guide_roster.roster.infrastructure.models import GuideModel, StudentModel
from guide_roster.roster.infrastructure.repositories import (
    SQLAlchemyGuideRepository,
    SQLAlchemyStudentRepository,
)
from guide_roster.roster.infrastructure.named_queries import YAMLNamedQueryProvider

__all__ = [
    "GuideModel",
    "StudentModel",
    "SQLAlchemyGuideRepository",
    "SQLAlchemyStudentRepository",
    "YAMLNamedQueryProvider",
]

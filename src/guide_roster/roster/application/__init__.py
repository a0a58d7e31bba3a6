"""
Roster Application Layer
========================

Contains:
- Services: the query tour, enrollment, and fixture seeding
- Repository interfaces the services depend on

This layer depends on the domain layer and repository interfaces,
but not on concrete infrastructure implementations.
"""

from guide_roster.roster.application.services import (
    QueryTourService,
    TourParameters,
    EnrollmentService,
    RosterSeeder,
    IGuideRepository,
    IStudentRepository,
    INamedQueryProvider,
)

__all__ = [
    # Services
    "QueryTourService",
    "TourParameters",
    "EnrollmentService",
    "RosterSeeder",
    # Repository Interfaces
    "IGuideRepository",
    "IStudentRepository",
    "INamedQueryProvider",
]

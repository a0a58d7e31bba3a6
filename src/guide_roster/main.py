"""
Guide Roster - Entry Points
===========================

Console programs over the guide/student roster.

Every program runs as one unit of work:
1. Setup structured logging
2. Initialize database and create missing tables
3. Run its work inside a single transaction
4. Commit, or roll back and log on any exception
5. Close the session and dispose of the engine

Programs:
- guide-roster-seed: insert the fixture guides and students
- guide-roster-enroll: insert a student without a guide
- guide-roster-tour: run the query tour and print the results
"""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from guide_roster.config import Settings, UNGUIDED_STUDENT, settings
from guide_roster.infrastructure.database import (
    init_database,
    close_database,
    create_tables,
    get_session_context,
)
from guide_roster.roster.application import (
    QueryTourService,
    TourParameters,
    EnrollmentService,
    RosterSeeder,
)
from guide_roster.roster.infrastructure import (
    SQLAlchemyGuideRepository,
    SQLAlchemyStudentRepository,
    YAMLNamedQueryProvider,
)
from guide_roster.roster.interfaces import print_steps
from guide_roster.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ROLLED_BACK = 1


def run_unit_of_work(
    program: str,
    work: Callable[[Session], None],
    app_settings: Optional[Settings] = None,
    configure_logging: bool = True,
) -> int:
    """
    Run work inside one transaction.

    Args:
        program: Program name for log context
        work: Callable receiving the open session
        app_settings: Overrides the global settings
        configure_logging: Install the JSON log handler first

    Returns:
        EXIT_OK after a commit, EXIT_ROLLED_BACK after a rollback
    """
    cfg = app_settings or settings

    if configure_logging:
        level = "DEBUG" if cfg.debug else cfg.log_level
        setup_logging(level, cfg.environment, echo_sql=cfg.db_echo)
    logger.info("Starting program", extra={
        "app_name": cfg.app_name,
        "program": program,
        "environment": cfg.environment,
        "database_url": cfg.database_url,
    })

    init_database(cfg.database_url)
    try:
        create_tables()
        with get_session_context() as session:
            work(session)
    except Exception as e:
        logger.error("Program failed, transaction rolled back", extra={
            "program": program,
            "error_type": type(e).__name__,
            "error": str(e),
        })
        return EXIT_ROLLED_BACK
    finally:
        close_database()

    logger.info("Program finished", extra={"app_name": cfg.app_name, "program": program})
    return EXIT_OK


def seed_main(app_settings: Optional[Settings] = None, configure_logging: bool = True) -> int:
    """Insert the fixture guides and their students."""

    def work(session: Session) -> None:
        seeder = RosterSeeder(
            SQLAlchemyGuideRepository(session),
            SQLAlchemyStudentRepository(session),
        )
        inserted = seeder.seed()
        print(f"SEEDED ROWS: {inserted}")

    return run_unit_of_work("seed", work, app_settings, configure_logging)


def enroll_main(app_settings: Optional[Settings] = None, configure_logging: bool = True) -> int:
    """Insert the student that has no guide, for the outer join examples."""

    def work(session: Session) -> None:
        service = EnrollmentService(
            SQLAlchemyGuideRepository(session),
            SQLAlchemyStudentRepository(session),
        )
        student = service.enroll(**UNGUIDED_STUDENT)
        print(f"ENROLLED: {student}")

    return run_unit_of_work("enroll", work, app_settings, configure_logging)


def tour_main(app_settings: Optional[Settings] = None, configure_logging: bool = True) -> int:
    """Run every demonstration query and print the results."""
    cfg = app_settings or settings

    def work(session: Session) -> None:
        named_queries = YAMLNamedQueryProvider(cfg.named_queries_path)
        service = QueryTourService(
            SQLAlchemyGuideRepository(session, named_queries),
            SQLAlchemyStudentRepository(session),
            TourParameters(
                guide_name=cfg.tour_guide_name,
                salary=cfg.tour_salary,
                name_pattern=cfg.tour_name_pattern,
            ),
        )
        print_steps(service.run())

    return run_unit_of_work("tour", work, cfg, configure_logging)


if __name__ == "__main__":
    raise SystemExit(tour_main())

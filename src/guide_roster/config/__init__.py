"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path


BUNDLED_NAMED_QUERIES = (
    Path(__file__).resolve().parent.parent
    / "roster" / "infrastructure" / "named_queries.yaml"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="guide-roster", description="Application name")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Database ==========
    database_url: str = Field(
        default="sqlite:///guide_roster.db",
        description="SQLAlchemy connection URL"
    )
    db_echo: bool = Field(default=False, description="Log every SQL statement")
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Named Queries ==========
    named_queries_path: Path = Field(
        default=BUNDLED_NAMED_QUERIES,
        description="Path to the named queries YAML file"
    )

    # ========== Query Tour ==========
    tour_guide_name: str = Field(
        default="Homer Simpson",
        description="Guide name bound into the single-result and named queries"
    )
    tour_salary: int = Field(default=1200, description="Salary used by the filter query", ge=0)
    tour_name_pattern: str = Field(default="M%", description="LIKE pattern for the wildcard query")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Fixture Roster ==========

FIXTURE_GUIDES = [
    {"staff_id": "GD200331", "name": "Homer Simpson", "salary": 1200},
    {"staff_id": "GD200332", "name": "Marge Simpson", "salary": 1600},
]

FIXTURE_STUDENTS = [
    {"enrollment_id": "ST109883", "name": "Bart Simpson", "guide_staff_id": "GD200331"},
    {"enrollment_id": "ST109884", "name": "Lisa Simpson", "guide_staff_id": "GD200332"},
]

UNGUIDED_STUDENT = {"enrollment_id": "1299384FFG", "name": "Sheldon Cooper", "guide_staff_id": None}


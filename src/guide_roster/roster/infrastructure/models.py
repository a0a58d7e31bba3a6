"""
Roster Infrastructure Models
=============================

SQLAlchemy ORM models for the roster module.

These are the database representations of the Guide and Student entities.
"""

from typing import List, Optional

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guide_roster.infrastructure.database import Base


class GuideModel(Base):
    """
    Database model for Guide entity.

    Maps to the 'guide' table.
    """
    __tablename__ = "guide"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Business identifier
    staff_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    salary: Mapped[int] = mapped_column(Integer, nullable=False)

    # Lazy by default; join fetch populates it eagerly
    students: Mapped[List["StudentModel"]] = relationship(back_populates="guide")

    def __repr__(self) -> str:
        return f"<GuideModel(id={self.id}, staff_id='{self.staff_id}', name='{self.name}')>"


class StudentModel(Base):
    """
    Database model for Student entity.

    Maps to the 'student' table. guide_id is nullable: a student may have no guide.
    """
    __tablename__ = "student"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Business identifier
    enrollment_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    guide_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("guide.id"),
        nullable=True,
        index=True
    )
    guide: Mapped[Optional[GuideModel]] = relationship(back_populates="students")

    def __repr__(self) -> str:
        return f"<StudentModel(id={self.id}, enrollment_id='{self.enrollment_id}', name='{self.name}')>"

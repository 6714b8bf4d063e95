"""Thesis model and its association tables."""

import enum
from datetime import date

from sqlalchemy import (
    Date,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.models.base import BaseModel
from thesis_registry.utils.db import Base


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class ThesisType(str, enum.Enum):
    """Degree type a thesis was submitted for."""

    MASTER = "Master"
    DOCTORATE = "Doctorate"
    SPECIALIZATION_IN_MEDICINE = "Specialization in Medicine"
    PROFICIENCY_IN_ART = "Proficiency in Art"


class SupervisorRole(str, enum.Enum):
    """Role a person holds in a supervisor assignment."""

    SUPERVISOR = "Supervisor"
    CO_SUPERVISOR = "Co-Supervisor"


class Thesis(BaseModel):
    """Thesis record.

    The thesis row holds scalar data and its single author. Supervisors,
    subject topics and keywords live in association tables and are managed
    together with the row by ThesisService.

    Attributes:
        title: Thesis title
        abstract: Thesis abstract
        author_id: Foreign key to people table
        year: Year of the thesis (1900..current year)
        type: Degree type (ThesisType)
        university_id: Foreign key to universities table
        institute_id: Foreign key to institutes table
        num_pages: Page count
        language: Language the thesis is written in
        submission_date: Calendar date of submission
    """

    __tablename__ = "theses"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    abstract: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("people.id"), nullable=False, index=True
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type: Mapped[ThesisType] = mapped_column(
        Enum(
            ThesisType,
            native_enum=False,
            length=50,
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        index=True,
    )
    university_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("universities.id"), nullable=False, index=True
    )
    institute_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("institutes.id"), nullable=False, index=True
    )
    num_pages: Mapped[int] = mapped_column(Integer, nullable=False)
    language: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    submission_date: Mapped[date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        """String representation of the thesis."""
        return (
            f"Thesis(id={self.id}, title={self.title!r}, year={self.year}, "
            f"type={self.type.value if self.type else None})"
        )


class SupervisorAssignment(BaseModel):
    """Assignment of a person to a thesis as supervisor or co-supervisor."""

    __tablename__ = "supervisor_assignments"

    thesis_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("theses.id"), nullable=False, index=True
    )
    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("people.id"), nullable=False, index=True
    )
    role: Mapped[SupervisorRole] = mapped_column(
        Enum(
            SupervisorRole,
            native_enum=False,
            length=20,
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(
            "thesis_id", "person_id", "role", name="uq_supervisor_assignment"
        ),
    )


class ThesisSubjectTopic(Base):
    """Link between a thesis and a subject topic."""

    __tablename__ = "thesis_subject_topics"

    thesis_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("theses.id"), primary_key=True
    )
    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subject_topics.id"), primary_key=True, index=True
    )


class ThesisKeyword(Base):
    """Link between a thesis and a keyword."""

    __tablename__ = "thesis_keywords"

    thesis_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("theses.id"), primary_key=True
    )
    keyword_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("keywords.id"), primary_key=True, index=True
    )

"""Data models package."""

from thesis_registry.models.base import BaseModel
from thesis_registry.models.institute import Institute
from thesis_registry.models.keyword import Keyword
from thesis_registry.models.person import Person
from thesis_registry.models.subject_topic import SubjectTopic
from thesis_registry.models.thesis import (
    SupervisorAssignment,
    SupervisorRole,
    Thesis,
    ThesisKeyword,
    ThesisSubjectTopic,
    ThesisType,
)
from thesis_registry.models.university import University

__all__ = [
    "BaseModel",
    "University",
    "Institute",
    "Person",
    "SubjectTopic",
    "Keyword",
    "Thesis",
    "ThesisType",
    "SupervisorAssignment",
    "SupervisorRole",
    "ThesisSubjectTopic",
    "ThesisKeyword",
]

"""Pydantic schemas for API request/response models."""

from thesis_registry.schemas.common import (
    Envelope,
    MessageEnvelope,
    PartialUpdate,
)
from thesis_registry.schemas.dashboard import DashboardStats
from thesis_registry.schemas.institute import (
    InstituteCreate,
    InstituteResponse,
    InstituteUpdate,
)
from thesis_registry.schemas.person import PersonCreate, PersonResponse, PersonUpdate
from thesis_registry.schemas.subject_topic import (
    SubjectTopicCreate,
    SubjectTopicResponse,
    SubjectTopicUpdate,
)
from thesis_registry.schemas.thesis import (
    SupervisorAssignmentResponse,
    ThesisCreate,
    ThesisDetailResponse,
    ThesisResponse,
    ThesisSearch,
    ThesisUpdate,
)
from thesis_registry.schemas.university import (
    UniversityCreate,
    UniversityResponse,
    UniversityUpdate,
)

__all__ = [
    "Envelope",
    "MessageEnvelope",
    "PartialUpdate",
    "DashboardStats",
    "InstituteCreate",
    "InstituteResponse",
    "InstituteUpdate",
    "PersonCreate",
    "PersonResponse",
    "PersonUpdate",
    "SubjectTopicCreate",
    "SubjectTopicResponse",
    "SubjectTopicUpdate",
    "SupervisorAssignmentResponse",
    "ThesisCreate",
    "ThesisDetailResponse",
    "ThesisResponse",
    "ThesisSearch",
    "ThesisUpdate",
    "UniversityCreate",
    "UniversityResponse",
    "UniversityUpdate",
]

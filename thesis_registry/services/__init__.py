"""Business logic services package."""

from thesis_registry.services.base import BaseService
from thesis_registry.services.dashboard_service import DashboardService
from thesis_registry.services.institute_service import InstituteService
from thesis_registry.services.person_service import PersonService
from thesis_registry.services.subject_topic_service import SubjectTopicService
from thesis_registry.services.thesis_service import ThesisDetail, ThesisService
from thesis_registry.services.university_service import UniversityService

__all__ = [
    "BaseService",
    "UniversityService",
    "InstituteService",
    "PersonService",
    "SubjectTopicService",
    "ThesisService",
    "ThesisDetail",
    "DashboardService",
]

"""Subject topic service providing CRUD for SubjectTopic records."""

from thesis_registry.models.subject_topic import SubjectTopic
from thesis_registry.services.base import BaseService


class SubjectTopicService(BaseService[SubjectTopic]):
    """Service for managing SubjectTopic entities, ordered by topic name."""

    model = SubjectTopic
    ordering = (SubjectTopic.topic_name,)

"""Subject topic schemas for API request/response models."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, Field

from thesis_registry.schemas.common import PartialUpdate

TopicName = Annotated[str, Field(min_length=1, max_length=200)]


class SubjectTopicCreate(BaseModel):
    """Schema for creating a subject topic."""

    topic_name: TopicName


class SubjectTopicUpdate(PartialUpdate):
    """Schema for updating a subject topic."""

    topic_name: Optional[TopicName] = None


class SubjectTopicResponse(BaseModel):
    """Response schema for subject topic."""

    topic_id: int = Field(validation_alias=AliasChoices("id", "topic_id"))
    topic_name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

"""Subject topics API endpoints."""

from fastapi import APIRouter, Depends
from fastapi import status as http_status

from thesis_registry.schemas.common import Envelope, MessageEnvelope
from thesis_registry.schemas.subject_topic import (
    SubjectTopicCreate,
    SubjectTopicResponse,
    SubjectTopicUpdate,
)
from thesis_registry.services.subject_topic_service import SubjectTopicService
from thesis_registry.utils.api_helpers import (
    deleted_message,
    envelope_many,
    envelope_one,
    require_found,
)
from thesis_registry.utils.dependencies import dependencies

router = APIRouter(
    prefix="/subject-topics",
    tags=["Subject Topics"],
)


@router.get("")
async def list_subject_topics(
    service: SubjectTopicService = Depends(dependencies.subject_topic),
) -> Envelope[list[SubjectTopicResponse]]:
    """List all subject topics ordered by name."""
    return envelope_many(SubjectTopicResponse, await service.get_all())


@router.get("/{topic_id}")
async def get_subject_topic(
    topic_id: int,
    service: SubjectTopicService = Depends(dependencies.subject_topic),
) -> Envelope[SubjectTopicResponse]:
    topic = await service.get_by_id(topic_id)
    require_found(topic, "SubjectTopic", topic_id)
    return envelope_one(SubjectTopicResponse, topic)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_subject_topic(
    data: SubjectTopicCreate,
    service: SubjectTopicService = Depends(dependencies.subject_topic),
) -> Envelope[SubjectTopicResponse]:
    """Create a new subject topic.

    Raises:
        DuplicateRecordError: If a topic with the same name exists.
    """
    topic = await service.create(**data.model_dump())
    return envelope_one(SubjectTopicResponse, topic)


@router.put("/{topic_id}")
async def update_subject_topic(
    topic_id: int,
    data: SubjectTopicUpdate,
    service: SubjectTopicService = Depends(dependencies.subject_topic),
) -> Envelope[SubjectTopicResponse]:
    topic = await service.update(topic_id, **data.changes())
    require_found(topic, "SubjectTopic", topic_id)
    return envelope_one(SubjectTopicResponse, topic)


@router.delete("/{topic_id}")
async def delete_subject_topic(
    topic_id: int,
    service: SubjectTopicService = Depends(dependencies.subject_topic),
) -> MessageEnvelope:
    require_found(await service.delete(topic_id), "SubjectTopic", topic_id)
    return deleted_message("SubjectTopic")

"""API helper functions for routes."""

from typing import Iterable, TypeVar

from pydantic import BaseModel

from thesis_registry.exceptions import RecordNotFoundError
from thesis_registry.schemas.common import Envelope, MessageEnvelope

ResponseT = TypeVar("ResponseT", bound=BaseModel)

# Human readable entity names used in response messages
ENTITY_LABELS = {
    "University": "University",
    "Institute": "Institute",
    "Person": "Person",
    "SubjectTopic": "Subject topic",
    "Thesis": "Thesis",
}


def entity_label(model_name: str) -> str:
    """Return the display name for a model class name."""
    return ENTITY_LABELS.get(model_name, model_name)


def envelope_one(schema: type[ResponseT], record: object) -> Envelope[ResponseT]:
    """Wrap a single ORM record in the success envelope.

    Args:
        schema: Response schema to validate the record with.
        record: ORM instance.

    Returns:
        Envelope with the serialised record as data.
    """
    return Envelope[schema](data=schema.model_validate(record))


def envelope_many(
    schema: type[ResponseT], records: Iterable[object]
) -> Envelope[list[ResponseT]]:
    """Wrap a list of ORM records in the success envelope."""
    return Envelope[list[schema]](data=[schema.model_validate(r) for r in records])


def deleted_message(model_name: str) -> MessageEnvelope:
    """Success envelope returned after a delete."""
    return MessageEnvelope(message=f"{entity_label(model_name)} deleted successfully")


def require_found(record, model_name: str, record_id: int):
    """Return the record or raise RecordNotFoundError when it is None/False.

    Services report absence with a sentinel; routes turn it into a 404.
    """
    if record is None or record is False:
        raise RecordNotFoundError(model_name, record_id)
    return record

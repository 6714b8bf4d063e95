"""Shared schema building blocks: record ids, envelopes and partial updates."""

from datetime import date
from typing import Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from thesis_registry.models.base import MAX_INTEGER

DataT = TypeVar("DataT")

# Primary and foreign keys must fit the INTEGER id columns
RecordId = Annotated[int, Field(gt=0, le=MAX_INTEGER)]


def current_year() -> int:
    """Return the current calendar year (evaluated on every call)."""
    return date.today().year


def not_in_future(year: int) -> int:
    """Reject years after the current calendar year."""
    limit = current_year()
    if year > limit:
        raise ValueError(f"Year must be at most {limit}")
    return year


class Envelope(BaseModel, Generic[DataT]):
    """Uniform success envelope: ``{"success": true, "data": ...}``."""

    success: bool = True
    data: DataT


class MessageEnvelope(BaseModel):
    """Success envelope carrying only a message (used by deletes)."""

    success: bool = True
    message: str


class PartialUpdate(BaseModel):
    """Base for update payloads where every field is optional.

    Omitted fields stay untouched; use ``model_dump(exclude_unset=True)`` to
    get only what the client sent. Explicit ``null`` is accepted only for
    fields listed in ``nullable_fields``.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields explicitly present in the payload."""
        return self.model_dump(exclude_unset=True)

"""Institute schemas for API request/response models."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, Field

from thesis_registry.schemas.common import PartialUpdate, RecordId

InstituteName = Annotated[str, Field(min_length=1, max_length=200)]


class InstituteCreate(BaseModel):
    """Schema for creating an institute.

    Attributes:
        name: Institute name.
        university_id: Owning university (must exist).
    """

    name: InstituteName
    university_id: RecordId


class InstituteUpdate(PartialUpdate):
    """Schema for updating an institute; only supplied fields change."""

    name: Optional[InstituteName] = None
    university_id: Optional[RecordId] = None


class InstituteResponse(BaseModel):
    """Response schema for institute."""

    institute_id: int = Field(validation_alias=AliasChoices("id", "institute_id"))
    name: str
    university_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

"""University schemas for API request/response models."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, Field

from thesis_registry.schemas.common import PartialUpdate

UniversityName = Annotated[str, Field(min_length=1, max_length=200)]
Country = Annotated[str, Field(min_length=1, max_length=100)]
City = Annotated[str, Field(min_length=1, max_length=100)]


class UniversityCreate(BaseModel):
    """Schema for creating a university."""

    name: UniversityName
    country: Country
    city: City


class UniversityUpdate(PartialUpdate):
    """Schema for updating a university; only supplied fields change."""

    name: Optional[UniversityName] = None
    country: Optional[Country] = None
    city: Optional[City] = None


class UniversityResponse(BaseModel):
    """Response schema for university."""

    university_id: int = Field(validation_alias=AliasChoices("id", "university_id"))
    name: str
    country: str
    city: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

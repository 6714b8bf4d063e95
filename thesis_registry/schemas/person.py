"""Person schemas for API request/response models."""

from datetime import datetime
from typing import Annotated, ClassVar, Optional

from pydantic import AfterValidator, AliasChoices, BaseModel, EmailStr, Field

from thesis_registry.schemas.common import PartialUpdate

FirstName = Annotated[str, Field(min_length=1, max_length=100)]
LastName = Annotated[str, Field(min_length=1, max_length=100)]
Affiliation = Annotated[str, Field(max_length=200)]

EMAIL_MAX_LENGTH = 200


def _check_email_length(email: Optional[str]) -> Optional[str]:
    if email is not None and len(email) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return email


Email = Annotated[EmailStr, AfterValidator(_check_email_length)]


class PersonCreate(BaseModel):
    """Schema for creating a person."""

    first_name: FirstName
    last_name: LastName
    email: Email
    affiliation: Optional[Affiliation] = None


class PersonUpdate(PartialUpdate):
    """Schema for updating a person; affiliation may be cleared with null."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"affiliation"})

    first_name: Optional[FirstName] = None
    last_name: Optional[LastName] = None
    email: Optional[Email] = None
    affiliation: Optional[Affiliation] = None


class PersonResponse(BaseModel):
    """Response schema for person."""

    person_id: int = Field(validation_alias=AliasChoices("id", "person_id"))
    first_name: str
    last_name: str
    email: str
    affiliation: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

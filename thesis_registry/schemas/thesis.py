"""Thesis schemas for API request/response models."""

import re
from datetime import date, datetime
from typing import Annotated, Any, ClassVar, Optional

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    Field,
    field_validator,
)

from thesis_registry.models.base import MAX_INTEGER
from thesis_registry.models.thesis import SupervisorRole, ThesisType
from thesis_registry.schemas.common import PartialUpdate, RecordId, not_in_future
from thesis_registry.schemas.subject_topic import SubjectTopicResponse

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _iso_date(value: Any) -> Any:
    """Require submission dates as YYYY-MM-DD strings; date objects pass through."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("Submission date must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError("Submission date must be a valid calendar date") from None


Title = Annotated[str, Field(min_length=1, max_length=500)]
Abstract = Annotated[str, Field(min_length=1, max_length=5000)]
Year = Annotated[int, Field(ge=1900), AfterValidator(not_in_future)]
Language = Annotated[str, Field(min_length=1, max_length=50)]
SubmissionDate = Annotated[date, BeforeValidator(_iso_date)]
PageCount = Annotated[int, Field(gt=0, le=MAX_INTEGER)]
SupervisorIds = Annotated[list[RecordId], Field(min_length=1)]
Keyword = Annotated[str, Field(min_length=1, max_length=200)]


class ThesisCreate(BaseModel):
    """Schema for creating a thesis together with its associations.

    Attributes:
        supervisor_ids: One or more people assigned with role Supervisor.
        co_supervisor_id: Optional person assigned with role Co-Supervisor.
        subject_topic_ids: Subject topics to link.
        keywords: Keyword texts; unknown words are created on first use.
    """

    title: Title
    abstract: Abstract
    author_id: RecordId
    year: Year
    type: ThesisType
    university_id: RecordId
    institute_id: RecordId
    num_pages: PageCount
    language: Language
    submission_date: SubmissionDate
    supervisor_ids: SupervisorIds
    co_supervisor_id: Optional[RecordId] = None
    subject_topic_ids: list[RecordId] = Field(default_factory=list)
    keywords: list[Keyword] = Field(default_factory=list)


class ThesisUpdate(PartialUpdate):
    """Schema for updating a thesis.

    Every field is optional. Association lists replace the stored set when
    present; ``co_supervisor_id: null`` removes the co-supervisor.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"co_supervisor_id"})

    title: Optional[Title] = None
    abstract: Optional[Abstract] = None
    author_id: Optional[RecordId] = None
    year: Optional[Year] = None
    type: Optional[ThesisType] = None
    university_id: Optional[RecordId] = None
    institute_id: Optional[RecordId] = None
    num_pages: Optional[PageCount] = None
    language: Optional[Language] = None
    submission_date: Optional[SubmissionDate] = None
    supervisor_ids: Optional[SupervisorIds] = None
    co_supervisor_id: Optional[RecordId] = None
    subject_topic_ids: Optional[list[RecordId]] = None
    keywords: Optional[list[Keyword]] = None


class ThesisSearch(BaseModel):
    """Query-string filters for thesis search. Empty strings count as absent."""

    query: Optional[str] = None
    author_id: Optional[RecordId] = None
    university_id: Optional[RecordId] = None
    institute_id: Optional[RecordId] = None
    type: Optional[ThesisType] = None
    language: Optional[str] = None
    year_from: Optional[Annotated[int, Field(ge=1900)]] = None
    year_to: Optional[Annotated[int, AfterValidator(not_in_future)]] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def filters(self) -> dict[str, Any]:
        """Keyword arguments for ThesisService.search()."""
        params = self.model_dump(exclude_none=True)
        if "type" in params:
            params["thesis_type"] = params.pop("type")
        return params


class ThesisResponse(BaseModel):
    """Response schema for thesis."""

    thesis_id: int = Field(validation_alias=AliasChoices("id", "thesis_id"))
    title: str
    abstract: str
    author_id: int
    year: int
    type: ThesisType
    university_id: int
    institute_id: int
    num_pages: int
    language: str
    submission_date: date
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SupervisorAssignmentResponse(BaseModel):
    """Response schema for one supervisor assignment row."""

    thesis_id: int
    person_id: int
    role: SupervisorRole

    model_config = {"from_attributes": True}


class ThesisDetailResponse(ThesisResponse):
    """Thesis row with supervisors, subject topics and keyword words attached."""

    supervisors: list[SupervisorAssignmentResponse] = Field(default_factory=list)
    subject_topics: list[SubjectTopicResponse] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: Any) -> "ThesisDetailResponse":
        """Build from a ThesisDetail returned by ThesisService.get_detail()."""
        row = ThesisResponse.model_validate(detail.thesis)
        return cls(
            **row.model_dump(),
            supervisors=[
                SupervisorAssignmentResponse.model_validate(s)
                for s in detail.supervisors
            ],
            subject_topics=[
                SubjectTopicResponse.model_validate(t) for t in detail.subject_topics
            ],
            keywords=list(detail.keywords),
        )

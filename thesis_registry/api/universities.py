"""Universities API endpoints."""

from fastapi import APIRouter, Depends
from fastapi import status as http_status

from thesis_registry.schemas.common import Envelope, MessageEnvelope
from thesis_registry.schemas.university import (
    UniversityCreate,
    UniversityResponse,
    UniversityUpdate,
)
from thesis_registry.services.university_service import UniversityService
from thesis_registry.utils.api_helpers import (
    deleted_message,
    envelope_many,
    envelope_one,
    require_found,
)
from thesis_registry.utils.dependencies import dependencies

router = APIRouter(
    prefix="/universities",
    tags=["Universities"],
)


@router.get("")
async def list_universities(
    service: UniversityService = Depends(dependencies.university),
) -> Envelope[list[UniversityResponse]]:
    """List all universities ordered by name."""
    return envelope_many(UniversityResponse, await service.get_all())


@router.get("/{university_id}")
async def get_university(
    university_id: int,
    service: UniversityService = Depends(dependencies.university),
) -> Envelope[UniversityResponse]:
    """Get a university by ID.

    Raises:
        RecordNotFoundError: If the university does not exist.
    """
    university = await service.get_by_id(university_id)
    require_found(university, "University", university_id)
    return envelope_one(UniversityResponse, university)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_university(
    data: UniversityCreate,
    service: UniversityService = Depends(dependencies.university),
) -> Envelope[UniversityResponse]:
    """Create a new university."""
    university = await service.create(**data.model_dump())
    return envelope_one(UniversityResponse, university)


@router.put("/{university_id}")
async def update_university(
    university_id: int,
    data: UniversityUpdate,
    service: UniversityService = Depends(dependencies.university),
) -> Envelope[UniversityResponse]:
    """Update the supplied fields of a university."""
    university = await service.update(university_id, **data.changes())
    require_found(university, "University", university_id)
    return envelope_one(UniversityResponse, university)


@router.delete("/{university_id}")
async def delete_university(
    university_id: int,
    service: UniversityService = Depends(dependencies.university),
) -> MessageEnvelope:
    """Delete a university.

    Raises:
        RecordNotFoundError: If the university does not exist.
        RecordInUseError: If institutes or theses still reference it.
    """
    require_found(await service.delete(university_id), "University", university_id)
    return deleted_message("University")

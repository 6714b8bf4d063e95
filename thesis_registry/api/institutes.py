"""Institutes API endpoints."""

from fastapi import APIRouter, Depends
from fastapi import status as http_status

from thesis_registry.schemas.common import Envelope, MessageEnvelope
from thesis_registry.schemas.institute import (
    InstituteCreate,
    InstituteResponse,
    InstituteUpdate,
)
from thesis_registry.services.institute_service import InstituteService
from thesis_registry.utils.api_helpers import (
    deleted_message,
    envelope_many,
    envelope_one,
    require_found,
)
from thesis_registry.utils.dependencies import dependencies

router = APIRouter(
    prefix="/institutes",
    tags=["Institutes"],
)


@router.get("")
async def list_institutes(
    service: InstituteService = Depends(dependencies.institute),
) -> Envelope[list[InstituteResponse]]:
    """List all institutes ordered by name."""
    return envelope_many(InstituteResponse, await service.get_all())


@router.get("/university/{university_id}")
async def list_institutes_by_university(
    university_id: int,
    service: InstituteService = Depends(dependencies.institute),
) -> Envelope[list[InstituteResponse]]:
    """List the institutes of one university, ordered by name.

    An unknown university yields an empty list, not a 404.
    """
    institutes = await service.get_by_university_id(university_id)
    return envelope_many(InstituteResponse, institutes)


@router.get("/{institute_id}")
async def get_institute(
    institute_id: int,
    service: InstituteService = Depends(dependencies.institute),
) -> Envelope[InstituteResponse]:
    """Get an institute by ID."""
    institute = await service.get_by_id(institute_id)
    require_found(institute, "Institute", institute_id)
    return envelope_one(InstituteResponse, institute)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_institute(
    data: InstituteCreate,
    service: InstituteService = Depends(dependencies.institute),
) -> Envelope[InstituteResponse]:
    """Create a new institute.

    Raises:
        InvalidReferenceError: If the university does not exist.
    """
    institute = await service.create(**data.model_dump())
    return envelope_one(InstituteResponse, institute)


@router.put("/{institute_id}")
async def update_institute(
    institute_id: int,
    data: InstituteUpdate,
    service: InstituteService = Depends(dependencies.institute),
) -> Envelope[InstituteResponse]:
    """Update the supplied fields of an institute."""
    institute = await service.update(institute_id, **data.changes())
    require_found(institute, "Institute", institute_id)
    return envelope_one(InstituteResponse, institute)


@router.delete("/{institute_id}")
async def delete_institute(
    institute_id: int,
    service: InstituteService = Depends(dependencies.institute),
) -> MessageEnvelope:
    """Delete an institute that no thesis references."""
    require_found(await service.delete(institute_id), "Institute", institute_id)
    return deleted_message("Institute")

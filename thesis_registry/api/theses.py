"""Theses API endpoints.

Create and update accept the whole aggregate (row plus supervisor ids,
co-supervisor, subject topic ids and keyword texts) and return the bare
thesis row. ``GET /theses/{thesis_id}`` returns the row with its
associations attached.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status

from thesis_registry.schemas.common import Envelope, MessageEnvelope
from thesis_registry.schemas.thesis import (
    ThesisCreate,
    ThesisDetailResponse,
    ThesisResponse,
    ThesisSearch,
    ThesisUpdate,
)
from thesis_registry.services.thesis_service import ThesisService
from thesis_registry.utils.api_helpers import (
    deleted_message,
    envelope_many,
    envelope_one,
    require_found,
)
from thesis_registry.utils.dependencies import dependencies

router = APIRouter(
    prefix="/theses",
    tags=["Theses"],
)


@router.get("")
async def list_theses(
    service: ThesisService = Depends(dependencies.thesis),
) -> Envelope[list[ThesisResponse]]:
    """List all theses, newest year first."""
    return envelope_many(ThesisResponse, await service.get_all())


@router.get("/search")
async def search_theses(
    filters: Annotated[ThesisSearch, Query()],
    service: ThesisService = Depends(dependencies.thesis),
) -> Envelope[list[ThesisResponse]]:
    """Search theses by title/id text and exact-match filters.

    All supplied filters must match. Results are ordered by year, then id,
    both descending.
    """
    theses = await service.search(**filters.filters())
    return envelope_many(ThesisResponse, theses)


@router.get("/{thesis_id}")
async def get_thesis(
    thesis_id: int,
    service: ThesisService = Depends(dependencies.thesis),
) -> Envelope[ThesisDetailResponse]:
    """Get a thesis with supervisors, subject topics and keywords."""
    detail = await service.get_detail(thesis_id)
    require_found(detail, "Thesis", thesis_id)
    return Envelope[ThesisDetailResponse](data=ThesisDetailResponse.from_detail(detail))


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_thesis(
    data: ThesisCreate,
    service: ThesisService = Depends(dependencies.thesis),
) -> Envelope[ThesisResponse]:
    """Create a thesis and its associations in one transaction.

    Raises:
        InvalidReferenceError: If any referenced person, university,
            institute or subject topic does not exist.
    """
    thesis = await service.create(**data.model_dump())
    return envelope_one(ThesisResponse, thesis)


@router.put("/{thesis_id}")
async def update_thesis(
    thesis_id: int,
    data: ThesisUpdate,
    service: ThesisService = Depends(dependencies.thesis),
) -> Envelope[ThesisResponse]:
    """Update supplied fields; supplied association lists replace the stored ones."""
    thesis = await service.update(thesis_id, **data.changes())
    require_found(thesis, "Thesis", thesis_id)
    return envelope_one(ThesisResponse, thesis)


@router.delete("/{thesis_id}")
async def delete_thesis(
    thesis_id: int,
    service: ThesisService = Depends(dependencies.thesis),
) -> MessageEnvelope:
    """Delete a thesis together with its association rows."""
    require_found(await service.delete(thesis_id), "Thesis", thesis_id)
    return deleted_message("Thesis")

"""People API endpoints."""

from fastapi import APIRouter, Depends
from fastapi import status as http_status

from thesis_registry.schemas.common import Envelope, MessageEnvelope
from thesis_registry.schemas.person import PersonCreate, PersonResponse, PersonUpdate
from thesis_registry.services.person_service import PersonService
from thesis_registry.utils.api_helpers import (
    deleted_message,
    envelope_many,
    envelope_one,
    require_found,
)
from thesis_registry.utils.dependencies import dependencies

router = APIRouter(
    prefix="/people",
    tags=["People"],
)


@router.get("")
async def list_people(
    service: PersonService = Depends(dependencies.person),
) -> Envelope[list[PersonResponse]]:
    """List all people ordered by last name, then first name."""
    return envelope_many(PersonResponse, await service.get_all())


@router.get("/{person_id}")
async def get_person(
    person_id: int,
    service: PersonService = Depends(dependencies.person),
) -> Envelope[PersonResponse]:
    person = await service.get_by_id(person_id)
    require_found(person, "Person", person_id)
    return envelope_one(PersonResponse, person)


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_person(
    data: PersonCreate,
    service: PersonService = Depends(dependencies.person),
) -> Envelope[PersonResponse]:
    """Create a new person.

    Raises:
        DuplicateRecordError: If the email is already registered.
    """
    person = await service.create(**data.model_dump())
    return envelope_one(PersonResponse, person)


@router.put("/{person_id}")
async def update_person(
    person_id: int,
    data: PersonUpdate,
    service: PersonService = Depends(dependencies.person),
) -> Envelope[PersonResponse]:
    person = await service.update(person_id, **data.changes())
    require_found(person, "Person", person_id)
    return envelope_one(PersonResponse, person)


@router.delete("/{person_id}")
async def delete_person(
    person_id: int,
    service: PersonService = Depends(dependencies.person),
) -> MessageEnvelope:
    """Delete a person who is neither author nor supervisor of any thesis."""
    require_found(await service.delete(person_id), "Person", person_id)
    return deleted_message("Person")

"""University service providing CRUD for University records."""

from thesis_registry.models.university import University
from thesis_registry.services.base import BaseService


class UniversityService(BaseService[University]):
    """Service for managing University entities.

    Provides CRUD operations through BaseService inheritance; results of
    get_all() are ordered by name.

    Usage:
        service = UniversityService(db_session)
        university = await service.create(
            name="Istanbul University", country="Turkey", city="Istanbul"
        )
    """

    model = University
    ordering = (University.name,)

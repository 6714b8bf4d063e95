"""Institute service providing CRUD and per-university lookup."""

from typing import List

from thesis_registry.models.base import MAX_INTEGER
from thesis_registry.models.institute import Institute
from thesis_registry.services.base import BaseService


class InstituteService(BaseService[Institute]):
    """Service for managing Institute entities.

    Provides CRUD operations through BaseService inheritance:
    - get_all(): All institutes ordered by name
    - get_by_university_id(id): Institutes of one university, same order

    Attributes:
        model: Institute model class
        db: Database session for operations
    """

    model = Institute
    ordering = (Institute.name,)

    async def get_by_university_id(self, university_id: int) -> List[Institute]:
        """Get institutes owned by a university.

        Args:
            university_id: Parent university ID.

        Returns:
            List of Institute instances ordered by name (empty if none).
        """
        if not 0 < university_id <= MAX_INTEGER:
            return []
        return await self.find(university_id=university_id)

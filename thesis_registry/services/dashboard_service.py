"""Dashboard service providing record counts."""

import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from thesis_registry.exceptions import DatabaseError
from thesis_registry.models.institute import Institute
from thesis_registry.models.person import Person
from thesis_registry.models.thesis import Thesis
from thesis_registry.models.university import University

logger = logging.getLogger(__name__)

STAT_MODELS = {
    "total_theses": Thesis,
    "total_universities": University,
    "total_people": Person,
    "total_institutes": Institute,
}


class DashboardService:
    """Read-only aggregate counts shown on the dashboard."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_stats(self) -> Dict[str, int]:
        """Count theses, universities, people and institutes.

        Returns:
            Mapping of stat name to row count.

        Raises:
            DatabaseError: If database operation fails.
        """
        stats: Dict[str, int] = {}
        try:
            for name, model in STAT_MODELS.items():
                result = await self.db.execute(select(func.count(model.id)))
                stats[name] = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to collect dashboard stats",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(f"Database error during get_stats: {str(e)}") from e
        return stats

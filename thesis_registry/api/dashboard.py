"""Dashboard API endpoints."""

from fastapi import APIRouter, Depends

from thesis_registry.schemas.common import Envelope
from thesis_registry.schemas.dashboard import DashboardStats
from thesis_registry.services.dashboard_service import DashboardService
from thesis_registry.utils.dependencies import dependencies

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


@router.get("/stats")
async def get_stats(
    service: DashboardService = Depends(dependencies.dashboard),
) -> Envelope[DashboardStats]:
    """Record counts for theses, universities, people and institutes."""
    stats = await service.get_stats()
    return Envelope[DashboardStats](data=DashboardStats(**stats))

"""Dashboard schemas."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Record counts shown on the dashboard."""

    total_theses: int
    total_universities: int
    total_people: int
    total_institutes: int

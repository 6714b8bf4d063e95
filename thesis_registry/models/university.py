"""University model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.models.base import BaseModel


class University(BaseModel):
    """University that institutes belong to and theses are submitted at.

    Attributes:
        name: Name of the university (e.g., "Istanbul University")
        country: Country the university is located in
        city: City the university is located in
        created_at: Timestamp when record was created (inherited)
        updated_at: Timestamp when record was last updated (inherited)
    """

    __tablename__ = "universities"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        """String representation of the university."""
        return f"University(id={self.id}, name={self.name!r}, city={self.city!r})"

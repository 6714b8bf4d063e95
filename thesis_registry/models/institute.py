"""Institute model."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.models.base import BaseModel


class Institute(BaseModel):
    """Institute (graduate school) owned by a university.

    Attributes:
        name: Name of the institute
        university_id: Foreign key to universities table (required)
    """

    __tablename__ = "institutes"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    university_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("universities.id"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        """String representation of the institute."""
        return (
            f"Institute(id={self.id}, name={self.name!r}, "
            f"university_id={self.university_id})"
        )

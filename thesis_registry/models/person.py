"""Person model representing authors and supervisors."""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.models.base import BaseModel


class Person(BaseModel):
    """A person who can author or supervise theses.

    Roles are not stored on the person; they exist only per thesis through
    the thesis author column and supervisor assignments.

    Attributes:
        first_name: Given name
        last_name: Family name
        email: Contact email (unique)
        affiliation: Free-text affiliation or university name (nullable)
    """

    __tablename__ = "people"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    affiliation: Mapped[Optional[str]] = mapped_column(
        String(200), nullable=True, default=None
    )

    def __repr__(self) -> str:
        """String representation of the person."""
        return (
            f"Person(id={self.id}, name={self.first_name!r} {self.last_name!r}, "
            f"email={self.email!r})"
        )

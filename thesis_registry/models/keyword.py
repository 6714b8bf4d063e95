"""Keyword lookup model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.models.base import BaseModel


class Keyword(BaseModel):
    """Keyword shared between theses.

    Keywords are deduplicated by exact text and created the first time a
    thesis uses them.
    """

    __tablename__ = "keywords"

    word: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation of the keyword."""
        return f"Keyword(id={self.id}, word={self.word!r})"

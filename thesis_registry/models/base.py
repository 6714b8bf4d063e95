"""Base model class with primary key and timestamp tracking."""

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.utils.db import Base

# Largest value an INTEGER column holds on every supported backend
MAX_INTEGER = 2**31 - 1


class BaseModel(Base):
    """Abstract base class for registry entities.

    Provides common columns for all entity tables:
    - Primary key (id)
    - Timestamps (created_at, updated_at)

    CRUD lives in the service layer (see thesis_registry.services.base).

    Usage:
        class University(BaseModel):
            __tablename__ = "universities"

            name: Mapped[str] = mapped_column(String(200))
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model instance to dictionary.

        Returns:
            Dictionary representation of the model
        """
        return {
            column.key: getattr(self, column.key) for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        """String representation of the model."""
        attrs = ", ".join(
            f"{key}={repr(value)}"
            for key, value in self.to_dict().items()
            if key != "id"
        )
        return f"{self.__class__.__name__}(id={self.id}, {attrs})"

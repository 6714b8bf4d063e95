"""Subject topic model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from thesis_registry.models.base import BaseModel


class SubjectTopic(BaseModel):
    """Subject topic theses can be classified under (e.g. "Machine Learning")."""

    __tablename__ = "subject_topics"

    topic_name: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True, index=True
    )

    def __repr__(self) -> str:
        """String representation of the subject topic."""
        return f"SubjectTopic(id={self.id}, topic_name={self.topic_name!r})"

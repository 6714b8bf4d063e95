"""Application exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""


class ModelError(AppError):
    """Base exception for model/database operations."""


class RecordNotFoundError(ModelError):
    """Raised when a record is not found in the database."""

    def __init__(self, model_name: str, record_id: int):
        self.model_name = model_name
        self.record_id = record_id
        super().__init__(f"{model_name} with id={record_id} not found")


class RecordInUseError(ModelError):
    """Raised when a delete is rejected because other rows still reference the record.

    Attributes:
        model_name: Name of the model being deleted (e.g. "University").
        record_id: Primary key of the record being deleted.
        referenced_by: Table name of the child rows that still point at the
            record, or None if it could not be determined.
    """

    def __init__(
        self, model_name: str, record_id: int, referenced_by: Optional[str] = None
    ):
        self.model_name = model_name
        self.record_id = record_id
        self.referenced_by = referenced_by
        super().__init__(
            f"{model_name} with id={record_id} is referenced by "
            f"{referenced_by or 'other records'}"
        )


class InvalidReferenceError(ModelError):
    """Raised when a create/update points at a parent record that does not exist."""


class DuplicateRecordError(ModelError):
    """Raised when a unique constraint is violated."""

    def __init__(self, model_name: str, detail: Optional[str] = None):
        self.model_name = model_name
        super().__init__(detail or f"{model_name} already exists")


class DatabaseError(ModelError):
    """Raised when a database operation fails for an unclassified reason."""


class InvalidFilterError(ModelError):
    """Raised when invalid filter is provided."""


class AggregateValidationError(ModelError):
    """Raised when a write would leave an aggregate in an invalid shape."""

"""Base service class with transaction management for database operations."""

import logging
from typing import Any, Generic, List, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from thesis_registry.exceptions import (
    DatabaseError,
    DuplicateRecordError,
    InvalidFilterError,
    InvalidReferenceError,
    ModelError,
    RecordInUseError,
    RecordNotFoundError,
)
from thesis_registry.models.base import MAX_INTEGER, BaseModel
from thesis_registry.utils.db import Base

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


def _error_code(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError was raised by a foreign key constraint."""
    code = _error_code(exc)
    if code:
        return code == FOREIGN_KEY_VIOLATION
    return "foreign key" in str(exc.orig).lower()


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError was raised by a unique constraint."""
    code = _error_code(exc)
    if code:
        return code == UNIQUE_VIOLATION
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


class BaseService(Generic[T]):
    """Base service class managing database transactions for model operations.

    Provides automatic transaction management using direct SQLAlchemy queries:
    - Write operations (create, update, delete) commit on success
    - Read operations (get_by_id, get_all, find, count) don't commit
    - All errors trigger rollback and are translated into typed errors

    Lookups by id never raise for absence: get_by_id, update and delete
    return None/False so the caller decides how to report it.

    Usage:
        class UniversityService(BaseService[University]):
            model = University
            ordering = (University.name,)

        service = UniversityService(db_session)
        university = await service.create(name="Ankara University", ...)

    Attributes:
        db: Database session for operations
        model: Model class this service manages
        ordering: Column expressions used to order get_all/find results
    """

    model: type[T]
    ordering: tuple = ()

    def __init__(self, db: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            db: Database session for operations
        """
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _order_clauses(self) -> tuple:
        return self.ordering or (self.model.id,)

    async def _translate_write_error(
        self,
        exc: SQLAlchemyError,
        operation: str,
        record_id: Optional[int] = None,
    ) -> ModelError:
        """Map a failed write onto the application's error hierarchy.

        Must be called after the session has been rolled back.
        """
        if isinstance(exc, IntegrityError):
            if is_foreign_key_violation(exc):
                if operation == "delete" and record_id is not None:
                    referenced_by = await self.find_referencing_table(record_id)
                    return RecordInUseError(self.model_name, record_id, referenced_by)
                return InvalidReferenceError(
                    f"{self.model_name} references a record that does not exist"
                )
            if is_unique_violation(exc):
                return DuplicateRecordError(self.model_name)
        return DatabaseError(f"Database error during {operation}: {str(exc)}")

    async def find_referencing_table(self, record_id: int) -> Optional[str]:
        """Find the first table that still has rows pointing at a record.

        Walks every foreign key in the metadata that targets this model's
        table and looks it up for the given id.

        Args:
            record_id: Primary key of the referenced record.

        Returns:
            Name of the referencing table, or None if nothing references it.
        """
        target = self.model.__table__
        for table in Base.metadata.sorted_tables:
            for fk in table.foreign_keys:
                if fk.column.table is not target:
                    continue
                result = await self.db.execute(
                    select(fk.parent).where(fk.parent == record_id).limit(1)
                )
                if result.first() is not None:
                    return table.name
        return None

    async def create(self, **kwargs: Any) -> T:
        """Create a new record and commit transaction.

        Args:
            **kwargs: Model attributes

        Returns:
            The freshly read model instance

        Raises:
            InvalidReferenceError: If a foreign key points at a missing record
            DuplicateRecordError: If a unique constraint is violated
            DatabaseError: If database operation fails
        """
        try:
            instance = self.model(**kwargs)
            self.db.add(instance)
            await self.db.flush()
            await self.db.refresh(instance)
            await self.db.commit()
            logger.debug(
                f"Created {self.model_name}",
                extra={"model": self.model_name, "id": instance.id},
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Failed to create {self.model_name}",
                extra={"model": self.model_name, "error": str(e)},
                exc_info=True,
            )
            raise await self._translate_write_error(e, "create") from e
        return await self.get_by_id_or_fail(instance.id)

    async def get_by_id(self, record_id: int) -> Optional[T]:
        """Retrieve a record by its primary key ID.

        This is a read operation and does not commit the transaction.

        Args:
            record_id: Primary key ID

        Returns:
            Model instance or None if not found

        Raises:
            DatabaseError: If database operation fails
        """
        if not 0 < record_id <= MAX_INTEGER:
            return None
        try:
            result = await self.db.execute(
                select(self.model).where(self.model.id == record_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to get {self.model_name} by id",
                extra={"model": self.model_name, "id": record_id, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(f"Database error during get: {str(e)}") from e

    async def get_by_id_or_fail(self, record_id: int) -> T:
        """Retrieve a record by ID or raise exception if not found.

        Args:
            record_id: Primary key ID

        Returns:
            Model instance

        Raises:
            RecordNotFoundError: If record not found
            DatabaseError: If database operation fails
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(self.model_name, record_id)
        return record

    async def get_all(self) -> List[T]:
        """Retrieve all records in display order.

        This is a read operation and does not commit the transaction.

        Returns:
            List of model instances ordered by ``ordering``

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            result = await self.db.execute(
                select(self.model).order_by(*self._order_clauses())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to get all {self.model_name}",
                extra={"model": self.model_name, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(f"Database error during get_all: {str(e)}") from e

    async def find(self, **filters: Any) -> List[T]:
        """Find records matching the given filters, in display order.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            List of matching model instances

        Raises:
            InvalidFilterError: If invalid filter key provided
            DatabaseError: If database operation fails
        """
        query = select(self.model)
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise InvalidFilterError(
                    f"Invalid filter key '{key}' for model {self.model_name}"
                )
            query = query.where(getattr(self.model, key) == value)
        try:
            result = await self.db.execute(query.order_by(*self._order_clauses()))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to find {self.model_name}",
                extra={"model": self.model_name, "filters": filters, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(f"Database error during find: {str(e)}") from e

    async def count(self, **filters: Any) -> int:
        """Count records matching the given filters.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            Number of matching records

        Raises:
            InvalidFilterError: If invalid filter key provided
            DatabaseError: If database operation fails
        """
        query = select(func.count(self.model.id))
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise InvalidFilterError(
                    f"Invalid filter key '{key}' for model {self.model_name}"
                )
            query = query.where(getattr(self.model, key) == value)
        try:
            result = await self.db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to count {self.model_name}",
                extra={"model": self.model_name, "filters": filters, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(f"Database error during count: {str(e)}") from e

    async def update(self, record_id: int, **kwargs: Any) -> Optional[T]:
        """Apply the supplied fields to a record and commit transaction.

        Only the keys present in kwargs are changed; an explicit None is
        stored as NULL. Calling without fields is a no-op that returns the
        current row.

        Args:
            record_id: Primary key ID of record to update
            **kwargs: Attributes to update

        Returns:
            Updated model instance, or None if the record does not exist

        Raises:
            InvalidFilterError: If invalid attribute provided
            InvalidReferenceError: If a foreign key points at a missing record
            DuplicateRecordError: If a unique constraint is violated
            DatabaseError: If database operation fails
        """
        record = await self.get_by_id(record_id)
        if record is None or not kwargs:
            return record

        for key in kwargs:
            if key == "id" or not hasattr(record, key):
                raise InvalidFilterError(
                    f"Invalid attribute '{key}' for model {self.model_name}"
                )
        try:
            for key, value in kwargs.items():
                setattr(record, key, value)
            await self.db.flush()
            await self.db.refresh(record)
            await self.db.commit()
            logger.debug(
                f"Updated {self.model_name}",
                extra={"model": self.model_name, "id": record_id},
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Failed to update {self.model_name}",
                extra={"model": self.model_name, "id": record_id, "error": str(e)},
                exc_info=True,
            )
            raise await self._translate_write_error(e, "update", record_id) from e
        return await self.get_by_id(record_id)

    async def delete(self, record_id: int) -> bool:
        """Delete a record and commit transaction.

        Args:
            record_id: Primary key ID of record to delete

        Returns:
            True if the record was deleted, False if it did not exist

        Raises:
            RecordInUseError: If other rows still reference the record
            DatabaseError: If database operation fails
        """
        record = await self.get_by_id(record_id)
        if record is None:
            return False
        try:
            await self.db.delete(record)
            await self.db.flush()
            await self.db.commit()
            logger.debug(
                f"Deleted {self.model_name}",
                extra={"model": self.model_name, "id": record_id},
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(
                f"Failed to delete {self.model_name}",
                extra={"model": self.model_name, "id": record_id, "error": str(e)},
            )
            raise await self._translate_write_error(e, "delete", record_id) from e
        return True

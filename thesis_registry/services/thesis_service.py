"""Thesis service owning the thesis aggregate.

A thesis spans four tables: the thesis row itself, supervisor assignments,
subject topic links and keyword links (plus the shared keyword lookup).
Every write that touches more than one of them runs in a single
transaction: it either commits completely or is rolled back completely.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError

from thesis_registry.exceptions import (
    AggregateValidationError,
    DatabaseError,
    DuplicateRecordError,
    InvalidFilterError,
    ModelError,
)
from thesis_registry.models.base import MAX_INTEGER
from thesis_registry.models.keyword import Keyword
from thesis_registry.models.subject_topic import SubjectTopic
from thesis_registry.models.thesis import (
    SupervisorAssignment,
    SupervisorRole,
    Thesis,
    ThesisKeyword,
    ThesisSubjectTopic,
    ThesisType,
)
from thesis_registry.services.base import BaseService

logger = logging.getLogger(__name__)

SCALAR_FIELDS = frozenset(
    {
        "title",
        "abstract",
        "author_id",
        "year",
        "type",
        "university_id",
        "institute_id",
        "num_pages",
        "language",
        "submission_date",
    }
)
ASSOCIATION_FIELDS = frozenset(
    {"supervisor_ids", "co_supervisor_id", "subject_topic_ids", "keywords"}
)


def _unique(values: Iterable) -> list:
    """Drop repeated values, keeping the first occurrence."""
    return list(dict.fromkeys(values))


@dataclass
class ThesisDetail:
    """Thesis row together with its associated data."""

    thesis: Thesis
    supervisors: List[SupervisorAssignment] = field(default_factory=list)
    subject_topics: List[SubjectTopic] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)


class ThesisService(BaseService[Thesis]):
    """Service for managing the Thesis aggregate.

    Reads return the bare thesis row; associated data is fetched with
    get_supervisors(), get_subject_topics() and get_keywords() (or all at
    once with get_detail()).

    Usage:
        service = ThesisService(db_session)

        thesis = await service.create(
            title="Advanced Machine Learning Techniques",
            ...,
            supervisor_ids=[2],
            subject_topic_ids=[1, 3],
            keywords=["machine learning"],
        )
        results = await service.search(year_from=2020, year_to=2022)
    """

    model = Thesis
    ordering = (Thesis.year.desc(), Thesis.id.desc())

    async def _translate_write_error(
        self,
        exc: SQLAlchemyError,
        operation: str,
        record_id: Optional[int] = None,
    ) -> ModelError:
        # Association links are deduplicated, so the only unique constraint a
        # thesis write can hit is the keyword lookup
        error = await super()._translate_write_error(exc, operation, record_id)
        if isinstance(error, DuplicateRecordError):
            return DuplicateRecordError(
                Keyword.__name__,
                "A keyword of this thesis was created concurrently by another "
                "request; please retry",
            )
        return error

    async def get_supervisors(self, thesis_id: int) -> List[SupervisorAssignment]:
        """Get supervisor and co-supervisor assignments of a thesis."""
        result = await self.db.execute(
            select(SupervisorAssignment)
            .where(SupervisorAssignment.thesis_id == thesis_id)
            .order_by(SupervisorAssignment.id)
        )
        return list(result.scalars().all())

    async def get_subject_topics(self, thesis_id: int) -> List[SubjectTopic]:
        """Get subject topics linked to a thesis, ordered by topic name."""
        result = await self.db.execute(
            select(SubjectTopic)
            .join(ThesisSubjectTopic, ThesisSubjectTopic.topic_id == SubjectTopic.id)
            .where(ThesisSubjectTopic.thesis_id == thesis_id)
            .order_by(SubjectTopic.topic_name)
        )
        return list(result.scalars().all())

    async def get_keywords(self, thesis_id: int) -> List[str]:
        """Get keyword texts linked to a thesis, ordered alphabetically."""
        result = await self.db.execute(
            select(Keyword.word)
            .join(ThesisKeyword, ThesisKeyword.keyword_id == Keyword.id)
            .where(ThesisKeyword.thesis_id == thesis_id)
            .order_by(Keyword.word)
        )
        return list(result.scalars().all())

    async def get_detail(self, thesis_id: int) -> Optional[ThesisDetail]:
        """Get a thesis with supervisors, subject topics and keywords attached.

        Args:
            thesis_id: Thesis ID.

        Returns:
            ThesisDetail, or None if the thesis does not exist.
        """
        thesis = await self.get_by_id(thesis_id)
        if thesis is None:
            return None
        return ThesisDetail(
            thesis=thesis,
            supervisors=await self.get_supervisors(thesis_id),
            subject_topics=await self.get_subject_topics(thesis_id),
            keywords=await self.get_keywords(thesis_id),
        )

    async def intern_keyword(self, word: str) -> int:
        """Return the id of the keyword with this exact text, creating it if absent.

        Runs inside the caller's transaction; a new keyword only becomes
        visible to others when that transaction commits.

        Args:
            word: Keyword text, matched exactly.

        Returns:
            Keyword ID.
        """
        result = await self.db.execute(select(Keyword.id).where(Keyword.word == word))
        keyword_id = result.scalar_one_or_none()
        if keyword_id is not None:
            return keyword_id

        keyword = Keyword(word=word)
        self.db.add(keyword)
        await self.db.flush()
        logger.debug("Created keyword", extra={"keyword_id": keyword.id})
        return keyword.id

    async def _assign_supervisors(
        self, thesis_id: int, person_ids: Iterable[int], role: SupervisorRole
    ) -> None:
        for person_id in _unique(person_ids):
            self.db.add(
                SupervisorAssignment(thesis_id=thesis_id, person_id=person_id, role=role)
            )
        await self.db.flush()

    async def _link_subject_topics(
        self, thesis_id: int, topic_ids: Iterable[int]
    ) -> None:
        for topic_id in _unique(topic_ids):
            self.db.add(ThesisSubjectTopic(thesis_id=thesis_id, topic_id=topic_id))
        await self.db.flush()

    async def _link_keywords(self, thesis_id: int, words: Iterable[str]) -> None:
        linked: set[int] = set()
        for word in words:
            keyword_id = await self.intern_keyword(word)
            # Same keyword twice for one thesis is linked once
            if keyword_id in linked:
                continue
            linked.add(keyword_id)
            self.db.add(ThesisKeyword(thesis_id=thesis_id, keyword_id=keyword_id))
        await self.db.flush()

    async def _clear_supervisors(
        self, thesis_id: int, role: Optional[SupervisorRole] = None
    ) -> None:
        stmt = delete(SupervisorAssignment).where(
            SupervisorAssignment.thesis_id == thesis_id
        )
        if role is not None:
            stmt = stmt.where(SupervisorAssignment.role == role)
        await self.db.execute(stmt)

    async def _clear_subject_topics(self, thesis_id: int) -> None:
        await self.db.execute(
            delete(ThesisSubjectTopic).where(ThesisSubjectTopic.thesis_id == thesis_id)
        )

    async def _clear_keywords(self, thesis_id: int) -> None:
        await self.db.execute(
            delete(ThesisKeyword).where(ThesisKeyword.thesis_id == thesis_id)
        )

    async def create(
        self,
        supervisor_ids: Optional[List[int]] = None,
        co_supervisor_id: Optional[int] = None,
        subject_topic_ids: Optional[List[int]] = None,
        keywords: Optional[List[str]] = None,
        **fields: Any,
    ) -> Thesis:
        """Create a thesis with all of its associations in one transaction.

        Steps, in order: insert the thesis row, assign supervisors, assign
        the co-supervisor (if given), link subject topics, then intern and
        link keywords. Any failure rolls everything back.

        Args:
            supervisor_ids: People supervising the thesis (at least one).
            co_supervisor_id: Optional co-supervisor.
            subject_topic_ids: Subject topics to link.
            keywords: Keyword texts to link, created on first use.
            **fields: Scalar thesis columns.

        Returns:
            The freshly read thesis row (associations are not attached).

        Raises:
            AggregateValidationError: If no supervisor is given.
            InvalidReferenceError: If any referenced record does not exist.
            DatabaseError: If database operation fails.
        """
        if not supervisor_ids:
            raise AggregateValidationError("A thesis requires at least one supervisor")

        try:
            thesis = Thesis(**fields)
            self.db.add(thesis)
            await self.db.flush()
            thesis_id = thesis.id

            await self._assign_supervisors(
                thesis_id, supervisor_ids, SupervisorRole.SUPERVISOR
            )
            if co_supervisor_id:
                await self._assign_supervisors(
                    thesis_id, [co_supervisor_id], SupervisorRole.CO_SUPERVISOR
                )
            await self._link_subject_topics(thesis_id, subject_topic_ids or [])
            await self._link_keywords(thesis_id, keywords or [])

            await self.db.refresh(thesis)
            await self.db.commit()
            logger.info(
                "Thesis created",
                extra={
                    "thesis_id": thesis_id,
                    "supervisors": len(supervisor_ids),
                    "keywords": len(keywords or []),
                },
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Failed to create thesis",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise await self._translate_write_error(e, "create") from e
        return await self.get_by_id_or_fail(thesis_id)

    async def update(self, record_id: int, **changes: Any) -> Optional[Thesis]:
        """Apply a partial update to a thesis and its associations.

        Scalar fields are changed only when present. Each association key,
        when present, fully replaces what was stored before:

        - supervisor_ids: all "Supervisor" rows are replaced
        - co_supervisor_id: the co-supervisor row is removed and, if the new
          value is truthy, a new one is inserted
        - subject_topic_ids / keywords: all links are replaced

        Args:
            record_id: Thesis ID.
            **changes: Fields to change.

        Returns:
            The updated thesis row, or None if the thesis does not exist.

        Raises:
            InvalidFilterError: If an unknown field is supplied.
            AggregateValidationError: If supervisor_ids is present but empty.
            InvalidReferenceError: If any referenced record does not exist.
            DatabaseError: If database operation fails.
        """
        unknown = set(changes) - SCALAR_FIELDS - ASSOCIATION_FIELDS
        if unknown:
            raise InvalidFilterError(
                f"Invalid attribute '{sorted(unknown)[0]}' for model Thesis"
            )
        if "supervisor_ids" in changes and not changes["supervisor_ids"]:
            raise AggregateValidationError("A thesis requires at least one supervisor")

        thesis = await self.get_by_id(record_id)
        if thesis is None or not changes:
            return thesis

        try:
            for key in SCALAR_FIELDS & changes.keys():
                setattr(thesis, key, changes[key])
            await self.db.flush()

            if "supervisor_ids" in changes:
                await self._clear_supervisors(record_id, SupervisorRole.SUPERVISOR)
                await self._assign_supervisors(
                    record_id, changes["supervisor_ids"], SupervisorRole.SUPERVISOR
                )
            if "co_supervisor_id" in changes:
                await self._clear_supervisors(record_id, SupervisorRole.CO_SUPERVISOR)
                if changes["co_supervisor_id"]:
                    await self._assign_supervisors(
                        record_id,
                        [changes["co_supervisor_id"]],
                        SupervisorRole.CO_SUPERVISOR,
                    )
            if "subject_topic_ids" in changes:
                await self._clear_subject_topics(record_id)
                await self._link_subject_topics(
                    record_id, changes["subject_topic_ids"] or []
                )
            if "keywords" in changes:
                await self._clear_keywords(record_id)
                await self._link_keywords(record_id, changes["keywords"] or [])

            await self.db.refresh(thesis)
            await self.db.commit()
            logger.info(
                "Thesis updated",
                extra={"thesis_id": record_id, "fields": sorted(changes)},
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Failed to update thesis",
                extra={"thesis_id": record_id, "error": str(e)},
                exc_info=True,
            )
            raise await self._translate_write_error(e, "update", record_id) from e
        return await self.get_by_id(record_id)

    async def delete(self, record_id: int) -> bool:
        """Delete a thesis and all of its association rows in one transaction.

        Association rows are removed first (supervisors, subject topic links,
        keyword links), then the thesis row. Keywords themselves are kept.

        Args:
            record_id: Thesis ID.

        Returns:
            True if deleted, False if the thesis did not exist.

        Raises:
            RecordInUseError: If something else still references the thesis.
            DatabaseError: If database operation fails.
        """
        thesis = await self.get_by_id(record_id)
        if thesis is None:
            return False

        try:
            await self._clear_supervisors(record_id)
            await self._clear_subject_topics(record_id)
            await self._clear_keywords(record_id)
            await self.db.delete(thesis)
            await self.db.flush()
            await self.db.commit()
            logger.info("Thesis deleted", extra={"thesis_id": record_id})
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Failed to delete thesis",
                extra={"thesis_id": record_id, "error": str(e)},
                exc_info=True,
            )
            raise await self._translate_write_error(e, "delete", record_id) from e
        return True

    async def search(
        self,
        query: Optional[str] = None,
        author_id: Optional[int] = None,
        university_id: Optional[int] = None,
        institute_id: Optional[int] = None,
        thesis_type: Optional[ThesisType] = None,
        language: Optional[str] = None,
        year_from: Optional[int] = None,
        year_to: Optional[int] = None,
    ) -> List[Thesis]:
        """Search theses with optional filters combined by AND.

        Filters that are None (or an empty query/language string) are left
        out of the statement entirely. The free-text query matches a title
        substring (case-insensitive) or, when it is a number, the thesis id.
        Results are always ordered by year then id, newest first.

        Args:
            query: Title substring or thesis id.
            author_id: Author person ID.
            university_id: University ID.
            institute_id: Institute ID.
            thesis_type: Thesis type.
            language: Exact language.
            year_from: Inclusive lower year bound.
            year_to: Inclusive upper year bound.

        Returns:
            List of matching Thesis instances.
        """
        stmt = select(Thesis)
        if query:
            text_match = Thesis.title.icontains(query, autoescape=True)
            if query.isdecimal() and int(query) <= MAX_INTEGER:
                text_match = or_(text_match, Thesis.id == int(query))
            stmt = stmt.where(text_match)
        if author_id is not None:
            stmt = stmt.where(Thesis.author_id == author_id)
        if university_id is not None:
            stmt = stmt.where(Thesis.university_id == university_id)
        if institute_id is not None:
            stmt = stmt.where(Thesis.institute_id == institute_id)
        if thesis_type is not None:
            stmt = stmt.where(Thesis.type == thesis_type)
        if language:
            stmt = stmt.where(Thesis.language == language)
        if year_from is not None:
            stmt = stmt.where(Thesis.year >= year_from)
        if year_to is not None:
            stmt = stmt.where(Thesis.year <= year_to)

        try:
            result = await self.db.execute(stmt.order_by(*self._order_clauses()))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Failed to search theses",
                extra={"query": query, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseError(f"Database error during search: {str(e)}") from e

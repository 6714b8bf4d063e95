"""Async HTTP client for the registry API.

Wraps httpx.AsyncClient, unwraps the ``{"success": ..., "data": ...}``
envelope and converts rows to UI records.

Usage:
    async with RegistryClient("http://localhost:8000/api") as client:
        universities = await client.universities.get_all()
        thesis = await client.theses.get_by_id("42")
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import httpx

from thesis_registry.client.models import (
    DashboardStats,
    Institute,
    Person,
    SubjectTopic,
    Thesis,
    University,
)
from thesis_registry.client.transform import (
    dashboard_stats_to_ui,
    institute_to_ui,
    person_to_ui,
    subject_topic_to_ui,
    thesis_detail_to_ui,
    thesis_to_ui,
    to_wire,
    university_to_ui,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """Raised when the API answers with ``success: false`` or is unreachable.

    Attributes:
        status_code: HTTP status (0 when no response was received).
        message: The envelope's ``error`` text.
        details: Field-level validation problems, if any.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or []
        super().__init__(message)


class RegistryClient:
    """Entry point bundling one sub-client per resource."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize RegistryClient.

        Args:
            base_url: API root including the ``/api`` prefix.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (ASGI app, mock...).
        """
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )
        self.universities = UniversityClient(self)
        self.institutes = InstituteClient(self)
        self.people = PersonClient(self)
        self.subject_topics = SubjectTopicClient(self)
        self.theses = ThesisClient(self)
        self.dashboard = DashboardClient(self)

    async def __aenter__(self) -> "RegistryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        """Send a request and return the decoded success envelope.

        Raises:
            ApiError: On transport failure, non-JSON body or error envelope.
        """
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(
                "Registry API request failed",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise ApiError(0, str(e)) from e

        try:
            body = response.json()
        except ValueError:
            raise ApiError(
                response.status_code,
                f"HTTP error! status: {response.status_code}",
            ) from None

        if not response.is_success or not body.get("success", False):
            raise ApiError(
                response.status_code,
                body.get("error") or f"HTTP error! status: {response.status_code}",
                body.get("details"),
            )
        return body

    async def get_data(self, path: str, **kwargs: Any) -> Any:
        body = await self.request("GET", path, **kwargs)
        return body.get("data")


class ResourceClient(Generic[RecordT]):
    """CRUD calls shared by every resource.

    Subclasses set ``path``, ``entity`` (key for to_wire) and ``to_ui``.
    """

    path: str
    entity: str
    to_ui: Callable[[Dict[str, Any]], Any]

    def __init__(self, api: RegistryClient) -> None:
        self.api = api

    def _convert(self, row: Dict[str, Any]) -> RecordT:
        return type(self).to_ui(row)

    async def get_all(self) -> List[RecordT]:
        rows = await self.api.get_data(self.path)
        return [self._convert(row) for row in rows]

    async def get_by_id(self, record_id: str) -> Optional[RecordT]:
        """Fetch one record; any API error (including 404) yields None."""
        try:
            row = await self.api.get_data(f"{self.path}/{record_id}")
        except ApiError as e:
            logger.debug(
                f"{self.entity} lookup failed",
                extra={"id": record_id, "status_code": e.status_code},
            )
            return None
        return self._convert(row)

    async def create(self, **fields: Any) -> RecordT:
        body = await self.api.request(
            "POST", self.path, json=to_wire(self.entity, fields)
        )
        return self._convert(body["data"])

    async def update(self, record_id: str, **fields: Any) -> RecordT:
        """Send only the given fields; omitted ones stay unchanged server-side."""
        body = await self.api.request(
            "PUT", f"{self.path}/{record_id}", json=to_wire(self.entity, fields)
        )
        return self._convert(body["data"])

    async def delete(self, record_id: str) -> None:
        await self.api.request("DELETE", f"{self.path}/{record_id}")


class UniversityClient(ResourceClient[University]):
    path = "/universities"
    entity = "university"
    to_ui = staticmethod(university_to_ui)


class InstituteClient(ResourceClient[Institute]):
    path = "/institutes"
    entity = "institute"
    to_ui = staticmethod(institute_to_ui)

    async def get_by_university_id(self, university_id: str) -> List[Institute]:
        rows = await self.api.get_data(f"{self.path}/university/{university_id}")
        return [self._convert(row) for row in rows]


class PersonClient(ResourceClient[Person]):
    path = "/people"
    entity = "person"
    to_ui = staticmethod(person_to_ui)


class SubjectTopicClient(ResourceClient[SubjectTopic]):
    path = "/subject-topics"
    entity = "subject_topic"
    to_ui = staticmethod(subject_topic_to_ui)


SEARCH_FILTERS = frozenset(
    {
        "query",
        "author_id",
        "university_id",
        "institute_id",
        "type",
        "language",
        "year_from",
        "year_to",
    }
)


class ThesisClient(ResourceClient[Thesis]):
    path = "/theses"
    entity = "thesis"
    to_ui = staticmethod(thesis_to_ui)

    async def get_by_id(self, record_id: str) -> Optional[Thesis]:
        """Fetch a thesis with supervisor, topic and keyword fields filled."""
        try:
            row = await self.api.get_data(f"{self.path}/{record_id}")
        except ApiError as e:
            logger.debug(
                "thesis lookup failed",
                extra={"id": record_id, "status_code": e.status_code},
            )
            return None
        return thesis_detail_to_ui(row)

    async def search(self, **filters: Any) -> List[Thesis]:
        """Search theses; falsy filters are not sent.

        Raises:
            ValueError: If a filter name is unknown.
        """
        params = {}
        for name, value in filters.items():
            if name not in SEARCH_FILTERS:
                raise ValueError(f"Unknown search filter: {name}")
            if value:
                params[name] = str(value)
        rows = await self.api.get_data(f"{self.path}/search", params=params)
        return [self._convert(row) for row in rows]


class DashboardClient:
    def __init__(self, api: RegistryClient) -> None:
        self.api = api

    async def get_stats(self) -> DashboardStats:
        return dashboard_stats_to_ui(await self.api.get_data("/dashboard/stats"))

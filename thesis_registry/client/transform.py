"""Translation between the API wire format and UI records.

Wire rows are flat snake_case dicts with integer, entity-named ids
(``university_id``, ``person_id``...). UI records use string ids and
carry thesis associations as id lists.
"""

import dataclasses
from typing import Any, Callable, Dict, Mapping, Tuple

from thesis_registry.client.models import (
    DashboardStats,
    Institute,
    Person,
    SubjectTopic,
    Thesis,
    University,
)

SUPERVISOR = "Supervisor"
CO_SUPERVISOR = "Co-Supervisor"


def university_to_ui(row: Mapping[str, Any]) -> University:
    return University(
        id=str(row["university_id"]),
        name=row["name"],
        country=row["country"],
        city=row["city"],
    )


def institute_to_ui(row: Mapping[str, Any]) -> Institute:
    return Institute(
        id=str(row["institute_id"]),
        name=row["name"],
        university_id=str(row["university_id"]),
    )


def person_to_ui(row: Mapping[str, Any]) -> Person:
    return Person(
        id=str(row["person_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        roles=[],
        affiliation=row.get("affiliation") or None,
    )


def subject_topic_to_ui(row: Mapping[str, Any]) -> SubjectTopic:
    return SubjectTopic(id=str(row["topic_id"]), topic_name=row["topic_name"])


def thesis_to_ui(row: Mapping[str, Any]) -> Thesis:
    """Convert a thesis row; association fields are left empty."""
    return Thesis(
        id=str(row["thesis_id"]),
        thesis_no=row["thesis_id"],
        title=row["title"],
        abstract=row["abstract"],
        type=row["type"],
        university_id=str(row["university_id"]),
        institute_id=str(row["institute_id"]),
        author_id=str(row["author_id"]),
        year=row["year"],
        language=row["language"],
        submission_date=row["submission_date"],
        num_pages=row["num_pages"],
    )


def thesis_detail_to_ui(row: Mapping[str, Any]) -> Thesis:
    """Convert a thesis detail row, filling supervisors, topics and keywords."""
    thesis = thesis_to_ui(row)
    supervisors = row.get("supervisors") or []
    thesis.supervisor_ids = [
        str(s["person_id"]) for s in supervisors if s["role"] == SUPERVISOR
    ]
    co_supervisor = next(
        (s for s in supervisors if s["role"] == CO_SUPERVISOR), None
    )
    thesis.co_supervisor_id = (
        str(co_supervisor["person_id"]) if co_supervisor else None
    )
    thesis.subject_topic_ids = [
        str(t["topic_id"]) for t in row.get("subject_topics") or []
    ]
    thesis.keywords = list(row.get("keywords") or [])
    return thesis


def dashboard_stats_to_ui(row: Mapping[str, Any]) -> DashboardStats:
    return DashboardStats(
        total_theses=row["total_theses"],
        total_universities=row["total_universities"],
        total_people=row["total_people"],
        total_institutes=row["total_institutes"],
    )


TO_UI: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "university": university_to_ui,
    "institute": institute_to_ui,
    "person": person_to_ui,
    "subject_topic": subject_topic_to_ui,
    "thesis": thesis_to_ui,
    "dashboard": dashboard_stats_to_ui,
}


def to_ui(entity: str, row: Mapping[str, Any]) -> Any:
    """Convert a wire row to the UI record for the given entity key."""
    return TO_UI[entity](row)


def _same(value: Any) -> Any:
    return value


def _or_none(value: Any) -> Any:
    return value or None


def _id(value: str) -> int:
    return int(value)


def _optional_id(value: Any) -> Any:
    return int(value) if value else None


def _ids(values: Any) -> list:
    return [int(v) for v in values]


# UI attribute -> (wire field, converter) for create/update payloads
WIRE_FIELDS: Dict[str, Dict[str, Tuple[str, Callable[[Any], Any]]]] = {
    "university": {
        "name": ("name", _same),
        "country": ("country", _same),
        "city": ("city", _same),
    },
    "institute": {
        "name": ("name", _same),
        "university_id": ("university_id", _id),
    },
    "person": {
        "first_name": ("first_name", _same),
        "last_name": ("last_name", _same),
        "email": ("email", _same),
        "affiliation": ("affiliation", _or_none),
    },
    "subject_topic": {
        "topic_name": ("topic_name", _same),
    },
    "thesis": {
        "title": ("title", _same),
        "abstract": ("abstract", _same),
        "author_id": ("author_id", _id),
        "year": ("year", _same),
        "type": ("type", _same),
        "university_id": ("university_id", _id),
        "institute_id": ("institute_id", _id),
        "num_pages": ("num_pages", _same),
        "language": ("language", _same),
        "submission_date": ("submission_date", _same),
        "supervisor_ids": ("supervisor_ids", _ids),
        "co_supervisor_id": ("co_supervisor_id", _optional_id),
        "subject_topic_ids": ("subject_topic_ids", _ids),
        "keywords": ("keywords", list),
    },
}


def to_wire(entity: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Build an API payload from UI attribute values.

    Only the given attributes are included, so the result can be sent as a
    partial update.

    Args:
        entity: Key of WIRE_FIELDS ("university", "thesis"...).
        fields: UI attribute names and values.

    Returns:
        Payload dict using wire field names and integer ids.

    Raises:
        ValueError: If an attribute is not writable for the entity.
    """
    mapping = WIRE_FIELDS[entity]
    payload: Dict[str, Any] = {}
    for attr, value in fields.items():
        if attr not in mapping:
            raise ValueError(f"Unknown {entity} field: {attr}")
        wire_name, convert = mapping[attr]
        payload[wire_name] = convert(value)
    return payload


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_camel(value: Any) -> Any:
    """Serialise UI records (or lists of them) to camelCase dicts."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            camel_case(f.name): to_camel(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, list):
        return [to_camel(item) for item in value]
    return value

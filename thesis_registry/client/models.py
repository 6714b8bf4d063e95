"""UI-side record types.

Ids are strings on this side of the boundary; foreign keys are converted
back to integers when a payload is sent to the API.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class University:
    id: str
    name: str
    country: str
    city: str


@dataclass
class Institute:
    id: str
    name: str
    university_id: str


@dataclass
class Person:
    """A person as shown in the UI.

    ``roles`` is never filled from list endpoints; roles only exist per
    thesis (see Thesis.supervisor_ids / co_supervisor_id).
    """

    id: str
    first_name: str
    last_name: str
    email: str
    roles: List[str] = field(default_factory=list)
    affiliation: Optional[str] = None


@dataclass
class SubjectTopic:
    id: str
    topic_name: str


@dataclass
class Thesis:
    """A thesis as shown in the UI.

    Association fields (supervisor_ids, co_supervisor_id, subject_topic_ids,
    keywords) are populated only when the thesis is fetched by id.
    """

    id: str
    thesis_no: int
    title: str
    abstract: str
    type: str
    university_id: str
    institute_id: str
    author_id: str
    year: int
    language: str
    submission_date: str
    num_pages: int
    supervisor_ids: List[str] = field(default_factory=list)
    co_supervisor_id: Optional[str] = None
    subject_topic_ids: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)


@dataclass
class DashboardStats:
    total_theses: int
    total_universities: int
    total_people: int
    total_institutes: int

"""Client data-access layer for the registry HTTP API."""

from thesis_registry.client.api import ApiError, RegistryClient
from thesis_registry.client.models import (
    DashboardStats,
    Institute,
    Person,
    SubjectTopic,
    Thesis,
    University,
)
from thesis_registry.client.transform import to_camel, to_ui, to_wire

__all__ = [
    "ApiError",
    "RegistryClient",
    "DashboardStats",
    "Institute",
    "Person",
    "SubjectTopic",
    "Thesis",
    "University",
    "to_camel",
    "to_ui",
    "to_wire",
]

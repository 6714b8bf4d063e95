"""Person service providing CRUD for Person records."""

from thesis_registry.models.person import Person
from thesis_registry.services.base import BaseService


class PersonService(BaseService[Person]):
    """Service for managing Person entities, ordered by last then first name."""

    model = Person
    ordering = (Person.last_name, Person.first_name)

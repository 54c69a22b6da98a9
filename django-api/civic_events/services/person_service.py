"""Person registration and lookups used to pick organizers, performers and participants."""

import structlog

from civic_events.domain import Person, Rejection, ValidationFailure
from civic_events.domain.errors import PersonNotFoundError
from civic_events.domain.results import Reasons
from civic_events.domain.validation import PersonDraft, validate_person_draft
from civic_events.services.identifiers import parse_person_id
from civic_events.stores.interfaces import PersonStore

logger = structlog.get_logger(__name__)


class PersonService:
    """Service for person registration and lookups."""

    def __init__(self, store: PersonStore) -> None:
        self._store = store

    def get_person(self, person_id: str) -> Person:
        """Return a person by ID.

        Raises:
            InvalidPersonIdError: If the person_id is not a valid UUID.
            PersonNotFoundError: If the person does not exist.
        """
        person = self._store.get_person(parse_person_id(person_id))
        if person is None:
            raise PersonNotFoundError(person_id)
        return person

    def get_by_national_id(self, national_id: str) -> Person:
        """Return the person registered under a national id.

        Raises:
            PersonNotFoundError: If nobody is registered under it.
        """
        person = self._store.get_by_national_id(national_id)
        if person is None:
            raise PersonNotFoundError(national_id)
        return person

    def search(self, fragment: str) -> list[Person]:
        fragment = fragment.strip()
        if not fragment:
            return []
        return self._store.search(fragment)

    def register(self, draft: PersonDraft) -> Person | ValidationFailure | Rejection:
        """Register a new person, or return why the registration was refused."""
        if failure := validate_person_draft(draft):
            logger.info("person_draft_rejected", field=failure.field, code=failure.code.value)
            return failure

        if self._store.get_by_national_id(draft.national_id) is not None:
            logger.info("person_registration_rejected", reason="national_id_taken")
            return Reasons.national_id_taken()

        person = self._store.create_person(draft)
        logger.info("person_registered", person_id=str(person.id))
        return person

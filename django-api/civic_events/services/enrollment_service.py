"""Enrollment service - loads hydrated state, asks the eligibility engine, persists the outcome.

Attempts on the same event are serialized with the store's event lock, so
the duplicate and capacity checks and the write cannot interleave. Storage
errors (including the unique constraint backstop) propagate unchanged.
"""

import structlog
from django.utils import timezone

from civic_events.domain import Enrolled, EnrollmentResult, Event, EventId, Person, PersonId, Rejected, Rejection
from civic_events.domain.eligibility import check_eligibility, try_enroll
from civic_events.domain.errors import EventNotFoundError, PersonNotFoundError
from civic_events.services.identifiers import parse_event_id, parse_person_id
from civic_events.stores.interfaces import EventStore, PersonStore

logger = structlog.get_logger(__name__)


class EnrollmentService:
    """Service for enrolling people in events."""

    def __init__(self, store: EventStore, people: PersonStore) -> None:
        self._store = store
        self._people = people

    def _load_event(self, event_id: EventId) -> Event:
        event = self._store.load_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def _load_person(self, person_id: PersonId) -> Person:
        person = self._people.get_person(person_id)
        if person is None:
            raise PersonNotFoundError(str(person_id))
        return person

    def enroll(self, event_id: str, person_id: str) -> EnrollmentResult:
        """Enroll a person in an event.

        Returns:
            Enrolled with the stored record, or Rejected with the first failing reason.

        Raises:
            InvalidEventIdError, InvalidPersonIdError: On malformed ids.
            EventNotFoundError, PersonNotFoundError: On unknown ids.
        """
        parsed_event_id = parse_event_id(event_id)
        person = self._load_person(parse_person_id(person_id))

        with self._store.lock_event(parsed_event_id):
            event = self._load_event(parsed_event_id)
            result = try_enroll(event, person, now=timezone.now(), today=timezone.localdate())

            match result:
                case Enrolled(record=record):
                    saved = self._store.save_enrollment(record)
                    logger.info(
                        "enrollment_created",
                        event_id=str(event.id),
                        person_id=str(person.id),
                        enrollment_id=str(saved.id),
                    )
                    return Enrolled(saved)
                case Rejected(rejection=rejection):
                    logger.info(
                        "enrollment_rejected",
                        event_id=str(event.id),
                        person_id=str(person.id),
                        reason=rejection.code.value,
                    )
                    return result

    def check(self, event_id: str, person_id: str) -> Rejection | None:
        """Dry run: the reason the person could not enroll right now, or None if they could."""
        event = self._load_event(parse_event_id(event_id))
        person = self._load_person(parse_person_id(person_id))
        return check_eligibility(event, person, today=timezone.localdate())

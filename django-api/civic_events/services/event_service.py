"""Event service - catalog and organizer operations.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models, typed business outcomes, or domain errors
"""

from datetime import date

import structlog
from django.utils import timezone

from civic_events.domain import Event, Rejection, ValidationFailure
from civic_events.domain import lifecycle
from civic_events.domain.errors import EventNotFoundError, PersonNotFoundError
from civic_events.domain.results import Reasons
from civic_events.domain.validation import EventDraft, validate_changes, validate_draft
from civic_events.services.identifiers import parse_event_id, parse_person_id
from civic_events.stores.interfaces import EventStore, PersonStore

logger = structlog.get_logger(__name__)


class EventService:
    """Service for event catalog and lifecycle operations."""

    def __init__(self, store: EventStore, people: PersonStore) -> None:
        self._store = store
        self._people = people

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def list_available_events(
        self,
        today: date | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Event]:
        """Return the events that currently accept enrollments.

        ``date_from`` and ``date_to`` narrow the result to events starting
        within that inclusive range.
        """
        today = today or timezone.localdate()
        return [
            event
            for event in self._store.list_events()
            if lifecycle.is_enrollable(event, today)
            and (date_from is None or event.start_date >= date_from)
            and (date_to is None or event.start_date <= date_to)
        ]

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.load_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_events_for_organizer(self, person_id: str) -> list[Event]:
        """Return the events a person organizes.

        Raises:
            InvalidPersonIdError: If the person_id is not a valid UUID.
            PersonNotFoundError: If the person does not exist.
        """
        parsed = parse_person_id(person_id)
        if self._people.get_person(parsed) is None:
            raise PersonNotFoundError(person_id)
        return self._store.list_events_for_organizer(parsed)

    def create_event(self, draft: EventDraft) -> Event | ValidationFailure:
        """Create a Planned event from a draft, or return the first rule it violates.

        Raises:
            PersonNotFoundError: If the draft references an unknown person.
        """
        if failure := validate_draft(draft):
            logger.info("event_draft_rejected", field=failure.field, code=failure.code.value)
            return failure

        self._ensure_people_exist(draft)

        event = self._store.create_event(draft)
        logger.info("event_created", event_id=str(event.id), kind=event.kind.value)
        return event

    def advance_status(self, event_id: str, actor_id: str) -> Event | Rejection:
        """Move an event one step forward in its lifecycle on behalf of an organizer.

        Raises:
            InvalidEventIdError, InvalidPersonIdError: On malformed ids.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        actor = parse_person_id(actor_id)
        if not event.is_organizer(actor):
            logger.info("status_change_rejected", event_id=str(event.id), reason="not_an_organizer")
            return Reasons.not_an_organizer()

        new_status = lifecycle.next_status(event.status)
        if new_status is None:
            return Reasons.already_finished()

        self._store.update_status(event.id, new_status)
        logger.info(
            "event_status_changed",
            event_id=str(event.id),
            from_status=event.status.value,
            to_status=new_status.value,
        )
        event.status = new_status
        return event

    def update_event(self, event_id: str, actor_id: str, draft: EventDraft) -> Event | ValidationFailure | Rejection:
        """Replace an event's fields on behalf of one of its organizers.

        The acting organizer always stays among the organizers. Stored status
        and enrollments are kept.

        Raises:
            InvalidEventIdError, InvalidPersonIdError: On malformed ids.
            EventNotFoundError: If the event does not exist.
            PersonNotFoundError: If the draft references an unknown person.
        """
        parsed_event_id = parse_event_id(event_id)
        actor = parse_person_id(actor_id)

        with self._store.lock_event(parsed_event_id):
            event = self._store.load_event(parsed_event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            if not event.is_organizer(actor):
                logger.info("event_update_rejected", event_id=str(event.id), reason="not_an_organizer")
                return Reasons.not_an_organizer()

            draft = draft.with_organizer(actor)
            if failure := validate_changes(event, draft):
                logger.info(
                    "event_draft_rejected",
                    event_id=str(event.id),
                    field=failure.field,
                    code=failure.code.value,
                )
                return failure
            self._ensure_people_exist(draft)
            updated = self._store.update_event(event.id, draft)

        logger.info("event_updated", event_id=str(updated.id), actor_id=str(actor))
        return updated

    def delete_event(self, event_id: str, actor_id: str) -> Rejection | None:
        """Delete an event and its enrollments on behalf of one of its organizers.

        Raises:
            InvalidEventIdError, InvalidPersonIdError: On malformed ids.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        actor = parse_person_id(actor_id)
        if not event.is_organizer(actor):
            logger.info("event_delete_rejected", event_id=str(event.id), reason="not_an_organizer")
            return Reasons.not_an_organizer()

        self._store.delete_event(event.id)
        logger.info("event_deleted", event_id=str(event.id), actor_id=str(actor))
        return None

    def _ensure_people_exist(self, draft: EventDraft) -> None:
        for person_id in draft.referenced_person_ids():
            if self._people.get_person(person_id) is None:
                raise PersonNotFoundError(str(person_id))

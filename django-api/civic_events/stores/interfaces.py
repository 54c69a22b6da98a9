"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. The domain core never
queries a store itself: services load fully hydrated events and people,
hand them to the core, and persist what it produced.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from civic_events.domain import EnrollmentRecord, Event, EventId, EventStatus, Person, PersonId
from civic_events.domain.validation import EventDraft, PersonDraft


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def load_event(self, event_id: EventId) -> Event | None:
        """Return an event with organizers and participants, or None if not found."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by start_date ascending."""
        ...

    @abstractmethod
    def list_events_for_organizer(self, person_id: PersonId) -> list[Event]:
        """Return the events a person organizes, ordered by start_date ascending."""
        ...

    @abstractmethod
    def count_enrollments(self, event_id: EventId) -> int:
        """Return how many people are enrolled in an event."""
        ...

    @abstractmethod
    def save_enrollment(self, record: EnrollmentRecord) -> EnrollmentRecord:
        """Persist a new enrollment and return it with its assigned id.

        Raises whatever the backend raises on failure, including a unique
        constraint violation for a duplicate (person, event) pair.
        """
        ...

    @abstractmethod
    def create_event(self, draft: EventDraft) -> Event:
        """Persist a validated draft as a Planned event."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, draft: EventDraft) -> Event:
        """Overwrite the fields and relations of an existing event of the same kind.

        The stored status and the enrollments are left untouched.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> None:
        """Remove an event together with its enrollments."""
        ...

    @abstractmethod
    def update_status(self, event_id: EventId, status: EventStatus) -> None:
        """Overwrite the stored lifecycle status."""
        ...

    @abstractmethod
    def lock_event(self, event_id: EventId) -> AbstractContextManager[None]:
        """Serialize enrollment attempts on one event for the duration of the block."""
        ...


class PersonStore(ABC):
    """Interface for person lookups."""

    @abstractmethod
    def get_person(self, person_id: PersonId) -> Person | None:
        """Return a person by ID, or None if not found."""
        ...

    @abstractmethod
    def search(self, fragment: str) -> list[Person]:
        """Return people whose first or last name contains ``fragment``, case-insensitively."""
        ...

    @abstractmethod
    def get_by_national_id(self, national_id: str) -> Person | None:
        """Return the person registered under ``national_id``, or None."""
        ...

    @abstractmethod
    def create_person(self, draft: PersonDraft) -> Person:
        """Persist a validated registration.

        Raises whatever the backend raises on a duplicate national id.
        """
        ...

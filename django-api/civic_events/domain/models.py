"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in civic_events/models.py (persistence layer).

An event is one record with a variant payload (``details``) tagged by
``EventKind``. Capacity is an optional field on the record itself rather than
a property of one variant, so callers never branch on the variant to find it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import ClassVar

from civic_events.domain.value_objects import Capacity, EnrollmentId, EventId, PersonId


class EventStatus(StrEnum):
    """Stored lifecycle status, advanced explicitly by organizers."""

    PLANNED = "Planned"
    CONFIRMED = "Confirmed"
    RUNNING = "Running"
    FINISHED = "Finished"


class EventKind(StrEnum):
    """The fixed catalog of event variants."""

    FAIR = "Fair"
    CONCERT = "Concert"
    EXHIBITION = "Exhibition"
    WORKSHOP = "Workshop"
    FILM_SERIES = "FilmSeries"


class DeliveryMode(StrEnum):
    """How a workshop is delivered."""

    IN_PERSON = "InPerson"
    VIRTUAL = "Virtual"


@dataclass(frozen=True)
class Person:
    """Domain representation of a Person.

    The same entity plays every role: organizer, performer, curator,
    instructor or participant.
    """

    id: PersonId
    first_name: str
    last_name: str
    national_id: str
    phone: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Film:
    """A film screened as part of a film series."""

    title: str
    projection_order: int


@dataclass(frozen=True)
class FairDetails:
    kind: ClassVar[EventKind] = EventKind.FAIR

    stand_count: int
    outdoor: bool = False


@dataclass(frozen=True)
class ConcertDetails:
    kind: ClassVar[EventKind] = EventKind.CONCERT

    performers: tuple[Person, ...]
    free_entry: bool = False


@dataclass(frozen=True)
class ExhibitionDetails:
    kind: ClassVar[EventKind] = EventKind.EXHIBITION

    art_category: str
    curator: Person


@dataclass(frozen=True)
class WorkshopDetails:
    kind: ClassVar[EventKind] = EventKind.WORKSHOP

    instructor: Person
    delivery_mode: DeliveryMode


@dataclass(frozen=True)
class FilmSeriesDetails:
    kind: ClassVar[EventKind] = EventKind.FILM_SERIES

    films: tuple[Film, ...]
    post_screening_talks: bool = False

    def ordered_films(self) -> list[Film]:
        return sorted(self.films, key=lambda film: film.projection_order)


EventDetails = FairDetails | ConcertDetails | ExhibitionDetails | WorkshopDetails | FilmSeriesDetails


@dataclass(frozen=True)
class EnrollmentRecord:
    """Domain representation of a Participant: one person enrolled in one event."""

    event_id: EventId
    person: Person
    enrolled_at: datetime
    id: EnrollmentId | None = None


@dataclass
class Event:
    """Domain representation of an Event.

    Not frozen: a successful enrollment appends to ``participants``.
    """

    id: EventId
    name: str
    start_date: date
    duration_days: int
    status: EventStatus
    organizers: tuple[Person, ...]
    details: EventDetails
    capacity: Capacity | None = None
    participants: list[EnrollmentRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.duration_days < 1:
            raise ValueError("Event duration must be at least one day")
        if not self.organizers:
            raise ValueError("Event must have at least one organizer")
        if isinstance(self.details, WorkshopDetails) and self.capacity is None:
            raise ValueError("Workshop must declare a capacity")

    @property
    def kind(self) -> EventKind:
        return self.details.kind

    @property
    def end_date(self) -> date:
        """Last day the event runs: start date plus duration minus one day."""
        return self.start_date + timedelta(days=self.duration_days - 1)

    @property
    def enrollment_count(self) -> int:
        return len(self.participants)

    def is_organizer(self, person_id: PersonId) -> bool:
        return any(organizer.id == person_id for organizer in self.organizers)

    def is_enrolled(self, person_id: PersonId) -> bool:
        return any(record.person.id == person_id for record in self.participants)

"""Builders for domain objects used across the unit tests."""

import itertools
import uuid
from datetime import date, datetime, timezone

from civic_events.domain import (
    Capacity,
    ConcertDetails,
    DeliveryMode,
    EnrollmentRecord,
    Event,
    EventDetails,
    EventId,
    EventStatus,
    ExhibitionDetails,
    FairDetails,
    Film,
    FilmSeriesDetails,
    Person,
    PersonId,
    WorkshopDetails,
)

TODAY = date(2025, 3, 10)
NOW = datetime(2025, 3, 10, 15, 30, tzinfo=timezone.utc)

_national_ids = itertools.count(20_000_001)


def make_person(first_name: str = "Ana", last_name: str = "Pereyra") -> Person:
    return Person(
        id=PersonId(uuid.uuid4()),
        first_name=first_name,
        last_name=last_name,
        national_id=str(next(_national_ids)),
    )


def fair_details() -> FairDetails:
    return FairDetails(stand_count=12, outdoor=True)


def concert_details(*performers: Person) -> ConcertDetails:
    return ConcertDetails(performers=performers or (make_person("Luis", "Alberto"),), free_entry=True)


def exhibition_details(curator: Person | None = None) -> ExhibitionDetails:
    return ExhibitionDetails(art_category="Photography", curator=curator or make_person("Marta", "Minujin"))


def workshop_details(instructor: Person | None = None) -> WorkshopDetails:
    return WorkshopDetails(
        instructor=instructor or make_person("Jorge", "Ceramista"),
        delivery_mode=DeliveryMode.IN_PERSON,
    )


def film_series_details() -> FilmSeriesDetails:
    return FilmSeriesDetails(
        films=(Film("La Cienaga", 2), Film("Zama", 1)),
        post_screening_talks=True,
    )


def make_event(
    *,
    details: EventDetails | None = None,
    status: EventStatus = EventStatus.CONFIRMED,
    start_date: date = TODAY,
    duration_days: int = 1,
    organizers: tuple[Person, ...] | None = None,
    capacity: int | None = None,
    name: str = "Spring Fair",
) -> Event:
    return Event(
        id=EventId(uuid.uuid4()),
        name=name,
        start_date=start_date,
        duration_days=duration_days,
        status=status,
        organizers=organizers or (make_person("Olga", "Organizadora"),),
        details=details or fair_details(),
        capacity=Capacity(capacity) if capacity is not None else None,
    )


def enroll_directly(event: Event, *people: Person) -> None:
    """Put people on the participant list without going through the engine."""
    for person in people:
        event.participants.append(EnrollmentRecord(event_id=event.id, person=person, enrolled_at=NOW))

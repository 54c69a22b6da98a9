"""Django ORM implementation of the event and person stores."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from django.db import transaction
from django.db.models import Q, QuerySet

from civic_events import models as orm
from civic_events.domain import (
    Capacity,
    ConcertDetails,
    DeliveryMode,
    EnrollmentId,
    EnrollmentRecord,
    Event,
    EventDetails,
    EventId,
    EventKind,
    EventStatus,
    ExhibitionDetails,
    FairDetails,
    Film,
    FilmSeriesDetails,
    Person,
    PersonId,
    WorkshopDetails,
)
from civic_events.domain.validation import EventDraft, PersonDraft
from civic_events.stores.interfaces import EventStore, PersonStore


def person_to_domain(row: orm.Person) -> Person:
    return Person(
        id=PersonId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        national_id=row.national_id,
        phone=row.phone,
        email=row.email,
    )


def _details_to_domain(row: orm.Event) -> EventDetails:
    kind = EventKind(row.kind)
    child = getattr(row, orm.CHILD_ACCESSORS[kind])
    match kind:
        case EventKind.FAIR:
            return FairDetails(stand_count=child.stand_count, outdoor=child.outdoor)
        case EventKind.CONCERT:
            return ConcertDetails(
                performers=tuple(person_to_domain(p) for p in child.performers.all()),
                free_entry=child.free_entry,
            )
        case EventKind.EXHIBITION:
            return ExhibitionDetails(art_category=child.art_category, curator=person_to_domain(child.curator))
        case EventKind.WORKSHOP:
            return WorkshopDetails(
                instructor=person_to_domain(child.instructor),
                delivery_mode=DeliveryMode(child.delivery_mode),
            )
        case EventKind.FILM_SERIES:
            return FilmSeriesDetails(
                films=tuple(Film(title=f.title, projection_order=f.projection_order) for f in child.films.all()),
                post_screening_talks=child.post_screening_talks,
            )


def event_to_domain(row: orm.Event) -> Event:
    event_id = EventId(row.id)
    return Event(
        id=event_id,
        name=row.name,
        start_date=row.start_date,
        duration_days=row.duration_days,
        status=EventStatus(row.status),
        organizers=tuple(person_to_domain(p) for p in row.organizers.all()),
        details=_details_to_domain(row),
        capacity=Capacity(row.max_capacity) if row.max_capacity is not None else None,
        participants=[
            EnrollmentRecord(
                event_id=event_id,
                person=person_to_domain(p.person),
                enrolled_at=p.enrolled_at,
                id=EnrollmentId(p.id),
            )
            for p in row.participants.all()
        ],
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def _events(self) -> QuerySet[orm.Event]:
        return orm.Event.objects.select_related(
            "fair",
            "concert",
            "exhibition__curator",
            "workshop__instructor",
            "filmseries",
        ).prefetch_related(
            "organizers",
            "participants__person",
            "concert__performers",
            "filmseries__films",
        )

    def load_event(self, event_id: EventId) -> Event | None:
        row = self._events().filter(pk=event_id.value).first()
        return event_to_domain(row) if row is not None else None

    def list_events(self) -> list[Event]:
        return [event_to_domain(row) for row in self._events()]

    def list_events_for_organizer(self, person_id: PersonId) -> list[Event]:
        rows = self._events().filter(organizers__id=person_id.value).distinct()
        return [event_to_domain(row) for row in rows]

    def count_enrollments(self, event_id: EventId) -> int:
        return orm.Participant.objects.filter(event_id=event_id.value).count()

    def save_enrollment(self, record: EnrollmentRecord) -> EnrollmentRecord:
        row = orm.Participant.objects.create(
            person_id=record.person.id.value,
            event_id=record.event_id.value,
            enrolled_at=record.enrolled_at,
        )
        return replace(record, id=EnrollmentId(row.id))

    def _common_fields(self, draft: EventDraft) -> dict:
        return {
            "name": draft.name.strip(),
            "start_date": draft.start_date,
            "duration_days": draft.duration_days,
            "max_capacity": draft.capacity,
        }

    def _variant_fields(self, draft: EventDraft) -> dict:
        match draft.kind:
            case EventKind.FAIR:
                return {"stand_count": draft.stand_count, "outdoor": draft.outdoor}
            case EventKind.CONCERT:
                return {"free_entry": draft.free_entry}
            case EventKind.EXHIBITION:
                return {"art_category": draft.art_category.strip(), "curator_id": draft.curator_id.value}
            case EventKind.WORKSHOP:
                return {"instructor_id": draft.instructor_id.value, "delivery_mode": draft.delivery_mode.value}
            case EventKind.FILM_SERIES:
                return {"post_screening_talks": draft.post_screening_talks}
        raise ValueError(f"Unsupported event kind: {draft.kind!r}")

    def _set_relations(self, row: orm.Event, draft: EventDraft) -> None:
        row.organizers.set([person_id.value for person_id in draft.organizer_ids])
        match draft.kind:
            case EventKind.CONCERT:
                row.performers.set([person_id.value for person_id in draft.performer_ids])
            case EventKind.FILM_SERIES:
                row.films.all().delete()
                orm.Film.objects.bulk_create(
                    orm.Film(series=row, title=film.title.strip(), projection_order=film.projection_order)
                    for film in draft.films
                )

    @transaction.atomic
    def create_event(self, draft: EventDraft) -> Event:
        model = orm.VARIANT_MODELS[draft.kind]
        row = model.objects.create(
            **self._common_fields(draft),
            **self._variant_fields(draft),
            status=EventStatus.PLANNED.value,
        )
        self._set_relations(row, draft)
        return self.load_event(EventId(row.pk))

    @transaction.atomic
    def update_event(self, event_id: EventId, draft: EventDraft) -> Event:
        row = orm.VARIANT_MODELS[draft.kind].objects.get(pk=event_id.value)
        for field, value in {**self._common_fields(draft), **self._variant_fields(draft)}.items():
            setattr(row, field, value)
        row.save()
        self._set_relations(row, draft)
        return self.load_event(event_id)

    def delete_event(self, event_id: EventId) -> None:
        orm.Event.objects.filter(pk=event_id.value).delete()

    def update_status(self, event_id: EventId, status: EventStatus) -> None:
        row = orm.Event.objects.get(pk=event_id.value)
        row.status = status.value
        row.save(update_fields=["status", "updated_at"])

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[None]:
        with transaction.atomic():
            # Row lock on the event; a no-op on backends without SELECT ... FOR UPDATE.
            list(orm.Event.objects.select_for_update().filter(pk=event_id.value).values_list("pk", flat=True))
            yield


class DjangoPersonStore(PersonStore):
    """Relational person store using Django ORM."""

    def get_person(self, person_id: PersonId) -> Person | None:
        row = orm.Person.objects.filter(pk=person_id.value).first()
        return person_to_domain(row) if row is not None else None

    def search(self, fragment: str) -> list[Person]:
        rows = orm.Person.objects.filter(Q(first_name__icontains=fragment) | Q(last_name__icontains=fragment))
        return [person_to_domain(row) for row in rows]

    def get_by_national_id(self, national_id: str) -> Person | None:
        row = orm.Person.objects.filter(national_id=national_id.strip()).first()
        return person_to_domain(row) if row is not None else None

    def create_person(self, draft: PersonDraft) -> Person:
        row = orm.Person.objects.create(
            first_name=draft.first_name.strip(),
            last_name=draft.last_name.strip(),
            national_id=draft.national_id.strip(),
            phone=draft.phone.strip(),
            email=draft.email.strip(),
        )
        return person_to_domain(row)

"""Event and person draft validation.

Rules are checked in a fixed field order and only the first violation is
reported: common fields first, then the fields of the chosen variant.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from typing import Self

from civic_events.domain.models import DeliveryMode, Event, EventKind, Film
from civic_events.domain.results import ValidationCode, ValidationFailure
from civic_events.domain.value_objects import PersonId


@dataclass(frozen=True)
class EventDraft:
    """An organizer's submission for a new event, before any rule is checked."""

    name: str | None = None
    start_date: date | None = None
    duration_days: int | None = None
    kind: EventKind | None = None
    organizer_ids: tuple[PersonId, ...] = ()
    capacity: int | None = None
    # Fair
    stand_count: int | None = None
    outdoor: bool = False
    # Concert
    performer_ids: tuple[PersonId, ...] = ()
    free_entry: bool = False
    # Exhibition
    art_category: str | None = None
    curator_id: PersonId | None = None
    # Workshop
    instructor_id: PersonId | None = None
    delivery_mode: DeliveryMode | None = None
    # FilmSeries
    films: tuple[Film, ...] = ()
    post_screening_talks: bool = False

    def referenced_person_ids(self) -> list[PersonId]:
        """Every person the draft points at, organizers first, without repeats."""
        ids = [*self.organizer_ids, *self.performer_ids]
        ids += [person_id for person_id in (self.curator_id, self.instructor_id) if person_id is not None]
        return list(dict.fromkeys(ids))

    def with_organizer(self, person_id: PersonId) -> Self:
        """The same draft with ``person_id`` among the organizers."""
        if person_id in self.organizer_ids:
            return self
        return replace(self, organizer_ids=(*self.organizer_ids, person_id))


def _fail(field: str, code: ValidationCode, message: str) -> ValidationFailure:
    return ValidationFailure(field=field, code=code, message=message)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _validate_common(draft: EventDraft) -> ValidationFailure | None:
    if _is_blank(draft.name):
        return _fail("name", ValidationCode.NAME_REQUIRED, "Event name cannot be empty.")
    if draft.start_date is None:
        return _fail("start_date", ValidationCode.START_DATE_REQUIRED, "A start date is required.")
    if draft.duration_days is None or draft.duration_days < 1:
        return _fail("duration_days", ValidationCode.DURATION_INVALID, "Duration must be at least one day.")
    if draft.kind is None:
        return _fail("kind", ValidationCode.KIND_REQUIRED, "An event type is required.")
    if not draft.organizer_ids:
        return _fail("organizer_ids", ValidationCode.ORGANIZER_REQUIRED, "At least one organizer is required.")
    return None


def _validate_optional_capacity(draft: EventDraft) -> ValidationFailure | None:
    if draft.capacity is not None and draft.capacity < 1:
        return _fail("capacity", ValidationCode.CAPACITY_INVALID, "Capacity must be a positive number.")
    return None


def _validate_fair(draft: EventDraft) -> ValidationFailure | None:
    if draft.stand_count is None or draft.stand_count < 1:
        return _fail("stand_count", ValidationCode.STAND_COUNT_INVALID, "Stand count must be a positive number.")
    return _validate_optional_capacity(draft)


def _validate_concert(draft: EventDraft) -> ValidationFailure | None:
    if not draft.performer_ids:
        return _fail("performer_ids", ValidationCode.PERFORMER_REQUIRED, "Add at least one performer.")
    return _validate_optional_capacity(draft)


def _validate_exhibition(draft: EventDraft) -> ValidationFailure | None:
    if _is_blank(draft.art_category):
        return _fail("art_category", ValidationCode.ART_CATEGORY_REQUIRED, "An art category is required.")
    if draft.curator_id is None:
        return _fail("curator_id", ValidationCode.CURATOR_REQUIRED, "A curator is required.")
    return _validate_optional_capacity(draft)


def _validate_workshop(draft: EventDraft) -> ValidationFailure | None:
    if draft.capacity is None or draft.capacity < 1:
        return _fail("capacity", ValidationCode.CAPACITY_INVALID, "Capacity must be a positive number.")
    if draft.instructor_id is None:
        return _fail("instructor_id", ValidationCode.INSTRUCTOR_REQUIRED, "An instructor is required.")
    if draft.delivery_mode is None:
        return _fail("delivery_mode", ValidationCode.DELIVERY_MODE_REQUIRED, "A delivery mode is required.")
    return None


def _validate_film_series(draft: EventDraft) -> ValidationFailure | None:
    if not draft.films:
        return _fail("films", ValidationCode.FILM_REQUIRED, "Add at least one film to the series.")
    seen_orders: set[int] = set()
    for film in draft.films:
        if _is_blank(film.title):
            return _fail("films", ValidationCode.FILM_TITLE_REQUIRED, "Every film needs a title.")
        if film.projection_order < 1:
            return _fail(
                "films",
                ValidationCode.PROJECTION_ORDER_INVALID,
                "Projection order must be a positive number.",
            )
        if film.projection_order in seen_orders:
            return _fail(
                "films",
                ValidationCode.PROJECTION_ORDER_DUPLICATE,
                f"A film with projection order {film.projection_order} already exists.",
            )
        seen_orders.add(film.projection_order)
    return _validate_optional_capacity(draft)


_VARIANT_VALIDATORS: dict[EventKind, Callable[[EventDraft], ValidationFailure | None]] = {
    EventKind.FAIR: _validate_fair,
    EventKind.CONCERT: _validate_concert,
    EventKind.EXHIBITION: _validate_exhibition,
    EventKind.WORKSHOP: _validate_workshop,
    EventKind.FILM_SERIES: _validate_film_series,
}


def validate_draft(draft: EventDraft) -> ValidationFailure | None:
    """Return the first violated rule, or None when the draft can be created."""
    if failure := _validate_common(draft):
        return failure
    return _VARIANT_VALIDATORS[draft.kind](draft)


def validate_changes(event: Event, draft: EventDraft) -> ValidationFailure | None:
    """Validate a draft meant to replace an existing event.

    On top of the creation rules the variant is fixed once created and a
    declared capacity cannot drop below the people already enrolled.
    """
    if failure := validate_draft(draft):
        return failure
    if draft.kind != event.kind:
        return _fail("kind", ValidationCode.KIND_CHANGED, "The event type cannot be changed.")
    if draft.capacity is not None and draft.capacity < event.enrollment_count:
        return _fail(
            "capacity",
            ValidationCode.CAPACITY_BELOW_ENROLLMENTS,
            f"Capacity cannot be lower than the {event.enrollment_count} people already enrolled.",
        )
    return None


@dataclass(frozen=True)
class PersonDraft:
    """A registration request for a new person."""

    first_name: str | None = None
    last_name: str | None = None
    national_id: str | None = None
    phone: str | None = None
    email: str | None = None


def validate_person_draft(draft: PersonDraft) -> ValidationFailure | None:
    if _is_blank(draft.first_name):
        return _fail("first_name", ValidationCode.FIRST_NAME_REQUIRED, "First name is required.")
    if _is_blank(draft.last_name):
        return _fail("last_name", ValidationCode.LAST_NAME_REQUIRED, "Last name is required.")
    if _is_blank(draft.national_id) or not draft.national_id.strip().isdigit():
        return _fail("national_id", ValidationCode.NATIONAL_ID_INVALID, "National id must be a number.")
    if _is_blank(draft.phone):
        return _fail("phone", ValidationCode.PHONE_REQUIRED, "Phone is required.")
    if _is_blank(draft.email):
        return _fail("email", ValidationCode.EMAIL_REQUIRED, "Email is required.")
    return None

"""Lifecycle evaluation.

An event's effective state combines the stored status with a date check: an
event whose last day is behind us is treated as ended for enrollment purposes
even when nobody advanced its status. The stored status is never mutated here.
"""

from datetime import date
from enum import StrEnum

from civic_events.domain.models import Event, EventStatus
from civic_events.domain.results import Reasons, Rejection

ENROLLABLE_STATUSES = frozenset({EventStatus.CONFIRMED, EventStatus.RUNNING})

_NEXT_STATUS = {
    EventStatus.PLANNED: EventStatus.CONFIRMED,
    EventStatus.CONFIRMED: EventStatus.RUNNING,
    EventStatus.RUNNING: EventStatus.FINISHED,
}


class EffectiveState(StrEnum):
    """Stored status, overridden by ENDED once the end date has passed."""

    PLANNED = "Planned"
    CONFIRMED = "Confirmed"
    RUNNING = "Running"
    FINISHED = "Finished"
    ENDED = "Ended"


def is_eligible_status(event: Event) -> bool:
    return event.status in ENROLLABLE_STATUSES


def has_ended(event: Event, today: date | None = None) -> bool:
    """True once ``today`` is strictly after the computed end date.

    The end date itself still counts as running.
    """
    today = today or date.today()
    return today > event.end_date


def is_enrollable(event: Event, today: date | None = None) -> bool:
    return is_eligible_status(event) and not has_ended(event, today)


def explain_not_enrollable(event: Event, today: date | None = None) -> Rejection:
    """Return the single most specific reason the event refuses enrollments."""
    if event.status == EventStatus.PLANNED:
        return Reasons.not_confirmed()
    if event.status == EventStatus.FINISHED:
        return Reasons.already_finished()
    if has_ended(event, today):
        return Reasons.ended_on(event.end_date)
    return Reasons.not_available()


def effective_state(event: Event, today: date | None = None) -> EffectiveState:
    if event.status != EventStatus.FINISHED and has_ended(event, today):
        return EffectiveState.ENDED
    return EffectiveState(event.status.value)


def next_status(status: EventStatus) -> EventStatus | None:
    """The single forward transition from ``status``; None once finished."""
    return _NEXT_STATUS.get(status)

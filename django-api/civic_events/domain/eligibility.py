"""Enrollment eligibility engine.

Each gate performs one check. Gates run in a fixed order and the first one
that blocks decides the outcome. Nothing is mutated until every gate passed.
"""

from __future__ import annotations

import abc
from datetime import date, datetime, timezone

from civic_events.domain import capacity, lifecycle
from civic_events.domain.models import EnrollmentRecord, Event, Person
from civic_events.domain.results import Enrolled, EnrollmentResult, Reasons, Rejected, Rejection


class BaseEligibilityGate(abc.ABC):
    """Abstract Base Class for a composable eligibility check."""

    def __init__(self, engine: EligibilityEngine) -> None:
        self.engine = engine
        self.event: Event = engine.event
        self.person: Person = engine.person

    @abc.abstractmethod
    def check(self) -> Rejection | None:
        """Perform the eligibility check.

        Returns:
            Rejection if this gate blocks enrollment, None to continue to next gate.
        """


class LifecycleGate(BaseEligibilityGate):
    """Gate #1: the event must be confirmed or running and not past its end date."""

    def check(self) -> Rejection | None:
        if lifecycle.is_enrollable(self.event, self.engine.today):
            return None
        return lifecycle.explain_not_enrollable(self.event, self.engine.today)


class OrganizerGate(BaseEligibilityGate):
    """Gate #2: organizers cannot be participants of their own event."""

    def check(self) -> Rejection | None:
        if self.event.is_organizer(self.person.id):
            return Reasons.organizer_conflict()
        return None


class DuplicateEnrollmentGate(BaseEligibilityGate):
    """Gate #3: at most one enrollment per person and event."""

    def check(self) -> Rejection | None:
        if self.event.is_enrolled(self.person.id):
            return Reasons.already_enrolled()
        return None


class CapacityGate(BaseEligibilityGate):
    """Gate #4: capacity-bounded events need a free slot."""

    def check(self) -> Rejection | None:
        if capacity.has_availability(self.event):
            return None
        return Reasons.no_capacity()


ELIGIBILITY_GATES: tuple[type[BaseEligibilityGate], ...] = (
    LifecycleGate,
    OrganizerGate,
    DuplicateEnrollmentGate,
    CapacityGate,
)


class EligibilityEngine:
    """Decides whether an event accepts a person, and enrolls them if so."""

    def __init__(self, event: Event, person: Person, today: date | None = None) -> None:
        self.event = event
        self.person = person
        self.today = today or date.today()

    def check_eligibility(self) -> Rejection | None:
        for gate_class in ELIGIBILITY_GATES:
            if rejection := gate_class(self).check():
                return rejection
        return None

    def try_enroll(self, now: datetime | None = None) -> EnrollmentResult:
        if rejection := self.check_eligibility():
            return Rejected(rejection)

        record = EnrollmentRecord(
            event_id=self.event.id,
            person=self.person,
            enrolled_at=now or datetime.now(timezone.utc),
        )
        self.event.participants.append(record)
        return Enrolled(record)


def check_eligibility(event: Event, person: Person, today: date | None = None) -> Rejection | None:
    """Dry run of the gate chain without creating an enrollment."""
    return EligibilityEngine(event, person, today).check_eligibility()


def try_enroll(
    event: Event,
    person: Person,
    now: datetime | None = None,
    today: date | None = None,
) -> EnrollmentResult:
    """Enroll ``person`` in ``event`` or return the first failing reason.

    ``now`` stamps the enrollment record. ``today`` drives the lifecycle check
    and falls back to the calendar date of ``now``.
    """
    if today is None and now is not None:
        today = now.date()
    return EligibilityEngine(event, person, today).try_enroll(now)

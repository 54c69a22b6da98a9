"""Typed outcomes of business rules.

Rejections and validation failures are expected and frequent, so they are
returned as values the caller can match on instead of being raised.
"""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from civic_events.domain.models import EnrollmentRecord


class RejectionCode(StrEnum):
    """Why an action was refused."""

    NOT_CONFIRMED = "NOT_CONFIRMED"
    ALREADY_FINISHED = "ALREADY_FINISHED"
    ENDED = "ENDED"
    NOT_AVAILABLE = "NOT_AVAILABLE"
    ORGANIZER_CONFLICT = "ORGANIZER_CONFLICT"
    ALREADY_ENROLLED = "ALREADY_ENROLLED"
    NO_CAPACITY = "NO_CAPACITY"
    NOT_AN_ORGANIZER = "NOT_AN_ORGANIZER"
    NATIONAL_ID_TAKEN = "NATIONAL_ID_TAKEN"


@dataclass(frozen=True)
class Rejection:
    code: RejectionCode
    message: str
    ended_on: date | None = None

    def __str__(self) -> str:
        return self.message


class Reasons:
    """Factories for every rejection the engine and services return."""

    @staticmethod
    def not_confirmed() -> Rejection:
        return Rejection(RejectionCode.NOT_CONFIRMED, "not yet confirmed")

    @staticmethod
    def already_finished() -> Rejection:
        return Rejection(RejectionCode.ALREADY_FINISHED, "already finished")

    @staticmethod
    def ended_on(end_date: date) -> Rejection:
        return Rejection(RejectionCode.ENDED, f"ended on {end_date.isoformat()}", ended_on=end_date)

    @staticmethod
    def not_available() -> Rejection:
        return Rejection(RejectionCode.NOT_AVAILABLE, "not available for enrollment")

    @staticmethod
    def organizer_conflict() -> Rejection:
        return Rejection(RejectionCode.ORGANIZER_CONFLICT, "organizer cannot enroll in own event")

    @staticmethod
    def already_enrolled() -> Rejection:
        return Rejection(RejectionCode.ALREADY_ENROLLED, "already enrolled")

    @staticmethod
    def no_capacity() -> Rejection:
        return Rejection(RejectionCode.NO_CAPACITY, "no capacity available")

    @staticmethod
    def not_an_organizer() -> Rejection:
        return Rejection(RejectionCode.NOT_AN_ORGANIZER, "only an organizer can change the event")

    @staticmethod
    def national_id_taken() -> Rejection:
        return Rejection(RejectionCode.NATIONAL_ID_TAKEN, "a person with this national id is already registered")


@dataclass(frozen=True)
class Enrolled:
    """Successful enrollment carrying the created record."""

    record: EnrollmentRecord

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Refused enrollment carrying the first failing reason."""

    rejection: Rejection

    @property
    def ok(self) -> bool:
        return False


EnrollmentResult = Enrolled | Rejected


class ValidationCode(StrEnum):
    """Which rule an event or person draft violated."""

    NAME_REQUIRED = "NAME_REQUIRED"
    START_DATE_REQUIRED = "START_DATE_REQUIRED"
    DURATION_INVALID = "DURATION_INVALID"
    KIND_REQUIRED = "KIND_REQUIRED"
    ORGANIZER_REQUIRED = "ORGANIZER_REQUIRED"
    STAND_COUNT_INVALID = "STAND_COUNT_INVALID"
    PERFORMER_REQUIRED = "PERFORMER_REQUIRED"
    ART_CATEGORY_REQUIRED = "ART_CATEGORY_REQUIRED"
    CURATOR_REQUIRED = "CURATOR_REQUIRED"
    CAPACITY_INVALID = "CAPACITY_INVALID"
    INSTRUCTOR_REQUIRED = "INSTRUCTOR_REQUIRED"
    DELIVERY_MODE_REQUIRED = "DELIVERY_MODE_REQUIRED"
    FILM_REQUIRED = "FILM_REQUIRED"
    FILM_TITLE_REQUIRED = "FILM_TITLE_REQUIRED"
    PROJECTION_ORDER_INVALID = "PROJECTION_ORDER_INVALID"
    PROJECTION_ORDER_DUPLICATE = "PROJECTION_ORDER_DUPLICATE"
    KIND_CHANGED = "KIND_CHANGED"
    CAPACITY_BELOW_ENROLLMENTS = "CAPACITY_BELOW_ENROLLMENTS"
    FIRST_NAME_REQUIRED = "FIRST_NAME_REQUIRED"
    LAST_NAME_REQUIRED = "LAST_NAME_REQUIRED"
    NATIONAL_ID_INVALID = "NATIONAL_ID_INVALID"
    PHONE_REQUIRED = "PHONE_REQUIRED"
    EMAIL_REQUIRED = "EMAIL_REQUIRED"


@dataclass(frozen=True)
class ValidationFailure:
    """The first rule a draft violated, in field order."""

    field: str
    code: ValidationCode
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

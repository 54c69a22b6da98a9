"""Domain error codes for the civic events module.

These cover lookups that fail (malformed or unknown ids). Business rule
outcomes such as enrollment rejections are values, see domain/results.py.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PERSON_NOT_FOUND = "PERSON_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_PERSON_ID = "INVALID_PERSON_ID"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class PersonNotFoundError(DomainError):
    """Raised when a person is not found."""

    def __init__(self, person_id: str) -> None:
        super().__init__(
            code=ErrorCode.PERSON_NOT_FOUND,
            message="Person not found",
        )
        self.person_id = person_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidPersonIdError(DomainError):
    """Raised when a person ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PERSON_ID,
            message="Invalid person ID format",
        )

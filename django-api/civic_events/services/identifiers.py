"""Parsing of raw ids received from callers into domain ids."""

from civic_events.domain import EventId, PersonId
from civic_events.domain.errors import InvalidEventIdError, InvalidPersonIdError


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(str(event_id))
    except ValueError as exc:
        raise InvalidEventIdError() from exc


def parse_person_id(person_id: str) -> PersonId:
    try:
        return PersonId.from_string(str(person_id))
    except ValueError as exc:
        raise InvalidPersonIdError() from exc

from civic_events.domain.models import (
    ConcertDetails,
    DeliveryMode,
    EnrollmentRecord,
    Event,
    EventDetails,
    EventKind,
    EventStatus,
    ExhibitionDetails,
    FairDetails,
    Film,
    FilmSeriesDetails,
    Person,
    WorkshopDetails,
)
from civic_events.domain.results import (
    Enrolled,
    EnrollmentResult,
    Rejected,
    Rejection,
    RejectionCode,
    ValidationCode,
    ValidationFailure,
)
from civic_events.domain.value_objects import Capacity, EnrollmentId, EventId, PersonId

__all__ = [
    "Event",
    "EventDetails",
    "EventKind",
    "EventStatus",
    "DeliveryMode",
    "FairDetails",
    "ConcertDetails",
    "ExhibitionDetails",
    "WorkshopDetails",
    "FilmSeriesDetails",
    "Film",
    "Person",
    "EnrollmentRecord",
    "EventId",
    "PersonId",
    "EnrollmentId",
    "Capacity",
    "Enrolled",
    "Rejected",
    "EnrollmentResult",
    "Rejection",
    "RejectionCode",
    "ValidationCode",
    "ValidationFailure",
]

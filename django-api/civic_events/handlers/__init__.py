from civic_events.handlers.views import (
    EligibilityView,
    EnrollmentView,
    EventDetailView,
    EventListView,
    EventStatusView,
    OrganizerEventListView,
    PersonByNationalIdView,
    PersonListView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "EventStatusView",
    "EnrollmentView",
    "EligibilityView",
    "PersonListView",
    "PersonByNationalIdView",
    "OrganizerEventListView",
]

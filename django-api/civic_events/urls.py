from django.urls import path

from civic_events.handlers import (
    EligibilityView,
    EnrollmentView,
    EventDetailView,
    EventListView,
    EventStatusView,
    OrganizerEventListView,
    PersonByNationalIdView,
    PersonListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path("events/<str:event_id>/enrollments", EnrollmentView.as_view(), name="enrollment-create"),
    path("events/<str:event_id>/eligibility", EligibilityView.as_view(), name="event-eligibility"),
    path("people", PersonListView.as_view(), name="person-list"),
    path("people/national-id/<str:national_id>", PersonByNationalIdView.as_view(), name="person-by-national-id"),
    path("people/<str:person_id>/events", OrganizerEventListView.as_view(), name="organizer-events"),
]

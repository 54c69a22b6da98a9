"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors and business rejections to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from civic_events.cache import available_events_key, cache_ttl, event_detail_key
from civic_events.domain import Enrolled, Rejected, Rejection, ValidationFailure
from civic_events.domain.errors import DomainError, ErrorCode
from civic_events.handlers.serializers import (
    ActorRequestSerializer,
    EnrollmentRecordSerializer,
    EnrollmentRequestSerializer,
    EventDraftSerializer,
    EventSerializer,
    EventUpdateSerializer,
    EventWindowSerializer,
    PersonDraftSerializer,
    PersonSerializer,
    RegisteredPersonSerializer,
    RejectionSerializer,
    ValidationFailureSerializer,
)
from civic_events.services.enrollment_service import EnrollmentService
from civic_events.services.event_service import EventService
from civic_events.services.identifiers import parse_event_id
from civic_events.services.person_service import PersonService
from civic_events.stores.django_store import DjangoEventStore, DjangoPersonStore

ERROR_STATUS = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PERSON_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PERSON_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def event_service() -> EventService:
    return EventService(DjangoEventStore(), DjangoPersonStore())


def enrollment_service() -> EnrollmentService:
    return EnrollmentService(DjangoEventStore(), DjangoPersonStore())


def person_service() -> PersonService:
    return PersonService(DjangoPersonStore())


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def rejection_response(rejection: Rejection) -> Response:
    return Response(RejectionSerializer(rejection).data, status=status.HTTP_409_CONFLICT)


def validation_response(failure: ValidationFailure) -> Response:
    return Response(ValidationFailureSerializer(failure).data, status=status.HTTP_400_BAD_REQUEST)


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        params = request.query_params
        window = EventWindowSerializer(
            data={"date_from": params.get("from") or None, "date_to": params.get("to") or None}
        )
        window.is_valid(raise_exception=True)
        today = timezone.localdate()
        if window.is_filtered:
            events = event_service().list_available_events(today, **window.validated_data)
            return Response(EventSerializer(events, many=True, context={"today": today}).data)

        key = available_events_key(today)
        data = cache.get(key)
        if data is None:
            events = event_service().list_available_events(today)
            data = EventSerializer(events, many=True, context={"today": today}).data
            cache.set(key, data, cache_ttl())
        return Response(data)

    def post(self, request: Request) -> Response:
        serializer = EventDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = event_service().create_event(serializer.to_draft())
        except DomainError as error:
            return error_response(error)
        if isinstance(result, ValidationFailure):
            return validation_response(result)
        data = EventSerializer(result, context={"today": timezone.localdate()}).data
        return Response(data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            # Any accepted UUID spelling shares the canonical cache entry.
            event_id = str(parse_event_id(event_id))
        except DomainError as error:
            return error_response(error)
        key = event_detail_key(event_id)
        data = cache.get(key)
        if data is None:
            try:
                event = event_service().get_event(event_id)
            except DomainError as error:
                return error_response(error)
            data = EventSerializer(event, context={"today": timezone.localdate()}).data
            cache.set(key, data, cache_ttl())
        return Response(data)

    def put(self, request: Request, event_id: str) -> Response:
        serializer = EventUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = event_service().update_event(
                event_id, serializer.validated_data["actor_id"], serializer.to_draft()
            )
        except DomainError as error:
            return error_response(error)
        match result:
            case ValidationFailure():
                return validation_response(result)
            case Rejection():
                return rejection_response(result)
        return Response(EventSerializer(result, context={"today": timezone.localdate()}).data)

    def delete(self, request: Request, event_id: str) -> Response:
        serializer = ActorRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            rejection = event_service().delete_event(event_id, serializer.validated_data["actor_id"])
        except DomainError as error:
            return error_response(error)
        if rejection is not None:
            return rejection_response(rejection)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventStatusView(APIView):
    """Handler for POST /api/events/{event_id}/status"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = ActorRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = event_service().advance_status(event_id, serializer.validated_data["actor_id"])
        except DomainError as error:
            return error_response(error)
        if isinstance(result, Rejection):
            return rejection_response(result)
        return Response(EventSerializer(result, context={"today": timezone.localdate()}).data)


class EnrollmentView(APIView):
    """Handler for POST /api/events/{event_id}/enrollments"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = EnrollmentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = enrollment_service().enroll(event_id, serializer.validated_data["person_id"])
        except DomainError as error:
            return error_response(error)
        match result:
            case Enrolled(record=record):
                return Response(EnrollmentRecordSerializer(record).data, status=status.HTTP_201_CREATED)
            case Rejected(rejection=rejection):
                return rejection_response(rejection)


class EligibilityView(APIView):
    """Handler for GET /api/events/{event_id}/eligibility?person_id="""

    def get(self, request: Request, event_id: str) -> Response:
        person_id = request.query_params.get("person_id", "")
        try:
            rejection = enrollment_service().check(event_id, person_id)
        except DomainError as error:
            return error_response(error)
        if rejection is None:
            return Response({"allowed": True, "rejection": None})
        return Response({"allowed": False, "rejection": RejectionSerializer(rejection).data})


class PersonListView(APIView):
    """Handler for GET/POST /api/people"""

    def get(self, request: Request) -> Response:
        people = person_service().search(request.query_params.get("search", ""))
        return Response(PersonSerializer(people, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = PersonDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = person_service().register(serializer.to_draft())
        match result:
            case ValidationFailure():
                return validation_response(result)
            case Rejection():
                return rejection_response(result)
        return Response(RegisteredPersonSerializer(result).data, status=status.HTTP_201_CREATED)


class PersonByNationalIdView(APIView):
    """Handler for GET /api/people/national-id/{national_id}"""

    def get(self, request: Request, national_id: str) -> Response:
        try:
            person = person_service().get_by_national_id(national_id)
        except DomainError as error:
            return error_response(error)
        return Response(PersonSerializer(person).data)


class OrganizerEventListView(APIView):
    """Handler for GET /api/people/{person_id}/events"""

    def get(self, request: Request, person_id: str) -> Response:
        try:
            events = event_service().list_events_for_organizer(person_id)
        except DomainError as error:
            return error_response(error)
        return Response(EventSerializer(events, many=True, context={"today": timezone.localdate()}).data)

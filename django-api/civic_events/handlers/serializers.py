"""Serializers for transforming domain models to API responses and requests to drafts.

Input serializers only check formats (dates, integers, UUIDs, choices).
Business rules such as "a workshop needs an instructor" are left to domain
validation so the caller always receives the first violated rule.
"""

from datetime import date

from rest_framework import serializers

from civic_events.domain import (
    ConcertDetails,
    DeliveryMode,
    Event,
    EventKind,
    ExhibitionDetails,
    FairDetails,
    Film,
    FilmSeriesDetails,
    PersonId,
    WorkshopDetails,
)
from civic_events.domain import capacity, lifecycle
from civic_events.domain.validation import EventDraft, PersonDraft


class PersonSerializer(serializers.Serializer):
    """Serializer for Person domain model."""

    id = serializers.CharField(source="id.value")
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    full_name = serializers.CharField()


class FilmSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True)
    projection_order = serializers.IntegerField()


def _details_data(event: Event) -> dict:
    match event.details:
        case FairDetails(stand_count=stand_count, outdoor=outdoor):
            return {"stand_count": stand_count, "outdoor": outdoor}
        case ConcertDetails(performers=performers, free_entry=free_entry):
            return {"performers": PersonSerializer(performers, many=True).data, "free_entry": free_entry}
        case ExhibitionDetails(art_category=art_category, curator=curator):
            return {"art_category": art_category, "curator": PersonSerializer(curator).data}
        case WorkshopDetails(instructor=instructor, delivery_mode=delivery_mode):
            return {"instructor": PersonSerializer(instructor).data, "delivery_mode": delivery_mode.value}
        case FilmSeriesDetails() as series:
            return {
                "films": FilmSerializer(series.ordered_films(), many=True).data,
                "post_screening_talks": series.post_screening_talks,
            }
    return {}


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model.

    Pass ``context={"today": date}`` to pin the date used for derived fields.
    """

    id = serializers.CharField(source="id.value")
    kind = serializers.CharField(source="kind.value")
    name = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    duration_days = serializers.IntegerField()
    status = serializers.CharField(source="status.value")
    effective_state = serializers.SerializerMethodField()
    organizers = PersonSerializer(many=True)
    capacity = serializers.SerializerMethodField()
    enrollment_count = serializers.IntegerField()
    available_slots = serializers.SerializerMethodField()
    availability = serializers.SerializerMethodField()
    details = serializers.SerializerMethodField()

    def _today(self) -> date | None:
        return self.context.get("today")

    def get_effective_state(self, event: Event) -> str:
        return lifecycle.effective_state(event, self._today()).value

    def get_capacity(self, event: Event) -> int | None:
        return event.capacity.value if event.capacity is not None else None

    def get_available_slots(self, event: Event) -> int | None:
        return capacity.available_slots(event)

    def get_availability(self, event: Event) -> str:
        return capacity.availability_label(event)

    def get_details(self, event: Event) -> dict:
        return _details_data(event)


class EnrollmentRecordSerializer(serializers.Serializer):
    id = serializers.CharField(source="id.value")
    event_id = serializers.CharField(source="event_id.value")
    person = PersonSerializer()
    enrolled_at = serializers.DateTimeField()


class RejectionSerializer(serializers.Serializer):
    code = serializers.CharField(source="code.value")
    message = serializers.CharField()
    ended_on = serializers.DateField(allow_null=True)


class ValidationFailureSerializer(serializers.Serializer):
    field = serializers.CharField()
    code = serializers.CharField(source="code.value")
    message = serializers.CharField()


class EnrollmentRequestSerializer(serializers.Serializer):
    person_id = serializers.CharField()


class ActorRequestSerializer(serializers.Serializer):
    """Identifies the organizer performing a status change, update or deletion."""

    actor_id = serializers.CharField()


class EventWindowSerializer(serializers.Serializer):
    """Optional inclusive start date range (`?from=&to=`) for the available events listing."""

    date_from = serializers.DateField(required=False, allow_null=True, default=None)
    date_to = serializers.DateField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        if attrs["date_from"] and attrs["date_to"] and attrs["date_from"] > attrs["date_to"]:
            raise serializers.ValidationError({"date_to": "Must not be before the start of the range."})
        return attrs

    @property
    def is_filtered(self) -> bool:
        return self.validated_data["date_from"] is not None or self.validated_data["date_to"] is not None


class EventDraftSerializer(serializers.Serializer):
    """Parses the body of an event creation request into an EventDraft."""

    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    start_date = serializers.DateField(required=False, allow_null=True, default=None)
    duration_days = serializers.IntegerField(required=False, allow_null=True, default=None)
    kind = serializers.ChoiceField(
        choices=[kind.value for kind in EventKind], required=False, allow_null=True, default=None
    )
    organizer_ids = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    capacity = serializers.IntegerField(required=False, allow_null=True, default=None)
    stand_count = serializers.IntegerField(required=False, allow_null=True, default=None)
    outdoor = serializers.BooleanField(required=False, default=False)
    performer_ids = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    free_entry = serializers.BooleanField(required=False, default=False)
    art_category = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    curator_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    instructor_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    delivery_mode = serializers.ChoiceField(
        choices=[mode.value for mode in DeliveryMode], required=False, allow_null=True, default=None
    )
    films = FilmSerializer(many=True, required=False, default=list)
    post_screening_talks = serializers.BooleanField(required=False, default=False)

    def to_draft(self) -> EventDraft:
        data = self.validated_data
        kind = data["kind"]
        delivery_mode = data["delivery_mode"]
        curator_id = data["curator_id"]
        instructor_id = data["instructor_id"]
        return EventDraft(
            name=data["name"],
            start_date=data["start_date"],
            duration_days=data["duration_days"],
            kind=EventKind(kind) if kind else None,
            organizer_ids=tuple(PersonId(value) for value in data["organizer_ids"]),
            capacity=data["capacity"],
            stand_count=data["stand_count"],
            outdoor=data["outdoor"],
            performer_ids=tuple(PersonId(value) for value in data["performer_ids"]),
            free_entry=data["free_entry"],
            art_category=data["art_category"],
            curator_id=PersonId(curator_id) if curator_id else None,
            instructor_id=PersonId(instructor_id) if instructor_id else None,
            delivery_mode=DeliveryMode(delivery_mode) if delivery_mode else None,
            films=tuple(
                Film(title=film["title"], projection_order=film["projection_order"]) for film in data["films"]
            ),
            post_screening_talks=data["post_screening_talks"],
        )


class EventUpdateSerializer(EventDraftSerializer):
    """Body of an event update: a full draft plus the acting organizer."""

    actor_id = serializers.CharField()


class PersonDraftSerializer(serializers.Serializer):
    """Parses a registration request into a PersonDraft."""

    first_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    last_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    national_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True, default=None)

    def to_draft(self) -> PersonDraft:
        return PersonDraft(**self.validated_data)


class RegisteredPersonSerializer(PersonSerializer):
    national_id = serializers.CharField()
    phone = serializers.CharField()
    email = serializers.CharField()

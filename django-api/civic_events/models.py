"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Each variant is a multi-table child of Event; ``Event.kind`` names the child
so the store can reach it without probing every table.
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from civic_events.domain.models import DeliveryMode, EventKind, EventStatus

KIND_CHOICES = [(kind.value, kind.value) for kind in EventKind]
STATUS_CHOICES = [(status.value, status.value) for status in EventStatus]
DELIVERY_MODE_CHOICES = [(mode.value, mode.value) for mode in DeliveryMode]


class Person(models.Model):
    """Persistence model for people, whatever role they play."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    national_id = models.CharField(max_length=20, unique=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["last_name", "first_name"]
        verbose_name_plural = "people"

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Event(models.Model):
    """Persistence model for the fields every event variant shares."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, editable=False)
    name = models.CharField(max_length=255)
    start_date = models.DateField()
    duration_days = models.PositiveIntegerField(default=1)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=EventStatus.PLANNED.value)
    max_capacity = models.PositiveIntegerField(blank=True, null=True)
    organizers = models.ManyToManyField(Person, related_name="organized_events")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date", "name"]
        indexes = [
            models.Index(fields=["status", "start_date"], name="event_status_start_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(duration_days__gte=1), name="event_duration_at_least_one_day"),
            models.CheckConstraint(
                condition=Q(max_capacity__isnull=True) | Q(max_capacity__gte=1),
                name="event_capacity_positive",
            ),
            models.CheckConstraint(
                condition=~Q(kind=EventKind.WORKSHOP.value) | Q(max_capacity__isnull=False),
                name="workshop_capacity_required",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Fair(Event):
    stand_count = models.PositiveIntegerField()
    outdoor = models.BooleanField(default=False)

    def save(self, *args, **kwargs):
        self.kind = EventKind.FAIR.value
        super().save(*args, **kwargs)


class Concert(Event):
    performers = models.ManyToManyField(Person, related_name="performances")
    free_entry = models.BooleanField(default=False)

    def save(self, *args, **kwargs):
        self.kind = EventKind.CONCERT.value
        super().save(*args, **kwargs)


class Exhibition(Event):
    art_category = models.CharField(max_length=150)
    curator = models.ForeignKey(Person, on_delete=models.PROTECT, related_name="curated_exhibitions")

    def save(self, *args, **kwargs):
        self.kind = EventKind.EXHIBITION.value
        super().save(*args, **kwargs)


class Workshop(Event):
    instructor = models.ForeignKey(Person, on_delete=models.PROTECT, related_name="taught_workshops")
    delivery_mode = models.CharField(max_length=20, choices=DELIVERY_MODE_CHOICES)

    def clean(self):
        super().clean()
        if self.max_capacity is None:
            raise ValidationError({"max_capacity": "A workshop must declare a capacity."})

    def save(self, *args, **kwargs):
        self.kind = EventKind.WORKSHOP.value
        super().save(*args, **kwargs)


class FilmSeries(Event):
    post_screening_talks = models.BooleanField(default=False)

    class Meta:
        verbose_name_plural = "film series"

    def save(self, *args, **kwargs):
        self.kind = EventKind.FILM_SERIES.value
        super().save(*args, **kwargs)


class Film(models.Model):
    """Persistence model for a film screened in a series."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    series = models.ForeignKey(FilmSeries, on_delete=models.CASCADE, related_name="films")
    title = models.CharField(max_length=255)
    projection_order = models.PositiveIntegerField()

    class Meta:
        ordering = ["projection_order"]
        constraints = [
            models.UniqueConstraint(fields=["series", "projection_order"], name="unique_projection_order_per_series"),
            models.CheckConstraint(condition=Q(projection_order__gte=1), name="film_projection_order_positive"),
        ]

    def __str__(self) -> str:
        return f"{self.projection_order}. {self.title}"


class Participant(models.Model):
    """Persistence model for enrollments."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    person = models.ForeignKey(Person, on_delete=models.CASCADE, related_name="enrollments")
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="participants")
    enrolled_at = models.DateTimeField()

    class Meta:
        ordering = ["enrolled_at"]
        constraints = [
            # Backstop for the engine's duplicate check.
            models.UniqueConstraint(fields=["person", "event"], name="unique_participant_per_event"),
        ]
        indexes = [
            models.Index(fields=["event", "enrolled_at"], name="participant_event_enrolled_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.person} @ {self.event}"


# Multi-table child accessor on Event for each kind.
CHILD_ACCESSORS = {
    EventKind.FAIR: "fair",
    EventKind.CONCERT: "concert",
    EventKind.EXHIBITION: "exhibition",
    EventKind.WORKSHOP: "workshop",
    EventKind.FILM_SERIES: "filmseries",
}

VARIANT_MODELS: dict[EventKind, type[Event]] = {
    EventKind.FAIR: Fair,
    EventKind.CONCERT: Concert,
    EventKind.EXHIBITION: Exhibition,
    EventKind.WORKSHOP: Workshop,
    EventKind.FILM_SERIES: FilmSeries,
}

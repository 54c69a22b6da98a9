import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Person",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("national_id", models.CharField(max_length=20, unique=True)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "people",
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("Fair", "Fair"),
                            ("Concert", "Concert"),
                            ("Exhibition", "Exhibition"),
                            ("Workshop", "Workshop"),
                            ("FilmSeries", "FilmSeries"),
                        ],
                        editable=False,
                        max_length=20,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("start_date", models.DateField()),
                ("duration_days", models.PositiveIntegerField(default=1)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Planned", "Planned"),
                            ("Confirmed", "Confirmed"),
                            ("Running", "Running"),
                            ("Finished", "Finished"),
                        ],
                        default="Planned",
                        max_length=20,
                    ),
                ),
                ("max_capacity", models.PositiveIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "organizers",
                    models.ManyToManyField(related_name="organized_events", to="civic_events.person"),
                ),
            ],
            options={
                "ordering": ["start_date", "name"],
                "indexes": [models.Index(fields=["status", "start_date"], name="event_status_start_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("duration_days__gte", 1)),
                        name="event_duration_at_least_one_day",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("max_capacity__isnull", True), ("max_capacity__gte", 1), _connector="OR"),
                        name="event_capacity_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Fair",
            fields=[
                (
                    "event_ptr",
                    models.OneToOneField(
                        auto_created=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        parent_link=True,
                        primary_key=True,
                        serialize=False,
                        to="civic_events.event",
                    ),
                ),
                ("stand_count", models.PositiveIntegerField()),
                ("outdoor", models.BooleanField(default=False)),
            ],
            bases=("civic_events.event",),
        ),
        migrations.CreateModel(
            name="Concert",
            fields=[
                (
                    "event_ptr",
                    models.OneToOneField(
                        auto_created=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        parent_link=True,
                        primary_key=True,
                        serialize=False,
                        to="civic_events.event",
                    ),
                ),
                ("free_entry", models.BooleanField(default=False)),
                ("performers", models.ManyToManyField(related_name="performances", to="civic_events.person")),
            ],
            bases=("civic_events.event",),
        ),
        migrations.CreateModel(
            name="Exhibition",
            fields=[
                (
                    "event_ptr",
                    models.OneToOneField(
                        auto_created=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        parent_link=True,
                        primary_key=True,
                        serialize=False,
                        to="civic_events.event",
                    ),
                ),
                ("art_category", models.CharField(max_length=150)),
                (
                    "curator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="curated_exhibitions",
                        to="civic_events.person",
                    ),
                ),
            ],
            bases=("civic_events.event",),
        ),
        migrations.CreateModel(
            name="Workshop",
            fields=[
                (
                    "event_ptr",
                    models.OneToOneField(
                        auto_created=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        parent_link=True,
                        primary_key=True,
                        serialize=False,
                        to="civic_events.event",
                    ),
                ),
                (
                    "delivery_mode",
                    models.CharField(choices=[("InPerson", "InPerson"), ("Virtual", "Virtual")], max_length=20),
                ),
                (
                    "instructor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="taught_workshops",
                        to="civic_events.person",
                    ),
                ),
            ],
            bases=("civic_events.event",),
        ),
        migrations.CreateModel(
            name="FilmSeries",
            fields=[
                (
                    "event_ptr",
                    models.OneToOneField(
                        auto_created=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        parent_link=True,
                        primary_key=True,
                        serialize=False,
                        to="civic_events.event",
                    ),
                ),
                ("post_screening_talks", models.BooleanField(default=False)),
            ],
            options={
                "verbose_name_plural": "film series",
            },
            bases=("civic_events.event",),
        ),
        migrations.CreateModel(
            name="Film",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("projection_order", models.PositiveIntegerField()),
                (
                    "series",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="films",
                        to="civic_events.filmseries",
                    ),
                ),
            ],
            options={
                "ordering": ["projection_order"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("series", "projection_order"),
                        name="unique_projection_order_per_series",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("projection_order__gte", 1)),
                        name="film_projection_order_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("enrolled_at", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="participants",
                        to="civic_events.event",
                    ),
                ),
                (
                    "person",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="enrollments",
                        to="civic_events.person",
                    ),
                ),
            ],
            options={
                "ordering": ["enrolled_at"],
                "indexes": [models.Index(fields=["event", "enrolled_at"], name="participant_event_enrolled_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("person", "event"), name="unique_participant_per_event"),
                ],
            },
        ),
    ]

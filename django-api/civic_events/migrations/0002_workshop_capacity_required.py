from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("civic_events", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="event",
            constraint=models.CheckConstraint(
                condition=models.Q(
                    models.Q(("kind", "Workshop"), _negated=True),
                    ("max_capacity__isnull", False),
                    _connector="OR",
                ),
                name="workshop_capacity_required",
            ),
        ),
    ]

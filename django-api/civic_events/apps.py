from django.apps import AppConfig


class CivicEventsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "civic_events"
    verbose_name = "Civic events"

    def ready(self) -> None:
        from civic_events import signals  # noqa: F401

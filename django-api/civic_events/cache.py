"""Cache keys for event read endpoints."""

from datetime import date

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone


def available_events_key(today: date) -> str:
    return f"events:available:{today.isoformat()}"


def event_detail_key(event_id: str) -> str:
    return f"events:{event_id}"


def cache_ttl() -> int:
    return settings.EVENTS_CACHE_TTL


def invalidate_event(event_id: str) -> None:
    cache.delete_many([available_events_key(timezone.localdate()), event_detail_key(event_id)])

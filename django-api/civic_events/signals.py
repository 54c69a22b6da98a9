"""Django signals for cache invalidation.

Variants are multi-table children of Event, so saving a Fair sends the signal
with sender=Fair. Receivers are connected without a sender and filter by
instance type instead.
"""

from django.db.models.signals import m2m_changed, post_delete, post_save
from django.dispatch import receiver

from civic_events.cache import invalidate_event
from civic_events.models import Event, Film, Participant


@receiver([post_save, post_delete])
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event (of any variant) is saved or deleted."""
    if isinstance(instance, Event):
        invalidate_event(str(instance.pk))


@receiver([post_save, post_delete], sender=Film)
def invalidate_film_cache(sender, instance, **kwargs):
    """Invalidate caches when a film of a series is saved or deleted."""
    invalidate_event(str(instance.series_id))


@receiver([post_save, post_delete], sender=Participant)
def invalidate_participant_cache(sender, instance, **kwargs):
    """Invalidate caches when someone enrolls or an enrollment is removed."""
    invalidate_event(str(instance.event_id))


@receiver(m2m_changed, sender=Event.organizers.through)
def invalidate_organizer_cache(sender, instance, **kwargs):
    """Invalidate caches when the organizers of an event change."""
    if isinstance(instance, Event):
        invalidate_event(str(instance.pk))

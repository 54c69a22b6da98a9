"""Capacity tracking for events that declare a maximum number of participants.

Events without a declared capacity are unlimited. Unlimited is reported as
``None`` so it can never be mistaken for zero free slots.
"""

from civic_events.domain.models import Event


def available_slots(event: Event) -> int | None:
    if event.capacity is None:
        return None
    return max(0, event.capacity.value - event.enrollment_count)


def has_availability(event: Event) -> bool:
    slots = available_slots(event)
    return slots is None or slots > 0


def availability_label(event: Event) -> str:
    slots = available_slots(event)
    if slots is None:
        return "Unlimited"
    total = event.capacity.value
    if slots == 0:
        return f"Full ({min(event.enrollment_count, total)}/{total})"
    return f"{slots}/{total} available"

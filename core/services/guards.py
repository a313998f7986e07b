"""Checks that refuse deletes while dependent records still exist."""
from __future__ import annotations

from django.db.models import QuerySet
from django.utils import timezone

from core.exceptions import Conflict
from core.models import Booking


def ensure_no_dependents(queryset: QuerySet, message: str) -> None:
    """Raise :class:`Conflict` (409) if ``queryset`` matches anything."""
    count = queryset.count()
    if count:
        raise Conflict(f"{message} ({count} found)")


def upcoming_bookings(**lookup) -> QuerySet:
    """Non-cancelled bookings dated today or later, narrowed by ``lookup``."""
    return Booking.objects.filter(cancelled=False, date__gte=timezone.localdate(), **lookup)

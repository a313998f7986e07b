"""
Reservation views of the booking book.

Read-only aggregates for the front desk: the bookings falling in a
day, week or month together with the rooms, therapists and services
they can be placed on.  Cancelled bookings are included so the desk
still sees them; nothing here checks for overlapping slots.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta

from django.db.models import Prefetch
from django.utils import timezone

from core.models import Booking, Room, Service, Therapist
from core.services.bookings import serialize_booking
from core.services.people import serialize_therapist
from core.services.rooms import serialize_room
from core.services.spa_services import serialize_service

VIEW_MODES = ('day', 'week', 'month')
QUICK_BOOKING_LIMIT = 10

DEFAULT_HEX = '2196f3'
DEFAULT_TEXT = 'ffffff'


def date_range(target: date, view_mode: str = 'day') -> tuple[date, date]:
    """Inclusive first and last day shown for ``view_mode`` around ``target``.

    Weeks run Sunday to Saturday.
    """
    if view_mode == 'week':
        start = target - timedelta(days=(target.weekday() + 1) % 7)
        return start, start + timedelta(days=6)
    if view_mode == 'month':
        last = calendar.monthrange(target.year, target.month)[1]
        return target.replace(day=1), target.replace(day=last)
    return target, target


def _category(service: Service) -> dict:
    cat = service.category
    color = cat.color
    return {
        'id': cat.id,
        'name': cat.name,
        'hexCode': color.hex_code if color else DEFAULT_HEX,
        'textColor': color.text_color if color else DEFAULT_TEXT,
    }


def serialize_reservation(b: Booking) -> dict:
    data = serialize_booking(b)
    data['category'] = _category(b.service)
    return data


def serialize_quick_booking(s: Service) -> dict:
    return {
        'id': s.id,
        'name': s.name,
        'service': {'id': s.id, 'name': s.name, 'duration': s.duration or 60, 'price': str(s.price)},
        'category': _category(s),
    }


def _bookings(start: date, end: date, *, room_id=None, therapist_id=None, service_id=None):
    qs = Booking.objects.filter(date__range=(start, end)).select_related(
        'service__category__color', 'room', 'guest', 'therapist',
    )
    if room_id:
        qs = qs.filter(room_id=room_id)
    if therapist_id:
        qs = qs.filter(therapist_id=therapist_id)
    if service_id:
        qs = qs.filter(service_id=service_id)
    return [serialize_reservation(b) for b in qs.order_by('date', 'time', 'pk')]


def _rooms(room_id=None) -> list[dict]:
    qs = Room.objects.filter(active=True, deleted=False)
    if room_id:
        qs = qs.filter(pk=room_id)
    return [serialize_room(r) for r in qs.order_by('name', 'pk')]


def _therapists(therapist_id=None) -> list[dict]:
    qs = Therapist.objects.prefetch_related(
        'attributes__attribute',
        Prefetch('services', queryset=Service.objects.filter(deleted=False)),
    )
    if therapist_id:
        qs = qs.filter(pk=therapist_id)
    return [serialize_therapist(t) for t in qs.order_by('first_name', 'pk')]


def _services() -> list[dict]:
    qs = Service.objects.filter(active=True, deleted=False).select_related('category__color', 'currency')
    out = []
    for s in qs.order_by('name', 'pk'):
        data = serialize_service(s)
        data['category'] = _category(s)
        out.append(data)
    return out


def quick_bookings() -> list[dict]:
    qs = Service.objects.filter(active=True, deleted=False, quick_booking=True).select_related('category__color')
    return [serialize_quick_booking(s) for s in qs.order_by('name', 'pk')[:QUICK_BOOKING_LIMIT]]


def _window(query: dict) -> tuple[date, date]:
    return date_range(query.get('date') or timezone.localdate(), query.get('viewMode') or 'day')


def _meta(query: dict, start: date, end: date) -> dict:
    return {
        'viewMode': query.get('viewMode') or 'day',
        'startDate': start.isoformat(),
        'endDate': end.isoformat(),
    }


def overview(query: dict) -> dict:
    start, end = _window(query)
    return {
        **_meta(query, start, end),
        'bookings': _bookings(
            start, end,
            room_id=query.get('roomId'),
            therapist_id=query.get('therapistId'),
            service_id=query.get('serviceId'),
        ),
        'rooms': _rooms(),
        'therapists': _therapists(),
        'services': _services(),
        'quickBookings': quick_bookings(),
    }


def room_overview(query: dict) -> dict:
    start, end = _window(query)
    room_id = query.get('roomId')
    return {
        **_meta(query, start, end),
        'rooms': _rooms(room_id),
        'bookings': _bookings(start, end, room_id=room_id),
    }


def therapist_overview(query: dict) -> dict:
    start, end = _window(query)
    therapist_id = query.get('therapistId')
    return {
        **_meta(query, start, end),
        'therapists': _therapists(therapist_id),
        'bookings': _bookings(start, end, therapist_id=therapist_id),
    }


def calendar_view(query: dict) -> dict:
    start, end = _window(query)
    return {
        **_meta(query, start, end),
        'bookings': _bookings(
            start, end,
            room_id=query.get('roomId'),
            therapist_id=query.get('therapistId'),
            service_id=query.get('serviceId'),
        ),
    }

"""
Booking records.

Bookings are plain CRUD: a create checks that the referenced service
and room are bookable and that guest and therapist exist, and takes
duration, price and buffer times from the service when not given.
Overlap between bookings is not checked here.
"""
from __future__ import annotations

import logging

from django.db import transaction
from rest_framework import serializers

from core.models import Booking, Guest, Room, Service, Therapist, User
from core.services.audit import log_action
from core.services.listing import ListFilter, ListSpec
from core.services.records import apply_fields, get_or_400, get_or_404, iso

logger = logging.getLogger(__name__)

BOOKING_LIST = ListSpec(
    queryset=Booking.objects.select_related('service', 'room', 'guest', 'therapist'),
    search_fields=('comment',),
    sort_fields={
        'id': 'pk',
        'date': 'date',
        'time': 'time',
        'createdAt': 'created_at',
        'price': 'price',
        'duration': 'duration',
    },
    default_sort='date',
    default_order='desc',
    default_limit=20,
    filters=(
        ListFilter('roomId', 'room_id', serializers.IntegerField),
        ListFilter('serviceId', 'service_id', serializers.IntegerField),
        ListFilter('therapistId', 'therapist_id', serializers.IntegerField),
        ListFilter('guestId', 'guest_id', serializers.IntegerField),
        ListFilter('confirmed', 'confirmed', serializers.BooleanField),
        ListFilter('cancelled', 'cancelled', serializers.BooleanField),
        ListFilter('dateFrom', 'date__gte', serializers.DateField),
        ListFilter('dateTo', 'date__lte', serializers.DateField),
    ),
)

BOOKING_FIELDS = {
    'date': 'date',
    'time': 'time',
    'comment': 'comment',
    'duration': 'duration',
    'price': 'price',
    'preDuration': 'pre_duration',
    'postDuration': 'post_duration',
    'confirmed': 'confirmed',
    'cancelled': 'cancelled',
}


def _person(p) -> dict | None:
    if p is None:
        return None
    return {'id': p.id, 'firstName': p.first_name, 'lastName': p.last_name}


def serialize_booking(b: Booking) -> dict:
    return {
        'id': b.id,
        'date': b.date.isoformat(),
        'time': b.time.strftime('%H:%M'),
        'duration': b.duration,
        'price': str(b.price),
        'preDuration': b.pre_duration,
        'postDuration': b.post_duration,
        'comment': b.comment,
        'confirmed': b.confirmed,
        'cancelled': b.cancelled,
        'serviceId': b.service_id,
        'roomId': b.room_id,
        'guestId': b.guest_id,
        'therapistId': b.therapist_id,
        'service': {'id': b.service.id, 'name': b.service.name, 'duration': b.service.duration, 'price': str(b.service.price)},
        'room': {'id': b.room.id, 'name': b.room.name},
        'guest': _person(b.guest),
        'therapist': _person(b.therapist),
        'createdAt': iso(b.created_at),
        'updatedAt': iso(b.updated_at),
    }


def serialize_booking_brief(b: Booking) -> dict:
    """Compact form embedded in room, guest and dashboard payloads."""
    return {
        'id': b.id,
        'date': b.date.isoformat(),
        'time': b.time.strftime('%H:%M'),
        'duration': b.duration,
        'service': {'id': b.service_id, 'name': b.service.name},
        'room': {'id': b.room_id, 'name': b.room.name},
        'guest': _person(b.guest),
        'therapist': _person(b.therapist),
    }


def get_booking(pk: int) -> Booking:
    return get_or_404(BOOKING_LIST.queryset, 'Booking not found', pk=pk)


def _bookable_service(pk: int) -> Service:
    return get_or_400(Service.objects.filter(active=True, deleted=False), 'serviceId', 'Service not found or inactive', pk=pk)


def _bookable_room(pk: int) -> Room:
    return get_or_400(Room.objects.filter(active=True, deleted=False), 'roomId', 'Room not found or inactive', pk=pk)


def create_booking(data: dict) -> Booking:
    service = _bookable_service(data['serviceId'])
    room = _bookable_room(data['roomId'])
    guest = get_or_400(Guest, 'guestId', 'Guest not found', pk=data['guestId'])
    therapist = None
    if data.get('therapistId'):
        therapist = get_or_400(Therapist, 'therapistId', 'Therapist not found', pk=data['therapistId'])

    booking = Booking(
        service=service,
        room=room,
        guest=guest,
        therapist=therapist,
        duration=service.duration,
        price=service.price,
        pre_duration=service.pre_duration,
        post_duration=service.post_duration,
    )
    apply_fields(booking, data, BOOKING_FIELDS)
    booking.save()
    logger.info("booking %s created for %s at %s %s", booking.pk, guest, booking.date, booking.time)
    return get_booking(booking.pk)


def update_booking(pk: int, data: dict) -> Booking:
    booking = get_booking(pk)
    with transaction.atomic():
        if 'serviceId' in data and data['serviceId'] != booking.service_id:
            booking.service = _bookable_service(data['serviceId'])
        if 'roomId' in data and data['roomId'] != booking.room_id:
            booking.room = _bookable_room(data['roomId'])
        if 'guestId' in data:
            booking.guest = get_or_400(Guest, 'guestId', 'Guest not found', pk=data['guestId'])
        if 'therapistId' in data:
            tid = data['therapistId']
            booking.therapist = get_or_400(Therapist, 'therapistId', 'Therapist not found', pk=tid) if tid else None
        apply_fields(booking, data, BOOKING_FIELDS)
        booking.save()
    return get_booking(pk)


def delete_booking(actor: User, pk: int) -> None:
    booking = get_booking(pk)
    booking.delete()
    log_action(user=actor, action='delete', object_type='booking', object_id=pk,
               detail={'date': booking.date.isoformat(), 'roomId': booking.room_id})

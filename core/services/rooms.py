"""Treatment rooms and the services each room can host."""
from __future__ import annotations

import logging

from django.db.models import Count, Q
from rest_framework import serializers
from rest_framework.exceptions import NotFound, ValidationError

from core.models import Room, Service, User
from core.services.audit import log_action
from core.services.bookings import serialize_booking_brief
from core.services.guards import ensure_no_dependents, upcoming_bookings
from core.services.listing import ListFilter, ListSpec
from core.services.records import apply_fields, get_or_404, iso

logger = logging.getLogger(__name__)

ROOM_LIST = ListSpec(
    queryset=Room.objects.filter(deleted=False).annotate(
        service_count=Count('services', filter=Q(services__deleted=False), distinct=True),
    ),
    search_fields=('name', 'description'),
    sort_fields={
        'id': 'pk',
        'name': 'name',
        'priority': 'priority',
        'active': 'active',
        'createdAt': 'created_at',
    },
    default_sort='name',
    default_limit=20,
    filters=(
        ListFilter('active', 'active', serializers.BooleanField),
        ListFilter('serviceId', 'services__id', serializers.IntegerField),
    ),
)

ROOM_FIELDS = {'name': 'name', 'description': 'description', 'priority': 'priority', 'active': 'active'}


def serialize_room(room: Room, *, detail: bool = False) -> dict:
    data = {
        'id': room.id,
        'name': room.name,
        'description': room.description,
        'priority': room.priority,
        'active': room.active,
        'createdAt': iso(room.created_at),
        'updatedAt': iso(room.updated_at),
    }
    if hasattr(room, 'service_count'):
        data['serviceCount'] = room.service_count
    if detail:
        data['services'] = [
            {
                'id': s.id,
                'name': s.name,
                'duration': s.duration,
                'price': str(s.price),
                'category': {'id': s.category_id, 'name': s.category.name},
            }
            for s in room.services.filter(deleted=False).select_related('category').order_by('name', 'pk')
        ]
        bookings = upcoming_bookings(room=room).select_related('service', 'room', 'guest', 'therapist')
        data['upcomingBookings'] = [serialize_booking_brief(b) for b in bookings.order_by('date', 'time', 'pk')]
    return data


def get_room(pk: int) -> Room:
    return get_or_404(Room.objects.filter(deleted=False), 'Room not found', pk=pk)


def _check_name(name: str, exclude_pk=None) -> None:
    qs = Room.objects.filter(name=name, deleted=False)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError({'name': ['Room with this name already exists']})


def create_room(data: dict) -> Room:
    _check_name(data['name'])
    room = apply_fields(Room(), data, ROOM_FIELDS)
    room.save()
    logger.info("room %s created", room.pk)
    return room


def update_room(pk: int, data: dict) -> Room:
    room = get_room(pk)
    if 'name' in data:
        _check_name(data['name'], exclude_pk=pk)
    apply_fields(room, data, ROOM_FIELDS)
    room.save()
    return room


def delete_room(actor: User, pk: int) -> None:
    """Soft delete; refused while the room has upcoming bookings."""
    room = get_room(pk)
    ensure_no_dependents(upcoming_bookings(room=room), 'Cannot delete room with active bookings')
    room.deleted = True
    room.save(update_fields=['deleted', 'updated_at'])
    log_action(user=actor, action='delete', object_type='room', object_id=pk, detail={'name': room.name})
    logger.info("room %s soft-deleted by %s", pk, actor.username)


def add_service(pk: int, service_id: int) -> None:
    room = get_room(pk)
    service = get_or_404(Service.objects.filter(deleted=False), 'Service not found', pk=service_id)
    if room.services.filter(pk=service.pk).exists():
        raise ValidationError({'serviceId': ['Service already assigned to this room']})
    room.services.add(service)


def remove_service(pk: int, service_id: int) -> None:
    room = get_room(pk)
    if not room.services.filter(pk=service_id).exists():
        raise NotFound('Service not assigned to this room')
    room.services.remove(service_id)

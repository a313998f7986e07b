"""
Guests and therapists.

Both carry a derived ``first_letter`` used by the front-end's alphabet
index, plus free-form attribute values keyed by :class:`Attribute`.
Attribute values are replaced wholesale whenever ``attributes`` is sent.
They are hard-deleted; past bookings keep their history with the
reference cleared.
"""
from __future__ import annotations

import logging
import os

from django.db import transaction
from django.db.models import Count
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from core.models import Attribute, Guest, GuestAttribute, Service, Therapist, TherapistAttribute, User
from core.services.audit import log_action
from core.services.bookings import serialize_booking_brief
from core.services.guards import ensure_no_dependents, upcoming_bookings
from core.services.listing import ListFilter, ListSpec
from core.services.records import apply_fields, get_or_404, iso

logger = logging.getLogger(__name__)

_PERSON_SORT = {
    'id': 'pk',
    'firstName': 'first_name',
    'lastName': 'last_name',
    'firstLetter': 'first_letter',
    'createdAt': 'created_at',
}

GUEST_LIST = ListSpec(
    queryset=Guest.objects.prefetch_related('attributes__attribute').annotate(booking_count=Count('bookings', distinct=True)),
    search_fields=('first_name', 'last_name'),
    sort_fields=_PERSON_SORT,
    default_sort='lastName',
    default_limit=20,
)

THERAPIST_LIST = ListSpec(
    queryset=Therapist.objects.prefetch_related('attributes__attribute', 'services').annotate(
        booking_count=Count('bookings', distinct=True),
    ),
    search_fields=('first_name', 'last_name'),
    sort_fields={**_PERSON_SORT, 'priority': 'priority'},
    default_sort='lastName',
    default_limit=20,
    filters=(ListFilter('serviceId', 'services__id', serializers.IntegerField),),
)

PERSON_FIELDS = {'firstName': 'first_name', 'lastName': 'last_name'}


def first_letter(first_name: str | None, last_name: str | None) -> str:
    """Uppercase initial of the last name, else of the first name."""
    for name in (last_name, first_name):
        if name:
            # 'ß'.upper() is 'SS'
            return name[0].upper()[:1]
    return ''


def _attributes(person) -> list[dict]:
    return [
        {'attributeId': a.attribute_id, 'name': a.attribute.name, 'type': a.attribute.type, 'value': a.value}
        for a in person.attributes.all()
    ]


def _serialize_person(p) -> dict:
    data = {
        'id': p.id,
        'firstName': p.first_name,
        'lastName': p.last_name,
        'firstLetter': p.first_letter,
        'attributes': _attributes(p),
        'createdAt': iso(p.created_at),
        'updatedAt': iso(p.updated_at),
    }
    if hasattr(p, 'booking_count'):
        data['bookingCount'] = p.booking_count
    return data


def serialize_guest(guest: Guest, *, detail: bool = False) -> dict:
    data = _serialize_person(guest)
    if detail:
        bookings = guest.bookings.filter(cancelled=False).select_related('service', 'room', 'guest', 'therapist')
        data['bookings'] = [serialize_booking_brief(b) for b in bookings.order_by('-date', '-time', '-pk')]
    return data


def serialize_therapist(therapist: Therapist, *, detail: bool = False) -> dict:
    data = _serialize_person(therapist)
    data['priority'] = therapist.priority
    data['avatarUrl'] = therapist.avatar.url if therapist.avatar else None
    data['services'] = [{'id': s.id, 'name': s.name} for s in therapist.services.all() if not s.deleted]
    if detail:
        bookings = upcoming_bookings(therapist=therapist).select_related('service', 'room', 'guest', 'therapist')
        data['upcomingBookings'] = [serialize_booking_brief(b) for b in bookings.order_by('date', 'time', 'pk')]
    return data


def _replace_attributes(person, values: list[dict], model) -> None:
    ids = {v['attributeId'] for v in values}
    known = set(Attribute.objects.filter(id__in=ids).values_list('id', flat=True))
    missing = ids - known
    if missing:
        raise ValidationError({'attributes': [f"Unknown attribute id(s): {', '.join(map(str, sorted(missing)))}"]})
    person.attributes.all().delete()
    # Last value wins when an attribute is sent twice
    latest = {v['attributeId']: v.get('value') for v in values}
    owner = 'guest' if model is GuestAttribute else 'therapist'
    model.objects.bulk_create([model(**{owner: person}, attribute_id=a, value=v) for a, v in latest.items()])


def _save_person(person, data: dict, attribute_model) -> None:
    apply_fields(person, data, PERSON_FIELDS)
    person.first_letter = first_letter(person.first_name, person.last_name)
    person.save()
    if 'attributes' in data:
        _replace_attributes(person, data['attributes'], attribute_model)


# ---------------------------------------------------------------------
# Guests
# ---------------------------------------------------------------------
def get_guest(pk: int) -> Guest:
    return get_or_404(GUEST_LIST.queryset, 'Guest not found', pk=pk)


def create_guest(data: dict) -> Guest:
    guest = Guest()
    with transaction.atomic():
        _save_person(guest, data, GuestAttribute)
    logger.info("guest %s created", guest.pk)
    return get_guest(guest.pk)


def update_guest(pk: int, data: dict) -> Guest:
    guest = get_guest(pk)
    with transaction.atomic():
        _save_person(guest, data, GuestAttribute)
    return get_guest(pk)


def delete_guest(actor: User, pk: int) -> None:
    guest = get_guest(pk)
    ensure_no_dependents(upcoming_bookings(guest=guest), 'Cannot delete guest with active bookings')
    guest.delete()
    log_action(user=actor, action='delete', object_type='guest', object_id=pk, detail={'name': str(guest)})


# ---------------------------------------------------------------------
# Therapists
# ---------------------------------------------------------------------
def get_therapist(pk: int) -> Therapist:
    return get_or_404(THERAPIST_LIST.queryset, 'Therapist not found', pk=pk)


def _services(ids: list[int]) -> list[Service]:
    services = list(Service.objects.filter(id__in=set(ids), deleted=False))
    missing = set(ids) - {s.id for s in services}
    if missing:
        raise ValidationError({'serviceIds': [f"Unknown service id(s): {', '.join(map(str, sorted(missing)))}"]})
    return services


def _save_therapist(therapist: Therapist, data: dict) -> None:
    services = _services(data['serviceIds']) if 'serviceIds' in data else None
    if 'priority' in data:
        therapist.priority = data['priority']
    with transaction.atomic():
        _save_person(therapist, data, TherapistAttribute)
        if services is not None:
            therapist.services.set(services)


def create_therapist(data: dict) -> Therapist:
    therapist = Therapist()
    _save_therapist(therapist, data)
    logger.info("therapist %s created", therapist.pk)
    return get_therapist(therapist.pk)


def update_therapist(pk: int, data: dict) -> Therapist:
    therapist = get_therapist(pk)
    _save_therapist(therapist, data)
    return get_therapist(pk)


def delete_therapist(actor: User, pk: int) -> None:
    therapist = get_therapist(pk)
    ensure_no_dependents(upcoming_bookings(therapist=therapist), 'Cannot delete therapist with active bookings')
    therapist.delete()
    log_action(user=actor, action='delete', object_type='therapist', object_id=pk, detail={'name': str(therapist)})


def set_therapist_avatar(actor: User, pk: int, upload) -> Therapist:
    therapist = get_therapist(pk)
    ext = os.path.splitext(upload.name)[1].lower()
    if therapist.avatar:
        therapist.avatar.delete(save=False)
    therapist.avatar.save(f"{therapist.pk}{ext}", upload, save=True)
    logger.info("therapist %s avatar stored at %s", pk, therapist.avatar.name)
    log_action(user=actor, action='avatar', object_type='therapist', object_id=pk,
               detail={'file': therapist.avatar.name})
    return therapist


def remove_therapist_avatar(actor: User, pk: int) -> None:
    therapist = get_therapist(pk)
    if therapist.avatar:
        therapist.avatar.delete(save=True)
        log_action(user=actor, action='avatar_remove', object_type='therapist', object_id=pk)

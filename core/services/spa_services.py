"""Bookable spa services (treatments)."""
from __future__ import annotations

import logging

from rest_framework import serializers

from core.models import Category, Currency, Service, User
from core.services.audit import log_action
from core.services.guards import ensure_no_dependents, upcoming_bookings
from core.services.listing import ListFilter, ListSpec
from core.services.records import apply_fields, get_or_400, get_or_404, iso

logger = logging.getLogger(__name__)

SERVICE_LIST = ListSpec(
    queryset=Service.objects.filter(deleted=False).select_related('category', 'currency'),
    search_fields=('name', 'description'),
    sort_fields={
        'id': 'pk',
        'name': 'name',
        'price': 'price',
        'duration': 'duration',
        'category': 'category__name',
        'active': 'active',
        'createdAt': 'created_at',
    },
    default_sort='name',
    default_limit=20,
    filters=(
        ListFilter('categoryId', 'category_id', serializers.IntegerField),
        ListFilter('currencyId', 'currency_id', serializers.IntegerField),
        ListFilter('active', 'active', serializers.BooleanField),
        ListFilter('quickBooking', 'quick_booking', serializers.BooleanField),
    ),
)

SERVICE_FIELDS = {
    'name': 'name',
    'description': 'description',
    'price': 'price',
    'duration': 'duration',
    'preDuration': 'pre_duration',
    'postDuration': 'post_duration',
    'space': 'space',
    'therapistType': 'therapist_type',
    'roomType': 'room_type',
    'active': 'active',
    'variableTime': 'variable_time',
    'variablePrice': 'variable_price',
    'minimalTime': 'minimal_time',
    'maximalTime': 'maximal_time',
    'timeUnit': 'time_unit',
    'quickBooking': 'quick_booking',
}


def serialize_service(s: Service, *, detail: bool = False) -> dict:
    data = {'id': s.id}
    for public, attr in SERVICE_FIELDS.items():
        data[public] = getattr(s, attr)
    data['price'] = str(s.price)
    data.update({
        'categoryId': s.category_id,
        'currencyId': s.currency_id,
        'category': {'id': s.category.id, 'name': s.category.name},
        'currency': {'id': s.currency.id, 'code': s.currency.code, 'symbol': s.currency.symbol},
        'createdAt': iso(s.created_at),
        'updatedAt': iso(s.updated_at),
    })
    if detail:
        data['rooms'] = [{'id': r.id, 'name': r.name} for r in s.rooms.filter(deleted=False).order_by('name', 'pk')]
        data['therapists'] = [
            {'id': t.id, 'firstName': t.first_name, 'lastName': t.last_name}
            for t in s.therapists.order_by('last_name', 'pk')
        ]
    return data


def get_service(pk: int) -> Service:
    return get_or_404(SERVICE_LIST.queryset, 'Service not found', pk=pk)


def _apply(service: Service, data: dict) -> None:
    if 'categoryId' in data:
        service.category = get_or_400(Category, 'categoryId', 'Category not found', pk=data['categoryId'])
    if 'currencyId' in data:
        service.currency = get_or_400(Currency, 'currencyId', 'Currency not found', pk=data['currencyId'])
    apply_fields(service, data, SERVICE_FIELDS)


def create_service(data: dict) -> Service:
    service = Service()
    _apply(service, data)
    service.save()
    logger.info("service %s created", service.pk)
    return get_service(service.pk)


def update_service(pk: int, data: dict) -> Service:
    service = get_service(pk)
    _apply(service, data)
    service.save()
    return get_service(pk)


def delete_service(actor: User, pk: int) -> None:
    """Soft delete; refused while the service has upcoming bookings."""
    service = get_service(pk)
    ensure_no_dependents(upcoming_bookings(service=service), 'Cannot delete service with active bookings')
    service.deleted = True
    service.save(update_fields=['deleted', 'updated_at'])
    log_action(user=actor, action='delete', object_type='service', object_id=pk, detail={'name': service.name})
    logger.info("service %s soft-deleted by %s", pk, actor.username)

"""
Configuration and opening-hours endpoints.

Any authenticated account may read; changes need the ``admin`` role.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core.permissions import IsAdminOrReadOnly
from core.serializers.admin import (
    ConfigBulkSerializer,
    ConfigItemSerializer,
    ConfigValueSerializer,
    DateRangeSerializer,
    OpeningHoursSerializer,
)
from core.services import config as svc
from .responses import done, ok


@api_view(['GET', 'PUT', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def config_collection(request):
    if request.method == 'GET':
        grouped = request.query_params.get('grouped', '').lower() in {'1', 'true', 'yes'}
        return ok(svc.config_grouped() if grouped else svc.config_flat())
    if request.method == 'PUT':
        s = ConfigBulkSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        svc.upsert_config(s.validated_data)
        return done('Configuration updated successfully')
    # POST
    s = ConfigItemSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.serialize_config(svc.create_config_item(s.validated_data)), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def config_item(request, name: str):
    if request.method == 'GET':
        return ok(svc.serialize_config(svc.get_config_item(name)))
    if request.method == 'PUT':
        s = ConfigValueSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(svc.serialize_config(svc.update_config_item(name, s.validated_data)))
    svc.delete_config_item(request.user, name)
    return done('Configuration deleted successfully')


@api_view(['GET', 'PUT'])
@permission_classes([IsAdminOrReadOnly])
def opening_hours(request):
    if request.method == 'GET':
        return ok(svc.opening_hours())
    s = OpeningHoursSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.replace_opening_hours(s.validated_data['days']))


@api_view(['GET'])
@permission_classes([IsAdminOrReadOnly])
def opening_hours_dates(request):
    s = DateRangeSerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return ok(svc.opening_hours_dates(s.validated_data.get('startDate'), s.validated_data.get('endDate')))

from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core.permissions import IsAdminOrReadOnly
from core.serializers.catalog import ServiceSerializer
from core.services import spa_services as svc
from .responses import done, ok, ok_list, validated


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def services(request):
    if request.method == 'GET':
        return ok_list(svc.SERVICE_LIST, request, svc.serialize_service)
    service = svc.create_service(validated(ServiceSerializer, request))
    return ok(svc.serialize_service(service), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def service_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_service(svc.get_service(pk), detail=True))
    if request.method == 'PUT':
        service = svc.update_service(pk, validated(ServiceSerializer, request, partial=True))
        return ok(svc.serialize_service(service))
    svc.delete_service(request.user, pk)
    return done('Service deleted successfully')

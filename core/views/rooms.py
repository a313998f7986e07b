from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core.permissions import IsAdminOrReadOnly
from core.serializers.catalog import RoomSerializer, RoomServiceLinkSerializer
from core.services import rooms as svc
from .responses import done, ok, ok_list, validated


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def rooms(request):
    if request.method == 'GET':
        return ok_list(svc.ROOM_LIST, request, svc.serialize_room)
    room = svc.create_room(validated(RoomSerializer, request))
    return ok(svc.serialize_room(room), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def room_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_room(svc.get_room(pk), detail=True))
    if request.method == 'PUT':
        room = svc.update_room(pk, validated(RoomSerializer, request, partial=True))
        return ok(svc.serialize_room(room))
    svc.delete_room(request.user, pk)
    return done('Room deleted successfully')


@api_view(['POST'])
@permission_classes([IsAdminOrReadOnly])
def room_services(request, pk: int):
    data = validated(RoomServiceLinkSerializer, request)
    svc.add_service(pk, data['serviceId'])
    return done('Service added to room successfully')


@api_view(['DELETE'])
@permission_classes([IsAdminOrReadOnly])
def room_service_detail(request, pk: int, service_id: int):
    svc.remove_service(pk, service_id)
    return done('Service removed from room successfully')

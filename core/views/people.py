"""
Guest and therapist endpoints.

Guests may be maintained by any authenticated account; therapist
changes need the ``admin`` role.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsAdminOrReadOnly
from core.serializers.people import AvatarSerializer, GuestSerializer, TherapistSerializer
from core.services import people as svc
from .responses import done, ok, ok_list, validated


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def guests(request):
    if request.method == 'GET':
        return ok_list(svc.GUEST_LIST, request, svc.serialize_guest)
    guest = svc.create_guest(validated(GuestSerializer, request))
    return ok(svc.serialize_guest(guest), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def guest_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_guest(svc.get_guest(pk), detail=True))
    if request.method == 'PUT':
        guest = svc.update_guest(pk, validated(GuestSerializer, request, partial=True))
        return ok(svc.serialize_guest(guest))
    svc.delete_guest(request.user, pk)
    return done('Guest deleted successfully')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def therapists(request):
    if request.method == 'GET':
        return ok_list(svc.THERAPIST_LIST, request, svc.serialize_therapist)
    therapist = svc.create_therapist(validated(TherapistSerializer, request))
    return ok(svc.serialize_therapist(therapist), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def therapist_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_therapist(svc.get_therapist(pk), detail=True))
    if request.method == 'PUT':
        therapist = svc.update_therapist(pk, validated(TherapistSerializer, request, partial=True))
        return ok(svc.serialize_therapist(therapist))
    svc.delete_therapist(request.user, pk)
    return done('Therapist deleted successfully')


@api_view(['POST', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def therapist_avatar(request, pk: int):
    if request.method == 'DELETE':
        svc.remove_therapist_avatar(request.user, pk)
        return done('Avatar removed')
    upload = validated(AvatarSerializer, request)['avatar']
    therapist = svc.set_therapist_avatar(request.user, pk, upload)
    return ok({'avatarUrl': therapist.avatar.url})

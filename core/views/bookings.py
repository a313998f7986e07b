from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.serializers.bookings import BookingSerializer
from core.services import bookings as svc
from .responses import done, ok, ok_list, validated


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def bookings(request):
    if request.method == 'GET':
        return ok_list(svc.BOOKING_LIST, request, svc.serialize_booking)
    booking = svc.create_booking(validated(BookingSerializer, request))
    return ok(svc.serialize_booking(booking), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def booking_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_booking(svc.get_booking(pk)))
    if request.method == 'PUT':
        booking = svc.update_booking(pk, validated(BookingSerializer, request, partial=True))
        return ok(svc.serialize_booking(booking))
    svc.delete_booking(request.user, pk)
    return done('Booking deleted successfully')

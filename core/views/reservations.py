"""Front-desk reservation overviews; read-only for any signed-in account."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.serializers.bookings import ReservationQuerySerializer
from core.services import reservations as svc
from .responses import ok


def _query(request) -> dict:
    s = ReservationQuerySerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    return s.validated_data


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def overview(request):
    return ok(svc.overview(_query(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quick_booking(request):
    return ok(svc.quick_bookings())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def rooms(request):
    return ok(svc.room_overview(_query(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def therapists(request):
    return ok(svc.therapist_overview(_query(request)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def calendar(request):
    return ok(svc.calendar_view(_query(request)))

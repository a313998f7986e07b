from django.utils import timezone

from core.models import Booking, Guest, Room, Service, Therapist
from core.services.bookings import serialize_booking_brief

RECENT_BOOKINGS = 10


def dashboard_summary() -> dict:
    today = timezone.localdate()
    active = Booking.objects.filter(cancelled=False)
    recent = active.select_related('service', 'room', 'guest', 'therapist').order_by('-created_at', '-pk')[:RECENT_BOOKINGS]
    return {
        'todayBookings': active.filter(date=today).count(),
        'totalActiveBookings': active.filter(date__gte=today).count(),
        'totalGuests': Guest.objects.count(),
        'totalTherapists': Therapist.objects.count(),
        'totalRooms': Room.objects.filter(deleted=False).count(),
        'totalServices': Service.objects.filter(deleted=False).count(),
        'recentBookings': [serialize_booking_brief(b) for b in recent],
    }

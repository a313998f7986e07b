from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.services.dashboard import dashboard_summary
from .responses import ok


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def admin_dashboard(request):
    """Counters and the latest bookings for the admin landing page."""
    return ok(dashboard_summary())

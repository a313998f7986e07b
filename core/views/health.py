import logging

from django.db import DatabaseError, connections
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
@throttle_classes([])
def health(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        logger.error("health check failed: %s", e)
        return Response({'success': False, 'error': {'code': 'db_unavailable', 'message': 'Database unavailable'}}, status=503)
    return Response({'success': True, 'data': {'status': 'ok', 'db': bool(row and row[0] == 1)}})

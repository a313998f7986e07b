import logging

from django.conf import settings
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class Conflict(APIException):
    """The operation would leave dependent records dangling."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Operation conflicts with existing records.'
    default_code = 'conflict'


def _message(data):
    """Flatten DRF error data into a single readable message."""
    if isinstance(data, dict):
        if 'detail' in data:
            return _message(data['detail'])
        parts = []
        for field, value in data.items():
            text = _message(value)
            parts.append(text if field == 'non_field_errors' else f"{field}: {text}")
        return '; '.join(parts)
    if isinstance(data, (list, tuple)):
        return ' '.join(_message(v) for v in data)
    return str(data)


def _code(exc) -> str:
    codes = getattr(exc, 'get_codes', None)
    if codes is not None:
        c = codes()
        if isinstance(c, str):
            return c
    return getattr(exc, 'default_code', None) or 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        if isinstance(exc, IntegrityError):
            logger.warning("integrity error in %s: %s", context.get('view'), exc)
            return Response(
                {'success': False, 'error': {'code': 'invalid', 'message': 'Record violates a uniqueness or reference constraint.'}},
                status=status.HTTP_400_BAD_REQUEST,
            )
        logger.exception("unhandled error in %s", context.get('view'), exc_info=exc)
        message = str(exc) if settings.DEBUG else 'Internal server error'
        return Response({'success': False, 'error': {'code': 'server_error', 'message': message}}, status=500)
    body = {'code': _code(exc), 'message': _message(resp.data)}
    if isinstance(resp.data, dict) and 'detail' not in resp.data:
        # Field errors keep their structure alongside the flat message
        body['fields'] = resp.data
    out = Response({'success': False, 'error': body}, status=resp.status_code)
    for header in ('WWW-Authenticate', 'Retry-After', 'Allow'):
        if header in resp:
            out[header] = resp[header]
    return out

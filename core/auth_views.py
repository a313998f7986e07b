"""
Authentication views.

Login exchanges a login ID and password for a JWT access/refresh pair.
Keeping these views apart from the authentication class (see
``core.authentication``) prevents circular imports when Django REST
framework initialises authentication classes.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from core.serializers.auth import LoginSerializer, LogoutSerializer
from core.services.audit import log_action
from core.views.responses import ok

from .models import User

logger = logging.getLogger(__name__)


def client_ip(request) -> str:
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '')


def serialize_account(user: User) -> dict:
    return {
        'id': user.id,
        'loginId': user.username,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'status': user.status,
        'roles': [r.name for r in user.roles.all()],
    }


# ---------------------------------------------------------------------
# Login ID / password login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    login_id = s.validated_data['loginId']
    ip = client_ip(request)

    user = authenticate(request, username=login_id, password=s.validated_data['password'])
    if user is None:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'loginId': login_id, 'ip': ip})
        logger.info("failed login for %s from %s", login_id, ip)
        raise AuthenticationFailed('Invalid credentials')

    if user.status == User.STATUS_LOCKED:
        log_action(user=user, action='login', object_type='user', object_id=user.id,
                   detail={'result': 'locked', 'ip': ip})
        logger.info("locked account %s refused from %s", login_id, ip)
        raise AuthenticationFailed('Account is locked', code='account_locked')

    user.last_login = timezone.now()
    user.last_login_from = ip[:64]
    user.save(update_fields=['last_login', 'last_login_from'])
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})
    logger.info("login %s from %s", login_id, ip)

    refresh = RefreshToken.for_user(user)
    return ok({
        'token': str(refresh.access_token),
        'refresh': str(refresh),
        'user': serialize_account(user),
    })

# ScopedRateThrottle reads throttle_scope from the wrapped APIView class
login_view.cls.throttle_scope = 'login'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    return ok(serialize_account(request.user))


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token for a valid refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0]) from e
    data = {'token': s.validated_data['access']}
    if 'refresh' in s.validated_data:
        data['refresh'] = s.validated_data['refresh']
    return ok(data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token, or all of the caller's tokens."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    count = 0
    if refresh:
        try:
            token = RefreshToken(refresh)
        except TokenError as e:
            raise ValidationError({'refresh': [str(e)]}) from e
        if str(token.get('user_id')) != str(request.user.pk):
            raise ValidationError({'refresh': ['Token does not belong to the current user']})
        token.blacklist()
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    logger.info("logout %s (%d token(s) revoked)", request.user.username, count)
    return ok({'blacklisted': count})

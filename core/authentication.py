"""
Bearer-token authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication`` that
additionally rejects tokens belonging to locked accounts.  Keeping it
apart from the views avoids circular imports when the REST framework
imports authentication classes during initialisation.
"""
from __future__ import annotations

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt import authentication


class JWTAuthentication(authentication.JWTAuthentication):
    """``Authorization: Bearer <access>`` authentication.

    An account locked after its token was issued must not keep access
    until the token expires, so the status is checked on every request.
    """

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if getattr(user, 'status', None) == 'LOCKED':
            raise AuthenticationFailed('Account is locked', code='account_locked')
        return user

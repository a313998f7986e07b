"""
Account, role and access-right administration.

Account endpoints are restricted to the ``admin`` role even for reads;
roles and rights are readable by any authenticated account.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core.permissions import IsAdminOrReadOnly, IsAdminRole
from core.serializers.admin import AccessRightSerializer, RoleSerializer, UserSerializer
from core.services import accounts as svc
from .responses import done, ok, ok_list


@api_view(['GET', 'POST'])
@permission_classes([IsAdminRole])
def users(request):
    if request.method == 'GET':
        return ok_list(svc.USER_LIST, request, svc.serialize_user)
    s = UserSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.serialize_user(svc.create_user(s.validated_data)), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminRole])
def user_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_user(svc.get_user(pk)))
    if request.method == 'PUT':
        s = UserSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(svc.serialize_user(svc.update_user(pk, s.validated_data)))
    svc.delete_user(request.user, pk)
    return done('User deleted successfully')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def roles(request):
    if request.method == 'GET':
        return ok_list(svc.ROLE_LIST, request, svc.serialize_role)
    s = RoleSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.serialize_role(svc.create_role(s.validated_data)), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def role_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_role(svc.get_role(pk)))
    if request.method == 'PUT':
        s = RoleSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(svc.serialize_role(svc.update_role(pk, s.validated_data)))
    svc.delete_role(request.user, pk)
    return done('Role deleted successfully')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def rights(request):
    if request.method == 'GET':
        return ok_list(svc.RIGHT_LIST, request, svc.serialize_right)
    s = AccessRightSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return ok(svc.serialize_right(svc.create_right(s.validated_data)), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def right_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_right(svc.get_right(pk)))
    if request.method == 'PUT':
        s = AccessRightSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(svc.serialize_right(svc.update_right(pk, s.validated_data)))
    svc.delete_right(request.user, pk)
    return done('Access right deleted successfully')

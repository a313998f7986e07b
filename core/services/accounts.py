"""
Accounts, roles and access rights.

Accounts are exposed with ``loginId`` for the username; role membership
is replaced wholesale whenever ``roleIds`` is supplied.  Roles hold a set
of access rights the same way through ``rightIds``.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Count
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from core.models import AccessRight, Role, User
from core.services.audit import log_action
from core.services.guards import ensure_no_dependents
from core.services.listing import ListFilter, ListSpec
from core.services.records import apply_fields, get_or_404, iso, unique_or_400

logger = logging.getLogger(__name__)

USER_LIST = ListSpec(
    queryset=User.objects.prefetch_related('roles'),
    search_fields=('username', 'first_name', 'last_name'),
    sort_fields={
        'id': 'pk',
        'loginId': 'username',
        'firstName': 'first_name',
        'lastName': 'last_name',
        'status': 'status',
        'lastLogin': 'last_login',
        'createdAt': 'date_joined',
    },
    default_sort='loginId',
    default_limit=20,
    filters=(
        ListFilter('status', 'status', lambda: serializers.ChoiceField(choices=[c for c, _ in User.STATUS_CHOICES])),
    ),
)

ROLE_LIST = ListSpec(
    queryset=Role.objects.prefetch_related('rights').annotate(account_count=Count('accounts', distinct=True)),
    search_fields=('name',),
    sort_fields={'id': 'pk', 'name': 'name'},
    default_sort='name',
)

RIGHT_LIST = ListSpec(
    queryset=AccessRight.objects.all(),
    search_fields=('name', 'app_name'),
    sort_fields={'id': 'pk', 'name': 'name', 'appName': 'app_name'},
    default_sort='name',
    filters=(ListFilter('appName', 'app_name'),),
)

USER_FIELDS = {'firstName': 'first_name', 'lastName': 'last_name', 'status': 'status'}


def serialize_right(right: AccessRight) -> dict:
    return {'id': right.id, 'name': right.name, 'appName': right.app_name}


def serialize_role(role: Role, *, with_rights: bool = True) -> dict:
    data = {'id': role.id, 'name': role.name}
    if with_rights:
        data['rights'] = [serialize_right(r) for r in role.rights.all()]
    if hasattr(role, 'account_count'):
        data['accountCount'] = role.account_count
    return data


def serialize_user(user: User) -> dict:
    return {
        'id': user.id,
        'loginId': user.username,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'status': user.status,
        'lastLogin': iso(user.last_login),
        'lastLoginFrom': user.last_login_from or None,
        'createdAt': iso(user.date_joined),
        'updatedAt': iso(user.updated_at),
        'roles': [serialize_role(r, with_rights=False) for r in user.roles.all()],
    }


def _roles(role_ids: list[int]) -> list[Role]:
    roles = list(Role.objects.filter(id__in=set(role_ids)))
    missing = set(role_ids) - {r.id for r in roles}
    if missing:
        raise ValidationError({'roleIds': [f"Unknown role id(s): {', '.join(map(str, sorted(missing)))}"]})
    return roles


def _rights(right_ids: list[int]) -> list[AccessRight]:
    rights = list(AccessRight.objects.filter(id__in=set(right_ids)))
    missing = set(right_ids) - {r.id for r in rights}
    if missing:
        raise ValidationError({'rightIds': [f"Unknown right id(s): {', '.join(map(str, sorted(missing)))}"]})
    return rights


# ---------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------
def get_user(pk: int) -> User:
    return get_or_404(User.objects.prefetch_related('roles'), 'User not found', pk=pk)


def create_user(data: dict) -> User:
    if User.objects.filter(username=data['loginId']).exists():
        raise ValidationError({'loginId': ['Login ID already exists']})
    roles = _roles(data.get('roleIds') or [])
    user = User(username=data['loginId'])
    apply_fields(user, data, USER_FIELDS)
    user.set_password(data['password'])
    with unique_or_400('loginId', 'Login ID already exists'):
        user.save()
        user.roles.set(roles)
    logger.info("user %s created", user.username)
    return user


def update_user(pk: int, data: dict) -> User:
    user = get_user(pk)
    if 'loginId' in data and data['loginId'] != user.username:
        if User.objects.filter(username=data['loginId']).exclude(pk=pk).exists():
            raise ValidationError({'loginId': ['Login ID already exists']})
        user.username = data['loginId']
    roles = _roles(data['roleIds']) if 'roleIds' in data else None
    apply_fields(user, data, USER_FIELDS)
    if data.get('password'):
        user.set_password(data['password'])
    with unique_or_400('loginId', 'Login ID already exists'):
        user.save()
        if roles is not None:
            user.roles.set(roles)
    return get_user(pk)


def delete_user(actor: User, pk: int) -> None:
    user = get_user(pk)
    if user.pk == actor.pk:
        raise ValidationError('You cannot delete your own account')
    username = user.username
    user.delete()
    log_action(user=actor, action='delete', object_type='user', object_id=pk, detail={'loginId': username})
    logger.info("user %s deleted by %s", username, actor.username)


# ---------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------
def get_role(pk: int) -> Role:
    return get_or_404(ROLE_LIST.queryset, 'Role not found', pk=pk)


def create_role(data: dict) -> Role:
    if Role.objects.filter(name=data['name']).exists():
        raise ValidationError({'name': ['Role already exists']})
    rights = _rights(data.get('rightIds') or [])
    with unique_or_400('name', 'Role already exists'):
        role = Role.objects.create(name=data['name'])
        role.rights.set(rights)
    return get_role(role.pk)


def update_role(pk: int, data: dict) -> Role:
    role = get_role(pk)
    if 'name' in data and Role.objects.filter(name=data['name']).exclude(pk=pk).exists():
        raise ValidationError({'name': ['Role already exists']})
    rights = _rights(data['rightIds']) if 'rightIds' in data else None
    with transaction.atomic():
        if 'name' in data:
            role.name = data['name']
            role.save(update_fields=['name'])
        if rights is not None:
            role.rights.set(rights)
    return get_role(pk)


def delete_role(actor: User, pk: int) -> None:
    role = get_role(pk)
    ensure_no_dependents(role.accounts.all(), 'Cannot delete role assigned to users')
    role.delete()
    log_action(user=actor, action='delete', object_type='role', object_id=pk, detail={'name': role.name})


# ---------------------------------------------------------------------
# Access rights
# ---------------------------------------------------------------------
def get_right(pk: int) -> AccessRight:
    return get_or_404(AccessRight, 'Access right not found', pk=pk)


def _check_right_unique(name: str, app_name: str, exclude_pk=None) -> None:
    qs = AccessRight.objects.filter(name=name, app_name=app_name)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError({'name': ['Access right already exists for this application']})


def create_right(data: dict) -> AccessRight:
    _check_right_unique(data['name'], data['appName'])
    with unique_or_400('name', 'Access right already exists for this application'):
        return AccessRight.objects.create(name=data['name'], app_name=data['appName'])


def update_right(pk: int, data: dict) -> AccessRight:
    right = get_right(pk)
    apply_fields(right, data, {'name': 'name', 'appName': 'app_name'})
    _check_right_unique(right.name, right.app_name, exclude_pk=pk)
    with unique_or_400('name', 'Access right already exists for this application'):
        right.save()
    return right


def delete_right(actor: User, pk: int) -> None:
    right = get_right(pk)
    right.delete()
    log_action(user=actor, action='delete', object_type='access_right', object_id=pk,
               detail={'name': right.name, 'appName': right.app_name})

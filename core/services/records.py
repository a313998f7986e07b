"""Small helpers shared by the entity services."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Mapping

from django.db import IntegrityError, transaction
from django.db.models import Model, QuerySet
from rest_framework.exceptions import NotFound, ValidationError


def get_or_404(source, message: str, **lookup) -> Any:
    """Fetch one record from a model or queryset or raise ``NotFound(message)``."""
    qs = source if isinstance(source, QuerySet) else source._default_manager.all()
    obj = qs.filter(**lookup).first()
    if obj is None:
        raise NotFound(message)
    return obj


def get_or_400(source, field: str, message: str, **lookup) -> Any:
    """Like :func:`get_or_404` for references supplied in a request body."""
    qs = source if isinstance(source, QuerySet) else source._default_manager.all()
    obj = qs.filter(**lookup).first()
    if obj is None:
        raise ValidationError({field: [message]})
    return obj


def apply_fields(instance: Model, data: Mapping[str, Any], mapping: Mapping[str, str]) -> Model:
    """Copy validated ``data`` (public names) onto ``instance`` (model fields)."""
    for public, attr in mapping.items():
        if public in data:
            setattr(instance, attr, data[public])
    return instance


def iso(value) -> str | None:
    return value.isoformat() if value is not None else None


@contextmanager
def unique_or_400(field: str, message: str):
    """Turn a uniqueness violation raised inside the block into a 400."""
    try:
        with transaction.atomic():
            yield
    except IntegrityError as e:
        raise ValidationError({field: [message]}) from e

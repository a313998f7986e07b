"""
Exclusive "default" flags.

Countries and languages may each have one default record globally,
cities one per country.  Clearing the previous holder and writing the
new one happen in a single transaction.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Model, QuerySet

logger = logging.getLogger(__name__)


def save_with_exclusive_default(instance: Model, scope: QuerySet, *, flag: str = 'is_default') -> Model:
    """Save ``instance``; if its flag is set, clear it on the rest of ``scope``.

    ``scope`` is the queryset of records competing for the flag, e.g.
    ``City.objects.filter(country=instance.country)``.
    """
    with transaction.atomic():
        if getattr(instance, flag):
            others = scope.filter(**{flag: True})
            if instance.pk is not None:
                others = others.exclude(pk=instance.pk)
            cleared = others.update(**{flag: False})
            if cleared:
                logger.info("cleared %s on %d %s record(s)", flag, cleared, instance._meta.model_name)
        instance.save()
    return instance

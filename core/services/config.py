"""
Application configuration and opening hours.

Configuration is a flat set of named text values, each optionally
tagged with the application it belongs to.  Opening hours are stored
per weekday (0 = Sunday) as seconds since midnight; weekdays without a
row are closed and reported with the standard 08:00-18:00 window.
"""
from __future__ import annotations

import logging
from collections import OrderedDict

from django.db import transaction
from django.db.models import F
from rest_framework.exceptions import ValidationError

from core.models import Configuration, User, WorkTimeDate, WorkTimeDay
from core.services.audit import log_action
from core.services.records import get_or_404, unique_or_400

logger = logging.getLogger(__name__)

DEFAULT_APP = 'general'
DEFAULT_START = 8 * 3600
DEFAULT_END = 18 * 3600
WEEKDAYS = range(7)


def serialize_config(item: Configuration) -> dict:
    return {'id': item.id, 'name': item.name, 'value': item.value, 'app': item.app}


def _ordered():
    return Configuration.objects.order_by(F('app').asc(nulls_first=True), 'name')


def config_flat() -> dict[str, str]:
    return {c.name: c.value or '' for c in _ordered()}


def config_grouped() -> dict[str, list[dict]]:
    grouped: dict[str, list[dict]] = OrderedDict()
    for c in _ordered():
        grouped.setdefault(c.app or DEFAULT_APP, []).append({'name': c.name, 'value': c.value, 'app': c.app})
    return grouped


def get_config_item(name: str) -> Configuration:
    return get_or_404(Configuration, 'Configuration not found', name=name)


def upsert_config(values: dict[str, str]) -> int:
    """Create or overwrite every ``name: value`` pair in one transaction."""
    with transaction.atomic():
        for name, value in values.items():
            Configuration.objects.update_or_create(name=name, defaults={'value': value})
    logger.info("configuration updated: %s", ', '.join(sorted(values)))
    return len(values)


def create_config_item(data: dict) -> Configuration:
    if Configuration.objects.filter(name=data['name']).exists():
        raise ValidationError({'name': ['Configuration with this name already exists']})
    with unique_or_400('name', 'Configuration with this name already exists'):
        return Configuration.objects.create(name=data['name'], value=data.get('value') or '', app=data.get('app') or None)


def update_config_item(name: str, data: dict) -> Configuration:
    item = get_config_item(name)
    if 'value' in data:
        item.value = data['value']
    if 'app' in data:
        item.app = data['app'] or None
    item.save()
    return item


def delete_config_item(actor: User, name: str) -> None:
    item = get_config_item(name)
    item.delete()
    log_action(user=actor, action='delete', object_type='configuration', object_id=name)


# ---------------------------------------------------------------------
# Opening hours
# ---------------------------------------------------------------------
def opening_hours() -> list[dict]:
    stored = {d.weekday: d for d in WorkTimeDay.objects.all()}
    week = []
    for weekday in WEEKDAYS:
        day = stored.get(weekday)
        week.append({
            'weekday': weekday,
            'startTime': day.start_time if day else DEFAULT_START,
            'endTime': day.end_time if day else DEFAULT_END,
            'enabled': day is not None,
        })
    return week


def replace_opening_hours(days: list[dict]) -> list[dict]:
    """Replace the weekly schedule; only enabled days are stored."""
    with transaction.atomic():
        WorkTimeDay.objects.all().delete()
        WorkTimeDay.objects.bulk_create([
            WorkTimeDay(weekday=d['weekday'], start_time=d['startTime'], end_time=d['endTime'])
            for d in days if d['enabled']
        ])
    logger.info("opening hours replaced (%d open days)", sum(1 for d in days if d['enabled']))
    return opening_hours()


def serialize_work_date(item: WorkTimeDate) -> dict:
    return {
        'id': item.id,
        'workDate': item.work_date.isoformat(),
        'startTime': item.start_time,
        'endTime': item.end_time,
        'closed': item.closed,
    }


def opening_hours_dates(start=None, end=None) -> list[dict]:
    qs = WorkTimeDate.objects.all()
    if start:
        qs = qs.filter(work_date__gte=start)
    if end:
        qs = qs.filter(work_date__lte=end)
    return [serialize_work_date(d) for d in qs.order_by('work_date')]

"""
Filtered, paginated listing shared by every entity endpoint.

Each entity declares a :class:`ListSpec`: its base queryset, the text
fields a ``search`` term is matched against, the public sort names it
accepts and the equality or range filters it understands.  A request's
query string is validated into a :class:`ListQuery` and executed by
:func:`run_list_query`, which returns one page of records together with
the total number of matches.

Client-supplied sort names are looked up in the ListSpec allow-list and
never reach the ORM as-is; an unknown name is a 400.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from django.db.models import Q, QuerySet
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

MAX_LIMIT = 500


@dataclass(frozen=True)
class ListFilter:
    """A query-string parameter narrowing the result set.

    ``lookup`` is the ORM lookup the coerced value is applied to, e.g.
    ``country_id`` or ``date__gte``; ``kind`` is the DRF field used to
    coerce the raw string.
    """
    param: str
    lookup: str
    kind: Callable[[], serializers.Field] = serializers.CharField


@dataclass(frozen=True)
class ListSpec:
    queryset: QuerySet
    sort_fields: dict[str, str]
    default_sort: str
    search_fields: tuple[str, ...] = ()
    default_order: str = 'asc'
    default_limit: int = 100
    filters: tuple[ListFilter, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ListQuery:
    page: int
    limit: int
    search: str
    sort_by: str
    sort_order: str
    filters: dict[str, Any]

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=MAX_LIMIT)
    search = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True, default='')
    sortBy = serializers.CharField(required=False, allow_blank=True, default='')
    sortOrder = serializers.ChoiceField(choices=['asc', 'desc'], required=False)


def parse_list_query(spec: ListSpec, params) -> ListQuery:
    """Validate ``params`` (a ``QueryDict`` or plain dict) against ``spec``."""
    s = ListQuerySerializer(data={k: params.get(k) for k in ('page', 'limit', 'search', 'sortBy', 'sortOrder') if params.get(k) is not None})
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    sort_by = vd.get('sortBy') or spec.default_sort
    if sort_by not in spec.sort_fields:
        allowed = ', '.join(sorted(spec.sort_fields))
        raise ValidationError({'sortBy': [f"Unsupported sort field '{sort_by}'. Allowed: {allowed}"]})

    filters: dict[str, Any] = {}
    errors: dict[str, Any] = {}
    for f in spec.filters:
        raw = params.get(f.param)
        if raw is None or raw == '':
            continue
        try:
            filters[f.lookup] = f.kind().run_validation(raw)
        except serializers.ValidationError as e:
            errors[f.param] = e.detail
    if errors:
        raise ValidationError(errors)

    return ListQuery(
        page=vd['page'],
        limit=vd.get('limit') or spec.default_limit,
        search=vd.get('search') or '',
        sort_by=sort_by,
        sort_order=vd.get('sortOrder') or spec.default_order,
        filters=filters,
    )


def _search_q(fields: Iterable[str], term: str) -> Q:
    q = Q()
    for name in fields:
        q |= Q(**{f"{name}__icontains": term})
    return q


def run_list_query(spec: ListSpec, query: ListQuery) -> tuple[list, int]:
    """Return ``(items, total)`` for one page of ``spec`` under ``query``."""
    qs = spec.queryset.all().filter(**query.filters)
    if query.search and spec.search_fields:
        qs = qs.filter(_search_q(spec.search_fields, query.search))

    column = spec.sort_fields[query.sort_by]
    prefix = '-' if query.sort_order == 'desc' else ''
    # pk tiebreak keeps pages stable when the sort column has duplicates
    ordering = [f"{prefix}{column}"] if column == 'pk' else [f"{prefix}{column}", 'pk']

    total = qs.count()
    items = list(qs.order_by(*ordering)[query.offset:query.offset + query.limit])
    return items, total


def pagination(query: ListQuery, total: int) -> dict:
    return {
        'page': query.page,
        'limit': query.limit,
        'total': total,
        'totalPages': math.ceil(total / query.limit) if total else 0,
    }


def list_response(spec: ListSpec, params, serialize: Callable[[Any], dict]) -> dict:
    """Run a list request end to end and build the success envelope."""
    query = parse_list_query(spec, params)
    items, total = run_list_query(spec, query)
    return {
        'success': True,
        'data': [serialize(obj) for obj in items],
        'pagination': pagination(query, total),
    }

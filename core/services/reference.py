"""
Reference data maintained by administrators: categories, currencies,
countries, cities, languages, taxes and colors.
"""
from __future__ import annotations

import logging

from django.db.models import Count
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from core.models import Category, City, Color, Country, Currency, Language, Tax, User
from core.services.audit import log_action
from core.services.defaults import save_with_exclusive_default
from core.services.guards import ensure_no_dependents
from core.services.listing import ListFilter, ListSpec
from core.services.records import apply_fields, get_or_400, get_or_404, unique_or_400

logger = logging.getLogger(__name__)

CATEGORY_LIST = ListSpec(
    queryset=Category.objects.select_related('color').annotate(service_count=Count('services', distinct=True)),
    search_fields=('name',),
    sort_fields={'id': 'pk', 'name': 'name', 'parentId': 'parent_id', 'status': 'status'},
    default_sort='name',
    filters=(
        ListFilter('status', 'status', serializers.BooleanField),
        ListFilter('parentId', 'parent_id', serializers.IntegerField),
    ),
)

CURRENCY_LIST = ListSpec(
    queryset=Currency.objects.all(),
    search_fields=('code', 'name'),
    sort_fields={'id': 'pk', 'code': 'code', 'name': 'name', 'isBase': 'is_base'},
    default_sort='name',
    filters=(ListFilter('isBase', 'is_base', serializers.BooleanField),),
)

COUNTRY_LIST = ListSpec(
    queryset=Country.objects.annotate(city_count=Count('cities')),
    search_fields=('name', 'code'),
    sort_fields={'id': 'pk', 'name': 'name', 'code': 'code', 'isDefault': 'is_default', 'topPulldown': 'top_pulldown'},
    default_sort='name',
    filters=(ListFilter('isDefault', 'is_default', serializers.BooleanField),),
)

CITY_LIST = ListSpec(
    queryset=City.objects.select_related('country'),
    search_fields=('name',),
    sort_fields={'id': 'pk', 'name': 'name', 'country': 'country__name', 'isDefault': 'is_default'},
    default_sort='name',
    filters=(
        ListFilter('country', 'country_id', serializers.IntegerField),
        ListFilter('isDefault', 'is_default', serializers.BooleanField),
    ),
)

LANGUAGE_LIST = ListSpec(
    queryset=Language.objects.all(),
    search_fields=('id', 'name'),
    sort_fields={'id': 'pk', 'name': 'name', 'available': 'available', 'isDefault': 'is_default'},
    default_sort='name',
    filters=(
        ListFilter('available', 'available', serializers.BooleanField),
        ListFilter('isDefault', 'is_default', serializers.BooleanField),
    ),
)

TAX_LIST = ListSpec(
    queryset=Tax.objects.all(),
    search_fields=('code', 'description'),
    sort_fields={'id': 'pk', 'code': 'code', 'description': 'description', 'tax1': 'tax1', 'tax2': 'tax2'},
    default_sort='code',
)

CATEGORY_FIELDS = {'name': 'name', 'parentId': 'parent_id', 'status': 'status'}
CURRENCY_FIELDS = {'code': 'code', 'name': 'name', 'symbol': 'symbol', 'isBase': 'is_base'}
COUNTRY_FIELDS = {'name': 'name', 'code': 'code', 'topPulldown': 'top_pulldown', 'isDefault': 'is_default'}
CITY_FIELDS = {'name': 'name', 'isDefault': 'is_default'}
LANGUAGE_FIELDS = {
    'name': 'name',
    'available': 'available',
    'availableGuests': 'available_guests',
    'availableReservations': 'available_reservations',
    'isDefault': 'is_default',
}
TAX_FIELDS = {
    'code': 'code',
    'description': 'description',
    'tax1': 'tax1',
    'tax1Text': 'tax1_text',
    'tax2': 'tax2',
    'tax2Text': 'tax2_text',
    'tax2On1': 'tax2_on1',
    'real': 'real',
}


def _decimal(value) -> str | None:
    return str(value) if value is not None else None


# ---------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------
def serialize_color(color: Color) -> dict:
    return {'id': color.id, 'name': color.name, 'hexCode': color.hex_code, 'textColor': color.text_color}


def serialize_category(category: Category, *, services: bool = False) -> dict:
    data = {
        'id': category.id,
        'name': category.name,
        'parentId': category.parent_id,
        'status': category.status,
        'colorId': category.color_id,
        'color': serialize_color(category.color) if category.color else None,
    }
    if hasattr(category, 'service_count'):
        data['serviceCount'] = category.service_count
    if services:
        data['services'] = [
            {'id': s.id, 'name': s.name, 'active': s.active}
            for s in category.services.filter(deleted=False).order_by('name', 'pk')
        ]
    return data


def serialize_currency(currency: Currency) -> dict:
    return {
        'id': currency.id,
        'code': currency.code,
        'name': currency.name,
        'symbol': currency.symbol,
        'isBase': currency.is_base,
    }


def serialize_city(city: City) -> dict:
    return {
        'id': city.id,
        'name': city.name,
        'country': city.country_id,
        'countryName': city.country.name,
        'isDefault': city.is_default,
    }


def serialize_country(country: Country, *, cities: bool = False) -> dict:
    data = {
        'id': country.id,
        'name': country.name,
        'code': country.code,
        'topPulldown': country.top_pulldown,
        'isDefault': country.is_default,
    }
    if hasattr(country, 'city_count'):
        data['cityCount'] = country.city_count
    if cities:
        data['cities'] = [
            {'id': c.id, 'name': c.name, 'isDefault': c.is_default}
            for c in country.cities.order_by('name', 'pk')
        ]
    return data


def serialize_language(language: Language) -> dict:
    return {
        'id': language.id,
        'name': language.name,
        'available': language.available,
        'availableGuests': language.available_guests,
        'availableReservations': language.available_reservations,
        'isDefault': language.is_default,
    }


def serialize_tax(tax: Tax) -> dict:
    return {
        'id': tax.id,
        'code': tax.code,
        'description': tax.description,
        'tax1': _decimal(tax.tax1),
        'tax1Text': tax.tax1_text,
        'tax2': _decimal(tax.tax2),
        'tax2Text': tax.tax2_text,
        'tax2On1': tax.tax2_on1,
        'real': tax.real,
    }


def list_colors() -> list[dict]:
    return [serialize_color(c) for c in Color.objects.order_by('name', 'pk')]


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------
def get_category(pk: int) -> Category:
    return get_or_404(CATEGORY_LIST.queryset, 'Category not found', pk=pk)


def _apply_category(category: Category, data: dict) -> None:
    apply_fields(category, data, CATEGORY_FIELDS)
    if 'colorId' in data:
        color_id = data['colorId']
        category.color = get_or_400(Color, 'colorId', 'Color not found', pk=color_id) if color_id else None


def create_category(data: dict) -> Category:
    category = Category()
    _apply_category(category, data)
    category.save()
    logger.info("category %s created", category.pk)
    return get_category(category.pk)


def update_category(pk: int, data: dict) -> Category:
    category = get_category(pk)
    _apply_category(category, data)
    category.save()
    return get_category(pk)


def delete_category(actor: User, pk: int) -> None:
    category = get_category(pk)
    ensure_no_dependents(category.services.all(), 'Cannot delete category used by services')
    category.delete()
    log_action(user=actor, action='delete', object_type='category', object_id=pk, detail={'name': category.name})


# ---------------------------------------------------------------------
# Currencies
# ---------------------------------------------------------------------
def get_currency(pk: int) -> Currency:
    return get_or_404(Currency, 'Currency not found', pk=pk)


def _check_currency_code(code: str, exclude_pk=None) -> None:
    qs = Currency.objects.filter(code=code)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError({'code': ['Currency code already exists']})


def create_currency(data: dict) -> Currency:
    _check_currency_code(data['code'])
    currency = apply_fields(Currency(), data, CURRENCY_FIELDS)
    with unique_or_400('code', 'Currency code already exists'):
        currency.save()
    return currency


def update_currency(pk: int, data: dict) -> Currency:
    currency = get_currency(pk)
    if 'code' in data:
        _check_currency_code(data['code'], exclude_pk=pk)
    apply_fields(currency, data, CURRENCY_FIELDS)
    with unique_or_400('code', 'Currency code already exists'):
        currency.save()
    return currency


def delete_currency(actor: User, pk: int) -> None:
    currency = get_currency(pk)
    ensure_no_dependents(currency.services.all(), 'Cannot delete currency used by services')
    currency.delete()
    log_action(user=actor, action='delete', object_type='currency', object_id=pk, detail={'code': currency.code})


# ---------------------------------------------------------------------
# Countries
# ---------------------------------------------------------------------
def get_country(pk: int) -> Country:
    return get_or_404(COUNTRY_LIST.queryset, 'Country not found', pk=pk)


def _check_country_code(code: str, exclude_pk=None) -> None:
    qs = Country.objects.filter(code=code)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError({'code': ['Country code already exists']})


def create_country(data: dict) -> Country:
    _check_country_code(data['code'])
    country = apply_fields(Country(), data, COUNTRY_FIELDS)
    with unique_or_400('code', 'Country code already exists'):
        save_with_exclusive_default(country, Country.objects.all())
    logger.info("country %s created", country.code)
    return get_country(country.pk)


def update_country(pk: int, data: dict) -> Country:
    country = get_country(pk)
    if 'code' in data:
        _check_country_code(data['code'], exclude_pk=pk)
    apply_fields(country, data, COUNTRY_FIELDS)
    with unique_or_400('code', 'Country code already exists'):
        save_with_exclusive_default(country, Country.objects.all())
    return get_country(pk)


def delete_country(actor: User, pk: int) -> None:
    country = get_country(pk)
    ensure_no_dependents(country.cities.all(), 'Cannot delete country with cities')
    country.delete()
    log_action(user=actor, action='delete', object_type='country', object_id=pk, detail={'code': country.code})


# ---------------------------------------------------------------------
# Cities
# ---------------------------------------------------------------------
def get_city(pk: int) -> City:
    return get_or_404(City.objects.select_related('country'), 'City not found', pk=pk)


def create_city(data: dict) -> City:
    city = apply_fields(City(), data, CITY_FIELDS)
    city.country = get_or_400(Country, 'country', 'Country not found', pk=data['country'])
    save_with_exclusive_default(city, City.objects.filter(country=city.country))
    return get_city(city.pk)


def update_city(pk: int, data: dict) -> City:
    city = get_city(pk)
    apply_fields(city, data, CITY_FIELDS)
    if 'country' in data:
        city.country = get_or_400(Country, 'country', 'Country not found', pk=data['country'])
    # Scope follows the city's country after the update
    save_with_exclusive_default(city, City.objects.filter(country_id=city.country_id))
    return get_city(pk)


def delete_city(actor: User, pk: int) -> None:
    city = get_city(pk)
    city.delete()
    log_action(user=actor, action='delete', object_type='city', object_id=pk, detail={'name': city.name})


# ---------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------
def get_language(pk: str) -> Language:
    return get_or_404(Language, 'Language not found', pk=pk)


def create_language(data: dict) -> Language:
    if Language.objects.filter(pk=data['id']).exists():
        raise ValidationError({'id': ['Language already exists']})
    language = apply_fields(Language(id=data['id']), data, LANGUAGE_FIELDS)
    with unique_or_400('id', 'Language already exists'):
        save_with_exclusive_default(language, Language.objects.all())
    return language


def update_language(pk: str, data: dict) -> Language:
    language = get_language(pk)
    apply_fields(language, data, LANGUAGE_FIELDS)
    save_with_exclusive_default(language, Language.objects.all())
    return language


def delete_language(actor: User, pk: str) -> None:
    language = get_language(pk)
    language.delete()
    log_action(user=actor, action='delete', object_type='language', object_id=pk, detail={'name': language.name})


# ---------------------------------------------------------------------
# Taxes
# ---------------------------------------------------------------------
def get_tax(pk: int) -> Tax:
    return get_or_404(Tax, 'Tax not found', pk=pk)


def _check_tax_code(code: str, exclude_pk=None) -> None:
    qs = Tax.objects.filter(code=code)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ValidationError({'code': ['Tax code already exists']})


def create_tax(data: dict) -> Tax:
    _check_tax_code(data['code'])
    tax = apply_fields(Tax(), data, TAX_FIELDS)
    with unique_or_400('code', 'Tax code already exists'):
        tax.save()
    return tax


def update_tax(pk: int, data: dict) -> Tax:
    tax = get_tax(pk)
    if 'code' in data:
        _check_tax_code(data['code'], exclude_pk=pk)
    apply_fields(tax, data, TAX_FIELDS)
    with unique_or_400('code', 'Tax code already exists'):
        tax.save()
    return tax


def delete_tax(actor: User, pk: int) -> None:
    tax = get_tax(pk)
    tax.delete()
    log_action(user=actor, action='delete', object_type='tax', object_id=pk, detail={'code': tax.code})

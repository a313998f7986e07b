"""
Reference-data endpoints under ``/api/admin``: categories, currencies,
countries, cities, languages, taxes and colors.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.permissions import IsAdminOrReadOnly
from core.serializers.admin import (
    CategorySerializer,
    CitySerializer,
    CountrySerializer,
    CurrencySerializer,
    LanguageSerializer,
    TaxSerializer,
)
from core.services import reference as svc
from .responses import done, ok, ok_list, validated


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def categories(request):
    if request.method == 'GET':
        return ok_list(svc.CATEGORY_LIST, request, svc.serialize_category)
    category = svc.create_category(validated(CategorySerializer, request))
    return ok(svc.serialize_category(category), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def category_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_category(svc.get_category(pk), services=True))
    if request.method == 'PUT':
        category = svc.update_category(pk, validated(CategorySerializer, request, partial=True))
        return ok(svc.serialize_category(category))
    svc.delete_category(request.user, pk)
    return done('Category deleted successfully')


# ---------------------------------------------------------------------
# Currencies
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def currencies(request):
    if request.method == 'GET':
        return ok_list(svc.CURRENCY_LIST, request, svc.serialize_currency)
    currency = svc.create_currency(validated(CurrencySerializer, request))
    return ok(svc.serialize_currency(currency), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def currency_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_currency(svc.get_currency(pk)))
    if request.method == 'PUT':
        currency = svc.update_currency(pk, validated(CurrencySerializer, request, partial=True))
        return ok(svc.serialize_currency(currency))
    svc.delete_currency(request.user, pk)
    return done('Currency deleted successfully')


# ---------------------------------------------------------------------
# Countries
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def countries(request):
    if request.method == 'GET':
        return ok_list(svc.COUNTRY_LIST, request, svc.serialize_country)
    country = svc.create_country(validated(CountrySerializer, request))
    return ok(svc.serialize_country(country), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def country_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_country(svc.get_country(pk), cities=True))
    if request.method == 'PUT':
        country = svc.update_country(pk, validated(CountrySerializer, request, partial=True))
        return ok(svc.serialize_country(country))
    svc.delete_country(request.user, pk)
    return done('Country deleted successfully')


# ---------------------------------------------------------------------
# Cities
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def cities(request):
    if request.method == 'GET':
        return ok_list(svc.CITY_LIST, request, svc.serialize_city)
    city = svc.create_city(validated(CitySerializer, request))
    return ok(svc.serialize_city(city), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def city_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_city(svc.get_city(pk)))
    if request.method == 'PUT':
        city = svc.update_city(pk, validated(CitySerializer, request, partial=True))
        return ok(svc.serialize_city(city))
    svc.delete_city(request.user, pk)
    return done('City deleted successfully')


# ---------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def languages(request):
    if request.method == 'GET':
        return ok_list(svc.LANGUAGE_LIST, request, svc.serialize_language)
    language = svc.create_language(validated(LanguageSerializer, request))
    return ok(svc.serialize_language(language), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def language_detail(request, pk: str):
    if request.method == 'GET':
        return ok(svc.serialize_language(svc.get_language(pk)))
    if request.method == 'PUT':
        data = validated(LanguageSerializer, request, partial=True)
        data.pop('id', None)
        return ok(svc.serialize_language(svc.update_language(pk, data)))
    svc.delete_language(request.user, pk)
    return done('Language deleted successfully')


# ---------------------------------------------------------------------
# Taxes
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def taxes(request):
    if request.method == 'GET':
        return ok_list(svc.TAX_LIST, request, svc.serialize_tax)
    tax = svc.create_tax(validated(TaxSerializer, request))
    return ok(svc.serialize_tax(tax), created=True)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def tax_detail(request, pk: int):
    if request.method == 'GET':
        return ok(svc.serialize_tax(svc.get_tax(pk)))
    if request.method == 'PUT':
        tax = svc.update_tax(pk, validated(TaxSerializer, request, partial=True))
        return ok(svc.serialize_tax(tax))
    svc.delete_tax(request.user, pk)
    return done('Tax deleted successfully')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def colors(request):
    return ok(svc.list_colors())

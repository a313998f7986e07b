"""
Administration endpoints: reference data, accounts, configuration and
opening hours.
"""
import pytest
from django.db import IntegrityError
from django.urls import reverse

from core.models import Category, City, Configuration, Country, Language, Role, User, WorkTimeDay
from core.services.defaults import save_with_exclusive_default

pytestmark = pytest.mark.django_db


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------
def test_create_category_and_read_it_back(admin_client, color):
    r = admin_client.post(
        reverse('categories'),
        {'name': 'Massage', 'parentId': 0, 'status': True, 'colorId': color.id},
        format='json',
    )
    assert r.status_code == 201
    created = r.json()['data']

    r = admin_client.get(reverse('category_detail', args=[created['id']]))
    assert r.status_code == 200
    data = r.json()['data']
    assert data['name'] == 'Massage'
    assert data['status'] is True
    assert data['colorId'] == color.id
    assert data['color']['hexCode'] == color.hex_code


def test_category_with_unknown_color_is_rejected(admin_client):
    r = admin_client.post(reverse('categories'), {'name': 'Facials', 'colorId': 999}, format='json')
    assert r.status_code == 400
    assert 'colorId' in r.json()['error']['fields']
    assert not Category.objects.filter(name='Facials').exists()


def test_category_name_is_sanitised(admin_client):
    r = admin_client.post(reverse('categories'), {'name': '<b>Scrubs</b><script>x</script>'}, format='json')
    assert r.status_code == 201
    assert '<' not in r.json()['data']['name']


def test_category_name_with_entities_reads_back_verbatim(admin_client):
    r = admin_client.post(reverse('categories'), {'name': 'Hot & Cold <i>Stones</i>'}, format='json')
    assert r.status_code == 201
    data = admin_client.get(reverse('category_detail', args=[r.json()['data']['id']])).json()['data']
    assert data['name'] == 'Hot & Cold Stones'
    assert Category.objects.get(pk=data['id']).name == 'Hot & Cold Stones'


def test_category_used_by_service_cannot_be_deleted(admin_client, service):
    r = admin_client.delete(reverse('category_detail', args=[service.category_id]))
    assert r.status_code == 409
    assert r.json()['error']['code'] == 'conflict'
    assert Category.objects.filter(pk=service.category_id).exists()


def test_reads_allowed_but_writes_forbidden_without_admin_role(staff_client, category):
    assert staff_client.get(reverse('categories')).status_code == 200
    r = staff_client.post(reverse('categories'), {'name': 'Yoga'}, format='json')
    assert r.status_code == 403
    assert r.json()['error']['code'] == 'permission_denied'
    assert staff_client.delete(reverse('category_detail', args=[category.id])).status_code == 403


# ---------------------------------------------------------------------
# Countries, cities and languages: one default per scope
# ---------------------------------------------------------------------
def test_only_one_default_country(admin_client):
    for name, code in (('France', 'fr'), ('Spain', 'es')):
        r = admin_client.post(reverse('countries'), {'name': name, 'code': code, 'isDefault': True}, format='json')
        assert r.status_code == 201
        assert r.json()['data']['code'] == code.upper()
    assert list(Country.objects.filter(is_default=True).values_list('code', flat=True)) == ['ES']

    france = Country.objects.get(code='FR')
    r = admin_client.put(reverse('country_detail', args=[france.id]), {'isDefault': True}, format='json')
    assert r.status_code == 200
    assert list(Country.objects.filter(is_default=True).values_list('code', flat=True)) == ['FR']


def test_duplicate_country_code_is_rejected(admin_client):
    Country.objects.create(name='Italy', code='IT')
    r = admin_client.post(reverse('countries'), {'name': 'Italia', 'code': 'it'}, format='json')
    assert r.status_code == 400
    assert Country.objects.count() == 1


def test_city_default_is_scoped_to_its_country(admin_client):
    fr = Country.objects.create(name='France', code='FR')
    es = Country.objects.create(name='Spain', code='ES')
    madrid = City.objects.create(name='Madrid', country=es, is_default=True)

    for name in ('Paris', 'Lyon'):
        r = admin_client.post(reverse('cities'), {'name': name, 'country': fr.id, 'isDefault': True}, format='json')
        assert r.status_code == 201

    assert list(City.objects.filter(country=fr, is_default=True).values_list('name', flat=True)) == ['Lyon']
    madrid.refresh_from_db()
    assert madrid.is_default is True


def test_city_needs_existing_country(admin_client):
    r = admin_client.post(reverse('cities'), {'name': 'Atlantis', 'country': 4242}, format='json')
    assert r.status_code == 400
    assert 'country' in r.json()['error']['fields']


def test_country_with_cities_cannot_be_deleted(admin_client):
    fr = Country.objects.create(name='France', code='FR')
    City.objects.create(name='Paris', country=fr)
    r = admin_client.delete(reverse('country_detail', args=[fr.id]))
    assert r.status_code == 409
    assert '1 found' in r.json()['error']['message']
    assert Country.objects.filter(pk=fr.pk).exists()


def test_only_one_default_language(admin_client):
    Language.objects.create(id='en', name='English', is_default=True)
    r = admin_client.post(reverse('languages'), {'id': 'de', 'name': 'Deutsch', 'isDefault': True}, format='json')
    assert r.status_code == 201
    assert list(Language.objects.filter(is_default=True).values_list('id', flat=True)) == ['de']

    r = admin_client.put(reverse('language_detail', args=['en']), {'isDefault': True}, format='json')
    assert r.status_code == 200
    assert list(Language.objects.filter(is_default=True).values_list('id', flat=True)) == ['en']


def test_new_default_country_clears_every_stale_default(admin_client):
    Country.objects.create(name='France', code='FR', is_default=True)
    Country.objects.create(name='Spain', code='ES', is_default=True)
    italy = Country.objects.create(name='Italy', code='IT')

    r = admin_client.put(reverse('country_detail', args=[italy.id]), {'isDefault': True}, format='json')
    assert r.status_code == 200
    assert list(Country.objects.filter(is_default=True).values_list('code', flat=True)) == ['IT']


def test_new_default_language_clears_every_stale_default(admin_client):
    Language.objects.create(id='en', name='English', is_default=True)
    Language.objects.create(id='fr', name='French', is_default=True)

    r = admin_client.post(reverse('languages'), {'id': 'de', 'name': 'Deutsch', 'isDefault': True}, format='json')
    assert r.status_code == 201
    assert list(Language.objects.filter(is_default=True).values_list('id', flat=True)) == ['de']


def test_city_default_repairs_several_existing_defaults(admin_client):
    fr = Country.objects.create(name='France', code='FR')
    for name in ('Paris', 'Lyon'):
        City.objects.create(name=name, country=fr, is_default=True)
    nice = City.objects.create(name='Nice', country=fr)

    r = admin_client.put(reverse('city_detail', args=[nice.id]), {'isDefault': True}, format='json')
    assert r.status_code == 200
    assert list(City.objects.filter(country=fr, is_default=True).values_list('name', flat=True)) == ['Nice']


@pytest.mark.django_db(transaction=True)
def test_failed_save_keeps_previous_default():
    Country.objects.create(name='France', code='FR')
    Country.objects.create(name='Spain', code='ES', is_default=True)

    duplicate = Country(name='Francia', code='FR', is_default=True)
    with pytest.raises(IntegrityError):
        save_with_exclusive_default(duplicate, Country.objects.all())
    assert list(Country.objects.filter(is_default=True).values_list('code', flat=True)) == ['ES']

    france = Country.objects.get(code='FR')
    france.code = 'ES'
    france.is_default = True
    with pytest.raises(IntegrityError):
        save_with_exclusive_default(france, Country.objects.all())
    assert list(Country.objects.filter(is_default=True).values_list('code', flat=True)) == ['ES']
    assert Country.objects.get(name='France').is_default is False


def test_duplicate_language_is_rejected(admin_client):
    Language.objects.create(id='en', name='English')
    r = admin_client.post(reverse('languages'), {'id': 'en', 'name': 'English (again)'}, format='json')
    assert r.status_code == 400


def test_tax_crud(admin_client):
    r = admin_client.post(reverse('taxes'), {'code': 'VAT', 'tax1': '19.000', 'real': True}, format='json')
    assert r.status_code == 201
    tax_id = r.json()['data']['id']
    assert r.json()['data']['tax1'] == '19.000'

    r = admin_client.put(reverse('tax_detail', args=[tax_id]), {'description': 'Value added tax'}, format='json')
    assert r.json()['data']['description'] == 'Value added tax'

    assert admin_client.delete(reverse('tax_detail', args=[tax_id])).status_code == 200
    assert admin_client.get(reverse('tax_detail', args=[tax_id])).status_code == 404


def test_colors_are_listed(staff_client, color):
    r = staff_client.get(reverse('colors'))
    assert r.status_code == 200
    assert r.json()['data'] == [{'id': color.id, 'name': 'Blue', 'hexCode': '007bff', 'textColor': color.text_color}]


# ---------------------------------------------------------------------
# Accounts and roles
# ---------------------------------------------------------------------
def test_user_endpoints_require_admin_role_even_for_reads(staff_client):
    assert staff_client.get(reverse('users')).status_code == 403


def test_create_user_with_roles(admin_client, admin_role):
    r = admin_client.post(
        reverse('users'),
        {'loginId': 'therapy-lead', 'password': 'secret99', 'firstName': 'Tess', 'roleIds': [admin_role.id]},
        format='json',
    )
    assert r.status_code == 201
    data = r.json()['data']
    assert data['loginId'] == 'therapy-lead'
    assert [role['name'] for role in data['roles']] == ['admin']
    assert 'password' not in data
    assert User.objects.get(username='therapy-lead').check_password('secret99')


def test_duplicate_login_id_is_rejected(admin_client, staff_user):
    r = admin_client.post(reverse('users'), {'loginId': staff_user.username, 'password': 'secret99'}, format='json')
    assert r.status_code == 400
    assert 'loginId' in r.json()['error']['fields']


def test_admin_cannot_delete_own_account(admin_client, admin_user):
    r = admin_client.delete(reverse('user_detail', args=[admin_user.id]))
    assert r.status_code == 400
    assert User.objects.filter(pk=admin_user.pk).exists()


def test_delete_other_account(admin_client, staff_user):
    r = admin_client.delete(reverse('user_detail', args=[staff_user.id]))
    assert r.status_code == 200
    assert r.json() == {'success': True, 'message': 'User deleted successfully'}
    assert not User.objects.filter(pk=staff_user.pk).exists()


def test_assigned_role_cannot_be_deleted(admin_client, admin_role):
    r = admin_client.delete(reverse('role_detail', args=[admin_role.id]))
    assert r.status_code == 409
    assert Role.objects.filter(pk=admin_role.pk).exists()

    spare = Role.objects.create(name='reception')
    assert admin_client.delete(reverse('role_detail', args=[spare.id])).status_code == 200


def test_role_rights(admin_client):
    r = admin_client.post(reverse('rights'), {'name': 'Add Room', 'appName': 'rooms'}, format='json')
    assert r.status_code == 201
    right_id = r.json()['data']['id']

    r = admin_client.post(reverse('roles'), {'name': 'manager', 'rightIds': [right_id]}, format='json')
    assert r.status_code == 201
    assert [x['id'] for x in r.json()['data']['rights']] == [right_id]

    r = admin_client.post(reverse('roles'), {'name': 'auditor', 'rightIds': [right_id, 777]}, format='json')
    assert r.status_code == 400
    assert not Role.objects.filter(name='auditor').exists()


# ---------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------
def test_config_flat_and_grouped(admin_client):
    Configuration.objects.create(name='currency', value='EUR', app='booking')
    Configuration.objects.create(name='company', value='Lotus Spa')

    flat = admin_client.get(reverse('config')).json()['data']
    assert flat == {'company': 'Lotus Spa', 'currency': 'EUR'}

    grouped = admin_client.get(reverse('config'), {'grouped': 'true'}).json()['data']
    assert [c['name'] for c in grouped['general']] == ['company']
    assert [c['name'] for c in grouped['booking']] == ['currency']


def test_bulk_config_update(admin_client):
    Configuration.objects.create(name='company', value='Old Name')
    r = admin_client.put(reverse('config'), {'company': 'Lotus Spa', 'onlineBooking': True, 'slots': 4}, format='json')
    assert r.status_code == 200
    assert dict(Configuration.objects.values_list('name', 'value')) == {
        'company': 'Lotus Spa',
        'onlineBooking': 'Y',
        'slots': '4',
    }


@pytest.mark.parametrize('name', ['x' * 101, 'opening/hours', 'company name', ''])
def test_bulk_config_rejects_unaddressable_names(admin_client, name):
    Configuration.objects.create(name='company', value='Old Name')
    r = admin_client.put(reverse('config'), {'company': 'Lotus Spa', name: 'x'}, format='json')
    assert r.status_code == 400
    assert name in r.json()['error']['fields']
    assert dict(Configuration.objects.values_list('name', 'value')) == {'company': 'Old Name'}


def test_bulk_config_accepts_longest_addressable_name(admin_client):
    name = 'a.b-c_' + 'x' * 94
    assert admin_client.put(reverse('config'), {name: 'on'}, format='json').status_code == 200
    r = admin_client.get(reverse('config_item', args=[name]))
    assert r.status_code == 200
    assert r.json()['data']['value'] == 'on'


def test_config_item_lifecycle(admin_client):
    r = admin_client.post(reverse('config'), {'name': 'theme', 'value': 'dark', 'app': 'ui'}, format='json')
    assert r.status_code == 201
    assert admin_client.post(reverse('config'), {'name': 'theme', 'value': 'light'}, format='json').status_code == 400

    r = admin_client.put(reverse('config_item', args=['theme']), {'value': 'light'}, format='json')
    assert r.json()['data'] == {'id': r.json()['data']['id'], 'name': 'theme', 'value': 'light', 'app': 'ui'}

    assert admin_client.delete(reverse('config_item', args=['theme'])).status_code == 200
    assert admin_client.delete(reverse('config_item', args=['theme'])).status_code == 404


def test_opening_hours_defaults(staff_client):
    r = staff_client.get(reverse('opening_hours'))
    assert r.status_code == 200
    week = r.json()['data']
    assert [d['weekday'] for d in week] == list(range(7))
    assert all(d['startTime'] == 28800 and d['endTime'] == 64800 and d['enabled'] is False for d in week)


def test_replace_opening_hours(admin_client):
    days = [
        {'weekday': 1, 'startTime': 32400, 'endTime': 72000},
        {'weekday': 2, 'startTime': 32400, 'endTime': 72000},
        {'weekday': 0, 'startTime': 0, 'endTime': 0, 'enabled': False},
    ]
    r = admin_client.put(reverse('opening_hours'), {'days': days}, format='json')
    assert r.status_code == 200
    week = {d['weekday']: d for d in r.json()['data']}
    assert week[1] == {'weekday': 1, 'startTime': 32400, 'endTime': 72000, 'enabled': True}
    assert week[0]['enabled'] is False
    assert sorted(WorkTimeDay.objects.values_list('weekday', flat=True)) == [1, 2]


def test_opening_hours_validation(admin_client):
    bad_range = [{'weekday': 1, 'startTime': 72000, 'endTime': 32400}]
    assert admin_client.put(reverse('opening_hours'), {'days': bad_range}, format='json').status_code == 400

    twice = [{'weekday': 3, 'startTime': 0, 'endTime': 60}, {'weekday': 3, 'startTime': 60, 'endTime': 120}]
    assert admin_client.put(reverse('opening_hours'), {'days': twice}, format='json').status_code == 400


def test_opening_hours_dates_range_is_validated(admin_client):
    r = admin_client.get(reverse('opening_hours_dates'), {'startDate': '2030-02-01', 'endDate': '2030-01-01'})
    assert r.status_code == 400
    assert admin_client.get(reverse('opening_hours_dates')).json()['data'] == []

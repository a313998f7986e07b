import pytest
from django.urls import reverse
from rest_framework.exceptions import ValidationError

from core.models import Guest, Room
from core.services.listing import ListSpec, parse_list_query, pagination, run_list_query
from core.services.people import GUEST_LIST

pytestmark = pytest.mark.django_db


@pytest.fixture
def many_guests(db):
    Guest.objects.bulk_create(
        Guest(first_name=f"Guest{i:02d}", last_name=f"Family{i % 5}", first_letter='F') for i in range(25)
    )


def test_defaults_come_from_the_list_spec():
    q = parse_list_query(GUEST_LIST, {})
    assert (q.page, q.limit, q.sort_by, q.sort_order, q.search) == (1, 20, 'lastName', 'asc', '')
    assert q.offset == 0


def test_unknown_sort_field_is_rejected():
    with pytest.raises(ValidationError) as e:
        parse_list_query(GUEST_LIST, {'sortBy': 'password'})
    assert 'sortBy' in e.value.detail


@pytest.mark.parametrize('params', [{'page': '0'}, {'limit': '0'}, {'limit': '501'}, {'sortOrder': 'sideways'}])
def test_out_of_range_paging_is_rejected(params):
    with pytest.raises(ValidationError):
        parse_list_query(GUEST_LIST, params)


def test_pagination_reports_zero_pages_for_empty_results():
    q = parse_list_query(GUEST_LIST, {'limit': '10'})
    assert pagination(q, 0) == {'page': 1, 'limit': 10, 'total': 0, 'totalPages': 0}
    assert pagination(q, 21)['totalPages'] == 3


def test_pages_are_disjoint_and_ordered(many_guests):
    spec = ListSpec(queryset=Guest.objects.all(), sort_fields={'firstName': 'first_name'}, default_sort='firstName')
    first, total = run_list_query(spec, parse_list_query(spec, {'limit': '10'}))
    second, _ = run_list_query(spec, parse_list_query(spec, {'limit': '10', 'page': '2'}))
    assert total == 25
    assert [g.first_name for g in first] == [f"Guest{i:02d}" for i in range(10)]
    assert [g.first_name for g in second] == [f"Guest{i:02d}" for i in range(10, 20)]


def test_sort_descending(many_guests):
    spec = ListSpec(queryset=Guest.objects.all(), sort_fields={'firstName': 'first_name'}, default_sort='firstName')
    items, _ = run_list_query(spec, parse_list_query(spec, {'sortOrder': 'desc', 'limit': '1'}))
    assert items[0].first_name == 'Guest24'


def test_guest_listing_envelope(admin_client, many_guests):
    r = admin_client.get(reverse('guests'), {'page': 3, 'limit': 10})
    assert r.status_code == 200
    body = r.json()
    assert body['success'] is True
    assert len(body['data']) == 5
    assert body['pagination'] == {'page': 3, 'limit': 10, 'total': 25, 'totalPages': 3}


def test_search_is_case_insensitive(admin_client, guest, many_guests):
    r = admin_client.get(reverse('guests'), {'search': 'doe'})
    assert r.status_code == 200
    names = [(g['firstName'], g['lastName']) for g in r.json()['data']]
    assert names == [('John', 'Doe')]


def test_filters_are_coerced(admin_client, room):
    Room.objects.create(name='Cedar Room', active=False)
    r = admin_client.get(reverse('rooms'), {'active': 'false'})
    assert [x['name'] for x in r.json()['data']] == ['Cedar Room']

    r = admin_client.get(reverse('rooms'), {'active': 'maybe'})
    assert r.status_code == 400
    assert r.json()['error']['code'] == 'invalid'


def test_bad_sort_over_http(admin_client):
    r = admin_client.get(reverse('rooms'), {'sortBy': 'name;drop table'})
    assert r.status_code == 400
    assert r.json()['success'] is False
    assert 'sortBy' in r.json()['error']['fields']


def test_room_search_without_match(admin_client, room):
    r = admin_client.get(reverse('rooms'), {'search': 'spa', 'page': 1, 'limit': 10})
    assert r.status_code == 200
    body = r.json()
    assert body['data'] == []
    assert body['pagination']['total'] == 0
    assert body['pagination']['totalPages'] == 0

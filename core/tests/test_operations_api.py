"""
Rooms, services, guests, therapists, bookings and the dashboard.
"""
import datetime
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from core.models import Attribute, Booking, Guest, Room, Service, Therapist
from core.services.people import first_letter

pytestmark = pytest.mark.django_db


def _future(days=3):
    return (timezone.localdate() + datetime.timedelta(days=days)).isoformat()


# ---------------------------------------------------------------------
# Delete guards
# ---------------------------------------------------------------------
@pytest.mark.parametrize('route,target', [
    ('room_detail', 'room'),
    ('service_detail', 'service'),
    ('guest_detail', 'guest'),
    ('therapist_detail', 'therapist'),
])
def test_record_with_upcoming_booking_cannot_be_deleted(request, admin_client, make_booking, route, target):
    make_booking(days_ahead=2)
    obj = request.getfixturevalue(target)
    before = type(obj).objects.filter(pk=obj.pk).values().get()

    r = admin_client.delete(reverse(route, args=[obj.pk]))
    assert r.status_code == 409
    assert r.json()['success'] is False
    assert r.json()['error']['code'] == 'conflict'
    assert type(obj).objects.filter(pk=obj.pk).values().get() == before


@pytest.mark.parametrize('kwargs', [{'days_ahead': -2}, {'days_ahead': 2, 'cancelled': True}])
def test_past_or_cancelled_bookings_do_not_block_deletes(admin_client, make_booking, room, kwargs):
    make_booking(**kwargs)
    r = admin_client.delete(reverse('room_detail', args=[room.id]))
    assert r.status_code == 200
    room.refresh_from_db()
    assert room.deleted is True


def test_deleted_guest_keeps_booking_history(admin_client, make_booking, guest):
    past = make_booking(days_ahead=-10)
    assert admin_client.delete(reverse('guest_detail', args=[guest.id])).status_code == 200
    past.refresh_from_db()
    assert past.guest_id is None
    assert not Guest.objects.filter(pk=guest.pk).exists()


# ---------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------
def test_room_lifecycle(admin_client, service):
    r = admin_client.post(reverse('rooms'), {'name': 'Spa Suite', 'priority': 3}, format='json')
    assert r.status_code == 201
    room_id = r.json()['data']['id']
    assert r.json()['data']['active'] is True

    assert admin_client.post(reverse('rooms'), {'name': 'Spa Suite'}, format='json').status_code == 400

    r = admin_client.post(reverse('room_services', args=[room_id]), {'serviceId': service.id}, format='json')
    assert r.status_code == 200
    r = admin_client.post(reverse('room_services', args=[room_id]), {'serviceId': service.id}, format='json')
    assert r.status_code == 400

    detail = admin_client.get(reverse('room_detail', args=[room_id])).json()['data']
    assert [s['id'] for s in detail['services']] == [service.id]
    assert detail['upcomingBookings'] == []

    r = admin_client.get(reverse('rooms'), {'search': 'spa'})
    assert [x['name'] for x in r.json()['data']] == ['Spa Suite']

    assert admin_client.delete(reverse('room_service_detail', args=[room_id, service.id])).status_code == 200
    assert admin_client.delete(reverse('room_service_detail', args=[room_id, service.id])).status_code == 404

    assert admin_client.delete(reverse('room_detail', args=[room_id])).status_code == 200
    assert admin_client.get(reverse('room_detail', args=[room_id])).status_code == 404
    assert Room.objects.filter(pk=room_id, deleted=True).exists()


def test_room_name_can_be_reused_after_delete(admin_client):
    Room.objects.create(name='Old Sauna', deleted=True)
    assert admin_client.post(reverse('rooms'), {'name': 'Old Sauna'}, format='json').status_code == 201


def test_room_priority_bounds(admin_client):
    assert admin_client.post(reverse('rooms'), {'name': 'Attic', 'priority': 11}, format='json').status_code == 400


def test_room_filter_by_service(admin_client, room, service):
    Room.objects.create(name='Empty Room')
    r = admin_client.get(reverse('rooms'), {'serviceId': service.id})
    assert [x['id'] for x in r.json()['data']] == [room.id]


# ---------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------
def test_create_service(admin_client, category, currency):
    r = admin_client.post(reverse('services'), {
        'categoryId': category.id,
        'currencyId': currency.id,
        'name': 'Aroma Facial',
        'price': '45.50',
        'duration': 45,
    }, format='json')
    assert r.status_code == 201
    assert Service.objects.get(name='Aroma Facial').price == Decimal('45.50')


def test_service_needs_existing_category(admin_client, currency):
    r = admin_client.post(reverse('services'), {'categoryId': 999, 'currencyId': currency.id, 'name': 'Ghost'}, format='json')
    assert r.status_code == 400


def test_service_time_window(admin_client, category, currency):
    r = admin_client.post(reverse('services'), {
        'categoryId': category.id, 'currencyId': currency.id, 'name': 'Flexible Massage',
        'variableTime': True, 'minimalTime': 60, 'maximalTime': 30,
    }, format='json')
    assert r.status_code == 400


def test_deleted_service_is_hidden(admin_client, service):
    assert admin_client.delete(reverse('service_detail', args=[service.id])).status_code == 200
    assert admin_client.get(reverse('service_detail', args=[service.id])).status_code == 404
    assert admin_client.get(reverse('services')).json()['pagination']['total'] == 0


def test_service_quick_booking_flag(admin_client, service):
    r = admin_client.put(reverse('service_detail', args=[service.id]), {'quickBooking': True}, format='json')
    assert r.status_code == 200
    assert r.json()['data']['quickBooking'] is True
    assert admin_client.get(reverse('services'), {'quickBooking': 'true'}).json()['pagination']['total'] == 1
    assert admin_client.get(reverse('services'), {'quickBooking': 'false'}).json()['pagination']['total'] == 0


# ---------------------------------------------------------------------
# Guests and therapists
# ---------------------------------------------------------------------
def test_guest_first_letter_and_attributes(staff_client):
    phone = Attribute.objects.create(name='Phone', type='text')
    r = staff_client.post(reverse('guests'), {
        'firstName': 'anna',
        'lastName': 'lind',
        'attributes': [{'attributeId': phone.id, 'value': '+46 70 000 00 00'}],
    }, format='json')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['firstLetter'] == 'L'
    assert data['attributes'] == [{'attributeId': phone.id, 'name': 'Phone', 'type': 'text', 'value': '+46 70 000 00 00'}]

    r = staff_client.put(reverse('guest_detail', args=[data['id']]), {'attributes': []}, format='json')
    assert r.json()['data']['attributes'] == []


def test_guest_needs_a_name(staff_client):
    r = staff_client.post(reverse('guests'), {'firstName': '', 'lastName': ''}, format='json')
    assert r.status_code == 400


def test_guest_with_unknown_attribute_is_rejected(staff_client):
    r = staff_client.post(reverse('guests'), {'lastName': 'Berg', 'attributes': [{'attributeId': 55, 'value': 'x'}]}, format='json')
    assert r.status_code == 400
    assert not Guest.objects.filter(last_name='Berg').exists()


def test_guest_detail_lists_bookings(staff_client, guest, make_booking):
    kept = make_booking(days_ahead=1)
    make_booking(days_ahead=2, cancelled=True)
    data = staff_client.get(reverse('guest_detail', args=[guest.id])).json()['data']
    assert [b['id'] for b in data['bookings']] == [kept.id]


def test_therapist_services(admin_client, service):
    r = admin_client.post(reverse('therapists'), {'firstName': 'Mia', 'lastName': 'Holm', 'serviceIds': [service.id]}, format='json')
    assert r.status_code == 201
    therapist_id = r.json()['data']['id']
    assert r.json()['data']['services'] == [{'id': service.id, 'name': service.name}]

    r = admin_client.get(reverse('therapists'), {'serviceId': service.id})
    assert therapist_id in [t['id'] for t in r.json()['data']]

    r = admin_client.put(reverse('therapist_detail', args=[therapist_id]), {'serviceIds': [service.id, 404]}, format='json')
    assert r.status_code == 400
    assert list(Therapist.objects.get(pk=therapist_id).services.values_list('id', flat=True)) == [service.id]


def test_therapist_writes_need_admin_role(staff_client, therapist):
    assert staff_client.get(reverse('therapist_detail', args=[therapist.id])).status_code == 200
    assert staff_client.delete(reverse('therapist_detail', args=[therapist.id])).status_code == 403


def test_guest_name_with_ampersand_is_stored_plain_and_searchable(staff_client):
    r = staff_client.post(reverse('guests'), {'firstName': '<b>Ann</b>', 'lastName': 'Smith & Co'}, format='json')
    assert r.status_code == 201
    assert r.json()['data']['firstName'] == 'Ann'
    assert r.json()['data']['lastName'] == 'Smith & Co'
    assert Guest.objects.get(pk=r.json()['data']['id']).last_name == 'Smith & Co'

    r = staff_client.get(reverse('guests'), {'search': 'h & c'})
    assert [g['lastName'] for g in r.json()['data']] == ['Smith & Co']


def test_first_letter_is_a_single_character(staff_client):
    assert first_letter('', 'ßmith') == 'S'
    r = staff_client.post(reverse('guests'), {'lastName': 'ßmith'}, format='json')
    assert r.status_code == 201
    assert r.json()['data']['firstLetter'] == 'S'


PNG = b'\x89PNG\r\n\x1a\n' + b'\x00' * 32


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


def test_therapist_avatar_upload_and_remove(admin_client, therapist, media_root):
    url = reverse('therapist_avatar', args=[therapist.id])
    r = admin_client.post(url, {'avatar': SimpleUploadedFile('face.PNG', PNG, content_type='image/png')}, format='multipart')
    assert r.status_code == 200
    avatar_url = r.json()['data']['avatarUrl']
    assert avatar_url.endswith(f'therapists/{therapist.id}.png')
    assert (media_root / 'therapists' / f'{therapist.id}.png').exists()

    data = admin_client.get(reverse('therapist_detail', args=[therapist.id])).json()['data']
    assert data['avatarUrl'] == avatar_url

    assert admin_client.delete(url).status_code == 200
    assert admin_client.get(reverse('therapist_detail', args=[therapist.id])).json()['data']['avatarUrl'] is None
    assert not (media_root / 'therapists' / f'{therapist.id}.png').exists()


def test_therapist_avatar_replaces_previous_file(admin_client, therapist, media_root):
    url = reverse('therapist_avatar', args=[therapist.id])
    admin_client.post(url, {'avatar': SimpleUploadedFile('a.png', PNG, content_type='image/png')}, format='multipart')
    r = admin_client.post(url, {'avatar': SimpleUploadedFile('b.jpg', b'\xff\xd8\xff' + PNG, content_type='image/jpeg')}, format='multipart')
    assert r.status_code == 200
    assert sorted(p.name for p in (media_root / 'therapists').iterdir()) == [f'{therapist.id}.jpg']


def test_therapist_avatar_must_be_an_image(admin_client, therapist, media_root):
    url = reverse('therapist_avatar', args=[therapist.id])
    r = admin_client.post(url, {'avatar': SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')}, format='multipart')
    assert r.status_code == 400
    assert 'avatar' in r.json()['error']['fields']
    therapist.refresh_from_db()
    assert not therapist.avatar


def test_therapist_avatar_size_limit(admin_client, therapist, media_root, settings):
    settings.AVATAR_MAX_BYTES = 16
    url = reverse('therapist_avatar', args=[therapist.id])
    r = admin_client.post(url, {'avatar': SimpleUploadedFile('big.png', PNG, content_type='image/png')}, format='multipart')
    assert r.status_code == 400


def test_therapist_avatar_needs_admin_role(staff_client, therapist, media_root):
    url = reverse('therapist_avatar', args=[therapist.id])
    r = staff_client.post(url, {'avatar': SimpleUploadedFile('face.png', PNG, content_type='image/png')}, format='multipart')
    assert r.status_code == 403


# ---------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------
def test_booking_takes_defaults_from_service(staff_client, service, room, guest):
    r = staff_client.post(reverse('bookings'), {
        'date': _future(),
        'time': '10:30',
        'serviceId': service.id,
        'roomId': room.id,
        'guestId': guest.id,
    }, format='json')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['duration'] == 60
    assert data['price'] == '80.00'
    assert (data['preDuration'], data['postDuration']) == (5, 10)
    assert data['time'] == '10:30'
    assert data['therapist'] is None
    assert data['guest'] == {'id': guest.id, 'firstName': 'John', 'lastName': 'Doe'}


def test_booking_explicit_values_win(staff_client, service, room, guest, therapist):
    r = staff_client.post(reverse('bookings'), {
        'date': _future(), 'time': '09:00', 'serviceId': service.id, 'roomId': room.id,
        'guestId': guest.id, 'therapistId': therapist.id, 'duration': 90, 'price': '99.00',
    }, format='json')
    assert r.status_code == 201
    assert (r.json()['data']['duration'], r.json()['data']['price']) == (90, '99.00')


def test_booking_refuses_inactive_room(staff_client, service, room, guest):
    room.active = False
    room.save()
    r = staff_client.post(reverse('bookings'), {
        'date': _future(), 'time': '09:00', 'serviceId': service.id, 'roomId': room.id, 'guestId': guest.id,
    }, format='json')
    assert r.status_code == 400
    assert 'roomId' in r.json()['error']['fields']
    assert Booking.objects.count() == 0


def test_booking_filters(staff_client, make_booking, room):
    upcoming = make_booking(days_ahead=5)
    make_booking(days_ahead=-5)
    make_booking(days_ahead=6, cancelled=True)

    r = staff_client.get(reverse('bookings'), {'dateFrom': timezone.localdate().isoformat(), 'cancelled': 'false'})
    assert [b['id'] for b in r.json()['data']] == [upcoming.id]

    r = staff_client.get(reverse('bookings'), {'roomId': room.id})
    assert r.json()['pagination']['total'] == 3


def test_booking_update_and_delete(staff_client, make_booking):
    booking = make_booking()
    r = staff_client.put(reverse('booking_detail', args=[booking.id]), {'confirmed': True, 'comment': 'Window seat'}, format='json')
    assert r.status_code == 200
    assert r.json()['data']['confirmed'] is True
    assert r.json()['data']['comment'] == 'Window seat'

    assert staff_client.delete(reverse('booking_detail', args=[booking.id])).status_code == 200
    assert staff_client.get(reverse('booking_detail', args=[booking.id])).status_code == 404


# ---------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------
def test_dashboard_counts(staff_client, make_booking):
    make_booking(days_ahead=0)
    make_booking(days_ahead=4)
    make_booking(days_ahead=-1)
    make_booking(days_ahead=0, cancelled=True)

    r = staff_client.get(reverse('admin_dashboard'))
    assert r.status_code == 200
    data = r.json()['data']
    assert data['todayBookings'] == 1
    assert data['totalActiveBookings'] == 2
    assert (data['totalGuests'], data['totalTherapists'], data['totalRooms'], data['totalServices']) == (1, 1, 1, 1)
    assert len(data['recentBookings']) == 3

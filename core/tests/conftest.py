import datetime
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import Booking, Category, Color, Currency, Guest, Role, Room, Service, Therapist, User


@pytest.fixture
def admin_role(db):
    return Role.objects.create(name='admin')


@pytest.fixture
def admin_user(admin_role):
    u = User.objects.create_user(username='admin', password='S3cure-pass', first_name='Ada', last_name='Admin')
    u.roles.add(admin_role)
    return u


@pytest.fixture
def staff_user(db):
    u = User.objects.create_user(username='frontdesk', password='S3cure-pass', first_name='Fred', last_name='Desk')
    u.roles.add(Role.objects.create(name='user'))
    return u


def _client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    return _client(admin_user)


@pytest.fixture
def staff_client(staff_user):
    return _client(staff_user)


@pytest.fixture
def color(db):
    return Color.objects.create(name='Blue', hex_code='007bff')


@pytest.fixture
def category(color):
    return Category.objects.create(name='Body Treatments', status=True, color=color)


@pytest.fixture
def currency(db):
    return Currency.objects.create(code='EUR', name='Euro', symbol='€', is_base=True)


@pytest.fixture
def service(category, currency):
    return Service.objects.create(
        name='Hot Stone Massage', category=category, currency=currency,
        price=Decimal('80.00'), duration=60, pre_duration=5, post_duration=10,
    )


@pytest.fixture
def room(service):
    r = Room.objects.create(name='Lotus Room', description='Quiet corner room')
    r.services.add(service)
    return r


@pytest.fixture
def guest(db):
    return Guest.objects.create(first_name='John', last_name='Doe', first_letter='D')


@pytest.fixture
def therapist(service):
    t = Therapist.objects.create(first_name='Jane', last_name='Smith', first_letter='S')
    t.services.add(service)
    return t


@pytest.fixture
def make_booking(service, room, guest, therapist):
    def make(days_ahead=1, **kwargs):
        values = {
            'date': timezone.localdate() + datetime.timedelta(days=days_ahead),
            'time': datetime.time(10, 0),
            'service': service,
            'room': room,
            'guest': guest,
            'therapist': therapist,
            'duration': service.duration,
            'price': service.price,
        }
        values.update(kwargs)
        return Booking.objects.create(**values)
    return make
